"""
Runners layer - Execution engines for workflows.

Runners execute workflows, handling task ordering and progress reporting.
They interpret tasks and call the matching plugin phase.
"""

from .base import RunnerCallbacks, RunnerResult
from .sequential import SequentialRunner

__all__ = [
    "RunnerCallbacks",
    "RunnerResult",
    "SequentialRunner",
]
