"""
Workflow layer - Task and workflow definitions.

Workflows are DATA STRUCTURES that define what to do.
They do NOT execute anything - that's the runner's job.
"""

from .deploy import DEPLOY_PHASES, DeployWorkflow, create_deploy_workflow
from .tasks import Task, TaskStatus, TaskType, Workflow

__all__ = [
    "Task",
    "TaskStatus",
    "TaskType",
    "Workflow",
    "DEPLOY_PHASES",
    "DeployWorkflow",
    "create_deploy_workflow",
]
