"""Runner result and progress callback types."""

from collections.abc import Callable
from dataclasses import dataclass, field
from pathlib import Path


@dataclass
class RunnerResult:
    """Result of running a deploy workflow."""

    success: bool
    workflow_name: str
    tasks_completed: int = 0
    tasks_failed: int = 0
    tasks_skipped: int = 0
    # Deploy outputs
    archive_file: Path | None = None
    archive_size_bytes: int = 0
    files_packed: int = 0
    artifact_key: str | None = None
    deploy_info_key: str | None = None
    errors: list[str] = field(default_factory=list)


@dataclass
class RunnerCallbacks:
    """
    Callbacks for runner progress reporting.

    Allows CLI to display progress without coupling runner to Rich/UI.
    All callbacks are optional - if None, no callback is made.
    """

    # Workflow lifecycle
    on_workflow_start: Callable[[str, int], None] | None = None  # name, total_tasks
    on_workflow_complete: Callable[[RunnerResult], None] | None = None

    # Task lifecycle
    on_task_start: Callable[[str, str], None] | None = None  # task_id, description
    on_task_complete: Callable[[str, bool], None] | None = None  # task_id, success

