"""Task definitions for workflows."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class TaskStatus(Enum):
    """Status of a task in a workflow."""

    PENDING = "pending"
    RUNNING = "running"
    COMPLETED = "completed"
    FAILED = "failed"
    SKIPPED = "skipped"


class TaskType(Enum):
    """Deploy lifecycle phases a task can run."""

    CONFIGURE = "configure"
    SETUP = "setup"
    PREPARE = "prepare"
    UPLOAD = "upload"
    ACTIVATE = "activate"


@dataclass
class Task:
    """
    One deploy phase scheduled in a workflow.

    ``result`` holds what the phase returned (PackResult, UploadResult)
    and ``error`` the failure message, both filled in by the runner.
    """

    id: str
    task_type: TaskType
    description: str
    # Dependencies (task IDs that must complete first)
    depends_on: list[str] = field(default_factory=list)
    # Set by the runner
    status: TaskStatus = TaskStatus.PENDING
    result: Any = None
    error: str | None = None


@dataclass
class Workflow:
    """
    Phase tasks in the order they run.

    Holds no execution logic: the runner walks the pending tasks and asks
    the workflow whether each one may start.
    """

    name: str
    description: str
    tasks: list[Task] = field(default_factory=list)

    def add_task(self, task: Task) -> None:
        self.tasks.append(task)

    def get_task(self, task_id: str) -> Task | None:
        """Get a task by ID."""
        for task in self.tasks:
            if task.id == task_id:
                return task
        return None

    def get_pending_tasks(self) -> list[Task]:
        """Tasks the runner has not touched yet, in run order."""
        return [t for t in self.tasks if t.status == TaskStatus.PENDING]

    def dependencies_met(self, task: Task) -> bool:
        """
        True when every dependency of task has completed.

        Dependencies outside this workflow (a phase left out of a partial
        run) do not block.
        """
        for dep_id in task.depends_on:
            dep = self.get_task(dep_id)
            if dep is not None and dep.status != TaskStatus.COMPLETED:
                return False
        return True
