"""Sequential runner - Executes deploy phases one at a time."""

from ..exceptions import DeployError
from ..plugin import DeployPlugin
from ..workflow import DeployWorkflow, Task, TaskStatus, TaskType
from .base import RunnerCallbacks, RunnerResult


class SequentialRunner:
    """
    Sequential workflow runner.

    Executes tasks one at a time in dependency order. A task whose
    dependency did not complete is skipped, so a failed phase aborts
    every later phase. Uses callbacks for progress reporting without
    coupling to UI.
    """

    def __init__(self, plugin: DeployPlugin | None = None, dry_run: bool = False):
        """
        Initialize the runner.

        Args:
            plugin: Deploy step to drive (default: DeployPlugin())
            dry_run: If True, only validate configuration; no files or requests
        """
        self.plugin = plugin or DeployPlugin()
        self.dry_run = dry_run

    def run(self, workflow: DeployWorkflow, callbacks: RunnerCallbacks | None = None) -> RunnerResult:
        """
        Execute a deploy workflow.

        Args:
            workflow: The DeployWorkflow to execute
            callbacks: Optional callbacks for progress reporting

        Returns:
            RunnerResult with execution summary
        """
        cb = callbacks or RunnerCallbacks()

        if workflow.config is None:
            return RunnerResult(
                success=False,
                workflow_name=workflow.name,
                errors=["Workflow config is None"],
            )

        if cb.on_workflow_start:
            cb.on_workflow_start(workflow.name, len(workflow.tasks))

        result = RunnerResult(
            success=True,
            workflow_name=workflow.name,
        )

        for task in workflow.get_pending_tasks():
            if not workflow.dependencies_met(task):
                task.status = TaskStatus.SKIPPED
                result.tasks_skipped += 1
                continue

            if cb.on_task_start:
                cb.on_task_start(task.id, task.description)

            task.status = TaskStatus.RUNNING

            try:
                self._execute_task(task, workflow, result)
                task.status = TaskStatus.COMPLETED
                result.tasks_completed += 1

                if cb.on_task_complete:
                    cb.on_task_complete(task.id, True)

            except DeployError as e:
                task.status = TaskStatus.FAILED
                task.error = str(e)
                result.tasks_failed += 1
                result.errors.append(f"Task {task.id}: {e}")
                result.success = False

                if cb.on_task_complete:
                    cb.on_task_complete(task.id, False)

        if cb.on_workflow_complete:
            cb.on_workflow_complete(result)

        return result

    def _execute_task(self, task: Task, workflow: DeployWorkflow, result: RunnerResult) -> None:
        """Execute a single task based on its type."""
        config = workflow.config
        plugin = self.plugin

        if task.task_type == TaskType.CONFIGURE:
            plugin.configure(config)
            return

        if self.dry_run:
            if task.task_type == TaskType.PREPARE:
                result.archive_file = config.archive_path / plugin.archive_name(config)
            elif task.task_type == TaskType.UPLOAD:
                result.artifact_key = plugin.archive_key(config)
            elif task.task_type == TaskType.ACTIVATE:
                result.deploy_info_key = plugin.deploy_info_key(config)
            return

        if task.task_type == TaskType.SETUP:
            workflow.state = plugin.setup(config)

        elif task.task_type == TaskType.PREPARE:
            pack_result = plugin.prepare(config, workflow.state)
            task.result = pack_result
            result.archive_file = pack_result.archive_file
            result.archive_size_bytes = pack_result.size_bytes
            result.files_packed = pack_result.files_packed

        elif task.task_type == TaskType.UPLOAD:
            task.result = plugin.upload(config, workflow.state)
            result.artifact_key = task.result.key

        elif task.task_type == TaskType.ACTIVATE:
            task.result = plugin.activate(config, workflow.state)
            result.deploy_info_key = task.result.key
