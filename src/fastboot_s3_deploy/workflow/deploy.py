"""
Deploy workflow factory - Creates the archive-and-publish workflow.

One task per lifecycle phase, each depending on the previous one:
1. Configure - validate settings
2. Setup - create the S3 client
3. Prepare - pack the build output
4. Upload - put the archive
5. Activate - put the deploy descriptor
"""

from dataclasses import dataclass, field

from ..config import DeployConfig
from ..context import DeployState
from .tasks import Task, TaskType, Workflow

DEPLOY_PHASES = [
    (TaskType.CONFIGURE, "Validate deploy configuration"),
    (TaskType.SETUP, "Create S3 client"),
    (TaskType.PREPARE, "Pack build output into archive"),
    (TaskType.UPLOAD, "Upload archive to bucket"),
    (TaskType.ACTIVATE, "Upload deploy descriptor"),
]


@dataclass
class DeployWorkflow(Workflow):
    """
    The deploy workflow with its resolved configuration.

    ``state`` is populated by the runner as phases complete.
    """

    config: DeployConfig | None = None
    state: DeployState = field(default_factory=DeployState)


def create_deploy_workflow(config: DeployConfig, phases: list[TaskType] | None = None) -> DeployWorkflow:
    """
    Create a deploy workflow for one revision.

    This is a FACTORY function that creates the workflow data structure.
    The workflow defines WHAT to do, not HOW to do it.

    Args:
        config: Resolved deploy configuration
        phases: Subset of phases to include (default: all five, in order)

    Returns:
        DeployWorkflow ready for execution by a runner
    """
    workflow = DeployWorkflow(
        name="deploy",
        description=f"Deploy {config.dist_dir.name} revision {config.revision_key} to s3://{config.bucket}",
        config=config,
    )

    previous: str | None = None
    for task_type, description in DEPLOY_PHASES:
        if phases is not None and task_type not in phases:
            continue
        workflow.add_task(
            Task(
                id=task_type.value,
                task_type=task_type,
                description=description,
                depends_on=[previous] if previous else [],
            )
        )
        previous = task_type.value

    return workflow
