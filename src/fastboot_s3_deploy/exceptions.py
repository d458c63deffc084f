"""Exception hierarchy for the deploy step."""


class DeployError(Exception):
    """Base class for every failure raised by a deploy phase."""


class ConfigurationError(DeployError):
    """Settings are missing or inconsistent. Raised before any I/O."""


class OperationError(DeployError):
    """
    A phase failed after configuration passed.

    The original exception is kept on ``cause`` and is also chained as
    ``__cause__`` by the raising phase.
    """

    def __init__(self, phase: str, cause: BaseException):
        self.phase = phase
        self.cause = cause
        super().__init__(f"{phase} failed: {cause}")
