"""
Pipeline context and per-run state.

The context is what the host pipeline knows before the step runs.
The state is what one phase hands to the next during a single run.
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any


@dataclass
class DeployContext:
    """Host pipeline state consumed during config resolution."""

    dist_dir: Path | None = None
    # Command-line options of the host (only "revision" is read)
    command_options: dict[str, Any] = field(default_factory=dict)
    # Output of a revision-data step, e.g. {"revisionKey": "abc123"}
    revision_data: dict[str, Any] | None = None
    s3_client: Any = None

    @property
    def revision_key(self) -> str | None:
        """Command-line revision first, then revision metadata."""
        if revision := self.command_options.get("revision"):
            return str(revision)
        if self.revision_data:
            value = self.revision_data.get("revisionKey") or self.revision_data.get("revision_key")
            if value:
                return str(value)
        return None


@dataclass
class DeployState:
    """Values passed forward from setup through activate."""

    s3_client: Any = None
    archive_file: Path | None = None
    artifact_key: str | None = None
