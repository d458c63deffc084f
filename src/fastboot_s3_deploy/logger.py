"""
Deploy log sink.

Phases report through ``DeployLogger.log(message, color=..., verbose=...)``.
Lines go to a rich console for the user and to the stdlib logger
``fastboot_s3_deploy`` for anything capturing logs.
"""

import logging

from rich.console import Console
from rich.markup import escape

logger = logging.getLogger("fastboot_s3_deploy")


class DeployLogger:
    """Console + logging sink for plugin messages."""

    def __init__(self, verbose: bool = False, console: Console | None = None, prefix: str = ""):
        """
        Initialize the sink.

        Args:
            verbose: Print verbose lines to the console
            console: Rich console (default: stderr console)
            prefix: Text prepended to console lines, e.g. the plugin name
        """
        self.verbose = verbose
        self.console = console or Console(stderr=True)
        self.prefix = prefix

    def log(self, message, color: str | None = None, verbose: bool = False) -> None:
        """
        Emit one line.

        Args:
            message: Text (or an exception) to report
            color: Rich color name, e.g. "red" for failures
            verbose: Only print when the sink is in verbose mode
        """
        text = str(message)

        if color == "red":
            logger.error(text)
        elif verbose:
            logger.debug(text)
        else:
            logger.info(text)

        if verbose and not self.verbose:
            return

        line = escape(f"{self.prefix}{text}")
        if color:
            line = f"[{color}]{line}[/{color}]"
        elif verbose:
            line = f"[dim]{line}[/dim]"
        self.console.print(line, highlight=False)
