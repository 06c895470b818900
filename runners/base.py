"""Base process runner interface."""

import shlex
from abc import ABC, abstractmethod
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, Optional, Sequence


@dataclass
class ProcessResult:
    """Standardized result of one external process invocation."""
    exit_status: int
    stdout: str = ""
    stderr: str = ""

    @property
    def ok(self) -> bool:
        return self.exit_status == 0


def format_command(command: str, args: Sequence[str]) -> str:
    """Render a command line the way a shell user would type it."""
    return shlex.join([command, *[str(a) for a in args]])


class ProcessRunner(ABC):
    """Abstract base class for launching external tools.

    Every call blocks until the process exits.
    """

    @abstractmethod
    def run(
        self,
        command: str,
        args: Sequence[str],
        env: Optional[Dict[str, str]] = None,
        cwd: Optional[Path] = None,
        capture: bool = False,
    ) -> ProcessResult:
        """Run a command to completion.

        Args:
            command: Executable name or path
            args: Arguments passed after the command
            env: Variables set on top of the inherited environment
            cwd: Working directory for the process
            capture: Capture stdout/stderr instead of streaming them

        Returns:
            ProcessResult with the exit status (and output when captured)
        """
        pass
