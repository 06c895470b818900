"""Process runner backed by subprocess."""

import os
import subprocess
from pathlib import Path
from typing import Dict, Optional, Sequence

from rich.console import Console
from rich.markup import escape

from errors import BuildTimeoutError
from .base import ProcessRunner, ProcessResult, format_command

# Exit status a shell reports when the executable does not exist
COMMAND_NOT_FOUND = 127


class SubprocessRunner(ProcessRunner):
    """Runs external tools as blocking child processes."""

    def __init__(
        self,
        timeout_seconds: Optional[float] = None,
        console: Optional[Console] = None,
    ):
        """Initialize the runner.

        Args:
            timeout_seconds: Kill the child after this long; None waits forever
            console: Console used to echo each command line before launch
        """
        self.timeout_seconds = timeout_seconds
        self.console = console

    def run(
        self,
        command: str,
        args: Sequence[str],
        env: Optional[Dict[str, str]] = None,
        cwd: Optional[Path] = None,
        capture: bool = False,
    ) -> ProcessResult:
        cmdline = format_command(command, args)
        if self.console is not None:
            overrides = " ".join(f"{k}={v}" for k, v in (env or {}).items())
            prefix = f"{overrides} " if overrides else ""
            self.console.print(f"  [dim]$ {escape(prefix + cmdline)}[/dim]")

        full_env = None
        if env:
            full_env = os.environ.copy()
            full_env.update(env)

        try:
            completed = subprocess.run(
                [command, *[str(a) for a in args]],
                env=full_env,
                cwd=str(cwd) if cwd else None,
                capture_output=capture,
                text=True,
                timeout=self.timeout_seconds,
            )
        except subprocess.TimeoutExpired as e:
            raise BuildTimeoutError(cmdline, self.timeout_seconds) from e
        except FileNotFoundError as e:
            return ProcessResult(exit_status=COMMAND_NOT_FOUND, stderr=str(e))

        return ProcessResult(
            exit_status=completed.returncode,
            stdout=completed.stdout or "",
            stderr=completed.stderr or "",
        )
