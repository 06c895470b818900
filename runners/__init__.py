"""Process runner abstraction for external tool invocations."""

from .base import ProcessRunner, ProcessResult, format_command
from .subprocess_runner import SubprocessRunner, COMMAND_NOT_FOUND

__all__ = [
    "ProcessRunner",
    "ProcessResult",
    "format_command",
    "SubprocessRunner",
    "COMMAND_NOT_FOUND",
]
