"""Orchestrator module driving build and repro runs."""

from .source import clone_repo
from .repro_manager import ReproManager

__all__ = [
    "clone_repo",
    "ReproManager",
]
