"""Dependency-respecting order for artifact reproduction."""

from .dependency_graph import (
    artifact_identity,
    build_dependency_graph,
    sort_artifacts,
)

__all__ = [
    "artifact_identity",
    "build_dependency_graph",
    "sort_artifacts",
]
