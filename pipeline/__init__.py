"""Build, optimize and reproduce stages for contract packages."""

from .naming import artifact_file_name, optimized_path
from .toolchain import (
    ToolchainSelector,
    RandomToolchainSelector,
    FixedToolchainSelector,
    get_toolchain_selector,
)
from .stages import BuildPipeline

__all__ = [
    "artifact_file_name",
    "optimized_path",
    "ToolchainSelector",
    "RandomToolchainSelector",
    "FixedToolchainSelector",
    "get_toolchain_selector",
    "BuildPipeline",
]
