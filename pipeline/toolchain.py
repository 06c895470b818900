"""Toolchain version selection strategies."""

import random
from abc import ABC, abstractmethod
from typing import List, Optional, Sequence

from config import settings
from errors import ConfigError


class ToolchainSelector(ABC):
    """Picks the toolchain version for one build."""

    @abstractmethod
    def select(self) -> str:
        pass


class RandomToolchainSelector(ToolchainSelector):
    """Random pick from a fixed candidate list, so runs exercise several toolchains."""

    def __init__(self, versions: Sequence[str], rng: Optional[random.Random] = None):
        if not versions:
            raise ConfigError("At least one toolchain version is required")
        self.versions: List[str] = list(versions)
        self.rng = rng or random.Random()

    def select(self) -> str:
        return self.rng.choice(self.versions)


class FixedToolchainSelector(ToolchainSelector):
    """Always the same version."""

    def __init__(self, version: str):
        if not version:
            raise ConfigError("Toolchain version must be non-empty")
        self.version = version

    def select(self) -> str:
        return self.version


def get_toolchain_selector(
    version: Optional[str] = None,
    versions: Optional[Sequence[str]] = None,
    seed: Optional[int] = None,
) -> ToolchainSelector:
    """Get a toolchain selector.

    Args:
        version: Pin every build to this version
        versions: Candidates for random selection (default from settings)
        seed: Seed for reproducible random picks

    Returns:
        FixedToolchainSelector when a version is pinned, RandomToolchainSelector otherwise
    """
    if version:
        return FixedToolchainSelector(version)
    candidates = versions if versions is not None else settings.toolchain_versions
    return RandomToolchainSelector(candidates, random.Random(seed))
