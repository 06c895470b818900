"""Package models as reported by the package-metadata resolver."""

from pydantic import BaseModel, Field
from typing import List
from pathlib import Path

# Crate type of a dynamically loadable library, i.e. a contract's wasm ABI surface
CDYLIB_CRATE_TYPE = "cdylib"


class BuildTarget(BaseModel):
    """One build target of a package."""

    name: str
    kind: List[str] = Field(default_factory=list)
    crate_types: List[str] = Field(default_factory=list)


class Package(BaseModel):
    """A buildable unit inside a contract directory."""

    name: str
    manifest_path: Path
    targets: List[BuildTarget] = Field(default_factory=list)

    def has_crate_type(self, crate_type: str) -> bool:
        """Check whether any target declares the given crate type."""
        return any(crate_type in target.crate_types for target in self.targets)

    @property
    def is_contract(self) -> bool:
        """True if the package produces a loadable contract binary."""
        return self.has_crate_type(CDYLIB_CRATE_TYPE)


class CargoMetadata(BaseModel):
    """The part of `cargo metadata --format-version 1` output that is read."""

    packages: List[Package] = Field(default_factory=list)
