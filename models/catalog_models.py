"""Catalog models: the contract list and the known dependency pairs."""

from pydantic import BaseModel, Field, field_validator, model_validator
from typing import List, Optional
from pathlib import PurePosixPath


def normalize_identity(name: str) -> str:
    """Normalize a package or artifact name to its artifact identity.

    Artifact file names are derived from package names with hyphens
    replaced by underscores, so identities are compared in that form.
    """
    return name.strip().replace("-", "_")


class ContractList(BaseModel):
    """Ordered list of contract directory names inside the reference source."""

    contracts: List[str] = Field(
        ..., description="Contract directories relative to the source root, in build order"
    )

    @field_validator("contracts")
    @classmethod
    def _relative_segments(cls, value: List[str]) -> List[str]:
        for name in value:
            if not name or not name.strip():
                raise ValueError("contract names must be non-empty")
            path = PurePosixPath(name)
            if path.is_absolute() or ".." in path.parts:
                raise ValueError(f"contract name must be a relative path: {name!r}")
        return value

    def __iter__(self):
        return iter(self.contracts)

    def __len__(self) -> int:
        return len(self.contracts)


class DependencyPair(BaseModel):
    """Ordering constraint: the `before` artifact must be handled before `after`."""

    before: str = Field(..., min_length=1, description="Identity of the artifact that goes first")
    after: str = Field(..., min_length=1, description="Identity of the artifact that depends on it")
    reason: Optional[str] = Field(default=None, description="Why the ordering exists")

    @field_validator("before", "after")
    @classmethod
    def _normalize(cls, value: str) -> str:
        return normalize_identity(value)

    @model_validator(mode="after")
    def _not_self_referential(self) -> "DependencyPair":
        if self.before == self.after:
            raise ValueError(f"artifact {self.before!r} cannot depend on itself")
        return self


class DependencyTable(BaseModel):
    """The full set of known cross-contract dependency pairs."""

    pairs: List[DependencyPair] = Field(default_factory=list)

    def merged(self, other: "DependencyTable") -> "DependencyTable":
        """Return a table holding the pairs of both tables, without duplicates."""
        seen = set()
        pairs: List[DependencyPair] = []
        for pair in [*self.pairs, *other.pairs]:
            key = (pair.before, pair.after)
            if key in seen:
                continue
            seen.add(key)
            pairs.append(pair)
        return DependencyTable(pairs=pairs)
