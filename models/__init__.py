"""Pydantic models for the Contract Repro tool.

Everything passed between the catalog, discovery, ordering and pipeline
layers is typed through these models.
"""

from .catalog_models import (
    ContractList,
    DependencyPair,
    DependencyTable,
    normalize_identity,
)

from .package_models import (
    CDYLIB_CRATE_TYPE,
    BuildTarget,
    Package,
    CargoMetadata,
)

from .run_models import (
    Mode,
    Stage,
    StageStatus,
    StageOutcome,
    RunSummary,
)

__all__ = [
    # Catalog
    "ContractList",
    "DependencyPair",
    "DependencyTable",
    "normalize_identity",
    # Packages
    "CDYLIB_CRATE_TYPE",
    "BuildTarget",
    "Package",
    "CargoMetadata",
    # Runs
    "Mode",
    "Stage",
    "StageStatus",
    "StageOutcome",
    "RunSummary",
]
