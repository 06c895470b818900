"""Exception taxonomy for Contract Repro.

Every failure is fatal to the remaining stages of the contract or artifact
being processed. Nothing here is retried.
"""

from pathlib import Path
from typing import List, Optional, Union


class ReproError(Exception):
    """Base class for all Contract Repro failures."""


class ConfigError(ReproError):
    """Embedded catalog or dependency table is malformed."""


class MissingManifestError(ReproError):
    """A catalogued contract has no Cargo manifest."""

    def __init__(self, contract: str, manifest_path: Union[str, Path]):
        self.contract = contract
        self.manifest_path = Path(manifest_path)
        super().__init__(f"Contract '{contract}' has no manifest at {self.manifest_path}")


class InvalidDirectoryError(ReproError):
    """Artifact scan root is not a directory."""

    def __init__(self, path: Union[str, Path]):
        self.path = Path(path)
        super().__init__(f"Not a directory: {self.path}")


class DependencyCycleError(ReproError):
    """Dependency pairs form a cycle among the discovered artifacts."""

    def __init__(self, cycle: List[str]):
        self.cycle = list(cycle)
        chain = " -> ".join(self.cycle) if self.cycle else "<unknown>"
        super().__init__(f"Dependency cycle between artifacts: {chain}")


class CloneFailedError(ReproError):
    """Source-control clone exited non-zero."""

    def __init__(self, url: str, exit_status: int):
        self.url = url
        self.exit_status = exit_status
        super().__init__(f"git clone of {url} failed with exit status {exit_status}")


class StageFailedError(ReproError):
    """An external tool exited non-zero during a pipeline stage."""

    stage = "stage"

    def __init__(
        self,
        target: str,
        exit_status: Optional[int],
        contract: Optional[str] = None,
        detail: Optional[str] = None,
    ):
        self.target = target
        self.exit_status = exit_status
        self.contract = contract
        self.detail = detail
        where = f" (contract '{contract}')" if contract else ""
        message = f"{self.stage} failed for {target}{where}"
        if exit_status is not None:
            message = f"{message} with exit status {exit_status}"
        if detail:
            message = f"{message}: {detail}"
        super().__init__(message)


class MetadataFailedError(StageFailedError):
    """Package-metadata resolver failed or returned unreadable output."""

    stage = "metadata"


class BuildFailedError(StageFailedError):
    stage = "build"


class OptimizeFailedError(StageFailedError):
    stage = "optimize"


class ReproduceFailedError(StageFailedError):
    """The artifact does not reproduce from source."""

    stage = "reproduce"


class BuildTimeoutError(ReproError):
    """An external tool exceeded the configured timeout and was killed."""

    def __init__(self, command: str, timeout: float):
        self.command = command
        self.timeout = timeout
        super().__init__(f"'{command}' did not finish within {timeout:g}s and was killed")
