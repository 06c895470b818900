"""Package discovery through `cargo metadata`.

Only packages with a cdylib target are returned; those are the ones that
compile to a loadable contract binary.
"""

from pathlib import Path
from typing import List, Optional

from pydantic import ValidationError

from config import settings
from errors import MetadataFailedError, MissingManifestError
from models import CargoMetadata, Package
from runners import ProcessRunner

MANIFEST_FILE_NAME = "Cargo.toml"


class PackageDiscoverer:
    """Asks the package-metadata resolver which contract packages a directory holds."""

    def __init__(self, runner: ProcessRunner, cargo_bin: Optional[str] = None):
        self.runner = runner
        self.cargo_bin = cargo_bin or settings.cargo_bin

    def manifest_path(self, contract_dir: Path) -> Path:
        return Path(contract_dir) / MANIFEST_FILE_NAME

    def discover(self, contract: str, contract_dir: Path) -> List[Package]:
        """List the contract packages of one catalog entry.

        Args:
            contract: Catalog name, used in errors
            contract_dir: Directory holding the contract's manifest

        Returns:
            Packages with a cdylib target, in resolver order (possibly empty)

        Raises:
            MissingManifestError: If the manifest does not exist
            MetadataFailedError: If the resolver fails or its output is unreadable
        """
        manifest = self.manifest_path(contract_dir)
        if not manifest.is_file():
            raise MissingManifestError(contract, manifest)

        result = self.runner.run(
            self.cargo_bin,
            [
                "metadata",
                "--format-version",
                "1",
                "--no-deps",
                "--manifest-path",
                str(manifest),
            ],
            capture=True,
        )
        if not result.ok:
            raise MetadataFailedError(
                str(manifest), result.exit_status, contract, result.stderr.strip() or None
            )

        packages = self._parse_packages(result.stdout, manifest, contract)
        return [p for p in packages if p.is_contract and self._belongs_to(p, contract_dir)]

    def _parse_packages(self, stdout: str, manifest: Path, contract: str) -> List[Package]:
        try:
            return CargoMetadata.model_validate_json(stdout).packages
        except ValidationError as e:
            raise MetadataFailedError(
                str(manifest), None, contract, f"unreadable metadata: {e}"
            ) from e

    @staticmethod
    def _belongs_to(package: Package, contract_dir: Path) -> bool:
        # A manifest inside a workspace reports every member; keep this directory's own
        return package.manifest_path.resolve().parent.is_relative_to(Path(contract_dir).resolve())
