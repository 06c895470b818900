"""Loaders for the embedded catalog files.

Both files ship inside this package and are read through importlib.resources,
so the tool works the same from a checkout or an installed wheel.
"""

import tomllib
from importlib import resources
from pathlib import Path
from typing import Any, Dict, Optional, Sequence

from pydantic import ValidationError

from errors import ConfigError
from models import ContractList, DependencyTable

CONTRACT_LIST_FILE = "contract_list.toml"
DEPENDENCY_PAIRS_FILE = "dependency_pairs.toml"


def _read_embedded(name: str) -> str:
    return resources.files(__package__).joinpath(name).read_text(encoding="utf-8")


def _parse_toml(text: str, source: str) -> Dict[str, Any]:
    try:
        return tomllib.loads(text)
    except tomllib.TOMLDecodeError as e:
        raise ConfigError(f"{source} is not valid TOML: {e}") from e


def parse_contract_list(text: str, source: str = CONTRACT_LIST_FILE) -> ContractList:
    """Parse a contract list document.

    Args:
        text: TOML with a single `contracts` array of directory names
        source: Name used in error messages

    Returns:
        Validated ContractList

    Raises:
        ConfigError: If the document is not TOML or fails validation
    """
    data = _parse_toml(text, source)
    try:
        return ContractList.model_validate(data)
    except ValidationError as e:
        raise ConfigError(f"{source} is malformed: {e}") from e


def parse_dependency_table(text: str, source: str = DEPENDENCY_PAIRS_FILE) -> DependencyTable:
    """Parse a dependency table document of `[[pairs]]` entries."""
    data = _parse_toml(text, source)
    try:
        return DependencyTable.model_validate(data)
    except ValidationError as e:
        raise ConfigError(f"{source} is malformed: {e}") from e


def load_contract_list() -> ContractList:
    """Load the embedded contract catalog."""
    return parse_contract_list(_read_embedded(CONTRACT_LIST_FILE))


def contract_list_from_names(names: Sequence[str], source: str = "--contract") -> ContractList:
    """Validate explicitly requested contract names like the embedded catalog."""
    try:
        return ContractList(contracts=list(names))
    except ValidationError as e:
        raise ConfigError(f"{source} is malformed: {e}") from e


def load_dependency_table(extra_path: Optional[Path] = None) -> DependencyTable:
    """Load the embedded dependency table, optionally merged with a user file.

    Args:
        extra_path: Additional TOML file with more `[[pairs]]`

    Returns:
        The combined DependencyTable
    """
    table = parse_dependency_table(_read_embedded(DEPENDENCY_PAIRS_FILE))
    if extra_path is None:
        return table

    extra_path = Path(extra_path)
    if not extra_path.is_file():
        raise ConfigError(f"Dependency table not found: {extra_path}")
    extra = parse_dependency_table(extra_path.read_text(encoding="utf-8"), str(extra_path))
    return table.merged(extra)
