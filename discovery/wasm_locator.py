"""Locate compiled artifacts under a directory tree."""

from pathlib import Path
from typing import List, Optional

from config import settings
from errors import InvalidDirectoryError


def find_wasm_files(root: Path, extension: Optional[str] = None) -> List[Path]:
    """Collect every artifact file below a directory.

    Args:
        root: Directory to scan recursively
        extension: Artifact extension without the dot (default from settings)

    Returns:
        Flat list of artifact paths. Order is unspecified; callers sort.

    Raises:
        InvalidDirectoryError: If root is not a directory
    """
    root = Path(root)
    if not root.is_dir():
        raise InvalidDirectoryError(root)

    suffix = f".{extension or settings.wasm_extension}"
    return [p for p in root.rglob("*") if p.is_file() and p.suffix == suffix]
