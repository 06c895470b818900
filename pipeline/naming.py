"""Artifact file naming rules."""

from pathlib import Path
from typing import Optional

from config import settings
from models import normalize_identity


def artifact_file_name(package_name: str, extension: Optional[str] = None) -> str:
    """File name the build tool writes for a package.

    `atomic-swap` -> `atomic_swap.wasm`
    """
    return f"{normalize_identity(package_name)}.{extension or settings.wasm_extension}"


def optimized_path(wasm_path: Path, marker: Optional[str] = None) -> Path:
    """Insert the optimized marker before the extension.

    `foo.wasm` -> `foo.optimized.wasm`. Applying it to an already optimized
    path inserts the marker again, so always derive from the original.
    """
    wasm_path = Path(wasm_path)
    marker = marker or settings.optimized_marker
    return wasm_path.with_name(f"{wasm_path.stem}.{marker}{wasm_path.suffix}")
