"""Discovery of contract packages and built artifacts."""

from .packages import PackageDiscoverer, MANIFEST_FILE_NAME
from .wasm_locator import find_wasm_files

__all__ = [
    "PackageDiscoverer",
    "MANIFEST_FILE_NAME",
    "find_wasm_files",
]
