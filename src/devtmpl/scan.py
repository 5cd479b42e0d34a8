"""Template directory scanner.

Walks the input root and collects every file carrying the template
extension. Directories are visited in lexical order, but nothing downstream
depends on that; the registry sort is the only ordering guarantee.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path

from devtmpl.exceptions import ScanError

__all__ = ["TEMPLATE_EXTENSION", "file_extension", "scan_folder"]

logger = logging.getLogger(__name__)

TEMPLATE_EXTENSION = ".yaml"


def file_extension(filename: str) -> str:
    """Suffix from the last dot on; a dotfile like ``.yaml`` is all suffix."""
    dot = filename.rfind(".")
    return filename[dot:] if dot >= 0 else ""


def scan_folder(root: Path, extension: str = TEMPLATE_EXTENSION) -> list[Path]:
    """Recursively collect template files below ``root``.

    Args:
        root: Directory to scan.
        extension: File suffix to match, including the dot.

    Returns:
        Paths of all matching files.

    Raises:
        ScanError: If the root is missing or any directory cannot be read.
            No partial result is returned.
    """
    if not root.exists():
        raise ScanError(f"Template directory not found: {root}")
    if not root.is_dir():
        raise ScanError(f"Not a directory: {root}")

    def _on_error(err: OSError) -> None:
        raise ScanError(f"Failed to scan {err.filename}: {err.strerror or err}") from err

    files: list[Path] = []
    for dirpath, dirnames, filenames in os.walk(root, onerror=_on_error):
        dirnames.sort()
        for filename in sorted(filenames):
            if file_extension(filename) == extension:
                files.append(Path(dirpath) / filename)

    logger.info("Found %d template file(s) under %s", len(files), root)
    return files
