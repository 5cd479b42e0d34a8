"""Output sink for generated artifacts.

Writes rendered text either to its own file or, when no path is
configured, to a shared stream (stdout by default).
"""

from __future__ import annotations

import logging
import sys
from typing import TYPE_CHECKING, TextIO

from devtmpl.exceptions import CompileError

if TYPE_CHECKING:
    from pathlib import Path

__all__ = ["write_output"]

logger = logging.getLogger(__name__)


def write_output(content: str, path: Path | None = None, stream: TextIO | None = None) -> None:
    """Write ``content`` to ``path``, or to ``stream`` when ``path`` is None.

    The file is created (with its parent directories) or overwritten.
    Content sent to the stream is appended as-is; successive writes
    concatenate.

    Raises:
        CompileError: If the file or stream cannot be written.
    """
    if path is None:
        out = stream if stream is not None else sys.stdout
        try:
            out.write(content)
            out.flush()
        except OSError as e:
            raise CompileError(f"Failed to write to output stream: {e}") from e
        return

    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content, encoding="utf-8")
    except OSError as e:
        logger.error("Failed to write %s: %s", path, e)
        raise CompileError(f"Failed to write {path}: {e}") from e
    logger.debug("Wrote %s (%d bytes)", path, len(content))
