"""Summary renderer — one catalog document for the whole registry.

The layout is an external Jinja2 file (``template.md`` in the working
directory by default). It receives:

- ``templates``: the registry as a list, expected to be sorted
- ``classes``: distinct device classes in registry order
- ``version`` and ``generated_at``

and can call ``filter(class, templates)`` and ``indent(n, text)``.
"""

from __future__ import annotations

import logging
from datetime import UTC, datetime
from pathlib import Path
from typing import TYPE_CHECKING, TextIO

from devtmpl.compile.output import write_output
from devtmpl.compile.templates import TemplateEngine
from devtmpl.exceptions import CompileError

if TYPE_CHECKING:
    from devtmpl.registry import TemplateRegistry

__all__ = ["DEFAULT_LAYOUT", "SummaryRenderer"]

logger = logging.getLogger(__name__)

DEFAULT_LAYOUT = "template.md"


class SummaryRenderer:
    """Renders the aggregate catalog document against an external layout.

    Args:
        layout_path: Layout file; relative paths resolve against the
            working directory at render time.
        engine: Template engine; a default one is created if omitted.
    """

    def __init__(
        self,
        layout_path: Path = Path(DEFAULT_LAYOUT),
        engine: TemplateEngine | None = None,
        *,
        stream: TextIO | None = None,
    ) -> None:
        self.layout_path = layout_path
        self._engine = engine or TemplateEngine()
        self._stream = stream

    def load_layout(self) -> str:
        """Read the layout text.

        Raises:
            CompileError: If the layout is missing or unreadable.
        """
        if not self.layout_path.is_file():
            raise CompileError(f"Summary layout not found: {self.layout_path}")
        try:
            return self.layout_path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            logger.error("Failed to read layout %s: %s", self.layout_path, e)
            raise CompileError(f"Failed to read summary layout {self.layout_path}: {e}") from e

    def render(self, registry: TemplateRegistry) -> str:
        """Render the summary document over the full registry."""
        from devtmpl import __version__

        layout = self.load_layout()
        content = self._engine.render_source(
            layout,
            self.layout_path.name,
            templates=registry.to_list(),
            classes=registry.classes(),
            version=__version__,
            generated_at=datetime.now(UTC).strftime("%Y-%m-%d %H:%M UTC"),
        )
        logger.info("Rendered summary for %d template(s)", len(registry))
        return content

    def write(self, registry: TemplateRegistry, path: Path | None = None) -> Path | None:
        """Render and write the summary; nothing is written if rendering fails.

        Returns:
            The file written, or None when the stream was used.
        """
        content = self.render(registry)
        write_output(content, path, self._stream)
        if path is not None:
            logger.info("Generated summary %s", path)
        return path
