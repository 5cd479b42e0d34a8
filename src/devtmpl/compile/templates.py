"""Jinja2 template engine for source and summary rendering.

Loads built-in templates from src/devtmpl/templates/ and renders external
layouts from source text. Every template sees the catalog helpers as
globals: ``filter``, ``indent``, ``go_literal`` and ``go_string``.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import TYPE_CHECKING, Any

import jinja2

from devtmpl.compile.literal import go_raw_literal, go_string_literal
from devtmpl.exceptions import CompileError
from devtmpl.registry import filter_templates

if TYPE_CHECKING:
    from collections.abc import Iterable

    from devtmpl.types import Template

__all__ = [
    "TemplateEngine",
    "filter_helper",
    "indent_helper",
]

logger = logging.getLogger(__name__)


def filter_helper(device_class: str, templates: Iterable[Template]) -> list[Template]:
    """``filter(class, collection)`` as seen by layouts."""
    return filter_templates(device_class, templates)


def indent_helper(spaces: int, text: str) -> str:
    """Prefix every line after the first with ``spaces`` spaces."""
    pad = " " * spaces
    return text.replace("\n", "\n" + pad)


class TemplateEngine:
    """Jinja2 environment with the catalog helpers installed.

    Template search order:
      1. ``search_paths`` (optional, e.g. user overrides)
      2. src/devtmpl/templates/ (built-in, always present)
    """

    def __init__(self, search_paths: Iterable[Path] = ()) -> None:
        from importlib.resources import files

        paths = [str(p) for p in search_paths if p.is_dir()]

        builtin_dir = Path(str(files("devtmpl") / "templates"))
        if not builtin_dir.is_dir():
            logger.debug("Expected template dir at: %s", builtin_dir)
            raise CompileError(
                "Built-in template directory not found — installation may be corrupted"
            )
        paths.append(str(builtin_dir))

        self._loader = jinja2.FileSystemLoader(paths)
        self._env = jinja2.Environment(
            loader=self._loader,
            autoescape=False,
            undefined=jinja2.StrictUndefined,
            keep_trailing_newline=True,
            trim_blocks=True,
            lstrip_blocks=True,
        )
        self._env.globals.update(
            filter=filter_helper,
            indent=indent_helper,
            go_literal=go_raw_literal,
            go_string=go_string_literal,
        )
        logger.debug("TemplateEngine initialized with %d search path(s)", len(paths))

    def render(self, template_name: str, **context: Any) -> str:
        """Render a named template from the search path.

        Raises:
            CompileError: If the template is not found or rendering fails.
        """
        try:
            template = self._env.get_template(template_name)
        except jinja2.TemplateNotFound as e:
            raise CompileError(f"Template not found: {template_name}") from e
        except jinja2.TemplateSyntaxError as e:
            raise CompileError(f"Syntax error in template {template_name}: {e}") from e

        try:
            return template.render(**context)
        except jinja2.TemplateError as e:
            raise CompileError(f"Failed to render template {template_name}: {e}") from e

    def render_source(self, source: str, name: str, **context: Any) -> str:
        """Render template text that lives outside the search path.

        Args:
            source: Template text.
            name: Label used in error messages (usually the file name).

        Raises:
            CompileError: If the text has a syntax error or rendering fails.
        """
        try:
            template = self._env.from_string(source)
        except jinja2.TemplateSyntaxError as e:
            raise CompileError(f"Syntax error in layout {name} (line {e.lineno}): {e}") from e

        try:
            return template.render(**context)
        except jinja2.TemplateError as e:
            raise CompileError(f"Failed to render layout {name}: {e}") from e
