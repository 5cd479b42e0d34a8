"""Run-scoped template registry.

Collects classified templates in insertion order and imposes the catalog
order on demand. The orchestrator owns one instance per run.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, overload

from devtmpl.exceptions import RegistryError

if TYPE_CHECKING:
    from collections.abc import Iterable, Iterator

    from devtmpl.types import Template

__all__ = ["TemplateRegistry", "filter_templates"]

logger = logging.getLogger(__name__)


def filter_templates(device_class: str, templates: Iterable[Template]) -> list[Template]:
    """Return the templates of one class, preserving their relative order."""
    return [t for t in templates if t.device_class == device_class]


class TemplateRegistry:
    """Append-only, ordered collection of classified templates.

    Duplicates are kept. :meth:`sort` orders by (class, type, name); the
    sort is stable, so templates with equal keys keep their insertion order,
    and sorting again is a no-op.

    Usage::

        registry = TemplateRegistry()
        registry.add(parse_template(path))
        registry.sort()
        meters = registry.filter("meter")
    """

    def __init__(self, templates: Iterable[Template] = ()) -> None:
        self._templates: list[Template] = []
        for template in templates:
            self.add(template)

    def add(self, template: Template) -> None:
        """Append a classified template.

        Raises:
            RegistryError: If the template has no device class yet.
        """
        if template.device_class is None:
            raise RegistryError(
                f"Cannot register unclassified template {template.type!r} "
                f"({template.source_path or 'unknown source'})"
            )
        self._templates.append(template)
        logger.debug("Registered %s/%s", template.device_class, template.type)

    def sort(self) -> None:
        """Sort in place by (class, type, name)."""
        self._templates.sort(key=lambda t: t.sort_key)
        logger.debug("Sorted %d template(s)", len(self._templates))

    def filter(self, device_class: str) -> list[Template]:
        """Templates of one class in registry order."""
        return filter_templates(device_class, self._templates)

    def classes(self) -> list[str]:
        """Distinct device classes in first-seen order."""
        return list(dict.fromkeys(t.device_class for t in self._templates))

    def to_list(self) -> list[Template]:
        return list(self._templates)

    def __len__(self) -> int:
        return len(self._templates)

    def __iter__(self) -> Iterator[Template]:
        return iter(self._templates)

    @overload
    def __getitem__(self, index: int) -> Template: ...

    @overload
    def __getitem__(self, index: slice) -> list[Template]: ...

    def __getitem__(self, index: int | slice) -> Template | list[Template]:
        return self._templates[index]
