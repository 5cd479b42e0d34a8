"""Pipeline data contracts for devtmpl.

Frozen dataclasses that flow between pipeline stages:
  Path → Template (unclassified) → Template (classified) → registry → output
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from pathlib import Path

__all__ = [
    "RunResult",
    "Template",
]


@dataclass(frozen=True)
class Template:
    """One device configuration example.

    ``device_class`` is None until the template has been classified from
    its containing folder (an empty class is valid); the ordering key is
    (device_class, type, name).
    """

    type: str
    name: str
    sample: str
    device_class: str | None = None
    source_path: str = field(default="", compare=False)

    @property
    def sort_key(self) -> tuple[str, str, str]:
        return (self.device_class or "", self.type, self.name)


@dataclass(frozen=True)
class RunResult:
    """Outcome of one pipeline run.

    ``fragment_count`` counts every rendered fragment, including those sent
    to the shared stream; ``fragments`` only lists the files written.
    """

    templates: tuple[Template, ...] = ()
    fragment_count: int = 0
    fragments: tuple[Path, ...] = ()
    summary_path: Path | None = None
    summary_written: bool = False
