"""Pipeline orchestrator for devtmpl.

Sequences scan → parse/classify → register (→ fragment) → sort → summary.
Renderers are injected via the constructor.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import TYPE_CHECKING

from devtmpl.compile.source import SourceRenderer
from devtmpl.compile.summary import SummaryRenderer
from devtmpl.compile.templates import TemplateEngine
from devtmpl.exceptions import DevtmplError, PipelineError
from devtmpl.parse import parse_template
from devtmpl.registry import TemplateRegistry
from devtmpl.scan import scan_folder
from devtmpl.types import RunResult

if TYPE_CHECKING:
    from collections.abc import Callable

    from devtmpl.config import DevtmplConfig

__all__ = ["Pipeline"]

logger = logging.getLogger(__name__)


def _optional_path(value: str) -> Path | None:
    return Path(value) if value else None


class Pipeline:
    """Runs one generation pass over a template directory.

    Fragments are rendered as each file is parsed, in scan order. The
    summary is rendered once, after every file has been registered and the
    registry sorted. The first error aborts the run; fragments already
    written stay on disk.

    Usage::

        pipeline = Pipeline(config)
        result = pipeline.run()
        print(len(result.templates), result.fragment_count)
    """

    def __init__(
        self,
        config: DevtmplConfig,
        source_renderer: SourceRenderer | None = None,
        summary_renderer: SummaryRenderer | None = None,
        on_fragment: Callable[[Path | None], None] | None = None,
    ) -> None:
        self.config = config
        engine = None
        if source_renderer is None or summary_renderer is None:
            engine = TemplateEngine([Path(d) for d in config.output.template_dirs])
        self.source_renderer = source_renderer or SourceRenderer.from_config(config.output, engine)
        self.summary_renderer = summary_renderer or SummaryRenderer(
            Path(config.output.layout), engine
        )
        self.on_fragment = on_fragment

    def run(self) -> RunResult:
        """Run the configured stages.

        Returns:
            The registry contents and what was written.

        Raises:
            DevtmplError: The first scan, parse, render or write failure.
        """
        root = Path(self.config.input.root)
        go_dir = _optional_path(self.config.output.go_dir)
        summary_path = _optional_path(self.config.output.summary_path)
        generate = self.config.generate

        try:
            logger.info("Scanning %s", root)
            files = scan_folder(root, self.config.input.extension)

            registry = TemplateRegistry()
            fragments: list[Path] = []
            fragment_count = 0

            for path in files:
                template = parse_template(path)
                registry.add(template)

                if generate.go:
                    written = self.source_renderer.write(template, go_dir)
                    fragment_count += 1
                    if written is not None:
                        fragments.append(written)
                    if self.on_fragment is not None:
                        self.on_fragment(written)

            logger.info("Registered %d template(s)", len(registry))

            summary_written = False
            if generate.summary:
                registry.sort()
                self.summary_renderer.write(registry, summary_path)
                summary_written = True

        except DevtmplError:
            raise
        except Exception as e:
            raise PipelineError(f"Pipeline failed processing {root}: {e}") from e

        return RunResult(
            templates=tuple(registry),
            fragment_count=fragment_count,
            fragments=tuple(fragments),
            summary_path=summary_path,
            summary_written=summary_written,
        )
