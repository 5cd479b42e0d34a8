"""Go source renderer, one registration fragment per template.

Each fragment is a complete Go file whose ``init()`` adds the template to
the runtime registry. The sample body is embedded as a raw string literal
via :func:`~devtmpl.compile.literal.go_raw_literal`.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import TYPE_CHECKING, TextIO

from devtmpl.compile.literal import eval_go_literal, go_raw_literal
from devtmpl.compile.output import write_output
from devtmpl.compile.templates import TemplateEngine
from devtmpl.exceptions import CompileError
from devtmpl.scan import file_extension

if TYPE_CHECKING:
    from devtmpl.config import OutputConfig
    from devtmpl.types import Template

__all__ = [
    "GO_EXTENSION",
    "SOURCE_TEMPLATE",
    "SourceRenderer",
    "fragment_path",
]

logger = logging.getLogger(__name__)

GO_EXTENSION = ".go"
SOURCE_TEMPLATE = "registration.go.j2"


def fragment_path(output_dir: Path, template: Template) -> Path:
    """``<output_dir>/<class>-<source basename without extension>.go``."""
    if template.source_path:
        name = Path(template.source_path).name
        stem = name[: len(name) - len(file_extension(name))]
    else:
        stem = template.type
    # Formatted rather than joined so a class like "/" stays inside output_dir
    return Path(f"{output_dir}/{template.device_class}-{stem}{GO_EXTENSION}")


class SourceRenderer:
    """Renders and writes Go registration fragments.

    Args:
        engine: Template engine; a default one is created if omitted.
        package: Go package name of the generated files.
        registry_import: Import path of the runtime registry package.
        verify: Evaluate the sample literal before rendering and fail if it
            does not reproduce the sample exactly.
    """

    def __init__(
        self,
        engine: TemplateEngine | None = None,
        package: str = "templates",
        registry_import: str = "github.com/andig/evcc-config/registry",
        *,
        verify: bool = True,
        stream: TextIO | None = None,
    ) -> None:
        self._engine = engine or TemplateEngine()
        self.package = package
        self.registry_import = registry_import
        self.verify = verify
        self._stream = stream

    @classmethod
    def from_config(
        cls, config: OutputConfig, engine: TemplateEngine | None = None
    ) -> SourceRenderer:
        return cls(engine, package=config.go_package, registry_import=config.registry_import)

    def render(self, template: Template) -> str:
        """Render the registration fragment for one template.

        Raises:
            CompileError: If rendering fails or the embedded sample does not
                round-trip.
        """
        if self.verify:
            self._verify_sample(template)
        return self._engine.render(
            SOURCE_TEMPLATE,
            template=template,
            package=self.package,
            registry_import=self.registry_import,
        )

    def write(self, template: Template, output_dir: Path | None = None) -> Path | None:
        """Render one template and write it out.

        With ``output_dir`` the fragment gets its own file (see
        :func:`fragment_path`); otherwise it is appended to the shared stream
        and the caller must make the concatenation acceptable to the Go
        compiler.

        Returns:
            The file written, or None when the stream was used.
        """
        source = self.render(template)
        if output_dir is None:
            write_output(source, None, self._stream)
            return None

        path = fragment_path(output_dir, template)
        write_output(source, path)
        logger.info("Generated %s", path)
        return path

    @staticmethod
    def _verify_sample(template: Template) -> None:
        if eval_go_literal(go_raw_literal(template.sample)) != template.sample:
            raise CompileError(
                f"Sample literal for {template.device_class}/{template.type} does not round-trip"
            )
