"""CLI interface for devtmpl.

Typer-based command-line interface with Rich output formatting.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Annotated

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.table import Table

from devtmpl import __version__
from devtmpl.config import CONFIG_FILE, DevtmplConfig, default_config, load_config, save_config
from devtmpl.exceptions import DevtmplError
from devtmpl.parse import parse_template
from devtmpl.pipeline import Pipeline
from devtmpl.registry import TemplateRegistry
from devtmpl.scan import scan_folder

__all__ = ["app"]

app = typer.Typer(
    name="devtmpl",
    help="Device template compiler — turns YAML device examples into Go registrations and docs.",
    no_args_is_help=True,
    rich_markup_mode="rich",
    context_settings={"help_option_names": ["-h", "--help"]},
)
console = Console()
err_console = Console(stderr=True)


def _configure_logging(verbose: bool) -> None:
    """Route devtmpl's loggers to stderr through Rich."""
    pkg_logger = logging.getLogger("devtmpl")
    for handler in list(pkg_logger.handlers):
        if isinstance(handler, RichHandler):
            pkg_logger.removeHandler(handler)
    pkg_logger.addHandler(RichHandler(console=err_console, show_path=False))
    pkg_logger.setLevel(logging.DEBUG if verbose else logging.WARNING)


def _resolve_config(config_path: Path | None) -> DevtmplConfig:
    """Explicit --config must exist; the default file is optional."""
    if config_path is not None:
        return load_config(config_path)
    default_path = Path(CONFIG_FILE)
    if default_path.is_file():
        return load_config(default_path)
    return default_config()


def _fail(error: DevtmplError) -> typer.Exit:
    err_console.print(f"[red]Error:[/red] {escape(str(error))}", soft_wrap=True)
    return typer.Exit(code=1)


@app.callback()
def main(
    verbose: Annotated[
        bool,
        typer.Option("--verbose", "-v", help="Enable debug logging"),
    ] = False,
) -> None:
    """Device template compiler."""
    _configure_logging(verbose)


@app.command()
def version() -> None:
    """Show devtmpl version."""
    console.print(f"devtmpl {__version__}")


@app.command()
def generate(
    yaml_path: Annotated[
        str | None,
        typer.Option("--yaml", "-y", help="Template root folder [default: yaml]"),
    ] = None,
    output_go: Annotated[
        str | None,
        typer.Option("--output-go", "-o", help="Output folder for Go files (default: stdout)"),
    ] = None,
    output_summary: Annotated[
        str | None,
        typer.Option("--output-summary", "-f", help="Output summary file (default: stdout)"),
    ] = None,
    go: Annotated[
        bool,
        typer.Option("--go", "-g", help="Generate Go files"),
    ] = False,
    summary: Annotated[
        bool,
        typer.Option("--summary", "-s", help="Generate summary"),
    ] = False,
    layout: Annotated[
        str | None,
        typer.Option("--layout", "-l", help="Summary layout file [default: template.md]"),
    ] = None,
    config_path: Annotated[
        Path | None,
        typer.Option("--config", "-c", help=f"Config file [default: ./{CONFIG_FILE} if present]"),
    ] = None,
) -> None:
    """Generate Go registrations and/or the template summary."""
    try:
        config = _resolve_config(config_path)
    except DevtmplError as e:
        raise _fail(e) from e

    if yaml_path is not None:
        config.input.root = yaml_path
    if output_go is not None:
        config.output.go_dir = output_go
    if output_summary is not None:
        config.output.summary_path = output_summary
    if layout is not None:
        config.output.layout = layout
    config.generate.go = config.generate.go or go
    config.generate.summary = config.generate.summary or summary

    def _report(path: Path | None) -> None:
        if path is not None:
            err_console.print(str(path), markup=False, highlight=False, soft_wrap=True)

    try:
        result = Pipeline(config, on_fragment=_report).run()
    except DevtmplError as e:
        raise _fail(e) from e

    if not (config.generate.go or config.generate.summary):
        err_console.print(
            f"[green]Validated[/green] {len(result.templates)} template(s). "
            "Pass --go and/or --summary to generate output.",
            soft_wrap=True,
        )
        return

    logging.getLogger(__name__).info(
        "Done: %d template(s), %d fragment(s)", len(result.templates), result.fragment_count
    )


@app.command(name="list")
def list_cmd(
    yaml_path: Annotated[
        str | None,
        typer.Option("--yaml", "-y", help="Template root folder [default: yaml]"),
    ] = None,
    device_class: Annotated[
        str | None,
        typer.Option("--class", help="Only show templates of this class"),
    ] = None,
    config_path: Annotated[
        Path | None,
        typer.Option("--config", "-c", help="Config file"),
    ] = None,
) -> None:
    """List templates in catalog order."""
    try:
        config = _resolve_config(config_path)
        root = Path(yaml_path if yaml_path is not None else config.input.root)
        registry = TemplateRegistry(
            parse_template(path) for path in scan_folder(root, config.input.extension)
        )
    except DevtmplError as e:
        raise _fail(e) from e

    registry.sort()
    if device_class is not None:
        templates = registry.filter(device_class)
    else:
        templates = registry.to_list()

    table = Table(show_header=True, box=None, padding=(0, 2))
    table.add_column("Class", style="dim")
    table.add_column("Type")
    table.add_column("Name", style="bold")
    table.add_column("File", style="dim")
    for template in templates:
        table.add_row(
            template.device_class,
            template.type,
            template.name,
            Path(template.source_path).name,
        )
    console.print(table)
    console.print(f"\n{len(templates)} template(s)")


@app.command()
def init(
    force: Annotated[
        bool,
        typer.Option("--force", help="Overwrite an existing config file"),
    ] = False,
) -> None:
    """Write a default devtmpl.toml in the current directory."""
    path = Path(CONFIG_FILE)
    if path.exists() and not force:
        console.print(f"[yellow]{path} already exists.[/yellow] Use --force to overwrite.")
        return

    try:
        save_config(default_config(), path)
    except DevtmplError as e:
        raise _fail(e) from e
    console.print(f"[green]Wrote[/green] {path}")
