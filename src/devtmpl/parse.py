"""Template parser and classifier.

Loads one YAML template file into a :class:`~devtmpl.types.Template`,
normalizes its sample body and derives its device class from the folder
the file lives in.
"""

from __future__ import annotations

import logging
from dataclasses import replace
from typing import TYPE_CHECKING

import yaml

from devtmpl.exceptions import ParseError
from devtmpl.types import Template

if TYPE_CHECKING:
    from pathlib import Path

__all__ = [
    "PLURAL_SUFFIX",
    "classify",
    "folder_name",
    "load_template",
    "normalize_sample",
    "parse_template",
    "singularize",
]

logger = logging.getLogger(__name__)

PLURAL_SUFFIX = "s"


def normalize_sample(text: str) -> str:
    """Strip all trailing line breaks, keeping internal ones."""
    return text.rstrip("\r\n")


def singularize(folder_name: str) -> str:
    """Derive a device class from a category folder name.

    Heuristic: drops at most one trailing ``s`` ("chargers" → "charger").
    Irregular plurals are not recognized.
    """
    if folder_name.endswith(PLURAL_SUFFIX):
        return folder_name[: -len(PLURAL_SUFFIX)]
    return folder_name


def _field(data: dict[str, object], key: str, path: Path) -> str:
    value = data.get(key)
    if value is None:
        return ""
    if isinstance(value, (dict, list)):
        raise ParseError(f"Field {key!r} in {path} must be a string, got {type(value).__name__}")
    return str(value)


def load_template(path: Path) -> Template:
    """Read and decode a template file without classifying it.

    All scalars are read as text, so ``type: 1`` yields ``"1"``. Missing
    fields become empty strings and unknown keys are ignored.

    Raises:
        ParseError: If the file cannot be read, is not valid YAML, or is not
            a mapping of scalar fields.
    """
    try:
        raw = path.read_bytes()
    except OSError as e:
        logger.error("Failed to read template %s: %s", path, e)
        raise ParseError(f"Failed to read template {path}: {e}") from e

    try:
        data = yaml.load(raw, Loader=yaml.BaseLoader)  # noqa: S506
    except yaml.YAMLError as e:
        logger.error("Malformed YAML in %s: %s", path, e)
        raise ParseError(f"Malformed YAML in {path}: {e}") from e

    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise ParseError(f"Template {path} must be a mapping, got {type(data).__name__}")

    return Template(
        type=_field(data, "type", path),
        name=_field(data, "name", path),
        sample=normalize_sample(_field(data, "sample", path)),
        source_path=str(path),
    )


def folder_name(path: Path) -> str:
    """Name of the folder containing ``path``.

    A file directly below the working directory or the filesystem root has
    no parent name; those folders are named ``"."`` and the root itself.
    """
    parent = path.parent
    return parent.name or parent.anchor or "."


def classify(template: Template, path: Path) -> Template:
    """Return a copy of ``template`` with its class taken from ``path``'s folder.

    The class may be empty (a folder named ``s``).

    Raises:
        ParseError: If the template already carries a class.
    """
    if template.device_class is not None:
        raise ParseError(
            f"Template {template.type!r} from {path} is already classified "
            f"as {template.device_class!r}"
        )
    return replace(template, device_class=singularize(folder_name(path)))


def parse_template(path: Path) -> Template:
    """Load, normalize and classify one template file."""
    template = classify(load_template(path), path)
    logger.debug(
        "Parsed %s: class=%s type=%s name=%s",
        path.name,
        template.device_class,
        template.type,
        template.name,
    )
    return template
