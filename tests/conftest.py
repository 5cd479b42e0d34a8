"""Shared fixtures for devtmpl tests."""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

import pytest

if TYPE_CHECKING:
    from collections.abc import Callable

TASMOTA_YAML = """\
type: tasmota
name: Tasmota
sample: |
  uri: http://192.168.xxx.xxx # tasmota device ip address (local)
  standbypower: 10 # standbypower threshold in W
"""

SONNEN_YAML = """\
type: default
name: Sonnenbatterie Eco (Grid Meter/HTTP)
sample: |
  power: # power reading
    type: http # use http plugin
    uri: http://192.168.1.75:8080/api/v1/status
    jq: .GridFeedIn_W
"""

SMA_YAML = """\
type: sma
name: SMA Home Manager
sample: |
  type: sma
  uri: 192.0.2.2
"""

LAYOUT = """\
# Templates
{% for device_class in classes %}
## {{ device_class }}
{% for t in filter(device_class, templates) %}
- {{ t.type }}: {{ t.name }}
  {{ indent(2, t.sample) }}
{% endfor %}
{% endfor %}
"""


def write_template(root: Path, folder: str, filename: str, content: str) -> Path:
    """Write one template file below ``root/folder``."""
    path = root / folder / filename
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content, encoding="utf-8")
    return path


@pytest.fixture
def make_template() -> Callable[[Path, str, str, str], Path]:
    """Factory writing ``root/folder/filename`` with the given YAML."""
    return write_template


@pytest.fixture
def template_root(tmp_path: Path) -> Path:
    """A template tree with one charger and two meters."""
    root = tmp_path / "yaml"
    write_template(root, "chargers", "tasmota.yaml", TASMOTA_YAML)
    write_template(root, "meters", "sonnen-grid.yaml", SONNEN_YAML)
    write_template(root, "meters", "sma.yaml", SMA_YAML)
    return root


@pytest.fixture
def layout_file(tmp_path: Path) -> Path:
    """A summary layout exercising both helpers."""
    path = tmp_path / "template.md"
    path.write_text(LAYOUT, encoding="utf-8")
    return path
