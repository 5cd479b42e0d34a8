"""Tests for the Go source renderer."""

from __future__ import annotations

import io
import re
from pathlib import Path

import pytest

from devtmpl.compile.literal import eval_go_literal
from devtmpl.compile.source import SourceRenderer, fragment_path
from devtmpl.compile.templates import TemplateEngine
from devtmpl.config import OutputConfig
from devtmpl.exceptions import CompileError
from devtmpl.parse import parse_template
from devtmpl.types import Template

_SAMPLE_FIELD = re.compile(r"^\t\tSample: (.*),\n\t\}", re.MULTILINE | re.DOTALL)


def _sample_literal(source: str) -> str:
    match = _SAMPLE_FIELD.search(source)
    assert match is not None
    return match.group(1)


@pytest.fixture
def tasmota() -> Template:
    return Template(
        type="tasmota",
        name="Tasmota",
        sample="uri: http://192.168.xxx.xxx\nstandbypower: 10",
        device_class="charger",
        source_path="yaml/chargers/tasmota.yaml",
    )


class TestFragmentPath:
    def test_class_and_basename(self, tasmota: Template):
        assert fragment_path(Path("out"), tasmota) == Path("out/charger-tasmota.go")

    def test_basename_not_type(self):
        template = Template(
            type="default",
            name="Sonnen",
            sample="",
            device_class="meter",
            source_path="yaml/meters/sonnen-grid.yaml",
        )
        assert fragment_path(Path("out"), template).name == "meter-sonnen-grid.go"

    @pytest.mark.parametrize(
        ("device_class", "expected"),
        [("", "out/-a.go"), (".", "out/.-a.go"), ("/", "out/-a.go")],
    )
    def test_unusual_class_stays_in_output_dir(self, device_class: str, expected: str):
        template = Template(
            type="a", name="A", sample="", device_class=device_class, source_path="a.yaml"
        )
        assert fragment_path(Path("out"), template) == Path(expected)

    def test_dotfile_source_has_empty_stem(self):
        template = Template(
            type="a", name="A", sample="", device_class="meter", source_path="yaml/meters/.yaml"
        )
        assert fragment_path(Path("out"), template) == Path("out/meter-.go")


class TestRender:
    def test_fragment_layout(self, tasmota: Template):
        source = SourceRenderer().render(tasmota)
        assert source.startswith("package templates\n")
        assert '\t"github.com/andig/evcc-config/registry"\n' in source
        assert '\t\tClass:  "charger",\n' in source
        assert '\t\tType:   "tasmota",\n' in source
        assert '\t\tName:   "Tasmota",\n' in source
        assert "\tregistry.Add(template)\n}\n" in source

    def test_sample_embedded_as_raw_literal(self, tasmota: Template):
        source = SourceRenderer().render(tasmota)
        assert "\t\tSample: `uri: http://192.168.xxx.xxx\nstandbypower: 10`,\n" in source

    def test_sample_with_backticks_round_trips(self):
        template = Template(
            type="script",
            name="Script",
            sample="power:\n  cmd: echo `cat /tmp/x`\n  trailing: `",
            device_class="meter",
        )
        source = SourceRenderer().render(template)
        assert eval_go_literal(_sample_literal(source)) == template.sample

    def test_sample_resembling_fragment_end_round_trips(self):
        template = Template(
            type="odd", name="Odd", sample="a,\n\t}\n\t\tSample: `x`,\n\t}", device_class="meter"
        )
        source = SourceRenderer().render(template)
        assert eval_go_literal(_sample_literal(source)) == template.sample

    def test_name_with_quotes_escaped(self):
        template = Template(type="x", name='The "Box"', sample="", device_class="meter")
        source = SourceRenderer().render(template)
        assert '\t\tName:   "The \\"Box\\"",\n' in source

    def test_custom_package_and_import(self, tasmota: Template):
        config = OutputConfig(go_package="gen", registry_import="example.com/cfg/registry")
        source = SourceRenderer.from_config(config).render(tasmota)
        assert source.startswith("package gen\n")
        assert '"example.com/cfg/registry"' in source

    def test_end_to_end_example(self, tmp_path: Path, make_template):
        path = make_template(
            tmp_path, "chargers", "foo.yaml", 'type: bar\nname: Bar\nsample: "line1\\nline2\\n"\n'
        )
        source = SourceRenderer().render(parse_template(path))
        assert eval_go_literal(_sample_literal(source)) == "line1\nline2"

    def test_verification_failure_raises(self, tasmota: Template, monkeypatch: pytest.MonkeyPatch):
        monkeypatch.setattr("devtmpl.compile.source.eval_go_literal", lambda _s: "different")
        with pytest.raises(CompileError, match="does not round-trip"):
            SourceRenderer().render(tasmota)

    def test_verification_can_be_disabled(self, tasmota: Template, monkeypatch: pytest.MonkeyPatch):
        monkeypatch.setattr("devtmpl.compile.source.eval_go_literal", lambda _s: "different")
        assert "Sample:" in SourceRenderer(verify=False).render(tasmota)

    def test_verification_independent_of_layout(self, tasmota: Template, tmp_path: Path):
        (tmp_path / "registration.go.j2").write_text(
            "package {{ package }}\n\nvar sample = {{ go_literal(template.sample) }}\n",
            encoding="utf-8",
        )
        renderer = SourceRenderer(TemplateEngine([tmp_path]))
        source = renderer.render(tasmota)
        assert source.startswith("package templates\n\nvar sample = ")
        assert "registry.Add" not in source


class TestWrite:
    def test_writes_file(self, tmp_path: Path, tasmota: Template):
        out = tmp_path / "out"
        written = SourceRenderer().write(tasmota, out)
        assert written == out / "charger-tasmota.go"
        assert written.read_text(encoding="utf-8").startswith("package templates")

    def test_stream_when_no_output_dir(self, tasmota: Template):
        stream = io.StringIO()
        renderer = SourceRenderer(stream=stream)
        assert renderer.write(tasmota) is None
        assert renderer.write(tasmota) is None
        assert stream.getvalue().count("package templates") == 2
