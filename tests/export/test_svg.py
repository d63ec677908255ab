"""export.svg の `SvgSink` をテスト。"""

from __future__ import annotations

import xml.etree.ElementTree as ET
from pathlib import Path

import pytest

from dotgrid.core.config import GenConfig
from dotgrid.core.render import render
from dotgrid.core.sink import DrawingSink
from dotgrid.export.svg import SvgSink, export_svg

_NS = {"svg": "http://www.w3.org/2000/svg"}


def _config(**changes) -> GenConfig:
    return GenConfig(seed="abc", width=800, height=800, padding=100, step_size=100).replace(**changes)


def _parse(sink: SvgSink) -> ET.Element:
    return ET.fromstring(sink.to_svg())


def test_svg_sink_satisfies_protocol() -> None:
    assert isinstance(SvgSink(), DrawingSink)


def test_drawing_before_begin_raises() -> None:
    with pytest.raises(RuntimeError):
        SvgSink().to_svg()


def test_document_size_and_background() -> None:
    sink = SvgSink()
    render(_config(line_chance=0.0, white_background=True), sink)
    root = _parse(sink)
    assert float(root.get("width")) == 800.0
    assert float(root.get("height")) == 800.0
    rects = root.findall("svg:rect", _NS)
    assert len(rects) == 1
    assert rects[0].get("fill") == "#ffffff"
    assert len(root.findall("svg:circle", _NS)) == 49


def test_no_background_rect_when_disabled() -> None:
    sink = SvgSink()
    render(_config(fill_background=False), sink)
    assert _parse(sink).findall("svg:rect", _NS) == []


def test_each_line_gets_its_own_rotated_gradient() -> None:
    sink = SvgSink()
    render(_config(line_chance=1.0, colors_per_line=3), sink)
    root = _parse(sink)
    lines = root.findall("svg:line", _NS)
    gradients = root.findall("svg:defs/svg:linearGradient", _NS)
    assert lines
    assert len(gradients) == len(lines) == sink.gradient_count

    ids = [g.get("id") for g in gradients]
    assert ids == [f"grad-{i}" for i in range(1, len(lines) + 1)]
    for line, gradient in zip(lines, gradients):
        assert line.get("stroke") == f"url(#{gradient.get('id')})"
        assert line.get("stroke-linecap") == "round"
        assert "rotate(-45" in gradient.get("gradientTransform")
        assert len(gradient.findall("svg:stop", _NS)) == 3


def test_begin_discards_previous_document() -> None:
    sink = SvgSink()
    render(_config(line_chance=1.0), sink)
    render(_config(line_chance=0.0), sink)
    root = _parse(sink)
    assert root.findall("svg:line", _NS) == []
    assert root.findall("svg:defs/svg:linearGradient", _NS) == []
    assert sink.gradient_count == 0


def test_export_svg_writes_deterministic_file(tmp_path: Path) -> None:
    seed_a, path_a = export_svg(_config(line_chance=0.4), tmp_path / "a" / "out.svg")
    seed_b, path_b = export_svg(_config(line_chance=0.4), tmp_path / "b" / "out.svg")
    assert seed_a == seed_b == "abc"
    assert path_a.is_file()
    assert path_a.read_text(encoding="utf-8") == path_b.read_text(encoding="utf-8")
