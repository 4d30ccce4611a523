"""Tests for the SVG/PDF/PNG renderers and JSON/TXT summaries."""

import json
import sys
from xml.etree import ElementTree as ET

import pytest

from celtic_knots.knot.models import Stroke, StrokeType, Vec2
from celtic_knots.knot.tracer import create_art
from celtic_knots.output.instructions import knot_summary, write_json, write_txt
from celtic_knots.output import raster
from celtic_knots.output.raster import render_png
from celtic_knots.output.svg_pdf import (
    TYPE_COLOURS,
    render_pdf,
    render_svg,
    thread_shades,
)

_NS = {"svg": "http://www.w3.org/2000/svg"}


@pytest.fixture
def square_art(square):
    return create_art(square)


class TestThreadShades:
    def test_seeded_shades_repeat(self):
        assert thread_shades(3, seed=4) == thread_shades(3, seed=4)

    def test_one_colour_per_band(self):
        shades = thread_shades(5, bands=3, seed=0)
        assert len(shades) == 5
        for bands in shades:
            assert len(bands) == 3
            for colour in bands:
                assert colour.startswith("#")
                assert len(colour) == 7

    def test_dark_edge_to_light_edge(self):
        for bands in thread_shades(10, bands=6, seed=1):
            rgb = [[int(c[k:k + 2], 16) for k in (1, 3, 5)] for c in bands]
            for channel in zip(*rgb):
                assert list(channel) == sorted(channel)
            assert sum(rgb[0]) < sum(rgb[-1])


class TestSvg:
    def test_layers(self, square_art, tmp_path):
        path = render_svg(square_art, tmp_path / "knot.svg", segments_per_knot=5)
        root = ET.parse(path).getroot()
        under = root.find("svg:g[@id='under']", _NS)
        over = root.find("svg:g[@id='over']", _NS)
        assert under is not None and over is not None
        assert len(under) > 0
        assert len(over) > 0
        threads = {p.get("data-thread") for p in root.iter(f"{{{_NS['svg']}}}polygon")}
        assert threads == {"0", "1"}

    def test_runs_are_shaded_in_bands(self, square_art, tmp_path):
        path = render_svg(square_art, tmp_path / "knot.svg", segments_per_knot=5,
                          shade_bands=3, seed=2)
        polys = list(ET.parse(path).getroot().iter(f"{{{_NS['svg']}}}polygon"))
        outlines = [p for p in polys if p.get("fill") == "none"]
        bands = [p for p in polys if p.get("fill") != "none"]
        assert len(outlines) > 0
        assert len(bands) == 3 * len(outlines)
        shades = thread_shades(2, 3, seed=2)
        for p in bands:
            assert p.get("fill") in shades[int(p.get("data-thread"))]

    def test_over_layer_drawn_last(self, square_art, tmp_path):
        path = render_svg(square_art, tmp_path / "knot.svg", segments_per_knot=5)
        ids = [g.get("id") for g in ET.parse(path).getroot().findall("svg:g", _NS)]
        assert ids == ["under", "over"]

    def test_graph_overlay(self, square, square_art, tmp_path):
        path = render_svg(square_art, tmp_path / "knot.svg", strokes=square,
                          segments_per_knot=5)
        graph = ET.parse(path).getroot().find("svg:g[@id='graph']", _NS)
        assert graph is not None
        assert len(graph) == len(square)

    def test_canvas_size(self, square_art, tmp_path):
        path = render_svg(square_art, tmp_path / "knot.svg", width=2.0,
                          height=1.0, canvas_size=400, segments_per_knot=5)
        root = ET.parse(path).getroot()
        assert root.get("width") == "800"
        assert root.get("height") == "400"


class TestPdf:
    def test_missing_cairosvg_warns(self, square_art, tmp_path, monkeypatch):
        monkeypatch.setitem(sys.modules, "cairosvg", None)
        with pytest.warns(UserWarning, match="cairosvg"):
            result = render_pdf(square_art, tmp_path / "knot.pdf",
                                segments_per_knot=5)
        assert result is None
        assert (tmp_path / "knot.svg").exists()


class TestPng:
    def test_written(self, square, square_art, tmp_path):
        path = render_png(square_art, tmp_path / "knot.png", dpi=40,
                          segments_per_knot=5, strokes=square)
        assert path.exists()
        assert path.read_bytes()[:8] == b"\x89PNG\r\n\x1a\n"

    def test_graph_coloured_by_type(self, square_art, tmp_path, monkeypatch):
        strokes = [
            Stroke(Vec2(0.0, 0.0), Vec2(1.0, 0.0), StrokeType.CROSS),
            Stroke(Vec2(0.0, 1.0), Vec2(1.0, 1.0), StrokeType.GLANCE),
            Stroke(Vec2(0.0, 0.0), Vec2(0.0, 1.0), StrokeType.BOUNCE),
        ]
        seen = []
        real = raster.LineCollection

        def spy(segments, **kwargs):
            seen.append(kwargs["colors"])
            return real(segments, **kwargs)

        monkeypatch.setattr(raster, "LineCollection", spy)
        render_png(square_art, tmp_path / "knot.png", dpi=40,
                   segments_per_knot=5, strokes=strokes)
        assert seen == [[TYPE_COLOURS[s.type] for s in strokes]]


class TestSummaries:
    def test_knot_summary_counts(self, square, square_art):
        data = knot_summary(square_art, square)
        assert data["summary"] == {
            "num_threads": 2,
            "num_samples": 8,
            "num_crossing_samples": 8,
        }
        assert data["strokes"] == {"num_strokes": 4, "types": {"cross": 4}}
        assert data["threads"][0]["over_samples"] == 2

    def test_summary_without_strokes(self, square_art):
        assert "strokes" not in knot_summary(square_art)

    def test_json(self, square, square_art, tmp_path):
        path = write_json(square_art, tmp_path / "knot.json", strokes=square)
        data = json.loads(path.read_text())
        assert data["summary"]["num_threads"] == 2
        assert len(data["threads"][1]["positions"]) == 4
        assert data["threads"][1]["types"] == ["cross"] * 4

    def test_txt(self, square, square_art, tmp_path):
        path = write_txt(square_art, tmp_path / "knot.txt", strokes=square)
        text = path.read_text()
        assert "CELTIC KNOT" in text
        assert "Threads    : 2" in text
        assert "THREAD DETAILS" in text
        assert "crossings=4" in text
