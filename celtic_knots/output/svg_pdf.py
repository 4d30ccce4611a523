"""SVG/PDF rendering of a knot with over/under layering."""

from __future__ import annotations
import warnings
from pathlib import Path
from xml.etree import ElementTree as ET

import numpy as np
from tqdm import tqdm

from celtic_knots.knot.models import Art, Stroke, StrokeType
from celtic_knots.output.ribbon import (
    ribbon_strip,
    run_bands,
    run_polygon,
    split_runs,
)

# SVG namespace
_SVG_NS = "http://www.w3.org/2000/svg"

# Stroke-graph overlay colours
TYPE_COLOURS = {
    StrokeType.CROSS: "#e63946",
    StrokeType.GLANCE: "#2a9d8f",
    StrokeType.BOUNCE: "#457b9d",
}


def _hex(rgb: np.ndarray) -> str:
    return "#" + "".join(f"{int(round(c * 255)):02x}" for c in rgb)


def thread_shades(
    count: int, bands: int = 4, seed: int | None = None,
) -> list[list[str]]:
    """Per thread, *bands* hex colours shading from the left edge to the right.

    Each thread runs from a random dark colour (channels in [0, 0.5)) on its
    left edge to a random light colour (channels in [0.5, 1)) on its right
    edge; band *k* takes the colour at its centre.
    """
    rng = np.random.default_rng(seed)
    dark = rng.uniform(0.0, 0.5, size=(count, 3))
    light = rng.uniform(0.5, 1.0, size=(count, 3))
    weights = (np.arange(bands) + 0.5) / bands
    return [
        [_hex(d + (l - d) * w) for w in weights]
        for d, l in zip(dark, light)
    ]


def _points_attr(poly: np.ndarray, scale: float) -> str:
    return " ".join(f"{x * scale:.3f},{y * scale:.3f}" for x, y in poly)


def render_svg(
    art: Art,
    output_path: str | Path,
    width: float = 1.0,
    height: float = 1.0,
    canvas_size: float = 800.0,
    segments_per_knot: int = 25,
    ribbon_width: float = 0.02,
    shade_bands: int = 4,
    strokes: list[Stroke] | None = None,
    seed: int | None = None,
    verbose: bool = False,
) -> Path:
    """Render the threads of *art* to an SVG file.

    Parameters
    ----------
    art:
        Traced knot.
    output_path:
        Path for the output SVG file.
    width, height:
        Extent of the knot in knot units; ``height`` maps to ``canvas_size``
        pixels.
    segments_per_knot:
        Samples per thread knot when flattening the curves.
    ribbon_width:
        Ribbon width in knot units.
    shade_bands:
        Colour bands across each ribbon, shading from dark to light.
    strokes:
        If given, the stroke graph is drawn underneath, coloured by type.
    seed:
        Seed for the per-thread shades.
    """
    output_path = Path(output_path)
    scale = canvas_size / height
    px_w, px_h = width * scale, height * scale

    svg = ET.Element("svg", {
        "xmlns": _SVG_NS,
        "width": f"{px_w:.0f}",
        "height": f"{px_h:.0f}",
        "viewBox": f"0 0 {px_w:.3f} {px_h:.3f}",
    })
    ET.SubElement(svg, "rect", {
        "width": f"{px_w:.3f}", "height": f"{px_h:.3f}", "fill": "#202020",
    })

    if strokes:
        graph = ET.SubElement(svg, "g", {"id": "graph", "opacity": "0.5"})
        for s in strokes:
            ET.SubElement(graph, "line", {
                "x1": f"{s.a.x * scale:.3f}", "y1": f"{s.a.y * scale:.3f}",
                "x2": f"{s.b.x * scale:.3f}", "y2": f"{s.b.y * scale:.3f}",
                "stroke": TYPE_COLOURS[s.type],
                "stroke-width": "1",
            })

    shades = thread_shades(art.thread_count(), shade_bands, seed)

    # Painter's order: every under run first, then every over run.
    under = ET.SubElement(svg, "g", {"id": "under"})
    over = ET.SubElement(svg, "g", {"id": "over"})

    for i in tqdm(range(art.thread_count()), desc="Rendering threads",
                  disable=not verbose, unit="thread", leave=False):
        strip = ribbon_strip(
            art.thread(i), art.over_under(i),
            segments_per_knot=segments_per_knot,
            half_width=ribbon_width / 2,
        )
        for is_over, start, stop in split_runs(strip.over):
            layer = over if is_over else under
            for band, colour in zip(run_bands(strip, start, stop, shade_bands),
                                    shades[i]):
                ET.SubElement(layer, "polygon", {
                    "points": _points_attr(band, scale),
                    "fill": colour,
                    "data-thread": str(i),
                })
            poly = run_polygon(strip, start, stop)
            ET.SubElement(layer, "polygon", {
                "points": _points_attr(poly, scale),
                "fill": "none",
                "stroke": "#101010",
                "stroke-width": "0.75",
                "stroke-linejoin": "round",
                "data-thread": str(i),
            })

    tree = ET.ElementTree(svg)
    ET.indent(tree, space="  ")
    tree.write(str(output_path), encoding="unicode", xml_declaration=False)

    if verbose:
        print(f"  SVG written → {output_path}")
    return output_path


def render_pdf(
    art: Art,
    output_path: str | Path,
    verbose: bool = False,
    **svg_kwargs,
) -> Path | None:
    """Convert the SVG rendering to PDF via cairosvg.

    Falls back to SVG-only output with a warning if cairosvg is not installed.
    """
    output_path = Path(output_path)
    svg_path = output_path.with_suffix(".svg")
    render_svg(art, svg_path, verbose=verbose, **svg_kwargs)

    try:
        import cairosvg
        cairosvg.svg2pdf(url=str(svg_path), write_to=str(output_path))
        if verbose:
            print(f"  PDF written → {output_path}")
        return output_path
    except ImportError:
        warnings.warn(
            "cairosvg is not installed; PDF output skipped.  "
            "Install with: pip install cairosvg"
        )
        return None
