"""Matplotlib PNG rendering of a knot."""

from __future__ import annotations
from pathlib import Path

import matplotlib
matplotlib.use("Agg")
import matplotlib.pyplot as plt
from matplotlib.collections import LineCollection, PolyCollection

from celtic_knots.knot.models import Art, Stroke
from celtic_knots.output.ribbon import (
    ribbon_strip,
    run_bands,
    run_polygon,
    split_runs,
)
from celtic_knots.output.svg_pdf import TYPE_COLOURS, thread_shades


def render_png(
    art: Art,
    output_path: str | Path,
    width: float = 1.0,
    height: float = 1.0,
    dpi: int = 150,
    segments_per_knot: int = 25,
    ribbon_width: float = 0.02,
    shade_bands: int = 4,
    strokes: list[Stroke] | None = None,
    seed: int | None = None,
    verbose: bool = False,
) -> Path:
    """Render *art* to a PNG; over runs are drawn above under runs."""
    output_path = Path(output_path)
    shades = thread_shades(art.thread_count(), shade_bands, seed)

    # Per layer: shaded bands, then the run outlines on top of them.
    layers = {
        False: {"bands": [], "colours": [], "outlines": []},
        True: {"bands": [], "colours": [], "outlines": []},
    }
    for i in range(art.thread_count()):
        strip = ribbon_strip(
            art.thread(i), art.over_under(i),
            segments_per_knot=segments_per_knot,
            half_width=ribbon_width / 2,
        )
        for is_over, start, stop in split_runs(strip.over):
            layer = layers[is_over]
            layer["bands"].extend(run_bands(strip, start, stop, shade_bands))
            layer["colours"].extend(shades[i])
            layer["outlines"].append(run_polygon(strip, start, stop))

    fig, ax = plt.subplots(figsize=(8 * width / height, 8))
    fig.patch.set_facecolor("#202020")
    ax.set_facecolor("#202020")

    if strokes:
        segs = [[(s.a.x, s.a.y), (s.b.x, s.b.y)] for s in strokes]
        cols = [TYPE_COLOURS[s.type] for s in strokes]
        ax.add_collection(LineCollection(segs, colors=cols, alpha=0.5,
                                         linewidths=0.5, zorder=0))

    for z, is_over in ((1, False), (3, True)):
        layer = layers[is_over]
        ax.add_collection(PolyCollection(layer["bands"],
                                         facecolors=layer["colours"],
                                         edgecolors="none", zorder=z))
        ax.add_collection(PolyCollection(layer["outlines"], facecolors="none",
                                         edgecolors="#101010", linewidths=0.5,
                                         zorder=z + 1))

    ax.set_xlim(0, width)
    ax.set_ylim(height, 0)   # y grows downwards, as in the SVG
    ax.set_aspect("equal")
    ax.axis("off")

    plt.tight_layout()
    fig.savefig(str(output_path), dpi=dpi, facecolor=fig.get_facecolor())
    plt.close(fig)

    if verbose:
        print(f"  PNG written → {output_path}")
    return output_path
