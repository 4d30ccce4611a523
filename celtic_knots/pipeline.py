"""Top-level pipeline orchestration for celtic_knots."""

from __future__ import annotations
from dataclasses import dataclass, field
from pathlib import Path

import numpy as np

from celtic_knots.knot.models import Art, Stroke

_FORMATS = {"svg", "pdf", "png", "json", "txt"}


@dataclass
class Knot:
    """A generated knot: the stroke list it was traced from and its threads."""
    strokes: list[Stroke]
    art: Art
    width: float = 1.0
    height: float = 1.0
    seed: int | None = None
    outputs: dict[str, Path] = field(default_factory=dict)


def generate_knot(
    width: float = 1.0,
    height: float = 1.0,
    density: float | None = None,
    seed: int | None = None,
    bounce_odds: float = 1 / 15,
    glance_odds: float = 1 / 15,
    delete_fraction: float | None = None,
    output_dir: str | Path | None = None,
    formats: list[str] | None = None,
    segments_per_knot: int = 25,
    ribbon_width: float = 0.02,
    shade_bands: int = 4,
    draw_graph: bool = False,
    verbose: bool = False,
) -> Knot:
    """Full pipeline: random grid → pruned stroke list → traced knot → files.

    Parameters
    ----------
    width, height:
        Canvas size in knot units.
    density:
        Junctions per unit length.  Defaults to a random integer in 6–14.
    seed:
        Seed for every random choice (grid, pruning, colours).
    bounce_odds, glance_odds:
        Probability of a BOUNCE / GLANCE stroke; the rest are crossings.
    delete_fraction:
        Share of strokes deleted before purging open ends.  Random when None.
    output_dir:
        Directory for output files.  Nothing is written when None.
    formats:
        Output formats, any subset of ``{"svg", "pdf", "png", "json", "txt"}``.
        Defaults to ``["svg", "json", "txt"]``.
    segments_per_knot:
        Curve samples per thread knot when drawing.
    ribbon_width:
        Ribbon width in knot units.
    shade_bands:
        Colour bands across each ribbon, shading from dark to light.
    draw_graph:
        Draw the stroke graph underneath the ribbons.
    verbose:
        Print progress messages.
    """
    from celtic_knots.grid.square import (
        create_square_strokes,
        remove_strokes,
        validate_strokes,
    )
    from celtic_knots.knot.tracer import create_art

    if formats is None:
        formats = ["svg", "json", "txt"]
    unknown = set(formats) - _FORMATS
    if unknown:
        raise ValueError(
            f"Unknown output format(s): {sorted(unknown)}. "
            f"Use any of {sorted(_FORMATS)}."
        )
    if shade_bands < 1:
        raise ValueError(f"shade_bands must be ≥ 1; got {shade_bands}.")

    rng = np.random.default_rng(seed)
    if density is None:
        density = float(6 + rng.integers(0, 9))

    total = 4 if output_dir is not None else 3

    if verbose:
        print(f"[1/{total}] Building square grid "
              f"({width}×{height}, {density:g} junctions/unit) …")
    strokes = create_square_strokes(
        width, height, density, rng,
        bounce_odds=bounce_odds, glance_odds=glance_odds,
    )
    if verbose:
        print(f"      {len(strokes)} strokes")

    if verbose:
        print(f"[2/{total}] Pruning strokes …")
    strokes = remove_strokes(strokes, rng, delete_fraction=delete_fraction)
    validate_strokes(strokes, name="pruned grid", allow_open_ends=True)
    if verbose:
        print(f"      {len(strokes)} strokes kept")

    if verbose:
        print(f"[3/{total}] Tracing threads …")
    art = create_art(strokes, verbose=verbose)
    if verbose:
        n_cross = sum(t.crossing_count for t in art.traces)
        print(f"      {art.thread_count()} threads, {n_cross} crossing samples")

    knot = Knot(strokes=strokes, art=art, width=width, height=height, seed=seed)

    if output_dir is not None:
        if verbose:
            print(f"[4/{total}] Writing output …")
        knot.outputs = write_outputs(
            knot, output_dir, formats,
            segments_per_knot=segments_per_knot,
            ribbon_width=ribbon_width,
            shade_bands=shade_bands,
            draw_graph=draw_graph,
            verbose=verbose,
        )

    if verbose:
        print("Done.")

    return knot


def write_outputs(
    knot: Knot,
    output_dir: str | Path,
    formats: list[str],
    segments_per_knot: int = 25,
    ribbon_width: float = 0.02,
    shade_bands: int = 4,
    draw_graph: bool = False,
    verbose: bool = False,
) -> dict[str, Path]:
    """Write *knot* in every requested format; returns format → path."""
    from celtic_knots.output.svg_pdf import render_svg, render_pdf
    from celtic_knots.output.raster import render_png
    from celtic_knots.output.instructions import write_json, write_txt

    output_dir = Path(output_dir)
    output_dir.mkdir(parents=True, exist_ok=True)

    stem = "celtic_knot" if knot.seed is None else f"celtic_knot_{knot.seed}"
    draw_kwargs = dict(
        width=knot.width,
        height=knot.height,
        segments_per_knot=segments_per_knot,
        ribbon_width=ribbon_width,
        shade_bands=shade_bands,
        strokes=knot.strokes if draw_graph else None,
        seed=knot.seed,
        verbose=verbose,
    )
    written: dict[str, Path] = {}

    if "svg" in formats:
        written["svg"] = render_svg(knot.art, output_dir / f"{stem}.svg",
                                    **draw_kwargs)
    if "pdf" in formats:
        pdf = render_pdf(knot.art, output_dir / f"{stem}.pdf", **draw_kwargs)
        if pdf is not None:
            written["pdf"] = pdf
    if "png" in formats:
        written["png"] = render_png(knot.art, output_dir / f"{stem}.png",
                                    **draw_kwargs)
    if "json" in formats:
        written["json"] = write_json(knot.art, output_dir / f"{stem}.json",
                                     strokes=knot.strokes, verbose=verbose)
    if "txt" in formats:
        written["txt"] = write_txt(knot.art, output_dir / f"{stem}.txt",
                                   strokes=knot.strokes, verbose=verbose)
    return written
