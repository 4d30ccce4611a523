"""Click CLI entry point for celtic_knots."""

from __future__ import annotations

import click


@click.command()
@click.option(
    "--width", default=1.0, show_default=True, type=float,
    help="Canvas width in knot units.",
)
@click.option(
    "--height", default=1.0, show_default=True, type=float,
    help="Canvas height in knot units.",
)
@click.option(
    "--density", default=None, type=float,
    help="Junctions per unit length (default: random 6–14).",
)
@click.option("--seed", default=None, type=int, help="Random seed.")
@click.option(
    "--bounce-odds", default=1 / 15, show_default=True, type=float,
    help="Probability that a stroke is a bounce.",
)
@click.option(
    "--glance-odds", default=1 / 15, show_default=True, type=float,
    help="Probability that a stroke is a glance.",
)
@click.option(
    "--delete-fraction", default=None, type=float,
    help="Share of grid strokes deleted before pruning (default: random).",
)
@click.option(
    "--segments-per-knot", default=25, show_default=True, type=int,
    help="Curve samples per thread knot when drawing.",
)
@click.option(
    "--ribbon-width", default=0.02, show_default=True, type=float,
    help="Ribbon width in knot units.",
)
@click.option(
    "--shade-bands", default=4, show_default=True, type=int,
    help="Colour bands across each ribbon, dark edge to light edge.",
)
@click.option(
    "--output-dir", default=".", show_default=True,
    type=click.Path(file_okay=False),
    help="Directory for output files.",
)
@click.option(
    "--formats", default="svg,json,txt", show_default=True,
    help="Comma-separated list of output formats: svg,pdf,png,json,txt.",
)
@click.option("--draw-graph", is_flag=True, default=False,
              help="Draw the stroke graph underneath the ribbons.")
@click.option("--verbose", is_flag=True, help="Print progress messages.")
def main(
    width: float,
    height: float,
    density: float | None,
    seed: int | None,
    bounce_odds: float,
    glance_odds: float,
    delete_fraction: float | None,
    segments_per_knot: int,
    ribbon_width: float,
    shade_bands: int,
    output_dir: str,
    formats: str,
    draw_graph: bool,
    verbose: bool,
) -> None:
    """Generate a random Celtic knot and write it to OUTPUT_DIR."""
    from celtic_knots.pipeline import generate_knot

    fmt_list = [f.strip().lower() for f in formats.split(",") if f.strip()]

    try:
        knot = generate_knot(
            width=width,
            height=height,
            density=density,
            seed=seed,
            bounce_odds=bounce_odds,
            glance_odds=glance_odds,
            delete_fraction=delete_fraction,
            output_dir=output_dir,
            formats=fmt_list,
            segments_per_knot=segments_per_knot,
            ribbon_width=ribbon_width,
            shade_bands=shade_bands,
            draw_graph=draw_graph,
            verbose=verbose,
        )
    except ValueError as exc:
        raise click.UsageError(str(exc)) from exc

    click.echo(
        f"{knot.art.thread_count()} threads from {len(knot.strokes)} strokes"
    )
    for fmt, path in knot.outputs.items():
        click.echo(f"  {fmt}: {path}")
