"""Random square-grid stroke lists for knot generation.

A knot is drawn over a square lattice of junctions.  Every lattice edge
becomes a stroke with a random :class:`StrokeType` (mostly crossings), a
random share of the strokes is deleted, and strokes left hanging at an open
end are purged so the remaining graph has room for the ribbons to turn.
"""

from __future__ import annotations

import warnings

import networkx as nx
import numpy as np

from celtic_knots.knot.models import Stroke, StrokeType, Vec2

_TYPES = (StrokeType.CROSS, StrokeType.BOUNCE, StrokeType.GLANCE)


def random_stroke_type(
    rng: np.random.Generator,
    bounce_odds: float = 1 / 15,
    glance_odds: float = 1 / 15,
) -> StrokeType:
    """Draw a stroke type; crossings get whatever probability is left."""
    if bounce_odds < 0 or glance_odds < 0 or bounce_odds + glance_odds > 1:
        raise ValueError(
            f"Invalid stroke odds: bounce={bounce_odds}, glance={glance_odds}."
        )
    p = [1.0 - bounce_odds - glance_odds, bounce_odds, glance_odds]
    return _TYPES[int(rng.choice(3, p=p))]


def create_square_strokes(
    width: float,
    height: float,
    junctions_per: float,
    rng: np.random.Generator,
    bounce_odds: float = 1 / 15,
    glance_odds: float = 1 / 15,
) -> list[Stroke]:
    """Build strokes along every edge of an interior square lattice.

    The lattice has ``int(junctions_per * width)`` columns and
    ``int(junctions_per * height)`` rows; the outermost ring (on the canvas
    border) is left out.  Each junction gets a stroke to its right and lower
    neighbour when that neighbour is interior.

    Parameters
    ----------
    width, height:
        Canvas size in knot units.
    junctions_per:
        Lattice spacing expressed as junctions per unit length.
    rng:
        Random generator for stroke types.
    bounce_odds, glance_odds:
        Probability of a BOUNCE / GLANCE stroke.
    """
    if width <= 0 or height <= 0:
        raise ValueError(f"Canvas must be positive; got {width}×{height}.")
    cols = int(junctions_per * width)
    rows = int(junctions_per * height)
    if cols < 2 or rows < 2:
        raise ValueError(
            f"Need at least 2 junctions per side; got {cols}×{rows} "
            f"(junctions_per={junctions_per})."
        )

    # Each coordinate is computed once so shared endpoints compare equal.
    xs = [i / cols * width for i in range(cols + 1)]
    ys = [j / rows * height for j in range(rows + 1)]

    strokes: list[Stroke] = []
    for i in range(1, cols):
        for j in range(1, rows):
            here = Vec2(xs[i], ys[j])
            if i + 1 != cols:
                strokes.append(Stroke(
                    here, Vec2(xs[i + 1], ys[j]),
                    random_stroke_type(rng, bounce_odds, glance_odds),
                ))
            if j + 1 != rows:
                strokes.append(Stroke(
                    here, Vec2(xs[i], ys[j + 1]),
                    random_stroke_type(rng, bounce_odds, glance_odds),
                ))
    return strokes


def stroke_multigraph(strokes: list[Stroke]) -> nx.MultiGraph:
    """Junction graph of *strokes*; parallel strokes stay separate edges."""
    g = nx.MultiGraph()
    g.add_edges_from((s.a, s.b) for s in strokes)
    return g


def remove_strokes(
    strokes: list[Stroke],
    rng: np.random.Generator,
    delete_fraction: float | None = None,
) -> list[Stroke]:
    """Randomly delete strokes, then purge strokes with an open end.

    ``delete_fraction`` defaults to a random value in ``1/22 … 1/3``.  The
    purge is a single pass: it can leave new open ends behind, which gives
    the ribbons there room to turn without touching their neighbours.
    """
    if delete_fraction is None:
        delete_fraction = 1.0 / (3 + int(rng.integers(0, 20)))
    if not 0.0 <= delete_fraction <= 1.0:
        raise ValueError(f"delete_fraction must be in [0, 1]; got {delete_fraction}.")

    keep = rng.random(len(strokes)) >= delete_fraction
    kept = [s for s, k in zip(strokes, keep) if k]

    g = stroke_multigraph(kept)
    return [s for s in kept if g.degree(s.a) > 1 and g.degree(s.b) > 1]


def validate_strokes(
    strokes: list[Stroke],
    name: str = "strokes",
    allow_open_ends: bool = False,
) -> None:
    """Reject zero-length strokes and warn about other degenerate input.

    The tracer accepts anything, but zero-length strokes have no direction
    and junctions touched by a single stroke produce ribbons that fold back
    on themselves.  The single-pass purge of :func:`remove_strokes` leaves
    such junctions on purpose; pass ``allow_open_ends=True`` to accept them.
    """
    for i, s in enumerate(strokes):
        if s.a == s.b:
            raise ValueError(f"{name}: stroke {i} has zero length at {s.a}.")

    mids = [s.mid() for s in strokes]
    if len(set(mids)) != len(mids):
        warnings.warn(
            f"{name}: {len(mids) - len(set(mids))} stroke(s) share a midpoint "
            "with another stroke and will be merged"
        )

    if allow_open_ends:
        return

    g = stroke_multigraph(strokes)
    open_ends = [v for v, d in g.degree() if d < 2]
    if open_ends:
        warnings.warn(
            f"{name}: {len(open_ends)} junction(s) have a single stroke; "
            "ribbons will fold back there"
        )
