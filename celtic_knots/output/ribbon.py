"""Sample thread curves into ribbon polygons with over/under runs."""

from __future__ import annotations

from dataclasses import dataclass

import numpy as np

from celtic_knots.interp.splines import Hermite, Step


@dataclass
class RibbonStrip:
    """A thread sampled along its length.

    ``left``/``right`` are the two edges of the ribbon; ``over[i]`` tells
    whether sample *i* lies over the ribbons it crosses.
    """
    center: np.ndarray    # (N, 2)
    left: np.ndarray      # (N, 2)
    right: np.ndarray     # (N, 2)
    over: np.ndarray      # (N,) bool


def ribbon_strip(
    thread: Hermite,
    z: Step,
    segments_per_knot: int = 25,
    half_width: float = 0.01,
) -> RibbonStrip:
    """Sample *thread* over [0, 1] into a ribbon of the given half width.

    The ribbon's cross direction is perpendicular to the curve slope at each
    sample.  Where the slope vanishes the previous direction is reused.
    """
    if segments_per_knot < 1:
        raise ValueError(f"segments_per_knot must be ≥ 1; got {segments_per_knot}.")

    target = thread.knot_count * segments_per_knot
    ts = np.linspace(0.0, 1.0, target + 1)

    center = np.array([thread.y(t).to_array() for t in ts])
    slope = np.array([thread.slope(t).to_array() for t in ts])
    over = np.array([z.y(t) > 0.0 for t in ts], dtype=bool)

    cross = np.stack([slope[:, 1], -slope[:, 0]], axis=1)
    length = np.linalg.norm(cross, axis=1)
    last = np.array([0.0, half_width])
    for i in range(len(cross)):
        if length[i] > 1e-12:
            last = cross[i] / length[i] * half_width
        cross[i] = last

    return RibbonStrip(
        center=center,
        left=center + cross,
        right=center - cross,
        over=over,
    )


def split_runs(over: np.ndarray) -> list[tuple[bool, int, int]]:
    """Group consecutive samples with the same over flag.

    Returns ``(is_over, start, stop)`` triples.  ``stop`` is inclusive of the
    first sample of the next run so neighbouring polygons share an edge.
    """
    n = len(over)
    if n == 0:
        return []
    runs: list[tuple[bool, int, int]] = []
    start = 0
    for i in range(1, n):
        if over[i] != over[start]:
            runs.append((bool(over[start]), start, i))
            start = i
    runs.append((bool(over[start]), start, n - 1))
    return runs


def run_polygon(strip: RibbonStrip, start: int, stop: int) -> np.ndarray:
    """Closed outline of samples ``start..stop`` as an (M, 2) array."""
    left = strip.left[start:stop + 1]
    right = strip.right[start:stop + 1][::-1]
    return np.vstack([left, right])


def run_bands(
    strip: RibbonStrip, start: int, stop: int, bands: int = 4,
) -> list[np.ndarray]:
    """Split the run ``start..stop`` into *bands* strips across the ribbon.

    Bands are ordered from the left edge to the right edge; together they
    cover exactly the outline returned by :func:`run_polygon`.
    """
    if bands < 1:
        raise ValueError(f"bands must be ≥ 1; got {bands}.")
    left = strip.left[start:stop + 1]
    right = strip.right[start:stop + 1]
    edges = [left + (right - left) * (k / bands) for k in range(bands + 1)]
    return [np.vstack([edges[k], edges[k + 1][::-1]]) for k in range(bands)]
