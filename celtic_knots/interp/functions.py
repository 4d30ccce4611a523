"""Blend and basis functions shared by the spline classes.

Two-point blends have the signature ``f(y0, y1, t)`` and interpolate between
two neighbouring samples for a normalised ``t`` in [0, 1).  Values only need
to support ``+``, ``-`` and multiplication by a float, so plain floats, numpy
arrays and :class:`celtic_knots.knot.models.Vec2` all work.
"""

from __future__ import annotations

import math


def imod(i: int, j: int) -> int:
    """Integer modulo that is always non-negative for positive *j*."""
    return i % abs(j)


def wrap(x: float, start: float, end: float) -> float:
    """Loop *x* into the half-open range ``[start, end)``."""
    span = end - start
    d = abs((x - start) / span)
    d -= math.floor(d)
    d *= span
    if x >= start:
        d += start
    else:
        d = end - d
    # Rounding can land exactly on the closed end.
    if d >= end or d < start:
        d = start
    return d


# ---------------------------------------------------------------------------
# Hermite basis
# ---------------------------------------------------------------------------

def h1(t: float) -> float:
    return 2 * t ** 3 - 3 * t ** 2 + 1


def h2(t: float) -> float:
    return -2 * t ** 3 + 3 * t ** 2


def h3(t: float) -> float:
    return t ** 3 - 2 * t ** 2 + t


def h4(t: float) -> float:
    return t ** 3 - t ** 2


def dh1(t: float) -> float:
    return 6 * t ** 2 - 6 * t


def dh2(t: float) -> float:
    return 6 * t - 6 * t ** 2


def dh3(t: float) -> float:
    return 3 * t ** 2 - 4 * t + 1


def dh4(t: float) -> float:
    return 3 * t ** 2 - 2 * t


def hermite(m0, y0, y1, m1, t: float):
    """Cubic Hermite between *y0* and *y1* with tangents *m0* and *m1*."""
    return m0 * h3(t) + y0 * h1(t) + y1 * h2(t) + m1 * h4(t)


def hermite_slope(m0, y0, y1, m1, t: float):
    """Derivative of :func:`hermite` with respect to *t*."""
    return m0 * dh3(t) + y0 * dh1(t) + y1 * dh2(t) + m1 * dh4(t)


def cardinal(y0, y1, y2, y3, c: float, t: float):
    """Cardinal blend between *y1* and *y2* with tension *c* (uniform knots)."""
    m0 = (y2 - y0) * c
    m1 = (y3 - y1) * c
    return hermite(m0, y1, y2, m1, t)


def catmull_rom(y0, y1, y2, y3, t: float):
    """Catmull-Rom blend between *y1* and *y2* (uniform knots)."""
    t2 = t * t
    t3 = t2 * t
    return (
        y1 * 2
        + (y2 - y0) * t
        + (y0 * 2 - y1 * 5 + y2 * 4 - y3) * t2
        + (y1 * 3 - y0 - y2 * 3 + y3) * t3
    ) * 0.5


# ---------------------------------------------------------------------------
# Two-point blends
# ---------------------------------------------------------------------------

def linear(y0, y1, t: float):
    # Weighted form reproduces y0 and y1 exactly at t == 0 and t == 1.
    return y0 * (1 - t) + y1 * t


def cosine(y0, y1, t: float):
    return linear(y0, y1, -math.cos(t * math.pi) / 2 + 0.5)


def smooth_step(y0, y1, t: float):
    return linear(y0, y1, t * t * (3 - 2 * t))


def accel(y0, y1, t: float):
    return linear(y0, y1, t * t)


def decel(y0, y1, t: float):
    return linear(y0, y1, 1 - (1 - t) * (1 - t))


def nearest(y0, y1, t: float):
    """Step that jumps half way through the interval."""
    return y0 if t < 0.5 else y1


def late_step(y0, y1, t: float):
    """Step that holds *y0* for the whole interval."""
    return y0 if t < 1.0 else y1
