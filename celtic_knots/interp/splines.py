"""Curves that interpolate an ordered sequence of knots.

Every curve is built from strictly increasing parameter values ``xs`` and a
parallel sequence of sample values ``ys``.  Sample values can be anything
that supports ``+``, ``-`` and multiplication by a float.

With ``loop=True`` a parameter outside ``[xs[0], xs[-1])`` wraps around; the
caller is responsible for making ``ys[0] == ys[-1]`` so the seam is
invisible.  With ``loop=False`` the first and last intervals are extended
and their basis is used to extrapolate.

Lookup of the interval containing ``x`` starts from the interval found by
the previous call and walks outward, so sweeping ``x`` monotonically (the
usual drawing pattern) costs O(1) per evaluation.
"""

from __future__ import annotations

import math
from abc import ABC, abstractmethod
from collections.abc import Callable, Iterable, Sequence

import numpy as np

from celtic_knots.interp import functions as fn


class Spline(ABC):
    """Abstract base for all interpolating curves."""

    def __init__(self, xs: Sequence[float], ys: Sequence, loop: bool = False):
        xs = tuple(float(x) for x in xs)
        ys = tuple(ys)
        if len(xs) < 2:
            raise ValueError(f"A spline needs at least 2 knots; got {len(xs)}.")
        if len(ys) != len(xs):
            raise ValueError(
                f"Got {len(xs)} knot positions but {len(ys)} sample values."
            )
        for i in range(1, len(xs)):
            if not xs[i] > xs[i - 1]:
                raise ValueError(
                    f"Knot positions must be strictly increasing; "
                    f"xs[{i - 1}]={xs[i - 1]!r} >= xs[{i}]={xs[i]!r}."
                )

        self._xs = xs
        self._ys = ys
        self._loop = bool(loop)
        self._last_index = 0

    def __call__(self, x: float):
        return self.y(x)

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(knots={self.knot_count}, "
            f"range=[{self._xs[0]}, {self._xs[-1]}], loop={self._loop})"
        )

    @abstractmethod
    def y(self, x: float):
        """Return the curve value at parameter *x*."""
        ...

    def sample(self, ts: Iterable[float]) -> list:
        """Evaluate the curve at every parameter in *ts*, in order."""
        return [self.y(t) for t in ts]

    @property
    def knot_count(self) -> int:
        return len(self._xs)

    @property
    def loop(self) -> bool:
        return self._loop

    @property
    def xs(self) -> np.ndarray:
        return np.array(self._xs)

    @property
    def ys(self) -> tuple:
        return self._ys

    # ------------------------------------------------------------------
    # Interval lookup
    # ------------------------------------------------------------------

    def _get_x(self, index: int) -> float:
        return self._xs[fn.imod(index, len(self._xs))]

    def _get_y(self, index: int):
        return self._ys[fn.imod(index, len(self._ys))]

    def _in_range(self, x: float) -> float:
        if self._loop:
            return fn.wrap(x, self._xs[0], self._xs[-1])
        return x

    def _index(self, x: float) -> int:
        """Return the index of the knot that starts the interval holding *x*."""
        if not math.isfinite(x):
            raise ValueError(f"Cannot evaluate a spline at {x!r}.")

        n = len(self._xs)
        x = self._in_range(x)
        i = self._last_index

        while True:
            i = fn.imod(i, n)
            current = self._get_x(i)
            nxt = self._get_x(i + 1)

            if current <= x:
                if nxt > x:
                    break
                if i == n - 2 and not self._loop:
                    break
                i += 1
            else:
                if i == 0 and not self._loop:
                    break
                i -= 1

        self._last_index = i
        return i

    def _sub_range(self, index: int, x: float) -> float:
        """Normalised position of *x* inside interval *index*."""
        x = self._in_range(x)
        start = self._get_x(index)
        end = self._get_x(index + 1)
        return (x - start) / (end - start)

    def _locate(self, x: float) -> tuple[int, float]:
        x = float(x)
        i = self._index(x)
        return i, self._sub_range(i, x)


class LocalSpline(Spline):
    """A curve that only looks at the two samples around ``x``.

    Subclasses set :attr:`blend` to a function ``f(y0, y1, t)`` from
    :mod:`celtic_knots.interp.functions`.
    """

    blend: Callable = staticmethod(fn.linear)

    def y(self, x: float):
        i, t = self._locate(x)
        return self.blend(self._get_y(i), self._get_y(i + 1), t)


class Linear(LocalSpline):
    blend = staticmethod(fn.linear)


class Cosine(LocalSpline):
    blend = staticmethod(fn.cosine)


class Step(LocalSpline):
    """Nearest-neighbour steps; the value jumps half way between knots."""
    blend = staticmethod(fn.nearest)


class LateStep(LocalSpline):
    """Holds each sample until the next knot is reached."""
    blend = staticmethod(fn.late_step)


class SmoothStep(LocalSpline):
    blend = staticmethod(fn.smooth_step)


class Accel(LocalSpline):
    blend = staticmethod(fn.accel)


class Decel(LocalSpline):
    blend = staticmethod(fn.decel)


class Cardinal(Spline):
    """Cardinal spline over possibly non-uniform knots.

    Tangents at each knot are ``tension * (y[i+1] - y[i-1])``, rescaled by
    the ratio of neighbouring interval lengths so that uneven knot spacing
    does not kink the curve.  A tension of 0.5 gives Catmull-Rom.

    Without looping, the end knots reuse the adjacent interior sample as
    their missing neighbour, giving zero slope at ``xs[0]`` and ``xs[-1]``.
    """

    def __init__(self, xs, ys, loop: bool = False, tension: float = 0.5):
        super().__init__(xs, ys, loop)
        self.tension = float(tension)

    def _tangents(self, i: int):
        n = self.knot_count
        loop = self._loop

        if i == 0:
            y0 = self._get_y(i - 2) if loop else self._get_y(i + 1)
        else:
            y0 = self._get_y(i - 1)
        y1 = self._get_y(i)
        y2 = self._get_y(i + 1)
        if i + 2 == n:
            y3 = self._get_y(i + 3) if loop else self._get_y(i)
        else:
            y3 = self._get_y(i + 2)

        x1 = self._get_x(i)
        x2 = self._get_x(i + 1)
        if i == 0:
            dx1 = self._get_x(n - 1) - self._get_x(n - 2) if loop else 0.0
        else:
            dx1 = x1 - self._get_x(i - 1)
        if i + 2 == n:
            dx2 = self._get_x(1) - self._get_x(0) if loop else 0.0
        else:
            dx2 = self._get_x(i + 2) - x2
        dx = x2 - x1

        # Both scales are 1 for uniform spacing.
        s1 = (dx / (dx1 + dx)) * 2
        s2 = (dx / (dx + dx2)) * 2

        m1 = (y2 - y0) * (s1 * self.tension)
        m2 = (y3 - y1) * (s2 * self.tension)
        return y1, y2, m1, m2

    def y(self, x: float):
        i, t = self._locate(x)
        y1, y2, m1, m2 = self._tangents(i)
        return fn.hermite(m1, y1, y2, m2, t)

    def slope(self, x: float):
        """Derivative at *x* with respect to the interval parameter."""
        i, t = self._locate(x)
        y1, y2, m1, m2 = self._tangents(i)
        return fn.hermite_slope(m1, y1, y2, m2, t)


class CatmullRom(Spline):
    """Catmull-Rom spline for uniformly spaced knots.

    For non-uniform knots use :class:`Cardinal` with ``tension=0.5``.
    """

    def y(self, x: float):
        i, t = self._locate(x)
        n = self.knot_count
        if i == 0:
            prev = self._get_y(i - 2) if self._loop else self._get_y(i + 1)
        else:
            prev = self._get_y(i - 1)
        if i == n - 2:
            nxt = self._get_y(i + 3) if self._loop else self._get_y(i)
        else:
            nxt = self._get_y(i + 2)
        return fn.catmull_rom(prev, self._get_y(i), self._get_y(i + 1), nxt, t)


class Hermite(Spline):
    """Cubic Hermite spline with one caller-supplied tangent per knot."""

    def __init__(self, xs, ys, ms, loop: bool = False):
        super().__init__(xs, ys, loop)
        ms = tuple(ms)
        if len(ms) != len(self._ys):
            raise ValueError(
                f"Got {len(self._ys)} sample values but {len(ms)} tangents."
            )
        self._ms = ms

    @property
    def ms(self) -> tuple:
        return self._ms

    def _get_m(self, index: int):
        return self._ms[fn.imod(index, len(self._ms))]

    def y(self, x: float):
        i, t = self._locate(x)
        return fn.hermite(
            self._get_m(i), self._get_y(i), self._get_y(i + 1), self._get_m(i + 1), t
        )

    def slope(self, x: float):
        """Derivative at *x* with respect to the interval parameter."""
        i, t = self._locate(x)
        return fn.hermite_slope(
            self._get_m(i), self._get_y(i), self._get_y(i + 1), self._get_m(i + 1), t
        )
