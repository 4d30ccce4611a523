"""Central data structures for the celtic_knots package."""

from __future__ import annotations

import math
from dataclasses import dataclass
from enum import Enum

import numpy as np

from celtic_knots.interp.splines import Hermite, Step


@dataclass(frozen=True, order=True)
class Vec2:
    """Immutable 2-D point/vector; ordered by x then y so it can key maps."""
    x: float
    y: float

    def __add__(self, other: Vec2) -> Vec2:
        return Vec2(self.x + other.x, self.y + other.y)

    def __sub__(self, other: Vec2) -> Vec2:
        return Vec2(self.x - other.x, self.y - other.y)

    def __mul__(self, k: float) -> Vec2:
        k = float(k)
        return Vec2(self.x * k, self.y * k)

    __rmul__ = __mul__

    def __neg__(self) -> Vec2:
        return Vec2(-self.x, -self.y)

    def angle(self) -> float:
        return math.atan2(self.y, self.x)

    def length(self) -> float:
        return math.hypot(self.x, self.y)

    def perpendicular(self) -> Vec2:
        """Rotate 90° counter-clockwise."""
        return Vec2(-self.y, self.x)

    def to_array(self) -> np.ndarray:
        return np.array([self.x, self.y], dtype=np.float64)


class StrokeType(Enum):
    """What a ribbon does at the midpoint of a stroke."""
    CROSS = "cross"      # pass straight through, swapping over/under
    BOUNCE = "bounce"    # reflect back towards the junction it came from
    GLANCE = "glance"    # turn 90° without crossing


@dataclass(frozen=True)
class Stroke:
    """A segment of the knot graph; both ends are junction positions."""
    a: Vec2
    b: Vec2
    type: StrokeType = StrokeType.CROSS

    def angle(self) -> float:
        return (self.b - self.a).angle()

    def length(self) -> float:
        return (self.b - self.a).length()

    def mid(self) -> Vec2:
        return self.a + (self.b - self.a) * 0.5


@dataclass(frozen=True)
class ThreadTrace:
    """Raw samples of one traced ribbon, in traversal order (not closed)."""
    positions: tuple[Vec2, ...] = ()
    tangents: tuple[Vec2, ...] = ()
    over: tuple[bool, ...] = ()
    types: tuple[StrokeType, ...] = ()

    def __post_init__(self):
        for name in ("positions", "tangents", "over", "types"):
            object.__setattr__(self, name, tuple(getattr(self, name)))
        sizes = {len(self.positions), len(self.tangents), len(self.over), len(self.types)}
        if len(sizes) > 1:
            raise ValueError("ThreadTrace fields must all have the same length.")

    def __len__(self) -> int:
        return len(self.positions)

    @property
    def crossing_count(self) -> int:
        return sum(1 for t in self.types if t is StrokeType.CROSS)


class Art:
    """Every thread of one generated knot plus its over/under curve.

    ``thread(i)`` is a looping Hermite curve of :class:`Vec2` over [0, 1);
    ``over_under(i)`` is a looping step curve on the same parameters that is
    1.0 where the ribbon lies over and 0.0 where it lies under.
    """

    def __init__(
        self,
        threads: list[Hermite],
        zs: list[Step],
        traces: list[ThreadTrace] | None = None,
    ):
        if len(threads) != len(zs):
            raise ValueError(
                f"Got {len(threads)} thread curves but {len(zs)} over/under curves."
            )
        traces = tuple(traces) if traces is not None else ()
        if traces and len(traces) != len(threads):
            raise ValueError(
                f"Got {len(threads)} thread curves but {len(traces)} traces."
            )
        self._threads = tuple(threads)
        self._zs = tuple(zs)
        self._traces = traces

    def __len__(self) -> int:
        return len(self._threads)

    def __repr__(self) -> str:
        return f"Art(threads={len(self._threads)})"

    def thread_count(self) -> int:
        return len(self._threads)

    def _check(self, index: int) -> None:
        if not 0 <= index < len(self._threads):
            raise IndexError(
                f"Thread index {index} out of range for {len(self._threads)} threads."
            )

    def thread(self, index: int) -> Hermite:
        self._check(index)
        return self._threads[index]

    def over_under(self, index: int) -> Step:
        self._check(index)
        return self._zs[index]

    def trace(self, index: int) -> ThreadTrace:
        self._check(index)
        if not self._traces:
            raise IndexError("This Art was built without thread traces.")
        return self._traces[index]

    @property
    def traces(self) -> tuple[ThreadTrace, ...]:
        return self._traces
