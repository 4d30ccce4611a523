"""Stroke graph: junctions, directional nodes and the direction algebra.

A ribbon passes through the midpoint of every stroke twice (once for each of
the two ribbons that meet there), so each stroke carries four directional
*nodes*.  A direction names the side of the stroke the ribbon enters from:

  front / back  : which half-plane of the stroke normal the ribbon is in
  left / right  : which end junction (``a`` = left, ``b`` = right) it came from

Traversing a stroke pairs an entry node with an exit node; which exit depends
on the stroke type and is given by the three permutations below.  Each one is
an involution, so the four nodes of a stroke always split into two pairs.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from enum import IntEnum

from celtic_knots.knot.models import Stroke, StrokeType, Vec2


class Direction(IntEnum):
    # Declaration order is the tie-break order of node selection.
    F_LEFT = 0
    F_RIGHT = 1
    B_LEFT = 2
    B_RIGHT = 3

    @property
    def is_front(self) -> bool:
        return self in (Direction.F_LEFT, Direction.F_RIGHT)

    @property
    def is_left(self) -> bool:
        return self in (Direction.F_LEFT, Direction.B_LEFT)


_BOUNCE = {
    Direction.F_LEFT: Direction.B_LEFT,
    Direction.F_RIGHT: Direction.B_RIGHT,
    Direction.B_RIGHT: Direction.F_RIGHT,
    Direction.B_LEFT: Direction.F_LEFT,
}

_CROSS = {
    Direction.F_LEFT: Direction.B_RIGHT,
    Direction.F_RIGHT: Direction.B_LEFT,
    Direction.B_RIGHT: Direction.F_LEFT,
    Direction.B_LEFT: Direction.F_RIGHT,
}

_GLANCE = {
    Direction.F_LEFT: Direction.F_RIGHT,
    Direction.F_RIGHT: Direction.F_LEFT,
    Direction.B_RIGHT: Direction.B_LEFT,
    Direction.B_LEFT: Direction.B_RIGHT,
}

_EXIT = {
    StrokeType.BOUNCE: _BOUNCE,
    StrokeType.CROSS: _CROSS,
    StrokeType.GLANCE: _GLANCE,
}


def bounce_dir(d: Direction) -> Direction:
    """Reflect front↔back, keep left/right."""
    return _BOUNCE[d]


def cross_dir(d: Direction) -> Direction:
    """Reflect front↔back and swap left/right."""
    return _CROSS[d]


def glance_dir(d: Direction) -> Direction:
    """Swap left/right, keep front/back."""
    return _GLANCE[d]


def exit_dir(stroke_type: StrokeType, d: Direction) -> Direction:
    """Exit direction of a ribbon entering a *stroke_type* node from *d*."""
    return _EXIT[stroke_type][d]


NodeKey = tuple[Vec2, Direction]


@dataclass(frozen=True)
class Node:
    """One directional state at a stroke midpoint.

    ``left`` and ``right`` are the positions of the stroke's ``a`` and ``b``
    junctions; look them up in :attr:`StrokeGraph.junctions`.
    """
    mid: Vec2
    dir: Direction
    type: StrokeType
    normal: Vec2
    left: Vec2
    right: Vec2

    @property
    def key(self) -> NodeKey:
        return (self.mid, self.dir)

    def turned(self, d: Direction) -> Node:
        """The node at the same midpoint with direction *d*."""
        return replace(self, dir=d)


@dataclass
class Junction:
    """A junction position and the midpoints of its strokes, sorted by angle."""
    position: Vec2
    mids: list[Vec2] = field(default_factory=list)

    def sort(self) -> None:
        self.mids.sort(key=lambda m: (m - self.position).angle())

    def find_next(self, mid: Vec2, clockwise: bool) -> Vec2:
        """Return the stroke midpoint next to *mid* around this junction.

        ``clockwise`` walks towards increasing angle (clockwise on a y-down
        screen).  A midpoint not at this junction is returned unchanged.
        """
        try:
            i = self.mids.index(mid)
        except ValueError:
            return mid
        step = 1 if clockwise else -1
        return self.mids[(i + step) % len(self.mids)]


class StrokeGraph:
    """Junction index and unused-node table for one stroke list.

    Degenerate input (zero-length strokes, junctions with a single stroke,
    duplicate strokes) is not rejected here; see
    :func:`celtic_knots.grid.square.validate_strokes`.
    """

    def __init__(self, strokes: list[Stroke]):
        self.junctions: dict[Vec2, Junction] = {}
        self.unused: dict[NodeKey, Node] = {}
        self.stroke_count = 0

        for stroke in strokes:
            mid = stroke.mid()
            normal = (stroke.b - stroke.a).perpendicular()

            for end in (stroke.a, stroke.b):
                junction = self.junctions.get(end)
                if junction is None:
                    junction = self.junctions[end] = Junction(end)
                junction.mids.append(mid)

            for d in Direction:
                node = Node(
                    mid=mid, dir=d, type=stroke.type, normal=normal,
                    left=stroke.a, right=stroke.b,
                )
                self.unused[node.key] = node
            self.stroke_count += 1

        for junction in self.junctions.values():
            junction.sort()

    def __repr__(self) -> str:
        return (
            f"StrokeGraph(strokes={self.stroke_count}, "
            f"junctions={len(self.junctions)}, unused={len(self.unused)})"
        )
