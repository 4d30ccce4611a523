"""Thread tracing and over/under assignment for a stroke graph.

Each pass starts at an unused node and walks from stroke midpoint to stroke
midpoint, consuming the entry and exit node of every stroke it traverses,
until no legal continuation is left.  The walk produces one closed ribbon
("thread").  Passes repeat until every node has been consumed.

Over/under alternation
----------------------
The over flag toggles at every CROSS sample and never at BOUNCE or GLANCE.
When a ribbon goes *under* at a crossing whose perpendicular ribbon has not
been drawn yet, both directions of that perpendicular ribbon are put in a
``pending`` set.  Pending nodes are always started before fresh ones and
begin with the flag set to *over*, so the second ribbon through every
crossing comes out on top.
"""

from __future__ import annotations

import math

from tqdm import tqdm

from celtic_knots.interp.splines import Hermite, Step
from celtic_knots.knot.graph import (
    Direction,
    Node,
    NodeKey,
    StrokeGraph,
    cross_dir,
    exit_dir,
    glance_dir,
)
from celtic_knots.knot.models import Art, Stroke, StrokeType, ThreadTrace, Vec2

_ROT = math.atan(1.0)   # 45°

# Rotation applied to the stroke normal to get the tangent at a crossing,
# keyed by the exit direction.
_CROSS_TURN = {
    Direction.F_LEFT: _ROT,
    Direction.B_LEFT: 3 * _ROT,
    Direction.B_RIGHT: -3 * _ROT,
    Direction.F_RIGHT: -_ROT,
}

# Stretch of the crossing tangent relative to the normal length.
_CROSS_TANGENT_SCALE = 1.3
# Sideways offset of glance/bounce samples, as a fraction of the stroke.
_TURN_OFFSET = 0.25
# Tangent magnitude at glance/bounce samples, as a fraction of the stroke.
_TURN_TANGENT = 0.3


def _consume(graph: StrokeGraph, pending: set[NodeKey], node: Node) -> None:
    pending.discard(node.key)
    if graph.unused.pop(node.key, None) is None:
        raise RuntimeError(
            f"Thread tracer visited node {node.mid} {node.dir.name} twice."
        )


def _sample(node: Node) -> tuple[Vec2, Vec2]:
    """Position and tangent of the ribbon leaving *node*."""
    front = node.dir.is_front
    left = node.dir.is_left

    if node.type is StrokeType.CROSS:
        t = node.normal.angle() + _CROSS_TURN[node.dir]
        size = node.normal.length() * _CROSS_TANGENT_SCALE
        return node.mid, Vec2(math.cos(t), math.sin(t)) * size

    axis = node.left - node.right
    if node.type is StrokeType.GLANCE:
        offset = node.normal * (_TURN_OFFSET if front else -_TURN_OFFSET)
        tangent = axis * (_TURN_TANGENT if left else -_TURN_TANGENT)
    else:
        offset = axis * (_TURN_OFFSET if left else -_TURN_OFFSET)
        tangent = node.normal * (_TURN_TANGENT if front else -_TURN_TANGENT)
    return node.mid + offset, tangent


def _next_node(graph: StrokeGraph, node: Node, junction: Vec2) -> Node | None:
    """Unused node the ribbon enters after leaving *node* towards *junction*.

    Returns None when there is no legal continuation, which ends the pass.
    """
    clockwise = node.dir in (Direction.F_LEFT, Direction.B_RIGHT)
    mid = graph.junctions[junction].find_next(node.mid, clockwise)

    # Entry from the right is tried first.
    wanted = Direction.F_RIGHT if clockwise else Direction.B_RIGHT
    found = graph.unused.get((mid, wanted))
    if found is None:
        return graph.unused.get((mid, cross_dir(wanted)))

    if found.right != junction:
        return graph.unused.get((mid, cross_dir(found.dir)))
    return found


def _trace_pass(
    graph: StrokeGraph,
    pending: set[NodeKey],
) -> ThreadTrace:
    """Walk one closed ribbon starting from the smallest pending/unused node."""
    positions: list[Vec2] = []
    tangents: list[Vec2] = []
    over: list[bool] = []
    types: list[StrokeType] = []

    if pending:
        cur = graph.unused[min(pending)]
        up = True
    else:
        cur = graph.unused[min(graph.unused)]
        up = False

    while True:
        over.append(up)

        if not up and cur.type is StrokeType.CROSS:
            above = cur.turned(glance_dir(cur.dir))
            if above.key in graph.unused:
                pending.add(above.key)
                opposite = above.turned(cross_dir(above.dir))
                if opposite.key not in graph.unused:
                    raise RuntimeError(
                        f"Crossing at {cur.mid} is half consumed."
                    )
                pending.add(opposite.key)

        _consume(graph, pending, cur)
        junction = cur.left if cur.dir.is_left else cur.right

        cur = cur.turned(exit_dir(cur.type, cur.dir))
        _consume(graph, pending, cur)

        if cur.type is StrokeType.CROSS:
            up = not up

        position, tangent = _sample(cur)
        positions.append(position)
        tangents.append(tangent)
        types.append(cur.type)

        # Bounces return to the junction they came from.
        if cur.type is not StrokeType.BOUNCE:
            junction = cur.left if junction == cur.right else cur.right

        nxt = _next_node(graph, cur, junction)
        if nxt is None:
            break
        cur = nxt

    return ThreadTrace(positions, tangents, over, types)


def _close(trace: ThreadTrace) -> tuple[Hermite, Step]:
    """Build the looping thread curve and over/under curve for *trace*."""
    frames = len(trace)
    xs = [i / frames for i in range(frames)] + [1.0]
    positions = trace.positions + trace.positions[:1]
    tangents = trace.tangents + trace.tangents[:1]
    zs = [1.0 if o else 0.0 for o in trace.over]
    zs.append(zs[0])
    return Hermite(xs, positions, tangents, loop=True), Step(xs, zs, loop=True)


def trace_threads(graph: StrokeGraph, verbose: bool = False) -> list[ThreadTrace]:
    """Consume every node of *graph* and return one trace per ribbon.

    The graph is emptied in the process.  Each pass consumes at least two
    nodes, so a graph of ``k`` strokes needs at most ``2k`` passes.
    """
    pending: set[NodeKey] = set()
    traces: list[ThreadTrace] = []

    total = len(graph.unused)
    with tqdm(total=total, desc="Tracing threads", disable=not verbose,
              unit="node", leave=False) as bar:
        while graph.unused or pending:
            before = len(graph.unused)
            traces.append(_trace_pass(graph, pending))
            bar.update(before - len(graph.unused))

    return traces


def create_art(strokes: list[Stroke], verbose: bool = False) -> Art:
    """Trace every ribbon of a stroke list and wrap them into an :class:`Art`.

    Parameters
    ----------
    strokes:
        Strokes of a planar graph.  Order does not matter.  Every junction
        should have at least two strokes and no stroke may have zero length;
        such input is not rejected and yields odd-looking threads.
    verbose:
        Show a progress bar while tracing.
    """
    graph = StrokeGraph(strokes)
    traces = trace_threads(graph, verbose=verbose)

    threads: list[Hermite] = []
    zs: list[Step] = []
    for trace in traces:
        thread, z = _close(trace)
        threads.append(thread)
        zs.append(z)

    return Art(threads, zs, traces)
