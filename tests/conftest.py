"""Shared stroke-list fixtures."""

from __future__ import annotations

import pytest

from celtic_knots.knot.models import Stroke, StrokeType, Vec2


def square_strokes(stroke_type: StrokeType = StrokeType.CROSS) -> list[Stroke]:
    """Unit square; horizontal strokes run left→right, vertical top→bottom."""
    return [
        Stroke(Vec2(0.0, 0.0), Vec2(1.0, 0.0), stroke_type),
        Stroke(Vec2(0.0, 1.0), Vec2(1.0, 1.0), stroke_type),
        Stroke(Vec2(0.0, 0.0), Vec2(0.0, 1.0), stroke_type),
        Stroke(Vec2(1.0, 0.0), Vec2(1.0, 1.0), stroke_type),
    ]


@pytest.fixture
def square():
    return square_strokes()


@pytest.fixture
def bounce_pair():
    """Two collinear BOUNCE strokes sharing the junction at (1, 0)."""
    return [
        Stroke(Vec2(0.0, 0.0), Vec2(1.0, 0.0), StrokeType.BOUNCE),
        Stroke(Vec2(1.0, 0.0), Vec2(2.0, 0.0), StrokeType.BOUNCE),
    ]


@pytest.fixture
def mixed_square():
    """Unit square with one stroke of each non-crossing type."""
    strokes = square_strokes()
    strokes[1] = Stroke(strokes[1].a, strokes[1].b, StrokeType.GLANCE)
    strokes[3] = Stroke(strokes[3].a, strokes[3].b, StrokeType.BOUNCE)
    return strokes
