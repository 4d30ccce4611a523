"""Tests for celtic_knots.knot.graph."""

import pytest

from celtic_knots.knot.graph import (
    Direction,
    Junction,
    StrokeGraph,
    bounce_dir,
    cross_dir,
    exit_dir,
    glance_dir,
)
from celtic_knots.knot.models import StrokeType, Vec2


class TestDirectionAlgebra:
    @pytest.mark.parametrize("perm", [bounce_dir, cross_dir, glance_dir])
    def test_involution(self, perm):
        for d in Direction:
            assert perm(perm(d)) == d

    @pytest.mark.parametrize("perm", [bounce_dir, cross_dir, glance_dir])
    def test_no_fixed_points(self, perm):
        for d in Direction:
            assert perm(d) != d

    def test_cross_is_bounce_then_glance(self):
        for d in Direction:
            assert cross_dir(d) == glance_dir(bounce_dir(d))
            assert cross_dir(d) == bounce_dir(glance_dir(d))

    def test_bounce_keeps_side(self):
        for d in Direction:
            assert bounce_dir(d).is_left == d.is_left
            assert bounce_dir(d).is_front != d.is_front

    def test_glance_keeps_half_plane(self):
        for d in Direction:
            assert glance_dir(d).is_front == d.is_front
            assert glance_dir(d).is_left != d.is_left

    def test_exit_dir_dispatch(self):
        d = Direction.F_LEFT
        assert exit_dir(StrokeType.CROSS, d) is Direction.B_RIGHT
        assert exit_dir(StrokeType.BOUNCE, d) is Direction.B_LEFT
        assert exit_dir(StrokeType.GLANCE, d) is Direction.F_RIGHT

    def test_declaration_order(self):
        assert sorted(Direction) == [
            Direction.F_LEFT, Direction.F_RIGHT, Direction.B_LEFT, Direction.B_RIGHT,
        ]


class TestJunction:
    def _star(self):
        # Midpoints east, south, west and north of the origin (y points down).
        j = Junction(Vec2(0.0, 0.0), [
            Vec2(-0.5, 0.0), Vec2(0.0, -0.5), Vec2(0.5, 0.0), Vec2(0.0, 0.5),
        ])
        j.sort()
        return j

    def test_sort_by_angle(self):
        j = self._star()
        assert j.mids == [
            Vec2(0.0, -0.5), Vec2(0.5, 0.0), Vec2(0.0, 0.5), Vec2(-0.5, 0.0),
        ]

    def test_find_next_clockwise(self):
        j = self._star()
        assert j.find_next(Vec2(0.5, 0.0), True) == Vec2(0.0, 0.5)

    def test_find_next_counter_clockwise(self):
        j = self._star()
        assert j.find_next(Vec2(0.5, 0.0), False) == Vec2(0.0, -0.5)

    def test_find_next_wraps(self):
        j = self._star()
        assert j.find_next(Vec2(-0.5, 0.0), True) == Vec2(0.0, -0.5)
        assert j.find_next(Vec2(0.0, -0.5), False) == Vec2(-0.5, 0.0)

    def test_single_stroke_returns_itself(self):
        j = Junction(Vec2(0.0, 0.0), [Vec2(0.5, 0.0)])
        assert j.find_next(Vec2(0.5, 0.0), True) == Vec2(0.5, 0.0)

    def test_absent_midpoint_returned_unchanged(self):
        j = self._star()
        assert j.find_next(Vec2(9.0, 9.0), True) == Vec2(9.0, 9.0)


class TestStrokeGraph:
    def test_four_nodes_per_stroke(self, square):
        g = StrokeGraph(square)
        assert g.stroke_count == 4
        assert len(g.unused) == 16
        for stroke in square:
            for d in Direction:
                node = g.unused[(stroke.mid(), d)]
                assert node.type is stroke.type
                assert node.left == stroke.a
                assert node.right == stroke.b

    def test_junctions_of_square(self, square):
        g = StrokeGraph(square)
        assert len(g.junctions) == 4
        for junction in g.junctions.values():
            assert len(junction.mids) == 2

    def test_normal_is_perpendicular(self, square):
        g = StrokeGraph(square)
        node = g.unused[(Vec2(0.5, 0.0), Direction.F_LEFT)]
        assert node.normal == Vec2(-0.0, 1.0)

    def test_turned_keeps_geometry(self, square):
        g = StrokeGraph(square)
        node = g.unused[(Vec2(0.5, 0.0), Direction.F_LEFT)]
        other = node.turned(Direction.B_RIGHT)
        assert other.key == (Vec2(0.5, 0.0), Direction.B_RIGHT)
        assert other.normal == node.normal
        assert other.left == node.left

    def test_empty(self):
        g = StrokeGraph([])
        assert g.unused == {}
        assert g.junctions == {}
