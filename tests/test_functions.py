"""Tests for celtic_knots.interp.functions."""

import math

import pytest

from celtic_knots.interp import functions as fn


class TestWrap:
    def test_inside_range_unchanged(self):
        assert fn.wrap(0.3, 0.0, 1.0) == pytest.approx(0.3)

    def test_end_maps_to_start(self):
        assert fn.wrap(1.0, 0.0, 1.0) == 0.0

    def test_below_range(self):
        assert fn.wrap(-0.25, 0.0, 1.0) == pytest.approx(0.75)

    def test_several_periods_above(self):
        assert fn.wrap(7.25, 0.0, 2.0) == pytest.approx(1.25)

    def test_offset_range(self):
        assert fn.wrap(2.5, 1.0, 2.0) == pytest.approx(1.5)

    def test_tiny_negative_stays_half_open(self):
        d = fn.wrap(-1e-17, 0.0, 1.0)
        assert 0.0 <= d < 1.0


class TestImod:
    def test_negative_index(self):
        assert fn.imod(-1, 5) == 4

    def test_positive_index(self):
        assert fn.imod(7, 5) == 2


class TestHermiteBasis:
    @pytest.mark.parametrize("t", [0.0, 0.2, 0.5, 0.9, 1.0])
    def test_position_weights_sum_to_one(self, t):
        assert fn.h1(t) + fn.h2(t) == pytest.approx(1.0)

    def test_endpoints(self):
        assert fn.hermite(5.0, 1.0, 3.0, -2.0, 0.0) == 1.0
        assert fn.hermite(5.0, 1.0, 3.0, -2.0, 1.0) == pytest.approx(3.0)

    def test_slope_at_ends_is_tangent(self):
        assert fn.hermite_slope(5.0, 1.0, 3.0, -2.0, 0.0) == pytest.approx(5.0)
        assert fn.hermite_slope(5.0, 1.0, 3.0, -2.0, 1.0) == pytest.approx(-2.0)


class TestFourPointBlends:
    @pytest.mark.parametrize("t", [0.0, 0.25, 0.5, 0.75])
    def test_catmull_rom_is_half_tension_cardinal(self, t):
        ys = (0.0, 1.0, 4.0, 2.0)
        assert fn.catmull_rom(*ys, t) == pytest.approx(fn.cardinal(*ys, 0.5, t))

    def test_cardinal_passes_through_inner_points(self):
        assert fn.cardinal(0.0, 1.0, 4.0, 2.0, 0.3, 0.0) == pytest.approx(1.0)
        assert fn.cardinal(0.0, 1.0, 4.0, 2.0, 0.3, 1.0) == pytest.approx(4.0)


class TestTwoPointBlends:
    def test_linear_exact_at_ends(self):
        assert fn.linear(0.1, 0.3, 0.0) == 0.1
        assert fn.linear(0.1, 0.3, 1.0) == 0.3

    def test_cosine_midpoint(self):
        assert fn.cosine(2.0, 4.0, 0.5) == pytest.approx(3.0)

    def test_cosine_quarter_is_eased(self):
        assert fn.cosine(0.0, 1.0, 0.25) == pytest.approx(0.5 - math.cos(math.pi / 4) / 2)

    def test_smooth_step_midpoint(self):
        assert fn.smooth_step(0.0, 1.0, 0.5) == pytest.approx(0.5)

    def test_accel_and_decel(self):
        assert fn.accel(0.0, 1.0, 0.5) == pytest.approx(0.25)
        assert fn.decel(0.0, 1.0, 0.5) == pytest.approx(0.75)

    def test_nearest_jumps_half_way(self):
        assert fn.nearest("a", "b", 0.49) == "a"
        assert fn.nearest("a", "b", 0.5) == "b"

    def test_late_step_holds_whole_interval(self):
        assert fn.late_step("a", "b", 0.999) == "a"
        assert fn.late_step("a", "b", 1.0) == "b"
