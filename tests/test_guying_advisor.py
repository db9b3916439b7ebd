"""
Guying Advisor tests.

Down-guy heuristic plus line-angle PULL geometry.
"""

import math

import pytest
from guying_advisor import (
    angle_deg_from_pull,
    bisector_bearing_deg,
    calculate_down_guy,
    compute_pull_autofill,
    normalize_bearing_deg,
    normalize_included_angle_deg,
    pull_from_angle_deg,
)
from pole_catalog import get_cable_spec, get_pole_burial_data


class TestDownGuy:
    """Down-guy advisory."""

    def test_long_windy_span_requires_guy(self):
        pole = get_pole_burial_data(45)
        guy = calculate_down_guy(pole.above_ground, 30.0, get_cable_spec("triplex"), 300, 100)
        assert guy.required
        assert guy.tension > 500
        assert guy.angle > 0
        # 350 base + round(tension / 10)
        assert guy.total_cost == 350 + round(guy.tension / 10)

    def test_geometry(self):
        guy = calculate_down_guy(40.0, 30.0, get_cable_spec("adss"), 200, 90)
        assert guy.guy_height == pytest.approx(34.0)
        assert guy.lead_distance == pytest.approx(17.0)
        assert guy.angle == pytest.approx(math.degrees(math.atan(2.0)))

    def test_short_calm_span_no_guy(self):
        pole = get_pole_burial_data(30)
        guy = calculate_down_guy(pole.above_ground, 10.0, get_cable_spec("adss"), 50, 30)
        assert not guy.required
        assert guy.total_cost == 0

    def test_cost_capped(self):
        guy = calculate_down_guy(10.0, 60.0, get_cable_spec("triplex"), 400, 150)
        assert guy.required
        assert guy.total_cost == 350 + 650

    def test_missing_inputs(self):
        assert calculate_down_guy(30.0, 25.0, get_cable_spec("adss"), 0, 90) is None
        assert calculate_down_guy(30.0, 0, get_cable_spec("adss"), 100, 90) is None
        assert calculate_down_guy(30.0, 25.0, None, 100, 90) is None

    def test_pull_direction_passed_through(self):
        guy = calculate_down_guy(30.0, 25.0, get_cable_spec("adss"), 100, 90, 45.0)
        assert guy.pull_direction == 45.0


class TestPullGeometry:
    """Line angle and PULL conversions."""

    def test_normalize_bearing(self):
        assert normalize_bearing_deg(370) == 10
        assert normalize_bearing_deg(-10) == 350
        assert normalize_bearing_deg(720) == 0

    def test_included_angle(self):
        assert normalize_included_angle_deg(0, 0) == 0
        assert normalize_included_angle_deg(0, 60) == 60
        assert normalize_included_angle_deg(30, 210) == 180
        assert normalize_included_angle_deg(350, 10) == 20

    def test_included_angle_range(self):
        for a in range(-450, 451, 57):
            for b in range(-450, 451, 73):
                theta = normalize_included_angle_deg(a, b)
                assert 0 <= theta <= 180, f"{a}, {b} -> {theta}"

    @pytest.mark.parametrize("angle,pull", [(0, 0), (60, 50), (120, 86.6025), (180, 100)])
    def test_forward_and_inverse(self, angle, pull):
        assert pull_from_angle_deg(angle) == pytest.approx(pull, abs=1e-3)
        assert angle_deg_from_pull(pull) == pytest.approx(angle, abs=1e-2)

    def test_alternate_base_span(self):
        assert pull_from_angle_deg(60, 150) == pytest.approx(75)
        assert angle_deg_from_pull(75, 150) == pytest.approx(60)

    def test_inverse_clamped(self):
        assert angle_deg_from_pull(250) == pytest.approx(180)
        assert angle_deg_from_pull(-5) == 0

    def test_autofill(self):
        result = compute_pull_autofill(350, 10)
        assert result["theta_deg"] == 20
        assert result["pull_ft"] == pytest.approx(100 * math.sin(math.radians(10)))

    def test_bisector(self):
        assert bisector_bearing_deg(350, 10) == pytest.approx(0.0)
        assert bisector_bearing_deg(0, 90) == pytest.approx(45.0)


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
