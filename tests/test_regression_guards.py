"""
Regression Guard Suite.

Tests to prevent breaking core promise:
- compute_analysis never raises past its boundary
- Garbage heights degrade to None / omitted, not exceptions
- Clearance warnings never block a result
- Every result carries the full contract
"""

import pytest
from backend.services.analysis_service import compute_analysis

CONTRACT_KEYS = {"ok", "results", "warnings", "notes", "cost", "errors"}


class TestRegressionGuards:
    """Regression tests to prevent breaking core promises."""

    @pytest.mark.parametrize("payload", [
        None,
        {},
        {"pole_height": "abc", "existing_power_height": "abc"},
        {"pole_height": "40", "existing_power_height": "xyz", "span_distance": "far", "adjacent_pole_height": "??"},
        {"pole_height": 40, "existing_power_height": "30ft", "existing_lines": [{"type": "neutral", "height": "zz"}]},
        {"pole_height": 40, "existing_power_height": "30ft", "wind_speed": "gusty", "ice_thickness_in": "lots"},
        {"pole_height": 40, "existing_power_height": "30ft", "submission_profile": {"envRoadFt": "high"}},
        {"pole_height": 40, "existing_power_height": "30ft", "custom_min_top_space": "abc"},
        {"pole_height": 40, "existing_power_height": "30ft", "pole_latitude": "north"},
        {"pole_height": 40, "existing_power_height": "30ft", "existing_lines": [1, 2]},
        {"pole_height": 40, "existing_power_height": "30ft", "power_reference": "bogus"},
        {"pole_height": 40, "existing_power_voltage": "plasma", "existing_power_height": "30ft"},
    ])
    def test_never_throws(self, payload):
        """REGRESSION GUARD: compute_analysis NEVER raises."""
        result = compute_analysis(payload)
        assert set(result) == CONTRACT_KEYS, "REGRESSION: contract keys missing"
        if not result["ok"]:
            assert result["results"] is None
            assert result["errors"], "REGRESSION: ok=False must explain itself"
        else:
            assert result["errors"] == {}
            assert result["cost"] is not None

    def test_garbage_height_strings_produce_result(self):
        """REGRESSION GUARD: garbage heights degrade instead of failing."""
        result = compute_analysis({"pole_height": "abc", "existing_power_height": "abc"})
        assert result["ok"] is True
        assert result["results"]["pole"]["input_height"] == 0.0

    def test_unexpected_fault_reported_generically(self):
        """REGRESSION GUARD: runtime faults become an 'analysis' error."""
        result = compute_analysis({"pole_height": 40, "existing_power_height": "30ft", "existing_lines": [1, 2]})
        assert result["ok"] is False
        assert "analysis" in result["errors"]

    def test_warnings_never_block(self):
        """REGRESSION GUARD: clearance violations are warnings, not errors."""
        result = compute_analysis({
            "pole_height": 30,
            "existing_power_height": "22ft",
            "span_distance": 400,
            "adjacent_pole_height": 30,
            "has_transformer": True,
            "job_owner": "Penelec",
        })
        assert result["ok"] is True
        assert result["warnings"], "Expected warnings for a long low span"
        assert result["results"]["attach"]["proposed_attach_ft"] is not None

    def test_low_attach_suggests_taller_pole(self):
        """REGRESSION GUARD: attach below ground clearance flags the pole."""
        result = compute_analysis({"pole_height": 30, "existing_power_height": "22ft"})
        assert any("taller pole" in w for w in result["warnings"])


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
