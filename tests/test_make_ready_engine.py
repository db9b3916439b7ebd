"""
Make-Ready Impact Analyzer tests.
"""

import pytest
from cost_engine import MAKE_READY_RATE_PER_INCH, make_ready_cost
from data_models import ExistingLine
from make_ready_engine import (
    MAKE_READY_REQUIREMENTS,
    analyze_existing_lines,
    analyze_make_ready_impact,
    line_kind,
    recommend_pole_replacement,
    resolved_line_height,
)


class TestPairwiseHelpers:
    """analyze_make_ready_impact and recommend_pole_replacement."""

    def test_make_ready_required(self):
        impact = analyze_make_ready_impact(25, 24.5, 1.0)
        assert impact["make_ready_required"]
        assert impact["adjustment_needed"] == pytest.approx(0.5)
        assert impact["recommended_height"] == pytest.approx(24.0)

    def test_enough_separation(self):
        impact = analyze_make_ready_impact(20, 25, 1.0)
        assert not impact["make_ready_required"]
        assert impact["adjustment_needed"] == 0.0
        assert impact["recommended_height"] == 25.0

    @pytest.mark.parametrize("args", [("abc", 25, 1), (20, None, 1), (20, 25, float("inf"))])
    def test_non_finite_returns_none(self, args):
        assert analyze_make_ready_impact(*args) is None

    def test_pole_replacement(self):
        assert recommend_pole_replacement(30, 29) == {"replace": True, "suggested_height": 33.0}
        assert recommend_pole_replacement(40, 20) == {"replace": False, "suggested_height": 40.0}


class TestLineHelpers:
    """Line classification and resolved height."""

    def test_line_kind(self):
        assert line_kind("Service Drop") == "drop"
        assert line_kind("neutral") == "power"
        assert line_kind("secondary") == "power"
        assert line_kind("communication") == "other"

    def test_requirements_table(self):
        assert MAKE_READY_REQUIREMENTS["drop"] == (6.0, 4.0)
        assert MAKE_READY_REQUIREMENTS["power"][1] == 15.0
        assert MAKE_READY_REQUIREMENTS["other"] == (12.0, 9.0)

    def test_resolved_height_prefers_make_ready(self):
        line = ExistingLine(type="communication", height="25ft", make_ready=True, make_ready_height="24ft 6in")
        assert resolved_line_height(line) == 24.5

    def test_resolved_height_ignores_unflagged_make_ready(self):
        line = ExistingLine(type="communication", height="25ft", make_ready=False, make_ready_height="24ft")
        assert resolved_line_height(line) == 25.0

    def test_make_ready_cost(self):
        assert make_ready_cost(25.0, 24.5) == 6 * MAKE_READY_RATE_PER_INCH


class TestAnalyzeExistingLines:
    """Per-line checks and make-ready total."""

    def setup_method(self):
        self.lines = [
            ExistingLine(type="communication", height="25ft", company_name="Comcast",
                         make_ready=True, make_ready_height="24ft 6in"),
            ExistingLine(type="drop", height="25ft 9.6in"),
            ExistingLine(type="neutral", height="27ft"),
            ExistingLine(type="", height="20ft"),
            ExistingLine(type="communication", height="garbage"),
        ]

    def test_total_and_records(self):
        outcome, records, total = analyze_existing_lines(self.lines, 26.0, 44)
        assert total == 75.0
        assert len(records) == 3, "Untyped and unparseable lines are skipped"
        assert records[0]["make_ready_cost"] == 75.0
        assert records[0]["new_height_ft"] == 24.5

    def test_pole_gap_warnings(self):
        outcome, _, _ = analyze_existing_lines(self.lines, 26.0, 44)
        assert any(w.startswith("Pole clearance to drop") for w in outcome.warnings)
        assert any(w.startswith("Pole clearance to neutral") for w in outcome.warnings)
        assert not any("communication" in w for w in outcome.warnings)

    def test_midspan_checks_only_with_midspan(self):
        outcome, records, _ = analyze_existing_lines(self.lines, 26.0, 44)
        assert all(r["midspan_gap_in"] is None for r in records)
        assert not any(w.startswith("Midspan") for w in outcome.warnings)

        outcome, records, _ = analyze_existing_lines(self.lines, 26.0, 44, midspan_ft=24.0, sag_ft=0.0)
        assert any(w.startswith("Midspan clearance to communication") for w in outcome.warnings)

    def test_line_move_suggestion(self):
        lines = [ExistingLine(type="communication", height="25ft 6in")]
        outcome, _, _ = analyze_existing_lines(lines, 26.0, 40)
        assert any("restore 12" in n for n in outcome.notes)

    def test_no_lines(self):
        outcome, records, total = analyze_existing_lines([], 26.0, 40)
        assert (outcome.warnings, records, total) == ([], [], 0.0)


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
