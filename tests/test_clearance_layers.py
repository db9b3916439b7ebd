"""
Clearance Policy Resolver tests.

Each layer must return a NEW table, only raise floors (except the
environment target, which is absolute), and be auditable in order.
"""

import dataclasses

import pytest
from codal_engine import (
    CLEARANCE_PRESETS,
    ENVIRONMENT_TARGET_KEYS,
    CustomOverrideLayer,
    OwnerFloorLayer,
    PresetLayer,
    SubmissionProfileLayer,
    apply_preset_object,
    apply_preset_to_clearances,
    get_env_target,
    get_nesc_clearances,
    resolve_clearances,
)


class TestNescBaseline:
    """Baseline lookup by voltage class and environment."""

    def test_distribution_road(self):
        table = get_nesc_clearances("distribution", "road")
        assert table.ground_clearance == 23.0
        assert table.road_clearance == 25.0
        assert table.minimum_pole_top_space == 2.0
        assert table.comm_to_comm_vertical is None

    def test_ground_clearance_depends_on_road(self):
        assert get_nesc_clearances("transmission", "road").ground_clearance == 28.5
        assert get_nesc_clearances("transmission", "residential").ground_clearance == 23.0
        assert get_nesc_clearances("communication", "field").ground_clearance == 9.5

    def test_communication_has_comm_to_comm_fields(self):
        table = get_nesc_clearances("communication", "road")
        assert table.comm_to_comm_vertical == 1.0
        assert table.comm_to_comm_midspan == 0.5
        assert table.power_clearance_distribution == pytest.approx(40 / 12)

    def test_unknown_voltage_uses_communication(self):
        assert get_nesc_clearances("bogus", "road") == get_nesc_clearances("communication", "road")
        assert get_nesc_clearances(None, "road") == get_nesc_clearances("communication", "road")

    def test_tables_are_frozen(self):
        table = get_nesc_clearances("distribution", "road")
        with pytest.raises(dataclasses.FrozenInstanceError):
            table.ground_clearance = 1.0


class TestPresetLayer:
    """Named presets override their three fields."""

    def setup_method(self):
        self.baseline = get_nesc_clearances("distribution", "road")

    def test_first_energy_preset(self):
        table = apply_preset_to_clearances(self.baseline, "firstEnergy")
        assert table.minimum_pole_top_space == 2.0
        assert table.road_clearance == 18.0
        assert table.power_clearance_distribution == pytest.approx(40 / 12)
        assert self.baseline.road_clearance == 25.0, "Baseline must not be mutated"

    def test_pse_comm_to_power(self):
        table = apply_preset_to_clearances(self.baseline, "pse")
        assert table.power_clearance_distribution == pytest.approx(42 / 12)

    def test_unknown_preset_returns_same_table(self):
        assert apply_preset_to_clearances(self.baseline, "nope") is self.baseline
        assert apply_preset_to_clearances(self.baseline, None) is self.baseline

    def test_preset_object_ignores_non_numeric(self):
        table = apply_preset_object(self.baseline, {"roadClearance": "tall", "minTopSpace": 3})
        assert table.road_clearance == 25.0
        assert table.minimum_pole_top_space == 3.0

    def test_all_presets_have_required_fields(self):
        for key, preset in CLEARANCE_PRESETS.items():
            for field in ("minTopSpace", "roadClearance", "commToPower"):
                assert field in preset, f"Preset {key} missing {field}"


class TestOwnerFloorLayer:
    """FirstEnergy floors only raise values."""

    def test_raises_distribution_floors(self):
        baseline = get_nesc_clearances("distribution", "road")
        table = OwnerFloorLayer(True, "road").apply(baseline)
        assert table.power_clearance_distribution == pytest.approx(44 / 12)
        assert table.minimum_pole_top_space == 2.0
        assert table.ground_clearance == 23.0, "Floor of 18 ft must not lower 23 ft"

    def test_raises_road_ground_clearance(self):
        baseline = get_nesc_clearances("communication", "road")
        table = OwnerFloorLayer(True, "road").apply(baseline)
        assert table.ground_clearance == 18.0

    def test_non_road_ground_clearance_unchanged(self):
        baseline = get_nesc_clearances("communication", "field")
        table = OwnerFloorLayer(True, "field").apply(baseline)
        assert table.ground_clearance == 9.5

    def test_never_lowers(self):
        baseline = dataclasses.replace(
            get_nesc_clearances("distribution", "road"), power_clearance_distribution=50 / 12
        )
        table = OwnerFloorLayer(True, "road").apply(baseline)
        assert table.power_clearance_distribution == pytest.approx(50 / 12)

    def test_generic_owner_is_noop(self):
        baseline = get_nesc_clearances("distribution", "road")
        assert OwnerFloorLayer(False, "road").apply(baseline) is baseline


class TestSubmissionProfileLayer:
    """Submission profile targets and raises."""

    def test_fourteen_environment_tags(self):
        assert len(ENVIRONMENT_TARGET_KEYS) == 14
        assert ENVIRONMENT_TARGET_KEYS["railroad"] == "envRailroadFt"

    def test_environment_target_is_absolute(self):
        baseline = get_nesc_clearances("distribution", "residential")
        table = SubmissionProfileLayer({"envResidentialFt": "16ft"}, "residential").apply(baseline)
        assert table.ground_clearance == 16.0, "Environment target may lower ground clearance"

    def test_target_for_other_environment_ignored(self):
        baseline = get_nesc_clearances("distribution", "road")
        table = SubmissionProfileLayer({"envRailroadFt": 27}, "road").apply(baseline)
        assert table.ground_clearance == 23.0

    def test_floors_only_raise(self):
        baseline = OwnerFloorLayer(True, "road").apply(get_nesc_clearances("distribution", "road"))
        table = SubmissionProfileLayer({"commToPower": 3.0, "minTopSpace": "3ft"}, "road").apply(baseline)
        assert table.power_clearance_distribution == pytest.approx(44 / 12)
        assert table.minimum_pole_top_space == 3.0

    def test_get_env_target(self):
        assert get_env_target({"envWaterwayFt": "20'"}, "waterway") == 20.0
        assert get_env_target({"envWaterwayFt": "abc"}, "waterway") is None
        assert get_env_target(None, "waterway") is None
        assert get_env_target({"envWaterwayFt": 20}, "unknownTag") is None


class TestCustomOverrideLayer:
    """Custom scalars replace fields unconditionally."""

    def test_replaces_present_values(self):
        baseline = get_nesc_clearances("distribution", "road")
        table = CustomOverrideLayer(min_top_space="3", road_clearance=19.5).apply(baseline)
        assert table.minimum_pole_top_space == 3.0
        assert table.road_clearance == 19.5

    def test_can_lower_values(self):
        baseline = OwnerFloorLayer(True, "road").apply(get_nesc_clearances("distribution", "road"))
        table = CustomOverrideLayer(comm_to_power=3.0).apply(baseline)
        assert table.power_clearance_distribution == 3.0

    def test_zero_and_garbage_ignored(self):
        baseline = get_nesc_clearances("distribution", "road")
        assert CustomOverrideLayer("0", "abc", None).apply(baseline) is baseline


class TestResolveClearances:
    """Pipeline ordering and audit trail."""

    def test_audit_trail_lists_changing_layers(self):
        baseline = get_nesc_clearances("distribution", "road")
        resolved = resolve_clearances(baseline, [
            PresetLayer("firstEnergy"),
            OwnerFloorLayer(False, "road"),
            SubmissionProfileLayer(None, "road"),
            CustomOverrideLayer(min_top_space=5),
        ])
        assert resolved.applied_layers == ("preset:firstEnergy", "custom-overrides")
        assert resolved.table.minimum_pole_top_space == 5.0

    def test_last_write_wins(self):
        baseline = get_nesc_clearances("distribution", "road")
        resolved = resolve_clearances(baseline, [
            PresetLayer("duke"),
            CustomOverrideLayer(road_clearance=20),
        ])
        assert resolved.table.road_clearance == 20.0

    def test_baseline_untouched(self):
        baseline = get_nesc_clearances("distribution", "road")
        snapshot = dataclasses.asdict(baseline)
        resolve_clearances(baseline, [PresetLayer("pse"), OwnerFloorLayer(True, "road")])
        assert dataclasses.asdict(baseline) == snapshot


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
