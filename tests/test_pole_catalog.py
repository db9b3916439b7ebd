"""
Pole and cable catalog tests.
"""

import pytest
from pole_catalog import CABLE_TYPES, get_cable_spec, get_pole_burial_data, list_cable_types


class TestCableCatalog:

    def test_lookup(self):
        triplex = get_cable_spec("triplex")
        assert triplex.tension == 1800.0
        assert triplex.diameter == 1.0

    def test_unknown_key_falls_back_to_first(self):
        assert get_cable_spec("mystery") is CABLE_TYPES[0]
        assert get_cable_spec(None).key == "adss"

    def test_list_records(self):
        records = list_cable_types()
        assert [r["key"] for r in records] == ["adss", "coax", "copper", "triplex", "communication"]


class TestPoleBurial:

    @pytest.mark.parametrize("height,buried,above,recommended", [
        (30, 5.0, 25.0, "Class 6 typical"),
        (35, 5.5, 29.5, "Class 4-5 typical"),
        (40, 6.0, 34.0, "Class 3-4 typical"),
        (45, 6.5, 38.5, "Class 2-3 typical"),
        (55, 7.5, 47.5, "Class 1-2 typical"),
    ])
    def test_burial_rule(self, height, buried, above, recommended):
        pole = get_pole_burial_data(height)
        assert pole.buried == pytest.approx(buried)
        assert pole.above_ground == pytest.approx(above)
        assert pole.recommended_class == recommended
        assert pole.class_info == recommended

    def test_caller_class_kept(self):
        pole = get_pole_burial_data(40, "Class 2")
        assert pole.class_info == "Class 2"
        assert pole.recommended_class == "Class 3-4 typical"

    def test_minimum_burial(self):
        pole = get_pole_burial_data(10)
        assert pole.buried == 5.0
        assert pole.above_ground == 5.0

    def test_garbage_height(self):
        pole = get_pole_burial_data("abc")
        assert pole.height == 0.0
        assert pole.above_ground == 0.0


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
