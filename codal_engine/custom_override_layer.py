"""
Custom Override Layer.

Ad hoc scalar overrides typed in for a single job. Applied last and
unconditionally: a present, non-zero numeric value replaces the field.
"""

from typing import Any

from codal_engine.base import ClearanceLayer
from data_models import ClearanceTable
from height_units import parse_feet


class CustomOverrideLayer(ClearanceLayer):
    """Custom scalar overrides (min top space, road clearance, comm-to-power)."""

    def __init__(self, min_top_space: Any = None, road_clearance: Any = None, comm_to_power: Any = None):
        super().__init__("custom-overrides")
        self.overrides = {
            'minimum_pole_top_space': min_top_space,
            'road_clearance': road_clearance,
            'power_clearance_distribution': comm_to_power,
        }

    def apply(self, table: ClearanceTable) -> ClearanceTable:
        changes = {}
        for table_field, raw in self.overrides.items():
            value = parse_feet(raw)
            # zero means "not set"
            if value:
                changes[table_field] = float(value)
        return self._with(table, **changes)
