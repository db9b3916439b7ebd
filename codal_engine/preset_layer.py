"""
Named Utility Preset Layer.

Applies a named utility preset (FirstEnergy, PSE, Duke, ...) over the
NESC baseline. A preset OVERRIDES the fields it defines:
- minTopSpace   -> minimum_pole_top_space
- roadClearance -> road_clearance
- commToPower   -> power_clearance_distribution
"""

import numbers
from typing import Dict, Any, Optional

from codal_engine.base import ClearanceLayer
from data_models import ClearanceTable


# Format: {preset_key: {label, voltage, minTopSpace, roadClearance, commToPower}}
CLEARANCE_PRESETS: Dict[str, Dict[str, Any]] = {
    'firstEnergy': {'label': 'FirstEnergy', 'voltage': 'distribution', 'minTopSpace': 2.0, 'roadClearance': 18.0, 'commToPower': 40 / 12},
    'monPower': {'label': 'Mon Power (FirstEnergy)', 'voltage': 'distribution', 'minTopSpace': 2.0, 'roadClearance': 18.0, 'commToPower': 40 / 12},
    'potomacEdison': {'label': 'Potomac Edison (FirstEnergy)', 'voltage': 'distribution', 'minTopSpace': 2.0, 'roadClearance': 18.0, 'commToPower': 40 / 12},
    'penelec': {'label': 'Penelec (FirstEnergy)', 'voltage': 'distribution', 'minTopSpace': 2.0, 'roadClearance': 18.0, 'commToPower': 40 / 12},
    'metEd': {'label': 'Met-Ed (FirstEnergy)', 'voltage': 'distribution', 'minTopSpace': 2.0, 'roadClearance': 18.0, 'commToPower': 40 / 12},
    'jcpl': {'label': 'JCP&L (FirstEnergy)', 'voltage': 'distribution', 'minTopSpace': 2.0, 'roadClearance': 18.0, 'commToPower': 40 / 12},
    'pse': {'label': 'PSE', 'voltage': 'distribution', 'minTopSpace': 2.0, 'roadClearance': 18.0, 'commToPower': 42 / 12},
    'duke': {'label': 'Duke', 'voltage': 'distribution', 'minTopSpace': 2.0, 'roadClearance': 18.0, 'commToPower': 40 / 12},
    'nationalGrid': {'label': 'National Grid', 'voltage': 'distribution', 'minTopSpace': 2.0, 'roadClearance': 18.0, 'commToPower': 40 / 12},
}

# preset field -> ClearanceTable field
PRESET_FIELD_MAP = {
    'minTopSpace': 'minimum_pole_top_space',
    'roadClearance': 'road_clearance',
    'commToPower': 'power_clearance_distribution',
}


def get_preset(preset_key: Optional[str]) -> Optional[Dict[str, Any]]:
    """Look up a named preset; exact key first, then case-insensitive."""
    if not preset_key:
        return None
    if preset_key in CLEARANCE_PRESETS:
        return CLEARANCE_PRESETS[preset_key]
    wanted = str(preset_key).strip().lower()
    for key, preset in CLEARANCE_PRESETS.items():
        if key.lower() == wanted:
            return preset
    return None


def apply_preset_object(table: ClearanceTable, preset_obj: Optional[Dict[str, Any]]) -> ClearanceTable:
    """
    Apply a preset-shaped object to a table.

    Only numeric fields override; anything else is ignored.

    Returns:
        New ClearanceTable (or the same table when nothing applies)
    """
    if not preset_obj:
        return table
    changes = {}
    for preset_field, table_field in PRESET_FIELD_MAP.items():
        value = preset_obj.get(preset_field)
        if isinstance(value, numbers.Real) and not isinstance(value, bool):
            changes[table_field] = float(value)
    return ClearanceLayer._with(table, **changes)


def apply_preset_to_clearances(table: ClearanceTable, preset_key: Optional[str]) -> ClearanceTable:
    """
    Apply a named preset to a table.

    Unknown or empty preset keys return the table unchanged.
    """
    return apply_preset_object(table, get_preset(preset_key))


class PresetLayer(ClearanceLayer):
    """Named utility preset layer."""

    def __init__(self, preset_key: Optional[str]):
        super().__init__(f"preset:{preset_key}")
        self.preset_key = preset_key

    def apply(self, table: ClearanceTable) -> ClearanceTable:
        return apply_preset_to_clearances(table, self.preset_key)
