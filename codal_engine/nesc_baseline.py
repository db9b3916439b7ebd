"""
NESC Baseline Clearances.

Baseline clearance table per National Electrical Safety Code, keyed by the
voltage class of the existing plant. Ground clearance additionally depends
on whether the span crosses a road.

All values in decimal feet.
"""

from typing import Dict, Any

from data_models import ClearanceTable, VoltageClass


# Format: {voltage_class: {field: value}}
# ground_clearance is (road, non-road)
NESC_CLEARANCE_TABLE: Dict[str, Dict[str, Any]] = {
    VoltageClass.COMMUNICATION.value: {
        'ground_clearance': (15.5, 9.5),
        'road_clearance': 18.0,
        'power_clearance_distribution': 40 / 12,
        'power_clearance_transmission': 6.0,
        'minimum_pole_top_space': 1.0,
        'comm_to_comm_vertical': 1.0,
        'comm_to_comm_midspan': 0.5,
        'neutral_clearance': 20 / 12,
        'drop_wire_clearance': 6 / 12,
    },
    VoltageClass.DISTRIBUTION.value: {
        'ground_clearance': (23.0, 18.0),
        'road_clearance': 25.0,
        'power_clearance_distribution': 0.0,
        'power_clearance_transmission': 4.0,
        'minimum_pole_top_space': 2.0,
    },
    VoltageClass.TRANSMISSION.value: {
        'ground_clearance': (28.5, 23.0),
        'road_clearance': 30.0,
        'power_clearance_distribution': 0.0,
        'power_clearance_transmission': 6.0,
        'minimum_pole_top_space': 4.0,
    },
}

ROAD_ENVIRONMENT = "road"


def normalize_voltage_class(voltage_class: Any) -> str:
    """
    Map a voltage class input onto a known table key.

    Unknown or missing values fall back to the communication class.
    """
    if isinstance(voltage_class, VoltageClass):
        return voltage_class.value
    key = str(voltage_class or "").strip().lower()
    if key in NESC_CLEARANCE_TABLE:
        return key
    return VoltageClass.COMMUNICATION.value


def get_nesc_clearances(voltage_class: Any = "communication", environment: str = "road") -> ClearanceTable:
    """
    Build the baseline NESC clearance table.

    Args:
        voltage_class: 'communication', 'distribution' or 'transmission'
        environment: Span environment tag; only 'road' changes the baseline

    Returns:
        New ClearanceTable

    Example:
        >>> get_nesc_clearances("distribution", "road").ground_clearance
        23.0
    """
    row = dict(NESC_CLEARANCE_TABLE[normalize_voltage_class(voltage_class)])
    road_ground, other_ground = row.pop('ground_clearance')
    row['ground_clearance'] = road_ground if environment == ROAD_ENVIRONMENT else other_ground
    return ClearanceTable(**row)
