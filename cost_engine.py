"""
Cost Engine Module.

Flat cost adders for an attachment job and the make-ready rate.

CRITICAL PRINCIPLES:
- Has NO clearance logic
- Does NOT decide scenarios
- Pure lookup/arithmetic

THIS IS A ROUGH PLANNING ESTIMATE, NOT A UTILITY INVOICE.
"""

import math

from data_models import Scenario


# ============================================================================
# FLAT COST ADDERS (USD)
# ============================================================================

COST_ADDERS = {
    "comm_owner_new_construction": 150.0,
    "comm_owner_existing": 200.0,
    "power_present": 200.0,
    "new_construction": 150.0,
    "voltage_default": 200.0,
    "transformer": 300.0,
    "long_span_review": 500.0,   # spans over 300 ft
    "guy_base": 350.0,
}

GUY_VARIABLE_CAP = 650.0
GUY_TENSION_DIVISOR = 10.0

# USD per inch of make-ready movement
MAKE_READY_RATE_PER_INCH = 12.5


def scenario_cost(scenario: Scenario, is_new_construction: bool = False) -> float:
    """
    Flat cost adder for the resolved attachment scenario.

    Args:
        scenario: Resolved scenario
        is_new_construction: New pole flag (only matters for comm-owner jobs)

    Returns:
        Cost in USD
    """
    if scenario == Scenario.COMM_OWNER_NO_POWER:
        key = "comm_owner_new_construction" if is_new_construction else "comm_owner_existing"
        return COST_ADDERS[key]
    if scenario == Scenario.POWER_PRESENT:
        return COST_ADDERS["power_present"]
    if scenario == Scenario.NEW_CONSTRUCTION:
        return COST_ADDERS["new_construction"]
    return COST_ADDERS["voltage_default"]


def guy_cost(tension_lb: float, required: bool) -> float:
    """Down-guy installation estimate: base plus a capped tension-driven part."""
    if not required:
        return 0.0
    variable = min(GUY_VARIABLE_CAP, _round_half_up(tension_lb / GUY_TENSION_DIVISOR))
    return COST_ADDERS["guy_base"] + variable


def make_ready_cost(original_ft: float, new_ft: float) -> float:
    """Cost of moving one line from original_ft to new_ft."""
    delta_in = _round_half_up((new_ft - original_ft) * 12)
    return abs(delta_in) * MAKE_READY_RATE_PER_INCH


def _round_half_up(value: float) -> float:
    return float(math.floor(value + 0.5))
