"""
Span Mechanics Calculator.

Parabolic sag under combined vertical weight and wind load, midspan
clearance against the neighbor pole, and great-circle span length from GPS.

Sag model:
    d_ft    = (cable diameter + 2 * ice thickness) / 12
    q       = 0.00256 * wind_mph^2          (psf)
    w_horiz = q * d_ft                      (lb/ft)
    w_eff   = sqrt(w_vert^2 + w_horiz^2)
    sag     = w_eff * L^2 / (8 * T)
"""

import logging
import math
from dataclasses import dataclass
from typing import Any, Optional

from data_models import AnalysisOutcome, ClearanceTable, CableSpec
from cost_engine import COST_ADDERS
from height_units import format_feet_inches, parse_feet
from pole_catalog import get_pole_burial_data

logger = logging.getLogger(__name__)

DEFAULT_WIND_MPH = 90.0
WIND_PRESSURE_COEFF = 0.00256
EARTH_RADIUS_M = 6371000.0
FEET_PER_METER = 3.28084

LONG_SPAN_REVIEW_FT = 300.0
COMM_INTERMEDIATE_SUPPORT_FT = 150.0


@dataclass
class SpanResult:
    span_ft: float
    wind: float
    sag_ft: float
    midspan_ft: Optional[float]
    neighbor_attach_ft: Optional[float]
    neighbor_source: Optional[str]


def _number(value: Any, default: float) -> float:
    try:
        n = float(value)
    except (TypeError, ValueError):
        return default
    return n if math.isfinite(n) else default


def calculate_sag(
    span_ft: Any,
    weight_lb_per_ft: Any,
    tension_lb: Any,
    wind_speed_mph: Any = DEFAULT_WIND_MPH,
    cable_diameter_in: Any = 0.5,
    ice_thickness_in: Any = 0,
) -> float:
    """
    Parabolic sag approximation at midspan.

    Args:
        span_ft: Span length
        weight_lb_per_ft: Bare cable weight
        tension_lb: Cable tension (floored at 1 lb)
        wind_speed_mph: Wind speed
        cable_diameter_in: Cable diameter
        ice_thickness_in: Radial ice thickness

    Returns:
        Sag in feet
    """
    length = _number(span_ft, 0.0)
    tension = max(1.0, _number(tension_lb, 0.0) or 1200.0)
    diameter = _number(cable_diameter_in, 0.0) or 0.5
    d_ft = max(0.0, diameter + 2 * _number(ice_thickness_in, 0.0)) / 12
    w_vert = max(0.0, _number(weight_lb_per_ft, 0.0) or 0.1)
    q_wind = WIND_PRESSURE_COEFF * max(0.0, _number(wind_speed_mph, 0.0)) ** 2
    w_horiz = q_wind * d_ft
    w_eff = math.sqrt(w_vert * w_vert + w_horiz * w_horiz)
    return (w_eff * length * length) / (8 * tension)


def haversine_distance_ft(lat1: Any, lon1: Any, lat2: Any, lon2: Any) -> Optional[float]:
    """
    Great-circle distance between two coordinates, in feet (0.1 ft precision).

    Returns:
        Distance, or None when any coordinate is missing or out of range
    """
    coords = []
    for value, limit in ((lat1, 90), (lon1, 180), (lat2, 90), (lon2, 180)):
        if value is None or isinstance(value, bool) or (isinstance(value, str) and not value.strip()):
            return None
        try:
            deg = float(value)
        except (TypeError, ValueError):
            return None
        if not math.isfinite(deg) or abs(deg) > limit:
            return None
        coords.append(math.radians(deg))

    phi1, lam1, phi2, lam2 = coords
    a = (math.sin((phi2 - phi1) / 2) ** 2
         + math.cos(phi1) * math.cos(phi2) * math.sin((lam2 - lam1) / 2) ** 2)
    c = 2 * math.atan2(math.sqrt(a), math.sqrt(1 - a))
    feet = EARTH_RADIUS_M * c * FEET_PER_METER
    return round(feet, 1)


def resolve_neighbor_attach(
    adjacent_proposed_attach_ft: Any,
    adjacent_existing_power_height: Any,
    adjacent_pole_height: Any,
    effective_separation_ft: float,
    minimum_pole_top_space: float,
):
    """
    Neighbor-end attach height, in priority order.

    1. explicit adjacent proposed attach height
    2. adjacent power height minus effective separation
    3. adjacent above-ground height minus minimum top space

    Returns:
        (height_ft, source) or (None, None)
    """
    explicit = parse_feet(adjacent_proposed_attach_ft)
    if explicit is not None and explicit > 0:
        return float(explicit), "adjacent-proposed"

    power = parse_feet(adjacent_existing_power_height)
    if power is not None and power > 0:
        return power - effective_separation_ft, "adjacent-power"

    adjacent_ft = parse_feet(adjacent_pole_height)
    if adjacent_ft is not None and adjacent_ft > 0:
        return get_pole_burial_data(adjacent_ft).above_ground - minimum_pole_top_space, "adjacent-pole-top"

    return None, None


def analyze_span(
    span_ft: float,
    proposed_attach_ft: Optional[float],
    cable: CableSpec,
    clearances: ClearanceTable,
    effective_separation_ft: float,
    wind_speed: Any = None,
    cable_diameter: Any = None,
    ice_thickness_in: Any = None,
    adjacent_pole_height: Any = None,
    adjacent_existing_power_height: Any = None,
    adjacent_proposed_attach_ft: Any = None,
    attachment_type: str = "",
):
    """
    Sag, midspan clearance and long-span checks for one span.

    Only runs the midspan estimate when the span, the adjacent pole height
    and the proposed height are all available.

    Returns:
        (SpanResult, AnalysisOutcome)
    """
    outcome = AnalysisOutcome()
    wind = _number(wind_speed, 0.0) or DEFAULT_WIND_MPH
    result = SpanResult(span_ft=span_ft, wind=wind, sag_ft=0.0, midspan_ft=None,
                        neighbor_attach_ft=None, neighbor_source=None)

    adjacent_ft = parse_feet(adjacent_pole_height)
    if not (span_ft > 0 and adjacent_ft and adjacent_ft > 0 and proposed_attach_ft is not None):
        return result, outcome

    result.sag_ft = calculate_sag(
        span_ft,
        cable.weight,
        cable.tension,
        wind,
        parse_feet(cable_diameter) or cable.diameter,
        _number(ice_thickness_in, 0.0),
    )

    neighbor_ft, source = resolve_neighbor_attach(
        adjacent_proposed_attach_ft,
        adjacent_existing_power_height,
        adjacent_ft,
        effective_separation_ft,
        clearances.minimum_pole_top_space,
    )
    result.neighbor_attach_ft = neighbor_ft
    result.neighbor_source = source
    result.midspan_ft = (proposed_attach_ft + neighbor_ft) / 2 - result.sag_ft
    logger.debug(
        f"Span {span_ft} ft: sag {result.sag_ft:.3f} ft, neighbor {neighbor_ft:.2f} ft ({source}), "
        f"midspan {result.midspan_ft:.2f} ft"
    )

    if result.midspan_ft < clearances.ground_clearance:
        outcome.warnings.append(
            f"CRITICAL: midspan {format_feet_inches(result.midspan_ft)} < min ground clearance "
            f"{format_feet_inches(clearances.ground_clearance)}"
        )
    if span_ft > LONG_SPAN_REVIEW_FT:
        outcome.warnings.append('Spans > 300 ft require special engineering and utility approval')
        outcome.cost += COST_ADDERS["long_span_review"]
    if span_ft > COMM_INTERMEDIATE_SUPPORT_FT and 'communication' in str(attachment_type or ''):
        outcome.warnings.append('Communication cable spans >150 ft may require intermediate support')

    return result, outcome
