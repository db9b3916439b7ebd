"""
Guying Advisor.

Simplified down-guy advisory plus the line-angle PULL geometry used to
derive a pull direction from two span bearings.

Down-guy heuristic:
- unbalanced horizontal load = 10% of rated tension + wind on the span
- guy attaches at 85% of above-ground height, lead = 50% of that
- tension = load * attach height / guy height
- a guy is indicated above 500 lb
"""

import logging
import math
from typing import Dict, Any, Optional

from cost_engine import guy_cost
from data_models import CableSpec, GuyResult

logger = logging.getLogger(__name__)

GUY_REQUIRED_TENSION_LB = 500.0
GUY_ATTACH_RATIO = 0.85
GUY_LEAD_RATIO = 0.5
UNBALANCED_TENSION_RATIO = 0.1
WIND_PRESSURE_COEFF = 0.00256
DEFAULT_BASE_SPAN_FT = 100.0


def calculate_down_guy(
    pole_above_ground_ft: Any,
    attach_ft: Any,
    cable: Optional[CableSpec],
    span_ft: Any,
    wind_speed_mph: Any = 90,
    pull_direction_deg: float = 0.0,
) -> Optional[GuyResult]:
    """
    Estimate down-guy tension, angle and cost.

    Args:
        pole_above_ground_ft: Pole height above ground
        attach_ft: Attachment height (lever arm)
        cable: Cable spec (rated tension, diameter)
        span_ft: Span length
        wind_speed_mph: Wind speed
        pull_direction_deg: Direction of the unbalanced pull

    Returns:
        GuyResult, or None when cable, span or attach height is missing
    """
    if cable is None or not span_ft or not attach_ft:
        return None

    lever_arm = float(attach_ft)
    span = float(span_ft)
    wind = float(wind_speed_mph or 0)
    rated = cable.tension or 1500.0
    diameter_ft = (cable.diameter or 0.6) / 12

    wind_load = WIND_PRESSURE_COEFF * wind ** 2 * diameter_ft * span
    horizontal_load = rated * UNBALANCED_TENSION_RATIO + wind_load
    guy_height = max(1.0, float(pole_above_ground_ft or 1)) * GUY_ATTACH_RATIO
    lead = guy_height * GUY_LEAD_RATIO
    tension = horizontal_load * lever_arm / max(1.0, guy_height)
    angle = math.degrees(math.atan(guy_height / max(0.1, lead)))
    required = tension > GUY_REQUIRED_TENSION_LB

    logger.debug(f"Down-guy: load {horizontal_load:.1f} lb, tension {tension:.1f} lb, required={required}")
    return GuyResult(
        required=required,
        tension=tension,
        angle=angle,
        lead_distance=lead,
        guy_height=guy_height,
        pull_direction=pull_direction_deg,
        total_cost=guy_cost(tension, required),
    )


# ============================================================================
# LINE-ANGLE PULL GEOMETRY
# ============================================================================

def normalize_bearing_deg(bearing: float) -> float:
    """Normalize a bearing to [0, 360)."""
    b = float(bearing) % 360.0
    return 0.0 if b == 360.0 else b


def normalize_included_angle_deg(bearing_a: float, bearing_b: float) -> float:
    """Included angle between two bearings, in [0, 180]."""
    diff = abs(normalize_bearing_deg(bearing_a) - normalize_bearing_deg(bearing_b))
    return 360.0 - diff if diff > 180.0 else diff


def pull_from_angle_deg(theta_deg: float, base_span_ft: float = DEFAULT_BASE_SPAN_FT) -> float:
    """PULL for a line angle: S * sin(theta / 2)."""
    return base_span_ft * math.sin(math.radians(theta_deg) / 2)


def angle_deg_from_pull(pull_ft: float, base_span_ft: float = DEFAULT_BASE_SPAN_FT) -> float:
    """Inverse of pull_from_angle_deg; the ratio is clamped to [0, 1]."""
    if not base_span_ft:
        return 0.0
    ratio = min(1.0, max(0.0, pull_ft / base_span_ft))
    return math.degrees(2 * math.asin(ratio))


def compute_pull_autofill(
    incoming_bearing_deg: float,
    outgoing_bearing_deg: float,
    base_span_ft: float = DEFAULT_BASE_SPAN_FT,
) -> Dict[str, float]:
    """Line angle and PULL from the incoming and outgoing bearings."""
    theta = normalize_included_angle_deg(incoming_bearing_deg, outgoing_bearing_deg)
    return {"theta_deg": theta, "pull_ft": pull_from_angle_deg(theta, base_span_ft)}


def bisector_bearing_deg(bearing_a: float, bearing_b: float) -> float:
    """Bearing halfway between two bearings along the smaller arc."""
    a = normalize_bearing_deg(bearing_a)
    b = normalize_bearing_deg(bearing_b)
    delta = (b - a + 540.0) % 360.0 - 180.0
    return normalize_bearing_deg(a + delta / 2)
