"""
Pole and Cable Catalog.

Static reference data used by the analysis engine:
- Attachment cable catalog (weight, rated tension, diameter)
- Pole burial depth rule of thumb and typical pole class by height
"""

from typing import Dict, List, Any, Optional
from data_models import CableSpec, PoleData


# ============================================================================
# ATTACHMENT CABLE CATALOG
# ============================================================================
# weight in lb/ft, tension in lb (rated), diameter in inches.
# The first entry is the fallback for unknown keys.

CABLE_TYPES: List[CableSpec] = [
    CableSpec(key="adss", label='ADSS (0.5")', weight=0.08, tension=1200.0, diameter=0.5),
    CableSpec(key="coax", label='Coax (0.75")', weight=0.12, tension=1500.0, diameter=0.75),
    CableSpec(key="copper", label='Copper (0.5")', weight=0.10, tension=1400.0, diameter=0.5),
    CableSpec(key="triplex", label='Triplex (1.0")', weight=0.20, tension=1800.0, diameter=1.0),
    CableSpec(key="communication", label='Generic Comm (0.6")', weight=0.10, tension=1400.0, diameter=0.6),
]

_CABLE_INDEX: Dict[str, CableSpec] = {cable.key: cable for cable in CABLE_TYPES}


def get_cable_spec(key: Optional[str]) -> CableSpec:
    """
    Look up a cable by catalog key.

    Args:
        key: Catalog key ('adss', 'coax', ...)

    Returns:
        Matching CableSpec, or the first catalog entry when unknown
    """
    return _CABLE_INDEX.get(str(key or "").strip().lower(), CABLE_TYPES[0])


def list_cable_types() -> List[Dict[str, Any]]:
    """Catalog as plain records for the HTTP surface."""
    return [
        {
            "key": c.key,
            "label": c.label,
            "weight": c.weight,
            "tension": c.tension,
            "diameter": c.diameter,
        }
        for c in CABLE_TYPES
    ]


# ============================================================================
# POLE BURIAL
# ============================================================================

MIN_BURIAL_FT = 5.0

# (max pole height ft, typical class); last entry catches everything taller
TYPICAL_CLASS_BY_HEIGHT = [
    (30.0, "Class 6 typical"),
    (35.0, "Class 4-5 typical"),
    (40.0, "Class 3-4 typical"),
    (45.0, "Class 2-3 typical"),
]
TALL_POLE_CLASS = "Class 1-2 typical"


def get_pole_burial_data(height_ft: Any, pole_class: str = "") -> PoleData:
    """
    Estimate burial depth and above-ground height for a wood pole.

    Rule of thumb: 10% of pole length plus 2 ft, never less than 5 ft.

    Args:
        height_ft: Overall pole length in feet
        pole_class: Field class, if known

    Returns:
        PoleData with buried depth, above-ground height and class info
    """
    try:
        h = float(height_ft or 0)
    except (TypeError, ValueError):
        h = 0.0

    buried = max(MIN_BURIAL_FT, h * 0.1 + 2)
    above_ground = max(0.0, h - buried)

    recommended = TALL_POLE_CLASS
    for max_height, class_label in TYPICAL_CLASS_BY_HEIGHT:
        if h <= max_height:
            recommended = class_label
            break

    return PoleData(
        height=h,
        buried=buried,
        above_ground=above_ground,
        class_info=pole_class or recommended,
        recommended_class=recommended,
    )
