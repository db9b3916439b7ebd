"""
Make-Ready Impact Analyzer.

Checks each existing attachment against the proposed communication
attachment at the pole and at midspan, and prices the make-ready moves
already entered on the lines.

Required gaps (inches):
    line kind            pole-top             midspan
    drop                 6                    4
    neutral/secondary    effective separation 15
    anything else        12                   9

Gaps below requirement are warnings, never errors.
"""

import logging
import math
from typing import Dict, Any, List, Optional, Tuple

from cost_engine import make_ready_cost
from data_models import AnalysisOutcome, ExistingLine
from height_units import format_feet_inches, parse_feet

logger = logging.getLogger(__name__)


# Format: {kind: (pole-top inches, midspan inches)}
# None means "use the effective separation"
MAKE_READY_REQUIREMENTS: Dict[str, Tuple[Optional[float], float]] = {
    "drop": (6.0, 4.0),
    "power": (None, 15.0),
    "other": (12.0, 9.0),
}

POLE_REPLACEMENT_MARGIN_FT = 2.0
POLE_REPLACEMENT_HEADROOM_FT = 4.0


def line_kind(line_type: str) -> str:
    """Classify a line type as 'drop', 'power' (neutral/secondary) or 'other'."""
    t = (line_type or "").lower()
    if 'drop' in t:
        return "drop"
    if 'neutral' in t or 'secondary' in t:
        return "power"
    return "other"


def resolved_line_height(line: ExistingLine) -> Optional[float]:
    """Line height after make-ready (make-ready height if set), else as found."""
    if line.make_ready:
        moved = parse_feet(line.make_ready_height)
        if moved is not None:
            return moved
    return parse_feet(line.height)


def analyze_make_ready_impact(existing_ft: Any, proposed_ft: Any, min_separation_ft: Any) -> Optional[Dict[str, Any]]:
    """
    Pairwise separation check between one existing line and the proposed line.

    Args:
        existing_ft: Existing line height
        proposed_ft: Proposed line height
        min_separation_ft: Required separation

    Returns:
        Dictionary with make_ready_required, adjustment_needed and
        recommended_height, or None when any input is not a finite number
    """
    try:
        existing = float(existing_ft)
        proposed = float(proposed_ft)
        min_sep = float(min_separation_ft)
    except (TypeError, ValueError):
        return None
    if not all(math.isfinite(v) for v in (existing, proposed, min_sep)):
        return None

    actual = abs(existing - proposed)
    required = actual < min_sep
    return {
        "make_ready_required": required,
        "adjustment_needed": min_sep - actual if required else 0.0,
        "recommended_height": existing - min_sep if required else proposed,
    }


def recommend_pole_replacement(pole_height_ft: Any, required_above_ground_ft: Any) -> Dict[str, Any]:
    """
    Recommend a taller pole when the margin over the requirement is under 2 ft.

    Returns:
        {"replace": bool, "suggested_height": float}
    """
    try:
        h = float(pole_height_ft or 0)
        req = float(required_above_ground_ft or 0)
    except (TypeError, ValueError):
        h, req = 0.0, 0.0

    replace = (h - req) < POLE_REPLACEMENT_MARGIN_FT
    return {
        "replace": replace,
        "suggested_height": float(math.ceil(req + POLE_REPLACEMENT_HEADROOM_FT)) if replace else h,
    }


def analyze_existing_lines(
    existing_lines: List[ExistingLine],
    proposed_ft: float,
    effective_separation_inches: int,
    midspan_ft: Optional[float] = None,
    sag_ft: float = 0.0,
) -> Tuple[AnalysisOutcome, List[Dict[str, Any]], float]:
    """
    Check every existing line against the proposed attachment.

    Args:
        existing_lines: Existing attachments
        proposed_ft: Proposed attach height
        effective_separation_inches: Owner-floored separation for neutral/secondary
        midspan_ft: Proposed midspan height (skips midspan checks when None)
        sag_ft: Sag applied to existing lines for their midspan estimate

    Returns:
        (outcome with warnings, per-line records, make-ready total in USD)
    """
    outcome = AnalysisOutcome()
    records = []
    total = 0.0

    for line in existing_lines:
        if not line.type:
            continue
        line_ft = resolved_line_height(line)
        if line_ft is None:
            continue

        kind = line_kind(line.type)
        req_pole, req_mid = MAKE_READY_REQUIREMENTS[kind]
        if req_pole is None:
            req_pole = float(effective_separation_inches)

        # Power-side lines must stay above the comm line
        if kind == "power":
            pole_gap = (line_ft - proposed_ft) * 12
        else:
            pole_gap = abs(line_ft - proposed_ft) * 12
        if pole_gap < req_pole:
            outcome.warnings.append(
                f"Pole clearance to {line.type}: {pole_gap:.1f}\" (need {req_pole:g}\")"
            )

        mid_gap = None
        if midspan_ft is not None:
            line_mid = line_ft - sag_ft
            if kind == "power":
                mid_gap = (line_mid - midspan_ft) * 12
            else:
                mid_gap = abs(line_mid - midspan_ft) * 12
            if mid_gap < req_mid:
                outcome.warnings.append(
                    f"Midspan clearance to {line.type}: {mid_gap:.1f}\" (need {req_mid:g}\")"
                )

        line_cost = 0.0
        original_ft = parse_feet(line.height)
        moved_ft = parse_feet(line.make_ready_height) if line.make_ready else None
        if original_ft is not None and moved_ft is not None and moved_ft != original_ft:
            line_cost = make_ready_cost(original_ft, moved_ft)
            total += line_cost

        impact = analyze_make_ready_impact(line_ft, proposed_ft, req_pole / 12)
        if impact and impact["make_ready_required"] and kind != "power":
            outcome.notes.append(
                f"{line.type}: move to {format_feet_inches(impact['recommended_height'])} "
                f"to restore {req_pole:g}\" pole clearance"
            )

        records.append({
            "type": line.type,
            "company_name": line.company_name,
            "height_ft": original_ft,
            "new_height_ft": line_ft,
            "pole_gap_in": round(pole_gap, 1),
            "required_pole_gap_in": req_pole,
            "midspan_gap_in": round(mid_gap, 1) if mid_gap is not None else None,
            "required_midspan_gap_in": req_mid,
            "make_ready_cost": line_cost,
        })

    logger.debug(f"Make-ready: {len(records)} lines checked, total ${total:.2f}")
    return outcome, records, total
