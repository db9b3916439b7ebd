"""
Attachment Height Recommender.

Scenario state machine that turns the resolved clearance policy and the
controlling conductor into a proposed attach height.

SCENARIO PRIORITY (first match wins):
1. comm-owner-no-power  no controlling conductor + comm-ownership signal
2. power-present        a controlling conductor exists
3. new-construction     new pole, no conductor, no comm-ownership signal
4. voltage-default      everything else

Every state has its own evaluation function returning a Placement or None.
New scenarios are added to SCENARIO_ORDER without touching the others.

Owner-specific (FirstEnergy) checks are advisory: they append warnings
and never change the computed height.
"""

import logging
import math
from dataclasses import dataclass, field
from typing import Any, Callable, List, Optional, Tuple

from conductor_selector import ConductorSelection
from cost_engine import COST_ADDERS, scenario_cost
from data_models import (
    AnalysisOutcome,
    ClearanceTable,
    ConductorName,
    ControllingConductor,
    ExistingLine,
    PoleData,
    Recommendation,
    RecommendationBasis,
    Scenario,
    VoltageClass,
)
from height_units import feet_to_inches, format_feet_inches, parse_feet
from make_ready_engine import resolved_line_height
from owner_rules import EffectiveSeparation, OwnerClassification

logger = logging.getLogger(__name__)

COMM_OWNER_TOP_OFFSET_FT = 1.0

# FirstEnergy supplementary gaps, inches
FE_TRANSFORMER_GAP_IN = 30
FE_STREET_LIGHT_GAP_IN = 20
FE_STREET_LIGHT_BONDED_GAP_IN = 4
FE_STREET_LIGHT_DRIP_LOOP_GAP_IN = 12
FE_ABOVE_STREET_LIGHT_GAP_IN = 4
FE_MIDSPAN_DROP_GAP_IN = 4
FE_MIDSPAN_MAIN_GAP_IN = 12

# Tolerance when comparing inch gaps computed from decimal feet
GAP_EPSILON_IN = 1e-6


@dataclass(frozen=True)
class PlacementContext:
    """Everything the scenario functions may look at."""
    pole: PoleData
    clearances: ClearanceTable
    voltage_class: str
    owner: OwnerClassification
    separation: EffectiveSeparation
    selection: ConductorSelection
    comm_owner_signal: bool
    is_new_construction: bool = False
    existing_power_height: Any = None
    min_comm_attach_ft: Optional[float] = None
    has_transformer: bool = False


@dataclass
class Placement:
    """Resolved scenario, proposed height and its recommendation."""
    scenario: Scenario
    proposed_attach_ft: float
    recommendation: Recommendation
    outcome: AnalysisOutcome = field(default_factory=AnalysisOutcome)


def _pole_top(ctx: PlacementContext) -> ControllingConductor:
    return ControllingConductor(ConductorName.POLE_TOP.value, ctx.pole.above_ground)


# ============================================================================
# SCENARIO STATES
# ============================================================================

def evaluate_comm_owner_no_power(ctx: PlacementContext) -> Optional[Placement]:
    """Comm-owned pole with no power data: attach 1 ft below the top."""
    if ctx.selection.controlling is not None or not ctx.comm_owner_signal:
        return None

    proposed = ctx.pole.above_ground - COMM_OWNER_TOP_OFFSET_FT
    detail = (
        f"Communication-owned pole with no power data: attach "
        f"{format_feet_inches(COMM_OWNER_TOP_OFFSET_FT)} below pole top"
    )
    outcome = AnalysisOutcome(
        notes=[detail],
        cost=scenario_cost(Scenario.COMM_OWNER_NO_POWER, ctx.is_new_construction),
    )
    return Placement(
        scenario=Scenario.COMM_OWNER_NO_POWER,
        proposed_attach_ft=proposed,
        recommendation=Recommendation(
            basis=RecommendationBasis.OWNER_COMM_NO_POWER.value,
            detail=detail,
            clearance_in=int(COMM_OWNER_TOP_OFFSET_FT * 12),
            controlling=_pole_top(ctx),
        ),
        outcome=outcome,
    )


def evaluate_power_present(ctx: PlacementContext) -> Optional[Placement]:
    """Attach the effective separation below the controlling conductor."""
    controlling = ctx.selection.controlling
    if controlling is None:
        return None

    sep = ctx.separation
    proposed = controlling.height_ft - sep.effective_separation_ft
    if ctx.voltage_class == VoltageClass.TRANSMISSION.value:
        basis = RecommendationBasis.NESC_TRANSMISSION
    elif ctx.owner.is_first_energy:
        basis = RecommendationBasis.FIRST_ENERGY
    else:
        basis = RecommendationBasis.NESC

    detail = (
        f"{basis.value}: attach {sep.effective_separation_inches}\" below "
        f"{controlling.name} at {format_feet_inches(controlling.height_ft)}"
    )
    outcome = AnalysisOutcome(
        notes=[detail],
        cost=scenario_cost(Scenario.POWER_PRESENT),
    )
    return Placement(
        scenario=Scenario.POWER_PRESENT,
        proposed_attach_ft=proposed,
        recommendation=Recommendation(
            basis=basis.value,
            detail=detail,
            clearance_in=sep.effective_separation_inches,
            controlling=controlling,
        ),
        outcome=outcome,
    )


def evaluate_new_construction(ctx: PlacementContext) -> Optional[Placement]:
    """New pole without power: attach minimum top space below the top."""
    if ctx.selection.controlling is not None or ctx.comm_owner_signal or not ctx.is_new_construction:
        return None

    top_space = ctx.clearances.minimum_pole_top_space
    proposed = ctx.pole.above_ground - top_space
    detail = f"New construction: attach {format_feet_inches(top_space)} below pole top"
    return Placement(
        scenario=Scenario.NEW_CONSTRUCTION,
        proposed_attach_ft=proposed,
        recommendation=Recommendation(
            basis=RecommendationBasis.NEW_CONSTRUCTION.value,
            detail=detail,
            clearance_in=feet_to_inches(top_space),
            controlling=_pole_top(ctx),
        ),
        outcome=AnalysisOutcome(notes=[detail], cost=scenario_cost(Scenario.NEW_CONSTRUCTION)),
    )


def evaluate_voltage_default(ctx: PlacementContext) -> Optional[Placement]:
    """Fallback: voltage-class clearance against the raw power height."""
    if ctx.voltage_class == VoltageClass.TRANSMISSION.value:
        p_clear = ctx.clearances.power_clearance_transmission
    else:
        p_clear = ctx.clearances.power_clearance_distribution

    power_ft = parse_feet(ctx.existing_power_height)
    proposed = (power_ft if power_ft is not None else 0.0) - p_clear
    inches = feet_to_inches(p_clear)
    detail = f"Existing power clearance: {inches}\" ({p_clear:.2f} ft)"
    return Placement(
        scenario=Scenario.VOLTAGE_DEFAULT,
        proposed_attach_ft=proposed,
        recommendation=Recommendation(
            basis=RecommendationBasis.VOLTAGE_DEFAULT.value,
            detail=detail,
            clearance_in=inches,
            controlling=_pole_top(ctx),
        ),
        outcome=AnalysisOutcome(notes=[detail], cost=scenario_cost(Scenario.VOLTAGE_DEFAULT)),
    )


SCENARIO_ORDER: List[Tuple[Scenario, Callable[[PlacementContext], Optional[Placement]]]] = [
    (Scenario.COMM_OWNER_NO_POWER, evaluate_comm_owner_no_power),
    (Scenario.POWER_PRESENT, evaluate_power_present),
    (Scenario.NEW_CONSTRUCTION, evaluate_new_construction),
    (Scenario.VOLTAGE_DEFAULT, evaluate_voltage_default),
]


# ============================================================================
# RECOMMENDER
# ============================================================================

def apply_min_comm_attach(placement: Placement, ctx: PlacementContext) -> Placement:
    """
    Clamp the proposed height to the profile's minimum comm attach height.

    The upper bound is the controlling conductor minus the effective
    separation when a controlling conductor exists.
    """
    minimum = ctx.min_comm_attach_ft
    if minimum is None:
        return placement

    controlling = ctx.selection.controlling
    if controlling is not None:
        allowed_max = controlling.height_ft - ctx.separation.effective_separation_ft
    else:
        allowed_max = math.inf

    clamped = min(max(placement.proposed_attach_ft, minimum), allowed_max)
    if clamped != placement.proposed_attach_ft:
        placement.outcome.notes.append(
            f"Proposed attach adjusted from {format_feet_inches(placement.proposed_attach_ft)} "
            f"to {format_feet_inches(clamped)} (minimum comm attach {format_feet_inches(minimum)})"
        )
        placement.proposed_attach_ft = clamped
    return placement


def recommend_attachment(ctx: PlacementContext) -> Placement:
    """
    Run the scenario state machine.

    Args:
        ctx: Placement context

    Returns:
        Placement with proposed height, recommendation, notes and cost
    """
    placement = None
    for scenario, evaluate in SCENARIO_ORDER:
        placement = evaluate(ctx)
        if placement is not None:
            logger.debug(f"Scenario {scenario.value}: proposed {placement.proposed_attach_ft:.3f} ft")
            break

    placement = apply_min_comm_attach(placement, ctx)

    if ctx.has_transformer:
        placement.outcome.notes.append(
            'Transformer present: add clearance review and potential construction complexity'
        )
        placement.outcome.cost += COST_ADDERS["transformer"]

    return placement


# ============================================================================
# FIRSTENERGY SUPPLEMENTARY CHECKS
# ============================================================================

def _positive_feet(value: Any) -> Optional[float]:
    ft = parse_feet(value)
    if ft is None or ft <= 0:
        return None
    return float(ft)


def _short(gap_in: float, required_in: float) -> bool:
    return gap_in < required_in - GAP_EPSILON_IN


def check_first_energy_clearances(
    proposed_attach_ft: float,
    controlling: Optional[ControllingConductor],
    separation: EffectiveSeparation,
    transformer_bottom_height: Any = None,
    street_light_height: Any = None,
    street_light_drip_loop_height: Any = None,
    existing_lines: Optional[List[ExistingLine]] = None,
    midspan_ft: Optional[float] = None,
    sag_ft: float = 0.0,
    street_light_bonded: bool = False,
) -> AnalysisOutcome:
    """
    FirstEnergy supplementary clearance checks.

    Each failing check appends one warning; heights are never changed.

    Args:
        proposed_attach_ft: Proposed comm attach height
        controlling: Controlling conductor, if any
        separation: Effective separation
        transformer_bottom_height: Bottom of transformer
        street_light_height: Street light bracket height
        street_light_drip_loop_height: Street light drip loop height
        existing_lines: Existing attachments (midspan comm-to-comm)
        midspan_ft: Proposed cable midspan height, when computed
        sag_ft: Sag used to estimate existing lines at midspan
        street_light_bonded: Bonded light bracket (relaxes the gap to 4")

    Returns:
        AnalysisOutcome with warnings only
    """
    outcome = AnalysisOutcome()
    warnings = outcome.warnings
    proposed = proposed_attach_ft

    if controlling is not None and controlling.name != ConductorName.POLE_TOP.value:
        gap = (controlling.height_ft - proposed) * 12
        if _short(gap, separation.effective_separation_inches):
            warnings.append(
                f"FE: comm to {controlling.name} gap {gap:.1f}\" "
                f"(need {separation.effective_separation_inches}\")"
            )

    transformer_ft = _positive_feet(transformer_bottom_height)
    if transformer_ft is not None:
        gap = (transformer_ft - proposed) * 12
        if _short(gap, FE_TRANSFORMER_GAP_IN):
            warnings.append(
                f"FE: comm to transformer bottom gap {gap:.1f}\" (need {FE_TRANSFORMER_GAP_IN}\")"
            )

    light_ft = _positive_feet(street_light_height)
    if light_ft is not None:
        if proposed > light_ft:
            gap = (proposed - light_ft) * 12
            if _short(gap, FE_ABOVE_STREET_LIGHT_GAP_IN):
                warnings.append(
                    f"FE: comm above street light gap {gap:.1f}\" (need {FE_ABOVE_STREET_LIGHT_GAP_IN}\")"
                )
        else:
            required = FE_STREET_LIGHT_BONDED_GAP_IN if street_light_bonded else FE_STREET_LIGHT_GAP_IN
            gap = (light_ft - proposed) * 12
            if _short(gap, required):
                warnings.append(f"FE: comm to street light gap {gap:.1f}\" (need {required}\")")

    light_drip_ft = _positive_feet(street_light_drip_loop_height)
    if light_drip_ft is not None:
        gap = (light_drip_ft - proposed) * 12
        if _short(gap, FE_STREET_LIGHT_DRIP_LOOP_GAP_IN):
            warnings.append(
                f"FE: comm to street light drip loop gap {gap:.1f}\" "
                f"(need {FE_STREET_LIGHT_DRIP_LOOP_GAP_IN}\")"
            )

    if midspan_ft is not None:
        for line in existing_lines or []:
            line_type = line.type.lower()
            if 'drop' in line_type:
                required = FE_MIDSPAN_DROP_GAP_IN
            elif 'comm' in line_type:
                required = FE_MIDSPAN_MAIN_GAP_IN
            else:
                continue
            line_ft = resolved_line_height(line)
            if line_ft is None:
                continue
            gap = abs(midspan_ft - (line_ft - sag_ft)) * 12
            if _short(gap, required):
                warnings.append(
                    f"FE: midspan comm-to-comm gap to {line.type} {gap:.1f}\" (need {required}\")"
                )

    return outcome
