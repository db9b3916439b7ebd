"""
Analysis Service Module.

Orchestrates one pole attachment analysis: validates the flat input
record, runs the engine modules in order and returns a single plain
result record.

Used by the API (api.py) and by any batch caller.

Contract:
    {ok, results, warnings, notes, cost, errors}

compute_analysis NEVER raises. Validation failures and unexpected faults
both come back as ok=False with an errors mapping.
"""

import logging
import math
from dataclasses import asdict, fields
from typing import Dict, Any, Optional

from attachment_recommender import (
    PlacementContext,
    check_first_energy_clearances,
    recommend_attachment,
)
from codal_engine import (
    CustomOverrideLayer,
    OwnerFloorLayer,
    PresetLayer,
    SubmissionProfileLayer,
    get_nesc_clearances,
    resolve_clearances,
)
from codal_engine.nesc_baseline import normalize_voltage_class
from codal_engine.submission_profile_layer import get_min_comm_attach
from conductor_selector import (
    collect_candidates,
    has_comm_ownership_signal,
    select_controlling_conductor,
)
from data_models import (
    AnalysisInput,
    AnalysisOutcome,
    ExistingLine,
    PowerReference,
    VoltageClass,
)
from guying_advisor import bisector_bearing_deg, calculate_down_guy, compute_pull_autofill
from height_units import format_feet_inches, parse_feet
from make_ready_engine import analyze_existing_lines, recommend_pole_replacement
from owner_rules import classify_owner, compute_effective_separation
from pole_catalog import get_cable_spec, get_pole_burial_data
from span_mechanics import analyze_span, haversine_distance_ft

logger = logging.getLogger(__name__)


def _lookup(input_dict: Dict[str, Any], key: str, default: Any = None) -> Any:
    """Read a snake_case key, falling back to its camelCase spelling."""
    if key in input_dict:
        return input_dict[key]
    head, *rest = key.split('_')
    camel = head + ''.join(part.capitalize() for part in rest)
    return input_dict.get(camel, default)


def _float_or_none(value: Any) -> Optional[float]:
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, str) and not value.strip():
        return None
    try:
        n = float(value)
    except (TypeError, ValueError):
        return None
    return n if math.isfinite(n) else None


def parse_input_dict(input_dict: Dict[str, Any]) -> AnalysisInput:
    """
    Parse a flat input record into AnalysisInput.

    Args:
        input_dict: Dictionary with snake_case (or camelCase) keys:
            - pole_height: height string or number (required)
            - existing_power_height: height string (required for existing poles
              unless the voltage class is communication)
            - existing_power_voltage: communication | distribution | transmission
            - span_distance, adjacent_pole_height, attachment_type, ...
            - existing_lines: list of {type, height, company_name, make_ready,
              make_ready_height}

    Returns:
        AnalysisInput
    """
    values = {}
    for name in (f.name for f in fields(AnalysisInput)):
        if name == 'existing_lines':
            continue
        raw = _lookup(input_dict, name)
        if raw is not None:
            values[name] = raw

    raw_lines = _lookup(input_dict, 'existing_lines') or []
    values['existing_lines'] = [
        line if isinstance(line, ExistingLine) else ExistingLine.from_dict(line)
        for line in raw_lines
        if line
    ]

    parsed = AnalysisInput(**values)
    parsed.is_new_construction = bool(parsed.is_new_construction)
    parsed.has_transformer = bool(parsed.has_transformer)
    parsed.existing_power_voltage = str(parsed.existing_power_voltage or VoltageClass.DISTRIBUTION.value)
    parsed.span_environment = str(parsed.span_environment or "road")
    parsed.attachment_type = str(parsed.attachment_type or "communication")
    parsed.power_reference = str(parsed.power_reference or PowerReference.AUTO.value)
    return parsed


def validate_input(inputs: AnalysisInput) -> Dict[str, str]:
    """
    Deterministic input validation.

    Returns:
        Mapping of field name to message; empty when valid
    """
    errors = {}
    if not inputs.pole_height:
        errors['pole_height'] = 'Pole height required for analysis'
    is_comm = str(inputs.existing_power_voltage).strip().lower() == VoltageClass.COMMUNICATION.value
    if not inputs.is_new_construction and not inputs.existing_power_height and not is_comm:
        errors['existing_power_height'] = 'Power wire height required for existing pole analysis'
    return errors


def _failure(errors: Dict[str, str]) -> Dict[str, Any]:
    return {
        "ok": False,
        "results": None,
        "warnings": [],
        "notes": [],
        "cost": None,
        "errors": errors,
    }


def _resolve_span(inputs: AnalysisInput, outcome: AnalysisOutcome) -> float:
    span_ft = parse_feet(inputs.span_distance) or 0.0
    if span_ft > 0:
        return float(span_ft)

    gps_ft = haversine_distance_ft(
        inputs.pole_latitude, inputs.pole_longitude,
        inputs.adjacent_pole_latitude, inputs.adjacent_pole_longitude,
    )
    if gps_ft is None:
        return 0.0
    outcome.notes.append(f"Span length {gps_ft} ft derived from GPS coordinates")
    return gps_ft


def _resolve_pull_direction(inputs: AnalysisInput, outcome: AnalysisOutcome) -> float:
    incoming = _float_or_none(inputs.incoming_bearing_deg)
    outgoing = _float_or_none(inputs.outgoing_bearing_deg)
    if incoming is not None and outgoing is not None:
        pull = compute_pull_autofill(incoming, outgoing)
        direction = bisector_bearing_deg(incoming, outgoing)
        outcome.notes.append(
            f"Line angle {pull['theta_deg']:.1f} deg (PULL {pull['pull_ft']:.1f} ft per 100 ft); "
            f"guy pull direction {direction:.0f} deg"
        )
        return direction
    return _float_or_none(inputs.pull_direction_deg) or 0.0


def _run_analysis(inputs: AnalysisInput) -> Dict[str, Any]:
    outcome = AnalysisOutcome()

    pole_ft = parse_feet(inputs.pole_height) or 0.0
    pole = get_pole_burial_data(pole_ft, inputs.pole_class)
    cable = get_cable_spec(inputs.attachment_type)
    span_ft = _resolve_span(inputs, outcome)

    # Clearance policy
    voltage = normalize_voltage_class(inputs.existing_power_voltage)
    environment = inputs.span_environment
    owner = classify_owner(inputs.preset_profile, inputs.existing_lines, inputs.job_owner)
    baseline = get_nesc_clearances(voltage, environment)
    resolved = resolve_clearances(baseline, [
        PresetLayer(inputs.preset_profile),
        OwnerFloorLayer(owner.is_first_energy, environment),
        SubmissionProfileLayer(inputs.submission_profile, environment),
        CustomOverrideLayer(
            inputs.custom_min_top_space,
            inputs.custom_road_clearance,
            inputs.custom_comm_to_power,
        ),
    ])
    clearances = resolved.table
    separation = compute_effective_separation(clearances, baseline, voltage, owner)

    # Placement
    candidates = collect_candidates(
        inputs.existing_power_height, inputs.drip_loop_height, inputs.existing_lines
    )
    selection = select_controlling_conductor(candidates, inputs.power_reference)
    comm_signal = has_comm_ownership_signal(selection, voltage, inputs.existing_lines)
    placement = recommend_attachment(PlacementContext(
        pole=pole,
        clearances=clearances,
        voltage_class=voltage,
        owner=owner,
        separation=separation,
        selection=selection,
        comm_owner_signal=comm_signal,
        is_new_construction=inputs.is_new_construction,
        existing_power_height=inputs.existing_power_height,
        min_comm_attach_ft=get_min_comm_attach(inputs.submission_profile),
        has_transformer=inputs.has_transformer,
    ))
    outcome.extend(placement.outcome)
    proposed_ft = placement.proposed_attach_ft

    if proposed_ft < clearances.ground_clearance:
        replacement = recommend_pole_replacement(
            pole.above_ground, clearances.ground_clearance + clearances.minimum_pole_top_space
        )
        if replacement["replace"]:
            outcome.warnings.append(
                f"Proposed attach {format_feet_inches(proposed_ft)} is below ground clearance "
                f"{format_feet_inches(clearances.ground_clearance)}; consider a taller pole "
                f"({format_feet_inches(replacement['suggested_height'])} above ground)"
            )

    # Span
    span, span_outcome = analyze_span(
        span_ft,
        proposed_ft,
        cable,
        clearances,
        separation.effective_separation_ft,
        wind_speed=inputs.wind_speed,
        cable_diameter=inputs.cable_diameter,
        ice_thickness_in=inputs.ice_thickness_in,
        adjacent_pole_height=inputs.adjacent_pole_height,
        adjacent_existing_power_height=inputs.adjacent_existing_power_height,
        adjacent_proposed_attach_ft=inputs.adjacent_proposed_attach_ft,
        attachment_type=inputs.attachment_type,
    )
    outcome.extend(span_outcome)

    if owner.is_first_energy:
        outcome.extend(check_first_energy_clearances(
            proposed_ft,
            selection.controlling,
            separation,
            transformer_bottom_height=inputs.transformer_bottom_height,
            street_light_height=inputs.street_light_height,
            street_light_drip_loop_height=inputs.street_light_drip_loop_height,
            existing_lines=inputs.existing_lines,
            midspan_ft=span.midspan_ft,
            sag_ft=span.sag_ft,
        ))

    # Make-ready
    mr_outcome, make_ready_lines, make_ready_total = analyze_existing_lines(
        inputs.existing_lines,
        proposed_ft,
        separation.effective_separation_inches,
        midspan_ft=span.midspan_ft,
        sag_ft=span.sag_ft,
    )
    outcome.extend(mr_outcome)

    # Guying
    guy = None
    if span_ft > 0 and pole.above_ground > 0 and proposed_ft > 0:
        pull_direction = _resolve_pull_direction(inputs, outcome)
        guy = calculate_down_guy(pole.above_ground, proposed_ft, cable, span_ft, span.wind, pull_direction)
        if guy is not None and guy.required:
            outcome.notes.append('Down-guy likely required based on span and wind loading')
            outcome.cost += guy.total_cost

    recommendation = asdict(placement.recommendation)
    results = {
        "pole": {
            "input_height": pole.height,
            "buried_ft": pole.buried,
            "above_ground_ft": pole.above_ground,
            "class_info": pole.class_info,
            "recommended_class": pole.recommended_class,
            "latitude": _float_or_none(inputs.pole_latitude),
            "longitude": _float_or_none(inputs.pole_longitude),
        },
        "attach": {
            "proposed_attach_ft": proposed_ft,
            "proposed_attach_fmt": format_feet_inches(proposed_ft),
            "recommendation": recommendation,
            "scenario": placement.scenario.value,
            "effective_separation_ft": separation.effective_separation_ft,
            "effective_separation_inches": separation.effective_separation_inches,
        },
        "span": {
            "span_ft": span.span_ft,
            "wind": span.wind,
            "sag_ft": span.sag_ft,
            "sag_fmt": format_feet_inches(span.sag_ft),
            "midspan_ft": span.midspan_ft,
            "midspan_fmt": format_feet_inches(span.midspan_ft),
            "neighbor_attach_ft": span.neighbor_attach_ft,
            "neighbor_source": span.neighbor_source,
        },
        "clearances": asdict(clearances),
        "clearance_layers": list(resolved.applied_layers),
        "owner": {
            "is_first_energy": owner.is_first_energy,
            "signal": owner.signal,
            "matched_hint": owner.matched_hint,
            "owner_floor_ft": separation.owner_floor_ft,
        },
        "make_ready_total": make_ready_total,
        "make_ready_lines": make_ready_lines,
        "guy": asdict(guy) if guy is not None else None,
    }

    return {
        "ok": True,
        "results": results,
        "warnings": outcome.warnings,
        "notes": outcome.notes,
        "cost": outcome.cost + make_ready_total,
        "errors": {},
    }


def compute_analysis(input_dict: Optional[Dict[str, Any]]) -> Dict[str, Any]:
    """
    Run a complete pole attachment analysis.

    Args:
        input_dict: Flat input record (see parse_input_dict)

    Returns:
        Dictionary with ok, results, warnings, notes, cost and errors.
        Never raises.
    """
    try:
        inputs = parse_input_dict(input_dict or {})
        errors = validate_input(inputs)
        if errors:
            logger.info(f"Analysis input rejected: {errors}")
            return _failure(errors)
        return _run_analysis(inputs)
    except Exception as e:
        logger.exception("Unexpected error during analysis")
        return _failure({"analysis": f"Analysis failed: {e}"})
