"""
Controlling-Conductor Selector.

Picks the single existing conductor that governs the new attachment's
maximum allowed height.

Candidates:
- existing power conductor height
- drip loop height
- existing lines typed "neutral" or "secondary"

Selection:
- explicit reference mode -> lowest candidate of that category (or None)
- "auto"                  -> lowest candidate overall
"""

import logging
from dataclasses import dataclass
from typing import Any, List, Optional

from data_models import (
    ConductorName,
    ControllingConductor,
    ExistingLine,
    PowerReference,
    VoltageClass,
)
from height_units import parse_feet

logger = logging.getLogger(__name__)


# reference mode -> conductor name it selects
REFERENCE_MODE_NAMES = {
    PowerReference.POWER.value: ConductorName.POWER_CONDUCTOR.value,
    PowerReference.DRIP_LOOP.value: ConductorName.DRIP_LOOP.value,
    PowerReference.NEUTRAL.value: ConductorName.NEUTRAL.value,
    PowerReference.SECONDARY.value: ConductorName.SECONDARY.value,
}


@dataclass(frozen=True)
class ConductorSelection:
    """Candidates considered and the one selected."""
    candidates: List[ControllingConductor]
    controlling: Optional[ControllingConductor]

    @property
    def power_present(self) -> bool:
        return self.controlling is not None


def _positive(value: Any) -> Optional[float]:
    ft = parse_feet(value)
    if ft is None or ft <= 0:
        return None
    return float(ft)


def collect_candidates(
    existing_power_height: Any,
    drip_loop_height: Any,
    existing_lines: Optional[List[ExistingLine]],
) -> List[ControllingConductor]:
    """
    Gather controlling-conductor candidates, sorted by height ascending.

    Lines with unparseable heights are skipped.
    """
    candidates = []

    power_ft = _positive(existing_power_height)
    if power_ft is not None:
        candidates.append(ControllingConductor(ConductorName.POWER_CONDUCTOR.value, power_ft))

    drip_ft = _positive(drip_loop_height)
    if drip_ft is not None:
        candidates.append(ControllingConductor(ConductorName.DRIP_LOOP.value, drip_ft))

    for line in existing_lines or []:
        line_type = line.type.lower()
        if 'neutral' in line_type:
            name = ConductorName.NEUTRAL.value
        elif 'secondary' in line_type:
            name = ConductorName.SECONDARY.value
        else:
            continue
        line_ft = _positive(line.height)
        if line_ft is not None:
            candidates.append(ControllingConductor(name, line_ft))

    return sorted(candidates, key=lambda c: c.height_ft)


def select_controlling_conductor(
    candidates: List[ControllingConductor],
    power_reference: Optional[str] = PowerReference.AUTO.value,
) -> ConductorSelection:
    """
    Apply the reference mode to the candidate list.

    Args:
        candidates: Candidates sorted ascending by height
        power_reference: 'auto', 'power', 'dripLoop', 'neutral' or 'secondary'

    Returns:
        ConductorSelection
    """
    wanted = REFERENCE_MODE_NAMES.get(power_reference or PowerReference.AUTO.value)
    if wanted is None:
        controlling = candidates[0] if candidates else None
    else:
        controlling = next((c for c in candidates if c.name == wanted), None)

    logger.debug(f"Controlling conductor ({power_reference or 'auto'}): {controlling}")
    return ConductorSelection(candidates=list(candidates), controlling=controlling)


def has_comm_ownership_signal(
    selection: ConductorSelection,
    voltage_class: str,
    existing_lines: Optional[List[ExistingLine]],
) -> bool:
    """
    Detect the "comm owner, no power data" situation.

    True when no candidate exists and either the job voltage class is
    communication or an existing communication line names its company.
    """
    if selection.candidates:
        return False
    if voltage_class == VoltageClass.COMMUNICATION.value:
        return True
    return any(
        'communication' in line.type.lower() and line.company_name.strip()
        for line in existing_lines or []
    )
