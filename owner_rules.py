"""
Owner Rule Engine.

Classifies the owning utility of a job and computes the effective
communication-to-power separation ("owner floor").

CLASSIFICATION (first matching signal wins, any one is enough):
1. preset     - preset name is in the FirstEnergy-family preset set
2. company    - an existing line's company name contains a brand hint
3. job-owner  - the job-owner free text contains a brand hint

EFFECTIVE SEPARATION:
    effective = max(base separation, owner floor)
where the owner floor comes from OWNER_FLOOR_TABLE, a decision table
keyed by (ownership tag, voltage class).
"""

import logging
from dataclasses import dataclass
from typing import Dict, Any, List, Optional, Tuple

from data_models import ClearanceTable, ExistingLine, VoltageClass
from height_units import feet_to_inches

logger = logging.getLogger(__name__)


# ============================================================================
# OWNER HINTS
# ============================================================================

FIRSTENERGY_PRESET_KEYS = frozenset([
    'firstEnergy',
    'monPower',
    'potomacEdison',
    'penelec',
    'metEd',
    'jcpl',
])

# Matched case-insensitively as substrings
FIRSTENERGY_HINTS: Tuple[str, ...] = (
    'firstenergy',
    'first energy',
    'mon power',
    'monongahela',
    'potomac edison',
    'penelec',
    'met-ed',
    'jcp&l',
    'jersey central',
    'west penn power',
    'penn power',
)

OWNER_FIRST_ENERGY = "firstEnergy"
OWNER_GENERIC = "generic"

SIGNAL_PRESET = "preset"
SIGNAL_COMPANY = "company-name"
SIGNAL_JOB_OWNER = "job-owner"


# ============================================================================
# OWNER FLOOR DECISION TABLE
# ============================================================================
# Value is the floor in feet, or BASELINE_TRANSMISSION meaning "use the
# baseline NESC transmission separation unchanged".

BASELINE_TRANSMISSION = "baseline-transmission"

FE_FLOOR_FT = 44 / 12
GENERIC_FLOOR_FT = 40 / 12

OWNER_FLOOR_TABLE: Dict[Tuple[str, str], Any] = {
    (OWNER_FIRST_ENERGY, VoltageClass.COMMUNICATION.value): FE_FLOOR_FT,
    (OWNER_FIRST_ENERGY, VoltageClass.DISTRIBUTION.value): FE_FLOOR_FT,
    (OWNER_FIRST_ENERGY, VoltageClass.TRANSMISSION.value): BASELINE_TRANSMISSION,
    (OWNER_GENERIC, VoltageClass.COMMUNICATION.value): GENERIC_FLOOR_FT,
    (OWNER_GENERIC, VoltageClass.DISTRIBUTION.value): GENERIC_FLOOR_FT,
    (OWNER_GENERIC, VoltageClass.TRANSMISSION.value): BASELINE_TRANSMISSION,
}


@dataclass(frozen=True)
class OwnerClassification:
    """Result of owner classification."""
    is_first_energy: bool
    signal: Optional[str] = None
    matched_hint: Optional[str] = None

    @property
    def tag(self) -> str:
        return OWNER_FIRST_ENERGY if self.is_first_energy else OWNER_GENERIC


@dataclass(frozen=True)
class EffectiveSeparation:
    """Owner floor and the separation actually used for placement."""
    base_separation_ft: float
    owner_floor_ft: float
    effective_separation_ft: float
    effective_separation_inches: int


def match_first_energy_hint(text: Any) -> Optional[str]:
    """Return the first FirstEnergy brand hint contained in text, if any."""
    haystack = str(text or "").lower()
    if not haystack:
        return None
    for hint in FIRSTENERGY_HINTS:
        if hint in haystack:
            return hint
    return None


def classify_owner(
    preset_profile: Optional[str] = None,
    existing_lines: Optional[List[ExistingLine]] = None,
    job_owner: str = "",
) -> OwnerClassification:
    """
    Classify the job owner against the FirstEnergy family.

    Args:
        preset_profile: Named preset key
        existing_lines: Existing attachments (company names are scanned)
        job_owner: Free-text owner string

    Returns:
        OwnerClassification with the signal that fired
    """
    if preset_profile in FIRSTENERGY_PRESET_KEYS:
        return OwnerClassification(True, SIGNAL_PRESET, preset_profile)

    for line in existing_lines or []:
        hint = match_first_energy_hint(line.company_name)
        if hint:
            return OwnerClassification(True, SIGNAL_COMPANY, hint)

    hint = match_first_energy_hint(job_owner)
    if hint:
        return OwnerClassification(True, SIGNAL_JOB_OWNER, hint)

    return OwnerClassification(False)


def lookup_owner_floor(owner_tag: str, voltage_class: str, baseline: ClearanceTable) -> float:
    """
    Look up the owner floor from the decision table.

    Unknown voltage classes use the communication row.
    """
    key = (owner_tag, voltage_class)
    if key not in OWNER_FLOOR_TABLE:
        key = (owner_tag, VoltageClass.COMMUNICATION.value)
    floor = OWNER_FLOOR_TABLE[key]
    if floor == BASELINE_TRANSMISSION:
        return baseline.power_clearance_transmission
    return floor


def compute_effective_separation(
    clearances: ClearanceTable,
    baseline: ClearanceTable,
    voltage_class: str,
    owner: OwnerClassification,
) -> EffectiveSeparation:
    """
    Compute the effective comm-to-power separation.

    Args:
        clearances: Fully resolved clearance table
        baseline: Unlayered NESC table (source of the transmission floor)
        voltage_class: Normalized voltage class
        owner: Owner classification

    Returns:
        EffectiveSeparation (inches rounded half-up)
    """
    if voltage_class == VoltageClass.TRANSMISSION.value:
        base = clearances.power_clearance_transmission
    else:
        base = clearances.power_clearance_distribution

    floor = lookup_owner_floor(owner.tag, voltage_class, baseline)
    effective = max(base, floor)
    inches = feet_to_inches(effective)

    logger.debug(
        f"Effective separation: base={base:.3f} ft, floor={floor:.3f} ft "
        f"({owner.tag}/{voltage_class}) -> {inches} in"
    )
    return EffectiveSeparation(
        base_separation_ft=base,
        owner_floor_ft=floor,
        effective_separation_ft=effective,
        effective_separation_inches=inches,
    )


def get_firstenergy_requirements() -> Dict[str, List[str]]:
    """
    FirstEnergy application checklist.

    Returns:
        Fresh dictionary of checklists, safe for callers to mutate
    """
    return {
        'application_requirements': [
            'Pole Attachment Agreement executed',
            'SPANS electronic submission required (max 25 poles per application)',
            'Pole profile for each pole attachment point',
            'Site map with route connectivity shown',
            'High resolution photos taken within 30 days',
            'GPS coordinates required if no visible pole tag',
            'Load analysis required for spans exceeding 250 feet',
            'Engineering drawings for complex attachments',
        ],
        'prohibited_items': [
            'Boxing and extension arms not permitted',
            'Additional equipment mounting on pole',
            'Steel transmission structure attachments',
            'Overlashing prohibited in New Jersey territory',
            'Grounding to pole without utility approval',
            'Modifications to existing pole hardware',
        ],
        'engineering_checks': [
            'NESC Table 232-1 compliance verification',
            'Pole loading analysis if span > 250ft or guy required',
            'Make-ready construction cost assessment',
            'Ground clearance verification at midspan',
            'Post-construction inspection scheduling',
            'Storm restoration priority classification',
        ],
        'make_ready_process': [
            'Utility performs make-ready work',
            'Attacher pays for make-ready costs',
            'Standard make-ready: $150-300 per attachment point',
            'Complex make-ready: $500-1500 per pole',
            'Timeline: 45-90 days after approval',
        ],
    }
