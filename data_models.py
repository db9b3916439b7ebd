"""
Data models for the pole attachment clearance analysis engine.

This module defines the core data structures used throughout the system.
All models follow strict separation of concerns: clearance policy,
placement decisions, span mechanics and cost are kept separate.

All heights and distances are decimal feet unless a field name says
otherwise (``*_in`` / ``*_inches``).
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, List, Dict, Any


class VoltageClass(Enum):
    """Voltage class of the existing power plant on the pole."""
    COMMUNICATION = "communication"
    DISTRIBUTION = "distribution"
    TRANSMISSION = "transmission"


class PowerReference(Enum):
    """User-selectable reference mode for the controlling conductor."""
    AUTO = "auto"
    POWER = "power"
    DRIP_LOOP = "dripLoop"
    NEUTRAL = "neutral"
    SECONDARY = "secondary"


class ConductorName(Enum):
    """Names a controlling conductor may carry."""
    POWER_CONDUCTOR = "power conductor"
    DRIP_LOOP = "drip loop"
    NEUTRAL = "neutral"
    SECONDARY = "secondary"
    POLE_TOP = "pole top"


class Scenario(Enum):
    """Attachment height scenarios, listed in evaluation priority order."""
    COMM_OWNER_NO_POWER = "comm-owner-no-power"
    POWER_PRESENT = "power-present"
    NEW_CONSTRUCTION = "new-construction"
    VOLTAGE_DEFAULT = "voltage-default"


class RecommendationBasis(Enum):
    """Basis tag recorded on a placement recommendation."""
    OWNER_COMM_NO_POWER = "owner-comm/no-power"
    NESC = "NESC"
    NESC_TRANSMISSION = "NESC-transmission"
    FIRST_ENERGY = "FE"
    NEW_CONSTRUCTION = "new-construction"
    VOLTAGE_DEFAULT = "voltage-default"


@dataclass(frozen=True)
class ClearanceTable:
    """
    Resolved clearance policy for one analysis.

    Each resolution layer returns a NEW table (see codal_engine); a table
    is never mutated once built. The comm-to-comm fields are only present
    for the communication voltage class.
    """
    ground_clearance: float
    road_clearance: float
    power_clearance_distribution: float
    power_clearance_transmission: float
    minimum_pole_top_space: float
    comm_to_comm_vertical: Optional[float] = None
    comm_to_comm_midspan: Optional[float] = None
    neutral_clearance: Optional[float] = None
    drop_wire_clearance: Optional[float] = None


@dataclass(frozen=True)
class CableSpec:
    """Attachment cable catalog entry."""
    key: str
    label: str
    weight: float  # lb/ft
    tension: float  # rated tension, lb
    diameter: float  # inches


@dataclass(frozen=True)
class PoleData:
    """Burial depth and above-ground height for a pole."""
    height: float
    buried: float
    above_ground: float
    class_info: str
    recommended_class: str


@dataclass
class ExistingLine:
    """
    Existing attachment on the pole.

    Height fields stay textual; they are parsed with height_units.parse_feet
    when needed so that garbage input degrades to None instead of raising.
    """
    type: str = ""
    height: Any = ""
    company_name: str = ""
    make_ready: bool = False
    make_ready_height: Any = ""

    @classmethod
    def from_dict(cls, raw: Dict[str, Any]) -> 'ExistingLine':
        """Build from a plain record, accepting snake_case or camelCase keys."""
        raw = raw or {}
        return cls(
            type=str(raw.get('type') or ''),
            height=raw.get('height', ''),
            company_name=str(raw.get('company_name', raw.get('companyName')) or ''),
            make_ready=bool(raw.get('make_ready', raw.get('makeReady', False))),
            make_ready_height=raw.get('make_ready_height', raw.get('makeReadyHeight', '')),
        )


@dataclass(frozen=True)
class ControllingConductor:
    """The single existing conductor that governs the new attachment height."""
    name: str
    height_ft: float


@dataclass(frozen=True)
class Recommendation:
    """Human-readable placement recommendation."""
    basis: str
    detail: str
    clearance_in: int
    controlling: Optional[ControllingConductor]


@dataclass(frozen=True)
class GuyResult:
    """Down-guy structural advisory."""
    required: bool
    tension: float
    angle: float
    lead_distance: float
    guy_height: float
    pull_direction: float
    total_cost: float


@dataclass
class AnalysisInput:
    """
    Caller-supplied inputs for one analysis call.

    Built by backend.services.analysis_service.parse_input_dict and treated
    as read-only for the duration of the call.
    """
    pole_height: Any = None
    pole_class: str = ""
    pole_latitude: Any = None
    pole_longitude: Any = None
    adjacent_pole_height: Any = None
    adjacent_pole_latitude: Any = None
    adjacent_pole_longitude: Any = None
    adjacent_existing_power_height: Any = None
    adjacent_proposed_attach_ft: Any = None
    existing_power_height: Any = None
    existing_power_voltage: str = VoltageClass.DISTRIBUTION.value
    span_distance: Any = None
    is_new_construction: bool = False
    attachment_type: str = "communication"
    cable_diameter: Any = None
    wind_speed: Any = None
    ice_thickness_in: Any = None
    span_environment: str = "road"
    drip_loop_height: Any = None
    street_light_height: Any = None
    street_light_drip_loop_height: Any = None
    transformer_bottom_height: Any = None
    has_transformer: bool = False
    existing_lines: List[ExistingLine] = field(default_factory=list)
    preset_profile: Optional[str] = None
    submission_profile: Optional[Dict[str, Any]] = None
    custom_min_top_space: Any = None
    custom_road_clearance: Any = None
    custom_comm_to_power: Any = None
    power_reference: str = PowerReference.AUTO.value
    job_owner: str = ""
    pull_direction_deg: Any = None
    incoming_bearing_deg: Any = None
    outgoing_bearing_deg: Any = None


@dataclass
class AnalysisOutcome:
    """
    Return-value accumulator for one sub-computation.

    Every engine step returns its own warnings, notes and cost additions;
    the orchestrator concatenates them.
    """
    warnings: List[str] = field(default_factory=list)
    notes: List[str] = field(default_factory=list)
    cost: float = 0.0

    def extend(self, other: 'AnalysisOutcome') -> None:
        """Fold another outcome into this one."""
        self.warnings.extend(other.warnings)
        self.notes.extend(other.notes)
        self.cost += other.cost
