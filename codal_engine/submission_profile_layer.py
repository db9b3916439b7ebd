"""
Submission Profile Layer.

A submission profile is a per-job set of utility/region-specific targets.

Profile keys (all decimal feet, numbers or height strings):
- env*Ft        absolute ground-clearance target for the current span
                environment (see ENVIRONMENT_TARGET_KEYS)
- commToPower   raises power_clearance_distribution
- minTopSpace   raises minimum_pole_top_space
- roadClearance raises road_clearance
- minCommAttachFt  lowest allowed comm attach height (used by the recommender)
"""

from typing import Dict, Any, Optional

from codal_engine.base import ClearanceLayer
from data_models import ClearanceTable
from height_units import parse_feet


# span environment tag -> profile key
ENVIRONMENT_TARGET_KEYS: Dict[str, str] = {
    'road': 'envRoadFt',
    'residential': 'envResidentialFt',
    'pedestrian': 'envPedestrianFt',
    'field': 'envFieldFt',
    'residentialYard': 'envResidentialYardFt',
    'residentialDriveway': 'envResidentialDrivewayFt',
    'nonResidentialDriveway': 'envNonResidentialDrivewayFt',
    'waterway': 'envWaterwayFt',
    'wvHighway': 'envWVHighwayFt',
    'paHighway': 'envPAHighwayFt',
    'ohHighway': 'envOHHighwayFt',
    'interstate': 'envInterstateFt',
    'interstateNewCrossing': 'envInterstateNewCrossingFt',
    'railroad': 'envRailroadFt',
}

# profile key -> ClearanceTable field; these only raise
PROFILE_FLOOR_FIELDS = {
    'commToPower': 'power_clearance_distribution',
    'minTopSpace': 'minimum_pole_top_space',
    'roadClearance': 'road_clearance',
}


def _positive_feet(value: Any) -> Optional[float]:
    ft = parse_feet(value)
    if ft is None or ft <= 0:
        return None
    return float(ft)


def get_env_target(profile: Optional[Dict[str, Any]], environment: str) -> Optional[float]:
    """
    Ground-clearance target a profile sets for an environment.

    Returns:
        Decimal feet, or None when the profile has no (valid) target
    """
    if not profile:
        return None
    key = ENVIRONMENT_TARGET_KEYS.get(environment)
    if key is None:
        return None
    return _positive_feet(profile.get(key))


def get_min_comm_attach(profile: Optional[Dict[str, Any]]) -> Optional[float]:
    """Lowest allowed comm attach height from a profile, if any."""
    if not profile:
        return None
    return _positive_feet(profile.get('minCommAttachFt'))


class SubmissionProfileLayer(ClearanceLayer):
    """Per-job submission profile overrides."""

    def __init__(self, profile: Optional[Dict[str, Any]], environment: str = "road"):
        super().__init__("submission-profile")
        self.profile = profile or {}
        self.environment = environment

    def apply(self, table: ClearanceTable) -> ClearanceTable:
        if not self.profile:
            return table

        changes = {}
        # Environment target is an absolute assignment, not a floor
        target = get_env_target(self.profile, self.environment)
        if target is not None:
            changes['ground_clearance'] = target

        for profile_key, table_field in PROFILE_FLOOR_FIELDS.items():
            value = _positive_feet(self.profile.get(profile_key))
            if value is not None:
                changes[table_field] = self._raise_floor(getattr(table, table_field), value)

        return self._with(table, **changes)
