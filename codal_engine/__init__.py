"""
Codal Engine Module.

This module contains the clearance policy layers that decide how much
vertical clearance a new communication attachment needs.

Resolution order (later layers win on overlapping fields):
    NESC baseline -> named preset -> owner floor -> submission profile -> custom overrides

CRITICAL PRINCIPLES:
- Every layer returns a NEW ClearanceTable
- Layers NEVER choose attach heights
- Layers NEVER consider cost
"""

from codal_engine.base import ClearanceLayer, ResolvedClearances, resolve_clearances
from codal_engine.nesc_baseline import NESC_CLEARANCE_TABLE, get_nesc_clearances
from codal_engine.preset_layer import (
    CLEARANCE_PRESETS,
    PresetLayer,
    apply_preset_object,
    apply_preset_to_clearances,
)
from codal_engine.owner_floor_layer import OwnerFloorLayer
from codal_engine.submission_profile_layer import (
    ENVIRONMENT_TARGET_KEYS,
    SubmissionProfileLayer,
    get_env_target,
)
from codal_engine.custom_override_layer import CustomOverrideLayer

__all__ = [
    'ClearanceLayer',
    'ResolvedClearances',
    'resolve_clearances',
    'NESC_CLEARANCE_TABLE',
    'get_nesc_clearances',
    'CLEARANCE_PRESETS',
    'PresetLayer',
    'apply_preset_object',
    'apply_preset_to_clearances',
    'OwnerFloorLayer',
    'ENVIRONMENT_TARGET_KEYS',
    'SubmissionProfileLayer',
    'get_env_target',
    'CustomOverrideLayer',
]
