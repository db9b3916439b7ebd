"""
Base Clearance Layer Abstract Class.

This defines the interface that every clearance policy layer implements.
A layer is responsible ONLY for adjusting the clearance table - no
placement decisions, no span mechanics, no cost considerations.

Resolution is an immutable pipeline:
    NESC baseline -> named preset -> owner floor -> submission profile -> custom overrides

Each layer takes the prior ClearanceTable and returns a NEW table.
Later layers win on overlapping fields.
"""

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass, replace
from typing import Iterable, Tuple

from data_models import ClearanceTable

logger = logging.getLogger(__name__)


class ClearanceLayer(ABC):
    """
    Abstract base class for clearance policy layers.

    RESPONSIBILITIES:
    - Tighten or override clearance fields for one policy source
    - Report its own name for the resolution audit trail

    NOT RESPONSIBLE FOR:
    - Choosing attach heights
    - Warnings, notes or cost
    """

    def __init__(self, layer_name: str):
        """
        Initialize clearance layer.

        Args:
            layer_name: Human-readable name recorded in the audit trail
        """
        self.layer_name = layer_name

    @abstractmethod
    def apply(self, table: ClearanceTable) -> ClearanceTable:
        """
        Return a new table with this layer's policy applied.

        This method is deterministic and has no side effects.
        It does NOT modify the table passed in.
        """
        pass

    @staticmethod
    def _raise_floor(current: float, floor: float) -> float:
        """A floor only ever raises a value."""
        return max(current, floor)

    @staticmethod
    def _with(table: ClearanceTable, **changes) -> ClearanceTable:
        """Copy of the table with the given fields changed."""
        return replace(table, **changes) if changes else table


@dataclass(frozen=True)
class ResolvedClearances:
    """Final clearance table plus the names of the layers that changed it."""
    table: ClearanceTable
    applied_layers: Tuple[str, ...]


def resolve_clearances(
    base_table: ClearanceTable,
    layers: Iterable[ClearanceLayer],
) -> ResolvedClearances:
    """
    Run the clearance layers over the baseline table in order.

    Args:
        base_table: NESC baseline table
        layers: Layers in precedence order (lowest precedence first)

    Returns:
        ResolvedClearances with the final table and the audit trail
    """
    table = base_table
    applied = []
    for layer in layers:
        updated = layer.apply(table)
        if updated != table:
            applied.append(layer.layer_name)
            logger.debug(f"Clearance layer '{layer.layer_name}' changed table: {updated}")
        table = updated
    return ResolvedClearances(table=table, applied_layers=tuple(applied))
