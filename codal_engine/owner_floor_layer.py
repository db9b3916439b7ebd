"""
Owner Floor Layer.

FirstEnergy-family owners require more clearance than the NESC baseline.
This layer only RAISES fields; it never lowers a value set earlier.
"""

from codal_engine.base import ClearanceLayer
from data_models import ClearanceTable

FE_COMM_TO_POWER_FT = 44 / 12
FE_MIN_TOP_SPACE_FT = 2.0
FE_ROAD_GROUND_CLEARANCE_FT = 18.0


class OwnerFloorLayer(ClearanceLayer):
    """Owner-specific clearance floors (FirstEnergy family only)."""

    def __init__(self, is_first_energy: bool, environment: str = "road"):
        super().__init__("owner-floor:firstEnergy")
        self.is_first_energy = is_first_energy
        self.environment = environment

    def apply(self, table: ClearanceTable) -> ClearanceTable:
        if not self.is_first_energy:
            return table

        changes = {
            'power_clearance_distribution': self._raise_floor(
                table.power_clearance_distribution, FE_COMM_TO_POWER_FT
            ),
            'minimum_pole_top_space': self._raise_floor(
                table.minimum_pole_top_space, FE_MIN_TOP_SPACE_FT
            ),
        }
        if self.environment == "road":
            changes['ground_clearance'] = self._raise_floor(
                table.ground_clearance, FE_ROAD_GROUND_CLEARANCE_FT
            )
        return self._with(table, **changes)
