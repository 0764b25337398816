"""Engine defaults and behaviour switches."""

from __future__ import annotations
from pydantic import BaseModel


class EngineConfig(BaseModel):
    """Tunable defaults applied by the command engine."""
    default_ceiling_height_ft: float = 8.0
    door_height_ft: float = 6.67          # doors, sliding doors, french doors
    window_height_ft: float = 4.0         # windows and archways
    window_sill_height_ft: float = 3.0
    default_damage_extent_ft: float = 2.0
    position_clearance_ft: float = 0.5    # gap kept by left/right placement
    clamp_initial_placement: bool = False  # move_opening always clamps
