"""
Process-wide conversion and material constants.

Injected into the engine rather than read as globals so the math can be
exercised against other material or unit systems.
"""

import math
from dataclasses import dataclass

from .config import Settings, settings as default_settings


@dataclass(frozen=True)
class EngineConstants:
    murubba_sq_m: float = 9.290304      # m² per murubba (100 sq ft)
    density_t_per_m3: float = 2.7       # tonnes per m³
    feet_to_meters: float = 0.3048
    inches_to_cm: float = 2.54

    def __post_init__(self):
        for name in ("murubba_sq_m", "density_t_per_m3", "feet_to_meters", "inches_to_cm"):
            value = getattr(self, name)
            if not isinstance(value, (int, float)) or not math.isfinite(value) or value <= 0:
                raise ValueError(f"{name} must be a positive finite number, got {value!r}")

    @classmethod
    def from_settings(cls, cfg: Settings = None) -> "EngineConstants":
        """Build constants from application settings (env / .env)."""
        cfg = cfg or default_settings
        return cls(
            murubba_sq_m=cfg.MURUBBA_SQ_M,
            density_t_per_m3=cfg.STONE_DENSITY_T_PER_M3,
            feet_to_meters=cfg.FEET_TO_METERS,
            inches_to_cm=cfg.INCHES_TO_CM,
        )


DEFAULT_CONSTANTS = EngineConstants()
