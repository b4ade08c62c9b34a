# framecalc/config.py
"""
Engine configuration and defaults.
"""

from dataclasses import dataclass
from typing import Dict


@dataclass
class EngineConfig:
    """Numerical constants used across the analysis engine."""

    # Self-weight
    gravity: float = 9.80665            # m/s²
    inclination_band_deg: float = 5.0   # ± band around 0°/180° and 90°

    # Gaussian elimination
    pivot_tol: float = 1e-10
    residual_tol: float = 1e-9

    # Supports / diagnostics
    prescribed_tol: float = 1e-9        # m or rad
    zero_diagonal_tol: float = 1e-10

    # Section check
    n_stations: int = 21
    steel_factor_long: float = 1.5
    steel_factor_short: float = 1.0
    wood_factor_long: float = 1.1 / 3.0
    wood_factor_short: float = 2.0 / 3.0

    # Buckling
    effective_length: Dict[str, float] = None
    danger_sf: float = 1.0
    caution_sf: float = 2.0

    def __post_init__(self):
        if self.effective_length is None:
            self.effective_length = {
                'rigid-rigid': 0.5,
                'mixed': 0.7,
                'pinned-pinned': 1.0,
            }


# Global config instance
CONFIG = EngineConfig()
