# framecalc/kernel/buckling.py
"""Elastic (Euler) column buckling formulas."""

import numpy as np

from ..config import CONFIG, EngineConfig
from .connections import ConnectionPair


def effective_length_factor(pair: ConnectionPair, config: EngineConfig = None) -> float:
    """
    Effective-length factor k from the member's end conditions.

    rigid-rigid → 0.5, one end pinned → 0.7, pinned-pinned → 1.0
    """
    config = config or CONFIG
    return config.effective_length[pair.length_category]


def radius_of_gyration(A: float, I: float) -> float:
    """r = sqrt(I/A), or 0.0 for non-positive inputs."""
    if A <= 0 or I <= 0:
        return 0.0
    return float(np.sqrt(I / A))


def member_slenderness(Lk: float, r: float) -> float:
    """
    Slenderness ratio λ = Lk / r.

    Args:
        Lk: Buckling length
        r: Radius of gyration (same length unit)
    """
    if r <= 0:
        return float('inf')
    return Lk / r


def euler_buckling_load(E: float, I: float, L: float, k: float = 1.0) -> float:
    """
    Euler critical load P_cr = π²EI / (kL)².

    Units follow the inputs: E in kN/m², I in m⁴, L in m → kN.
    """
    Le = k * L
    return (np.pi ** 2 * E * I) / (Le ** 2)
