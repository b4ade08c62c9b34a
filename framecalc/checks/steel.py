# framecalc/checks/steel.py
"""Allowable stresses for F-value materials (steel, stainless steel, aluminium)."""

import math

from ..config import CONFIG, EngineConfig
from ..materials import FValueStrength, LoadTerm, AllowableStresses


def load_term_factor(term: LoadTerm, config: EngineConfig = None) -> float:
    """Safety factor applied to F: 1.5 long-term, 1.0 short-term."""
    config = config or CONFIG
    return config.steel_factor_long if LoadTerm(term) is LoadTerm.LONG else config.steel_factor_short


def limit_slenderness(E: float, F: float) -> float:
    """
    Critical slenderness Λ = π·sqrt(E / (0.6·F)).

    Args:
        E: Young's modulus (N/mm²)
        F: Design reference strength (N/mm²)
    """
    return math.pi * math.sqrt(E / (0.6 * F))


def compression_allowable(F: float, E: float, slenderness: float, factor: float) -> float:
    """
    Allowable compressive stress reduced for column slenderness λ.

        λ ≤ Λ:  fc = (1 − 0.4·(λ/Λ)²)·F / factor
        λ > Λ:  fc = 0.277·F / (λ/Λ)²
    """
    ratio = slenderness / limit_slenderness(E, F)
    if ratio <= 1.0:
        return (1.0 - 0.4 * ratio ** 2) * F / factor
    return 0.277 * F / ratio ** 2


def allowable_stresses(
    strength: FValueStrength,
    E: float,
    slenderness: float,
    term: LoadTerm = LoadTerm.LONG,
    config: EngineConfig = None,
) -> AllowableStresses:
    """
    Allowable stresses of a metal member.

    Args:
        strength: F-value descriptor
        E: Young's modulus (N/mm²)
        slenderness: λ = Lk / i_min
        term: Long- or short-term loading
    """
    F = strength.F
    factor = load_term_factor(term, config)
    return AllowableStresses(
        ft=F / factor,
        fc=compression_allowable(F, E, slenderness, factor),
        fb=F / factor,
        fs=F / (factor * math.sqrt(3.0)),
    )
