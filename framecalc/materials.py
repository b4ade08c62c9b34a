"""
MATERIAL STRENGTH DESCRIPTORS
=============================

Members carry a tagged strength descriptor that the section checker
dispatches on:

    FValueStrength   steel, stainless steel and aluminium members, defined by
                     a single design reference strength F (N/mm²)
    WoodStrength     timber members, defined either by a species reference
                     (looked up in checks.timber.WOOD_SPECIES) or by custom
                     base strengths

Values are in N/mm², matching the units the section checker reports
stresses in.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Union


class MetalFamily(Enum):
    STEEL = "steel"
    STAINLESS = "stainless"
    ALUMINUM = "aluminum"


@dataclass(frozen=True)
class FValueStrength:
    """Design reference strength F for a metal member (N/mm²)."""
    F: float
    family: MetalFamily = MetalFamily.STEEL


@dataclass(frozen=True)
class WoodBase:
    """Base strengths of a timber grade (N/mm²)."""
    Fc: float   # Compression parallel to grain
    Ft: float   # Tension parallel to grain
    Fb: float   # Bending
    Fs: float   # Shear


@dataclass(frozen=True)
class WoodStrength:
    """
    Timber strength, by species key or custom base values.

    Exactly one of `species` / `base` is expected; `base` wins when both
    are given.
    """
    species: Optional[str] = None
    base: Optional[WoodBase] = None


StrengthDescriptor = Union[FValueStrength, WoodStrength]


class LoadTerm(Enum):
    """Load-duration term for allowable stresses."""
    LONG = "long"
    SHORT = "short"


@dataclass(frozen=True)
class AllowableStresses:
    """Allowable stresses of a member (N/mm²)."""
    ft: float   # Tension
    fc: float   # Compression (slenderness-reduced for metals)
    fb: float   # Bending
    fs: float   # Shear
