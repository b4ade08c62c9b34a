# framecalc/checks - member design checks
"""Allowable-stress section checks and Euler buckling safety factors."""

from .section import (
    CheckStatus,
    SectionCheckResult,
    check_member_section,
    check_sections,
)

from .buckling import (
    BucklingStatus,
    BucklingResult,
    analyze_member_buckling,
    analyze_buckling,
)

from .timber import WOOD_SPECIES

__all__ = [
    # Section
    'CheckStatus',
    'SectionCheckResult',
    'check_member_section',
    'check_sections',
    # Buckling
    'BucklingStatus',
    'BucklingResult',
    'analyze_member_buckling',
    'analyze_buckling',
    # Timber
    'WOOD_SPECIES',
]
