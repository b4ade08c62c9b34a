# framecalc/checks/section.py
"""
SECTION CAPACITY CHECK
======================

Combined axial + bending stress ratio at 21 stations along each member:

    tension      (σa ≥ 0):  ratio = σa/ft + σb/fb
    compression  (σa < 0):  ratio = |σa|/fc + σb/fb

with σa = N/A and σb = |M(x)|/Z in N/mm². The member is NG when the
largest ratio exceeds 1.0. Allowable stresses come from the member's
strength descriptor:

    FValueStrength   checks.steel   (fc reduced for slenderness Lk/i_min)
    WoodStrength     checks.timber  (species or custom base values)

Members lacking area, section modulus or a usable strength descriptor get
an INSUFFICIENT_DATA row; the rest of the batch is still checked.
"""

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional, Sequence

import numpy as np

from ..config import CONFIG, EngineConfig
from ..elements import NormalizedModel, NormalizedMember
from ..kernel.buckling import effective_length_factor, member_slenderness
from ..materials import FValueStrength, WoodStrength, LoadTerm, AllowableStresses
from ..post import MemberForces
from . import steel, timber
from .buckling import min_radius_of_gyration

logger = logging.getLogger(__name__)

# kN/m² -> N/mm²
KN_M2_TO_STRESS = 1e-3


class CheckStatus(Enum):
    OK = "OK"
    NG = "NG"
    INSUFFICIENT_DATA = "insufficient_data"


@dataclass(frozen=True)
class SectionCheckResult:
    member: int
    status: CheckStatus
    stations: List[float] = field(default_factory=list)    # x from end i (m)
    ratios: List[float] = field(default_factory=list)
    max_ratio: float = 0.0
    max_station: float = 0.0
    governing_N: float = 0.0    # kN, tension positive
    governing_M: float = 0.0    # kN·m
    allowable: Optional[AllowableStresses] = None
    reason: str = ""


def member_allowables(
    nm: NormalizedMember,
    term: LoadTerm,
    config: EngineConfig,
) -> Optional[AllowableStresses]:
    """Allowable stresses by strength family, or None when data is missing."""
    strength = nm.member.strength
    if isinstance(strength, FValueStrength):
        if strength.F is None or strength.F <= 0:
            return None
        i_min = min_radius_of_gyration(nm.member)
        if i_min <= 0:
            return None
        Lk = effective_length_factor(nm.pair, config) * nm.L
        return steel.allowable_stresses(strength, nm.member.E, member_slenderness(Lk, i_min), term, config)
    if isinstance(strength, WoodStrength):
        base = timber.resolve_base(strength)
        if base is None or min(base.Fc, base.Ft, base.Fb) <= 0:
            return None
        return timber.allowable_stresses(base, term, config)
    return None


def stress_ratio(sigma_a: float, sigma_b: float, allowable: AllowableStresses) -> float:
    if sigma_a >= 0:
        return sigma_a / allowable.ft + sigma_b / allowable.fb
    return abs(sigma_a) / allowable.fc + sigma_b / allowable.fb


def check_member_section(
    nm: NormalizedMember,
    forces: MemberForces,
    term: LoadTerm = LoadTerm.LONG,
    config: EngineConfig = None,
) -> SectionCheckResult:
    config = config or CONFIG
    member = nm.member
    if member.A is None or member.A <= 0 or member.Z is None or member.Z <= 0:
        return SectionCheckResult(nm.index, CheckStatus.INSUFFICIENT_DATA, reason="A or Z missing")
    allowable = member_allowables(nm, term, config)
    if allowable is None:
        return SectionCheckResult(nm.index, CheckStatus.INSUFFICIENT_DATA, reason="strength data missing")

    N = forces.axial
    sigma_a = N / member.A * KN_M2_TO_STRESS
    xs, moments = forces.moments(config.n_stations)
    ratios = [
        stress_ratio(sigma_a, abs(M) / member.Z * KN_M2_TO_STRESS, allowable)
        for M in moments
    ]
    k = int(np.argmax(ratios))
    max_ratio = ratios[k]

    return SectionCheckResult(
        member=nm.index,
        status=CheckStatus.NG if max_ratio > 1.0 else CheckStatus.OK,
        stations=[float(x) for x in xs],
        ratios=[float(r) for r in ratios],
        max_ratio=float(max_ratio),
        max_station=float(xs[k]),
        governing_N=float(N),
        governing_M=float(moments[k]),
        allowable=allowable,
    )


def check_sections(
    model: NormalizedModel,
    member_forces: Sequence[MemberForces],
    load_term: LoadTerm = LoadTerm.LONG,
    config: Optional[EngineConfig] = None,
) -> List[SectionCheckResult]:
    """Section check of every member; failures are per-member rows."""
    config = config or CONFIG
    load_term = LoadTerm(load_term)
    if len(member_forces) != len(model.members):
        raise ValueError(f"Got forces for {len(member_forces)} members, model has {len(model.members)}")
    results = []
    for nm, forces in zip(model.members, member_forces):
        res = check_member_section(nm, forces, load_term, config)
        if res.status is CheckStatus.INSUFFICIENT_DATA:
            logger.warning("Member %d section check: %s", nm.index, res.reason)
        results.append(res)
    return results
