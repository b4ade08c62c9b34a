# framecalc/checks/buckling.py
"""Euler buckling safety factor per member."""

import logging
import math
from dataclasses import dataclass
from enum import Enum
from typing import List, Optional, Sequence

from ..config import CONFIG, EngineConfig
from ..elements import NormalizedModel, NormalizedMember
from ..kernel.buckling import effective_length_factor, euler_buckling_load, member_slenderness, radius_of_gyration
from ..model import Member
from ..post import MemberForces

logger = logging.getLogger(__name__)


class BucklingStatus(Enum):
    NO_RISK = "no risk"
    DANGER = "danger"
    CAUTION = "caution"
    SAFE = "safe"
    INSUFFICIENT_DATA = "insufficient_data"


@dataclass(frozen=True)
class BucklingResult:
    member: int
    status: BucklingStatus
    k: float = 0.0
    Lk: float = 0.0             # m
    i_min: float = 0.0          # m
    slenderness: float = 0.0
    Pcr: float = 0.0            # kN
    compression: float = 0.0    # kN
    safety_factor: Optional[float] = None
    reason: str = ""


def min_radius_of_gyration(member: Member) -> float:
    """
    Smallest available radius of gyration (m).

    Uses ix / iy when given; ix falls back to sqrt(I/A). Returns 0.0 when
    nothing usable is available.
    """
    ix = member.ix if member.ix is not None else radius_of_gyration(member.A or 0.0, member.I or 0.0)
    candidates = [r for r in (ix, member.iy) if r is not None and math.isfinite(r) and r > 0]
    return min(candidates) if candidates else 0.0


def buckling_status(safety_factor: float, config: EngineConfig = None) -> BucklingStatus:
    config = config or CONFIG
    if safety_factor < config.danger_sf:
        return BucklingStatus.DANGER
    if safety_factor < config.caution_sf:
        return BucklingStatus.CAUTION
    return BucklingStatus.SAFE


def analyze_member_buckling(
    nm: NormalizedMember,
    forces: MemberForces,
    config: EngineConfig = None,
) -> BucklingResult:
    config = config or CONFIG
    member = nm.member
    i_min = min_radius_of_gyration(member)
    if member.A is None or member.A <= 0 or i_min <= 0:
        return BucklingResult(
            member=nm.index,
            status=BucklingStatus.INSUFFICIENT_DATA,
            reason="area or radius of gyration missing",
        )

    k = effective_length_factor(nm.pair, config)
    Lk = k * nm.L
    I_min = i_min ** 2 * member.A
    Pcr = euler_buckling_load(nm.E, I_min, nm.L, k)
    compression = forces.max_compression

    result = dict(
        member=nm.index,
        k=k,
        Lk=Lk,
        i_min=i_min,
        slenderness=member_slenderness(Lk, i_min),
        Pcr=Pcr,
        compression=compression,
    )
    if compression <= 0.0:
        return BucklingResult(status=BucklingStatus.NO_RISK, **result)

    sf = Pcr / compression
    return BucklingResult(status=buckling_status(sf, config), safety_factor=sf, **result)


def analyze_buckling(
    model: NormalizedModel,
    member_forces: Sequence[MemberForces],
    config: Optional[EngineConfig] = None,
) -> List[BucklingResult]:
    """
    Elastic buckling check of every member.

    SF = Pcr / |N_compression| with Pcr = π²·E·I_min / Lk², I_min = i_min²·A
    and the larger compressive end force. SF < 1 danger, < 2 caution,
    otherwise safe; members without compression have no risk.
    """
    config = config or CONFIG
    if len(member_forces) != len(model.members):
        raise ValueError(f"Got forces for {len(member_forces)} members, model has {len(model.members)}")
    results = []
    for nm, forces in zip(model.members, member_forces):
        res = analyze_member_buckling(nm, forces, config)
        if res.status is BucklingStatus.INSUFFICIENT_DATA:
            logger.warning("Member %d buckling: %s", nm.index, res.reason)
        results.append(res)
    return results
