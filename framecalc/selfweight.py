# selfweight.py
"""
SELF-WEIGHT DISTRIBUTION
========================

Turns each member's mass into loads the assembler understands. The total
weight of a member is

    W = ρ·A·L·g / 1000        (kN, with ρ in kg/m³, A in m², L in m)

and the member is classified by its angle θ = atan2(dy, dx):

    horizontal   |θ| within ±band of 0° or 180°
                 → uniform load w = W/L, no nodal load
    vertical     |θ| within ±band of 90°
                 → W as a concentrated py at the lower end node
    inclined     otherwise
                 → uniform load w = (W/L)·|cos θ| plus W·|sin θ| split
                   equally as px on both end nodes

The band has no blending: a member just inside or just outside 5° (or 85°)
switches category under a tiny coordinate change.

Uniform loads act along local −y, so w is negated for members drawn right
to left to keep the load pointing down. The nodal px is directed against
the horizontal drift of that perpendicular load (sign −(c·s)).
"""

import logging
import math
from collections import defaultdict
from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Optional, Sequence

import numpy as np

from .config import CONFIG, EngineConfig
from .elements import element_geometry
from .model import Node, Member, NodalLoad, MemberUniformLoad

logger = logging.getLogger(__name__)


class SelfWeightKind(Enum):
    DISTRIBUTED = "distributed"     # horizontal members
    CONCENTRATED = "concentrated"   # vertical members
    MIXED = "mixed"                 # inclined members


@dataclass
class SelfWeightLoads:
    """Accumulated self-weight loads, keyed by member / node position."""
    member_loads: Dict[int, float] = field(default_factory=dict)
    node_loads: Dict[int, np.ndarray] = field(default_factory=dict)
    kinds: Dict[int, SelfWeightKind] = field(default_factory=dict)
    weights: Dict[int, float] = field(default_factory=dict)

    @property
    def total_weight(self) -> float:
        return float(sum(self.weights.values()))

    def as_member_loads(self) -> List[MemberUniformLoad]:
        return [MemberUniformLoad(m, w) for m, w in sorted(self.member_loads.items())]

    def as_nodal_loads(self) -> List[NodalLoad]:
        return [
            NodalLoad(n, float(v[0]), float(v[1]), float(v[2]))
            for n, v in sorted(self.node_loads.items())
        ]


def classify_inclination(dx: float, dy: float, band_deg: float = None) -> SelfWeightKind:
    """Classify a member direction into horizontal / vertical / inclined."""
    band = CONFIG.inclination_band_deg if band_deg is None else band_deg
    angle = abs(math.degrees(math.atan2(dy, dx)))   # 0..180
    if angle <= band or angle >= 180.0 - band:
        return SelfWeightKind.DISTRIBUTED
    if abs(angle - 90.0) <= band:
        return SelfWeightKind.CONCENTRATED
    return SelfWeightKind.MIXED


def member_weight(member: Member, L: float, gravity: float) -> float:
    """Total weight of a member in kN (0 when no density is given)."""
    if member.density is None or member.density <= 0:
        return 0.0
    return member.density * member.A * L * gravity / 1000.0


def compute_self_weight(
    nodes: Sequence[Node],
    members: Sequence[Member],
    enabled: bool = True,
    config: Optional[EngineConfig] = None,
) -> SelfWeightLoads:
    """
    Convert member self-weight into uniform member loads and nodal loads.

    Returns an empty SelfWeightLoads when disabled. Loads landing on the
    same member or node are summed.
    """
    config = config or CONFIG
    result = SelfWeightLoads()
    if not enabled:
        return result

    member_loads: Dict[int, float] = defaultdict(float)
    node_loads: Dict[int, np.ndarray] = {}

    def add_node(node: int, px: float, py: float) -> None:
        vec = node_loads.setdefault(node, np.zeros(3, dtype=float))
        vec[0] += px
        vec[1] += py

    for idx, member in enumerate(members):
        L, c, s = element_geometry(nodes, member, idx)
        W = member_weight(member, L, config.gravity)
        if W == 0.0:
            continue

        ni, nj = nodes[member.ni], nodes[member.nj]
        kind = classify_inclination(nj.x - ni.x, nj.y - ni.y, config.inclination_band_deg)
        result.kinds[idx] = kind
        result.weights[idx] = W
        down = 1.0 if c >= 0 else -1.0

        if kind is SelfWeightKind.DISTRIBUTED:
            member_loads[idx] += down * W / L
        elif kind is SelfWeightKind.CONCENTRATED:
            lower = member.ni if ni.y <= nj.y else member.nj
            add_node(lower, 0.0, -W)
        else:
            member_loads[idx] += down * (W / L) * abs(c)
            px = -math.copysign(1.0, c * s) * W * abs(s) / 2.0
            add_node(member.ni, px, 0.0)
            add_node(member.nj, px, 0.0)

        logger.debug("Member %d self-weight %.4f kN (%s)", idx, W, kind.value)

    result.member_loads = dict(member_loads)
    result.node_loads = node_loads
    return result
