# Model normalizer: member geometry, transformation, local stiffness variants

import logging
import math
from dataclasses import dataclass
from typing import Optional, Sequence, Tuple

import numpy as np

from .kernel import linalg
from .kernel.connections import ConnectionPair
from .model import Node, Member

logger = logging.getLogger(__name__)

# N/mm² -> kN/m²
STRESS_TO_KN_M2 = 1e3

MIN_LENGTH = 1e-9


class InvalidMemberError(ValueError):
    """A member cannot be turned into a stiffness element."""

    def __init__(self, member_index: int, reason: str):
        self.member_index = member_index
        self.reason = reason
        super().__init__(f"Member {member_index}: {reason}")


@dataclass(frozen=True)
class NormalizedMember:
    """A member with its derived geometry and element matrices."""
    index: int
    member: Member
    L: float
    c: float
    s: float
    pair: ConnectionPair
    k_local: np.ndarray
    T: np.ndarray

    @property
    def E(self) -> float:
        """Young's modulus in kN/m²."""
        return self.member.E * STRESS_TO_KN_M2

    @property
    def dof_nodes(self) -> Tuple[int, int]:
        return self.member.ni, self.member.nj

    def k_global(self) -> np.ndarray:
        """Tᵗ·k_local·T"""
        return linalg.multiply(linalg.transpose(self.T), linalg.multiply(self.k_local, self.T))


@dataclass(frozen=True)
class NormalizedModel:
    nodes: Tuple[Node, ...]
    members: Tuple[NormalizedMember, ...]

    @property
    def ndof(self) -> int:
        return 3 * len(self.nodes)


def element_geometry(nodes: Sequence[Node], member: Member, index: Optional[int] = None):
    """Length and direction cosines (L, c, s) of a member."""
    index = member.id if index is None else index
    ni = nodes[member.ni]
    nj = nodes[member.nj]
    dx = nj.x - ni.x
    dy = nj.y - ni.y
    L = float(np.hypot(dx, dy))
    if not math.isfinite(L) or L <= MIN_LENGTH:
        raise InvalidMemberError(index, "zero length")
    return L, dx / L, dy / L


def frame2d_transform(c: float, s: float) -> np.ndarray:
    """
    6x6 transform from global DOFs to local DOFs.
    """
    T = np.array([
        [ c,  s, 0,  0, 0, 0],
        [-s,  c, 0,  0, 0, 0],
        [ 0,  0, 1,  0, 0, 0],
        [ 0,  0, 0,  c, s, 0],
        [ 0,  0, 0, -s, c, 0],
        [ 0,  0, 0,  0, 0, 1],
    ], dtype=float)
    return T


def frame2d_local_stiffness(
    E: float, A: float, I: float, L: float,
    pair: ConnectionPair = ConnectionPair.RIGID_RIGID,
) -> np.ndarray:
    """
    Local stiffness matrix in element local coords (x along member).
    DOF order: [uix, uiy, rzi, ujx, ujy, rzj]

    The axial block is EA/L for every variant; the bending block comes from
    the coefficient set of the end-condition pair (rotational terms vanish
    at a pinned end).
    """
    EA_L = E * A / L
    EI_L3 = E * I / L ** 3
    a, b, c, d, e, f = pair.bending
    L2 = L * L

    k = np.array([
        [ EA_L,         0.0,          0.0, -EA_L,          0.0,          0.0],
        [  0.0,      a*EI_L3,   b*L*EI_L3,   0.0,     -a*EI_L3,   c*L*EI_L3],
        [  0.0,    b*L*EI_L3,  d*L2*EI_L3,   0.0,   -b*L*EI_L3,  e*L2*EI_L3],
        [-EA_L,         0.0,          0.0,  EA_L,          0.0,          0.0],
        [  0.0,     -a*EI_L3,  -b*L*EI_L3,   0.0,      a*EI_L3,  -c*L*EI_L3],
        [  0.0,    c*L*EI_L3,  e*L2*EI_L3,   0.0,   -c*L*EI_L3,  f*L2*EI_L3],
    ], dtype=float)
    return k


def _check_properties(index: int, member: Member, n_nodes: int) -> None:
    if member.ni == member.nj:
        raise InvalidMemberError(index, f"both ends on node {member.ni}")
    for end, node in (('i', member.ni), ('j', member.nj)):
        if not 0 <= node < n_nodes:
            raise InvalidMemberError(index, f"end {end} references missing node {node}")
    for name in ('E', 'A', 'I', 'Z'):
        value = getattr(member, name)
        if value is None or not math.isfinite(value) or value <= 0:
            raise InvalidMemberError(index, f"{name} must be finite and > 0, got {value}")


def normalize_member(nodes: Sequence[Node], member: Member, index: int) -> NormalizedMember:
    _check_properties(index, member, len(nodes))
    L, c, s = element_geometry(nodes, member, index)
    pair = ConnectionPair.from_ends(member.i_conn, member.j_conn)
    k_local = frame2d_local_stiffness(member.E * STRESS_TO_KN_M2, member.A, member.I, L, pair)
    return NormalizedMember(
        index=index,
        member=member,
        L=L,
        c=c,
        s=s,
        pair=pair,
        k_local=k_local,
        T=frame2d_transform(c, s),
    )


def normalize(nodes: Sequence[Node], members: Sequence[Member]) -> NormalizedModel:
    """
    Derive length, direction cosines, T and k_local for every member.

    Raises:
        InvalidMemberError: On the first member with zero length, a bad node
            reference or a non-finite / non-positive E, A, I or Z. The whole
            call aborts since assembly needs every member's stiffness.
    """
    normalized = tuple(normalize_member(nodes, m, idx) for idx, m in enumerate(members))
    logger.debug("Normalized %d members on %d nodes", len(normalized), len(nodes))
    return NormalizedModel(nodes=tuple(nodes), members=normalized)
