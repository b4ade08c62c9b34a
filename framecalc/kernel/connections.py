# framecalc/kernel/connections.py
"""
Member end conditions.

Each member end is either RIGID (moment-resisting) or PINNED (hinge). The
(i, j) pair selects one of four closed-form variants for both the bending
block of the local stiffness matrix and the fixed-end forces of a uniform
load. The variants are precomputed coefficient sets; nothing is re-derived
per call.

Bending block, DOFs (v_i, θ_i, v_j, θ_j):

    k = EI/L³ · [[ a,   bL,  -a,   cL ],
                 [ bL,  dL², -bL,  eL²],
                 [-a,  -bL,   a,  -cL ],
                 [ cL,  eL², -cL,  fL²]]

Fixed-end forces of a uniform load w (acting along local −y), local order
[N_i, Q_i, M_i, N_j, Q_j, M_j]:

    fel = w·L · [0, qi, mi·L, 0, qj, mj·L]
"""

from enum import Enum
from typing import NamedTuple


class EndCondition(Enum):
    RIGID = "rigid"
    PINNED = "pinned"


class BendingCoefficients(NamedTuple):
    a: float
    b: float
    c: float
    d: float
    e: float
    f: float


class FixedEndCoefficients(NamedTuple):
    qi: float
    mi: float
    qj: float
    mj: float


class ConnectionPair(Enum):
    """End-condition pair of a member, keyed (i_conn, j_conn)."""
    RIGID_RIGID = (EndCondition.RIGID, EndCondition.RIGID)
    PINNED_RIGID = (EndCondition.PINNED, EndCondition.RIGID)
    RIGID_PINNED = (EndCondition.RIGID, EndCondition.PINNED)
    PINNED_PINNED = (EndCondition.PINNED, EndCondition.PINNED)

    @classmethod
    def from_ends(cls, i_conn: EndCondition, j_conn: EndCondition) -> "ConnectionPair":
        return cls((EndCondition(i_conn), EndCondition(j_conn)))

    @property
    def bending(self) -> BendingCoefficients:
        return BENDING[self]

    @property
    def fixed_end(self) -> FixedEndCoefficients:
        return FIXED_END[self]

    @property
    def length_category(self) -> str:
        """Key into EngineConfig.effective_length."""
        if self is ConnectionPair.RIGID_RIGID:
            return 'rigid-rigid'
        if self is ConnectionPair.PINNED_PINNED:
            return 'pinned-pinned'
        return 'mixed'


BENDING = {
    ConnectionPair.RIGID_RIGID:   BendingCoefficients(12.0, 6.0, 6.0, 4.0, 2.0, 4.0),
    ConnectionPair.PINNED_RIGID:  BendingCoefficients(3.0, 0.0, 3.0, 0.0, 0.0, 3.0),
    ConnectionPair.RIGID_PINNED:  BendingCoefficients(3.0, 3.0, 0.0, 3.0, 0.0, 0.0),
    ConnectionPair.PINNED_PINNED: BendingCoefficients(0.0, 0.0, 0.0, 0.0, 0.0, 0.0),
}

FIXED_END = {
    ConnectionPair.RIGID_RIGID:   FixedEndCoefficients(1 / 2, 1 / 12, 1 / 2, -1 / 12),
    ConnectionPair.PINNED_RIGID:  FixedEndCoefficients(3 / 8, 0.0, 5 / 8, -1 / 8),
    ConnectionPair.RIGID_PINNED:  FixedEndCoefficients(5 / 8, 1 / 8, 3 / 8, 0.0),
    ConnectionPair.PINNED_PINNED: FixedEndCoefficients(1 / 2, 0.0, 1 / 2, 0.0),
}
