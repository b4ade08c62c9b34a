# loads.py - load merging and fixed-end forces for uniform member loads

from collections import defaultdict
from typing import Dict, Iterable

import numpy as np

from .kernel.connections import ConnectionPair
from .model import NodalLoad, MemberUniformLoad


def fixed_end_forces(L: float, w: float, pair: ConnectionPair = ConnectionPair.RIGID_RIGID) -> np.ndarray:
    """
    End forces a member exerts when clamped against a uniform load.

    Returned in LOCAL coordinates, [N_i, Q_i, M_i, N_j, Q_j, M_j]. The
    axial terms are always 0. For a rigid-rigid member carrying w
    (positive along local −y):

        Q_i = Q_j = wL/2,   M_i = +wL²/12,   M_j = −wL²/12

    A pinned end carries no fixed-end moment and the shear is redistributed
    (3wL/8 at the pinned end, 5wL/8 and wL²/8 at the rigid end).

    The equivalent nodal load is −fel; recovered end forces add fel back.
    """
    qi, mi, qj, mj = pair.fixed_end
    wL = w * L
    return np.array([0.0, qi * wL, mi * wL * L, 0.0, qj * wL, mj * wL * L], dtype=float)


def merge_member_loads(member_loads: Iterable[MemberUniformLoad]) -> Dict[int, float]:
    """Sum uniform loads per member. Duplicates add, never overwrite."""
    merged: Dict[int, float] = defaultdict(float)
    for load in member_loads:
        merged[load.member] += load.w
    return dict(merged)


def merge_nodal_loads(node_loads: Iterable[NodalLoad]) -> Dict[int, np.ndarray]:
    """Sum nodal loads per node into [px, py, mz] vectors."""
    merged: Dict[int, np.ndarray] = {}
    for load in node_loads:
        vec = merged.setdefault(load.node, np.zeros(3, dtype=float))
        vec += (load.px, load.py, load.mz)
    return merged
