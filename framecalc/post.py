# member end forces, moments along members, per-node results

from dataclasses import dataclass
from typing import Dict, List, Optional, Tuple

import numpy as np

from .assembly import dof_index, DOF_PER_NODE
from .elements import NormalizedModel, NormalizedMember
from .kernel import linalg
from .kernel.dof import DOF_2D_FRAME


@dataclass(frozen=True)
class MemberForces:
    """
    Local end forces of one member.

    f = [N_i, Q_i, M_i, N_j, Q_j, M_j] in kN / kN·m, the forces the end
    nodes exert on the member in its local axes. w is the merged uniform
    load (kN/m, along local −y) that the member carried.
    """
    index: int
    L: float
    f: np.ndarray
    w: float = 0.0

    @property
    def N_i(self) -> float:
        return float(self.f[0])

    @property
    def Q_i(self) -> float:
        return float(self.f[1])

    @property
    def M_i(self) -> float:
        return float(self.f[2])

    @property
    def N_j(self) -> float:
        return float(self.f[3])

    @property
    def Q_j(self) -> float:
        return float(self.f[4])

    @property
    def M_j(self) -> float:
        return float(self.f[5])

    @property
    def axial(self) -> float:
        """Internal axial force, tension positive."""
        return -self.N_i

    @property
    def max_compression(self) -> float:
        """Larger compressive end force magnitude (0.0 when neither end is compressed)."""
        return max(self.N_i, -self.N_j, 0.0)

    def moment_at(self, x: float) -> float:
        """
        Internal bending moment at distance x from end i (sagging positive).

        Linear between the end moments plus the parabola of the uniform load:
            M(x) = −M_i·(1 − x/L) + M_j·x/L + w·x·(L − x)/2
        """
        xi = x / self.L
        return -self.M_i * (1.0 - xi) + self.M_j * xi + self.w * x * (self.L - x) / 2.0

    def moments(self, n_points: int = 21) -> Tuple[np.ndarray, np.ndarray]:
        """(x, M(x)) at n_points equally spaced stations including both ends."""
        xs = np.linspace(0.0, self.L, n_points)
        return xs, np.array([self.moment_at(x) for x in xs])


def element_end_forces_local(
    nm: NormalizedMember,
    d_global: np.ndarray,
    fel: Optional[np.ndarray] = None,
) -> np.ndarray:
    """
    Local end forces of one member from the global displacements.

    1. Gather the 6 global DOFs of the two end nodes
    2. Rotate to local axes: d_local = T·d
    3. Elastic end forces: k_local·d_local
    4. Add the member's fixed-end forces back (loaded members only)

    Step 4 is what turns the homogeneous solution into true end forces.
    """
    dof_map = DOF_2D_FRAME.element_dof_map(nm.dof_nodes)
    d_elem = np.array([d_global[dof] for dof in dof_map], dtype=float)
    d_local = linalg.multiply(nm.T, d_elem)
    f_local = linalg.multiply(nm.k_local, d_local)
    if fel is not None:
        f_local = linalg.add(f_local, fel)
    return f_local


def recover_member_forces(
    model: NormalizedModel,
    d_global: np.ndarray,
    fel: Dict[int, np.ndarray],
    w_by_member: Optional[Dict[int, float]] = None,
) -> List[MemberForces]:
    w_by_member = w_by_member or {}
    return [
        MemberForces(
            index=nm.index,
            L=nm.L,
            f=element_end_forces_local(nm, d_global, fel.get(nm.index)),
            w=w_by_member.get(nm.index, 0.0),
        )
        for nm in model.members
    ]


def compute_nodal_displacements(n_nodes: int, d_global: np.ndarray) -> Dict[int, Dict[str, float]]:
    """{node: {'dx', 'dy' (mm), 'rz' (rad)}}"""
    result = {}
    for node in range(n_nodes):
        result[node] = {
            'dx': float(d_global[dof_index(node, 0)]) * 1e3,
            'dy': float(d_global[dof_index(node, 1)]) * 1e3,
            'rz': float(d_global[dof_index(node, 2)]),
        }
    return result


def compute_reactions(R: np.ndarray, constrained: List[int]) -> Dict[int, Dict[str, float]]:
    """{node: {'Rx', 'Ry' (kN), 'Mz' (kN·m)}} for nodes with a constrained DOF."""
    constrained = set(constrained)
    support_nodes = sorted({DOF_2D_FRAME.node_of(dof)[0] for dof in constrained})
    result = {}
    for node in support_nodes:
        values = [
            float(R[dof_index(node, k)]) if dof_index(node, k) in constrained else 0.0
            for k in range(DOF_PER_NODE)
        ]
        result[node] = dict(zip(('Rx', 'Ry', 'Mz'), values))
    return result


def member_moment_at(forces: MemberForces, x: float) -> float:
    """Bending moment (kN·m, sagging +) at x metres from end i."""
    if not 0.0 <= x <= forces.L:
        raise ValueError(f"x={x} outside member {forces.index} (L={forces.L:.4f})")
    return forces.moment_at(x)
