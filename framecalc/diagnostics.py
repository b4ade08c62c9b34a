# diagnostics.py
"""
INSTABILITY DIAGNOSTICS
=======================

Runs only after a solve has failed. Each heuristic is independent and the
findings are merged into one advisory report; nothing here changes the
outcome of the solve.

    unconstrained nodes    nodes with no active restraint flag at all
    mechanism members      members whose two end nodes each have fewer
                           than 2 restraint components
    zero-energy DOFs       free DOFs whose K diagonal is (near) zero
    mode DOFs              free DOFs taking part in a null-space vector of
                           K_ff (scipy); reported separately
"""

import logging
from dataclasses import dataclass, field
from typing import List, Optional, Sequence, Tuple

import numpy as np
import scipy.linalg

from .config import CONFIG, EngineConfig
from .elements import NormalizedModel

logger = logging.getLogger(__name__)


@dataclass
class InstabilityReport:
    unconstrained_nodes: List[int] = field(default_factory=list)
    mechanism_members: List[int] = field(default_factory=list)
    zero_energy_dofs: List[int] = field(default_factory=list)
    mode_dofs: List[int] = field(default_factory=list)
    message: str = ""

    def to_dict(self) -> dict:
        return {
            'unconstrained_nodes': list(self.unconstrained_nodes),
            'mechanism_members': list(self.mechanism_members),
            'zero_energy_dofs': list(self.zero_energy_dofs),
            'mode_dofs': list(self.mode_dofs),
            'message': self.message,
        }


def find_unconstrained_nodes(flags: Sequence[Tuple[bool, bool, bool]]) -> List[int]:
    return [n for n, f in enumerate(flags) if not any(f)]


def find_mechanism_members(model: NormalizedModel, flags: Sequence[Tuple[bool, bool, bool]]) -> List[int]:
    result = []
    for nm in model.members:
        ni, nj = nm.dof_nodes
        if sum(flags[ni]) < 2 and sum(flags[nj]) < 2:
            result.append(nm.index)
    return result


def find_zero_energy_dofs(K: np.ndarray, free: Sequence[int], tol: float) -> List[int]:
    diag = np.diag(K)
    return [int(i) for i in free if abs(diag[i]) < tol]


def find_mode_dofs(K: np.ndarray, free: Sequence[int], tol: float = 1e-6) -> List[int]:
    """Free DOFs with a significant share in any null-space vector of K_ff."""
    free = np.asarray(free, dtype=int)
    if len(free) == 0:
        return []
    Kff = K[np.ix_(free, free)]
    scale = max(float(np.max(np.abs(Kff))), 1.0)
    modes = scipy.linalg.null_space(Kff / scale, rcond=1e-10)
    if modes.size == 0:
        return []
    participating = np.any(np.abs(modes) > tol, axis=1)
    return [int(d) for d in free[participating]]


def diagnose(
    model: NormalizedModel,
    K: np.ndarray,
    flags: Sequence[Tuple[bool, bool, bool]],
    free: Sequence[int],
    config: Optional[EngineConfig] = None,
) -> InstabilityReport:
    """Merge every heuristic into one report with a human-readable message."""
    config = config or CONFIG
    report = InstabilityReport(
        unconstrained_nodes=find_unconstrained_nodes(flags),
        mechanism_members=find_mechanism_members(model, flags),
        zero_energy_dofs=find_zero_energy_dofs(K, free, config.zero_diagonal_tol),
        mode_dofs=find_mode_dofs(K, free),
    )

    parts = ["Structure is unstable (singular stiffness matrix)."]
    if report.unconstrained_nodes:
        parts.append(f"Unrestrained nodes: {report.unconstrained_nodes}.")
    if report.mechanism_members:
        parts.append(f"Possible mechanism members: {report.mechanism_members}.")
    if report.zero_energy_dofs:
        parts.append(f"Zero-stiffness DOFs: {report.zero_energy_dofs}.")
    if not (report.unconstrained_nodes or report.mechanism_members or report.zero_energy_dofs):
        parts.append("Check supports and member end releases.")
    report.message = " ".join(parts)

    logger.debug("Diagnostics: %s", report.to_dict())
    return report
