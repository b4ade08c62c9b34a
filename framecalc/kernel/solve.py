# framecalc/kernel/solve.py
"""Partitioned solve of K·D = F with constrained and prescribed DOFs."""

import logging
from typing import Dict, Optional, Tuple

import numpy as np

from ..config import CONFIG, EngineConfig
from . import linalg

logger = logging.getLogger(__name__)


class SingularSystemError(RuntimeError):
    """Raised when the free-DOF system has no solution."""
    pass


def solve_partitioned(
    K: np.ndarray,
    F: np.ndarray,
    constrained: Dict[int, float],
    config: Optional[EngineConfig] = None,
) -> Tuple[np.ndarray, np.ndarray, np.ndarray]:
    """
    Solve K·D = F with constrained DOFs held at given values.

    Partition into free (f) and constrained (s) DOFs:

        K_ff·D_f = F_f − K_fs·D_s
        R_s      = K_sf·D_f + K_ss·D_s − F_s

    Args:
        K: Global stiffness matrix (ndof x ndof)
        F: Global load vector (ndof,)
        constrained: {dof: displacement} for every constrained DOF
            (0.0 for an ordinary support)
        config: Tolerances for the Gaussian elimination

    Returns:
        D: Displacement vector (ndof,)
        R: Reaction vector (ndof,), zero at free DOFs
        free: Array of free DOF indices

    Raises:
        SingularSystemError: If the reduced system has no solution
    """
    config = config or CONFIG
    ndof = K.shape[0]

    fixed = np.array(sorted(constrained), dtype=int)
    fixed_set = set(fixed.tolist())
    free = np.array([i for i in range(ndof) if i not in fixed_set], dtype=int)

    D = np.zeros(ndof, dtype=float)
    D[fixed] = [constrained[i] for i in fixed]
    R = np.zeros(ndof, dtype=float)

    logger.debug("Partitioned solve: %d free, %d constrained DOFs", len(free), len(fixed))

    if len(free) == 0:
        # Nothing to solve for: every DOF is prescribed
        R = linalg.subtract(linalg.multiply(K, D), F)
        return D, R, free

    Kff = K[np.ix_(free, free)]
    Kfs = K[np.ix_(free, fixed)]
    Ds = D[fixed]

    rhs = linalg.subtract(F[free], linalg.multiply(Kfs, Ds)) if len(fixed) else F[free].copy()
    Df = linalg.gauss_solve(Kff, rhs, config.pivot_tol, config.residual_tol)
    if Df is None:
        raise SingularSystemError(
            f"Free-DOF system ({len(free)} DOFs) has no solution. Check supports and releases."
        )
    D[free] = Df

    if len(fixed):
        Ksf = K[np.ix_(fixed, free)]
        Kss = K[np.ix_(fixed, fixed)]
        Rs = linalg.add(linalg.multiply(Ksf, Df), linalg.multiply(Kss, Ds))
        R[fixed] = linalg.subtract(Rs, F[fixed])

    return D, R, free
