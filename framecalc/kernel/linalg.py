# framecalc/kernel/linalg.py
"""
Dense matrix helpers and the Gaussian-elimination solver.

The shape-checked helpers wrap numpy so a dimension mismatch always raises
instead of broadcasting silently. `gauss_solve` is the one place that decides
whether a (possibly singular) system is acceptable:

    - partial pivoting: the row with the largest |value| in the current
      column is swapped into the pivot position
    - a pivot with |value| < pivot_tol is skipped during elimination
    - during back substitution such a row is accepted only if its residual
      is also below residual_tol (an indeterminate, load-free DOF that is
      set to 0); otherwise there is no solution and None is returned

Zero-stiffness rotations at nodes where every member end is pinned rely on
the second rule.
"""

from typing import Optional

import numpy as np

from ..config import CONFIG


def create(rows: int, cols: int, fill: float = 0.0) -> np.ndarray:
    """Fresh (rows x cols) float matrix."""
    if rows < 0 or cols < 0:
        raise ValueError(f"Invalid matrix size ({rows}, {cols})")
    return np.full((rows, cols), fill, dtype=float)


def _as_2d(a, name: str) -> np.ndarray:
    arr = np.asarray(a, dtype=float)
    if arr.ndim == 1:
        arr = arr.reshape(-1, 1)
    if arr.ndim != 2:
        raise ValueError(f"{name} must be a matrix or vector, got ndim={arr.ndim}")
    return arr


def multiply(a, b) -> np.ndarray:
    """Matrix product a·b. Vectors are treated as columns and returned flat."""
    vector_out = np.ndim(b) == 1
    A = _as_2d(a, "a")
    B = _as_2d(b, "b")
    if A.shape[1] != B.shape[0]:
        raise ValueError(f"Cannot multiply {A.shape} by {B.shape}")
    out = A @ B
    return out.ravel() if vector_out else out


def transpose(a) -> np.ndarray:
    return _as_2d(a, "a").T.copy()


def add(a, b) -> np.ndarray:
    A = np.asarray(a, dtype=float)
    B = np.asarray(b, dtype=float)
    if A.shape != B.shape:
        raise ValueError(f"Cannot add {A.shape} and {B.shape}")
    return A + B


def subtract(a, b) -> np.ndarray:
    A = np.asarray(a, dtype=float)
    B = np.asarray(b, dtype=float)
    if A.shape != B.shape:
        raise ValueError(f"Cannot subtract {B.shape} from {A.shape}")
    return A - B


def gauss_solve(
    A,
    b,
    pivot_tol: Optional[float] = None,
    residual_tol: Optional[float] = None,
) -> Optional[np.ndarray]:
    """
    Solve A·x = b by Gaussian elimination with partial pivoting.

    Args:
        A: Square coefficient matrix (n x n)
        b: Right-hand side (n,)
        pivot_tol: Pivots below this magnitude are treated as zero
        residual_tol: Max residual accepted on a zero-pivot row

    Returns:
        x (n,), or None when the system has no solution.

    Raises:
        ValueError: If A is not square or b does not match
    """
    pivot_tol = CONFIG.pivot_tol if pivot_tol is None else pivot_tol
    residual_tol = CONFIG.residual_tol if residual_tol is None else residual_tol

    A = np.asarray(A, dtype=float)
    b = np.asarray(b, dtype=float).ravel()
    if A.ndim != 2 or A.shape[0] != A.shape[1]:
        raise ValueError(f"Coefficient matrix must be square, got {A.shape}")
    n = A.shape[0]
    if b.shape[0] != n:
        raise ValueError(f"Right-hand side has {b.shape[0]} rows, expected {n}")

    # Augmented scratch matrix [A | b]
    M = np.hstack([A, b.reshape(-1, 1)])

    for k in range(n):
        p = k + int(np.argmax(np.abs(M[k:, k])))
        if p != k:
            M[[k, p]] = M[[p, k]]
        pivot = M[k, k]
        if abs(pivot) < pivot_tol:
            continue
        factors = M[k + 1:, k] / pivot
        M[k + 1:, k:] -= np.outer(factors, M[k, k:])

    x = np.zeros(n, dtype=float)
    for i in range(n - 1, -1, -1):
        residual = M[i, n] - M[i, i + 1:n] @ x[i + 1:]
        if abs(M[i, i]) < pivot_tol:
            if abs(residual) > residual_tol:
                return None
            x[i] = 0.0
        else:
            x[i] = residual / M[i, i]
    return x
