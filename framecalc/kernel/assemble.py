# framecalc/kernel/assemble.py
"""
Scatter-add of element contributions into global matrices.

The assembler only needs, per element, the list of global DOFs it addresses
and a matrix (or vector) of the same size in global coordinates:

    K[dof_map[a], dof_map[b]] += ke[a, b]
    F[dof_map[a]]             += fe[a]

Contributions always accumulate; two members sharing a node, or two loads
on the same DOF, are summed.
"""

import numpy as np
from typing import Iterable, List, Tuple


def assemble_global_K(
    ndof: int,
    contributions: Iterable[Tuple[List[int], np.ndarray]]
) -> np.ndarray:
    """
    Assemble the global stiffness matrix.

    Args:
        ndof: Total DOFs (3 × node count)
        contributions: (dof_map, ke) pairs, ke already in global coordinates

    Returns:
        K: (ndof x ndof) matrix
    """
    K = np.zeros((ndof, ndof), dtype=float)
    for dof_map, ke in contributions:
        n = len(dof_map)
        if ke.shape != (n, n):
            raise ValueError(f"Element matrix {ke.shape} does not match {n} DOFs")
        K[np.ix_(dof_map, dof_map)] += ke
    return K


def assemble_global_F(
    ndof: int,
    contributions: Iterable[Tuple[List[int], np.ndarray]]
) -> np.ndarray:
    """Assemble a global load vector from (dof_map, fe) pairs."""
    F = np.zeros(ndof, dtype=float)
    for dof_map, fe in contributions:
        if fe.shape != (len(dof_map),):
            raise ValueError(f"Element vector {fe.shape} does not match {len(dof_map)} DOFs")
        np.add.at(F, dof_map, fe)
    return F


def add_nodal_load(F: np.ndarray, node: int, load_vector, dof_per_node: int = 3) -> None:
    """Add [Fx, Fy, Mz] at a node, in place."""
    base = dof_per_node * node
    for i, val in enumerate(load_vector):
        F[base + i] += val
