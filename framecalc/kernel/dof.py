# framecalc/kernel/dof.py
"""
DOF INDEXING
============

2D frame nodes carry three degrees of freedom, in this order:

    0 = ux   (horizontal displacement)
    1 = uy   (vertical displacement)
    2 = rz   (rotation, counter-clockwise positive)

Node n owns global DOFs 3n, 3n+1, 3n+2. Every matrix and vector in the
engine is laid out this way, so the helpers here are the only place the
mapping is spelled out.
"""

from dataclasses import dataclass
from typing import Iterable, List, Tuple


@dataclass(frozen=True)
class DOFManager:
    """
    Maps (node index, local dof) to global DOF indices.

    >>> dof = DOFManager()
    >>> dof.idx(2, 1)
    7
    >>> dof.element_dof_map([0, 2])
    [0, 1, 2, 6, 7, 8]
    """
    dof_per_node: int = 3

    def idx(self, node: int, local_dof: int) -> int:
        return self.dof_per_node * node + local_dof

    def ndof(self, n_nodes: int) -> int:
        return self.dof_per_node * n_nodes

    def node_dofs(self, node: int) -> List[int]:
        base = self.dof_per_node * node
        return list(range(base, base + self.dof_per_node))

    def element_dof_map(self, node_ids: Iterable[int]) -> List[int]:
        """Flattened global DOFs for an element's nodes, in node order."""
        result = []
        for node in node_ids:
            result.extend(self.node_dofs(node))
        return result

    def node_of(self, dof: int) -> Tuple[int, int]:
        """Inverse mapping: global DOF -> (node index, local dof)."""
        return divmod(dof, self.dof_per_node)

    def partition(self, ndof: int, constrained: Iterable[int]) -> Tuple[List[int], List[int]]:
        """Split 0..ndof-1 into (free, constrained), both sorted."""
        fixed = sorted(set(constrained))
        fixed_set = set(fixed)
        free = [i for i in range(ndof) if i not in fixed_set]
        return free, fixed


DOF_2D_FRAME = DOFManager(dof_per_node=3)
