# framecalc/kernel - numerical core
"""
KERNEL
======

Model-independent building blocks of the direct stiffness method:

    linalg        shape-checked matrix helpers, Gaussian elimination
    dof           (node, local dof) -> global index, 3 DOF per node
    connections   end-condition pairs and their coefficient sets
    assemble      scatter-add of element matrices and vectors
    solve         partitioned solve with prescribed displacements
    buckling      Euler column formulas
"""

from .dof import DOFManager, DOF_2D_FRAME
from .connections import EndCondition, ConnectionPair
from .linalg import gauss_solve
from .solve import solve_partitioned, SingularSystemError

__all__ = [
    'DOFManager',
    'DOF_2D_FRAME',
    'EndCondition',
    'ConnectionPair',
    'gauss_solve',
    'solve_partitioned',
    'SingularSystemError',
]
