# global K / F assembly and support constraints

import logging
from typing import Dict, Iterable, List, Optional, Tuple

import numpy as np

from .config import CONFIG, EngineConfig
from .elements import NormalizedModel
from .kernel import linalg
from .kernel.assemble import assemble_global_K, assemble_global_F, add_nodal_load
from .kernel.dof import DOF_2D_FRAME
from .loads import fixed_end_forces, merge_member_loads, merge_nodal_loads
from .model import NodalLoad, MemberUniformLoad

logger = logging.getLogger(__name__)

DOF_PER_NODE = DOF_2D_FRAME.dof_per_node


def dof_index(node: int, local_dof: int) -> int:
    return DOF_2D_FRAME.idx(node, local_dof)


def build_stiffness(model: NormalizedModel) -> np.ndarray:
    """K_global: scatter-add of Tᵗ·k_local·T at each member's 6 DOFs."""
    contributions = [
        (DOF_2D_FRAME.element_dof_map(nm.dof_nodes), nm.k_global())
        for nm in model.members
    ]
    return assemble_global_K(model.ndof, contributions)


def build_loads(
    model: NormalizedModel,
    node_loads: Iterable[NodalLoad] = (),
    member_loads: Iterable[MemberUniformLoad] = (),
) -> Tuple[np.ndarray, Dict[int, np.ndarray], Dict[int, float]]:
    """
    Assemble the global load vector.

    Uniform loads are first summed per member; each member's fixed-end
    forces are rotated to global axes and subtracted from F. Nodal loads
    are added at 3·node.

    Returns:
        F: Global load vector (ndof,)
        fel: {member index: local fixed-end force vector}, kept for recovery
        w: {member index: merged uniform load}
    """
    n_members = len(model.members)
    n_nodes = len(model.nodes)

    w_by_member = merge_member_loads(member_loads)
    fel: Dict[int, np.ndarray] = {}
    contributions = []
    for idx, w in w_by_member.items():
        if not 0 <= idx < n_members:
            raise ValueError(f"Uniform load references missing member {idx}")
        nm = model.members[idx]
        fel[idx] = fixed_end_forces(nm.L, w, nm.pair)
        f_global = linalg.multiply(linalg.transpose(nm.T), fel[idx])
        contributions.append((DOF_2D_FRAME.element_dof_map(nm.dof_nodes), -f_global))

    F = assemble_global_F(model.ndof, contributions)

    for node, vec in merge_nodal_loads(node_loads).items():
        if not 0 <= node < n_nodes:
            raise ValueError(f"Nodal load references missing node {node}")
        add_nodal_load(F, node, vec, DOF_PER_NODE)

    logger.debug("Assembled F: %d uniform loads, %d loaded DOFs",
                 len(fel), int(np.count_nonzero(F)))
    return F, fel, w_by_member


def restraint_flags(
    model: NormalizedModel,
    config: Optional[EngineConfig] = None,
) -> List[Tuple[bool, bool, bool]]:
    """
    Per node (ux, uy, rz) restraint flags.

    A DOF is restrained when the support type removes it or when the node
    prescribes a non-negligible displacement there.
    """
    config = config or CONFIG
    flags = []
    for node in model.nodes:
        prescribed = node.prescribed.as_si()
        flags.append(tuple(
            removed or abs(value) > config.prescribed_tol
            for removed, value in zip(node.support.restrained, prescribed)
        ))
    return flags


def constrained_dofs(model: NormalizedModel, config: Optional[EngineConfig] = None) -> Dict[int, float]:
    """
    {dof: imposed displacement} for every constrained DOF.

    Prescribed values take precedence over the zero of a physical support;
    the two combine freely at the same node.
    """
    config = config or CONFIG
    constrained: Dict[int, float] = {}
    for n, node in enumerate(model.nodes):
        prescribed = node.prescribed.as_si()
        for local, (removed, value) in enumerate(zip(node.support.restrained, prescribed)):
            if abs(value) > config.prescribed_tol:
                constrained[dof_index(n, local)] = value
            elif removed:
                constrained[dof_index(n, local)] = 0.0
    return constrained
