# solve: assemble, partition, solve, recover member forces

import logging
from dataclasses import dataclass
from typing import Dict, Iterable, List, Optional

import numpy as np

from .assembly import build_stiffness, build_loads, constrained_dofs, restraint_flags
from .config import CONFIG, EngineConfig
from .diagnostics import InstabilityReport, diagnose
from .elements import NormalizedModel
from .kernel.dof import DOF_2D_FRAME
from .kernel.solve import solve_partitioned, SingularSystemError
from .model import NodalLoad, MemberUniformLoad
from .post import MemberForces, recover_member_forces, compute_nodal_displacements, compute_reactions

logger = logging.getLogger(__name__)


class UnstableStructureError(RuntimeError):
    """Raised when the structure is a mechanism; carries the diagnostics."""

    def __init__(self, diagnostics: InstabilityReport):
        self.diagnostics = diagnostics
        super().__init__(diagnostics.message)


@dataclass
class AnalysisResult:
    """
    Outcome of one linear solve.

    D: global displacements (m, m, rad per node)
    R: global reactions (kN, kN, kN·m), zero at free DOFs
    member_forces: local end forces per member, fixed-end forces included
    """
    D: np.ndarray
    R: np.ndarray
    member_forces: List[MemberForces]
    constrained: List[int]
    free: List[int]

    def node_displacements(self) -> Dict[int, Dict[str, float]]:
        return compute_nodal_displacements(len(self.D) // 3, self.D)

    def node_reactions(self) -> Dict[int, Dict[str, float]]:
        return compute_reactions(self.R, self.constrained)


def solve(
    model: NormalizedModel,
    node_loads: Iterable[NodalLoad] = (),
    member_loads: Iterable[MemberUniformLoad] = (),
    config: Optional[EngineConfig] = None,
) -> AnalysisResult:
    """
    Linear-elastic analysis by the direct stiffness method.

    Args:
        model: Output of elements.normalize
        node_loads: Nodal loads (summed per node)
        member_loads: Uniform member loads (summed per member)
        config: Tolerances

    Returns:
        AnalysisResult, freshly allocated

    Raises:
        UnstableStructureError: If the free-DOF system has no solution.
            Diagnostics are computed before raising.
    """
    config = config or CONFIG

    K = build_stiffness(model)
    F, fel, w_by_member = build_loads(model, node_loads, member_loads)
    constrained = constrained_dofs(model, config)

    try:
        D, R, free = solve_partitioned(K, F, constrained, config)
    except SingularSystemError as exc:
        free, _ = DOF_2D_FRAME.partition(model.ndof, constrained)
        report = diagnose(model, K, restraint_flags(model, config), free, config)
        logger.warning("%s", report.message)
        raise UnstableStructureError(report) from exc

    forces = recover_member_forces(model, D, fel, w_by_member)
    logger.info(
        "Solved %d nodes / %d members: max |D| = %.3e m",
        len(model.nodes), len(model.members), float(np.max(np.abs(D))) if len(D) else 0.0,
    )
    return AnalysisResult(
        D=D,
        R=R,
        member_forces=forces,
        constrained=sorted(constrained),
        free=[int(i) for i in free],
    )
