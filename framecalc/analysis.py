# analysis.py - full pipeline: self-weight -> assembly -> solve -> recovery -> checks
"""
The pipeline runs in a fixed order:

    1. self-weight loads are computed (when enabled) and merged with the
       user loads
    2. the model is assembled and solved
    3. member end forces are recovered
    4. section checks and buckling run on the same immutable result

Every call builds its results from scratch; nothing is cached between calls.
"""

import logging
from dataclasses import dataclass
from typing import Iterable, List, Optional, Sequence

from .checks import check_sections, analyze_buckling, CheckStatus, SectionCheckResult, BucklingResult
from .config import CONFIG, EngineConfig
from .elements import normalize, NormalizedModel
from .materials import LoadTerm
from .model import Node, Member, NodalLoad, MemberUniformLoad
from .selfweight import compute_self_weight, SelfWeightLoads
from .solve import solve, AnalysisResult

logger = logging.getLogger(__name__)


@dataclass
class PipelineResult:
    model: NormalizedModel
    analysis: AnalysisResult
    section_checks: List[SectionCheckResult]
    buckling: List[BucklingResult]
    self_weight: SelfWeightLoads

    @property
    def all_ok(self) -> bool:
        return all(c.status is CheckStatus.OK for c in self.section_checks)


def analyze(
    nodes: Sequence[Node],
    members: Sequence[Member],
    node_loads: Iterable[NodalLoad] = (),
    member_loads: Iterable[MemberUniformLoad] = (),
    self_weight: bool = False,
    load_term: LoadTerm = LoadTerm.LONG,
    config: Optional[EngineConfig] = None,
) -> PipelineResult:
    """
    Normalize, load, solve and check a frame in one call.

    Raises:
        InvalidMemberError: From normalization
        UnstableStructureError: From the solve, with diagnostics attached
    """
    config = config or CONFIG
    model = normalize(nodes, members)

    sw = compute_self_weight(nodes, members, self_weight, config)
    all_node_loads = list(node_loads) + sw.as_nodal_loads()
    all_member_loads = list(member_loads) + sw.as_member_loads()
    if self_weight:
        logger.debug("Self-weight adds %.3f kN over %d members", sw.total_weight, len(sw.weights))

    result = solve(model, all_node_loads, all_member_loads, config)
    checks = check_sections(model, result.member_forces, load_term, config)
    buckling = analyze_buckling(model, result.member_forces, config)

    return PipelineResult(
        model=model,
        analysis=result,
        section_checks=checks,
        buckling=buckling,
        self_weight=sw,
    )
