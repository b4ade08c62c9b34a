# framecalc - 2D beam-column analysis and member checks
"""
FRAMECALC: Linear Frame Analysis with Member Checks
===================================================

This package provides:
- 2D beam-column analysis by the direct stiffness method
- Pinned / rigid member end conditions and prescribed support motion
- Self-weight as member and nodal loads
- Allowable-stress section checks (F-value metals, wood)
- Euler buckling safety factors
- Diagnostics for unstable structures

ARCHITECTURE:
-------------
    kernel/         Numerical core (linalg, DOF indexing, assembly, solve)
    model.py        Nodes, members, supports, loads
    materials.py    Strength descriptors and allowable stresses
    elements.py     Geometry, local stiffness variants, normalization
    selfweight.py   Self-weight distribution
    assembly.py     Global K / F and support constraints
    solve.py        Linear solve and member force recovery
    diagnostics.py  Instability report
    checks/         Section capacity and buckling
    analysis.py     Full pipeline
    modelio.py      Compact JSON model format
    tables.py       pandas result tables
"""

from .config import CONFIG, EngineConfig
from .model import Node, Member, Support, Prescribed, NodalLoad, MemberUniformLoad
from .kernel import EndCondition, ConnectionPair
from .materials import FValueStrength, MetalFamily, WoodStrength, WoodBase, LoadTerm
from .elements import normalize, InvalidMemberError
from .solve import solve, AnalysisResult, UnstableStructureError
from .analysis import analyze, PipelineResult
from .modelio import load_model, validate_references, ModelFormatError

__version__ = "0.1.0"
