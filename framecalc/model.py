# Node, Member, supports, loads (dataclasses)

from dataclasses import dataclass
from enum import Enum
from typing import Optional

from .kernel.connections import EndCondition
from .materials import StrengthDescriptor


class Support(Enum):
    """Node support types and the local DOFs (ux, uy, rz) they remove."""
    FREE = "free"
    PINNED = "pinned"
    FIXED = "fixed"
    ROLLER = "roller"

    @property
    def restrained(self) -> tuple[bool, bool, bool]:
        return _RESTRAINED[self]


_RESTRAINED = {
    Support.FREE: (False, False, False),
    Support.PINNED: (True, True, False),
    Support.FIXED: (True, True, True),
    Support.ROLLER: (False, True, False),
}


@dataclass(frozen=True)
class Prescribed:
    """
    Forced support motion at a node.

    dx, dy in mm (display units, as entered); theta in rad.
    Zero entries impose nothing.
    """
    dx: float = 0.0
    dy: float = 0.0
    theta: float = 0.0

    def as_si(self) -> tuple[float, float, float]:
        """(dx, dy, theta) in m, m, rad."""
        return self.dx * 1e-3, self.dy * 1e-3, self.theta


@dataclass(frozen=True)
class Node:
    id: int
    x: float
    y: float
    support: Support = Support.FREE
    prescribed: Prescribed = Prescribed()


@dataclass(frozen=True)
class Member:
    """
    2D beam-column member (Euler–Bernoulli): 2 nodes, 3 DOF per node (ux, uy, rz).

    ni, nj are node positions in the model's node list.
    E in N/mm², A in m², I in m⁴, Z in m³, density in kg/m³.
    ix / iy are optional radii of gyration (m); when absent the strong-axis
    radius sqrt(I/A) is used.
    """
    id: int
    ni: int
    nj: int
    E: float
    A: float
    I: float
    Z: float
    i_conn: EndCondition = EndCondition.RIGID
    j_conn: EndCondition = EndCondition.RIGID
    strength: Optional[StrengthDescriptor] = None
    density: Optional[float] = None
    ix: Optional[float] = None
    iy: Optional[float] = None


@dataclass(frozen=True)
class NodalLoad:
    """Point load at a node: px, py in kN (global axes), mz in kN·m (CCW +)."""
    node: int
    px: float = 0.0
    py: float = 0.0
    mz: float = 0.0


@dataclass(frozen=True)
class MemberUniformLoad:
    """Uniform load along a member in kN/m, acting along local −y (positive = downward)."""
    member: int
    w: float
