# modelio.py
"""
COMPACT MODEL FORMAT
====================

Reads the JSON-style model dictionaries the model editor and the model
generator exchange:

    {
      "nodes":   [{"x": 0, "y": 0, "s": "x"}, {"x": 8, "y": 0, "s": "r",
                   "dx_forced": 0, "dy_forced": -5, "r_forced": 0}],
      "members": [{"i": 1, "j": 2, "E": 205000, "I": 0.00011, "A": 0.005245,
                   "Z": 0.000638, "i_conn": "rigid", "j_conn": "pinned",
                   "F": 235, "density": 7850}],
      "nl":      [{"n": 2, "px": 0, "py": -10, "mz": 0}],
      "ml":      [{"m": 1, "w": 5}]
    }

Node and member numbers are 1-based positions in their arrays. Support codes
are f (free), p (pinned), r (roller), x (fixed). E and F are N/mm², forced
displacements mm (rotation rad), loads kN, kN·m and kN/m. `nodeLoads` /
`memberLoads` are accepted as aliases of `nl` / `ml`.

Strength descriptors:
    "F": 235 [, "material": "steel" | "stainless" | "aluminum"]
    "wood": "sugi"  or  "wood": {"Fc": .., "Ft": .., "Fb": .., "Fs": ..}
"""

import numbers
from dataclasses import dataclass, field
from typing import Any, List, Optional

from .kernel.connections import EndCondition
from .materials import FValueStrength, MetalFamily, WoodBase, WoodStrength, StrengthDescriptor
from .model import Node, Member, NodalLoad, MemberUniformLoad, Prescribed, Support

DEFAULT_E = 205000.0    # N/mm², structural steel

SUPPORT_CODES = {
    'f': Support.FREE,
    'p': Support.PINNED,
    'r': Support.ROLLER,
    'x': Support.FIXED,
}

CONNECTION_CODES = {
    'rigid': EndCondition.RIGID,
    'r': EndCondition.RIGID,
    'pinned': EndCondition.PINNED,
    'p': EndCondition.PINNED,
}

METAL_FAMILIES = {family.value for family in MetalFamily}

MEMBER_NUMERIC_KEYS = ('E', 'A', 'I', 'Z', 'F', 'density', 'ix', 'iy')


class ModelFormatError(ValueError):
    """The model dictionary has structural or reference errors."""

    def __init__(self, errors: List[str]):
        self.errors = list(errors)
        super().__init__("; ".join(self.errors))


@dataclass
class ModelData:
    nodes: List[Node] = field(default_factory=list)
    members: List[Member] = field(default_factory=list)
    node_loads: List[NodalLoad] = field(default_factory=list)
    member_loads: List[MemberUniformLoad] = field(default_factory=list)


def _is_number(value: Any) -> bool:
    return isinstance(value, numbers.Real) and not isinstance(value, bool)


def _is_int(value: Any) -> bool:
    return isinstance(value, numbers.Integral) and not isinstance(value, bool)


def _load_list(data: dict, short: str, long: str) -> list:
    loads = data.get(short)
    if loads is None:
        loads = data.get(long)
    return loads or []


def validate_references(data: dict) -> List[str]:
    """
    Structural checks on a compact model dictionary: node and member
    references, support and connection codes, numeric fields, metal family
    and wood base values.

    Returns one message per problem (empty list when the model is usable).
    """
    errors: List[str] = []
    nodes = data.get('nodes')
    members = data.get('members')
    if not isinstance(nodes, list):
        return ["nodes array is missing"]
    if not isinstance(members, list):
        return ["members array is missing"]

    n_nodes = len(nodes)
    for k, node in enumerate(nodes, start=1):
        if not all(key in node for key in ('x', 'y', 's')):
            errors.append(f"node {k}: missing one of x, y, s")
            continue
        if not (_is_number(node['x']) and _is_number(node['y'])):
            errors.append(f"node {k}: coordinates are not numeric")
        if node['s'] not in SUPPORT_CODES:
            errors.append(f"node {k}: unknown support code {node['s']!r}")
        bad = _non_numeric(node, ('dx_forced', 'dy_forced', 'r_forced'))
        if bad:
            errors.append(f"node {k}: {', '.join(bad)} not numeric")

    for k, member in enumerate(members, start=1):
        if 'i' not in member or 'j' not in member:
            errors.append(f"member {k}: missing i or j")
            continue
        i, j = member['i'], member['j']
        if not (_is_int(i) and _is_int(j)):
            errors.append(f"member {k}: node numbers ({i}, {j}) are not integers")
            continue
        for end, value in (('start', i), ('end', j)):
            if not 1 <= value <= n_nodes:
                errors.append(f"member {k}: {end} node {value} out of range (1-{n_nodes})")
        if i == j:
            errors.append(f"member {k}: start and end node are both {i}")
        for end in ('i_conn', 'j_conn'):
            if end in member and member[end] not in CONNECTION_CODES:
                errors.append(f"member {k}: unknown {end} {member[end]!r}")
        errors.extend(f"member {k}: {msg}" for msg in _property_errors(member))

    for k, load in enumerate(_load_list(data, 'nl', 'nodeLoads'), start=1):
        n = load.get('n', load.get('node'))
        if n is None:
            errors.append(f"node load {k}: no node number")
        elif not _is_int(n) or not 1 <= n <= n_nodes:
            errors.append(f"node load {k}: node {n} out of range (1-{n_nodes})")
        bad = _non_numeric(load, ('px', 'py', 'mz'))
        if bad:
            errors.append(f"node load {k}: {', '.join(bad)} not numeric")

    n_members = len(members)
    for k, load in enumerate(_load_list(data, 'ml', 'memberLoads'), start=1):
        m = load.get('m', load.get('member'))
        if m is None:
            errors.append(f"member load {k}: no member number")
        elif not _is_int(m) or not 1 <= m <= n_members:
            errors.append(f"member load {k}: member {m} out of range (1-{n_members})")
        if _non_numeric(load, ('w',)):
            errors.append(f"member load {k}: w not numeric")

    return errors


def _non_numeric(entry: dict, keys) -> List[str]:
    """Keys present with a value that is neither null nor a number."""
    return [key for key in keys if entry.get(key) is not None and not _is_number(entry[key])]


def _property_errors(member: dict) -> List[str]:
    errors = []
    bad = _non_numeric(member, MEMBER_NUMERIC_KEYS)
    if bad:
        errors.append(f"{', '.join(bad)} not numeric")

    material = member.get('material')
    if material is not None and material not in METAL_FAMILIES:
        errors.append(f"unknown material {material!r}")

    wood = member.get('wood')
    if isinstance(wood, dict):
        missing = [key for key in ('Fc', 'Ft', 'Fb') if wood.get(key) is None]
        if missing:
            errors.append(f"wood values missing {', '.join(missing)}")
        bad = _non_numeric(wood, ('Fc', 'Ft', 'Fb', 'Fs'))
        if bad:
            errors.append(f"wood values {', '.join(bad)} not numeric")
    elif wood is not None and not isinstance(wood, str):
        errors.append("wood must be a species name or a table of base values")
    return errors


def _strength(entry: dict) -> Optional[StrengthDescriptor]:
    wood = entry.get('wood')
    if wood is not None:
        if isinstance(wood, dict):
            return WoodStrength(base=WoodBase(
                Fc=float(wood['Fc']), Ft=float(wood['Ft']),
                Fb=float(wood['Fb']), Fs=_float(wood, 'Fs'),
            ))
        return WoodStrength(species=str(wood))
    if entry.get('F') is not None:
        family = MetalFamily(entry.get('material') or 'steel')
        return FValueStrength(F=float(entry['F']), family=family)
    return None


def _float(entry: dict, key: str, default: float = 0.0) -> float:
    value = entry.get(key)
    return default if value is None else float(value)


def _optional_float(entry: dict, key: str) -> Optional[float]:
    value = entry.get(key)
    return None if value is None else float(value)


def load_model(data: dict) -> ModelData:
    """
    Build engine objects from a compact model dictionary.

    Raises:
        ModelFormatError: With every problem found by validate_references
    """
    errors = validate_references(data)
    if errors:
        raise ModelFormatError(errors)

    model = ModelData()
    for k, entry in enumerate(data['nodes']):
        model.nodes.append(Node(
            id=k,
            x=float(entry['x']),
            y=float(entry['y']),
            support=SUPPORT_CODES[entry['s']],
            prescribed=Prescribed(
                dx=_float(entry, 'dx_forced'),
                dy=_float(entry, 'dy_forced'),
                theta=_float(entry, 'r_forced'),
            ),
        ))

    for k, entry in enumerate(data['members']):
        model.members.append(Member(
            id=k,
            ni=entry['i'] - 1,
            nj=entry['j'] - 1,
            E=_float(entry, 'E', DEFAULT_E),
            A=_float(entry, 'A'),
            I=_float(entry, 'I'),
            Z=_float(entry, 'Z'),
            i_conn=CONNECTION_CODES[entry.get('i_conn') or 'rigid'],
            j_conn=CONNECTION_CODES[entry.get('j_conn') or 'rigid'],
            strength=_strength(entry),
            density=_optional_float(entry, 'density'),
            ix=_optional_float(entry, 'ix'),
            iy=_optional_float(entry, 'iy'),
        ))

    for entry in _load_list(data, 'nl', 'nodeLoads'):
        model.node_loads.append(NodalLoad(
            node=entry.get('n', entry.get('node')) - 1,
            px=_float(entry, 'px'),
            py=_float(entry, 'py'),
            mz=_float(entry, 'mz'),
        ))

    for entry in _load_list(data, 'ml', 'memberLoads'):
        model.member_loads.append(MemberUniformLoad(
            member=entry.get('m', entry.get('member')) - 1,
            w=_float(entry, 'w'),
        ))

    return model
