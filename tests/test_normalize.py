# File: tests/test_normalize.py
"""
Tests for model normalization: member geometry, transformation matrices,
the four local stiffness variants and rejection of invalid members.
"""

import numpy as np
import pytest

from framecalc.elements import (
    InvalidMemberError,
    frame2d_local_stiffness,
    normalize,
    STRESS_TO_KN_M2,
)
from framecalc.kernel.connections import ConnectionPair, EndCondition
from framecalc.model import Node, Member

RIGID = EndCondition.RIGID
PINNED = EndCondition.PINNED


def _two_nodes(x2=3.0, y2=4.0):
    return [Node(0, 0.0, 0.0), Node(1, x2, y2)]


def test_geometry_and_transform():
    """A 3-4-5 member: L = 5, c = 0.6, s = 0.8, T orthogonal."""
    model = normalize(_two_nodes(), [Member(0, 0, 1, E=205000, A=0.01, I=1e-4, Z=1e-3)])
    nm = model.members[0]

    assert np.isclose(nm.L, 5.0)
    assert np.isclose(nm.c, 0.6)
    assert np.isclose(nm.s, 0.8)
    np.testing.assert_allclose(nm.T @ nm.T.T, np.eye(6), atol=1e-12)
    assert model.ndof == 6
    print(f"✓ L={nm.L}, c={nm.c}, s={nm.s}")


def test_rigid_rigid_local_stiffness():
    """Classic Euler-Bernoulli frame element for the rigid-rigid variant."""
    E, A, I, L = 2.0e8, 0.01, 1.0e-4, 2.0
    k = frame2d_local_stiffness(E, A, I, L, ConnectionPair.RIGID_RIGID)
    EI = E * I

    assert np.isclose(k[0, 0], E * A / L)
    assert np.isclose(k[1, 1], 12 * EI / L**3)
    assert np.isclose(k[1, 2], 6 * EI / L**2)
    assert np.isclose(k[2, 2], 4 * EI / L)
    assert np.isclose(k[2, 5], 2 * EI / L)
    np.testing.assert_allclose(k, k.T)
    print("✓ Rigid-rigid stiffness matches textbook terms")


def test_pinned_end_has_no_rotational_stiffness():
    E, A, I, L = 2.0e8, 0.01, 1.0e-4, 2.0
    EI = E * I

    k_pr = frame2d_local_stiffness(E, A, I, L, ConnectionPair.PINNED_RIGID)
    assert np.allclose(k_pr[2, :], 0.0) and np.allclose(k_pr[:, 2], 0.0)
    assert np.isclose(k_pr[1, 1], 3 * EI / L**3)
    assert np.isclose(k_pr[5, 5], 3 * EI / L)

    k_rp = frame2d_local_stiffness(E, A, I, L, ConnectionPair.RIGID_PINNED)
    assert np.allclose(k_rp[5, :], 0.0) and np.allclose(k_rp[:, 5], 0.0)
    assert np.isclose(k_rp[2, 2], 3 * EI / L)

    k_pp = frame2d_local_stiffness(E, A, I, L, ConnectionPair.PINNED_PINNED)
    bending = [1, 2, 4, 5]
    assert np.allclose(k_pp[np.ix_(bending, bending)], 0.0)
    assert np.isclose(k_pp[0, 0], E * A / L)
    print("✓ Pinned ends release their rotation")


def test_end_conditions_select_variant():
    members = [
        Member(0, 0, 1, E=205000, A=0.01, I=1e-4, Z=1e-3, i_conn=PINNED, j_conn=RIGID),
        Member(1, 0, 1, E=205000, A=0.01, I=1e-4, Z=1e-3, i_conn=PINNED, j_conn=PINNED),
    ]
    model = normalize(_two_nodes(), members)
    assert model.members[0].pair is ConnectionPair.PINNED_RIGID
    assert model.members[1].pair is ConnectionPair.PINNED_PINNED


def test_modulus_converted_to_kn_per_m2():
    model = normalize(_two_nodes(4.0, 0.0), [Member(0, 0, 1, E=205000, A=0.01, I=1e-4, Z=1e-3)])
    nm = model.members[0]
    assert np.isclose(nm.E, 205000 * STRESS_TO_KN_M2)
    assert np.isclose(nm.k_local[0, 0], 205000 * 1e3 * 0.01 / 4.0)


def test_global_stiffness_symmetric_for_inclined_member():
    model = normalize(_two_nodes(), [Member(0, 0, 1, E=205000, A=0.01, I=1e-4, Z=1e-3)])
    kg = model.members[0].k_global()
    np.testing.assert_allclose(kg, kg.T, rtol=1e-12, atol=1e-6)


def test_zero_length_member_rejected():
    nodes = [Node(0, 1.0, 1.0), Node(1, 1.0, 1.0)]
    with pytest.raises(InvalidMemberError) as exc:
        normalize(nodes, [Member(0, 0, 1, E=205000, A=0.01, I=1e-4, Z=1e-3)])
    assert exc.value.member_index == 0
    assert "zero length" in exc.value.reason
    print(f"✓ Zero-length member rejected: {exc.value}")


@pytest.mark.parametrize("field, value", [
    ("E", 0.0),
    ("A", -0.01),
    ("I", float("nan")),
    ("Z", float("inf")),
])
def test_bad_section_properties_rejected(field, value):
    props = dict(E=205000, A=0.01, I=1e-4, Z=1e-3)
    props[field] = value
    members = [
        Member(0, 0, 1, E=205000, A=0.01, I=1e-4, Z=1e-3),
        Member(1, 0, 1, **props),
    ]
    with pytest.raises(InvalidMemberError) as exc:
        normalize(_two_nodes(), members)
    assert exc.value.member_index == 1
    assert field in exc.value.reason


def test_bad_node_reference_rejected():
    with pytest.raises(InvalidMemberError):
        normalize(_two_nodes(), [Member(0, 0, 5, E=205000, A=0.01, I=1e-4, Z=1e-3)])
    with pytest.raises(InvalidMemberError):
        normalize(_two_nodes(), [Member(0, 1, 1, E=205000, A=0.01, I=1e-4, Z=1e-3)])


def test_invalid_member_error_is_value_error():
    assert issubclass(InvalidMemberError, ValueError)
