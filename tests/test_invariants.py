import numpy as np

from framecalc.assembly import build_stiffness, build_loads, DOF_PER_NODE
from framecalc.elements import normalize
from framecalc.kernel.connections import EndCondition
from framecalc.model import Node, Member, Support, NodalLoad, MemberUniformLoad
from framecalc.solve import solve


def _frame():
    """Small L-shaped frame with one pinned-end member."""
    nodes = [
        Node(0, 0.0, 0.0, Support.FIXED),
        Node(1, 0.0, 3.0),
        Node(2, 4.0, 3.0),
        Node(3, 4.0, 0.0, Support.PINNED),
    ]
    members = [
        Member(0, 0, 1, E=205000, A=0.006, I=1.5e-4, Z=8e-4),
        Member(1, 1, 2, E=205000, A=0.006, I=1.5e-4, Z=8e-4),
        Member(2, 3, 2, E=205000, A=0.006, I=1.5e-4, Z=8e-4, j_conn=EndCondition.PINNED),
    ]
    return normalize(nodes, members)


def test_stiffness_matrix_symmetry():
    """
    WHAT IS THIS TEST?
    ==================
    Maxwell's reciprocal theorem: K[i, j] = K[j, i]. The assembled matrix
    must stay symmetric with inclined members and released ends.
    """
    K = build_stiffness(_frame())
    np.testing.assert_allclose(K, K.T, rtol=1e-12, atol=1e-6,
                               err_msg="Stiffness matrix is not symmetric!")
    print("✓ Stiffness matrix is symmetric")


def test_zero_load_gives_zero_response():
    """No loads, no prescribed motion -> D ≈ 0 and R ≈ 0."""
    result = solve(_frame())
    assert np.allclose(result.D, 0.0, atol=1e-15)
    assert np.allclose(result.R, 0.0, atol=1e-12)
    for mf in result.member_forces:
        assert np.allclose(mf.f, 0.0, atol=1e-12)
    print("✓ Unloaded frame stays at rest")


def test_global_equilibrium():
    """
    Σ reactions + Σ applied loads = 0 for forces and for moments about
    the origin, with a UDL, a lateral point load and a nodal moment.
    """
    w, H, M0 = 4.0, 6.0, 2.5
    model = _frame()
    result = solve(
        model,
        node_loads=[NodalLoad(1, px=H), NodalLoad(2, mz=M0)],
        member_loads=[MemberUniformLoad(1, w)],
    )
    reactions = result.node_reactions()

    sum_Rx = sum(r['Rx'] for r in reactions.values())
    sum_Ry = sum(r['Ry'] for r in reactions.values())
    assert np.isclose(sum_Rx + H, 0.0, atol=1e-6)
    assert np.isclose(sum_Ry - w * 4.0, 0.0, atol=1e-6)

    moment = M0 - 3.0 * H + 2.0 * (-w * 4.0)
    for node, r in reactions.items():
        x, y = model.nodes[node].x, model.nodes[node].y
        moment += r['Mz'] + x * r['Ry'] - y * r['Rx']
    assert np.isclose(moment, 0.0, atol=1e-6)

    # Released end carries no moment
    assert np.isclose(result.member_forces[2].M_j, 0.0, atol=1e-9)
    print(f"✓ ΣRx = {sum_Rx:.4f}, ΣRy = {sum_Ry:.4f}, ΣM = {moment:.2e}")


def test_node_equilibrium_from_member_forces():
    """At a free node, the member end forces balance the applied load."""
    model = _frame()
    P = 10.0
    result = solve(model, node_loads=[NodalLoad(1, px=P)])

    total = np.zeros(3)
    for nm, mf in zip(model.members, result.member_forces):
        f_global = nm.T.T @ mf.f
        if nm.dof_nodes[0] == 1:
            total += f_global[:3]
        if nm.dof_nodes[1] == 1:
            total += f_global[3:]
    # Forces of members on node 1 are -f; they balance the load
    np.testing.assert_allclose(total, [P, 0.0, 0.0], atol=1e-8)


def test_results_are_fresh_per_call():
    model = _frame()
    first = solve(model, node_loads=[NodalLoad(1, px=1.0)])
    second = solve(model, node_loads=[NodalLoad(1, px=2.0)])
    np.testing.assert_allclose(second.D, 2.0 * first.D, rtol=1e-9, atol=1e-15)
    assert first.D is not second.D


def test_load_vector_uses_node_positions():
    model = _frame()
    F, _, _ = build_loads(model, node_loads=[NodalLoad(2, py=-7.0)])
    assert F[DOF_PER_NODE * 2 + 1] == -7.0
    assert np.count_nonzero(F) == 1
