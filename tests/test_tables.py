import numpy as np

from framecalc.analysis import analyze
from framecalc.materials import FValueStrength
from framecalc.model import Node, Member, Support, NodalLoad
from framecalc.tables import result_tables


def test_result_tables():
    """One row per node / support / member, 1-based numbering, display units."""
    nodes = [
        Node(0, 0.0, 0.0, Support.PINNED),
        Node(1, 2.0, 0.0),
        Node(2, 4.0, 0.0, Support.ROLLER),
    ]
    props = dict(E=205000, A=0.005, I=8e-6, Z=1e-4, strength=FValueStrength(235.0))
    members = [Member(0, 0, 1, **props), Member(1, 1, 2, **props)]

    result = analyze(nodes, members, node_loads=[NodalLoad(1, py=-10.0)])
    tables = result_tables(result)

    disp = tables['displacements']
    assert list(disp['node']) == [1, 2, 3]
    assert np.isclose(disp.loc[1, 'dy'], result.analysis.D[4] * 1e3)

    reactions = tables['reactions']
    assert list(reactions['node']) == [1, 3]
    assert np.isclose(reactions['Ry'].sum(), 10.0)

    forces = tables['member_forces']
    assert list(forces.columns[:2]) == ['member', 'L']
    assert len(forces) == 2

    checks = tables['section_checks']
    assert set(checks['status']) <= {'OK', 'NG'}

    buckling = tables['buckling']
    # No axial force: no compression, so no safety factor
    assert (buckling['status'] == 'no risk').all()
    assert buckling['safety_factor'].isna().all()
    print(reactions.to_string(index=False))
