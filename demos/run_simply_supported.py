# File: demos/run_simply_supported.py
"""
DEMO: SIMPLY SUPPORTED BEAM FROM THE COMPACT MODEL FORMAT
=========================================================

Loads a beam from the JSON-style model dictionary, solves it and compares
the results with the textbook formulas:

    reactions   P/2
    deflection  PL³/(48EI)
    moment      PL/4
"""

import json

from framecalc import analyze, load_model

MODEL = json.loads("""
{
  "nodes": [
    {"x": 0, "y": 0, "s": "p"},
    {"x": 2, "y": 0, "s": "f"},
    {"x": 4, "y": 0, "s": "r"}
  ],
  "members": [
    {"i": 1, "j": 2, "E": 205000, "A": 0.005, "I": 8e-6, "Z": 1e-4, "F": 235},
    {"i": 2, "j": 3, "E": 205000, "A": 0.005, "I": 8e-6, "Z": 1e-4, "F": 235}
  ],
  "nl": [{"n": 2, "py": -10}]
}
""")


def main():
    L, P = 4.0, 10.0
    EI = 205000 * 1e3 * 8e-6

    data = load_model(MODEL)
    result = analyze(data.nodes, data.members, data.node_loads, data.member_loads)

    reactions = result.analysis.node_reactions()
    disp = result.analysis.node_displacements()
    M_mid = result.analysis.member_forces[0].moment_at(L / 2)

    print("=" * 70)
    print("DEMO: SIMPLY SUPPORTED BEAM")
    print("=" * 70)
    print(f"Left reaction:  {reactions[0]['Ry']:8.3f} kN   (expected {P / 2:.3f})")
    print(f"Right reaction: {reactions[2]['Ry']:8.3f} kN   (expected {P / 2:.3f})")
    print(f"Midspan dy:     {disp[1]['dy']:8.3f} mm   (expected {-P * L**3 / (48 * EI) * 1e3:.3f})")
    print(f"Midspan M:      {M_mid:8.3f} kN·m (expected {P * L / 4:.3f})")
    for check in result.section_checks:
        print(f"Member {check.member + 1}: {check.status.value}, max ratio {check.max_ratio:.3f}")


if __name__ == "__main__":
    main()
