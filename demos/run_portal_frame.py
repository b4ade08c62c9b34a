# File: demos/run_portal_frame.py
"""
DEMO: PORTAL FRAME (GRAVITY + LATERAL LOADS + SELF-WEIGHT)
==========================================================

PURPOSE:
--------
Runs the full pipeline on a steel portal frame:

- Two fixed-base columns and a beam
- Uniform gravity load on the beam, lateral load at the left eave
- Self-weight of every member
- Section check (long-term) and buckling safety factors

and prints the result tables, then draws the bending moment diagram.

PHYSICAL PROBLEM:
-----------------
    Node 2 ──────── beam ──────── Node 3
      │                             │
    column                        column
      │                             │
    Node 1 (fixed)                Node 4 (fixed)

(node numbers 1-based, as in the tables)
"""

import matplotlib.pyplot as plt
import numpy as np
import pandas as pd

from framecalc import (
    FValueStrength,
    Member,
    MemberUniformLoad,
    NodalLoad,
    Node,
    Support,
    analyze,
)
from framecalc.tables import result_tables


def main():
    print("=" * 70)
    print("DEMO: PORTAL FRAME (GRAVITY + LATERAL LOADS + SELF-WEIGHT)")
    print("=" * 70)
    print()

    # ========================================================================
    # STEP 1: DEFINE THE PHYSICAL PROBLEM
    # ========================================================================
    L = 6.0          # Beam span (m)
    H = 3.0          # Column height (m)

    # H-200x100 style section, SS400 steel
    E = 205000.0     # N/mm²
    A = 2.716e-3     # m²
    I = 1.84e-5      # m⁴
    Z = 1.84e-4      # m³
    iy = 0.0222      # weak-axis radius of gyration (m)
    F = 235.0        # N/mm²
    rho = 7850.0     # kg/m³

    w = 8.0          # Beam UDL (kN/m, downward)
    P = 10.0         # Lateral load (kN, to the right)

    print(f"Span {L:.1f} m, height {H:.1f} m, w = {w:.1f} kN/m, P = {P:.1f} kN")
    print()

    # ========================================================================
    # STEP 2: CREATE THE MODEL
    # ========================================================================
    nodes = [
        Node(0, 0.0, 0.0, Support.FIXED),
        Node(1, 0.0, H),
        Node(2, L, H),
        Node(3, L, 0.0, Support.FIXED),
    ]
    props = dict(E=E, A=A, I=I, Z=Z, iy=iy, density=rho, strength=FValueStrength(F))
    members = [
        Member(0, 0, 1, **props),   # Left column (upward)
        Member(1, 1, 2, **props),   # Beam
        Member(2, 3, 2, **props),   # Right column (upward)
    ]

    # ========================================================================
    # STEP 3: ANALYZE
    # ========================================================================
    result = analyze(
        nodes, members,
        node_loads=[NodalLoad(1, px=P)],
        member_loads=[MemberUniformLoad(1, w)],
        self_weight=True,
    )
    print(f"Self-weight: {result.self_weight.total_weight:.3f} kN")
    print()

    # ========================================================================
    # STEP 4: REPORT
    # ========================================================================
    with pd.option_context('display.float_format', '{:.4f}'.format, 'display.width', 120):
        for name, table in result_tables(result).items():
            print(name.replace('_', ' ').upper())
            print("-" * 70)
            print(table.to_string(index=False))
            print()

    drift = max(abs(result.analysis.node_displacements()[n]['dx']) for n in (1, 2))
    print(f"Drift: {drift:.2f} mm (H/400 = {H / 400 * 1e3:.2f} mm)")
    print(f"All sections OK: {result.all_ok}")

    # ========================================================================
    # STEP 5: MOMENT DIAGRAM
    # ========================================================================
    fig, ax = plt.subplots(figsize=(8, 5))
    scale = 0.3 * L / max(
        max(abs(m) for m in mf.moments()[1]) for mf in result.analysis.member_forces
    )
    for nm, mf in zip(result.model.members, result.analysis.member_forces):
        ni = nodes[nm.member.ni]
        xs, moments = mf.moments()
        # Sagging drawn on the local −y side
        px = ni.x + xs * nm.c + moments * scale * nm.s
        py = ni.y + xs * nm.s - moments * scale * nm.c
        ax.plot([ni.x, ni.x + nm.L * nm.c], [ni.y, ni.y + nm.L * nm.s], 'k-', linewidth=2)
        ax.plot(px, py, 'r-')
        k = int(np.argmax(np.abs(moments)))
        ax.annotate(f"{moments[k]:.1f}", (px[k], py[k]), fontsize=8)

    ax.set_aspect('equal')
    ax.set_title("Bending moment (kN·m)")
    plt.tight_layout()
    plt.show()


if __name__ == "__main__":
    main()
