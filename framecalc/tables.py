# tables.py
"""
RESULT TABLES
=============

Flat pandas views of an analysis, one row per node or member, in display
units:

    displacements    dx, dy (mm), rz (rad)
    reactions        Rx, Ry (kN), Mz (kN·m), supported nodes only
    member forces    N_i .. M_j (kN, kN·m), axial (tension +), w (kN/m)
    section checks   status, max ratio and where it occurs
    buckling         k, Lk, λ, Pcr, compression, safety factor, status

Node and member numbers are reported 1-based, matching the model format.
"""

from typing import Sequence

import numpy as np
import pandas as pd

from .analysis import PipelineResult
from .checks import SectionCheckResult, BucklingResult
from .post import MemberForces
from .solve import AnalysisResult


def displacement_table(result: AnalysisResult) -> pd.DataFrame:
    rows = [
        {'node': node + 1, **values}
        for node, values in result.node_displacements().items()
    ]
    return pd.DataFrame(rows, columns=['node', 'dx', 'dy', 'rz'])


def reaction_table(result: AnalysisResult) -> pd.DataFrame:
    rows = [
        {'node': node + 1, **values}
        for node, values in result.node_reactions().items()
    ]
    return pd.DataFrame(rows, columns=['node', 'Rx', 'Ry', 'Mz'])


def member_force_table(member_forces: Sequence[MemberForces]) -> pd.DataFrame:
    columns = ['N_i', 'Q_i', 'M_i', 'N_j', 'Q_j', 'M_j']
    rows = []
    for mf in member_forces:
        row = {'member': mf.index + 1, 'L': mf.L}
        row.update(zip(columns, np.asarray(mf.f, dtype=float)))
        row['axial'] = mf.axial
        row['w'] = mf.w
        rows.append(row)
    return pd.DataFrame(rows, columns=['member', 'L'] + columns + ['axial', 'w'])


def section_check_table(checks: Sequence[SectionCheckResult]) -> pd.DataFrame:
    rows = [
        {
            'member': c.member + 1,
            'status': c.status.value,
            'max_ratio': c.max_ratio,
            'x_at_max': c.max_station,
            'N': c.governing_N,
            'M': c.governing_M,
            'reason': c.reason,
        }
        for c in checks
    ]
    return pd.DataFrame(rows, columns=['member', 'status', 'max_ratio', 'x_at_max', 'N', 'M', 'reason'])


def buckling_table(results: Sequence[BucklingResult]) -> pd.DataFrame:
    rows = [
        {
            'member': b.member + 1,
            'status': b.status.value,
            'k': b.k,
            'Lk': b.Lk,
            'i_min': b.i_min,
            'slenderness': b.slenderness,
            'Pcr': b.Pcr,
            'compression': b.compression,
            'safety_factor': np.nan if b.safety_factor is None else b.safety_factor,
            'reason': b.reason,
        }
        for b in results
    ]
    return pd.DataFrame(rows, columns=[
        'member', 'status', 'k', 'Lk', 'i_min', 'slenderness',
        'Pcr', 'compression', 'safety_factor', 'reason',
    ])


def result_tables(result: PipelineResult) -> dict:
    """All tables of a pipeline run, keyed by name."""
    return {
        'displacements': displacement_table(result.analysis),
        'reactions': reaction_table(result.analysis),
        'member_forces': member_force_table(result.analysis.member_forces),
        'section_checks': section_check_table(result.section_checks),
        'buckling': buckling_table(result.buckling),
    }
