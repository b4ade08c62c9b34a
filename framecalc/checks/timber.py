# framecalc/checks/timber.py
"""Allowable stresses for timber members."""

from typing import Dict, Optional

from ..config import CONFIG, EngineConfig
from ..materials import WoodStrength, WoodBase, LoadTerm, AllowableStresses


# Base strengths of ungraded structural timber (N/mm²)
WOOD_SPECIES: Dict[str, WoodBase] = {
    'sugi':       WoodBase(Fc=17.7, Ft=13.5, Fb=22.2, Fs=1.8),    # Japanese cedar
    'hinoki':     WoodBase(Fc=20.7, Ft=16.2, Fb=26.7, Fs=2.1),    # Japanese cypress
    'karamatsu':  WoodBase(Fc=20.7, Ft=16.2, Fb=26.7, Fs=2.1),    # Larch
    'akamatsu':   WoodBase(Fc=22.2, Ft=17.4, Fb=28.2, Fs=2.4),    # Japanese red pine
    'beimatsu':   WoodBase(Fc=22.2, Ft=17.4, Fb=28.2, Fs=2.4),    # Douglas fir
    'tsuga':      WoodBase(Fc=19.2, Ft=14.7, Fb=24.6, Fs=2.1),    # Hemlock
    'spf':        WoodBase(Fc=17.7, Ft=13.5, Fb=22.2, Fs=1.8),    # Spruce-pine-fir
}


def resolve_base(strength: WoodStrength) -> Optional[WoodBase]:
    """Custom base values, else the species table entry, else None."""
    if strength.base is not None:
        return strength.base
    if strength.species is None:
        return None
    return WOOD_SPECIES.get(strength.species.lower())


def load_term_factor(term: LoadTerm, config: EngineConfig = None) -> float:
    """1.1/3 long-term, 2/3 short-term."""
    config = config or CONFIG
    return config.wood_factor_long if LoadTerm(term) is LoadTerm.LONG else config.wood_factor_short


def allowable_stresses(
    base: WoodBase,
    term: LoadTerm = LoadTerm.LONG,
    config: EngineConfig = None,
) -> AllowableStresses:
    """Scale base strengths by the load-term factor."""
    factor = load_term_factor(term, config)
    return AllowableStresses(
        ft=base.Ft * factor,
        fc=base.Fc * factor,
        fb=base.Fb * factor,
        fs=base.Fs * factor,
    )
