"""
Damage scaling
==============

The storm data file stores each damage figure as a magnitude plus a scale
code: PROPDMG=2.5 with PROPDMGEXP="M" means US$ 2,500,000.

Only K, M and B are recognized (in any case). Every other code, including
blanks, "?", "H", "+" and digits, contributes zero dollars: the value is
not guessed.
"""

from __future__ import annotations
from typing import Dict, Optional

from .models import StormEvent

SCALE_MULTIPLIERS: Dict[str, float] = {
    "K": 1e3,
    "M": 1e6,
    "B": 1e9,
}


def scaled(amount: float, code: Optional[str]) -> float:
    """Return `amount` in US$ for the given scale code, or 0 if unrecognized."""
    if code is None:
        return 0.0
    mult = SCALE_MULTIPLIERS.get(str(code).strip().upper())
    if mult is None:
        return 0.0
    return float(amount) * mult


def total_damage(event: StormEvent) -> float:
    """Property plus crop damage for one event, in US$."""
    return (scaled(event.property_damage, event.property_scale)
            + scaled(event.crop_damage, event.crop_scale))
