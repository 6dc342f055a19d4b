"""
Event-type canonicalization
===========================

EVTYPE in the storm data file is free text: "TSTM WIND", "Tstm Wind (G45)",
"HURRICANE OPAL/HIGH WINDS", "WIND CHILL/HIGH WIND" ... This module folds
those strings into a small fixed set of categories.

How it works:
- `RULES` is an ordered tuple of (label, patterns).
- A pattern is a tuple of fragments; it matches when every fragment is a
  case-insensitive substring of the input ("wind" + "ch" catches "WIND CHILL").
- A rule matches when any of its patterns matches.
- The first matching rule wins. With no match the input is returned
  uppercased and becomes its own category.

Rule order is part of the behavior. WIND (rule 12) must stay after
HURRICANE (2) and COLD (7), otherwise "HURRICANE WIND" and "WIND CHILL" end
up in the generic wind bucket. Likewise RAIN (8) precedes FROST/FREEZE (13),
so "FREEZING RAIN" is RAIN.
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Optional, Tuple

Pattern = Tuple[str, ...]


@dataclass(frozen=True)
class CategoryRule:
    """One canonicalization rule: a label and the patterns that select it."""
    label: str
    patterns: Tuple[Pattern, ...]

    def matches(self, text: str) -> bool:
        """True if any pattern has all of its fragments contained in `text`.

        `text` must already be lowercased.
        """
        return any(all(frag in text for frag in pat) for pat in self.patterns)


def _rule(label: str, *patterns: str) -> CategoryRule:
    # "wind+ch" -> ("wind", "ch")
    return CategoryRule(label, tuple(tuple(p.split("+")) for p in patterns))


# Ordered. Do not sort, do not turn into a dict.
RULES: Tuple[CategoryRule, ...] = (
    _rule("TORNADO", "tornado"),
    _rule("HURRICANE", "hurricane", "surge", "typhoon"),
    _rule("LIGHTNING", "lightning"),
    _rule("THUNDERSTORM", "thunderstorm"),
    _rule("FLOOD", "flood", "fld"),
    _rule("HEAT", "heat", "warm"),
    _rule("COLD", "cold", "wind+ch"),
    _rule("RAIN", "rain"),
    _rule("SNOW/ICE/WINTER STORM", "snow", "blizzard", "winter", "ice", "icy"),
    _rule("HAIL", "hail"),
    _rule("WILD FIRE", "fire"),
    _rule("WIND", "wind"),
    _rule("FROST/FREEZE", "freeze", "frost", "glaze"),
    _rule("TROPICAL STORM", "tropical"),
    _rule("FOG", "fog"),
    _rule("RIP CURRENTS", "rip+current"),
    _rule("SURF", "surf"),
)

CANONICAL_LABELS: Tuple[str, ...] = tuple(r.label for r in RULES)


def match_rule(event_type: str) -> Optional[CategoryRule]:
    """Return the first rule matching `event_type`, or None."""
    text = str(event_type).lower()
    for rule in RULES:
        if rule.matches(text):
            return rule
    return None


def canonicalize(event_type: str) -> str:
    """Map a raw event type to its canonical category.

    >>> canonicalize("Tstm Wind")
    'WIND'
    >>> canonicalize("space debris")
    'SPACE DEBRIS'
    """
    rule = match_rule(event_type)
    if rule is None:
        return str(event_type).upper()
    return rule.label


def is_canonical(label: str) -> bool:
    return label in CANONICAL_LABELS
