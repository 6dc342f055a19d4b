"""
Aggregation engine
==================

This is where the pipeline comes together:

1) StormEvent list (from the loader)
2) -> NormalizedEvent list: damage scaled, event type canonicalized
3) -> CategorySummary list: one row per category, sorted by impact
4) -> top-N slice handed to the report

Every step returns new lists of immutable records. Nothing here raises on
odd data: unknown scale codes count as 0 dollars and unknown event types
pass through as their own category.
"""

from __future__ import annotations
from collections import Counter
from typing import Dict, Iterable, List, Sequence, Tuple, Union
import logging

from .models import CategorySummary, NormalizedEvent, StormEvent
from .damage import total_damage
from .categories import canonicalize, is_canonical

logger = logging.getLogger(__name__)

SUMMARY_FIELDS = ["category", "observation_count", "fatalities", "injuries", "total_damage"]


# ---------------- Normalization ----------------
def normalize_event(event: StormEvent) -> NormalizedEvent:
    return NormalizedEvent(
        event_id=event.event_id,
        event_type=canonicalize(event.event_type),
        fatalities=event.fatalities,
        injuries=event.injuries,
        total_damage=total_damage(event),
    )


def normalize_events(events: Iterable[StormEvent]) -> List[NormalizedEvent]:
    """Normalize every event (same length, same order as the input)."""
    out = [normalize_event(e) for e in events]
    logger.debug("Normalized %d events", len(out))
    return out


# ---------------- Grouping ----------------
def _rank_key(s: CategorySummary) -> Tuple[float, int, int, str]:
    # descending on the three metrics, ascending on the name
    return (-s.total_damage, -s.fatalities, -s.injuries, s.category)


def aggregate(records: Iterable[NormalizedEvent]) -> List[CategorySummary]:
    """Group normalized events by category and rank the groups.

    Order: total damage desc, then fatalities desc, then injuries desc,
    then category name asc. All groups are returned.
    """
    counts: Dict[str, int] = {}
    fatalities: Dict[str, int] = {}
    injuries: Dict[str, int] = {}
    damage: Dict[str, float] = {}

    for r in records:
        k = r.event_type
        counts[k] = counts.get(k, 0) + 1
        fatalities[k] = fatalities.get(k, 0) + r.fatalities
        injuries[k] = injuries.get(k, 0) + r.injuries
        damage[k] = damage.get(k, 0.0) + r.total_damage

    summaries = [
        CategorySummary(
            category=k,
            observation_count=counts[k],
            fatalities=fatalities[k],
            injuries=injuries[k],
            total_damage=damage[k],
        )
        for k in counts
    ]
    summaries.sort(key=_rank_key)

    passthrough = sum(1 for s in summaries if not is_canonical(s.category))
    logger.debug("Aggregated %d categories (%d passthrough)", len(summaries), passthrough)
    return summaries


def top_n(summaries: Sequence[CategorySummary], n: int = 20) -> List[CategorySummary]:
    """First `n` summaries of an already ranked list."""
    if n < 0:
        raise ValueError("n must be >= 0")
    return list(summaries[:n])


def totals(items: Iterable[Union[NormalizedEvent, CategorySummary]]) -> Dict[str, float]:
    """Sum fatalities, injuries and total damage over records or summaries."""
    out: Dict[str, float] = {"fatalities": 0, "injuries": 0, "total_damage": 0.0}
    for it in items:
        out["fatalities"] += it.fatalities
        out["injuries"] += it.injuries
        out["total_damage"] += it.total_damage
    return out


def unmatched_types(records: Iterable[NormalizedEvent]) -> List[Tuple[str, int]]:
    """Event types no rule matched, most frequent first.

    Useful for checking how much of the file falls outside the rule table.
    """
    c = Counter(r.event_type for r in records if not is_canonical(r.event_type))
    return sorted(c.items(), key=lambda kv: (-kv[1], kv[0]))


def run_pipeline(events: Iterable[StormEvent]) -> List[CategorySummary]:
    """normalize_events + aggregate."""
    return aggregate(normalize_events(events))


# ---------------- Export ----------------
def export_csv(summaries: Sequence[CategorySummary], path: str) -> None:
    import csv
    with open(path, "w", newline="", encoding="utf-8") as f:
        w = csv.writer(f)
        w.writerow(SUMMARY_FIELDS)
        for s in summaries:
            w.writerow([s.category, s.observation_count, s.fatalities, s.injuries, s.total_damage])


def export_json(summaries: Sequence[CategorySummary], path: str) -> None:
    """Export the summary table to a JSON file (list of objects)."""
    import json
    payload = [
        {
            "category": s.category,
            "observation_count": s.observation_count,
            "fatalities": s.fatalities,
            "injuries": s.injuries,
            "total_damage": s.total_damage,
        }
        for s in summaries
    ]
    with open(path, "w", encoding="utf-8") as f:
        json.dump(payload, f, ensure_ascii=False, indent=2)
