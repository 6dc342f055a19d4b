"""
Data model
==========

Three record types flow through the pipeline:

- `StormEvent`: one row of the storm data file, as loaded.
- `NormalizedEvent`: the same row after damage scaling and event-type
  canonicalization.
- `CategorySummary`: one row per canonical category after grouping.

All of them are immutable (`frozen=True`); each stage builds new records
instead of editing the previous stage's output.
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class StormEvent:
    """One raw storm data row.

    Damage magnitudes are stored as written in the file; the scale codes
    (K/M/B, plus whatever garbage the file contains) are kept verbatim.
    """
    event_id: int
    event_type: str
    fatalities: int
    injuries: int
    property_damage: float
    property_scale: str
    crop_damage: float
    crop_scale: str


@dataclass(frozen=True)
class NormalizedEvent:
    """Immutable record for one event after normalization."""
    event_id: int
    event_type: str
    fatalities: int
    injuries: int
    # property + crop, in US$
    total_damage: float

    @property
    def harm(self) -> int:
        return self.fatalities + self.injuries


@dataclass(frozen=True)
class CategorySummary:
    """Totals for one canonical category."""
    category: str
    observation_count: int
    fatalities: int
    injuries: int
    total_damage: float

    @property
    def harm(self) -> int:
        """Fatalities plus injuries (the quantity charted)."""
        return self.fatalities + self.injuries
