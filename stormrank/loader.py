"""
Dataset loader (storm data file -> StormEvent list)
===================================================

Reads the NOAA storm data export and converts each row into a `StormEvent`.

Key ideas:
- The published file is a bzip2-compressed CSV (StormData.csv.bz2); pandas
  infers the compression from the extension. Excel exports are read too.
- Only the seven columns the analysis needs are kept.
- Column names are matched tolerantly ("EVTYPE", "Event Type", "event_type").
- Blank, invalid and non-finite ("inf") cells become 0 / "". Scale codes are kept verbatim; interpreting
  them is `damage.scaled`'s job.
"""

from __future__ import annotations
from typing import Dict, List, Tuple
import logging
import math
import re

import pandas as pd

from .models import StormEvent

logger = logging.getLogger(__name__)

# field -> accepted column names, in order of preference
COLUMNS: Dict[str, Tuple[str, ...]] = {
    "event_type": ("EVTYPE", "Event Type", "EVENT_TYPE"),
    "fatalities": ("FATALITIES", "Deaths", "Fatality"),
    "injuries": ("INJURIES", "Injured", "Injury"),
    "property_damage": ("PROPDMG", "Property Damage", "PROP_DMG"),
    "property_scale": ("PROPDMGEXP", "Property Scale", "Property Damage Exp", "PROP_DMG_EXP"),
    "crop_damage": ("CROPDMG", "Crop Damage", "CROP_DMG"),
    "crop_scale": ("CROPDMGEXP", "Crop Scale", "Crop Damage Exp", "CROP_DMG_EXP"),
}


def _to_float(x) -> float:
    """Convert a cell to float, 0.0 if missing/invalid/non-finite."""
    if pd.isna(x): return 0.0
    try: fv = float(x)
    except (TypeError, ValueError, OverflowError): return 0.0
    return fv if math.isfinite(fv) else 0.0

def _to_int(x) -> int:
    """Convert a cell to int, 0 if missing/invalid/non-finite."""
    return int(_to_float(x))

def _to_str(x) -> str:
    if pd.isna(x): return ""
    return str(x).strip()

def _norm(s: str) -> str:
    return re.sub(r"[^a-z0-9]+", "", str(s).lower())

def _col(df: pd.DataFrame, *names: str) -> str:
    cols = list(df.columns)
    for n in names:
        if n in cols:
            return n
    norm_map = {_norm(c): c for c in cols}
    for n in names:
        nn = _norm(n)
        if nn in norm_map:
            return norm_map[nn]
    raise KeyError(f"Missing required column. Tried={names}. Available={cols}")


def read_table(path: str) -> pd.DataFrame:
    """Read the raw table. Every column is read as text; conversion happens per row."""
    p = str(path).lower()
    if p.endswith((".xlsx", ".xlsm")):
        df = pd.read_excel(path, engine="openpyxl", dtype=str)
    else:
        # .csv / .csv.bz2 / .csv.gz / .csv.zip
        df = pd.read_csv(path, dtype=str, compression="infer", low_memory=False)
    df.rename(columns={c: str(c).strip() for c in df.columns}, inplace=True)
    return df


def events_from_frame(df: pd.DataFrame) -> List[StormEvent]:
    """Convert a raw DataFrame into StormEvent records (one per row, in order)."""
    cols = {field: _col(df, *names) for field, names in COLUMNS.items()}
    sub = df[[cols[f] for f in COLUMNS]]

    events: List[StormEvent] = []
    for i, row in enumerate(sub.itertuples(index=False, name=None)):
        evtype, fat, inj, pdmg, pexp, cdmg, cexp = row
        events.append(StormEvent(
            event_id=i,
            event_type=_to_str(evtype),
            fatalities=_to_int(fat),
            injuries=_to_int(inj),
            property_damage=_to_float(pdmg),
            property_scale=_to_str(pexp),
            crop_damage=_to_float(cdmg),
            crop_scale=_to_str(cexp),
        ))
    return events


def load_storm_data(path: str) -> List[StormEvent]:
    """Load the storm data file at `path` into a list of StormEvent.

    Raises KeyError if a required column is missing. File and parse errors
    from pandas propagate unchanged.
    """
    df = read_table(path)
    logger.info("Read %d rows, %d columns from %s", len(df), len(df.columns), path)
    events = events_from_frame(df)
    logger.info("Loaded %d storm events", len(events))
    return events
