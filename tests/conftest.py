"""Shared fixtures."""

import os

import pytest

os.environ.setdefault("MPLBACKEND", "Agg")

from stormrank.models import StormEvent


def make_event(event_id, event_type, fat=0, inj=0, pdmg=0.0, pexp="", cdmg=0.0, cexp=""):
    return StormEvent(
        event_id=event_id,
        event_type=event_type,
        fatalities=fat,
        injuries=inj,
        property_damage=pdmg,
        property_scale=pexp,
        crop_damage=cdmg,
        crop_scale=cexp,
    )


@pytest.fixture
def scenario_events():
    return [
        make_event(0, "Tstm Wind", 0, 0, 10, "K", 0, ""),
        make_event(1, "TORNADO F3", 1, 5, 2, "M", 0, ""),
    ]


@pytest.fixture
def mixed_events():
    return [
        make_event(0, "TORNADO", 5, 40, 2.5, "M", 0, ""),
        make_event(1, "HURRICANE/TYPHOON", 3, 10, 1.2, "B", 50, "m"),
        make_event(2, "Hurricane Wind", 0, 1, 300, "K", 0, ""),
        make_event(3, "WIND CHILL", 2, 0, 0, "", 0, ""),
        make_event(4, "STRONG WIND", 0, 2, 12, "k", 0, ""),
        make_event(5, "FLASH FLOOD", 1, 0, 5, "M", 1, "K"),
        make_event(6, "SPACE DEBRIS", 0, 0, 3, "?", 0, ""),
        make_event(7, "TORNADO F0", 0, 3, 40, "K", 0, ""),
        make_event(8, "EXCESSIVE HEAT", 7, 20, 0, "", 0, ""),
    ]
