"""Unit tests for damage scaling."""

import pytest

from stormrank.damage import SCALE_MULTIPLIERS, scaled, total_damage
from tests.conftest import make_event


class TestScaled:
    @pytest.mark.parametrize("code,expected", [
        ("K", 2500.0),
        ("k", 2500.0),
        ("M", 2_500_000.0),
        ("m", 2_500_000.0),
        ("B", 2_500_000_000.0),
        ("b", 2_500_000_000.0),
    ])
    def test_recognized_codes(self, code, expected):
        assert scaled(2.5, code) == expected

    @pytest.mark.parametrize("code", ["", "?", "H", "h", "0", "5", "+", "-", "KM", "T"])
    def test_unrecognized_codes_are_zero(self, code):
        assert scaled(123.0, code) == 0

    def test_none_code_is_zero(self):
        assert scaled(10, None) == 0

    def test_surrounding_whitespace_ignored(self):
        assert scaled(1, " M ") == 1e6

    def test_zero_amount(self):
        assert scaled(0, "B") == 0

    def test_multiplier_table(self):
        assert set(SCALE_MULTIPLIERS) == {"K", "M", "B"}


class TestTotalDamage:
    def test_property_plus_crop(self):
        e = make_event(0, "HAIL", pdmg=10, pexp="K", cdmg=2, cexp="M")
        assert total_damage(e) == 10_000 + 2_000_000

    def test_garbage_crop_code_contributes_nothing(self):
        e = make_event(0, "HAIL", pdmg=1, pexp="B", cdmg=500, cexp="?")
        assert total_damage(e) == 1e9

    def test_both_unscaled(self):
        e = make_event(0, "HAIL", pdmg=7, pexp="", cdmg=8, cexp="0")
        assert total_damage(e) == 0
