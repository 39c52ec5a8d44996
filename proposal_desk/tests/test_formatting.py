"""
Tests: Display formatting helpers.

Run with:
    pytest proposal_desk/tests/test_formatting.py -v
"""

import math

from proposal_desk.utils.formatting import format_currency, format_percent
from proposal_desk.utils.hashing import sha256_hash


class TestFormatting:
    def test_currency_thousands(self):
        assert format_currency(65000) == "65 000 CZK"
        assert format_currency(1234567, "EUR") == "1 234 567 EUR"
        assert format_currency(0) == "0 CZK"

    def test_currency_bad_values(self):
        assert format_currency(None) == "0 CZK"
        assert format_currency(math.nan) == "0 CZK"

    def test_percent(self):
        assert format_percent(0.21) == "21 %"
        assert format_percent(210 / 1209) == "17 %"
        assert format_percent(math.inf) == "0 %"

    def test_sha256(self):
        assert sha256_hash("abc") == sha256_hash(b"abc")
        assert sha256_hash("abc").startswith("ba7816bf")

    def test_ties_round_away_from_zero(self):
        assert format_percent(0.125) == "13 %"
        assert format_currency(2.5) == "3 CZK"
        assert format_currency(-2.5) == "-3 CZK"
        assert format_currency("abc") == "0 CZK"
