"""Tests for numbering/codec.py marker <-> ordinal conversion."""
from __future__ import annotations

import pytest

from models import MarkerFamily
from numbering.codec import (
    decode,
    encode,
    int_to_chinese,
    int_to_roman,
    roman_to_int,
)


# ─────────────────────────────────────────────────────────
# Arabic
# ─────────────────────────────────────────────────────────


class TestArabic:
    def test_decode(self):
        assert decode("12", MarkerFamily.ARABIC) == 12

    def test_decode_leading_zero(self):
        assert decode("007", MarkerFamily.ARABIC) == 7

    def test_decode_non_digit_is_zero(self):
        assert decode("1a", MarkerFamily.ARABIC) == 0

    def test_encode(self):
        assert encode(100, MarkerFamily.ARABIC) == "100"


# ─────────────────────────────────────────────────────────
# Letters
# ─────────────────────────────────────────────────────────


class TestLetters:
    def test_uppercase_bounds(self):
        assert decode("A", MarkerFamily.UPPERCASE_LETTER) == 1
        assert decode("Z", MarkerFamily.UPPERCASE_LETTER) == 26

    def test_lowercase_encode(self):
        assert encode(1, MarkerFamily.LOWERCASE_LETTER) == "a"
        assert encode(26, MarkerFamily.LOWERCASE_LETTER) == "z"

    def test_case_must_match_family(self):
        assert decode("a", MarkerFamily.UPPERCASE_LETTER) == 0

    def test_no_wrap_past_z(self):
        assert encode(27, MarkerFamily.UPPERCASE_LETTER) == ""
        assert encode(27, MarkerFamily.LOWERCASE_LETTER) == ""

    def test_multi_char_is_zero(self):
        assert decode("ab", MarkerFamily.LOWERCASE_LETTER) == 0


# ─────────────────────────────────────────────────────────
# Roman numerals
# ─────────────────────────────────────────────────────────


class TestRoman:
    @pytest.mark.parametrize("text,value", [
        ("I", 1), ("IV", 4), ("IX", 9), ("XLII", 42),
        ("XC", 90), ("CD", 400), ("MCMXCIV", 1994), ("MMMMCMXCIX", 4999),
    ])
    def test_roman_to_int(self, text, value):
        assert roman_to_int(text) == value

    def test_unknown_symbol_is_zero(self):
        assert roman_to_int("XIZ") == 0

    def test_int_to_roman_subtractive(self):
        assert int_to_roman(4) == "IV"
        assert int_to_roman(3888) == "MMMDCCCLXXXVIII"

    def test_int_to_roman_out_of_range(self):
        assert int_to_roman(0) == ""
        assert int_to_roman(5000) == ""

    def test_decode_lowercase_is_zero(self):
        assert decode("iv", MarkerFamily.ROMAN_NUMERAL) == 0


# ─────────────────────────────────────────────────────────
# Chinese numerals
# ─────────────────────────────────────────────────────────


class TestChinese:
    def test_decode_table(self):
        assert decode("一", MarkerFamily.CHINESE_NUMERAL) == 1
        assert decode("十", MarkerFamily.CHINESE_NUMERAL) == 10

    def test_unrecognized_is_zero(self):
        assert decode("十一", MarkerFamily.CHINESE_NUMERAL) == 0
        assert decode("第", MarkerFamily.CHINESE_NUMERAL) == 0

    def test_zero_decodes_to_zero(self):
        # 零 is encodable but never a list position
        assert decode("零", MarkerFamily.CHINESE_NUMERAL) == 0
        assert int_to_chinese(0) == "零"

    def test_encode_out_of_range(self):
        assert encode(11, MarkerFamily.CHINESE_NUMERAL) == ""
        assert encode(-1, MarkerFamily.CHINESE_NUMERAL) == ""


# ─────────────────────────────────────────────────────────
# Round trip within each family's range
# ─────────────────────────────────────────────────────────

_RANGES = {
    MarkerFamily.ARABIC: range(1, 300),
    MarkerFamily.UPPERCASE_LETTER: range(1, 27),
    MarkerFamily.LOWERCASE_LETTER: range(1, 27),
    MarkerFamily.ROMAN_NUMERAL: range(1, 5000),
    MarkerFamily.CHINESE_NUMERAL: range(1, 11),
}


@pytest.mark.parametrize("family", MarkerFamily.ALL)
def test_round_trip(family):
    for n in _RANGES[family]:
        text = encode(n, family)
        assert text, f"{family} should encode {n}"
        assert decode(text, family) == n
        assert encode(decode(text, family), family) == text


def test_unknown_family():
    assert decode("1", "hebrew") == 0
    assert encode(1, "hebrew") == ""
