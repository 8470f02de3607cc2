"""
numbering/codec.py

Conversion between marker text and integer ordinals for each marker family.

Decoding never raises: text that cannot be read as a marker of the given
family decodes to 0, which callers treat as "cannot continue". Encoding
an ordinal outside a family's range returns "".
"""

from __future__ import annotations

from typing import Dict, List, Tuple

from models import MarkerFamily


# Standard subtractive table, largest first
ROMAN_NUMERALS: List[Tuple[str, int]] = [
    ("M", 1000), ("CM", 900), ("D", 500), ("CD", 400), ("C", 100),
    ("XC", 90), ("L", 50), ("XL", 40), ("X", 10), ("IX", 9),
    ("V", 5), ("IV", 4), ("I", 1),
]
_ROMAN_SYMBOLS: Dict[str, int] = {s: v for s, v in ROMAN_NUMERALS if len(s) == 1}

# Roman markers stop at MMMMCMXCIX (M{0,4} in the marker grammar)
ROMAN_MAX = 4999

CHINESE_NUMERALS = "零一二三四五六七八九十"
_CHINESE_VALUES: Dict[str, int] = {ch: i for i, ch in enumerate(CHINESE_NUMERALS) if i > 0}

LETTER_COUNT = 26


def roman_to_int(roman: str) -> int:
    """Parse a roman numeral, scanning right to left.

    A symbol smaller than the one to its right is subtracted.

    Args:
        roman: Uppercase roman numeral text.

    Returns:
        The numeric value, or 0 if any character is not a roman symbol.
    """
    total = 0
    right = 0
    for ch in reversed(roman):
        value = _ROMAN_SYMBOLS.get(ch)
        if value is None:
            return 0
        if value < right:
            total -= value
        else:
            total += value
        right = value
    return total


def int_to_roman(number: int) -> str:
    """Greedy largest-symbol-first expansion. Returns "" outside 1..ROMAN_MAX."""
    if number < 1 or number > ROMAN_MAX:
        return ""
    parts = []
    for symbol, value in ROMAN_NUMERALS:
        while number >= value:
            parts.append(symbol)
            number -= value
    return "".join(parts)


def chinese_to_int(chinese: str) -> int:
    """Look up a single Chinese numeral 一..十. Unknown text decodes to 0."""
    return _CHINESE_VALUES.get(chinese, 0)


def int_to_chinese(number: int) -> str:
    """Look up 零..十 for 0..10, "" otherwise."""
    if 0 <= number < len(CHINESE_NUMERALS):
        return CHINESE_NUMERALS[number]
    return ""


def _letter_base(family: str) -> str:
    return "A" if family == MarkerFamily.UPPERCASE_LETTER else "a"


def decode(text: str, family: str) -> int:
    """Return the ordinal of marker ``text`` in ``family`` (0 if unreadable)."""
    if not text:
        return 0
    if family == MarkerFamily.ARABIC:
        if not all("0" <= ch <= "9" for ch in text):
            return 0
        return int(text)
    if family in (MarkerFamily.UPPERCASE_LETTER, MarkerFamily.LOWERCASE_LETTER):
        if len(text) != 1:
            return 0
        ordinal = ord(text) - ord(_letter_base(family)) + 1
        return ordinal if 1 <= ordinal <= LETTER_COUNT else 0
    if family == MarkerFamily.ROMAN_NUMERAL:
        return roman_to_int(text)
    if family == MarkerFamily.CHINESE_NUMERAL:
        return chinese_to_int(text)
    return 0


def encode(ordinal: int, family: str) -> str:
    """Return the marker text for ``ordinal`` in ``family`` ("" if out of range)."""
    if family == MarkerFamily.ARABIC:
        return str(ordinal) if ordinal >= 0 else ""
    if family in (MarkerFamily.UPPERCASE_LETTER, MarkerFamily.LOWERCASE_LETTER):
        # No wrap past Z/z
        if 1 <= ordinal <= LETTER_COUNT:
            return chr(ord(_letter_base(family)) + ordinal - 1)
        return ""
    if family == MarkerFamily.ROMAN_NUMERAL:
        return int_to_roman(ordinal)
    if family == MarkerFamily.CHINESE_NUMERAL:
        return int_to_chinese(ordinal)
    return ""
