"""
numbering/recognizer.py

Classifies the leading token of a line against the marker families.

Grammar of a list line (no leading whitespace)::

    [open-bracket] marker [close-bracket] separator rest
    [open-bracket] marker close-bracket rest

``marker`` is the longest run of ASCII letters/digits or CJK ideographs.
The separator is "." or "、" and may only be omitted when a closing
bracket ends the marker. Bracket characters are paired by position and
never checked for type, so "(a]" decomposes like "(a)".
"""

from __future__ import annotations

import logging
from typing import Iterable, Optional

from models import (
    CLOSE_BRACKETS,
    OPEN_BRACKETS,
    LineDecomposition,
    Marker,
    MarkerFamily,
    Punctuation,
)
from numbering.codec import ROMAN_MAX, decode, int_to_roman, roman_to_int

log = logging.getLogger(__name__)


def is_cjk(ch: str) -> bool:
    """True for CJK unified ideographs (U+4E00..U+9FA5)."""
    return "一" <= ch <= "龥"


def _is_marker_char(ch: str) -> bool:
    return ("0" <= ch <= "9") or ("A" <= ch <= "Z") or ("a" <= ch <= "z") or is_cjk(ch)


def _is_roman(token: str) -> bool:
    # Only canonical numerals up to MMMMCMXCIX follow the marker grammar
    value = roman_to_int(token)
    return 0 < value <= ROMAN_MAX and int_to_roman(value) == token


_FAMILY_TESTS = {
    MarkerFamily.ARABIC: lambda t: all("0" <= ch <= "9" for ch in t),
    MarkerFamily.UPPERCASE_LETTER: lambda t: len(t) == 1 and "A" <= t <= "Z",
    MarkerFamily.LOWERCASE_LETTER: lambda t: len(t) == 1 and "a" <= t <= "z",
    MarkerFamily.ROMAN_NUMERAL: _is_roman,
    MarkerFamily.CHINESE_NUMERAL: lambda t: all(is_cjk(ch) for ch in t),
}


def decompose(line_text: str) -> LineDecomposition:
    """Split a line into bracket decoration, marker, separator and rest.

    Args:
        line_text: A single line without its newline.

    Returns:
        The decomposition. If the line does not follow the list grammar,
        an unmatched decomposition whose body is the full line.
    """
    unmatched = LineDecomposition(body=line_text, rest=line_text)
    pos = 0
    left = ""
    if line_text[:1] and line_text[0] in OPEN_BRACKETS:
        left = line_text[0]
        pos = 1

    start = pos
    while pos < len(line_text) and _is_marker_char(line_text[pos]):
        pos += 1
    token = line_text[start:pos]
    if not token:
        return unmatched

    right = ""
    if pos < len(line_text) and line_text[pos] in CLOSE_BRACKETS:
        right = line_text[pos]
        pos += 1

    punctuation = Punctuation.NONE
    if pos < len(line_text) and line_text[pos] in Punctuation.ALL:
        punctuation = line_text[pos]
        pos += 1
    elif not right:
        return unmatched

    rest = line_text[pos:]
    return LineDecomposition(
        left_bracket=left,
        body=token + punctuation + rest,
        right_bracket=right,
        marker_text=token,
        punctuation=punctuation,
        rest=rest,
        prefix_length=pos,
    )


def _classifiable(parts: LineDecomposition) -> bool:
    # An opening bracket that is never closed is ordinary text: "(a. foo"
    return parts.matched and not (parts.left_bracket and not parts.right_bracket)


def classify_token(token: str, families: Iterable[str] = MarkerFamily.ALL) -> Optional[str]:
    """Return the first family, in priority order, whose grammar fits ``token``."""
    if not token:
        return None
    allowed = set(families)
    for family in MarkerFamily.ALL:
        if family in allowed and _FAMILY_TESTS[family](token):
            return family
    return None


def identify(line_text: str, families: Iterable[str] = MarkerFamily.ALL) -> Optional[str]:
    """Return the marker family of a line, or None if it is not a list line."""
    parts = decompose(line_text)
    if not _classifiable(parts):
        return None
    return classify_token(parts.marker_text, families)


def parse_marker(line_text: str, families: Iterable[str] = MarkerFamily.ALL) -> Optional[Marker]:
    """Recognise and decode the marker at the start of a line.

    Returns:
        The marker, or None when the line is not a list line or its
        marker decodes to no usable ordinal (e.g. "十一、").
    """
    parts = decompose(line_text)
    if not _classifiable(parts):
        return None
    family = classify_token(parts.marker_text, families)
    if family is None:
        return None
    ordinal = decode(parts.marker_text, family)
    if ordinal < 1:
        log.debug("Marker %r (%s) has no usable ordinal", parts.marker_text, family)
        return None
    return Marker(
        family=family,
        ordinal=ordinal,
        punctuation=parts.punctuation,
        left_bracket=parts.left_bracket,
        right_bracket=parts.right_bracket,
        prefix_length=parts.prefix_length,
        rest=parts.rest,
    )
