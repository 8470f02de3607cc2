"""
numbering package

Marker recognition, numeral conversion and edit synthesis for ordered
lists in plain text. Nothing here depends on Qt.
"""

from numbering.codec import decode, encode
from numbering.recognizer import classify_token, decompose, identify, parse_marker
from numbering.synthesizer import (
    continue_on_enter,
    cursor_after,
    format_marker,
    renumber_after_delete,
    synthesize,
)

__all__ = [
    "decode",
    "encode",
    "classify_token",
    "decompose",
    "identify",
    "parse_marker",
    "continue_on_enter",
    "cursor_after",
    "format_marker",
    "renumber_after_delete",
    "synthesize",
]
