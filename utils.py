"""
utils.py

Utility functions for applying edit batches to plain text.
"""

from __future__ import annotations

from typing import Iterable, List, Sequence

from models import EditOp


def is_blank(s: str) -> bool:
    """True for empty or whitespace-only text."""
    return not s or s.isspace()


def sort_edits(edits: Iterable[EditOp]) -> List[EditOp]:
    """
    Sort edits by position and verify they form a valid batch.

    Args:
        edits: Edits in any order

    Returns:
        The edits sorted by start offset

    Raises:
        ValueError: If two edits overlap or an edit has a negative range
    """
    ordered = sorted(edits, key=lambda e: (e.start, e.end))
    prev_end = -1
    for e in ordered:
        if e.start < 0 or e.end < e.start:
            raise ValueError(f"Invalid edit range [{e.start}, {e.end})")
        if e.start < prev_end:
            raise ValueError(f"Overlapping edit at offset {e.start}")
        prev_end = e.end
    return ordered


def apply_edits(text: str, edits: Sequence[EditOp]) -> str:
    """
    Apply a batch of edits atomically.

    All offsets refer to ``text`` as passed in; edits are applied from the
    end of the document backwards so earlier offsets stay valid.

    Raises:
        ValueError: If edits overlap or fall outside the text
    """
    ordered = sort_edits(edits)
    if ordered and ordered[-1].end > len(text):
        raise ValueError(f"Edit end {ordered[-1].end} beyond text length {len(text)}")
    for e in reversed(ordered):
        text = text[:e.start] + e.insert + text[e.end:]
    return text

