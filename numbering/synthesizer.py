"""
numbering/synthesizer.py

Edit synthesis for ordered-list continuation.

Two paths, chosen per change set:

- Enter: an inserted fragment containing a newline. The line holding the
  insertion start gets its successor marker inserted at the start of the
  line holding the insertion end. A marker-only line followed by a blank
  line is removed instead (double Enter ends the list).
- Merge: a deletion that crosses a line boundary, or that leaves the line
  at the deletion start blank. The run of same-family list lines after the
  merge point is renumbered contiguously.

Everything here is pure: edits are computed against one ``TextSnapshot``
of the document after the triggering change and returned as one batch.
"""

from __future__ import annotations

import logging
from typing import Iterable, List, Optional, Sequence

from models import (
    ContinuationConfig,
    EditOp,
    EditPlan,
    Line,
    MarkerFamily,
    Punctuation,
    TextChange,
    TextSnapshot,
)
from numbering.codec import encode
from numbering.recognizer import decompose, identify, parse_marker
from utils import is_blank, sort_edits

log = logging.getLogger(__name__)


def format_marker(family: str, ordinal: int, punctuation: str,
                  left_bracket: str = "", right_bracket: str = "") -> str:
    """Render a marker prefix, e.g. ``("a", 2, ".", "(", ")") -> "(b)."``.

    Returns:
        The prefix, or "" if ``ordinal`` cannot be written in ``family``.
    """
    text = encode(ordinal, family)
    if not text:
        return ""
    return f"{left_bracket}{text}{right_bracket}{punctuation}"


def _successor_text(line_text: str, config: ContinuationConfig) -> str:
    marker = parse_marker(line_text, config.families)
    if marker is None:
        return ""
    if (marker.family == MarkerFamily.ARABIC and not marker.right_bracket
            and not config.continue_bare_arabic):
        # Bare "3." is too often ordinary numeric text
        return ""
    text = format_marker(marker.family, marker.ordinal + 1, marker.punctuation,
                         marker.left_bracket, marker.right_bracket)
    if not text:
        log.debug("No successor for %r in %s", line_text, marker.family)
        return ""
    # The full-width separator already carries its own spacing
    if marker.punctuation != Punctuation.IDEOGRAPHIC_COMMA:
        text += " "
    return text


def continue_on_enter(change: TextChange, snapshot: TextSnapshot,
                      config: ContinuationConfig = ContinuationConfig()) -> List[EditOp]:
    """Edits for one inserted fragment containing a line break.

    Args:
        change: The insertion, in coordinates of ``snapshot``.
        snapshot: The document after the insertion.
        config: Behavior switches.

    Returns:
        Zero or one edit.
    """
    current = snapshot.line_at(change.from_b)
    following = snapshot.line_at(change.to_b)
    if is_blank(current.text):
        return []

    if (config.terminate_on_double_enter
            and following.number > current.number
            and identify(current.text, config.families) is not None
            and is_blank(decompose(current.text).rest)
            and is_blank(following.text)):
        # Second Enter on a marker-only line: drop the dangling marker
        end = min(current.end + 1, len(snapshot.text))
        log.debug("Ending list at line %d", current.number)
        return [EditOp(current.start, end, "", snapshot.slice(current.start, end))]

    text = _successor_text(current.text, config)
    if not text:
        return []
    return [EditOp(following.start, following.start, text, "")]


def _previous_line(snapshot: TextSnapshot, line: Line) -> Optional[Line]:
    if line.number <= 1:
        return None
    return snapshot.line(line.number - 1)


def renumber_after_delete(change: TextChange, snapshot: TextSnapshot,
                          config: ContinuationConfig = ContinuationConfig()) -> List[EditOp]:
    """Edits renumbering the list run that follows a merge point.

    Args:
        change: The deletion, in coordinates of ``snapshot``.
        snapshot: The document after the deletion.
        config: Behavior switches.

    Returns:
        One edit per run line whose ordinal is out of sequence.
    """
    anchor = snapshot.line_at(change.from_b)
    crossed = "\n" in change.deleted
    if not crossed and not is_blank(anchor.text):
        return []

    if crossed and change.from_b == anchor.start:
        # Whole lines removed: the line now at the merge point heads the run
        first = anchor
    elif anchor.number < snapshot.line_count:
        first = snapshot.line(anchor.number + 1)
    else:
        return []

    head = parse_marker(first.text, config.families)
    if head is None:
        return []
    family = head.family

    expected = 1
    if crossed:
        prev = _previous_line(snapshot, first)
        prev_marker = parse_marker(prev.text, config.families) if prev else None
        if prev_marker is not None and prev_marker.family == family:
            expected = prev_marker.ordinal + 1
    # Without a line break in the deleted span the run always restarts at 1

    edits: List[EditOp] = []
    for number in range(first.number, snapshot.line_count + 1):
        line = snapshot.line(number)
        marker = parse_marker(line.text, config.families)
        if marker is None or marker.family != family:
            break
        if marker.ordinal != expected:
            text = format_marker(family, expected, marker.punctuation,
                                 marker.left_bracket, marker.right_bracket)
            if not text:
                break
            end = line.start + marker.prefix_length
            edits.append(EditOp(line.start, end, text, line.text[:marker.prefix_length]))
        expected += 1

    log.debug("Renumbered %d line(s) of %s run from line %d", len(edits), family, first.number)
    return edits


def cursor_after(edits: Sequence[EditOp]) -> Optional[int]:
    """Cursor offset once ``edits`` are applied.

    The cursor goes to the end of the last replacement. A lone deletion
    leaves it at the deletion start.
    """
    if not edits:
        return None
    ordered = sort_edits(edits)
    if len(ordered) == 1 and is_blank(ordered[0].insert):
        return ordered[0].start
    shift = sum(e.delta for e in ordered[:-1])
    last = ordered[-1]
    return last.start + shift + len(last.insert)


def _merge_batches(batches: Iterable[List[EditOp]]) -> List[EditOp]:
    merged: List[EditOp] = []
    for batch in batches:
        for edit in batch:
            if any(edit.start < e.end and e.start < edit.end or
                   (edit.start == e.start and edit.end == e.end) for e in merged):
                continue
            merged.append(edit)
    return sort_edits(merged)


def synthesize(changes: Sequence[TextChange], snapshot: TextSnapshot,
               config: ContinuationConfig = ContinuationConfig()) -> EditPlan:
    """Compute the follow-up edits for one document change set.

    Args:
        changes: The replaced ranges of the change set.
        snapshot: The document after the change set.
        config: Behavior switches.

    Returns:
        An EditPlan; empty when the change does not touch a list.
    """
    if not config.enabled or not changes:
        return EditPlan()

    if any(c.is_delete for c in changes):
        if not config.renumber_on_delete:
            return EditPlan()
        edits = _merge_batches(
            renumber_after_delete(c, snapshot, config) for c in changes if c.is_delete)
        return EditPlan(tuple(edits), None)

    edits = _merge_batches(
        continue_on_enter(c, snapshot, config) for c in changes if c.inserts_newline)
    return EditPlan(tuple(edits), cursor_after(edits))
