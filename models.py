"""
models.py

Data models and constants for the ordered-list continuation engine.
"""

from __future__ import annotations

from bisect import bisect_right
from dataclasses import dataclass, field
from typing import List, Optional, Tuple


# ----------------------------
# Marker families
# ----------------------------

class MarkerFamily:
    """Ordered-list numbering systems recognised at the start of a line."""
    ARABIC = "arabic"
    UPPERCASE_LETTER = "uppercaseLetter"
    LOWERCASE_LETTER = "lowercaseLetter"
    ROMAN_NUMERAL = "romanNumeral"
    CHINESE_NUMERAL = "chineseNumeral"

    # Recognition priority: first match wins ("C." is a letter, not roman)
    ALL: Tuple[str, ...] = (
        ARABIC,
        UPPERCASE_LETTER,
        LOWERCASE_LETTER,
        ROMAN_NUMERAL,
        CHINESE_NUMERAL,
    )


class Punctuation:
    """Separators that may follow a marker."""
    DOT = "."
    IDEOGRAPHIC_COMMA = "、"
    NONE = ""  # only valid when a closing bracket ends the marker

    ALL: Tuple[str, ...] = (DOT, IDEOGRAPHIC_COMMA)


# Bracket decoration; pairing is positional and never type-checked
OPEN_BRACKETS = "([【（"
CLOSE_BRACKETS = ")]】）"


class ChangeOrigin:
    """Origin tags attached to a document change by the host editor."""
    INPUT = "input"
    UNDO = "undo"
    REDO = "redo"
    SET = "set"
    PLUGIN_UPDATE = "plugin-update"

    # Changes from these origins never trigger continuation
    IGNORED: Tuple[str, ...] = (UNDO, REDO, SET, PLUGIN_UPDATE)


# ----------------------------
# Line model
# ----------------------------

@dataclass(frozen=True)
class LineDecomposition:
    """A line split into optional bracket decoration around its marker.

    Attributes:
        left_bracket: Opening bracket character, or "" if absent.
        body: Marker plus the rest of the line, brackets removed.
        right_bracket: Closing bracket character, or "" if absent.
        marker_text: The raw marker token ("12", "iv", "三"), "" if the
            line does not follow the marker grammar.
        punctuation: Separator after the marker ("." / "、"), "" if none.
        rest: Text after the separator.
        prefix_length: Length of the marker prefix in the original line
            (brackets, marker and separator).
    """
    left_bracket: str = ""
    body: str = ""
    right_bracket: str = ""
    marker_text: str = ""
    punctuation: str = ""
    rest: str = ""
    prefix_length: int = 0

    @property
    def matched(self) -> bool:
        """True when the line follows the bracket/marker/separator grammar."""
        return self.prefix_length > 0


@dataclass(frozen=True)
class Marker:
    """A recognised list marker at the start of a line."""
    family: str
    ordinal: int
    punctuation: str
    left_bracket: str = ""
    right_bracket: str = ""
    prefix_length: int = 0
    rest: str = ""


# ----------------------------
# Edits
# ----------------------------

@dataclass(frozen=True)
class EditOp:
    """A single replacement in absolute document offsets.

    ``expected`` is the text found in ``[start, end)`` when the edit was
    computed, so a deferred application can detect a stale document.
    """
    start: int
    end: int
    insert: str
    expected: str = ""

    @property
    def delta(self) -> int:
        return len(self.insert) - (self.end - self.start)


@dataclass(frozen=True)
class EditPlan:
    """An atomic batch of edits plus the cursor target after applying it.

    A ``cursor`` of None leaves the host cursor where it is.
    """
    edits: Tuple[EditOp, ...] = ()
    cursor: Optional[int] = None

    def __bool__(self) -> bool:
        return bool(self.edits)


@dataclass(frozen=True)
class TextChange:
    """One replaced range of a document change.

    ``from_a``/``to_a`` are offsets in the document before the change,
    ``from_b``/``to_b`` in the document after it.
    """
    from_a: int
    to_a: int
    from_b: int
    to_b: int
    inserted: str = ""
    deleted: str = ""

    @property
    def is_delete(self) -> bool:
        return bool(self.deleted) and not self.inserted

    @property
    def inserts_newline(self) -> bool:
        return "\n" in self.inserted


@dataclass(frozen=True)
class ContinuationConfig:
    """Behavior switches for the synthesizer.

    Defaults:
        enabled: True
        continue_bare_arabic: False
        renumber_on_delete: True
        terminate_on_double_enter: True
        families: all five families in recognition order
    """
    enabled: bool = True
    continue_bare_arabic: bool = False
    renumber_on_delete: bool = True
    terminate_on_double_enter: bool = True
    families: Tuple[str, ...] = MarkerFamily.ALL

    @classmethod
    def from_settings(cls, settings) -> "ContinuationConfig":
        """Build a config from a ``ContinuationSettings`` section."""
        families = tuple(f for f in MarkerFamily.ALL if f in settings.families)
        return cls(
            enabled=settings.enabled,
            continue_bare_arabic=settings.continue_bare_arabic,
            renumber_on_delete=settings.renumber_on_delete,
            terminate_on_double_enter=settings.terminate_on_double_enter,
            families=families,
        )


# ----------------------------
# Document snapshot
# ----------------------------

@dataclass(frozen=True)
class Line:
    """A line of a snapshot. ``number`` is 1-based; ``end`` excludes the newline."""
    number: int
    start: int
    end: int
    text: str


@dataclass(frozen=True)
class TextSnapshot:
    """Read-only view of one document state, indexed by line."""
    text: str
    _starts: List[int] = field(init=False, repr=False, compare=False)

    def __post_init__(self):
        starts = [0]
        pos = self.text.find("\n")
        while pos >= 0:
            starts.append(pos + 1)
            pos = self.text.find("\n", pos + 1)
        object.__setattr__(self, "_starts", starts)

    @property
    def line_count(self) -> int:
        return len(self._starts)

    def line(self, number: int) -> Line:
        """Return line ``number`` (1-based).

        Raises:
            IndexError: If the line does not exist.
        """
        if number < 1 or number > len(self._starts):
            raise IndexError(f"line {number} out of range")
        start = self._starts[number - 1]
        if number < len(self._starts):
            end = self._starts[number] - 1
        else:
            end = len(self.text)
        return Line(number, start, end, self.text[start:end])

    def line_at(self, offset: int) -> Line:
        """Return the line containing ``offset`` (clamped to the document)."""
        offset = max(0, min(offset, len(self.text)))
        return self.line(bisect_right(self._starts, offset))

    def slice(self, start: int, end: int) -> str:
        return self.text[start:end]
