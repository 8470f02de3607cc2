"""Tests for the Enter path of numbering/synthesizer.py.

Each test simulates the host inserting a line break and checks the
follow-up edits against the resulting document.
"""
from __future__ import annotations

from typing import Optional, Tuple

import pytest

from models import ContinuationConfig, EditOp, EditPlan, MarkerFamily, TextChange, TextSnapshot
from numbering.synthesizer import cursor_after, format_marker, synthesize
from utils import apply_edits


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def _press_enter(before: str, at: Optional[int] = None,
                 config: ContinuationConfig = ContinuationConfig()) -> Tuple[str, EditPlan]:
    """Insert a newline at ``at`` (default: end) and return (result, plan)."""
    if at is None:
        at = len(before)
    after = before[:at] + "\n" + before[at:]
    change = TextChange(at, at, at, at + 1, inserted="\n")
    plan = synthesize([change], TextSnapshot(after), config)
    return apply_edits(after, plan.edits), plan


# ---------------------------------------------------------------------------
# Continuation
# ---------------------------------------------------------------------------

class TestNextMarker:
    def test_bare_arabic_not_continued(self):
        result, plan = _press_enter("1. foo")
        assert not plan
        assert result == "1. foo\n"

    def test_bare_arabic_opt_in(self):
        result, plan = _press_enter("1. foo", config=ContinuationConfig(continue_bare_arabic=True))
        assert result == "1. foo\n2. "
        assert plan.cursor == len(result)

    def test_bracketed_arabic(self):
        result, _ = _press_enter("(1) foo")
        assert result == "(1) foo\n(2) "

    def test_bracketed_letter(self):
        result, plan = _press_enter("(a) foo")
        assert result == "(a) foo\n(b) "
        assert plan.cursor == len(result)

    def test_uppercase_letter(self):
        result, _ = _press_enter("A. first")
        assert result == "A. first\nB. "

    def test_roman_full_width_separator_has_no_space(self):
        result, _ = _press_enter("III、 foo")
        assert result == "III、 foo\nIV、"

    def test_chinese(self):
        result, _ = _press_enter("三、内容")
        assert result == "三、内容\n四、"

    def test_separator_after_bracket_kept(self):
        result, _ = _press_enter("(a). foo")
        assert result == "(a). foo\n(b). "

    def test_mismatched_brackets_reused(self):
        result, _ = _press_enter("(a]. foo")
        assert result == "(a]. foo\n(b]. "

    def test_closing_bracket_only_is_reused(self):
        result, _ = _press_enter("a). foo")
        assert result == "a). foo\nb). "
        result, _ = _press_enter("b) foo")
        assert result == "b) foo\nc) "

    def test_full_width_brackets(self):
        result, _ = _press_enter("（二）内容")
        assert result == "（二）内容\n（三） "

    def test_continues_after_previous_lines(self):
        result, _ = _press_enter("intro\nb) one")
        assert result == "intro\nb) one\nc) "

    def test_enter_mid_line_prefixes_split_text(self):
        result, plan = _press_enter("(a) foobar", at=7)
        assert result == "(a) foo\n(b) bar"
        assert plan.cursor == len("(a) foo\n(b) ")


class TestNoContinuation:
    @pytest.mark.parametrize("line", ["Z. last", "z) last", "十、内容", "十一、内容"])
    def test_end_of_family_range(self, line):
        _, plan = _press_enter(line)
        assert not plan

    def test_plain_text(self):
        _, plan = _press_enter("just a sentence.")
        assert not plan

    def test_blank_line(self):
        result, plan = _press_enter("(a) foo\n   ")
        assert not plan
        assert result == "(a) foo\n   \n"

    def test_enter_at_line_start(self):
        _, plan = _press_enter("(a) foo", at=0)
        assert not plan

    def test_disabled(self):
        _, plan = _press_enter("(a) foo", config=ContinuationConfig(enabled=False))
        assert not plan

    def test_family_not_enabled(self):
        config = ContinuationConfig(families=(MarkerFamily.ARABIC, MarkerFamily.ROMAN_NUMERAL))
        _, plan = _press_enter("(a) foo", config=config)
        assert not plan

    def test_typing_without_newline(self):
        before = "(a) one\n(b) two"
        after = before + "x"
        change = TextChange(len(before), len(before), len(before), len(after), inserted="x")
        assert not synthesize([change], TextSnapshot(after))

    def test_no_changes(self):
        assert not synthesize([], TextSnapshot("(a) foo\n"))


# ---------------------------------------------------------------------------
# Double Enter
# ---------------------------------------------------------------------------

class TestDoubleEnter:
    def test_marker_only_line_removed(self):
        result, plan = _press_enter("(1) a\n(2) ")
        assert result == "(1) a\n"
        assert plan.cursor == len("(1) a\n")

    def test_bare_arabic_marker_removed(self):
        result, plan = _press_enter("3. ")
        assert result == ""
        assert plan.cursor == 0

    def test_full_width_marker_removed(self):
        result, _ = _press_enter("一、甲\n二、")
        assert result == "一、甲\n"

    def test_plain_line_ending_with_dot_kept(self):
        result, plan = _press_enter("done.")
        assert not plan
        assert result == "done.\n"

    def test_marker_with_text_after_break(self):
        # "(b) |rest" + Enter: next line is not blank, so continue instead
        result, _ = _press_enter("(b) rest", at=4)
        assert result == "(b) \n(c) rest"

    def test_termination_disabled(self):
        config = ContinuationConfig(terminate_on_double_enter=False)
        result, _ = _press_enter("(1) a\n(2) ", config=config)
        assert result == "(1) a\n(2) \n(3) "


# ---------------------------------------------------------------------------
# Cursor placement
# ---------------------------------------------------------------------------

class TestCursorAfter:
    def test_empty(self):
        assert cursor_after([]) is None

    def test_single_deletion(self):
        assert cursor_after([EditOp(5, 9, "", "(2) ")]) == 5

    def test_end_of_last_insert(self):
        edits = [EditOp(10, 10, "B. "), EditOp(0, 0, "A. ")]
        assert cursor_after(edits) == 10 + 3 + 3

    def test_multiple_breaks_in_one_change_set(self):
        after = "A. x\n\nC. y\n"
        changes = [
            TextChange(4, 4, 4, 5, inserted="\n"),
            TextChange(10, 10, 10, 11, inserted="\n"),
        ]
        plan = synthesize(changes, TextSnapshot(after))
        assert apply_edits(after, plan.edits) == "A. x\nB. \nC. y\nD. "
        assert plan.cursor == len("A. x\nB. \nC. y\nD. ")


def test_format_marker():
    assert format_marker(MarkerFamily.LOWERCASE_LETTER, 2, ".", "(", ")") == "(b)."
    assert format_marker(MarkerFamily.UPPERCASE_LETTER, 27, ".") == ""
