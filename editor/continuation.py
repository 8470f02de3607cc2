"""
editor/continuation.py

Ordered-list continuation extension for a ListEditor.

Listens to the editor document's contentsChange signal, turns each user
change into a TextChange, asks the synthesizer for follow-up edits and
applies them on the next event-loop turn as one undoable edit block.
"""

from __future__ import annotations

import logging
from collections import deque
from dataclasses import dataclass
from typing import Deque, Optional

from PyQt6.QtCore import QObject, QTimer, pyqtSignal
from PyQt6.QtGui import QTextCursor

from debug_trace import Category, trace, trace_call
from editor.list_editor import ListEditor
from models import ChangeOrigin, ContinuationConfig, EditPlan, TextChange, TextSnapshot
from numbering.synthesizer import synthesize
from settings import get_settings
from utils import sort_edits

log = logging.getLogger(__name__)


@dataclass(frozen=True)
class PendingEdit:
    """An edit batch waiting for the next event-loop turn.

    Attributes:
        plan: The edits and cursor target.
        revision: Document text the plan was computed against.
    """
    plan: EditPlan
    revision: str


def diff_change(previous: str, current: str, position: int) -> Optional[TextChange]:
    """Recover the replaced range between two document texts.

    ``position`` is where the host reported the change; the replaced span
    is grown forward from there. Qt's removed/added counts are not used,
    they over-report for whole-document and formatting changes.

    Returns:
        The change, or None when the texts are equal.
    """
    if previous == current:
        return None
    start = max(0, min(position, len(previous), len(current)))
    end_prev, end_cur = len(previous), len(current)
    while end_prev > start and end_cur > start and previous[end_prev - 1] == current[end_cur - 1]:
        end_prev -= 1
        end_cur -= 1
    while start < end_prev and start < end_cur and previous[start] == current[start]:
        start += 1
    return TextChange(
        from_a=start,
        to_a=end_prev,
        from_b=start,
        to_b=end_cur,
        inserted=current[start:end_cur],
        deleted=previous[start:end_prev],
    )


def _still_valid(plan: EditPlan, text: str) -> bool:
    snapshot = TextSnapshot(text)
    for e in plan.edits:
        if e.end > len(text) or text[e.start:e.end] != e.expected:
            return False
        if e.start == e.end and snapshot.line_at(e.start).start != e.start:
            # Marker inserts only make sense at a line start
            return False
    return True


class ListContinuation(QObject):
    """
    Ordered-list continuation attached to one editor.

    Call start() to begin listening and stop() to detach. Changes tagged
    undo, redo, set or plugin-update are ignored, including the edits this
    extension applies itself.
    """

    # Emitted with the number of edits after a batch is applied
    edits_applied = pyqtSignal(int)

    def __init__(self, editor: ListEditor, config: Optional[ContinuationConfig] = None, parent=None):
        super().__init__(parent if parent is not None else editor)
        self.editor = editor
        if config is None:
            config = ContinuationConfig.from_settings(get_settings().settings.continuation)
        self.config = config

        self._active = False
        self._previous_text = ""
        self._pending: Deque[PendingEdit] = deque()

    @property
    def is_active(self) -> bool:
        return self._active

    def start(self) -> None:
        """Begin listening for document changes."""
        if self._active:
            return
        doc = self.editor.document()
        self._previous_text = doc.toPlainText()
        doc.contentsChange.connect(self._on_contents_change)
        self._active = True
        trace("List continuation started", Category.LIST)

    def stop(self) -> None:
        """Stop listening and drop edits not yet applied."""
        if not self._active:
            return
        self.editor.document().contentsChange.disconnect(self._on_contents_change)
        self._pending.clear()
        self._active = False
        trace("List continuation stopped", Category.LIST)

    def _on_contents_change(self, position: int, chars_removed: int, chars_added: int) -> None:
        current = self.editor.document().toPlainText()
        previous = self._previous_text
        self._previous_text = current

        origin = self.editor.change_origin
        trace(f"contentsChange pos={position} -{chars_removed} +{chars_added} origin={origin}", Category.EDIT)
        if origin in ChangeOrigin.IGNORED:
            return

        change = diff_change(previous, current, position)
        if change is None:
            return

        plan = synthesize([change], TextSnapshot(current), self.config)
        if not plan:
            return

        log.debug("Queued %d list edit(s) after change at %d", len(plan.edits), position)
        # Applying inside this callback would re-enter the document's change tracking
        self._pending.append(PendingEdit(plan, current))
        QTimer.singleShot(0, self._dispatch_next)

    @trace_call(Category.LIST)
    def _dispatch_next(self) -> None:
        if not self._pending or not self._active:
            return
        task = self._pending.popleft()

        doc = self.editor.document()
        current = doc.toPlainText()
        if current != task.revision and not _still_valid(task.plan, current):
            log.debug("Dropped stale list edit batch (%d edit(s))", len(task.plan.edits))
            return

        self.editor.run_tagged(ChangeOrigin.PLUGIN_UPDATE, lambda: self._apply(task.plan))

        if task.plan.cursor is not None:
            cursor = self.editor.textCursor()
            cursor.setPosition(min(task.plan.cursor, doc.characterCount() - 1))
            self.editor.setTextCursor(cursor)

        trace(f"Applied {len(task.plan.edits)} list edit(s)", Category.LIST)
        self.edits_applied.emit(len(task.plan.edits))

    def _apply(self, plan: EditPlan) -> None:
        cursor = QTextCursor(self.editor.document())
        cursor.beginEditBlock()
        try:
            # Back to front so earlier offsets stay valid
            for e in reversed(sort_edits(plan.edits)):
                cursor.setPosition(e.start)
                cursor.setPosition(e.end, QTextCursor.MoveMode.KeepAnchor)
                cursor.insertText(e.insert)
        finally:
            cursor.endEditBlock()
