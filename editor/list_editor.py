"""
editor/list_editor.py

Plain-text editor that tags every document change with its origin, so
list continuation can ignore undo, redo and programmatic updates.
"""

from __future__ import annotations

from typing import Callable

from PyQt6.QtGui import QFont, QKeySequence
from PyQt6.QtWidgets import QMenu, QPlainTextEdit

from models import ChangeOrigin
from settings import get_settings


# =============================================================================
# Cached editor settings - initialized once to avoid repeated lookups
# =============================================================================

class _CachedEditorSettings:
    """Cache for editor font settings."""

    _instance = None

    def __init__(self):
        self._initialized = False
        # Default values (used if settings unavailable)
        self.font_family = "Consolas"
        self.font_size = 11
        self.tab_width = 4

    def _ensure_initialized(self):
        """Load settings on first access."""
        if self._initialized:
            return
        s = get_settings().settings.editor
        self.font_family = s.font.family
        self.font_size = s.font.size
        self.tab_width = s.font.tab_width
        self._initialized = True

    @classmethod
    def get(cls) -> "_CachedEditorSettings":
        """Get the singleton instance."""
        if cls._instance is None:
            cls._instance = cls()
        cls._instance._ensure_initialized()
        return cls._instance


class ListEditor(QPlainTextEdit):
    """
    Plain-text editor for list-aware editing:
    - Exposes the origin of the change currently being made
    - Routes Undo/Redo key sequences and context-menu actions through
      the tagged undo()/redo()
    """

    def __init__(self, parent=None):
        super().__init__(parent)

        # Origin of the document change in progress
        self._change_origin: str = ChangeOrigin.INPUT

        # Set monospace font from settings. Defaults: "Consolas", 11pt
        cached = _CachedEditorSettings.get()
        font = QFont(cached.font_family, cached.font_size)
        font.setStyleHint(QFont.StyleHint.Monospace)
        self.setFont(font)

        # Tab width from settings. Default: 4 characters
        self.setTabStopDistance(self.fontMetrics().horizontalAdvance(' ') * cached.tab_width)

    @property
    def change_origin(self) -> str:
        """Origin tag of the change being applied right now."""
        return self._change_origin

    def run_tagged(self, origin: str, action: Callable[[], None]) -> None:
        """Run ``action`` with every change it makes tagged as ``origin``."""
        previous = self._change_origin
        self._change_origin = origin
        try:
            action()
        finally:
            self._change_origin = previous

    def undo(self):
        self.run_tagged(ChangeOrigin.UNDO, super().undo)

    def redo(self):
        self.run_tagged(ChangeOrigin.REDO, super().redo)

    def setPlainText(self, text: str):
        self.run_tagged(ChangeOrigin.SET, lambda: super(ListEditor, self).setPlainText(text))

    def keyPressEvent(self, event):
        # The built-in shortcuts call the C++ slots directly, bypassing the tags
        if event.matches(QKeySequence.StandardKey.Undo):
            self.undo()
            event.accept()
            return
        if event.matches(QKeySequence.StandardKey.Redo):
            self.redo()
            event.accept()
            return
        super().keyPressEvent(event)

    def build_context_menu(self) -> QMenu:
        """Standard edit menu with Undo/Redo rewired to the tagged methods."""
        menu = self.createStandardContextMenu()
        for action in menu.actions():
            name = action.objectName()
            if name == "edit-undo":
                action.triggered.disconnect()
                action.triggered.connect(lambda _checked=False: self.undo())
            elif name == "edit-redo":
                action.triggered.disconnect()
                action.triggered.connect(lambda _checked=False: self.redo())
        return menu

    def contextMenuEvent(self, event):
        menu = self.build_context_menu()
        # globalPos() returns QPoint in PyQt6
        menu.exec(event.globalPos())
        menu.deleteLater()
