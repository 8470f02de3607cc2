"""
main.py

AutoList - ordered-list continuation editor

PyQt6 application hosting a plain-text editor with:
- Next-marker insertion on Enter (1. / A. / a. / IV. / 三、, optionally bracketed)
- Double Enter on a marker-only line to end the list
- Renumbering of the following run when lines are merged or deleted

Usage:
    python main.py [file.txt]

Dependencies:
    pip install PyQt6 platformdirs tomli-w
"""

from __future__ import annotations

import sys
from pathlib import Path
from typing import Optional

from PyQt6.QtGui import QAction, QKeySequence
from PyQt6.QtWidgets import QApplication, QFileDialog, QMainWindow, QMessageBox

from debug_trace import Category, close_log, trace, trace_exception
from editor import ListContinuation, ListEditor
from models import ContinuationConfig
from settings import SettingsManager, get_settings


class MainWindow(QMainWindow):
    """Single-document window with list continuation attached to its editor."""

    def __init__(self, settings_manager: SettingsManager):
        super().__init__()
        self.settings_manager = settings_manager
        self._path: Optional[Path] = None

        self.editor = ListEditor(self)
        self.setCentralWidget(self.editor)

        config = ContinuationConfig.from_settings(settings_manager.settings.continuation)
        self.continuation = ListContinuation(self.editor, config)
        self.continuation.edits_applied.connect(self._on_edits_applied)
        self.continuation.start()

        self._build_menu()
        self._update_title()

    def _build_menu(self):
        file_menu = self.menuBar().addMenu("&File")

        open_act = QAction("&Open...", self)
        open_act.setShortcut(QKeySequence.StandardKey.Open)
        open_act.triggered.connect(self.open_file_dialog)
        file_menu.addAction(open_act)

        save_act = QAction("&Save", self)
        save_act.setShortcut(QKeySequence.StandardKey.Save)
        save_act.triggered.connect(self.save_file)
        file_menu.addAction(save_act)

        file_menu.addSeparator()
        quit_act = QAction("&Quit", self)
        quit_act.setShortcut(QKeySequence.StandardKey.Quit)
        quit_act.triggered.connect(self.close)
        file_menu.addAction(quit_act)

        edit_menu = self.menuBar().addMenu("&Edit")
        self.toggle_act = QAction("Auto-continue &lists", self)
        self.toggle_act.setCheckable(True)
        self.toggle_act.setChecked(self.continuation.is_active)
        self.toggle_act.toggled.connect(self._on_toggle_continuation)
        edit_menu.addAction(self.toggle_act)

    def _update_title(self):
        name = self._path.name if self._path else "Untitled"
        self.setWindowTitle(f"{name} - AutoList")

    def _on_toggle_continuation(self, enabled: bool):
        if enabled:
            self.continuation.start()
        else:
            self.continuation.stop()

    def _on_edits_applied(self, count: int):
        self.statusBar().showMessage(f"List updated ({count} edit{'s' if count != 1 else ''})", 2000)

    def load_file(self, path: Path):
        """Load a UTF-8 text file into the editor."""
        trace(f"Loading {path}", Category.MAIN)
        try:
            text = path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            QMessageBox.critical(self, "Open failed", f"Could not read {path}:\n{e}")
            return
        self.editor.setPlainText(text)
        self._path = path
        self._update_title()

    def open_file_dialog(self):
        path, _ = QFileDialog.getOpenFileName(self, "Open text file", "", "Text files (*.txt *.md);;All files (*)")
        if path:
            self.load_file(Path(path))

    def save_file(self):
        """Save the editor text, asking for a path the first time."""
        if self._path is None:
            path, _ = QFileDialog.getSaveFileName(self, "Save text file", "", "Text files (*.txt *.md);;All files (*)")
            if not path:
                return
            self._path = Path(path)
        try:
            self._path.write_text(self.editor.toPlainText(), encoding="utf-8")
        except OSError as e:
            QMessageBox.critical(self, "Save failed", f"Could not write {self._path}:\n{e}")
            return
        self._update_title()
        self.statusBar().showMessage(f"Saved {self._path}", 2000)


def main():
    """Application entry point."""
    trace("Application starting", Category.MAIN)
    app = QApplication(sys.argv)

    # Load settings (use singleton to ensure single instance)
    settings_manager = get_settings()
    trace(f"Settings loaded from {settings_manager.get_settings_path()}", Category.MAIN)

    # Ensure settings file has all sections
    settings_manager.ensure_file_complete()

    # Save settings on application quit
    def save_on_quit():
        trace("Saving settings on quit", Category.MAIN)
        settings_manager.save()
        close_log()

    app.aboutToQuit.connect(save_on_quit)

    trace("Creating MainWindow", Category.MAIN)
    w = MainWindow(settings_manager)
    if len(sys.argv) > 1:
        w.load_file(Path(sys.argv[1]))
    w.resize(900, 700)
    w.show()
    trace("Entering event loop", Category.MAIN)
    sys.exit(app.exec())


if __name__ == "__main__":
    # Set up global exception handler to catch crashes
    def excepthook(exc_type, exc_value, exc_tb):
        import traceback
        trace("UNCAUGHT EXCEPTION:", Category.CRASH)
        trace("".join(traceback.format_exception(exc_type, exc_value, exc_tb)), Category.CRASH)
        close_log()
        sys.__excepthook__(exc_type, exc_value, exc_tb)

    sys.excepthook = excepthook

    try:
        main()
    except Exception as e:
        trace(f"FATAL: {type(e).__name__}: {e}", Category.CRASH)
        trace_exception("Fatal exception", Category.CRASH)
        close_log()
        raise
