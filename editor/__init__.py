"""
editor package

Plain-text editor with ordered-list continuation: next-marker insertion
on Enter and renumbering after line merges.
"""

from editor.list_editor import ListEditor
from editor.continuation import ListContinuation, PendingEdit, diff_change

__all__ = [
    "ListEditor",
    "ListContinuation",
    "PendingEdit",
    "diff_change",
]
