"""
debug_trace.py

Trace output for the list-continuation pipeline.

Switched on from the environment so tests and normal runs stay quiet:

    AUTOLIST_DEBUG_TRACE=1   trace MAIN / LIST / ERROR / CRASH events
    AUTOLIST_TRACE_EDITS=1   also trace every document change (EDIT)

Lines go to stderr and to LOG_FILE in the working directory.
"""

import os
import sys
import traceback
from datetime import datetime
from functools import wraps


def _env_flag(name: str) -> bool:
    return os.environ.get(name, "") not in ("", "0")


class Category:
    """Trace categories used across the app."""
    MAIN = "MAIN"     # window lifecycle, file I/O
    LIST = "LIST"     # continuation batches computed and applied
    EDIT = "EDIT"     # raw document changes
    ERROR = "ERROR"
    CRASH = "CRASH"


DEBUG_TRACE = _env_flag("AUTOLIST_DEBUG_TRACE")
TRACE_EDITS = _env_flag("AUTOLIST_TRACE_EDITS")

# Only written when TRACE_EDITS is also on
VERBOSE_CATEGORIES = frozenset({Category.EDIT})

LOG_FILE = "autolist_debug.log"

_log_file = None


def enabled(category: str) -> bool:
    """True if a message in ``category`` would be written."""
    if not DEBUG_TRACE:
        return False
    return TRACE_EDITS or category not in VERBOSE_CATEGORIES


def _write(line: str) -> None:
    global _log_file
    print(line, file=sys.stderr, flush=True)
    if not LOG_FILE:
        return
    try:
        if _log_file is None:
            _log_file = open(LOG_FILE, "w", encoding="utf-8")
        _log_file.write(line + "\n")
        _log_file.flush()
    except OSError:
        # Keep tracing to stderr if the log file is unwritable
        _log_file = None


def trace(msg: str, category: str = Category.MAIN):
    """Write one timestamped trace line."""
    if not enabled(category):
        return
    stamp = datetime.now().strftime("%H:%M:%S.%f")[:-3]
    _write(f"[{stamp}] [{category}] {msg}")


def trace_exception(msg: str = "Exception", category: str = Category.ERROR):
    """Trace the exception currently being handled, with its traceback."""
    if enabled(category):
        trace(f"{msg}: {traceback.format_exc()}", category)


def trace_call(category: str = Category.LIST):
    """Decorator tracing entry, exit and failure of a function."""
    def decorator(func):
        if not DEBUG_TRACE:
            return func
        name = func.__qualname__

        @wraps(func)
        def wrapper(*args, **kwargs):
            trace(f"-> {name}", category)
            try:
                result = func(*args, **kwargs)
            except Exception as e:
                trace(f"!! {name}: {type(e).__name__}: {e}", Category.ERROR)
                raise
            trace(f"<- {name}", category)
            return result
        return wrapper
    return decorator


def close_log():
    """Close the trace log file, if one was opened."""
    global _log_file
    if _log_file is not None:
        _log_file.close()
        _log_file = None
