"""Terminal user interface for tsm."""

from .keys import Key, KeyEvent, KeyReader
from .selector import SelectionError, SelectionState, Selector, select_candidate

__all__ = [
    "Key",
    "KeyEvent",
    "KeyReader",
    "SelectionError",
    "SelectionState",
    "Selector",
    "select_candidate",
]
