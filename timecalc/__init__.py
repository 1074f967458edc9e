"""Calculator for durations in hours, minutes and seconds."""

__all__ = [
    "Session",
    "EntryMode",
    "HistoryEntry",
    "Time",
]

from .core import Time
from .session import Session, EntryMode, HistoryEntry
