"""
Core time arithmetic and parsing helpers for the time calculator.

This package hosts pure, side-effect-free logic: the ``Time`` value, its
arithmetic, the text parsers used for typed and pasted input, and the
breakdown of a duration into alternative readings.
"""

__all__ = [
    "Time",
    "ZERO",
    "to_seconds",
    "from_seconds",
    "add",
    "subtract",
    "multiply",
    "divide",
    "modulus_24",
    "format_signed",
    "format_clock",
    "parse_int",
    "parse_multiplier",
    "parse_time_text",
    "parse_signed_time_text",
    "TimeBreakdown",
    "breakdown",
]

from .timeutils import (
    Time,
    ZERO,
    to_seconds,
    from_seconds,
    add,
    subtract,
    multiply,
    divide,
    modulus_24,
    format_signed,
    format_clock,
)
from .parsing import parse_int, parse_multiplier, parse_time_text, parse_signed_time_text
from .breakdown import TimeBreakdown, breakdown
