"""Pure duration arithmetic on hours/minutes/seconds triples.

Every operation goes through the canonical signed-seconds form and builds a
fresh ``Time``; nothing here mutates its inputs or raises on numeric input.
"""
from __future__ import annotations

import math
from dataclasses import dataclass

SECONDS_PER_DAY = 24 * 3600

# Bounds of the signed 64-bit range used when a float product cannot be
# represented (inf/nan).
_INT64_MAX = 2 ** 63 - 1
_INT64_MIN = -2 ** 63


@dataclass(frozen=True)
class Time:
    """An elapsed duration split into hours, minutes and seconds.

    Components may be negative when the value comes from a negative
    canonical duration; ``from_seconds`` distributes the sign over every
    field, e.g. ``-3661`` becomes ``Time(-1, -1, -1)``.
    """

    hours: int = 0
    minutes: int = 0
    seconds: int = 0

    def to_seconds(self) -> int:
        return self.hours * 3600 + self.minutes * 60 + self.seconds

    @classmethod
    def from_seconds(cls, total_seconds: int) -> "Time":
        magnitude = abs(total_seconds)
        hours = magnitude // 3600
        minutes = (magnitude % 3600) // 60
        seconds = magnitude % 60
        if total_seconds < 0:
            return cls(-hours, -minutes, -seconds)
        return cls(hours, minutes, seconds)

    def is_zero(self) -> bool:
        return self.hours == 0 and self.minutes == 0 and self.seconds == 0

    def __str__(self) -> str:
        return format_signed(self, include_seconds=True)


ZERO = Time(0, 0, 0)


def to_seconds(t: Time) -> int:
    return t.to_seconds()


def from_seconds(total_seconds: int) -> Time:
    return Time.from_seconds(total_seconds)


def _truncate_seconds(value: float) -> int:
    """Truncate a float number of seconds toward zero.

    Non-finite values are clamped to the signed 64-bit range, NaN maps to 0.
    """
    if math.isnan(value):
        return 0
    if math.isinf(value):
        return _INT64_MAX if value > 0 else _INT64_MIN
    return int(value)


def add(a: Time, b: Time) -> Time:
    return Time.from_seconds(a.to_seconds() + b.to_seconds())


def subtract(a: Time, b: Time) -> Time:
    return Time.from_seconds(a.to_seconds() - b.to_seconds())


def multiply(t: Time, factor: float) -> Time:
    """Scale ``t`` by ``factor``, truncating the seconds toward zero.

    ``multiply(Time.from_seconds(7), 1.5)`` is 10 seconds, not 11.
    """
    return Time.from_seconds(_truncate_seconds(t.to_seconds() * factor))


def divide(t: Time, divisor: float) -> Time:
    """Divide ``t`` by ``divisor``; dividing by zero yields the zero time."""
    if divisor == 0:
        return ZERO
    return Time.from_seconds(_truncate_seconds(t.to_seconds() / divisor))


def modulus_24(t: Time) -> Time:
    """Wrap ``t`` onto a 24-hour dial, always in ``[0, 86400)`` seconds."""
    return Time.from_seconds(t.to_seconds() % SECONDS_PER_DAY)


def format_signed(t: Time, include_seconds: bool = True) -> str:
    """Format ``t`` as ``HH:MM`` or ``HH:MM:SS`` with a leading ``-`` if negative.

    The digits come from the absolute value, so ``Time(-1, -1, -1)`` renders
    as ``-01:01:01``. Hours use at least two digits and grow as needed.
    """
    total = t.to_seconds()
    sign = '-' if total < 0 else ''
    magnitude = Time.from_seconds(abs(total))
    if include_seconds:
        return f"{sign}{magnitude.hours:02d}:{magnitude.minutes:02d}:{magnitude.seconds:02d}"
    return f"{sign}{magnitude.hours:02d}:{magnitude.minutes:02d}"


def format_clock(t: Time, include_seconds: bool = True) -> str:
    """Format non-negative components as-is, without sign handling."""
    if include_seconds:
        return f"{t.hours:02d}:{t.minutes:02d}:{t.seconds:02d}"
    return f"{t.hours:02d}:{t.minutes:02d}"
