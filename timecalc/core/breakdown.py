"""Alternative readings of a duration: unit totals and wall-clock forms."""
from __future__ import annotations

from dataclasses import dataclass
from typing import List, Tuple

from .timeutils import Time, format_clock, modulus_24


@dataclass(frozen=True)
class TimeBreakdown:
    total_days: float
    total_hours: float
    total_minutes: float
    total_seconds: int
    clock_24h: str
    clock_12h: str

    def pills(self) -> List[Tuple[str, str]]:
        """Labelled values in display order; zero totals render as ``""``."""
        return [
            ('D', _blank_if_zero(f"{self.total_days:.1f}")),
            ('H', _blank_if_zero(f"{self.total_hours:.1f}")),
            ('M', _blank_if_zero(f"{self.total_minutes:.1f}")),
            ('S', _blank_if_zero(f"{self.total_seconds:d}")),
            ('24h', self.clock_24h),
            ('12h', self.clock_12h),
        ]


def _blank_if_zero(text: str) -> str:
    return '' if text in ('0', '0.0', '-0.0') else text


def breakdown(t: Time, include_seconds: bool = True) -> TimeBreakdown:
    """Build the totals and 24h/12h clock readings for ``t``.

    Clock readings wrap the duration onto a day first, so negative values
    count back from midnight.
    """
    total = t.to_seconds()
    dial = modulus_24(t)
    hour_12 = ((dial.hours + 11) % 12) + 1
    am_pm = 'AM' if dial.hours < 12 else 'PM'
    clock_12h = format_clock(Time(hour_12, dial.minutes, dial.seconds), include_seconds)

    return TimeBreakdown(
        total_days=total / 86400.0,
        total_hours=total / 3600.0,
        total_minutes=total / 60.0,
        total_seconds=total,
        clock_24h=format_clock(dial, include_seconds),
        clock_12h=f"{clock_12h} {am_pm}",
    )
