"""Total parsers for typed and pasted text.

None of these functions raise on malformed input: integer segments fall back
to a default, the multiplier and time parsers return ``None`` so the caller
decides whether to ignore the input.
"""
from __future__ import annotations

import math
import re
from typing import Optional

from .timeutils import Time

_INT_RE = re.compile(r'[+-]?[0-9]+')
_DECIMAL_RE = re.compile(r"[+-]?(?:[0-9]+\.?[0-9]*|\.[0-9]+)(?:[eE][+-]?[0-9]+)?")


def parse_int(text: Optional[str], default: int = 0) -> int:
    """Parse an ASCII integer with optional sign, or return ``default``."""
    if text is None or not _INT_RE.fullmatch(text):
        return default
    return int(text)


def _parse_int_or_none(text: str) -> Optional[int]:
    if not _INT_RE.fullmatch(text):
        return None
    return int(text)


def parse_multiplier(text: Optional[str]) -> Optional[float]:
    """Parse a decimal scalar such as ``"2"``, ``"1.5"``, ``".5"``, ``"3."`` or ``"1e3"``.

    Returns ``None`` for anything else, including ``"."``, the empty string,
    ``nan``/``inf`` and exponents too large for a finite float.
    """
    if text is None:
        return None
    text = text.strip()
    if not _DECIMAL_RE.fullmatch(text):
        return None
    value = float(text)
    if not math.isfinite(value):
        return None
    return value


def parse_time_text(text: Optional[str]) -> Optional[Time]:
    """Parse ``"H:MM"`` or ``"H:MM:SS"`` into a ``Time``.

    Hours may be any integer, negative included; the sign applies to the
    hours field only, so ``"-1:02:03"`` gives ``Time(-1, 2, 3)``. Minutes and
    seconds must be in ``[0, 59]``. Returns ``None`` when the text has no
    colon, the wrong number of parts, a non-numeric part or an out-of-range
    minute/second.
    """
    if text is None:
        return None
    trimmed = text.strip()
    if ':' not in trimmed:
        return None

    parts = trimmed.split(':')
    if len(parts) not in (2, 3):
        return None

    values = [_parse_int_or_none(p) for p in parts]
    if any(v is None for v in values):
        return None

    hours = values[0]
    minutes = values[1]
    seconds = values[2] if len(values) == 3 else 0
    if not (0 <= minutes <= 59 and 0 <= seconds <= 59):
        return None
    return Time(hours, minutes, seconds)


def parse_signed_time_text(text: Optional[str]) -> Optional[Time]:
    """Parse text produced by ``format_signed`` back into a canonical ``Time``.

    A leading ``-`` negates the whole duration, so ``"-01:01:01"`` is
    ``Time(-1, -1, -1)`` (-3661 seconds).
    """
    if text is None:
        return None
    trimmed = text.strip()
    negative = trimmed.startswith('-')
    if negative:
        trimmed = trimmed[1:]
        if trimmed.startswith(('-', '+')):
            return None
    parsed = parse_time_text(trimmed)
    if parsed is None:
        return None
    total = parsed.to_seconds()
    return Time.from_seconds(-total if negative else total)
