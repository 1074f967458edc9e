"""Keystroke-driven calculator session.

``Session`` turns discrete key events (digits, operators, equals, clear,
backspace, paste, "now", 24h modulus) into committed hours/minutes/seconds,
a pending operation and a history of finished computations. It holds no UI
state: callers read its properties and ``render_display()`` after every event.

Malformed buffers never raise. Integer segments fall back to 0 and the
multiplier/divisor falls back to 1.0.
"""
from __future__ import annotations

import logging
from datetime import datetime
from enum import Enum
from typing import List, NamedTuple, Optional, Union

from timecalc.core import (
    Time,
    TimeBreakdown,
    ZERO,
    add,
    breakdown,
    divide,
    format_signed,
    modulus_24,
    multiply,
    parse_int,
    parse_multiplier,
    parse_signed_time_text,
    parse_time_text,
    subtract,
)

logger = logging.getLogger(__name__)


class EntryMode(Enum):
    """Which segment currently receives typed digits."""

    HOURS = 'hours'
    MINUTES = 'minutes'
    SECONDS = 'seconds'
    MULTIPLIER_OPERAND = 'multiplier'


ADD = '+'
SUBTRACT = '-'
MULTIPLY = '×'
DIVIDE = '÷'

OPERATORS = (ADD, SUBTRACT, MULTIPLY, DIVIDE)
SCALAR_OPERATORS = (MULTIPLY, DIVIDE)

_OPERATOR_ALIASES = {
    '*': MULTIPLY,
    'x': MULTIPLY,
    'X': MULTIPLY,
    '/': DIVIDE,
    '−': SUBTRACT,
}

# Largest value a minutes or seconds segment can hold.
_SEGMENT_MAX = 59
# A leading digit at or above this cannot start a two-digit value <= 59.
_EARLY_CLOSE_THRESHOLD = 6


def normalize_operator(op: str) -> str:
    """Map ``op`` (or one of its ASCII aliases) to its canonical symbol.

    Raises ``ValueError`` for anything that is not an operator key.
    """
    op = _OPERATOR_ALIASES.get(op, op)
    if op not in OPERATORS:
        raise ValueError(f"Unknown operator: {op!r}")
    return op


class HistoryEntry(NamedTuple):
    expression: str
    result: str


class Session:
    """Mutable state of one calculator, driven by key events.

    The committed ``hours``/``minutes``/``seconds`` are what has been
    entered so far; ``display_buffer`` holds the digits typed for the active
    segment and is folded into the matching field when the segment closes.
    """

    def __init__(self, use_seconds_precision: bool = True):
        self._display_buffer = ''
        self._hours = 0
        self._minutes = 0
        self._seconds = 0
        self._entry_mode = EntryMode.HOURS
        self._stored_operand: Optional[Time] = None
        self._pending_operator: Optional[str] = None
        self._showing_result = False
        self._replace_on_next_input = False
        self._history: List[HistoryEntry] = []
        self._use_seconds = bool(use_seconds_precision)

    # --- read accessors -------------------------------------------------

    @property
    def display_buffer(self) -> str:
        return self._display_buffer

    @property
    def hours(self) -> int:
        return self._hours

    @property
    def minutes(self) -> int:
        return self._minutes

    @property
    def seconds(self) -> int:
        return self._seconds

    @property
    def current_time(self) -> Time:
        return Time(self._hours, self._minutes, self._seconds)

    @property
    def entry_mode(self) -> EntryMode:
        return self._entry_mode

    @property
    def stored_operand(self) -> Optional[Time]:
        return self._stored_operand

    @property
    def pending_operator(self) -> Optional[str]:
        return self._pending_operator

    @property
    def showing_result(self) -> bool:
        return self._showing_result

    @property
    def replace_on_next_input(self) -> bool:
        return self._replace_on_next_input

    @property
    def history(self) -> List[HistoryEntry]:
        """Finished computations, oldest first."""
        return list(self._history)

    @property
    def display(self) -> str:
        return self.render_display()

    @property
    def use_seconds_precision(self) -> bool:
        return self._use_seconds

    @use_seconds_precision.setter
    def use_seconds_precision(self, value: bool) -> None:
        value = bool(value)
        if value == self._use_seconds:
            return
        self._use_seconds = value
        # The seconds segment disappears: close an entry that is still on it.
        if not value and self._entry_mode is EntryMode.SECONDS and not self._showing_result:
            self._commit_buffer()
            self._display_buffer = ''
            self._replace_on_next_input = False
            self._entry_mode = EntryMode.HOURS
            self._showing_result = True
        logger.debug("Seconds precision set to %s", value)

    # --- internal helpers -----------------------------------------------

    def _set_time(self, t: Time) -> None:
        self._hours = t.hours
        self._minutes = t.minutes
        self._seconds = t.seconds

    def _commit_buffer(self) -> None:
        """Fold a non-empty digit buffer into the active segment.

        Minutes and seconds are clamped to 59. The buffer itself is left
        untouched; the multiplier buffer is never folded into the time.
        """
        if not self._display_buffer:
            return
        if self._entry_mode is EntryMode.HOURS:
            self._hours = parse_int(self._display_buffer)
        elif self._entry_mode is EntryMode.MINUTES:
            self._minutes = min(parse_int(self._display_buffer), _SEGMENT_MAX)
        elif self._entry_mode is EntryMode.SECONDS:
            self._seconds = min(parse_int(self._display_buffer), _SEGMENT_MAX)

    def _start_fresh_entry(self) -> None:
        self._set_time(ZERO)
        self._display_buffer = ''
        self._showing_result = False
        self._entry_mode = EntryMode.HOURS

    def _advance_to_minutes(self) -> None:
        self._display_buffer = str(self._minutes)
        self._entry_mode = EntryMode.MINUTES
        self._replace_on_next_input = True

    def _advance_to_seconds(self) -> None:
        self._display_buffer = str(self._seconds)
        self._entry_mode = EntryMode.SECONDS
        self._replace_on_next_input = True

    def _segment_closes(self) -> bool:
        return (len(self._display_buffer) >= 2
                or parse_int(self._display_buffer) >= _EARLY_CLOSE_THRESHOLD)

    def _format(self, t: Time) -> str:
        return format_signed(t, self._use_seconds)

    # --- key events -----------------------------------------------------

    def digit(self, d: str) -> None:
        """Type one digit, or ``"."`` (the separator key outside multiplier entry)."""
        if d == '.' and self._entry_mode is not EntryMode.MULTIPLIER_OPERAND:
            self.separator()
            return
        if len(d) != 1 or d not in '0123456789.':
            raise ValueError(f"Not a digit key: {d!r}")

        if self._showing_result:
            self._start_fresh_entry()

        if self._replace_on_next_input:
            self._replace_on_next_input = False
            self._display_buffer = d
        else:
            self._display_buffer += d

        mode = self._entry_mode
        if mode is EntryMode.HOURS:
            if len(self._display_buffer) >= 2:
                self._hours = parse_int(self._display_buffer)
                self._advance_to_minutes()
        elif mode is EntryMode.MINUTES:
            if self._segment_closes():
                self._minutes = min(parse_int(self._display_buffer), _SEGMENT_MAX)
                if self._use_seconds:
                    self._advance_to_seconds()
                else:
                    self._display_buffer = ''
                    self._showing_result = True
        elif mode is EntryMode.SECONDS:
            if self._segment_closes():
                self._seconds = min(parse_int(self._display_buffer), _SEGMENT_MAX)
                self._display_buffer = ''
                self._showing_result = True
        elif self._display_buffer.count('.') > 1:
            self._display_buffer = self._display_buffer[:-1]

        logger.debug("Digit %s -> mode=%s buffer=%r", d, self._entry_mode.value, self._display_buffer)

    def separator(self) -> None:
        """The ``:`` key: close the active segment early.

        In multiplier entry it types the decimal point instead.
        """
        if self._entry_mode is EntryMode.MULTIPLIER_OPERAND:
            if '.' not in self._display_buffer:
                self._display_buffer += '.'
            return

        if self._showing_result:
            self._start_fresh_entry()

        if self._entry_mode is EntryMode.HOURS:
            self._hours = parse_int(self._display_buffer)
            self._advance_to_minutes()
        elif self._entry_mode is EntryMode.MINUTES:
            self._minutes = min(parse_int(self._display_buffer), _SEGMENT_MAX)
            if self._use_seconds:
                self._advance_to_seconds()
            else:
                self._display_buffer = ''
                self._entry_mode = EntryMode.HOURS

    def operator(self, op: str) -> None:
        """Capture the current time as left operand of ``op``.

        ``+``/``-`` clear the fields for a fresh right operand; ``×``/``÷``
        switch to typing a decimal scalar.
        """
        op = normalize_operator(op)
        self._commit_buffer()
        self._display_buffer = ''
        self._replace_on_next_input = False

        self._stored_operand = self.current_time
        self._pending_operator = op
        self._showing_result = False
        if op in SCALAR_OPERATORS:
            self._entry_mode = EntryMode.MULTIPLIER_OPERAND
        else:
            self._set_time(ZERO)
            self._entry_mode = EntryMode.HOURS
        logger.debug("Operator %s with left operand %s", op, self._stored_operand)

    def equals(self) -> None:
        """Finish the pending operation, if any, and show its result.

        Only an actual operation is recorded in the history; a bare ``=``
        just re-displays the current time.
        """
        self._commit_buffer()
        current = self.current_time
        op = self._pending_operator
        left = self._stored_operand
        result = current

        if op is not None and left is not None:
            if op == ADD:
                result = add(left, current)
                right_text = self._format(current)
            elif op == SUBTRACT:
                result = subtract(left, current)
                right_text = self._format(current)
            else:
                factor = parse_multiplier(self._display_buffer)
                if factor is None:
                    factor = 1.0
                if op == MULTIPLY:
                    result = multiply(left, factor)
                else:
                    result = divide(left, factor)
                right_text = self._display_buffer

            entry = HistoryEntry(f"{self._format(left)} {op} {right_text}", self._format(result))
            self._history.append(entry)
            logger.info("Computed %s = %s", entry.expression, entry.result)

        self._set_time(result)
        self._showing_result = True
        self._display_buffer = ''
        self._replace_on_next_input = False
        self._stored_operand = None
        self._pending_operator = None
        self._entry_mode = EntryMode.HOURS

    def clear(self) -> None:
        """Clear one level: the typed digits, else the pending op, else the time."""
        if self._display_buffer:
            self._display_buffer = ''
            return

        if self.current_time.is_zero():
            self._stored_operand = None
            self._pending_operator = None
            self._showing_result = False
            if self._entry_mode is EntryMode.MULTIPLIER_OPERAND:
                self._entry_mode = EntryMode.HOURS
            logger.debug("Cleared pending operation")
            return

        self._set_time(ZERO)
        self._entry_mode = EntryMode.HOURS
        self._showing_result = False

    def backspace(self) -> None:
        """Delete the last typed digit, reopening committed segments if needed."""
        if self._entry_mode is EntryMode.MULTIPLIER_OPERAND or self._display_buffer:
            self._display_buffer = self._display_buffer[:-1]
            return

        self._showing_result = False
        self._replace_on_next_input = False
        while True:
            if self._entry_mode is EntryMode.SECONDS:
                if self._seconds > 0:
                    self._display_buffer = str(self._seconds)[:-1]
                    self._seconds = 0
                    return
                self._entry_mode = EntryMode.MINUTES
            elif self._entry_mode is EntryMode.MINUTES:
                if self._minutes > 0:
                    self._display_buffer = str(self._minutes)[:-1]
                    self._minutes = 0
                    return
                self._entry_mode = EntryMode.HOURS
            else:
                if self._hours > 0:
                    self._display_buffer = str(self._hours)[:-1]
                    self._hours = 0
                return

    def modulus24(self) -> None:
        """Wrap the current time onto a 24-hour dial and show it."""
        self._commit_buffer()
        self._set_time(modulus_24(self.current_time))
        self._display_buffer = ''
        self._replace_on_next_input = False
        self._entry_mode = EntryMode.HOURS
        self._showing_result = True

    def load_time(self, hours: Union[int, Time], minutes: int = 0, seconds: int = 0) -> None:
        """Replace the current time outright and show it as a result.

        Takes either the three fields or a single ``Time``.
        """
        if isinstance(hours, Time):
            hours, minutes, seconds = hours.hours, hours.minutes, hours.seconds
        self._set_time(Time(hours, minutes, seconds))
        self._display_buffer = ''
        self._replace_on_next_input = False
        self._stored_operand = None
        self._pending_operator = None
        self._entry_mode = EntryMode.HOURS
        self._showing_result = True
        logger.debug("Loaded time %s", self.current_time)

    def load_current_time(self, now: Optional[datetime] = None) -> None:
        now = now or datetime.now()
        self.load_time(now.hour, now.minute, now.second)

    def load_from_history(self, result_text: str) -> bool:
        """Load a history result string; returns False if it does not parse."""
        t = parse_signed_time_text(result_text)
        if t is None:
            logger.debug("Ignoring unparsable history result %r", result_text)
            return False
        self.load_time(t)
        return True

    def paste(self, text: Optional[str]) -> bool:
        """Apply clipboard text.

        During multiplier entry a decimal number replaces the typed scalar;
        otherwise ``H:MM[:SS]`` text is loaded as the current time. Anything
        else is ignored. Returns whether the paste was applied.
        """
        text = (text or '').strip()
        if not text:
            return False

        if self._entry_mode is EntryMode.MULTIPLIER_OPERAND:
            if parse_multiplier(text) is None:
                return False
            self._display_buffer = text
            return True

        t = parse_time_text(text)
        if t is None:
            logger.debug("Ignoring unparsable paste %r", text)
            return False
        self.load_time(t)
        return True

    def clear_history(self) -> None:
        self._history.clear()

    # --- projections ----------------------------------------------------

    def snapshot(self) -> Time:
        """The time as currently seen, with typed digits applied to their segment."""
        h, m, s = self._hours, self._minutes, self._seconds
        if self._display_buffer:
            if self._entry_mode is EntryMode.HOURS:
                h = parse_int(self._display_buffer, h)
            elif self._entry_mode is EntryMode.MINUTES:
                m = min(parse_int(self._display_buffer, m), _SEGMENT_MAX)
            elif self._entry_mode is EntryMode.SECONDS:
                s = min(parse_int(self._display_buffer, s), _SEGMENT_MAX)
        return Time(h, m, s)

    def breakdown(self) -> TimeBreakdown:
        return breakdown(self.snapshot(), self._use_seconds)

    def render_display(self) -> str:
        if self._showing_result:
            return self._format(self.current_time)

        if self._entry_mode is EntryMode.MULTIPLIER_OPERAND:
            left = self._format(self._stored_operand or ZERO)
            op = self._pending_operator or MULTIPLY
            return f"{left} {op} {self._display_buffer or '0'}"

        active = self._display_buffer or '00'
        segments = [f"{self._hours:02d}", f"{self._minutes:02d}", f"{self._seconds:02d}"]
        if self._entry_mode is EntryMode.HOURS:
            segments[0] = active
        elif self._entry_mode is EntryMode.MINUTES:
            segments[1] = active
        else:
            segments[2] = active

        if not self._use_seconds and self._entry_mode is not EntryMode.SECONDS:
            segments = segments[:2]
        return ':'.join(segments)

    def operation_line(self) -> str:
        """``"<left> <op>"`` while an operation is pending, else ``""``."""
        if self._pending_operator is None:
            return ''
        return f"{self._format(self._stored_operand or ZERO)} {self._pending_operator}"

    def serialize_for_clipboard(self) -> str:
        if self._entry_mode is EntryMode.MULTIPLIER_OPERAND:
            return self._display_buffer
        return self.render_display()
