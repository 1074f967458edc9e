"""
Command-line interface for the time calculator
"""
import argparse
import logging
import os
from typing import Iterable, List, Optional

from .config import Config
from .core import TimeBreakdown, parse_int
from .errors import ConfigError, UnknownKeyError
from .session import EntryMode, HistoryEntry, Session, OPERATORS, normalize_operator

logger = logging.getLogger(__name__)

# Single-character keys that may be typed back to back, e.g. "12:30+45=".
KEY_CHARS = set('0123456789.:+-*/x×÷=')

COMMANDS = {'c', 'b', 'mod', 'now', 'hist', 'clearhist', 'copy', 'info', 'seconds', 'q'}
# Commands that consume the following word as their argument.
ARG_COMMANDS = {'paste', 'load'}

HELP_TEXT = """Keys:
  0-9        type a digit          :  or .   next segment / decimal point
  + - * /    operators (x × ÷ too) =         compute
  c          clear                 b         backspace
  mod        wrap onto 24 hours    now       load the current time
  hist       show history          clearhist clear history
  load N     load history result N paste T   paste time or number T
  copy       print clipboard text  info      totals and clock readings
  seconds    toggle seconds        q         quit"""


def split_keys(line: str) -> List[str]:
    """Split a line of input into key tokens.

    Runs of key characters are split into single keys, command words are
    kept whole and ``paste``/``load`` take the next word as argument.
    """
    tokens: List[str] = []
    words = line.split()
    i = 0
    while i < len(words):
        word = words[i]
        lowered = word.lower()
        if lowered in ARG_COMMANDS:
            arg = words[i + 1] if i + 1 < len(words) else ''
            tokens.append(f"{lowered} {arg}".strip())
            i += 2
            continue
        if lowered in COMMANDS:
            tokens.append(lowered)
        elif all(ch in KEY_CHARS for ch in word):
            tokens.extend(word)
        else:
            tokens.append(word)
        i += 1
    return tokens


def format_history(entries: Iterable[HistoryEntry]) -> str:
    lines = [f"{i}. {entry.expression} = {entry.result}" for i, entry in enumerate(entries, 1)]
    if not lines:
        return "No history."
    return "\n".join(lines)


def format_breakdown(b: TimeBreakdown) -> str:
    """Render the breakdown pills on one line, bare labels for zero totals."""
    parts = []
    for label, value in b.pills():
        parts.append(f"{label} {value}" if value else label)
    return "  ".join(parts)


def status_line(session: Session) -> str:
    """Display text, prefixed by the pending operation when it is not already shown."""
    display = session.render_display()
    op_line = session.operation_line()
    if op_line and session.entry_mode is not EntryMode.MULTIPLIER_OPERAND:
        return f"{op_line}  {display}"
    return display


def _toggle_seconds(session: Session, config: Optional[Config]) -> str:
    session.use_seconds_precision = not session.use_seconds_precision
    state = 'on' if session.use_seconds_precision else 'off'
    if config is not None:
        if not config.config_file:
            config.set('use_seconds', session.use_seconds_precision)
        else:
            try:
                config.persist_value('use_seconds', session.use_seconds_precision)
            except ConfigError as e:
                logger.warning("Could not persist seconds preference: %s", e)
    return f"Seconds precision: {state}"


def apply_key(session: Session, token: str, config: Optional[Config] = None) -> Optional[str]:
    """Dispatch one key token to ``session``.

    Returns text to show the user for informational keys, ``None`` otherwise.
    Raises ``UnknownKeyError`` for tokens that are not calculator keys.
    """
    if len(token) == 1 and token in '0123456789.':
        session.digit(token)
    elif token == ':':
        session.separator()
    elif token == '=':
        session.equals()
    elif token in OPERATORS or token in ('*', '/', 'x', 'X', '−'):
        session.operator(normalize_operator(token))
    elif token == 'c':
        session.clear()
    elif token == 'b':
        session.backspace()
    elif token == 'mod':
        session.modulus24()
    elif token == 'now':
        session.load_current_time()
    elif token == 'hist':
        return format_history(session.history)
    elif token == 'clearhist':
        session.clear_history()
        return "History cleared."
    elif token == 'copy':
        return session.serialize_for_clipboard()
    elif token == 'info':
        return format_breakdown(session.breakdown())
    elif token == 'seconds':
        return _toggle_seconds(session, config)
    elif token == 'paste' or token.startswith('paste '):
        text = token[len('paste'):].strip()
        if not session.paste(text):
            return f"Nothing to paste from {text!r}"
    elif token == 'load' or token.startswith('load '):
        number = parse_int(token[len('load'):].strip())
        entries = session.history
        if not 1 <= number <= len(entries):
            return f"No history entry {number}"
        session.load_from_history(entries[number - 1].result)
    else:
        raise UnknownKeyError(f"Unknown key: {token}")
    return None


def run_keys(session: Session, tokens: Iterable[str], config: Optional[Config] = None) -> bool:
    """Apply ``tokens`` in order, printing informational output.

    Returns False when a quit key was seen.
    """
    for token in tokens:
        if token == 'q':
            return False
        try:
            output = apply_key(session, token, config)
        except UnknownKeyError as e:
            print(f"Error: {e}")
            continue
        if output is not None:
            print(output)
    return True


def interactive(session: Session, config: Config) -> None:
    print(HELP_TEXT)
    print(status_line(session))
    while True:
        try:
            line = input(config.get('prompt') or 'timecalc> ')
        except (EOFError, KeyboardInterrupt):
            print()
            return
        if line.strip() in ('?', 'help'):
            print(HELP_TEXT)
            continue
        if not run_keys(session, split_keys(line), config):
            return
        print(status_line(session))


def _find_default_config() -> Optional[str]:
    cwd = os.getcwd()
    for name in ('timecalc.yml', 'timecalc.yaml'):
        candidate = os.path.join(cwd, name)
        if os.path.exists(candidate):
            return candidate
    return None


def main(argv: Optional[List[str]] = None) -> int:
    """CLI entry point"""
    parser = argparse.ArgumentParser(description='Calculator for hours, minutes and seconds')
    parser.add_argument('--config', type=str, help='Path to the YAML configuration file')
    parser.add_argument('--keys', type=str, help='Keys to apply non-interactively, e.g. "1230+45="; prints the final display')
    parser.add_argument('--log-level', type=str, help='Logging level (DEBUG, INFO, WARNING, ...)')
    seconds_group = parser.add_mutually_exclusive_group()
    seconds_group.add_argument('--seconds', dest='use_seconds', action='store_true', help='Enter and show seconds')
    seconds_group.add_argument('--no-seconds', dest='use_seconds', action='store_false', help='Enter and show hours and minutes only')
    parser.set_defaults(use_seconds=None)

    args = parser.parse_args(argv)

    try:
        config = Config(config_file=args.config or _find_default_config())
    except ConfigError as e:
        print(f"Error: {e}")
        return 1

    config.update_from_args({
        'use_seconds': args.use_seconds,
        'log_level': args.log_level,
    })

    level_name = str(config.get('log_level', 'WARNING')).upper()
    logging.basicConfig(level=getattr(logging, level_name, logging.WARNING))
    logger.debug("Configuration: %s", config.get_all())

    session = Session(use_seconds_precision=config.get('use_seconds', True))

    if args.keys is not None:
        run_keys(session, split_keys(args.keys), config)
        print(status_line(session))
        return 0

    interactive(session, config)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
