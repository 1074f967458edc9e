"""
Tests for the CLI helper functions (no terminal I/O)
"""
import os
import tempfile
import unittest

from timecalc import cli
from timecalc.config import Config
from timecalc.core import Time
from timecalc.errors import UnknownKeyError
from timecalc.session import Session


class TestSplitKeys(unittest.TestCase):
    """Tokenizing a line of keys"""

    def test_key_runs_are_split_into_single_keys(self):
        self.assertEqual(cli.split_keys("12:30+45="),
                         ['1', '2', ':', '3', '0', '+', '4', '5', '='])
        self.assertEqual(cli.split_keys("1 x 2"), ['1', 'x', '2'])

    def test_commands_are_kept_whole(self):
        self.assertEqual(cli.split_keys("MOD now hist"), ['mod', 'now', 'hist'])
        self.assertEqual(cli.split_keys("c b q"), ['c', 'b', 'q'])

    def test_argument_commands_take_next_word(self):
        self.assertEqual(cli.split_keys("paste 1:30 hist"), ['paste 1:30', 'hist'])
        self.assertEqual(cli.split_keys("load 2"), ['load 2'])
        self.assertEqual(cli.split_keys("load"), ['load'])

    def test_unknown_words_pass_through(self):
        self.assertEqual(cli.split_keys("foo 1"), ['foo', '1'])


class TestApplyKey(unittest.TestCase):
    """Dispatching tokens to a session"""

    def _session_after(self, keys, **kwargs):
        session = Session(**kwargs)
        for token in cli.split_keys(keys):
            cli.apply_key(session, token)
        return session

    def test_addition(self):
        s = self._session_after("0130 + 0045 =")
        self.assertEqual(s.current_time, Time(2, 15, 0))

    def test_ascii_operator_aliases(self):
        s = self._session_after("02 * 3 =")
        self.assertEqual(s.current_time, Time(6, 0, 0))
        s = self._session_after("02 / 4 =")
        self.assertEqual(s.current_time, Time(0, 30, 0))

    def test_history_output(self):
        s = self._session_after("0130 + 0045 =")
        self.assertEqual(cli.apply_key(s, 'hist'), "1. 01:30:00 + 00:45:00 = 02:15:00")
        self.assertEqual(cli.apply_key(s, 'clearhist'), "History cleared.")
        self.assertEqual(cli.apply_key(s, 'hist'), "No history.")

    def test_load_history_entry(self):
        s = self._session_after("01 - 02 = c")
        self.assertIsNone(cli.apply_key(s, 'load 1'))
        self.assertEqual(s.current_time, Time(-1, 0, 0))
        self.assertEqual(cli.apply_key(s, 'load 5'), "No history entry 5")

    def test_paste_and_copy(self):
        s = Session()
        self.assertIsNone(cli.apply_key(s, 'paste 2:05'))
        self.assertEqual(cli.apply_key(s, 'copy'), '02:05:00')
        self.assertEqual(cli.apply_key(s, 'paste nope'), "Nothing to paste from 'nope'")

    def test_info(self):
        s = Session()
        s.load_time(13, 0, 0)
        self.assertEqual(cli.apply_key(s, 'info'),
                         "D 0.5  H 13.0  M 780.0  S 46800  24h 13:00:00  12h 01:00:00 PM")

    def test_unknown_key_raises(self):
        with self.assertRaises(UnknownKeyError):
            cli.apply_key(Session(), 'foo')

    def test_seconds_toggle_is_persisted(self):
        with tempfile.TemporaryDirectory() as tmp:
            path = os.path.join(tmp, 'timecalc.yml')
            config = Config(config_file=path)
            s = Session()
            self.assertEqual(cli.apply_key(s, 'seconds', config), "Seconds precision: off")
            self.assertFalse(s.use_seconds_precision)
            self.assertIs(Config(config_file=path).get('use_seconds'), False)

    def test_seconds_toggle_keeps_command_line_overrides_out_of_file(self):
        with tempfile.TemporaryDirectory() as tmp:
            path = os.path.join(tmp, 'timecalc.yml')
            with open(path, 'w', encoding='utf-8') as f:
                f.write('prompt: "> "\n')
            config = Config(config_file=path)
            config.update_from_args({'log_level': 'DEBUG', 'use_seconds': None})
            cli.apply_key(Session(), 'seconds', config)
            reloaded = Config(config_file=path)
            self.assertIs(reloaded.get('use_seconds'), False)
            self.assertEqual(reloaded.get('prompt'), '> ')
            self.assertEqual(reloaded.get('log_level'), 'WARNING')

    def test_seconds_toggle_without_config(self):
        s = Session(use_seconds_precision=False)
        self.assertEqual(cli.apply_key(s, 'seconds'), "Seconds precision: on")


class TestFormatting(unittest.TestCase):

    def test_status_line_shows_pending_operation(self):
        s = Session()
        s.load_time(1, 0, 0)
        s.operator('+')
        self.assertEqual(cli.status_line(s), "01:00:00 +  00:00:00")

    def test_status_line_in_multiplier_mode(self):
        s = Session()
        s.load_time(1, 0, 0)
        s.operator('×')
        self.assertEqual(cli.status_line(s), "01:00:00 × 0")

    def test_format_breakdown_bare_labels_for_zero(self):
        text = cli.format_breakdown(Session().breakdown())
        self.assertTrue(text.startswith("D  H  M  S  24h 00:00:00"))


if __name__ == "__main__":
    unittest.main()
