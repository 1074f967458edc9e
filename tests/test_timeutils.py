"""
Tests for the pure time arithmetic helpers
"""
import unittest

from timecalc.core import (
    Time,
    ZERO,
    add,
    divide,
    format_clock,
    format_signed,
    from_seconds,
    modulus_24,
    multiply,
    subtract,
    to_seconds,
)


class TestCanonicalSeconds(unittest.TestCase):
    """Conversion between Time and signed seconds"""

    def test_to_seconds(self):
        self.assertEqual(to_seconds(Time(1, 2, 3)), 3723)
        self.assertEqual(Time(0, 0, 0).to_seconds(), 0)
        self.assertEqual(Time(-1, -1, -1).to_seconds(), -3661)
        # Non-canonical components still sum linearly
        self.assertEqual(Time(0, 90, 75).to_seconds(), 5475)

    def test_from_seconds_positive(self):
        self.assertEqual(from_seconds(3723), Time(1, 2, 3))
        self.assertEqual(Time.from_seconds(59), Time(0, 0, 59))
        self.assertEqual(Time.from_seconds(360000), Time(100, 0, 0))

    def test_from_seconds_distributes_sign(self):
        self.assertEqual(Time.from_seconds(-3661), Time(-1, -1, -1))
        self.assertEqual(Time.from_seconds(-1), Time(0, 0, -1))
        self.assertEqual(Time.from_seconds(-60), Time(0, -1, 0))

    def test_round_trip_for_canonical_values(self):
        for t in (Time(0, 0, 0), Time(0, 59, 59), Time(23, 0, 1), Time(1234, 5, 6)):
            self.assertEqual(Time.from_seconds(t.to_seconds()), t)

    def test_round_trip_normalizes(self):
        self.assertEqual(Time.from_seconds(Time(0, 90, 75).to_seconds()), Time(1, 31, 15))
        self.assertEqual(Time.from_seconds(Time(-1, 2, 3).to_seconds()), Time(0, -57, -57))

    def test_time_is_immutable(self):
        t = Time(1, 2, 3)
        with self.assertRaises(AttributeError):
            t.hours = 5


class TestArithmetic(unittest.TestCase):
    """add / subtract / multiply / divide"""

    def test_add_is_additive_on_seconds(self):
        for a in (-90061, -1, 0, 1, 59, 3600, 86399):
            for b in (-3661, -59, 0, 7, 4000):
                result = add(Time.from_seconds(a), Time.from_seconds(b))
                self.assertEqual(result.to_seconds(), a + b)

    def test_add_carries(self):
        self.assertEqual(add(Time(0, 45, 30), Time(0, 30, 45)), Time(1, 16, 15))

    def test_subtract_can_go_negative(self):
        self.assertEqual(subtract(Time(1, 0, 0), Time(2, 30, 0)), Time(-1, -30, 0))
        self.assertEqual(subtract(Time(2, 30, 0), Time(1, 0, 0)), Time(1, 30, 0))

    def test_multiply_truncates_toward_zero(self):
        self.assertEqual(multiply(Time.from_seconds(7), 1.5), Time(0, 0, 10))
        self.assertEqual(multiply(Time.from_seconds(-7), 1.5), Time(0, 0, -10))
        self.assertEqual(multiply(Time(1, 30, 0), 2), Time(3, 0, 0))
        self.assertEqual(multiply(Time(1, 0, 0), 0), ZERO)

    def test_divide_truncates_toward_zero(self):
        self.assertEqual(divide(Time(0, 0, 10), 3), Time(0, 0, 3))
        self.assertEqual(divide(Time(0, 0, -10), 3), Time(0, 0, -3))
        self.assertEqual(divide(Time(1, 0, 0), 0.5), Time(2, 0, 0))

    def test_divide_by_zero_returns_zero_time(self):
        for t in (Time(1, 2, 3), Time(-5, -6, -7), ZERO):
            self.assertEqual(divide(t, 0.0), Time(0, 0, 0))
            self.assertEqual(divide(t, -0.0), Time(0, 0, 0))

    def test_non_finite_products_do_not_raise(self):
        self.assertEqual(multiply(Time(1, 0, 0), float('nan')), ZERO)
        self.assertEqual(multiply(Time(1, 0, 0), float('inf')).to_seconds(), 2 ** 63 - 1)
        self.assertEqual(multiply(Time(-1, 0, 0), float('inf')).to_seconds(), -2 ** 63)

    def test_modulus_24(self):
        self.assertEqual(modulus_24(Time(0, 0, -1)), Time(23, 59, 59))
        self.assertEqual(modulus_24(Time(25, 30, 0)), Time(1, 30, 0))
        self.assertEqual(modulus_24(Time(24, 0, 0)), ZERO)
        self.assertEqual(modulus_24(Time(-48, 0, 0)), ZERO)


class TestFormatting(unittest.TestCase):
    """Signed HH:MM[:SS] rendering"""

    def test_format_signed_with_seconds(self):
        self.assertEqual(format_signed(Time(1, 2, 3), True), "01:02:03")
        self.assertEqual(format_signed(ZERO, True), "00:00:00")
        self.assertEqual(format_signed(Time(-1, -1, -1), True), "-01:01:01")
        self.assertEqual(format_signed(Time(123, 4, 5), True), "123:04:05")

    def test_format_signed_without_seconds(self):
        self.assertEqual(format_signed(Time(1, 2, 3), False), "01:02")
        self.assertEqual(format_signed(Time(0, 0, -30), False), "-00:00")

    def test_format_signed_uses_absolute_decomposition(self):
        # -1h + 2m + 3s is -57m57s overall
        self.assertEqual(format_signed(Time(-1, 2, 3), True), "-00:57:57")

    def test_str_is_signed_with_seconds(self):
        self.assertEqual(str(Time(0, 5, 0)), "00:05:00")

    def test_format_clock(self):
        self.assertEqual(format_clock(Time(9, 5, 7)), "09:05:07")
        self.assertEqual(format_clock(Time(9, 5, 7), False), "09:05")


if __name__ == "__main__":
    unittest.main()
