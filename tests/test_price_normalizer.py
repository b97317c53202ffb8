# tests/test_price_normalizer.py

"""Tests for storefront price normalization."""

import unittest
from decimal import Decimal

from src.extraction.price_normalizer import normalize
from src.models.errors import MalformedPrice
from src.models.price import Money


class TestNormalize(unittest.TestCase):
    """Locale-formatted price text to Money."""

    def test_decimal_comma(self) -> None:
        """'149,90 TL' parses with a comma decimal separator."""
        money = normalize("149,90 TL")
        self.assertEqual(money, Money("TL", Decimal("149.90")))

    def test_thousands_dot_and_decimal_comma(self) -> None:
        """Dots before a decimal comma are thousands separators."""
        money = normalize("1.234,56 TL")
        self.assertEqual(money.amount, Decimal("1234.56"))
        self.assertEqual(money.currency, "TL")

    def test_truncates_instead_of_rounding(self) -> None:
        """Sub-cent digits are dropped, never rounded up."""
        self.assertEqual(normalize("10,567 TL").amount, Decimal("10.56"))
        self.assertEqual(normalize("10,569 TL").amount, Decimal("10.56"))
        self.assertEqual(normalize("0,999 TL").amount, Decimal("0.99"))

    def test_no_binary_float_drift(self) -> None:
        """Values that drift as floats stay exact."""
        # 0.29 * 100 == 28.999999999999996 as a float
        self.assertEqual(normalize("0,29 TL").amount, Decimal("0.29"))
        self.assertEqual(normalize("4,35 TL").amount, Decimal("4.35"))

    def test_whole_number(self) -> None:
        """Integers get two fractional digits."""
        money = normalize("75 TL")
        self.assertEqual(money.amount, Decimal("75.00"))
        self.assertEqual(str(money.amount), "75.00")

    def test_grouped_thousands_without_decimals(self) -> None:
        """'1.250 TL' is one thousand two hundred fifty."""
        self.assertEqual(normalize("1.250 TL").amount, Decimal("1250"))

    def test_dot_decimal_without_comma(self) -> None:
        """A lone dot with non-grouped digits is a decimal point."""
        self.assertEqual(normalize("12.5 TL").amount, Decimal("12.50"))

    def test_surrounding_whitespace(self) -> None:
        """Padding and newlines around the amount are ignored."""
        self.assertEqual(
            normalize("\n   99,00   TL\n").amount, Decimal("99.00")
        )

    def test_text_after_marker_is_ignored(self) -> None:
        """Only the text before the first marker is parsed."""
        self.assertEqual(
            normalize("50,00 TL (KDV dahil) TL").amount,
            Decimal("50.00"),
        )

    def test_custom_marker(self) -> None:
        """The currency marker is configurable."""
        money = normalize("12,30 EUR", marker="EUR")
        self.assertEqual(money.currency, "EUR")
        self.assertEqual(money.amount, Decimal("12.30"))

    def test_missing_marker_raises(self) -> None:
        """Text without the marker is malformed."""
        with self.assertRaises(MalformedPrice):
            normalize("149,90")

    def test_empty_and_none_raise(self) -> None:
        """Absent price text is malformed."""
        for raw in ("", None):
            with self.subTest(raw=raw):
                with self.assertRaises(MalformedPrice):
                    normalize(raw)

    def test_non_numeric_remainder_raises(self) -> None:
        """Text before the marker must be a number."""
        for raw in ("Tükendi TL", " TL", "12,3a TL", "1,2,3 TL"):
            with self.subTest(raw=raw):
                with self.assertRaises(MalformedPrice):
                    normalize(raw)

    def test_negative_amount_raises(self) -> None:
        """Amounts are never negative."""
        with self.assertRaises(MalformedPrice):
            normalize("-5,00 TL")

    def test_error_kind(self) -> None:
        """The raised error reports its kind and upstream status."""
        with self.assertRaises(MalformedPrice) as ctx:
            normalize("abc")
        self.assertEqual(ctx.exception.kind, "MalformedPrice")
        self.assertEqual(ctx.exception.status, 502)


if __name__ == "__main__":
    unittest.main()
