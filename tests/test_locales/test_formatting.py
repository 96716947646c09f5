"""Tests du formatage monétaire, numérique, des dates et des numéros."""

from datetime import date, datetime
from decimal import Decimal

import pytest

from devispack.locales import (
    format_invoice_number,
    format_locale_currency,
    format_locale_date,
    format_locale_number,
    format_quote_number,
)


class TestFormatLocaleCurrency:
    """Tests de format_locale_currency()."""

    def test_belgian_format(self, fr_be):
        assert format_locale_currency(1234.56, fr_be) == "1.234,56 €"

    def test_french_format(self, fr_fr):
        assert format_locale_currency(1234.56, fr_fr) == "1 234,56 €"

    def test_swiss_format(self, fr_ch):
        assert format_locale_currency(1234.56, fr_ch) == "CHF1'234.56"

    def test_zero(self, fr_be):
        assert format_locale_currency(0, fr_be) == "0,00 €"

    def test_negative_amounts(self, fr_be, fr_ch):
        assert format_locale_currency(-1234.56, fr_be) == "-1.234,56 €"
        assert format_locale_currency(-1234.56, fr_ch) == "CHF-1'234.56"

    def test_large_amount_grouping(self, fr_fr):
        assert format_locale_currency(Decimal("1234567.8"), fr_fr) == "1 234 567,80 €"

    def test_amount_beyond_default_precision(self, fr_be):
        """Les montants de plus de 28 chiffres gardent leurs décimales."""
        assert format_locale_currency("1e30", fr_be) == "1" + ".000" * 10 + ",00 €"

    def test_half_up_rounding(self, fr_be):
        assert format_locale_currency(2.005, fr_be) == "2,01 €"
        assert format_locale_currency("0.125", fr_be) == "0,13 €"

    def test_rounded_negative_zero_has_no_sign(self, fr_be):
        assert format_locale_currency(-0.001, fr_be) == "0,00 €"

    @pytest.mark.parametrize("value", ["1234,56", "1234.56", " 1234.56 "])
    def test_numeric_strings(self, fr_be, value):
        assert format_locale_currency(value, fr_be) == "1.234,56 €"

    @pytest.mark.parametrize("value", [None, "abc", True, float("nan"), float("inf"), [1]])
    def test_unreadable_amount_formats_as_zero(self, fr_be, value):
        assert format_locale_currency(value, fr_be) == "0,00 €"

    @pytest.mark.parametrize("value", ["1e1000000", "-1e1000000", Decimal("9E+999999999")])
    def test_out_of_range_amount_formats_as_zero(self, fr_be, fr_ch, value):
        """Un exposant hors des limites du contexte décimal donne zéro."""
        assert format_locale_currency(value, fr_be) == "0,00 €"
        assert format_locale_currency(value, fr_ch) == "CHF0.00"
        assert format_locale_number(value, fr_be) == "0,00"


class TestFormatLocaleNumber:
    """Tests de format_locale_number()."""

    def test_default_two_decimals(self, fr_fr):
        assert format_locale_number(1234.5, fr_fr) == "1 234,50"

    def test_custom_decimals(self, fr_be):
        assert format_locale_number(1234.5, fr_be, decimals=1) == "1.234,5"
        assert format_locale_number(1234.5, fr_be, decimals=0) == "1.235"

    def test_swiss_separators(self, fr_ch):
        assert format_locale_number(8.1, fr_ch, decimals=1) == "8.1"
        assert format_locale_number(1000000, fr_ch, decimals=0) == "1'000'000"


class TestFormatLocaleDate:
    """Tests de format_locale_date()."""

    def test_date(self, fr_be):
        assert format_locale_date(date(2024, 1, 5), fr_be) == "05/01/2024"

    def test_swiss_dots(self, fr_ch):
        assert format_locale_date(date(2024, 1, 5), fr_ch) == "05.01.2024"

    def test_datetime(self, fr_fr):
        assert format_locale_date(datetime(2024, 12, 31, 23, 59), fr_fr) == "31/12/2024"

    def test_iso_strings(self, fr_be):
        assert format_locale_date("2024-03-09", fr_be) == "09/03/2024"
        assert format_locale_date("2024-03-09T10:30:00Z", fr_be) == "09/03/2024"

    def test_unparsable_string_is_kept(self, fr_be):
        assert format_locale_date("26/01/2024", fr_be) == "26/01/2024"

    @pytest.mark.parametrize("value", [None, 20240101, 3.5])
    def test_other_values(self, fr_be, value):
        assert format_locale_date(value, fr_be) == ""


class TestDocumentNumbers:
    """Tests de la numérotation des devis et factures."""

    when = date(2024, 1, 15)

    def test_belgian_quote(self):
        assert format_quote_number("fr-BE", 42, self.when) == "DEV-2024-0042"

    def test_french_quote(self):
        assert format_quote_number("fr-FR", 42, self.when) == "D202401-042"

    def test_swiss_quote(self):
        assert format_quote_number("fr-CH", 42, self.when) == "OFF-2024-0042"

    @pytest.mark.parametrize("code", ["fr-BE", "fr-FR", "fr-CH"])
    def test_padding_width_is_stable(self, code):
        first = format_quote_number(code, 1, self.when)
        other = format_quote_number(code, 42, self.when)
        assert len(first) == len(other)

    def test_sequence_is_never_truncated(self):
        assert format_quote_number("fr-BE", 123456, self.when) == "DEV-2024-123456"

    def test_invoice_numbers(self):
        assert format_invoice_number("fr-BE", 7, self.when) == "FAC-2024-0007"
        assert format_invoice_number("fr-FR", 7, self.when) == "F202401-007"
        assert format_invoice_number("fr-CH", 7, self.when) == "FACT-2024-0007"

    def test_unknown_locale_uses_belgian_format(self):
        assert format_quote_number("xx", 42, self.when) == "DEV-2024-0042"

    @pytest.mark.parametrize("sequence", [-5, None, "abc", "1e5000", "1e19"])
    def test_unreadable_sequence(self, sequence):
        assert format_quote_number("fr-BE", sequence, self.when) == "DEV-2024-0000"

    def test_defaults_to_today(self):
        assert format_quote_number("fr-BE", 1).startswith(f"DEV-{date.today().year}-")

    def test_huge_integer_sequence(self):
        """Une séquence de plus de 18 chiffres est traitée comme illisible."""
        assert format_quote_number("fr-BE", 10**5000, self.when) == "DEV-2024-0000"
        assert format_invoice_number("fr-FR", 10**18, self.when) == "F202401-000"

    def test_eighteen_digit_sequence_is_kept(self):
        sequence = 10**17 + 1
        assert format_quote_number("fr-BE", sequence, self.when) == f"DEV-2024-{sequence}"
