"""Unit tests for currency, period and number detection."""

import math

import pytest

from tuneit.config.models import SalaryVocabulary
from tuneit.salary.scanner import SalaryScanner


@pytest.fixture
def scanner():
    return SalaryScanner()


class TestDetectCurrencyCode:
    """Tests for SalaryScanner.detect_currency_code."""

    @pytest.mark.parametrize(
        "text,expected",
        [
            ("$120,000 per year", "USD"),
            ("£45k–£55k", "GBP"),
            ("€60.000 brutto", "EUR"),
            ("¥5,000,000", "JPY"),
            ("₹12,00,000 per annum", "INR"),
            ("C$90,000", "CAD"),
            ("A$110k", "AUD"),
            ("US$75,000", "USD"),
        ],
    )
    def test_symbols(self, scanner, text, expected):
        """Test symbol detection, including prefixed dollar symbols."""
        assert scanner.detect_currency_code(text) == expected

    def test_iso_codes_are_case_insensitive(self, scanner):
        """Test ISO codes match regardless of case."""
        assert scanner.detect_currency_code("salary in EUR") == "EUR"
        assert scanner.detect_currency_code("usd 50k") == "USD"
        assert scanner.detect_currency_code("95,000 chf") == "CHF"

    def test_iso_codes_need_word_boundaries(self, scanner):
        """Test codes embedded in longer words are ignored."""
        assert scanner.detect_currency_code("We use CADENCE tooling") is None

    def test_currency_words(self, scanner):
        """Test currency names map to codes."""
        assert scanner.detect_currency_code("paid in euros") == "EUR"
        assert scanner.detect_currency_code("50,000 pounds sterling") == "GBP"
        assert scanner.detect_currency_code("forty dollars an hour") == "USD"

    def test_earliest_mention_wins(self, scanner):
        """Test the first currency in the text is reported."""
        assert scanner.detect_currency_code("CAD 95,000 (approx $70,000)") == "CAD"
        assert scanner.detect_currency_code("$70,000 (approx CAD 95,000)") == "USD"

    @pytest.mark.parametrize("value", [None, "", 123, ["$"], "We value our team"])
    def test_no_currency(self, scanner, value):
        """Test missing or non-string input yields None."""
        assert scanner.detect_currency_code(value) is None

    def test_custom_vocabulary(self):
        """Test a vocabulary override changes detection without touching defaults."""
        vocabulary = SalaryVocabulary(currency_symbols={"$": "CAD"})
        custom = SalaryScanner(vocabulary)

        assert custom.detect_currency_code("$100,000") == "CAD"
        assert SalaryScanner().detect_currency_code("$100,000") == "USD"


class TestDetectPeriod:
    """Tests for SalaryScanner.detect_period."""

    @pytest.mark.parametrize(
        "text,expected",
        [
            ("$120,000 per year", "year"),
            ("£500 a day", "day"),
            ("$40/hr", "hour"),
            ("Hourly rate: $40", "hour"),
            ("paid weekly", "week"),
            ("$5,000 monthly", "month"),
            ("€60k annually", "year"),
            ("₹12 lakh per annum", "year"),
        ],
    )
    def test_keywords(self, scanner, text, expected):
        """Test every period keyword family."""
        assert scanner.detect_period(text) == expected

    def test_plurals_do_not_match(self, scanner):
        """Test "years" in experience requirements is not a pay period."""
        assert scanner.detect_period("5 years of experience") is None
        assert scanner.detect_period("flexible hours") is None

    @pytest.mark.parametrize("value", [None, "", 42])
    def test_no_period(self, scanner, value):
        assert scanner.detect_period(value) is None


class TestParseSalaryNumber:
    """Tests for SalaryScanner.parse_salary_number."""

    @pytest.mark.parametrize(
        "value,expected",
        [
            ("120k", 120000),
            ("120K", 120000),
            ("1.2m", 1200000),
            ("2 million", 2000000),
            ("90 thousand", 90000),
            ("$85,000 per year", 85000),
            ("$1,250.50", 1250.5),
            ("USD 95000", 95000),
            ("5 months", 5),
        ],
    )
    def test_strings(self, scanner, value, expected):
        """Test numeric tokens with separators, decimals and multipliers."""
        assert scanner.parse_salary_number(value) == expected

    def test_integral_values_are_ints(self, scanner):
        """Test integral results come back as int, others as float."""
        assert isinstance(scanner.parse_salary_number("1.2m"), int)
        assert isinstance(scanner.parse_salary_number("$45.50"), float)

    def test_numbers_pass_through(self, scanner):
        """Test numbers are returned unchanged."""
        assert scanner.parse_salary_number(95000) == 95000
        assert scanner.parse_salary_number(12.5) == 12.5

    def test_tokens_beyond_float_range(self, scanner):
        """Test digit runs too large for a float yield None instead of inf."""
        assert scanner.parse_salary_number("1" * 400 + ".5") is None
        assert scanner.parse_salary_number("9" * 400) is None

    @pytest.mark.parametrize(
        "value",
        ["not a number", "", None, True, False, float("nan"), math.inf, ["120k"]],
    )
    def test_invalid_values(self, scanner, value):
        """Test non-numeric input yields None."""
        assert scanner.parse_salary_number(value) is None


class TestCoercion:
    """Tests for single-token coercion onto the vocabularies."""

    @pytest.mark.parametrize(
        "value,expected",
        [("usd", "USD"), (" GBP ", "GBP"), ("£", "GBP"), ("Euros", "EUR"), ("C$", "CAD")],
    )
    def test_coerce_currency(self, scanner, value, expected):
        assert scanner.coerce_currency(value) == expected

    @pytest.mark.parametrize("value", ["bitcoin", "", None, 5])
    def test_coerce_currency_unknown(self, scanner, value):
        assert scanner.coerce_currency(value) is None

    @pytest.mark.parametrize(
        "value,expected",
        [
            ("year", "year"),
            ("per hour", "hour"),
            ("/hr", "hour"),
            ("a month", "month"),
            ("Hours", "hour"),
            ("annually", "year"),
            ("annum", "year"),
            ("weekly", "week"),
        ],
    )
    def test_coerce_period(self, scanner, value, expected):
        """Test connectors and plurals are handled."""
        assert scanner.coerce_period(value) == expected

    @pytest.mark.parametrize("value", ["fortnight", "", None, 12])
    def test_coerce_period_unknown(self, scanner, value):
        assert scanner.coerce_period(value) is None
