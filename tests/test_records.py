"""Tests for mapping salary records to and from storage columns."""

from tuneit.domain.models import SalaryDetails
from tuneit.salary.records import from_salary_columns, hourly_rate_for, to_salary_columns


class TestToSalaryColumns:
    """Tests for to_salary_columns."""

    def test_yearly_salary(self):
        details = SalaryDetails(
            range="$120k - $150k per year", min=120000, max=150000, currency="USD", period="year"
        )

        assert to_salary_columns(details) == {
            "salary_min": 120000,
            "salary_max": 150000,
            "salary_currency": "USD",
            "salary_period": "year",
            "salary_range": "$120k - $150k per year",
            "hourly_rate": None,
        }

    def test_hourly_salary_sets_hourly_rate(self):
        details = SalaryDetails(min=40, max=50, currency="USD", period="hour")

        assert to_salary_columns(details)["hourly_rate"] == 40

    def test_no_salary(self):
        columns = to_salary_columns(None)

        assert set(columns) == {
            "salary_min",
            "salary_max",
            "salary_currency",
            "salary_period",
            "salary_range",
            "hourly_rate",
        }
        assert all(value is None for value in columns.values())


class TestHourlyRate:
    """Tests for hourly_rate_for."""

    def test_max_only(self):
        assert hourly_rate_for(SalaryDetails(max=60, period="hour")) == 60

    def test_not_hourly(self):
        assert hourly_rate_for(SalaryDetails(min=5000, period="month")) is None
        assert hourly_rate_for(None) is None


class TestFromSalaryColumns:
    """Tests for from_salary_columns."""

    def test_round_trip(self):
        details = SalaryDetails(
            range="£45k–£55k", min=45000, max=55000, currency="GBP", period="year"
        )

        assert from_salary_columns(to_salary_columns(details)) == details

    def test_legacy_hourly_row(self):
        """Test rows with only hourly_rate read back as hourly salaries."""
        record = {
            "salary_min": 40.0,
            "salary_max": 50.0,
            "salary_currency": "USD",
            "salary_period": None,
            "salary_range": None,
            "hourly_rate": 40.0,
        }

        details = from_salary_columns(record)

        assert details.period == "hour"
        assert details.min == 40
        assert isinstance(details.min, int)
        assert details.range == "$40 - $50 per hour"

    def test_empty_row(self):
        assert from_salary_columns(to_salary_columns(None)) is None
        assert from_salary_columns({}) is None
