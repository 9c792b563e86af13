"""Mapping between SalaryDetails and the flat user_jobs salary columns."""

from typing import Any, Mapping, Optional, TypedDict, Union

from tuneit.domain.models import SalaryDetails

from .service import SalaryParser, get_default_parser

Number = Union[int, float]

HOURLY_PERIOD = "hour"


class SalaryColumns(TypedDict):
    salary_min: Optional[Number]
    salary_max: Optional[Number]
    salary_currency: Optional[str]
    salary_period: Optional[str]
    salary_range: Optional[str]
    hourly_rate: Optional[Number]


def hourly_rate_for(details: Optional[SalaryDetails]) -> Optional[Number]:
    """min (or max without a min) for hourly salaries, otherwise None."""
    if details is None or details.period != HOURLY_PERIOD:
        return None
    return details.min if details.min is not None else details.max


def to_salary_columns(details: Optional[SalaryDetails]) -> SalaryColumns:
    """Flatten a salary record into storage columns (all None for no salary)."""
    if details is None:
        return SalaryColumns(
            salary_min=None,
            salary_max=None,
            salary_currency=None,
            salary_period=None,
            salary_range=None,
            hourly_rate=None,
        )

    return SalaryColumns(
        salary_min=details.min,
        salary_max=details.max,
        salary_currency=details.currency,
        salary_period=details.period,
        salary_range=details.range,
        hourly_rate=hourly_rate_for(details),
    )


def from_salary_columns(
    record: Mapping[str, Any], parser: Optional[SalaryParser] = None
) -> Optional[SalaryDetails]:
    """Rebuild a normalized salary record from stored columns.

    Rows written before salary_period existed only carry hourly_rate, so a
    null period with an hourly rate reads back as an hourly salary.

    Args:
        record: Row mapping with any of the salary columns
        parser: Salary parser (defaults to the process-wide parser)

    Returns:
        SalaryDetails, or None when the row holds no salary
    """
    parser = parser or get_default_parser()

    period = record.get("salary_period")
    if period is None and record.get("hourly_rate") is not None:
        period = HOURLY_PERIOD

    return parser.normalize(
        {
            "range": record.get("salary_range"),
            "min": record.get("salary_min"),
            "max": record.get("salary_max"),
            "currency": record.get("salary_currency"),
            "period": period,
        }
    )
