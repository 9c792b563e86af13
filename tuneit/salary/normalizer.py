"""Salary normalization: every salary source converges here.

LLM markers, Markdown bullets, extractor matches, stored columns and user
input all pass through SalaryNormalizer.normalize(), which produces either a
canonical SalaryDetails record or None. "No salary information" is always
None, never an all-null record.
"""

import logging
from collections.abc import Mapping
from typing import Any, Optional, Union

from tuneit.domain.models import SalaryDetails, SalaryInput
from tuneit.logging import get_logger

from .extractor import SalaryExtractor, SalaryMatch
from .formatters import SalaryFormatter
from .scanner import SalaryScanner

logger = get_logger(__name__, component="salary")

Number = Union[int, float]


class SalaryNormalizer:
    """Coerces loosely-typed salary input into a SalaryDetails record.

    Normalization is idempotent: feeding a normalized record back in returns
    an equal record.
    """

    def __init__(
        self,
        scanner: SalaryScanner,
        extractor: SalaryExtractor,
        formatter: SalaryFormatter,
        logger_instance: Optional[logging.Logger] = None,
    ):
        """Initialize SalaryNormalizer.

        Args:
            scanner: Detectors for numbers, currencies and periods
            extractor: Used to read bounds out of a range string
            formatter: Used to synthesize a range string from bounds
            logger_instance: Logger instance (defaults to module logger)
        """
        self.scanner = scanner
        self.extractor = extractor
        self.formatter = formatter
        self.logger = logger_instance or logger
        self._missing_labels = frozenset(scanner.vocabulary.missing_value_labels)

    def normalize(self, raw: Any) -> Optional[SalaryDetails]:
        """Normalize raw salary data.

        Accepts None, a mapping, a SalaryInput, a SalaryDetails or a
        SalaryMatch. Never raises: unexpected failures are logged and
        treated as "no salary information".

        Args:
            raw: Salary data from any source

        Returns:
            SalaryDetails with at least one of min, max or range set, or None
        """
        try:
            return self._normalize(raw)
        except Exception as e:
            self.logger.error(
                f"Salary normalization failed: {e}",
                exc_info=True,
                extra={"event": "salary.normalize.failed", "input_type": type(raw).__name__},
            )
            return None

    def _normalize(self, raw: Any) -> Optional[SalaryDetails]:
        salary_input = self._coerce_input(raw)
        if salary_input is None or salary_input.is_blank:
            return None

        range_text = self._clean_range(salary_input.range)
        low = _canonical_number(self.scanner.parse_salary_number(salary_input.min))
        high = _canonical_number(self.scanner.parse_salary_number(salary_input.max))
        currency = self._coerce_currency(salary_input.currency)
        period = self._coerce_period(salary_input.period)

        if range_text:
            if low is None and high is None:
                match = self.extractor.find(range_text)
                if match is not None:
                    low = _canonical_number(match.min)
                    high = _canonical_number(match.max)
            if currency is None:
                currency = self.scanner.detect_currency_code(range_text)
            if period is None:
                period = self.scanner.detect_period(range_text)

        if low is not None and high is not None and low > high:
            self.logger.info(
                "Salary bounds reversed, swapping",
                extra={"event": "salary.normalize.bounds_swapped", "salary_min": low, "salary_max": high},
            )
            low, high = high, low

        if low is None and high is None and range_text is None:
            return None

        if range_text is None:
            range_text = self.formatter.format_range(
                SalaryDetails(min=low, max=high, currency=currency, period=period)
            )

        return SalaryDetails(
            range=range_text, min=low, max=high, currency=currency, period=period
        )

    def _coerce_input(self, raw: Any) -> Optional[SalaryInput]:
        if raw is None:
            return None
        if isinstance(raw, SalaryInput):
            return raw
        if isinstance(raw, SalaryDetails):
            return SalaryInput.from_mapping(raw.to_payload())
        if isinstance(raw, SalaryMatch):
            return SalaryInput(
                range=raw.text,
                min=raw.min,
                max=raw.max,
                currency=raw.currency,
                period=raw.period,
            )
        if isinstance(raw, Mapping):
            return SalaryInput.from_mapping(raw)

        self.logger.debug(
            "Unsupported salary input type",
            extra={"event": "salary.normalize.unsupported", "input_type": type(raw).__name__},
        )
        return None

    def _clean_range(self, value: Optional[str]) -> Optional[str]:
        """Drop empty and placeholder range strings ("Not provided", "N/A", ...)."""
        if value is None:
            return None
        text = " ".join(value.split())
        if not text or text.lower().rstrip(".") in self._missing_labels:
            return None
        return text

    def _coerce_currency(self, value: Optional[str]) -> Optional[str]:
        # Fall back to scanning for values like "US dollars" or "USD (annual)"
        return self.scanner.coerce_currency(value) or self.scanner.detect_currency_code(value)

    def _coerce_period(self, value: Optional[str]) -> Optional[str]:
        return self.scanner.coerce_period(value) or self.scanner.detect_period(value)


def _canonical_number(value: Optional[Number]) -> Optional[Number]:
    """Collapse integral floats (120000.0) to ints so records compare and serialize stably."""
    if isinstance(value, float) and value.is_integer():
        return int(value)
    return value
