"""Salary parsing service.

SalaryParser wires the scanner, extractor, normalizer and formatter around a
single vocabulary. The module-level functions delegate to a lazily built
default parser and are what most callers use:

    >>> from tuneit.salary import extract_salary_details_from_text
    >>> details = extract_salary_details_from_text("Pay: $40 - $50 an hour")
    >>> details.min, details.max, details.period
    (40, 50, 'hour')
"""

from functools import lru_cache
from typing import Any, Optional, Union

from tuneit.config.models import SalaryVocabulary
from tuneit.domain.models import SalaryDetails
from tuneit.logging import get_logger

from .extractor import SalaryExtractor, SalaryMatch
from .formatters import SalaryFormatter
from .normalizer import SalaryNormalizer
from .scanner import SalaryScanner

logger = get_logger(__name__, component="salary")

Number = Union[int, float]


class SalaryParser:
    """Salary pipeline bound to one vocabulary.

    Attributes:
        vocabulary: Vocabulary shared by every stage
        scanner: Currency, period and number detectors
        extractor: Free-text salary extractor
        formatter: Amount, range and label rendering
        normalizer: Convergence point producing SalaryDetails
    """

    def __init__(self, vocabulary: Optional[SalaryVocabulary] = None):
        self.vocabulary = vocabulary or SalaryVocabulary()
        self.scanner = SalaryScanner(self.vocabulary)
        self.extractor = SalaryExtractor(self.scanner)
        self.formatter = SalaryFormatter(self.vocabulary)
        self.normalizer = SalaryNormalizer(self.scanner, self.extractor, self.formatter)

    def detect_currency_code(self, text: Any) -> Optional[str]:
        return self.scanner.detect_currency_code(text)

    def detect_period(self, text: Any) -> Optional[str]:
        return self.scanner.detect_period(text)

    def parse_salary_number(self, value: Any) -> Optional[Number]:
        return self.scanner.parse_salary_number(value)

    def find(self, text: Optional[str]) -> Optional[SalaryMatch]:
        return self.extractor.find(text)

    def extract(self, text: Optional[str]) -> Optional[SalaryDetails]:
        """Extract and normalize the most authoritative salary mention in text.

        Args:
            text: Raw job posting or any free text

        Returns:
            SalaryDetails, or None when the text mentions no salary
        """
        match = self.extractor.find(text)
        if match is None:
            logger.debug("No salary found in text", extra={"event": "salary.extract.none"})
            return None

        logger.debug(
            "Salary mention found",
            extra={"event": "salary.extract.matched", "match_kind": match.kind, "match_text": match.text},
        )
        return self.normalizer.normalize(match)

    def normalize(self, raw: Any) -> Optional[SalaryDetails]:
        return self.normalizer.normalize(raw)

    def format_amount(self, amount: Any, currency: Optional[str] = None) -> Optional[str]:
        return self.formatter.format_amount(amount, currency)

    def format_range(self, details: Any) -> Optional[str]:
        """Format the bounds of any salary-like value (normalized first)."""
        return self.formatter.format_range(self._as_details(details))

    def format_label(self, details: Any) -> str:
        return self.formatter.format_label(self._as_details(details))

    def _as_details(self, details: Any) -> Optional[SalaryDetails]:
        if isinstance(details, SalaryDetails):
            return details
        return self.normalizer.normalize(details)


@lru_cache(maxsize=1)
def get_default_parser() -> SalaryParser:
    """Return the process-wide parser built on the default vocabulary."""
    return SalaryParser()


def detect_currency_code_from_text(text: Any) -> Optional[str]:
    return get_default_parser().detect_currency_code(text)


def detect_period_from_text(text: Any) -> Optional[str]:
    return get_default_parser().detect_period(text)


def parse_salary_number(value: Any) -> Optional[Number]:
    return get_default_parser().parse_salary_number(value)


def extract_salary_details_from_text(text: Optional[str]) -> Optional[SalaryDetails]:
    return get_default_parser().extract(text)


def normalize_salary_details(raw: Any) -> Optional[SalaryDetails]:
    return get_default_parser().normalize(raw)


def format_salary_amount(amount: Any, currency: Optional[str] = None) -> Optional[str]:
    return get_default_parser().format_amount(amount, currency)


def format_salary_range(details: Any) -> Optional[str]:
    return get_default_parser().format_range(details)


def format_salary_label(details: Any) -> str:
    return get_default_parser().format_label(details)
