"""Salary extraction, normalization and formatting.

This module provides:
- SalaryScanner: currency, period and number detectors
- SalaryExtractor / SalaryMatch: salary mentions in free text
- SalaryNormalizer: the single convergence point producing SalaryDetails
- SalaryFormatter: amount, range and label rendering
- SalaryParser: all of the above bound to one vocabulary
- SalaryMarkdown: Salary sections and markers in formatted job descriptions
- to_salary_columns / from_salary_columns: flat storage columns
"""

from .extractor import SalaryExtractor, SalaryMatch
from .formatters import NOT_PROVIDED, SalaryFormatter
from .markdown import (
    SalaryMarkdown,
    build_formatted_response,
    local_markdown_fallback,
    normalize_markdown,
)
from .normalizer import SalaryNormalizer
from .records import SalaryColumns, from_salary_columns, hourly_rate_for, to_salary_columns
from .scanner import SalaryScanner
from .service import (
    SalaryParser,
    detect_currency_code_from_text,
    detect_period_from_text,
    extract_salary_details_from_text,
    format_salary_amount,
    format_salary_label,
    format_salary_range,
    get_default_parser,
    normalize_salary_details,
    parse_salary_number,
)

__all__ = [
    "NOT_PROVIDED",
    "SalaryColumns",
    "SalaryExtractor",
    "SalaryFormatter",
    "SalaryMarkdown",
    "SalaryMatch",
    "SalaryNormalizer",
    "SalaryParser",
    "SalaryScanner",
    "build_formatted_response",
    "detect_currency_code_from_text",
    "detect_period_from_text",
    "extract_salary_details_from_text",
    "format_salary_amount",
    "format_salary_label",
    "format_salary_range",
    "from_salary_columns",
    "get_default_parser",
    "hourly_rate_for",
    "local_markdown_fallback",
    "normalize_markdown",
    "normalize_salary_details",
    "parse_salary_number",
    "to_salary_columns",
]
