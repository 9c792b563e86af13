"""Currency, period and number detectors for free-form salary text.

The scanner answers narrow questions about a string ("which currency?",
"which pay period?", "what is the first number?") without attempting a full
extraction. Every detector returns None when it finds nothing; absence of a
value is the normal case for job postings, not an error.
"""

import math
import re
from decimal import Decimal, InvalidOperation
from typing import Any, Dict, List, Optional, Pattern, Tuple, Union

from tuneit.config.models import SalaryVocabulary

Number = Union[int, float]

# Integer part with thousands separators, or plain digits, then optional decimals
NUMBER_PATTERN = r"(?:\d{1,3}(?:,\d{3})+(?!\d)|\d+)(?:\.\d+)?"

# Multiplier suffix; must not run into a longer word ("5 months", "10 min")
MULTIPLIER_PATTERN = r"(?:\s?(?:million|thousand|mil|k|m)(?![a-z]))"

MULTIPLIERS: Dict[str, int] = {
    "k": 1_000,
    "thousand": 1_000,
    "m": 1_000_000,
    "mil": 1_000_000,
    "million": 1_000_000,
}

_NUMBER_RE = re.compile(
    rf"(?<![\d.])(?P<number>{NUMBER_PATTERN})(?:\s?(?P<multiplier>million|thousand|mil|k|m)(?![a-z]))?",
    re.IGNORECASE,
)

# Leading connectors stripped before a period token is looked up ("per year", "/hr")
_PERIOD_PREFIX_RE = re.compile(r"^(?:(?:per|an?|each|every)\s+|/\s*)", re.IGNORECASE)


def _alternation(terms: List[str]) -> str:
    """Regex alternation with longer terms first so they win at the same position."""
    return "|".join(re.escape(term) for term in sorted(terms, key=len, reverse=True))


class SalaryScanner:
    """Detects currencies, pay periods and salary numbers in text.

    Patterns are compiled once from the vocabulary passed at construction;
    a scanner is read-only afterwards and safe to share between threads.

    Attributes:
        vocabulary: Vocabulary the patterns were built from
    """

    def __init__(self, vocabulary: Optional[SalaryVocabulary] = None):
        """Initialize SalaryScanner.

        Args:
            vocabulary: Salary vocabularies (defaults to the built-in set)
        """
        self.vocabulary = vocabulary or SalaryVocabulary()

        self._symbols: Dict[str, str] = dict(self.vocabulary.currency_symbols)
        self._codes = frozenset(self.vocabulary.currency_codes)
        self._words: Dict[str, str] = dict(self.vocabulary.currency_words)

        # keyword -> period; a keyword listed under two periods keeps the first
        self._period_lookup: Dict[str, str] = {}
        for period, keywords in self.vocabulary.period_keywords.items():
            for keyword in keywords:
                self._period_lookup.setdefault(keyword, period)

        self._symbol_re: Optional[Pattern[str]] = (
            re.compile(_alternation(list(self._symbols))) if self._symbols else None
        )
        self._code_re: Optional[Pattern[str]] = (
            re.compile(rf"\b(?:{_alternation(list(self._codes))})\b", re.IGNORECASE)
            if self._codes
            else None
        )
        self._word_re: Optional[Pattern[str]] = (
            re.compile(rf"\b(?:{_alternation(list(self._words))})\b", re.IGNORECASE)
            if self._words
            else None
        )
        self._period_re: Pattern[str] = re.compile(
            rf"\b(?:{_alternation(list(self._period_lookup))})\b", re.IGNORECASE
        )

    # Regex fragments shared with the extractor, built from the same vocabulary

    @property
    def symbol_pattern(self) -> str:
        return _alternation(list(self._symbols)) if self._symbols else r"(?!)"

    @property
    def code_pattern(self) -> str:
        return _alternation(list(self._codes)) if self._codes else r"(?!)"

    @property
    def period_pattern(self) -> str:
        return _alternation(list(self._period_lookup))

    # Detectors

    def detect_currency_code(self, text: Any) -> Optional[str]:
        """Return the ISO code of the earliest currency mention in text.

        Symbols match exactly (longest symbol first at a given position),
        ISO codes and currency words match case-insensitively as whole words.

        Args:
            text: Text to scan

        Returns:
            ISO-4217 code, or None if no currency is mentioned

        Example:
            >>> SalaryScanner().detect_currency_code("£45k–£55k")
            'GBP'
        """
        if not isinstance(text, str) or not text:
            return None

        candidates: List[Tuple[int, int, str]] = []

        if self._symbol_re is not None:
            match = self._symbol_re.search(text)
            if match:
                candidates.append((match.start(), 0, self._symbols[match.group(0)]))

        if self._code_re is not None:
            match = self._code_re.search(text)
            if match:
                candidates.append((match.start(), 1, match.group(0).upper()))

        if self._word_re is not None:
            match = self._word_re.search(text)
            if match:
                candidates.append((match.start(), 2, self._words[match.group(0).lower()]))

        if not candidates:
            return None

        return min(candidates)[2]

    def detect_period(self, text: Any) -> Optional[str]:
        """Return the pay period named earliest in text.

        Keywords match on word boundaries, so "5 years of experience" and
        "office hours" do not count as a period.

        Args:
            text: Text to scan

        Returns:
            Canonical period ("hour", "day", "week", "month", "year"), or None
        """
        if not isinstance(text, str) or not text:
            return None

        match = self._period_re.search(text)
        if not match:
            return None

        return self._period_lookup[match.group(0).lower()]

    def parse_salary_number(self, value: Any) -> Optional[Number]:
        """Extract a single numeric value.

        Numbers are returned unchanged (NaN, infinities and booleans become
        None). Strings are scanned for the first numeric token; currency
        symbols, thousands separators and trailing punctuation are ignored and
        k / m / thousand / million multipliers are applied.

        Args:
            value: String or number

        Returns:
            int for integral values, float otherwise, or None

        Example:
            >>> SalaryScanner().parse_salary_number("$1.2m")
            1200000
        """
        if isinstance(value, bool):
            return None

        if isinstance(value, (int, float)):
            if isinstance(value, float) and not math.isfinite(value):
                return None
            return value

        if not isinstance(value, str):
            return None

        match = _NUMBER_RE.search(value)
        if not match:
            return None

        try:
            number = Decimal(match.group("number").replace(",", ""))
        except InvalidOperation:
            return None

        multiplier = match.group("multiplier")
        if multiplier:
            number *= MULTIPLIERS[multiplier.lower()]

        # Tokens beyond float range are digit runs, not salaries
        if not math.isfinite(float(number)):
            return None

        if number == number.to_integral_value():
            return int(number)
        return float(number)

    # Single-token coercion onto the closed vocabularies

    def coerce_currency(self, value: Any) -> Optional[str]:
        """Map one currency token (code, symbol or word) onto a known code.

        Args:
            value: Token such as "usd", "£" or "euros"

        Returns:
            Known ISO code, or None for anything unrecognized
        """
        if not isinstance(value, str):
            return None

        token = value.strip()
        if not token:
            return None

        if token.upper() in self._codes:
            return token.upper()
        if token in self._symbols:
            return self._symbols[token]
        return self._words.get(token.lower())

    def coerce_period(self, value: Any) -> Optional[str]:
        """Map one period token onto a canonical period.

        Accepts canonical names, any configured keyword, a leading connector
        ("per year", "/hr") and simple plurals ("hours").

        Args:
            value: Token such as "annually" or "per hour"

        Returns:
            Canonical period, or None for anything unrecognized
        """
        if not isinstance(value, str):
            return None

        token = _PERIOD_PREFIX_RE.sub("", value.strip().lower()).strip()
        if not token:
            return None

        if token in self._period_lookup:
            return self._period_lookup[token]
        if token.endswith("s") and token[:-1] in self._period_lookup:
            return self._period_lookup[token[:-1]]
        return None
