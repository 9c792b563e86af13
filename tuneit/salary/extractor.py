"""Salary extraction from raw job posting text.

The extractor looks for a salary mention using a prioritized set of
patterns:
1. Ranges: "$120,000 - $150,000 per year", "£45k–£55k", "between $40 and $50 an hour"
2. Single bounds: "up to $X" (max only), "starting at $X" / "$X+" (min only)
3. Single figures: "Salary: $85,000" or "$25/hr" (min and max both set)

A candidate only counts when its matched text names a currency or a pay
period, which keeps "5-10 years" or "up to 40 hours" out. Figures under 100
also need the currency, so "9-5 per day" is not a wage. The earliest
candidate in the text wins; salary lines near the top of a posting are the
most authoritative.
"""

import re
from dataclasses import dataclass
from typing import List, Optional, Pattern, Tuple, Union

from .scanner import MULTIPLIER_PATTERN, NUMBER_PATTERN, SalaryScanner

Number = Union[int, float]

KIND_RANGE = "range"
KIND_MAX = "max"
KIND_MIN = "min"
KIND_EXACT = "exact"

# Lower value wins when two candidates start at the same position
KIND_PRIORITY = {KIND_RANGE: 0, KIND_MAX: 1, KIND_MIN: 1, KIND_EXACT: 2}

RANGE_SEPARATOR = r"\s*(?:-|–|—|\bto\b)\s*"
MAX_LEAD = r"\b(?:up\s+to|as\s+much\s+as|no\s+more\s+than|maximum(?:\s+of)?|max\.?)\s*:?\s*"
MIN_LEAD = r"\b(?:starting\s+(?:at|from)|starts\s+at|at\s+least|from|minimum(?:\s+of)?|min\.?)\s*:?\s*"
LABEL_LEAD = r"\b(?:salary|compensation|pay|wage|rate)\b[^\n\d]{0,24}?"
PERIOD_CONNECTOR = r"(?:/\s*|(?:per|an?|each|every)\s+)"

# Figures below this need an explicit currency to count as pay
BARE_AMOUNT_FLOOR = 100


@dataclass(frozen=True)
class SalaryMatch:
    """A raw salary mention found in text, before normalization.

    Attributes:
        text: Matched substring, trimmed (becomes the record's range string)
        start: Offset of the match in the source text
        end: Offset just past the match
        kind: "range", "max", "min" or "exact"
        min: Lower bound parsed from the match
        max: Upper bound parsed from the match
        currency: Currency detected in the matched text
        period: Pay period detected in the matched text
    """

    text: str
    start: int
    end: int
    kind: str
    min: Optional[Number] = None
    max: Optional[Number] = None
    currency: Optional[str] = None
    period: Optional[str] = None


class SalaryExtractor:
    """Finds the most authoritative salary mention in a block of text."""

    def __init__(self, scanner: SalaryScanner):
        """Initialize SalaryExtractor.

        Args:
            scanner: Scanner whose vocabulary the patterns are built from
        """
        self.scanner = scanner

        symbol = scanner.symbol_pattern
        code = scanner.code_pattern
        period = scanner.period_pattern

        amount = (
            rf"(?:(?:{symbol})\s?|\b(?:{code})\s+)?"
            rf"(?:{NUMBER_PATTERN}){MULTIPLIER_PATTERN}?"
            rf"(?:\s?(?:{code})\b)?"
        )
        # Same as amount, but the currency is required
        priced = (
            rf"(?:(?:(?:{symbol})\s?|\b(?:{code})\s+)(?:{NUMBER_PATTERN}){MULTIPLIER_PATTERN}?"
            rf"|(?:{NUMBER_PATTERN}){MULTIPLIER_PATTERN}?\s?(?:{code})\b)"
        )
        tail = rf"(?:\s*{PERIOD_CONNECTOR}?(?:{period})\b)?"
        start = r"(?<![\w.,])"

        flags = re.IGNORECASE
        self._range_patterns: List[Pattern[str]] = [
            re.compile(
                rf"\bbetween\s+(?P<low>{amount})\s+and\s+(?P<high>{amount}){tail}", flags
            ),
            re.compile(
                rf"{start}(?P<low>{amount}){RANGE_SEPARATOR}(?P<high>{amount}){tail}", flags
            ),
        ]
        self._bound_patterns: List[Tuple[str, Pattern[str]]] = [
            (KIND_MAX, re.compile(rf"{MAX_LEAD}(?P<amount>{amount}){tail}", flags)),
            (KIND_MIN, re.compile(rf"{MIN_LEAD}(?P<amount>{amount}){tail}", flags)),
            (KIND_MIN, re.compile(rf"{start}(?P<amount>{amount})\s?\+{tail}", flags)),
        ]
        self._exact_patterns: List[Pattern[str]] = [
            re.compile(rf"{LABEL_LEAD}(?P<amount>{amount}){tail}", flags),
            re.compile(
                rf"{start}(?P<amount>{priced})\s*{PERIOD_CONNECTOR}(?:{period})\b", flags
            ),
        ]

    def find(self, text: Optional[str]) -> Optional[SalaryMatch]:
        """Locate the first qualifying salary mention in text.

        Single-bound and labelled candidates that overlap a range candidate
        are discarded, so "starting at $90k - $110k" reads as a range.

        Args:
            text: Arbitrary text, e.g. a raw job posting

        Returns:
            SalaryMatch, or None when the text has no salary mention
        """
        if not isinstance(text, str) or not text.strip():
            return None

        ranges = [
            candidate
            for pattern in self._range_patterns
            for candidate in self._range_candidates(pattern, text)
        ]

        singles = [
            candidate
            for kind, pattern in self._bound_patterns
            for candidate in self._single_candidates(kind, pattern, text)
        ]
        for pattern in self._exact_patterns:
            singles.extend(self._single_candidates(KIND_EXACT, pattern, text))
        singles = [c for c in singles if not any(_overlaps(c, r) for r in ranges)]

        candidates = ranges + singles
        if not candidates:
            return None

        return min(candidates, key=lambda c: (c.start, KIND_PRIORITY[c.kind]))

    def _range_candidates(self, pattern: Pattern[str], text: str) -> List[SalaryMatch]:
        candidates = []
        for match in pattern.finditer(text):
            low = self.scanner.parse_salary_number(match.group("low"))
            high = self.scanner.parse_salary_number(match.group("high"))
            if low is None or high is None:
                continue

            # "$120-150k": the shared multiplier applies to both sides
            low = _borrow_multiplier(low, high, match.group("low"), match.group("high"))

            candidate = self._build(match, KIND_RANGE, low, high)
            if candidate is not None:
                candidates.append(candidate)
        return candidates

    def _single_candidates(
        self, kind: str, pattern: Pattern[str], text: str
    ) -> List[SalaryMatch]:
        candidates = []
        for match in pattern.finditer(text):
            value = self.scanner.parse_salary_number(match.group("amount"))
            if value is None:
                continue

            if kind == KIND_MAX:
                candidate = self._build(match, kind, None, value)
            elif kind == KIND_MIN:
                candidate = self._build(match, kind, value, None)
            else:
                candidate = self._build(match, kind, value, value)

            if candidate is not None:
                candidates.append(candidate)
        return candidates

    def _build(
        self,
        match: "re.Match[str]",
        kind: str,
        low: Optional[Number],
        high: Optional[Number],
    ) -> Optional[SalaryMatch]:
        """Turn a regex match into a SalaryMatch if it names a currency or period."""
        matched = match.group(0).strip()
        currency = self.scanner.detect_currency_code(matched)
        period = self.scanner.detect_period(matched)

        if currency is None and period is None:
            return None

        # Without a currency, small figures are clock times or counts ("9-5 per day")
        top = max(v for v in (low, high) if v is not None)
        if currency is None and top < BARE_AMOUNT_FLOOR:
            return None

        # Labelled figures keep only the amount and its tail as the display string
        start = match.start("amount") if kind == KIND_EXACT else match.start()

        return SalaryMatch(
            text=match.string[start:match.end()].strip(),
            start=start,
            end=match.end(),
            kind=kind,
            min=low,
            max=high,
            currency=currency,
            period=period,
        )


def _overlaps(a: SalaryMatch, b: SalaryMatch) -> bool:
    return a.start < b.end and b.start < a.end


_MULTIPLIER_RE = re.compile(rf"\d{MULTIPLIER_PATTERN}", re.IGNORECASE)


def _borrow_multiplier(low: Number, high: Number, low_text: str, high_text: str) -> Number:
    """Scale a bare low bound by the high bound's multiplier ("120-150k").

    Only applies when the low side has no multiplier of its own and would
    otherwise be implausibly small next to the high side.
    """
    if _MULTIPLIER_RE.search(low_text) or not _MULTIPLIER_RE.search(high_text):
        return low
    if low <= 0 or low * 1000 > high:
        return low

    for factor in (1_000_000, 1_000):
        scaled = low * factor
        if scaled <= high and high / scaled < 1000:
            return int(scaled) if isinstance(scaled, float) and scaled.is_integer() else scaled
    return low
