"""Display formatting for salary amounts, ranges and labels."""

import math
from typing import Any, Optional

from tuneit.config.models import SalaryVocabulary
from tuneit.domain.models import SalaryDetails

NOT_PROVIDED = "Not provided"


class SalaryFormatter:
    """Renders salary records for people.

    Currencies with a display symbol render as a prefix ("$120,000",
    "£55,000"); other known codes render as a suffix ("95,000 CHF").
    """

    def __init__(self, vocabulary: Optional[SalaryVocabulary] = None):
        self.vocabulary = vocabulary or SalaryVocabulary()

    def format_amount(self, amount: Any, currency: Optional[str] = None) -> Optional[str]:
        """Format a single amount with thousands separators.

        Integral values render without decimals, everything else with two.

        Args:
            amount: Number to render
            currency: ISO code (optional)

        Returns:
            Display string, or None for a missing or non-numeric amount

        Example:
            >>> SalaryFormatter().format_amount(120000, "USD")
            '$120,000'
        """
        if isinstance(amount, bool) or not isinstance(amount, (int, float)):
            return None
        if isinstance(amount, float) and not math.isfinite(amount):
            return None

        if isinstance(amount, int):
            number = f"{amount:,}"
        elif amount.is_integer():
            number = f"{int(amount):,}"
        else:
            number = f"{amount:,.2f}"

        if not currency:
            return number

        code = currency.upper()
        symbol = self.vocabulary.display_symbols.get(code)
        if symbol:
            if number.startswith("-"):
                return f"-{symbol}{number[1:]}"
            return f"{symbol}{number}"
        return f"{number} {code}"

    def format_range(self, details: Optional[SalaryDetails]) -> Optional[str]:
        """Render the bounds of a record as a range string.

        Returns:
            "$X - $Y per year", "From $X", "Up to $Y" or a single amount when
            min equals max; None when the record has no bounds
        """
        if details is None:
            return None

        low = self.format_amount(details.min, details.currency)
        high = self.format_amount(details.max, details.currency)

        if low and high:
            text = low if details.min == details.max else f"{low} - {high}"
        elif low:
            text = f"From {low}"
        elif high:
            text = f"Up to {high}"
        else:
            return None

        if details.period:
            text = f"{text} per {details.period}"
        return text

    def format_label(self, details: Optional[SalaryDetails]) -> str:
        """Label shown next to a saved job: range, formatted bounds or "Not provided"."""
        if details is None:
            return NOT_PROVIDED
        return details.range or self.format_range(details) or NOT_PROVIDED
