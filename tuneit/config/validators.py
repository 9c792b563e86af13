"""Additional validation utilities for configuration."""

import warnings
from typing import Any, Dict, List


def check_for_warnings(config_dict: Dict[str, Any]) -> List[str]:
    """
    Check raw configuration for suspicious salary vocabulary.

    None of these are errors: the configuration still loads, but the
    scanner may behave in surprising ways.

    Args:
        config_dict: Raw configuration dictionary

    Returns:
        List of warning messages
    """
    warning_messages = []

    salary = config_dict.get("salary", {})
    if not isinstance(salary, dict):
        return warning_messages

    # The same keyword listed under two periods: the first period wins
    period_keywords = salary.get("period_keywords", {})
    if isinstance(period_keywords, dict):
        owners: Dict[str, str] = {}
        for period, keywords in period_keywords.items():
            if not isinstance(keywords, list):
                continue
            for keyword in keywords:
                if not isinstance(keyword, str):
                    continue
                term = keyword.strip().lower()
                if term in owners and owners[term] != period:
                    warning_messages.append(
                        f"Period keyword '{term}' is listed under both '{owners[term]}' and "
                        f"'{period}'; '{owners[term]}' will be used"
                    )
                else:
                    owners.setdefault(term, period)

    # Very short currency words match far too much prose
    currency_words = salary.get("currency_words", {})
    if isinstance(currency_words, dict):
        for word in currency_words:
            if isinstance(word, str) and len(word.strip()) < 3:
                warning_messages.append(
                    f"Currency word '{word}' is very short and may produce false matches"
                )

    # Overriding symbols without '$' silently stops dollar detection
    currency_symbols = salary.get("currency_symbols")
    if isinstance(currency_symbols, dict) and "$" not in currency_symbols:
        warning_messages.append(
            "currency_symbols does not map '$'; dollar amounts will have no currency"
        )

    return warning_messages


def emit_warnings(warning_messages: List[str]) -> None:
    """
    Emit warning messages using Python's warnings module.

    Args:
        warning_messages: List of warning messages to emit
    """
    for message in warning_messages:
        warnings.warn(message, UserWarning, stacklevel=2)
