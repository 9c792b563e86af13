"""Configuration schema models using Pydantic."""

from enum import Enum
from typing import Dict, FrozenSet, List

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator


class LogLevel(str, Enum):
    """Logging levels."""

    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


class LogFormat(str, Enum):
    """Log output formats."""

    JSON = "json"
    KEY_VALUE = "key-value"


DEFAULT_CURRENCY_SYMBOLS: Dict[str, str] = {
    "US$": "USD",
    "CA$": "CAD",
    "C$": "CAD",
    "AU$": "AUD",
    "A$": "AUD",
    "NZ$": "NZD",
    "S$": "SGD",
    "HK$": "HKD",
    "$": "USD",
    "£": "GBP",
    "€": "EUR",
    "¥": "JPY",
    "₹": "INR",
}

DEFAULT_CURRENCY_CODES: List[str] = [
    "USD", "CAD", "AUD", "NZD", "SGD", "HKD", "GBP", "EUR", "JPY", "INR",
    "CHF", "SEK", "NOK", "DKK", "PLN", "CNY", "ZAR", "BRL", "MXN",
]

DEFAULT_CURRENCY_WORDS: Dict[str, str] = {
    "dollar": "USD",
    "dollars": "USD",
    "pound": "GBP",
    "pounds": "GBP",
    "sterling": "GBP",
    "euro": "EUR",
    "euros": "EUR",
    "rupee": "INR",
    "rupees": "INR",
    "yen": "JPY",
}

DEFAULT_DISPLAY_SYMBOLS: Dict[str, str] = {
    "USD": "$",
    "CAD": "CA$",
    "AUD": "A$",
    "NZD": "NZ$",
    "SGD": "S$",
    "HKD": "HK$",
    "GBP": "£",
    "EUR": "€",
    "JPY": "¥",
    "INR": "₹",
}

DEFAULT_PERIOD_KEYWORDS: Dict[str, List[str]] = {
    "hour": ["hour", "hourly", "hr", "hrs"],
    "day": ["day", "daily"],
    "week": ["week", "weekly", "wk"],
    "month": ["month", "monthly"],
    "year": ["year", "yearly", "yr", "annual", "annually", "annum"],
}

DEFAULT_MISSING_VALUE_LABELS: List[str] = [
    "not provided",
    "not specified",
    "not disclosed",
    "not available",
    "unknown",
    "n/a",
    "na",
    "none",
    "null",
    "tbd",
    "-",
]


class SalaryVocabulary(BaseModel):
    """Closed vocabularies the salary scanner, normalizer and formatter share.

    Instances are frozen; a scanner compiles its patterns from one vocabulary
    at construction time, so tests and deployments can swap in a different
    vocabulary without touching module state.
    """

    currency_symbols: Dict[str, str] = Field(
        default_factory=lambda: dict(DEFAULT_CURRENCY_SYMBOLS),
        description="Exact-match currency symbols mapped to ISO codes",
    )
    currency_codes: List[str] = Field(
        default_factory=lambda: list(DEFAULT_CURRENCY_CODES),
        description="Recognized ISO-4217 codes (matched as whole words, any case)",
    )
    currency_words: Dict[str, str] = Field(
        default_factory=lambda: dict(DEFAULT_CURRENCY_WORDS),
        description="Currency names mapped to ISO codes",
    )
    display_symbols: Dict[str, str] = Field(
        default_factory=lambda: dict(DEFAULT_DISPLAY_SYMBOLS),
        description="Symbol prefix used when rendering amounts; other codes render as a suffix",
    )
    period_keywords: Dict[str, List[str]] = Field(
        default_factory=lambda: {k: list(v) for k, v in DEFAULT_PERIOD_KEYWORDS.items()},
        description="Canonical period mapped to the keywords that signal it",
    )
    missing_value_labels: List[str] = Field(
        default_factory=lambda: list(DEFAULT_MISSING_VALUE_LABELS),
        description="Range strings that mean 'no salary information'",
    )

    model_config = ConfigDict(frozen=True)

    @field_validator("currency_codes")
    @classmethod
    def normalize_codes(cls, v: List[str]) -> List[str]:
        """Uppercase and de-duplicate codes, keeping their order."""
        normalized: List[str] = []
        for code in v:
            stripped = code.strip().upper()
            if stripped and stripped not in normalized:
                normalized.append(stripped)
        return normalized

    @field_validator("currency_symbols")
    @classmethod
    def normalize_symbols(cls, v: Dict[str, str]) -> Dict[str, str]:
        normalized = {}
        for symbol, code in v.items():
            if not symbol.strip() or not code.strip():
                raise ValueError("Currency symbols and codes cannot be empty")
            normalized[symbol.strip()] = code.strip().upper()
        return normalized

    @field_validator("display_symbols")
    @classmethod
    def normalize_display_symbols(cls, v: Dict[str, str]) -> Dict[str, str]:
        normalized = {}
        for code, symbol in v.items():
            if not code.strip() or not symbol.strip():
                raise ValueError("Display codes and symbols cannot be empty")
            normalized[code.strip().upper()] = symbol.strip()
        return normalized

    @field_validator("currency_words")
    @classmethod
    def normalize_words(cls, v: Dict[str, str]) -> Dict[str, str]:
        return {
            word.strip().lower(): code.strip().upper()
            for word, code in v.items()
            if word.strip() and code.strip()
        }

    @field_validator("period_keywords")
    @classmethod
    def normalize_period_keywords(cls, v: Dict[str, List[str]]) -> Dict[str, List[str]]:
        """Lowercase periods and keywords; always list the period name itself."""
        normalized: Dict[str, List[str]] = {}
        for period, keywords in v.items():
            name = period.strip().lower()
            if not name:
                raise ValueError("Period names cannot be empty")
            terms = [name]
            for keyword in keywords:
                stripped = keyword.strip().lower()
                if stripped and stripped not in terms:
                    terms.append(stripped)
            normalized[name] = terms
        if not normalized:
            raise ValueError("At least one salary period must be configured")
        return normalized

    @field_validator("missing_value_labels")
    @classmethod
    def normalize_missing_labels(cls, v: List[str]) -> List[str]:
        return [label.strip().lower() for label in v if label.strip()]

    @model_validator(mode="after")
    def validate_codes_are_known(self):
        """Every symbol, word and display mapping must point at a known code."""
        known = set(self.currency_codes)
        mapped = (
            list(self.currency_symbols.values())
            + list(self.currency_words.values())
            + list(self.display_symbols.keys())
        )
        unknown = sorted({code for code in mapped if code not in known})
        if unknown:
            raise ValueError(
                f"Currency mappings reference codes missing from currency_codes: {', '.join(unknown)}"
            )
        return self

    @property
    def known_currencies(self) -> FrozenSet[str]:
        return frozenset(self.currency_codes)

    @property
    def known_periods(self) -> FrozenSet[str]:
        return frozenset(self.period_keywords)


class LoggingConfig(BaseModel):
    """Logging configuration."""

    level: LogLevel = Field(LogLevel.INFO, description="Log level")
    format: LogFormat = Field(
        LogFormat.KEY_VALUE, description="Log output format (json or key-value)"
    )

    model_config = {"use_enum_values": True, "validate_default": True}


class AppConfig(BaseModel):
    """Root configuration object for TuneIt."""

    salary: SalaryVocabulary = Field(
        default_factory=SalaryVocabulary, description="Salary parsing vocabularies"
    )
    logging: LoggingConfig = Field(
        default_factory=LoggingConfig, description="Logging configuration"
    )
