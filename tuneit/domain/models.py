"""Core domain models for salary details and saved job postings.

This module defines the data structures shared by the salary pipeline,
persistence and the CLI:
- SalaryInput: loosely-typed salary fields as they arrive from LLM markers,
  Markdown bullets, stored columns or user input
- SalaryDetails: the canonical, immutable salary record
- FormattedJobDescription: Markdown plus the salary parsed out of it
- JobPosting: a saved job description with its salary
"""

import math
from datetime import datetime
from typing import Any, Dict, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from tuneit.utils.timestamps import ensure_utc

Number = Union[int, float]

UNKNOWN_COMPANY = "Unknown Company"
UNTITLED_ROLE = "Untitled Role"
MAX_HEADING_FIELD_LENGTH = 100


class SalaryInput(BaseModel):
    """Salary fields before normalization.

    Every field is optional and every validator coerces rather than rejects,
    so building a SalaryInput from arbitrary JSON never raises. Numeric
    coercion of min/max happens later in the normalizer, which owns the
    number parsing rules.
    """

    range: Optional[str] = None
    min: Optional[Union[int, float, str]] = None
    max: Optional[Union[int, float, str]] = None
    currency: Optional[str] = None
    period: Optional[str] = None

    model_config = ConfigDict(extra="ignore")

    @field_validator("range", mode="before")
    @classmethod
    def coerce_range(cls, v: Any) -> Optional[str]:
        """Keep strings (stripped) and render plain numbers as text."""
        if isinstance(v, bool):
            return None
        if isinstance(v, (int, float)):
            return None if isinstance(v, float) and not math.isfinite(v) else str(v)
        if isinstance(v, str):
            return v.strip() or None
        return None

    @field_validator("min", "max", mode="before")
    @classmethod
    def coerce_bound(cls, v: Any) -> Optional[Union[int, float, str]]:
        """Keep numbers and strings; anything else is treated as missing."""
        if isinstance(v, bool):
            return None
        if isinstance(v, (int, float, str)):
            return v
        return None

    @field_validator("currency", "period", mode="before")
    @classmethod
    def coerce_token(cls, v: Any) -> Optional[str]:
        if isinstance(v, str):
            return v.strip() or None
        return None

    @classmethod
    def from_mapping(cls, data: Dict[str, Any]) -> "SalaryInput":
        """Build from a mapping, ignoring keys that are not salary fields."""
        return cls.model_validate(dict(data))

    @property
    def is_blank(self) -> bool:
        """True when no field carries a value."""
        return all(
            value is None
            for value in (self.range, self.min, self.max, self.currency, self.period)
        )


class SalaryDetails(BaseModel):
    """Canonical salary record.

    Records are immutable and rebuilt on every extraction or normalization.
    Use the normalizer to build one from untrusted input; constructing a
    record directly with reversed bounds raises a validation error.
    """

    range: Optional[str] = Field(None, description="Display string, e.g. '$120k - $150k per year'")
    min: Optional[Number] = Field(None, description="Lower bound without symbols or separators")
    max: Optional[Number] = Field(None, description="Upper bound without symbols or separators")
    currency: Optional[str] = Field(None, description="ISO-4217 currency code")
    period: Optional[str] = Field(None, description="Cadence: hour, day, week, month or year")

    model_config = ConfigDict(
        frozen=True,
        json_schema_extra={
            "example": {
                "range": "$120,000 - $150,000 per year",
                "min": 120000,
                "max": 150000,
                "currency": "USD",
                "period": "year",
            }
        },
    )

    @model_validator(mode="after")
    def check_bounds(self):
        if self.min is not None and self.max is not None and self.min > self.max:
            raise ValueError(f"Salary min ({self.min}) cannot exceed max ({self.max})")
        return self

    @property
    def is_empty(self) -> bool:
        """True when neither bounds nor a range string are present."""
        return self.min is None and self.max is None and self.range is None

    def to_payload(self) -> Dict[str, Any]:
        """Return the five fields in marker order (range, min, max, currency, period)."""
        return {
            "range": self.range,
            "min": self.min,
            "max": self.max,
            "currency": self.currency,
            "period": self.period,
        }


class FormattedJobDescription(BaseModel):
    """Job description Markdown with the salary parsed out of it."""

    markdown: str
    salary: Optional[SalaryDetails] = None


class JobPosting(BaseModel):
    """A saved job description and its salary details.

    Mirrors a row of the user_jobs table, with the flat salary columns folded
    back into a SalaryDetails record.
    """

    id: Optional[int] = Field(None, description="Database identifier (None until persisted)")
    company_name: str = Field(UNKNOWN_COMPANY, description="Company name from the heading")
    job_title: str = Field(UNTITLED_ROLE, description="Job title from the heading")
    job_description: str = Field(..., description="Formatted Markdown description")
    salary: Optional[SalaryDetails] = Field(None, description="Normalized salary, if any")
    created_at: Optional[datetime] = Field(None, description="When the posting was saved (UTC)")
    updated_at: Optional[datetime] = Field(None, description="When the posting last changed (UTC)")

    @field_validator("company_name", "job_title")
    @classmethod
    def clip_heading_field(cls, v: str) -> str:
        return v.strip()[:MAX_HEADING_FIELD_LENGTH]

    @field_validator("created_at", "updated_at")
    @classmethod
    def normalize_timestamps(cls, v: Optional[datetime]) -> Optional[datetime]:
        """Ensure datetime is timezone-aware and in UTC."""
        return ensure_utc(v)
