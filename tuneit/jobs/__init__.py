"""Job intake: turning pasted job descriptions into saved postings."""

from .exceptions import JobIntakeError
from .service import JobIntakeService, derive_company_and_title

__all__ = ["JobIntakeError", "JobIntakeService", "derive_company_and_title"]
