"""Job intake: pasted job description in, saved JobPosting out.

The formatting model is outside this package; callers pass its Markdown in
(or nothing, in which case a local fallback heading is generated). Either
way the Markdown goes through the salary post-processing before it is
stored, so every saved posting ends with a Salary section.
"""

import logging
import re
from typing import List, Optional, Tuple

from tuneit.domain.models import (
    MAX_HEADING_FIELD_LENGTH,
    UNKNOWN_COMPANY,
    UNTITLED_ROLE,
    JobPosting,
)
from tuneit.logging import get_logger
from tuneit.logging.context import log_context
from tuneit.persistence.exceptions import RecordNotFoundError
from tuneit.persistence.repositories import JobPostingRepository
from tuneit.salary.formatters import NOT_PROVIDED
from tuneit.salary.markdown import SalaryMarkdown, local_markdown_fallback

from .exceptions import JobIntakeError

logger = get_logger(__name__, component="jobs")

_HEADING_PREFIX_RE = re.compile(r"^#+\s*")


def derive_company_and_title(markdown: Optional[str]) -> Tuple[str, str]:
    """Read "Company: Title" from the first non-empty line of formatted Markdown.

    Args:
        markdown: Formatted job description

    Returns:
        Tuple of (company_name, job_title), each clipped to 100 characters

    Example:
        >>> derive_company_and_title("# Acme Corp: Staff Engineer\\n\\n...")
        ('Acme Corp', 'Staff Engineer')
    """
    if not isinstance(markdown, str):
        return UNKNOWN_COMPANY, UNTITLED_ROLE

    first_line = next((line.strip() for line in markdown.split("\n") if line.strip()), "")
    heading = _HEADING_PREFIX_RE.sub("", first_line).strip()
    if not heading:
        return UNKNOWN_COMPANY, UNTITLED_ROLE

    company, _, title = heading.partition(":")
    company = company.strip() or UNKNOWN_COMPANY
    title = title.strip() or UNTITLED_ROLE

    return company[:MAX_HEADING_FIELD_LENGTH], title[:MAX_HEADING_FIELD_LENGTH]


class JobIntakeService:
    """Creates, edits and searches saved job postings."""

    def __init__(
        self,
        repository: JobPostingRepository,
        salary_markdown: Optional[SalaryMarkdown] = None,
        logger_instance: Optional[logging.Logger] = None,
    ):
        """Initialize JobIntakeService.

        Args:
            repository: Repository bound to the caller's session
            salary_markdown: Salary section handling (defaults to the default parser)
            logger_instance: Logger instance (defaults to module logger)
        """
        self.repository = repository
        self.salary_markdown = salary_markdown or SalaryMarkdown()
        self.logger = logger_instance or logger

    def create_posting(
        self, description: Optional[str], formatted_markdown: Optional[str] = None
    ) -> JobPosting:
        """Format, extract salary from and store a pasted job description.

        Args:
            description: Job description as pasted by the user
            formatted_markdown: Markdown from the formatting model, if any

        Returns:
            The stored JobPosting

        Raises:
            JobIntakeError: If the description is blank
            PersistenceError: If the posting cannot be stored
        """
        trimmed = (description or "").strip()
        if not trimmed:
            raise JobIntakeError("Please provide a job description to format.")

        markdown = formatted_markdown
        if not markdown or not markdown.strip():
            self.logger.info(
                "No formatted Markdown supplied, using local fallback",
                extra={"event": "jobs.posting.fallback_markdown"},
            )
            markdown = local_markdown_fallback(trimmed)

        formatted = self.salary_markdown.build_formatted_response(markdown, trimmed)
        company, title = derive_company_and_title(formatted.markdown)

        posting = self.repository.add(
            JobPosting(
                company_name=company,
                job_title=title,
                job_description=formatted.markdown,
                salary=formatted.salary,
            )
        )

        with log_context(job_id=posting.id):
            self.logger.info(
                f"Saved job posting: {company}: {title}",
                extra={
                    "event": "jobs.posting.created",
                    "has_salary": posting.salary is not None,
                },
            )
        return posting

    def update_description(self, job_id: int, markdown: str) -> JobPosting:
        """Replace a posting's Markdown, keeping its stored salary.

        Company and title are derived again from the new first line.

        Raises:
            JobIntakeError: If the Markdown is blank
            RecordNotFoundError: If no posting has that id
        """
        trimmed = (markdown or "").strip()
        if not trimmed:
            raise JobIntakeError("Job description cannot be empty.")

        existing = self.repository.get(job_id)
        if existing is None:
            raise RecordNotFoundError(f"Job posting with id {job_id} not found")

        company, title = derive_company_and_title(trimmed)
        updated = self.repository.update(
            existing.model_copy(
                update={"company_name": company, "job_title": title, "job_description": trimmed}
            )
        )

        self.logger.info(
            "Job description updated",
            extra={"event": "jobs.posting.updated", "job_id": job_id},
        )
        return updated

    def search(self, term: Optional[str]) -> List[JobPosting]:
        """Case-insensitive search over title, company, description and salary label.

        A blank term returns every posting. The "Not provided" fallback label
        is not searched.
        """
        postings = self.repository.list()
        needle = (term or "").strip().lower()
        if not needle:
            return postings

        parser = self.salary_markdown.parser
        matches = []
        for posting in postings:
            label = parser.format_label(posting.salary)
            salary_text = label.lower() if label != NOT_PROVIDED else ""
            haystacks = (
                f"{posting.company_name}: {posting.job_title}".lower(),
                posting.job_description.lower(),
                salary_text,
            )
            if any(needle in text for text in haystacks):
                matches.append(posting)

        return matches
