"""Salary sections in LLM-formatted job description Markdown.

The formatting model is asked to end every description with a Salary section
and a machine-readable marker:

    ## Salary
    - Range: $120k - $150k per year
    - Minimum: $120,000
    - Maximum: $150,000

    <!-- salary_summary: {"range": "$120k - $150k per year", "min": 120000, ...} -->

Models do not always comply, so salary details are recovered in order of
trust: the marker, then the section's bullet lines, then the raw posting
text. Whatever is found, the returned Markdown ends with a Salary section
and the marker itself is consumed into the returned salary.
"""

import json
import re
from typing import Any, Optional, Tuple

from tuneit.domain.models import FormattedJobDescription, SalaryDetails
from tuneit.logging import get_logger

from .formatters import NOT_PROVIDED
from .service import SalaryParser, get_default_parser

logger = get_logger(__name__, component="salary")

SALARY_COMMENT_RE = re.compile(r"<!--\s*salary_summary\s*:(.*?)-->", re.IGNORECASE | re.DOTALL)
SALARY_SECTION_RE = re.compile(
    r"(#{2,6}\s*salary\b[^\n]*)([\s\S]*?)(?=\n#{1,6}\s|\Z)", re.IGNORECASE
)

_RANGE_LINE_RE = re.compile(r"(?:-|\*)\s*Range:\s*(.+)", re.IGNORECASE)
_MIN_LINE_RE = re.compile(r"(?:-|\*)\s*Minimum:\s*(.+)", re.IGNORECASE)
_MAX_LINE_RE = re.compile(r"(?:-|\*)\s*Maximum:\s*(.+)", re.IGNORECASE)
_BLANK_RUN_RE = re.compile(r"\n{3,}")

EMPTY_PAYLOAD = {"range": None, "min": None, "max": None, "currency": None, "period": None}


def normalize_markdown(raw: Optional[str]) -> str:
    """Normalize line endings and strip a code fence wrapped around the whole text."""
    if not isinstance(raw, str):
        return ""

    trimmed = raw.replace("\r\n", "\n").strip()
    if not trimmed.startswith("```"):
        return trimmed

    first_line_break = trimmed.find("\n")
    fence_end = trimmed.rfind("```")

    if first_line_break == -1 or fence_end <= first_line_break:
        return trimmed.replace("```", "").strip()

    return trimmed[first_line_break + 1:fence_end].strip()


def local_markdown_fallback(raw: str) -> str:
    """Minimal Markdown for a posting when no formatting model is available.

    The first non-empty line becomes the level-one heading.
    """
    normalized = raw.replace("\r\n", "\n").strip()
    lines = [line for line in normalized.split("\n") if line]
    first_line = lines[0] if lines else "Job Description"
    heading = re.sub(r"^[#\s]+", "", first_line)

    return f"# {heading}\n\n{normalized}"


def has_salary_section(markdown: Any) -> bool:
    if not isinstance(markdown, str):
        return False
    return SALARY_SECTION_RE.search(markdown) is not None


def get_salary_section_body(markdown: Any) -> Optional[str]:
    """Return the text under the Salary heading, or None without a section."""
    if not isinstance(markdown, str):
        return None

    match = SALARY_SECTION_RE.search(markdown)
    if not match:
        return None
    return match.group(2).strip()


def remove_salary_section(markdown: Any) -> str:
    if not isinstance(markdown, str):
        return ""
    return SALARY_SECTION_RE.sub("", markdown, count=1).strip()


class SalaryMarkdown:
    """Reads and rewrites the Salary section of formatted job descriptions."""

    def __init__(self, parser: Optional[SalaryParser] = None):
        """Initialize SalaryMarkdown.

        Args:
            parser: Salary parser (defaults to the process-wide parser)
        """
        self.parser = parser or get_default_parser()

    def extract_salary_metadata(self, markdown: Any) -> Tuple[str, Optional[SalaryDetails]]:
        """Parse and strip the salary_summary marker.

        A marker that is not valid JSON is still removed; the failure is
        logged and the salary is reported as missing.

        Args:
            markdown: Formatted job description

        Returns:
            Tuple of (markdown without the marker, normalized salary or None)
        """
        if not isinstance(markdown, str):
            return "", None

        match = SALARY_COMMENT_RE.search(markdown)
        if not match:
            return markdown.strip(), None

        salary: Optional[SalaryDetails] = None
        payload = match.group(1).strip()
        try:
            salary = self.parser.normalize(json.loads(payload))
        except ValueError as e:
            logger.warning(
                f"Unable to parse salary metadata comment: {e}",
                extra={"event": "salary.markdown.marker_invalid", "payload": payload[:200]},
            )

        sanitized = markdown.replace(match.group(0), "", 1)
        sanitized = _BLANK_RUN_RE.sub("\n\n", sanitized).strip()
        return sanitized, salary

    def derive_salary_from_section(self, markdown: Any) -> Optional[SalaryDetails]:
        """Rebuild salary details from the Range / Minimum / Maximum bullets.

        Returns:
            Normalized salary, or None when the section is missing or says
            nothing usable
        """
        body = get_salary_section_body(markdown)
        if not body:
            return None

        range_match = _RANGE_LINE_RE.search(body)
        min_match = _MIN_LINE_RE.search(body)
        max_match = _MAX_LINE_RE.search(body)

        if not (range_match or min_match or max_match):
            return None

        range_text = range_match.group(1).strip() if range_match else None
        min_text = min_match.group(1) if min_match else None
        max_text = max_match.group(1) if max_match else None

        currency = None
        for source in (range_text, min_text, max_text):
            currency = self.parser.detect_currency_code(source)
            if currency:
                break

        period = self.parser.detect_period(range_text) or self.parser.detect_period(body)

        return self.parser.normalize(
            {
                "range": range_text,
                "min": self.parser.parse_salary_number(min_text),
                "max": self.parser.parse_salary_number(max_text),
                "currency": currency,
                "period": period,
            }
        )

    def append_salary_section(self, markdown: str, salary: Any) -> str:
        """Append a Salary section and marker built from salary (may be None)."""
        details = self.parser.normalize(salary)
        currency = details.currency if details else None

        range_label = self.parser.format_label(details)
        min_label = self.parser.format_amount(details.min if details else None, currency) or NOT_PROVIDED
        max_label = self.parser.format_amount(details.max if details else None, currency) or NOT_PROVIDED

        section = "\n".join(
            [
                "## Salary",
                f"- Range: {range_label}",
                f"- Minimum: {min_label}",
                f"- Maximum: {max_label}",
                "",
                _marker(details),
            ]
        )
        return f"{markdown.strip()}\n\n{section}".strip()

    def replace_salary_section(self, markdown: str, salary: Any) -> str:
        return self.append_salary_section(remove_salary_section(markdown), salary)

    def append_salary_comment(self, markdown: str, salary: Any) -> str:
        """Append only the salary_summary marker."""
        return f"{markdown.strip()}\n\n{_marker(self.parser.normalize(salary))}"

    def build_formatted_response(
        self, markdown: Optional[str], source_text: Optional[str] = None
    ) -> FormattedJobDescription:
        """Post-process formatted Markdown into Markdown plus salary details.

        Salary comes from the marker, else the Salary section bullets, else
        the raw source text. The returned Markdown always has a Salary
        section; a section is added (or rewritten) whenever a lower-trust
        source supplied the salary.

        Args:
            markdown: Markdown from the formatting model (or the local fallback)
            source_text: Original pasted job description

        Returns:
            FormattedJobDescription
        """
        sanitized, salary = self.extract_salary_metadata(normalize_markdown(markdown))
        has_section = has_salary_section(sanitized)
        source = "marker" if salary else None

        if salary is None and has_section:
            derived = self.derive_salary_from_section(sanitized)
            if derived is not None:
                sanitized, salary = self.extract_salary_metadata(
                    self.replace_salary_section(sanitized, derived)
                )
                has_section = has_salary_section(sanitized)
                source = "section"

        if salary is None and source_text:
            extracted = self.parser.extract(source_text)
            if extracted is not None:
                if has_section:
                    updated = self.replace_salary_section(sanitized, extracted)
                else:
                    updated = self.append_salary_section(sanitized, extracted)
                sanitized, salary = self.extract_salary_metadata(updated)
                has_section = has_salary_section(sanitized)
                source = "source_text"

        if not has_section:
            sanitized, salary = self.extract_salary_metadata(
                self.append_salary_section(sanitized, salary)
            )

        logger.debug(
            "Formatted job description post-processed",
            extra={
                "event": "salary.markdown.processed",
                "salary_source": source or "none",
                "has_salary": salary is not None,
            },
        )
        return FormattedJobDescription(markdown=sanitized, salary=salary)


def _marker(details: Optional[SalaryDetails]) -> str:
    payload = details.to_payload() if details else dict(EMPTY_PAYLOAD)
    return f"<!-- salary_summary: {json.dumps(payload, ensure_ascii=False)} -->"


def build_formatted_response(
    markdown: Optional[str], source_text: Optional[str] = None
) -> FormattedJobDescription:
    """build_formatted_response() on the default parser."""
    return SalaryMarkdown().build_formatted_response(markdown, source_text)
