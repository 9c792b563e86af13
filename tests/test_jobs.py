"""Tests for job intake: creating, editing and searching saved postings."""

import logging
from unittest.mock import Mock

import pytest

from tuneit.domain.models import UNKNOWN_COMPANY, UNTITLED_ROLE, JobPosting, SalaryDetails
from tuneit.jobs import JobIntakeError, JobIntakeService, derive_company_and_title
from tuneit.persistence import (
    JobPostingRepository,
    RecordNotFoundError,
    close_database,
    get_session,
    init_database,
)

POSTING = """Acme Corp: Backend Engineer

We build payment APIs in Python.
Pay: $40 - $50 an hour, fully remote.
"""

FORMATTED = """# Acme Corp: Backend Engineer

## About the role
We build payment APIs in Python.

## Salary
- Range: $120k - $150k per year
- Minimum: $120,000
- Maximum: $150,000

<!-- salary_summary: {"range": "$120k - $150k per year", "min": 120000, "max": 150000, "currency": "USD", "period": "year"} -->
"""


@pytest.fixture
def session():
    init_database("sqlite:///:memory:")
    with get_session() as db_session:
        yield db_session
    close_database()


@pytest.fixture
def service(session):
    return JobIntakeService(JobPostingRepository(session))


class TestDeriveCompanyAndTitle:
    """Tests for derive_company_and_title."""

    @pytest.mark.parametrize(
        "markdown,expected",
        [
            ("# Acme Corp: Staff Engineer\n\nBody", ("Acme Corp", "Staff Engineer")),
            ("\n\n## Globex:  Data Scientist ", ("Globex", "Data Scientist")),
            ("# Initech: Lead: Platform", ("Initech", "Lead: Platform")),
            ("# Just a heading", ("Just a heading", UNTITLED_ROLE)),
            ("# : Engineer", (UNKNOWN_COMPANY, "Engineer")),
            ("", (UNKNOWN_COMPANY, UNTITLED_ROLE)),
            (None, (UNKNOWN_COMPANY, UNTITLED_ROLE)),
        ],
    )
    def test_headings(self, markdown, expected):
        assert derive_company_and_title(markdown) == expected

    def test_long_fields_are_clipped(self):
        company, title = derive_company_and_title(f"# {'C' * 120}: {'T' * 120}")

        assert len(company) == 100
        assert len(title) == 100


class TestCreatePosting:
    """Tests for JobIntakeService.create_posting."""

    def test_local_fallback_with_salary_from_text(self, service):
        posting = service.create_posting(POSTING)

        assert posting.id is not None
        assert posting.company_name == "Acme Corp"
        assert posting.job_title == "Backend Engineer"
        assert posting.job_description.startswith("# Acme Corp: Backend Engineer")
        assert "## Salary\n- Range: $40 - $50 an hour" in posting.job_description
        assert (posting.salary.min, posting.salary.max) == (40, 50)
        assert posting.salary.period == "hour"

    def test_formatted_markdown_marker(self, service):
        posting = service.create_posting(POSTING, FORMATTED)

        assert posting.salary.period == "year"
        assert posting.salary.min == 120000
        assert "salary_summary" not in posting.job_description
        assert "## About the role" in posting.job_description

    def test_posting_is_stored(self, service, session):
        posting = service.create_posting(POSTING)

        stored = JobPostingRepository(session).get(posting.id)
        assert stored == posting

    def test_no_salary(self, service):
        posting = service.create_posting("Globex: Data Scientist\n\nCompetitive package.")

        assert posting.salary is None
        assert posting.job_description.endswith("- Maximum: Not provided")

    @pytest.mark.parametrize("description", [None, "", "   \n"])
    def test_blank_description(self, service, description):
        with pytest.raises(JobIntakeError, match="Please provide a job description"):
            service.create_posting(description)

    def test_logs_creation(self, service, caplog):
        with caplog.at_level(logging.INFO, logger="tuneit.jobs.service"):
            service.create_posting(POSTING)

        events = [getattr(record, "event", None) for record in caplog.records]
        assert "jobs.posting.fallback_markdown" in events
        assert "jobs.posting.created" in events


class TestUpdateDescription:
    """Tests for JobIntakeService.update_description."""

    def test_keeps_salary_and_rederives_heading(self, service):
        posting = service.create_posting(POSTING)

        updated = service.update_description(posting.id, "# Acme Corp: Senior Backend Engineer\n\nNew text")

        assert updated.job_title == "Senior Backend Engineer"
        assert updated.job_description.endswith("New text")
        assert updated.salary == posting.salary

    def test_missing_posting(self, service):
        with pytest.raises(RecordNotFoundError):
            service.update_description(404, "# A: B")

    def test_blank_markdown(self, service):
        posting = service.create_posting(POSTING)

        with pytest.raises(JobIntakeError):
            service.update_description(posting.id, "  ")


class TestSearch:
    """Tests for JobIntakeService.search."""

    def test_search_stored_postings(self, service):
        acme = service.create_posting(POSTING)
        globex = service.create_posting("Globex: Data Scientist\n\nCompetitive package.")

        assert {p.id for p in service.search("")} == {acme.id, globex.id}
        assert [p.id for p in service.search("ACME")] == [acme.id]
        assert [p.id for p in service.search("data scientist")] == [globex.id]
        assert [p.id for p in service.search("an hour")] == [acme.id]
        assert service.search("rust") == []

    def test_search_matches_salary_label(self):
        """Test the salary label is searched even when the description omits it."""
        initech = JobPosting(
            company_name="Initech",
            job_title="Analyst",
            job_description="# Initech: Analyst",
            salary=SalaryDetails(range="$70k - $80k", min=70000, max=80000, currency="USD"),
        )
        hooli = JobPosting(
            company_name="Hooli",
            job_title="Engineer",
            job_description="# Hooli: Engineer",
        )
        repository = Mock(spec=JobPostingRepository)
        repository.list.return_value = [initech, hooli]

        service = JobIntakeService(repository)

        assert service.search("$70k") == [initech]
        assert service.search("not provided") == []
