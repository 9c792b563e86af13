"""Domain models for salary details and job postings."""

from .models import FormattedJobDescription, JobPosting, SalaryDetails, SalaryInput

__all__ = ["FormattedJobDescription", "JobPosting", "SalaryDetails", "SalaryInput"]
