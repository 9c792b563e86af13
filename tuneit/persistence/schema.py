"""Database schema definition and ORM models.

This module defines the SQLAlchemy ORM model for saved job postings and the
conversion between rows and JobPosting domain models. Salary details are
stored as flat columns (see tuneit.salary.records).
"""

import logging

from sqlalchemy import Column, Float, Index, Integer, String, Text, inspect
from sqlalchemy.engine import Engine
from sqlalchemy.orm import declarative_base

from tuneit.domain.models import JobPosting
from tuneit.salary.records import SalaryColumns, from_salary_columns, to_salary_columns
from tuneit.utils.timestamps import from_storage, to_storage

logger = logging.getLogger(__name__)

# Create base class for ORM models
Base = declarative_base()


class UserJobModel(Base):
    """ORM model for user_jobs table.

    Stores formatted job descriptions with their salary columns.
    """

    __tablename__ = "user_jobs"

    # Primary key
    id = Column(Integer, primary_key=True, autoincrement=True)

    # Heading fields derived from the formatted Markdown
    company_name = Column(String(100), nullable=False)
    job_title = Column(String(100), nullable=False)
    job_description = Column(Text, nullable=False)

    # Salary columns
    salary_min = Column(Float, nullable=True)
    salary_max = Column(Float, nullable=True)
    salary_currency = Column(String(3), nullable=True)
    salary_period = Column(String(10), nullable=True)
    salary_range = Column(Text, nullable=True)
    hourly_rate = Column(Float, nullable=True)

    # Timestamps (stored as ISO 8601 strings)
    created_at = Column(String(50), nullable=False)
    updated_at = Column(String(50), nullable=False)

    __table_args__ = (
        Index("idx_user_jobs_created_at", "created_at"),
        Index("idx_user_jobs_company", "company_name"),
    )

    def salary_columns(self) -> SalaryColumns:
        return SalaryColumns(
            salary_min=self.salary_min,
            salary_max=self.salary_max,
            salary_currency=self.salary_currency,
            salary_period=self.salary_period,
            salary_range=self.salary_range,
            hourly_rate=self.hourly_rate,
        )

    def to_domain(self) -> JobPosting:
        """Convert ORM model to domain model.

        Returns:
            JobPosting: Domain model instance
        """
        return JobPosting(
            id=self.id,
            company_name=self.company_name,
            job_title=self.job_title,
            job_description=self.job_description,
            salary=from_salary_columns(self.salary_columns()),
            created_at=from_storage(self.created_at),
            updated_at=from_storage(self.updated_at),
        )

    @classmethod
    def from_domain(cls, posting: JobPosting) -> "UserJobModel":
        """Create ORM model from domain model.

        Args:
            posting: Domain model instance (created_at/updated_at must be set)

        Returns:
            UserJobModel: ORM model instance
        """
        return cls(
            id=posting.id,
            company_name=posting.company_name,
            job_title=posting.job_title,
            job_description=posting.job_description,
            created_at=to_storage(posting.created_at),
            updated_at=to_storage(posting.updated_at),
            **to_salary_columns(posting.salary),
        )


def create_schema(engine: Engine) -> None:
    """Create all tables and indexes if they don't exist (idempotent).

    Args:
        engine: SQLAlchemy engine instance
    """
    logger.info("Creating database schema if not exists")

    try:
        Base.metadata.create_all(engine, checkfirst=True)

        tables = inspect(engine).get_table_names()
        logger.info(f"Database schema ready. Tables: {', '.join(tables)}")

    except Exception as e:
        logger.error(f"Failed to create database schema: {e}", exc_info=True)
        raise
