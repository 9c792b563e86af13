"""Data access layer (repositories) for saved job postings.

Repositories encapsulate database operations and return JobPosting domain
models rather than ORM models.
"""

import logging
from typing import List, Optional

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from tuneit.domain.models import JobPosting, SalaryDetails
from tuneit.salary.records import to_salary_columns
from tuneit.utils.timestamps import to_storage, utc_now

from .exceptions import DataIntegrityError, PersistenceError, RecordNotFoundError
from .schema import UserJobModel

logger = logging.getLogger(__name__)


class JobPostingRepository:
    """Repository for user_jobs rows."""

    def __init__(self, session: Session):
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy session for database operations
        """
        self.session = session

    def add(self, posting: JobPosting) -> JobPosting:
        """Insert a new posting.

        created_at and updated_at default to now when the posting has none.

        Args:
            posting: JobPosting without an id

        Returns:
            Persisted JobPosting with its id assigned

        Raises:
            DataIntegrityError: If a constraint is violated
            PersistenceError: If database error occurs
        """
        now = utc_now()
        posting = posting.model_copy(
            update={
                "id": None,
                "created_at": posting.created_at or now,
                "updated_at": posting.updated_at or now,
            }
        )

        try:
            model = UserJobModel.from_domain(posting)
            self.session.add(model)
            self.session.flush()
            return model.to_domain()

        except IntegrityError as e:
            logger.error(f"Integrity error saving job posting: {e}", exc_info=True)
            raise DataIntegrityError(f"Failed to save job posting due to constraint violation: {e}") from e
        except SQLAlchemyError as e:
            logger.error(f"Error saving job posting: {e}", exc_info=True)
            raise PersistenceError(f"Failed to save job posting: {e}") from e

    def get(self, job_id: int) -> Optional[JobPosting]:
        """Retrieve a posting by id.

        Returns:
            JobPosting if found, None otherwise

        Raises:
            PersistenceError: If database error occurs
        """
        try:
            model = self.session.get(UserJobModel, job_id)
            return model.to_domain() if model is not None else None

        except SQLAlchemyError as e:
            logger.error(f"Error retrieving job posting {job_id}: {e}", exc_info=True)
            raise PersistenceError(f"Failed to retrieve job posting: {e}") from e

    def list(self) -> List[JobPosting]:
        """All postings, newest first.

        Raises:
            PersistenceError: If database error occurs
        """
        try:
            stmt = select(UserJobModel).order_by(
                UserJobModel.created_at.desc(), UserJobModel.id.desc()
            )
            return [model.to_domain() for model in self.session.execute(stmt).scalars().all()]

        except SQLAlchemyError as e:
            logger.error(f"Error listing job postings: {e}", exc_info=True)
            raise PersistenceError(f"Failed to list job postings: {e}") from e

    def update(self, posting: JobPosting) -> JobPosting:
        """Overwrite the heading, description and salary of a stored posting.

        Args:
            posting: JobPosting with an id

        Returns:
            Updated JobPosting

        Raises:
            RecordNotFoundError: If no posting has that id
            PersistenceError: If database error occurs
        """
        model = self._require(posting.id)

        try:
            model.company_name = posting.company_name
            model.job_title = posting.job_title
            model.job_description = posting.job_description
            self._apply_salary(model, posting.salary)
            model.updated_at = to_storage(utc_now())

            self.session.flush()
            return model.to_domain()

        except SQLAlchemyError as e:
            logger.error(f"Error updating job posting {posting.id}: {e}", exc_info=True)
            raise PersistenceError(f"Failed to update job posting: {e}") from e

    def update_salary(self, job_id: int, salary: Optional[SalaryDetails]) -> JobPosting:
        """Replace only the salary columns of a posting.

        Raises:
            RecordNotFoundError: If no posting has that id
            PersistenceError: If database error occurs
        """
        model = self._require(job_id)

        try:
            self._apply_salary(model, salary)
            model.updated_at = to_storage(utc_now())

            self.session.flush()
            return model.to_domain()

        except SQLAlchemyError as e:
            logger.error(f"Error updating salary for job posting {job_id}: {e}", exc_info=True)
            raise PersistenceError(f"Failed to update salary: {e}") from e

    def delete(self, job_id: int) -> None:
        """Delete a posting.

        Raises:
            RecordNotFoundError: If no posting has that id
            PersistenceError: If database error occurs
        """
        model = self._require(job_id)

        try:
            self.session.delete(model)
            self.session.flush()

        except SQLAlchemyError as e:
            logger.error(f"Error deleting job posting {job_id}: {e}", exc_info=True)
            raise PersistenceError(f"Failed to delete job posting: {e}") from e

    def _require(self, job_id: Optional[int]) -> UserJobModel:
        if job_id is None:
            raise RecordNotFoundError("Job posting has no id")

        try:
            model = self.session.get(UserJobModel, job_id)
        except SQLAlchemyError as e:
            logger.error(f"Error retrieving job posting {job_id}: {e}", exc_info=True)
            raise PersistenceError(f"Failed to retrieve job posting: {e}") from e

        if model is None:
            raise RecordNotFoundError(f"Job posting with id {job_id} not found")
        return model

    @staticmethod
    def _apply_salary(model: UserJobModel, salary: Optional[SalaryDetails]) -> None:
        for column, value in to_salary_columns(salary).items():
            setattr(model, column, value)
