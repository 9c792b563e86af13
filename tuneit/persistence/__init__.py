"""Persistence layer for saved job postings using SQLAlchemy.

Public API:
    # Database initialization and session management
    - init_database(database_url: str) -> None
    - get_session() -> ContextManager[Session]
    - close_database() -> None
    - get_engine() -> Engine

    # Repository classes
    - JobPostingRepository: CRUD operations for user_jobs

    # Exceptions
    - PersistenceError: Base exception for all persistence errors
    - DatabaseConnectionError: Database connection/initialization failures
    - RecordNotFoundError: Required record not found
    - DataIntegrityError: Constraint violations

Example usage:
    >>> from tuneit.persistence import init_database, get_session, JobPostingRepository
    >>>
    >>> init_database("sqlite:///./data/tuneit.db")
    >>>
    >>> with get_session() as session:
    ...     repo = JobPostingRepository(session)
    ...     postings = repo.list()
"""

# Database initialization and session management
from .database import close_database, get_engine, get_session, init_database

# Exceptions
from .exceptions import (
    DatabaseConnectionError,
    DataIntegrityError,
    PersistenceError,
    RecordNotFoundError,
)

# Repository classes
from .repositories import JobPostingRepository

__all__ = [
    # Database functions
    "init_database",
    "get_session",
    "close_database",
    "get_engine",
    # Repositories
    "JobPostingRepository",
    # Exceptions
    "PersistenceError",
    "DatabaseConnectionError",
    "RecordNotFoundError",
    "DataIntegrityError",
]
