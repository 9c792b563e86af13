"""Persistence layer exceptions.

All persistence exceptions inherit from PersistenceError so callers can catch
every storage failure with a single except clause.
"""


class PersistenceError(Exception):
    """Base exception for all persistence layer errors."""

    pass


class DatabaseConnectionError(PersistenceError):
    """Raised when database connection or initialization fails.

    Examples:
    - Invalid or empty DATABASE_URL
    - SQLite file not writable
    - Database not initialized before get_session()
    """

    pass


class RecordNotFoundError(PersistenceError):
    """Raised when an update or delete targets a job posting that does not exist.

    Plain lookups return None instead.
    """

    pass


class DataIntegrityError(PersistenceError):
    """Raised when a database constraint is violated (e.g. a NOT NULL column)."""

    pass
