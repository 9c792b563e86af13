"""Scoped logging context.

Fields pushed here (job_id, stage, input source, ...) are stamped onto every
log record emitted inside the scope by ContextualFilter. Context lives in a
ContextVar, so concurrent threads and tasks each see their own fields.
"""

from contextvars import ContextVar, Token
from typing import Any, Dict, Optional

LogContextVar: ContextVar[Dict[str, Any]] = ContextVar("tuneit_log_context", default={})


def get_log_context() -> Dict[str, Any]:
    """Return a copy of the active context fields."""
    return LogContextVar.get().copy()


def push_log_context(**fields: Any) -> Token:
    """Merge fields into the active context.

    Returns:
        Token for pop_log_context()

    Example:
        >>> token = push_log_context(job_id=42, stage="salary.extract")
        >>> pop_log_context(token)
    """
    return LogContextVar.set({**LogContextVar.get(), **fields})


def pop_log_context(token: Token) -> None:
    """Restore the context that was active before push_log_context()."""
    LogContextVar.reset(token)


def clear_log_context() -> None:
    """Drop all context fields (mainly for tests)."""
    LogContextVar.set({})


class log_context:
    """Context manager form of push/pop.

    Example:
        >>> with log_context(input_source="posting.txt"):
        ...     logger.info("Extracting salary")  # record carries input_source
    """

    def __init__(self, **fields: Any):
        self.fields = fields
        self.token: Optional[Token] = None

    def __enter__(self):
        self.token = push_log_context(**self.fields)
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        if self.token is not None:
            pop_log_context(self.token)
            self.token = None
        return False
