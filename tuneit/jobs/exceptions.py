"""Custom exceptions for job intake."""


class JobIntakeError(Exception):
    """A job description could not be turned into a saved posting.

    Raised for user-correctable input problems such as a blank description.
    Storage failures surface as PersistenceError instead.
    """

    pass
