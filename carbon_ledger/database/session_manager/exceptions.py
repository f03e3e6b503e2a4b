"""
Database exceptions.
"""


class DatabaseNotInitialized(Exception):
    """Raised when a session is requested before ``Database.init``."""
    pass


class DatabaseTransactionError(Exception):
    """Raised when a unit of work cannot be committed."""
    pass
