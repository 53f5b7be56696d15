"""Base service exceptions.

These exceptions are raised by the service layer and should be caught
by the API layer and converted to appropriate HTTP responses.
"""

from collections.abc import Iterator
from contextlib import contextmanager

from sqlalchemy.exc import IntegrityError, SQLAlchemyError


class ServiceError(Exception):
    """Base service exception."""

    pass


class NotFoundError(ServiceError):
    """Resource not found."""

    pass


class ValidationError(ServiceError):
    """Validation error."""

    pass


class ConflictError(ServiceError):
    """Resource collides with an existing one."""

    pass


class StorageUnavailable(ServiceError):
    """Database unreachable or failed unexpectedly. Safe for the caller to retry."""

    def __init__(self, operation: str):
        self.operation = operation
        super().__init__(f"Storage failure during {operation}")


@contextmanager
def storage_errors(operation: str) -> Iterator[None]:
    """Translate non-integrity SQLAlchemy failures into StorageUnavailable.

    IntegrityError is re-raised untouched so callers can tell constraint
    violations apart from outages.
    """
    try:
        yield
    except IntegrityError:
        raise
    except SQLAlchemyError as e:
        raise StorageUnavailable(operation) from e
