"""
Centralized error handling for SQLAlchemy-based database operations.

Repository methods never leak SQLAlchemy exceptions: connection problems become
``TransientError`` (retryable), constraint violations become ``ConcurrencyError``
(two writers raced on the same rows) and everything else becomes
``InternalError``.
"""

from typing import Any, Dict, Optional, Type
from functools import wraps
from sqlalchemy.exc import (
    SQLAlchemyError,
    IntegrityError as SQLAlchemyIntegrityError,
    OperationalError,
    InterfaceError,
    DisconnectionError,
    TimeoutError as SQLAlchemyTimeoutError,
)
import structlog

from resource_matching.domain.exceptions import (
    ConcurrencyError,
    DomainException,
    InternalError,
    TransientError,
)

logger = structlog.get_logger(__name__)

_CONNECTION_ERRORS = (DisconnectionError, OperationalError, InterfaceError, SQLAlchemyTimeoutError)


def map_sqlalchemy_error(error: SQLAlchemyError) -> Type[DomainException]:
    """Map SQLAlchemy errors to domain exception types."""
    if is_connection_error(error):
        return TransientError
    if is_integrity_error(error):
        return ConcurrencyError
    return InternalError


def handle_database_errors(context: Optional[Dict[str, Any]] = None):
    """
    Decorator converting SQLAlchemy errors raised by a repository method into
    domain exceptions.

    Args:
        context: Additional context to include in the log entry and exception details
    """
    def decorator(func):
        @wraps(func)
        async def wrapper(*args, **kwargs):
            try:
                return await func(*args, **kwargs)
            except DomainException:
                raise
            except SQLAlchemyError as e:
                exception_class = map_sqlalchemy_error(e)
                details = {**(context or {}), **get_error_details(e)}
                log = logger.warning if exception_class.retryable else logger.error
                log(
                    "Database operation failed",
                    function=func.__name__,
                    mapped_to=exception_class.__name__,
                    **details
                )
                raise exception_class(
                    f"Database operation failed in {func.__name__}",
                    details=details
                ) from e

        return wrapper
    return decorator


def is_connection_error(error: Exception) -> bool:
    """Check if an error is a connection-related error."""
    if isinstance(error, SQLAlchemyError) and getattr(error, "connection_invalidated", False):
        return True
    return isinstance(error, _CONNECTION_ERRORS)


def is_integrity_error(error: Exception) -> bool:
    """Check if an error is an integrity constraint violation."""
    return isinstance(error, SQLAlchemyIntegrityError)


def get_error_code(error: SQLAlchemyError) -> Optional[str]:
    """Extract error code from SQLAlchemy error if available."""
    if hasattr(error, 'orig') and hasattr(error.orig, 'pgcode'):
        return error.orig.pgcode
    elif getattr(error, 'code', None):
        return error.code
    return None


def get_error_details(error: SQLAlchemyError) -> Dict[str, Any]:
    """Extract loggable error information from SQLAlchemy error (no bound parameters)."""
    details = {
        "error_type": type(error).__name__,
    }

    error_code = get_error_code(error)
    if error_code:
        details["error_code"] = error_code

    if getattr(error, 'orig', None) is not None:
        details["original_error_type"] = type(error.orig).__name__

    return details


__all__ = [
    "map_sqlalchemy_error",
    "handle_database_errors",
    "is_connection_error",
    "is_integrity_error",
    "get_error_code",
    "get_error_details",
]
