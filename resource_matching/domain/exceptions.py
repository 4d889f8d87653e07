"""
Domain-level exceptions for the hexagonal architecture.

These exceptions represent business rule violations and domain logic errors.
Every exception carries an ``error_kind`` tag and a ``retryable`` flag; the API
layer maps them to HTTP responses and external callers only ever see the tag
and the message.
"""

from enum import Enum
from typing import Any, Dict, Optional


class ErrorKind(str, Enum):
    """Error kinds surfaced to external callers."""

    NOT_FOUND = "NOT_FOUND"
    TENANT_MISMATCH = "TENANT_MISMATCH"
    INVALID_INPUT = "INVALID_INPUT"
    CONFLICT = "CONFLICT"
    TRANSIENT = "TRANSIENT"
    INTERNAL = "INTERNAL"


class DomainException(Exception):
    """Base exception for all domain-level errors."""

    error_kind: ErrorKind = ErrorKind.INTERNAL
    retryable: bool = False

    def __init__(self, message: str = "", details: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def to_dict(self) -> Dict[str, Any]:
        """Tagged representation for external callers."""
        return {"error": self.error_kind.value, "message": self.message}


class ValidationError(DomainException):
    """Raised when domain validation rules are violated (malformed filters, bad intervals)."""

    error_kind = ErrorKind.INVALID_INPUT


class NotFoundError(DomainException):
    """Base exception for entities missing or not visible to the caller's tenant."""

    error_kind = ErrorKind.NOT_FOUND


class RoleNotFoundError(NotFoundError):
    """Raised when a project role (or its project) is not found for the tenant."""
    pass


class EmployeeNotFoundError(NotFoundError):
    """Raised when an employee is not found for the tenant."""
    pass


class AssignmentNotFoundError(NotFoundError):
    """Raised when an assignment is not found for the tenant."""
    pass


class MatchResultNotFoundError(NotFoundError):
    """Raised when a match result is not found for the tenant."""
    pass


class TenantMismatchError(DomainException):
    """Raised when the caller scope does not own the target resource."""

    error_kind = ErrorKind.TENANT_MISMATCH


class ConcurrencyError(DomainException):
    """Raised when concurrent operations conflict (e.g. two matching runs for one role)."""

    error_kind = ErrorKind.CONFLICT
    retryable = True


class TransientError(DomainException):
    """Raised when the database or a downstream collaborator is temporarily unavailable."""

    error_kind = ErrorKind.TRANSIENT
    retryable = True


class InternalError(DomainException):
    """Raised when an invariant is violated; never retried."""

    error_kind = ErrorKind.INTERNAL


class ScoringError(DomainException):
    """Raised when a single candidate cannot be scored; the engine skips the candidate."""

    error_kind = ErrorKind.INTERNAL


__all__ = [
    "ErrorKind",
    "DomainException",
    "ValidationError",
    "NotFoundError",
    "RoleNotFoundError",
    "EmployeeNotFoundError",
    "AssignmentNotFoundError",
    "MatchResultNotFoundError",
    "TenantMismatchError",
    "ConcurrencyError",
    "TransientError",
    "InternalError",
    "ScoringError",
]
