"""
Shared API response types and base schemas.

These are DTOs (Data Transfer Objects) in the API layer, separate from domain
entities and persistence tables.

Following hexagonal architecture principles:
- API Layer: HTTP request/response DTOs (this file)
- Domain Layer: Business entities and logic
- Infrastructure Layer: Database tables and adapters
"""

from typing import Optional

from pydantic import BaseModel, Field


class ErrorResponse(BaseModel):
    """
    Error body returned for every failed request.

    External callers only ever see the error kind and a message; stack traces
    stay in the logs, correlated by ``request_id``.
    """

    error: str = Field(..., description="Error kind (NOT_FOUND, CONFLICT, ...)")
    message: str = Field(..., description="Human readable message")
    request_id: Optional[str] = Field(None, description="Correlation id of the request")
