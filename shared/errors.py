"""
Shared error handling for the Browser Gate.
"""

from typing import Dict, Any, Optional
from pydantic import BaseModel, Field


class ErrorResponse(BaseModel):
    """Standard error response format."""

    request_id: Optional[str] = None
    code: str
    message: str
    details: Dict[str, Any] = Field(default_factory=dict)


class AccessLayerException(Exception):
    """Base exception for gate services."""

    def __init__(self, code: str, message: str, details: Optional[Dict[str, Any]] = None):
        self.code = code
        self.message = message
        self.details = details or {}
        super().__init__(message)

    def to_response(self, request_id: Optional[str] = None) -> ErrorResponse:
        """Convert to error response."""
        return ErrorResponse(
            request_id=request_id,
            code=self.code,
            message=self.message,
            details=self.details
        )


class GateConfigurationError(AccessLayerException):
    """Misuse of the gate configuration builder.

    Raised only for values of the wrong kind (a predicate that is not
    callable, a minimum version that is neither a string nor ``False``, a
    pattern that does not compile). Conflicting vendor rules are never
    reported: evaluation order decides.
    """

    def __init__(self, message: str = "Invalid gate configuration", details: Optional[Dict[str, Any]] = None):
        super().__init__("GATE_CONFIGURATION_ERROR", message, details)
