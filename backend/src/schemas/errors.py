"""
Error response schemas for API endpoints.

Client errors use the `{"error": {"message": ...}}` envelope that existing bookmark
clients already parse.
"""
from pydantic import BaseModel, Field


class ErrorMessage(BaseModel):
    """Human-readable error details."""

    message: str = Field(description="Fixed message identifying the rejected rule")


class ErrorResponse(BaseModel):
    """Error envelope returned for 400 and 500 responses."""

    error: ErrorMessage

    @classmethod
    def from_message(cls, message: str) -> "ErrorResponse":
        """Build the envelope for a single message."""
        return cls(error=ErrorMessage(message=message))
