"""
Error response schemas for API documentation and consistent error formatting.
"""

from pydantic import BaseModel, Field
from typing import List, Optional, Any, Dict


class ErrorDetail(BaseModel):
    """Schema for individual error detail."""

    field: Optional[str] = Field(None, description="Field name that caused the error", examples=["status"])
    message: str = Field(..., description="Human-readable error message")
    type: Optional[str] = Field(None, description="Error type identifier", examples=["missing"])
    input: Optional[Any] = Field(None, description="Input value that caused the error")


class ErrorResponse(BaseModel):
    """Schema for standardized error responses."""

    code: str = Field(..., description="Error code identifier", examples=["BAD_REQUEST"])
    message: str = Field(..., description="Human-readable error message")
    timestamp: str = Field(..., description="Error timestamp in ISO format", examples=["2024-01-01T00:00:00Z"])
    request_id: Optional[str] = Field(None, description="Unique request identifier for tracking", examples=["abc12345"])
    details: Optional[List[ErrorDetail]] = Field(None, description="Detailed error information for validation errors")


class APIErrorResponse(BaseModel):
    """Schema for API error response wrapper."""

    error: ErrorResponse = Field(..., description="Error information")


def _example(code: str, message: str) -> Dict[str, Any]:
    return {
        "application/json": {
            "example": {
                "error": {
                    "code": code,
                    "message": message,
                    "timestamp": "2024-01-01T00:00:00Z",
                    "request_id": "abc12345"
                }
            }
        }
    }


# Common error response examples for documentation
COMMON_ERROR_RESPONSES = {
    400: {
        "description": "Bad Request - Invalid request parameters",
        "model": APIErrorResponse,
        "content": _example("BAD_REQUEST", "Invalid action or missing parameters"),
    },
    401: {
        "description": "Unauthorized - Missing, invalid or expired token",
        "model": APIErrorResponse,
        "content": _example("UNAUTHORIZED", "Authentication token required"),
    },
    404: {
        "description": "Not Found - Listing does not exist",
        "model": APIErrorResponse,
        "content": _example("NOT_FOUND", "Listing not found with ID: 42"),
    },
    500: {
        "description": "Internal Server Error",
        "model": APIErrorResponse,
        "content": _example("INTERNAL_SERVER_ERROR", "Internal server error"),
    },
}


def get_error_responses(*status_codes: int) -> Dict[int, Dict[str, Any]]:
    """
    Get error response schemas for specific status codes.

    Args:
        status_codes: HTTP status codes to include

    Returns:
        Dictionary of error response schemas
    """
    return {
        code: COMMON_ERROR_RESPONSES[code]
        for code in status_codes
        if code in COMMON_ERROR_RESPONSES
    }


def get_auth_error_responses() -> Dict[int, Dict[str, Any]]:
    """Get authentication error response schemas."""
    return get_error_responses(400, 401, 500)


def get_moderation_error_responses() -> Dict[int, Dict[str, Any]]:
    """Get error response schemas for moderation endpoints."""
    return get_error_responses(400, 401, 404, 500)
