"""
Error handling service: turns exceptions into the API's error body.
Every error is rendered as {"error": {"code", "message", "timestamp", "request_id", "details"?}}.
"""

from datetime import datetime, timezone
from typing import Dict, Any, Optional, List, Mapping
from fastapi import Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException
from rental_admin.utils.exceptions import APIException
import logging
import uuid

logger = logging.getLogger(__name__)


class ErrorHandlerService:
    """Renders API, validation, routing and unexpected errors consistently."""

    @staticmethod
    def format_error_response(
        error_code: str,
        message: str,
        details: Optional[List[Dict[str, Any]]] = None,
        request_id: Optional[str] = None
    ) -> Dict[str, Any]:
        """
        Build the error body.

        Args:
            error_code: Machine-readable code such as BAD_REQUEST
            message: Human-readable message
            details: Per-field problems, omitted when empty
            request_id: Request identifier, omitted when unknown

        Returns:
            Error body dictionary
        """
        error: Dict[str, Any] = {
            "code": error_code,
            "message": message,
            "timestamp": datetime.now(timezone.utc).strftime("%Y-%m-%dT%H:%M:%S.%fZ"),
        }
        if details:
            error["details"] = details
        if request_id:
            error["request_id"] = request_id
        return {"error": error}

    @staticmethod
    def handle_api_exception(exception: APIException, request: Optional[Request] = None) -> JSONResponse:
        """Render an APIException with its status, code, field errors and headers."""
        request_id = ErrorHandlerService._get_request_id(request)
        logger.warning(
            f"[{request_id}] {ErrorHandlerService._path(request)}: "
            f"{exception.error_code} {exception.status_code} - {exception.detail}"
        )
        return ErrorHandlerService._respond(
            exception.status_code,
            exception.error_code or "API_ERROR",
            exception.detail,
            request_id,
            details=getattr(exception, "field_errors", None),
            headers=exception.headers
        )

    @staticmethod
    def handle_validation_error(exception: RequestValidationError, request: Optional[Request] = None) -> JSONResponse:
        """Render request validation failures as 400 with one detail per field."""
        request_id = ErrorHandlerService._get_request_id(request)
        details = ErrorHandlerService.field_errors(exception.errors())
        logger.warning(
            f"[{request_id}] {ErrorHandlerService._path(request)}: "
            f"request validation failed ({len(details)} field errors)"
        )
        return ErrorHandlerService._respond(
            400, "VALIDATION_ERROR", "Request validation failed", request_id, details=details
        )

    @staticmethod
    def handle_http_exception(exception: StarletteHTTPException, request: Optional[Request] = None) -> JSONResponse:
        """Render routing errors such as unknown paths and unsupported methods."""
        request_id = ErrorHandlerService._get_request_id(request)
        logger.warning(
            f"[{request_id}] {ErrorHandlerService._path(request)}: "
            f"HTTP {exception.status_code} - {exception.detail}"
        )
        return ErrorHandlerService._respond(
            exception.status_code,
            f"HTTP_{exception.status_code}",
            str(exception.detail),
            request_id,
            headers=getattr(exception, "headers", None)
        )

    @staticmethod
    def handle_unexpected_error(exception: Exception, request: Optional[Request] = None) -> JSONResponse:
        """Log the failure in full and answer 500 with a generic message."""
        request_id = ErrorHandlerService._get_request_id(request)
        logger.error(
            f"[{request_id}] {ErrorHandlerService._path(request)}: unexpected {type(exception).__name__}",
            exc_info=exception
        )
        return ErrorHandlerService._respond(500, "INTERNAL_SERVER_ERROR", "Internal server error", request_id)

    @staticmethod
    def field_errors(errors: List[Dict[str, Any]]) -> List[Dict[str, Any]]:
        """Flatten pydantic errors into {field, message, type} entries."""
        return [
            {
                "field": " -> ".join(str(loc) for loc in error["loc"]),
                "message": error["msg"],
                "type": error["type"]
            }
            for error in errors
        ]

    @staticmethod
    def _respond(
        status_code: int,
        error_code: str,
        message: str,
        request_id: str,
        details: Optional[List[Dict[str, Any]]] = None,
        headers: Optional[Mapping[str, str]] = None
    ) -> JSONResponse:
        return JSONResponse(
            status_code=status_code,
            content=ErrorHandlerService.format_error_response(error_code, message, details, request_id),
            headers=headers
        )

    @staticmethod
    def _path(request: Optional[Request]) -> str:
        return request.url.path if request is not None else "-"

    @staticmethod
    def _get_request_id(request: Optional[Request]) -> str:
        """Reuse the request ID stamped by the logging middleware, or mint one."""
        if request is not None:
            request_id = getattr(request.state, "request_id", None)
            if request_id:
                return request_id
        return str(uuid.uuid4())[:8]
