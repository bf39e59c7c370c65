"""
Standardized error response utilities for the bonus points API.

Provides consistent error response format across all endpoints:
{
    "error": {
        "message": "User-friendly error message",
        "code": "ERROR_CODE"
    }
}

Usage:
    from bonus_points.utils.errors import error_response, ErrorCode

    return error_response("Bonus not found", ErrorCode.NOT_FOUND, 404)
"""
import logging
from enum import Enum
from flask import jsonify
from typing import Optional

from .exceptions import (
    BonusPointsError,
    NotFoundError,
    ValidationError,
    AccrualError,
)

logger = logging.getLogger(__name__)


class ErrorCode(str, Enum):
    """Standardized error codes for API responses."""

    # Validation Errors (400, 422)
    INVALID_REQUEST = "INVALID_REQUEST"
    INVALID_FIELD = "INVALID_FIELD"
    VALIDATION_ERROR = "VALIDATION_ERROR"

    # Not Found (404)
    NOT_FOUND = "NOT_FOUND"
    BONUS_NOT_FOUND = "BONUS_NOT_FOUND"
    ORDER_NOT_FOUND = "ORDER_NOT_FOUND"
    PRODUCT_NOT_FOUND = "PRODUCT_NOT_FOUND"
    USER_NOT_FOUND = "USER_NOT_FOUND"

    # Authentication (401)
    AUTH_REQUIRED = "AUTH_REQUIRED"

    # Server Errors (500)
    ACCRUAL_FAILED = "ACCRUAL_FAILED"
    INTERNAL_ERROR = "INTERNAL_ERROR"


def error_response(
    message: str,
    code: ErrorCode = ErrorCode.INTERNAL_ERROR,
    status_code: int = 500,
    log_error: bool = True,
    details: Optional[dict] = None,
    fields: Optional[dict] = None
) -> tuple:
    """
    Create a standardized error response.

    Args:
        message: User-friendly error message
        code: Error code from ErrorCode enum (or a raw string code)
        status_code: HTTP status code
        log_error: Whether to log the error
        details: Optional additional details (only logged, not returned to user)
        fields: Optional field -> messages map returned for validation failures

    Returns:
        Tuple of (response, status_code) for Flask
    """
    if log_error and status_code >= 500:
        logger.error(f"API Error [{code}]: {message}", extra={"details": details})
    elif log_error and status_code >= 400:
        logger.warning(f"API Error [{code}]: {message}", extra={"details": details})

    response = {
        "error": {
            "message": message,
            "code": code.value if isinstance(code, ErrorCode) else code
        }
    }
    if fields:
        response["error"]["fields"] = fields

    return jsonify(response), status_code


def bad_request(message: str, code: ErrorCode = ErrorCode.INVALID_REQUEST) -> tuple:
    """400 Bad Request error."""
    return error_response(message, code, 400, log_error=False)


def unauthorized(message: str = "Authentication required", code: ErrorCode = ErrorCode.AUTH_REQUIRED) -> tuple:
    """401 Unauthorized error."""
    return error_response(message, code, 401, log_error=False)


def not_found(message: str, code: ErrorCode = ErrorCode.NOT_FOUND) -> tuple:
    """404 Not Found error."""
    return error_response(message, code, 404, log_error=False)


def unprocessable(message: str, fields: dict) -> tuple:
    """422 Unprocessable Entity error for failed validations."""
    return error_response(message, ErrorCode.VALIDATION_ERROR, 422, fields=fields)


def internal_error(message: str = "An unexpected error occurred", details: Optional[dict] = None) -> tuple:
    """500 Internal Server Error."""
    return error_response(message, ErrorCode.INTERNAL_ERROR, 500, log_error=True, details=details)


def exception_response(error: BonusPointsError) -> tuple:
    """Map a domain exception to its API error response."""
    if isinstance(error, ValidationError):
        return unprocessable(error.message, error.errors)
    if isinstance(error, NotFoundError):
        return not_found(error.message, error.code)
    if isinstance(error, AccrualError):
        return error_response(
            error.message,
            ErrorCode.ACCRUAL_FAILED,
            500,
            details={'order_id': error.order_id, 'user_id': error.user_id}
        )
    return error_response(error.message, error.code, 400)
