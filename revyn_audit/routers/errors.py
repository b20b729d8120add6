"""
Error Envelope - Revyn Audit Platform
revyn_audit/routers/errors.py

Validation handler and helpers that turn failures into the ErrorResponse
envelope. Register validation_exception_handler for RequestValidationError.
"""

from datetime import datetime, timezone
from typing import NoReturn, Optional

from fastapi import Request, status
from fastapi.exceptions import HTTPException, RequestValidationError
from fastapi.responses import JSONResponse

from revyn_audit.core.exceptions import (
    AuditServiceException,
    DatabaseConnectionException,
    EntityNotFoundException,
    IncompleteSubmissionError,
    RepositoryException,
)
from revyn_audit.models.common import ErrorResponse

FIELD_MESSAGES = {
    "email": {
        "missing": "Email is required",
        "value_error": "Email must be a valid email address",
    },
    "company_name": {
        "missing": "Company name is required",
        "string_too_short": "Company name must not be empty",
        "string_too_long": "Company name must not exceed 255 characters",
    },
    "answers": {
        "missing": "Answers are required",
        "value_error": "Answer values must be finite numbers or strings",
    },
    "value": {
        "value_error": "Answer values must be finite numbers or strings",
    },
    "amount": {
        "missing": "Amount is required",
        "greater_than": "Amount must be a positive number in cents",
        "float_parsing": "Amount must be a positive number in cents",
        "float_type": "Amount must be a positive number in cents",
    },
    "report_ids": {
        "missing": "Report IDs are required",
        "too_short": "At least one report ID is required",
    },
    "customer_email": {
        "missing": "Customer email is required",
        "value_error": "Customer email must be a valid email address",
    },
    "message": {
        "missing": "Message is required",
        "string_too_short": "Message must not be empty",
        "string_too_long": "Message must not exceed 4000 characters",
    },
    "report_kind": {
        "enum": "Report kind must be one of: marketing, website",
    },
}

DEFAULT_MESSAGES = {
    "missing": "Field '{field}' is required",
    "string_too_short": "Field '{field}' is too short",
    "string_too_long": "Field '{field}' is too long",
    "less_than_equal": "Field '{field}' exceeds maximum allowed value",
    "greater_than_equal": "Field '{field}' is below minimum allowed value",
    "greater_than": "Field '{field}' must be greater than the minimum",
    "uuid_parsing": "Field '{field}' must be a valid UUID",
    "uuid_type": "Field '{field}' must be a valid UUID",
    "string_type": "Field '{field}' must be a string",
    "int_type": "Field '{field}' must be an integer",
    "int_parsing": "Field '{field}' must be a valid integer",
    "float_type": "Field '{field}' must be a number",
    "float_parsing": "Field '{field}' must be a valid number",
    "union_tag_invalid": "Field '{field}' has an unknown answer kind",
    "union_tag_not_found": "Field '{field}' is missing the answer kind",
    "enum": "Field '{field}' has an invalid value",
    "json_invalid": "Malformed JSON request body",
    "extra_forbidden": "Unknown field '{field}' is not allowed",
}


def get_validation_message(field: str, error_type: str) -> str:
    leaf = field.split(".")[0] if field else field
    for name in (field, leaf):
        if name in FIELD_MESSAGES:
            for key, message in FIELD_MESSAGES[name].items():
                if key in error_type:
                    return message

    for key, template in DEFAULT_MESSAGES.items():
        if key in error_type:
            return template.format(field=field)

    return f"Invalid value for field '{field}'"


def _envelope(status_code: int, error_code: str, message: str, details: Optional[dict] = None) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content=ErrorResponse(
            error_code=error_code,
            message=message,
            details=details,
            timestamp=datetime.now(timezone.utc),
        ).model_dump(mode="json"),
    )


async def validation_exception_handler(request: Request, exc: RequestValidationError):
    errors = exc.errors()

    if not errors:
        return _envelope(status.HTTP_422_UNPROCESSABLE_ENTITY, "VALIDATION_ERROR", "Request validation failed")

    err = errors[0]
    error_type = err.get("type", "")
    loc = err.get("loc", [])

    if "json_invalid" in error_type:
        return _envelope(status.HTTP_400_BAD_REQUEST, "INVALID_REQUEST", "Malformed JSON request body")

    field = ".".join(str(part) for part in loc if part not in ("body", "query", "path"))
    message = get_validation_message(field, error_type)

    return _envelope(
        status.HTTP_422_UNPROCESSABLE_ENTITY,
        "VALIDATION_ERROR",
        message,
        {"field": field, "type": error_type} if field else None,
    )


async def repository_exception_handler(request: Request, exc: RepositoryException):
    """Storage failures that escaped a route."""
    if isinstance(exc, DatabaseConnectionException):
        return _envelope(status.HTTP_503_SERVICE_UNAVAILABLE, "DATABASE_UNAVAILABLE", "Database is unavailable")
    return _envelope(status.HTTP_500_INTERNAL_SERVER_ERROR, "INTERNAL_SERVER_ERROR", "Unexpected server error")


#  Exception Helpers

def raise_error(status_code: int, error_code: str, message: str, details: Optional[dict] = None) -> NoReturn:
    raise HTTPException(
        status_code=status_code,
        detail=ErrorResponse(
            error_code=error_code,
            message=message,
            details=details,
            timestamp=datetime.now(timezone.utc),
        ).model_dump(mode="json"),
    )


def raise_not_found(exc: EntityNotFoundException) -> NoReturn:
    code = f"{exc.entity_type.upper()}_NOT_FOUND"
    raise_error(status.HTTP_404_NOT_FOUND, code, f"{exc.entity_type} not found")


def raise_service_error(exc: AuditServiceException) -> NoReturn:
    details = None
    if isinstance(exc, IncompleteSubmissionError):
        details = {"missing_question_ids": exc.missing_question_ids}
    raise_error(exc.status_code, exc.error_code, exc.message, details)
