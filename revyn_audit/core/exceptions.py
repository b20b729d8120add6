"""
Custom Exceptions - Revyn Audit Platform
revyn_audit/core/exceptions.py

Repository exceptions (Snowflake access) and service exceptions
(submission, progress, payment, report and chat flows). The scorer raises none
of these; routers translate them into the ErrorResponse envelope.
"""

from typing import List, Optional


class RepositoryException(Exception):
    """Base exception for repository operations."""

    pass


class EntityNotFoundException(RepositoryException):
    """Entity not found in database."""

    def __init__(self, entity_type: str, entity_id: str):
        self.entity_type = entity_type
        self.entity_id = entity_id
        super().__init__(f"{entity_type} with ID {entity_id} not found")


class DuplicateEntityException(RepositoryException):
    """Duplicate entity violation."""

    def __init__(self, message: str = "Entity already exists"):
        self.message = message
        super().__init__(message)


class DatabaseConnectionException(RepositoryException):
    """Database connection failure."""

    def __init__(self, message: str = "Database connection failed"):
        self.message = message
        super().__init__(message)


class ForeignKeyViolationException(RepositoryException):
    """Foreign key constraint violation."""

    def __init__(self, message: str = "Foreign key constraint violation"):
        self.message = message
        super().__init__(message)


class AuditServiceException(Exception):
    """Base exception for service-layer failures."""

    error_code = "SERVICE_ERROR"
    status_code = 400

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)


class IncompleteSubmissionError(AuditServiceException):
    """Required questions are unanswered; the submission cannot be finalized."""

    error_code = "INCOMPLETE_SUBMISSION"
    status_code = 422

    def __init__(self, missing_question_ids: List[int]):
        self.missing_question_ids = missing_question_ids
        super().__init__(
            f"{len(missing_question_ids)} required question(s) unanswered"
        )


class UnknownReportTypeError(AuditServiceException):
    """Report product id is not in the catalog or not on sale."""

    error_code = "UNKNOWN_REPORT_TYPE"

    def __init__(self, report_ids: List[str]):
        self.report_ids = report_ids
        super().__init__(f"Unknown or unavailable report type(s): {', '.join(report_ids)}")


class PaymentError(AuditServiceException):
    """Payment processor rejected the request."""

    error_code = "PAYMENT_ERROR"

    def __init__(self, message: str, status_code: int = 400):
        self.status_code = status_code
        super().__init__(message)


class ReportGenerationError(AuditServiceException):
    """The AI report could not be produced or did not match the schema."""

    error_code = "REPORT_GENERATION_FAILED"
    status_code = 502


class ChatSessionError(AuditServiceException):
    """Chat session is missing or the assistant failed upstream."""

    error_code = "CHAT_ERROR"

    def __init__(self, message: str, session_id: Optional[str] = None, status_code: int = 400):
        self.session_id = session_id
        self.status_code = status_code
        super().__init__(message)


class ProgressError(AuditServiceException):
    """Draft answers cannot be read or written for this purchase."""

    error_code = "PROGRESS_ERROR"

    def __init__(self, message: str, status_code: int = 400):
        self.status_code = status_code
        super().__init__(message)
