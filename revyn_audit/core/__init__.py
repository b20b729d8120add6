"""
Core Package - Revyn Audit Platform
revyn_audit/core/__init__.py

Core infrastructure: exceptions, logging, dependency wiring.
"""

from revyn_audit.core.exceptions import (
    AuditServiceException,
    ChatSessionError,
    DatabaseConnectionException,
    DuplicateEntityException,
    EntityNotFoundException,
    ForeignKeyViolationException,
    IncompleteSubmissionError,
    PaymentError,
    ReportGenerationError,
    RepositoryException,
    UnknownReportTypeError,
)

__all__ = [
    "AuditServiceException",
    "ChatSessionError",
    "DatabaseConnectionException",
    "DuplicateEntityException",
    "EntityNotFoundException",
    "ForeignKeyViolationException",
    "IncompleteSubmissionError",
    "PaymentError",
    "ReportGenerationError",
    "RepositoryException",
    "UnknownReportTypeError",
]
