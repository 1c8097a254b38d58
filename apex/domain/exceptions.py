"""
Domain exceptions for Apex.

Lookups in the repository layer return ``None`` instead of raising;
these exceptions are raised by validation helpers and the service layer.
Store failures are never wrapped in them.
"""

from typing import Optional


class ApexError(Exception):
    """Base exception for all Apex domain errors."""

    def __init__(self, message: str, details: Optional[dict] = None):
        self.message = message
        self.details = details or {}
        super().__init__(self.message)


class ValidationError(ApexError):
    """Raised by explicit validation helpers when a value is rejected."""

    def __init__(self, field: str, reason: str):
        super().__init__(message=reason, details={"field": field})


class ReportNotFoundError(ApexError):
    """Raised when a report does not exist or has been soft-deleted."""

    def __init__(self, report_id: str):
        super().__init__(message="Report not found", details={"report_id": report_id})


class DocumentNotFoundError(ApexError):
    """Raised when a document does not exist or has been soft-deleted."""

    def __init__(self, document_id: str):
        super().__init__(message="Document not found", details={"document_id": document_id})


class UnauthorizedError(ApexError):
    """Raised when a user acts on a report they do not own."""

    def __init__(self, user_id: str, report_id: str):
        super().__init__(
            message="Unauthorized",
            details={"user_id": user_id, "report_id": report_id},
        )


class DuplicateDocumentError(ApexError):
    """Raised when an active document with the same content hash already exists in a report."""

    def __init__(self, report_id: str, file_hash: str, existing_id: str):
        super().__init__(
            message="Document already exists in this report",
            details={"report_id": report_id, "file_hash": file_hash, "existing_id": existing_id},
        )


class ParsingError(ApexError):
    """Raised when text extraction fails for an uploaded file."""

    def __init__(self, filename: str, reason: Optional[str] = None):
        message = f"Failed to parse {filename}"
        if reason:
            message += f": {reason}"
        super().__init__(message=message, details={"filename": filename, "reason": reason})


class StoredFileNotFoundError(ApexError):
    """Raised when a document's stored file is no longer on disk."""

    def __init__(self, document_id: str, storage_path: str):
        super().__init__(
            message="Stored file not found",
            details={"document_id": document_id, "storage_path": storage_path},
        )
