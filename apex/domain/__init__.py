# apex/domain/__init__.py
from .entities import (
    Report,
    Document,
    is_deleted,
    is_active,
    has_been_parsed,
    has_consistent_timestamps,
    is_valid_title,
    validate_title,
)
from .exceptions import (
    ApexError,
    ValidationError,
    ReportNotFoundError,
    DocumentNotFoundError,
    UnauthorizedError,
    DuplicateDocumentError,
    ParsingError,
    StoredFileNotFoundError,
)

__all__ = [
    "Report", "Document",
    "is_deleted", "is_active", "has_been_parsed", "has_consistent_timestamps",
    "is_valid_title", "validate_title",
    "ApexError", "ValidationError", "ReportNotFoundError", "DocumentNotFoundError",
    "UnauthorizedError", "DuplicateDocumentError", "ParsingError", "StoredFileNotFoundError",
]
