# apex/services/__init__.py
from .file_storage import FileStorageService, file_storage_service
from .parser import ParserService, parser_service
from .reports import ReportService
from .documents import DocumentService, calculate_hash

__all__ = [
    "FileStorageService", "file_storage_service",
    "ParserService", "parser_service",
    "ReportService",
    "DocumentService", "calculate_hash",
]
