# apex/repositories/__init__.py
from .base import ReportRepository, DocumentRepository
from .sql_repository import SqlAlchemyReportRepository, SqlAlchemyDocumentRepository
from .memory import InMemoryReportRepository, InMemoryDocumentRepository

__all__ = [
    "ReportRepository", "DocumentRepository",
    "SqlAlchemyReportRepository", "SqlAlchemyDocumentRepository",
    "InMemoryReportRepository", "InMemoryDocumentRepository",
]
