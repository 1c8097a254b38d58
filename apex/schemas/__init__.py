# apex/schemas/__init__.py
from .report import Report, ReportCreate, ReportUpdate
from .document import Document, DocumentUpdate

__all__ = [
    "Report", "ReportCreate", "ReportUpdate",
    "Document", "DocumentUpdate",
]
