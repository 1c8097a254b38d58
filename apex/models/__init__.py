# apex/models/__init__.py
from ..database import Base
from .base import SoftDeleteMixin
from .report import ReportRecord
from .document import DocumentRecord

__all__ = [
    "Base",
    "SoftDeleteMixin",
    "ReportRecord",
    "DocumentRecord",
]
