# apex/api/__init__.py
from .reports import router as reports_router
from .documents import router as documents_router

__all__ = ["reports_router", "documents_router"]
