# apex/models/base.py
from sqlalchemy import Column, DateTime
from sqlalchemy.sql import func


class SoftDeleteMixin:
    """Timestamp columns shared by soft-deletable tables"""

    created_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())
    updated_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())
    deleted_at = Column(DateTime(timezone=True), nullable=True)

    @classmethod
    def active(cls):
        """Predicate matching rows that have not been soft-deleted"""
        return cls.deleted_at.is_(None)
