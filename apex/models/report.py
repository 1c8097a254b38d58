# apex/models/report.py
from sqlalchemy import Column, String, Text, Index
from sqlalchemy.orm import relationship

from ..database import Base
from .base import SoftDeleteMixin


class ReportRecord(SoftDeleteMixin, Base):
    __tablename__ = "reports"

    id = Column(String(36), primary_key=True)
    user_id = Column(String(255), nullable=False)
    title = Column(String(255), nullable=False)
    description = Column(Text, nullable=True)

    documents = relationship("DocumentRecord", back_populates="report", cascade="all, delete-orphan")

    __table_args__ = (
        Index("ix_reports_user_id_created_at", "user_id", "created_at"),
    )
