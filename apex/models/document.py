# apex/models/document.py
from sqlalchemy import Column, String, Text, ForeignKey, Index
from sqlalchemy.orm import relationship

from ..database import Base
from .base import SoftDeleteMixin


class DocumentRecord(SoftDeleteMixin, Base):
    __tablename__ = "documents"

    id = Column(String(36), primary_key=True)
    report_id = Column(String(36), ForeignKey("reports.id", ondelete="CASCADE"), nullable=False, index=True)
    filename = Column(String(255), nullable=False)
    file_hash = Column(String(64), nullable=False)
    storage_path = Column(String(1024), nullable=False)
    parsed_content = Column(Text, nullable=True)
    notes = Column(Text, nullable=False, default="", server_default="")

    report = relationship("ReportRecord", back_populates="documents")

    # Not unique: a soft-deleted document frees its hash for reuse
    __table_args__ = (
        Index("ix_documents_report_id_file_hash", "report_id", "file_hash"),
    )
