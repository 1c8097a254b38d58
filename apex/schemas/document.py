# apex/schemas/document.py
from typing import Optional
from .base import BaseSchema, TimestampMixin

class DocumentUpdate(BaseSchema):
    filename: Optional[str] = None
    notes: Optional[str] = None

class Document(BaseSchema, TimestampMixin):
    id: str
    report_id: str
    filename: str
    file_hash: str
    storage_path: str
    parsed_content: Optional[str] = None
    notes: str = ""
