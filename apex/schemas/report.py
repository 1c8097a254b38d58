# apex/schemas/report.py
from typing import Optional
from .base import BaseSchema, TimestampMixin

class ReportBase(BaseSchema):
    title: str
    description: Optional[str] = None

class ReportCreate(ReportBase):
    pass

class ReportUpdate(BaseSchema):
    title: Optional[str] = None
    description: Optional[str] = None

class Report(ReportBase, TimestampMixin):
    id: str
    user_id: str
