# apex/api/deps.py
from typing import Optional

from fastapi import Depends, Header, HTTPException
from sqlalchemy.orm import Session

from ..database import get_db
from ..domain.exceptions import (
    ApexError,
    DocumentNotFoundError,
    DuplicateDocumentError,
    ReportNotFoundError,
    StoredFileNotFoundError,
    UnauthorizedError,
    ValidationError,
)
from ..repositories.sql_repository import SqlAlchemyDocumentRepository, SqlAlchemyReportRepository
from ..services import DocumentService, ReportService, file_storage_service, parser_service
from ..utils.logging import api_logger

ERROR_STATUS_CODES = {
    ReportNotFoundError: 404,
    DocumentNotFoundError: 404,
    StoredFileNotFoundError: 404,
    UnauthorizedError: 403,
    ValidationError: 400,
    DuplicateDocumentError: 409,
}


def get_current_user_id(x_user_id: Optional[str] = Header(default=None)) -> str:
    """Caller identity; authentication itself happens upstream"""
    if not x_user_id:
        api_logger.warning("Request without user identity")
        raise HTTPException(status_code=401, detail="Unauthorized")
    return x_user_id


def get_report_service(db: Session = Depends(get_db)) -> ReportService:
    return ReportService(SqlAlchemyReportRepository(db))


def get_document_service(db: Session = Depends(get_db)) -> DocumentService:
    return DocumentService(SqlAlchemyDocumentRepository(db), file_storage_service, parser_service)


def to_http_exception(error: ApexError) -> HTTPException:
    status_code = ERROR_STATUS_CODES.get(type(error), 500)
    return HTTPException(status_code=status_code, detail=error.message)
