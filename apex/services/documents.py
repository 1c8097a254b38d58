# apex/services/documents.py
import hashlib
import time
from typing import List, Optional
from uuid import uuid4

from ..domain.entities import Document, is_deleted, utcnow
from ..domain.exceptions import (
    DocumentNotFoundError,
    DuplicateDocumentError,
    ParsingError,
    StoredFileNotFoundError,
)
from ..repositories.base import DocumentRepository
from ..utils.logging import service_logger
from .file_storage import FileStorageService
from .parser import ParserService


def calculate_hash(data: bytes) -> str:
    """SHA-256 hex digest of file content"""
    return hashlib.sha256(data).hexdigest()


class DocumentService:
    """Upload orchestration and metadata edits for documents"""

    def __init__(
            self,
            document_repository: DocumentRepository,
            storage_service: FileStorageService,
            parser_service: ParserService
    ):
        self.document_repository = document_repository
        self.storage_service = storage_service
        self.parser_service = parser_service

    async def upload_document(self, report_id: str, data: bytes, filename: str) -> Document:
        """
        Store, parse and record a new file in a report.

        The duplicate check and the save are separate calls, so two
        concurrent uploads of the same file can both get through.

        Raises:
            DuplicateDocumentError: an active document with the same content exists
        """
        start_time = time.time()
        file_hash = calculate_hash(data)

        existing = await self.document_repository.find_by_hash(report_id, file_hash)
        if existing is not None:
            service_logger.warning("Duplicate upload rejected", extra={
                "report_id": report_id,
                "file_hash": file_hash,
                "existing_id": existing.id
            })
            raise DuplicateDocumentError(report_id, file_hash, existing.id)

        storage_path = await self.storage_service.save_file(report_id, file_hash, data, filename)
        parsed_content = await self._parse(data, filename)

        now = utcnow()
        document = Document(
            id=str(uuid4()),
            report_id=report_id,
            filename=filename,
            file_hash=file_hash,
            storage_path=storage_path,
            parsed_content=parsed_content,
            notes="",
            created_at=now,
            updated_at=now,
        )
        saved = await self.document_repository.save(document)

        service_logger.info("Uploaded document", extra={
            "document_id": saved.id,
            "report_id": report_id,
            "parsed": parsed_content is not None,
            "execution_time_ms": round((time.time() - start_time) * 1000, 2)
        })
        return saved

    async def get_document(self, document_id: str) -> Document:
        document = await self.document_repository.find_by_id(document_id)
        if document is None or is_deleted(document):
            raise DocumentNotFoundError(document_id)
        return document

    async def list_documents(self, report_id: str) -> List[Document]:
        return await self.document_repository.find_by_report_id(report_id)

    async def update_document(
            self,
            document_id: str,
            filename: Optional[str] = None,
            notes: Optional[str] = None
    ) -> Document:
        document = await self.get_document(document_id)

        if filename is not None:
            document.filename = filename
        if notes is not None:
            document.notes = notes
        document.updated_at = utcnow()

        return await self.document_repository.save(document)

    async def delete_document(self, document_id: str) -> None:
        """Remove the stored file, then soft delete the record"""
        document = await self.get_document(document_id)
        await self.storage_service.delete_file(document.storage_path)
        await self.document_repository.delete(document.id)
        service_logger.info("Deleted document", extra={"document_id": document_id})

    async def search_documents(self, report_id: str, query: str) -> List[Document]:
        return await self.document_repository.search(report_id, query)

    async def reparse_document(self, document_id: str) -> Document:
        """
        Run the parser again on the stored file and record the result.

        Raises:
            DocumentNotFoundError: the document is missing or soft-deleted
            StoredFileNotFoundError: the record is active but its file is gone
        """
        document = await self.get_document(document_id)
        try:
            data = await self.storage_service.get_file(document.storage_path)
        except FileNotFoundError:
            service_logger.error("Stored file missing for active document", extra={
                "document_id": document_id,
                "storage_path": document.storage_path
            })
            raise StoredFileNotFoundError(document_id, document.storage_path)

        document.parsed_content = await self._parse(data, document.filename)
        document.updated_at = utcnow()
        return await self.document_repository.save(document)

    async def _parse(self, data: bytes, filename: str) -> Optional[str]:
        """Parse content; failures and empty output both become None"""
        try:
            content = await self.parser_service.parse(data, filename)
        except ParsingError as e:
            service_logger.warning("Parsing failed, continuing without content", extra={
                "file_name": filename,
                "error": e.message
            })
            return None
        return content or None
