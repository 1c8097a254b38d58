"""
In-memory implementations of the repository interfaces.

Follow the same filtering, ordering and field-protection rules as the
SQLAlchemy adapters. Entities are copied on the way in and out so
callers cannot mutate stored state by accident.
"""

from dataclasses import replace
from typing import Dict, List, Optional

from ..domain.entities import Document, Report, is_active, utcnow
from .base import DocumentRepository, ReportRepository
from .sql_repository import SqlAlchemyDocumentRepository, SqlAlchemyReportRepository


class InMemoryRepository:
    """Dict-backed store counting inserts and updates performed by save."""

    owner_field: str = ""
    UPDATE_FIELDS: tuple = ()
    SEARCH_FIELDS: tuple = ()

    def __init__(self):
        self.records: Dict[str, object] = {}
        self.inserts = 0
        self.updates = 0

    def _get(self, entity_id: str):
        record = self.records.get(entity_id)
        return replace(record) if record is not None else None

    def _owned_by(self, owner_id: str, include_deleted: bool = False) -> list:
        matches = [
            record for record in self.records.values()
            if getattr(record, self.owner_field) == owner_id
            and (include_deleted or is_active(record))
        ]
        matches.sort(key=lambda record: record.created_at, reverse=True)
        return [replace(record) for record in matches]

    def _upsert(self, entity):
        existing = self.records.get(entity.id)
        if existing is None:
            self.records[entity.id] = replace(entity)
            self.inserts += 1
        else:
            changes = {name: getattr(entity, name) for name in self.UPDATE_FIELDS}
            self.records[entity.id] = replace(existing, **changes)
            self.updates += 1
        return self._get(entity.id)

    def _soft_delete(self, entity_id: str) -> None:
        existing = self.records.get(entity_id)
        if existing is None:
            return
        now = utcnow()
        self.records[entity_id] = replace(existing, deleted_at=now, updated_at=now)

    def _search(self, owner_id: str, query: str) -> list:
        needle = query.casefold()
        return [
            record for record in self._owned_by(owner_id)
            if any(
                needle in getattr(record, name).casefold()
                for name in self.SEARCH_FIELDS
                if getattr(record, name) is not None
            )
        ]


class InMemoryReportRepository(InMemoryRepository, ReportRepository):
    owner_field = "user_id"
    UPDATE_FIELDS = SqlAlchemyReportRepository.UPDATE_FIELDS
    SEARCH_FIELDS = SqlAlchemyReportRepository.SEARCH_FIELDS

    async def find_by_id(self, report_id: str) -> Optional[Report]:
        return self._get(report_id)

    async def find_by_user_id(self, user_id: str, include_deleted: bool = False) -> List[Report]:
        return self._owned_by(user_id, include_deleted)

    async def save(self, report: Report) -> Report:
        return self._upsert(report)

    async def delete(self, report_id: str) -> None:
        self._soft_delete(report_id)

    async def search(self, user_id: str, query: str) -> List[Report]:
        return self._search(user_id, query)


class InMemoryDocumentRepository(InMemoryRepository, DocumentRepository):
    owner_field = "report_id"
    UPDATE_FIELDS = SqlAlchemyDocumentRepository.UPDATE_FIELDS
    SEARCH_FIELDS = SqlAlchemyDocumentRepository.SEARCH_FIELDS

    async def find_by_id(self, document_id: str) -> Optional[Document]:
        return self._get(document_id)

    async def find_by_report_id(self, report_id: str, include_deleted: bool = False) -> List[Document]:
        return self._owned_by(report_id, include_deleted)

    async def find_by_hash(self, report_id: str, file_hash: str) -> Optional[Document]:
        for document in self._owned_by(report_id):
            if document.file_hash == file_hash:
                return document
        return None

    async def save(self, document: Document) -> Document:
        return self._upsert(document)

    async def delete(self, document_id: str) -> None:
        self._soft_delete(document_id)

    async def search(self, report_id: str, query: str) -> List[Document]:
        return self._search(report_id, query)
