"""
SQLAlchemy implementations of the report and document repositories.

Both adapters share one base class: the active-only predicate comes from
``SoftDeleteMixin.active()``, ``save`` is a single upsert built from two
explicit field sets, and ``delete`` is a soft delete that never raises.
"""

import sqlite3
from datetime import datetime, timezone
from typing import List, Optional

from sqlalchemy import String, event, func, or_, select, update
from sqlalchemy.dialects import postgresql, sqlite
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from ..domain.entities import Document, Report, utcnow
from ..models import DocumentRecord, ReportRecord
from ..utils.logging import db_logger
from .base import DocumentRepository, ReportRepository

# Dialects with a native INSERT ... ON CONFLICT DO UPDATE
UPSERT_INSERTS = {
    "sqlite": sqlite.insert,
    "postgresql": postgresql.insert,
}

TIMESTAMP_FIELDS = ("created_at", "updated_at", "deleted_at")


def as_utc(value: Optional[datetime]) -> Optional[datetime]:
    """SQLite drops tzinfo on the way back; timestamps are always stored as UTC."""
    if value is not None and value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


def _casefold(value: Optional[str]) -> Optional[str]:
    return value.casefold() if value is not None else None


@event.listens_for(Engine, "connect")
def register_sqlite_casefold(dbapi_connection, connection_record):
    """SQLite's lower() only folds ASCII, so search needs a Unicode-aware fold"""
    if isinstance(dbapi_connection, sqlite3.Connection):
        dbapi_connection.create_function("casefold", 1, _casefold, deterministic=True)


class SqlAlchemyRepository:
    """
    Shared query building for soft-deletable tables.

    Subclasses declare:
        model: ORM class mixing in SoftDeleteMixin
        entity: domain dataclass the rows map to
        owner_column: column that scopes list and search queries
        CREATE_FIELDS: every column written when the row is inserted
        UPDATE_FIELDS: the subset an existing row may have rewritten
        SEARCH_FIELDS: text columns matched by search
    """

    model = None
    entity = None
    owner_column: str = ""
    CREATE_FIELDS: tuple = ()
    UPDATE_FIELDS: tuple = ()
    SEARCH_FIELDS: tuple = ()

    def __init__(self, db: Session):
        self.db = db

    def _to_entity(self, record):
        if record is None:
            return None
        values = {name: getattr(record, name) for name in self.CREATE_FIELDS}
        for name in TIMESTAMP_FIELDS:
            values[name] = as_utc(values[name])
        return self.entity(**values)

    def _owned_by(self, owner_id: str, include_deleted: bool = False):
        stmt = select(self.model).where(getattr(self.model, self.owner_column) == owner_id)
        if not include_deleted:
            stmt = stmt.where(self.model.active())
        return stmt

    def _newest_first(self, stmt):
        return stmt.order_by(self.model.created_at.desc())

    def _fetch_all(self, stmt) -> list:
        return [self._to_entity(record) for record in self.db.scalars(self._newest_first(stmt)).all()]

    def _get(self, entity_id: str):
        return self._to_entity(self.db.get(self.model, entity_id, populate_existing=True))

    def _upsert(self, entity):
        create_values = {name: getattr(entity, name) for name in self.CREATE_FIELDS}
        update_values = {name: create_values[name] for name in self.UPDATE_FIELDS}

        dialect = self._dialect()
        insert = UPSERT_INSERTS.get(dialect)
        try:
            if insert is not None:
                stmt = insert(self.model).values(**create_values)
                stmt = stmt.on_conflict_do_update(index_elements=["id"], set_=update_values)
                self.db.execute(stmt)
            else:
                record = self.db.get(self.model, entity.id)
                if record is None:
                    self.db.add(self.model(**create_values))
                else:
                    for name, value in update_values.items():
                        setattr(record, name, value)
            self.db.commit()
        except SQLAlchemyError as e:
            db_logger.error("Failed to save record", extra={
                "table": self.model.__tablename__,
                "record_id": entity.id,
                "error": str(e)
            })
            self.db.rollback()
            raise

        db_logger.debug("Saved record", extra={
            "table": self.model.__tablename__,
            "record_id": entity.id,
            "dialect": dialect
        })
        return self._get(entity.id)

    def _soft_delete(self, entity_id: str) -> None:
        now = utcnow()
        try:
            result = self.db.execute(
                update(self.model)
                .where(self.model.id == entity_id)
                .values(deleted_at=now, updated_at=now)
            )
            self.db.commit()
        except SQLAlchemyError as e:
            # Swallowed so a missing row is a no-op; this also hides real store outages
            self.db.rollback()
            db_logger.warning("Soft delete failed, ignoring", extra={
                "table": self.model.__tablename__,
                "record_id": entity_id,
                "error": str(e)
            })
            return

        if not result.rowcount:
            db_logger.debug("Soft delete matched no rows", extra={
                "table": self.model.__tablename__,
                "record_id": entity_id
            })

    def _dialect(self) -> str:
        return self.db.get_bind().dialect.name

    def _contains_ignoring_case(self, column, query: str):
        if self._dialect() == "sqlite":
            return func.casefold(column, type_=String).contains(query.casefold(), autoescape=True)
        return column.icontains(query, autoescape=True)

    def _search(self, owner_id: str, query: str) -> list:
        conditions = [
            self._contains_ignoring_case(getattr(self.model, name), query)
            for name in self.SEARCH_FIELDS
        ]
        return self._fetch_all(self._owned_by(owner_id).where(or_(*conditions)))


class SqlAlchemyReportRepository(SqlAlchemyRepository, ReportRepository):
    """Report persistence on a relational store."""

    model = ReportRecord
    entity = Report
    owner_column = "user_id"
    CREATE_FIELDS = ("id", "user_id", "title", "description", "created_at", "updated_at", "deleted_at")
    UPDATE_FIELDS = ("title", "description", "updated_at", "deleted_at")
    SEARCH_FIELDS = ("title", "description")

    async def find_by_id(self, report_id: str) -> Optional[Report]:
        return self._get(report_id)

    async def find_by_user_id(self, user_id: str, include_deleted: bool = False) -> List[Report]:
        return self._fetch_all(self._owned_by(user_id, include_deleted))

    async def save(self, report: Report) -> Report:
        return self._upsert(report)

    async def delete(self, report_id: str) -> None:
        self._soft_delete(report_id)

    async def search(self, user_id: str, query: str) -> List[Report]:
        return self._search(user_id, query)


class SqlAlchemyDocumentRepository(SqlAlchemyRepository, DocumentRepository):
    """Document persistence on a relational store."""

    model = DocumentRecord
    entity = Document
    owner_column = "report_id"
    CREATE_FIELDS = (
        "id", "report_id", "filename", "file_hash", "storage_path",
        "parsed_content", "notes", "created_at", "updated_at", "deleted_at",
    )
    UPDATE_FIELDS = ("filename", "parsed_content", "notes", "updated_at", "deleted_at")
    SEARCH_FIELDS = ("filename", "notes", "parsed_content")

    async def find_by_id(self, document_id: str) -> Optional[Document]:
        return self._get(document_id)

    async def find_by_report_id(self, report_id: str, include_deleted: bool = False) -> List[Document]:
        return self._fetch_all(self._owned_by(report_id, include_deleted))

    async def find_by_hash(self, report_id: str, file_hash: str) -> Optional[Document]:
        stmt = self._owned_by(report_id).where(DocumentRecord.file_hash == file_hash)
        return self._to_entity(self.db.scalars(stmt).first())

    async def save(self, document: Document) -> Document:
        return self._upsert(document)

    async def delete(self, document_id: str) -> None:
        self._soft_delete(document_id)

    async def search(self, report_id: str, query: str) -> List[Document]:
        return self._search(report_id, query)
