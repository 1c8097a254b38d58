"""
Repository interfaces (Abstract Base Classes).

Define the contract for report and document persistence independent of
the underlying storage mechanism. Lookups return ``None`` when nothing
matches; store failures propagate untouched except from ``delete``.
"""

from abc import ABC, abstractmethod
from typing import List, Optional

from ..domain.entities import Document, Report


class ReportRepository(ABC):
    """Abstract repository interface for reports."""

    @abstractmethod
    async def find_by_id(self, report_id: str) -> Optional[Report]:
        """
        Find a report by id, whether or not it has been soft-deleted.

        Args:
            report_id: Report identifier

        Returns:
            Report if a record exists, None otherwise
        """
        pass

    @abstractmethod
    async def find_by_user_id(self, user_id: str, include_deleted: bool = False) -> List[Report]:
        """
        List reports owned by a user, most recently created first.

        Args:
            user_id: Owner identifier
            include_deleted: When True the soft-delete filter is dropped entirely

        Returns:
            List of reports (empty if none found)
        """
        pass

    @abstractmethod
    async def save(self, report: Report) -> Report:
        """
        Insert the report, or update its mutable fields if the id exists.

        Identity fields (id, user_id) are never rewritten by an update.

        Returns:
            The report as persisted
        """
        pass

    @abstractmethod
    async def delete(self, report_id: str) -> None:
        """
        Soft delete a report. A missing id is a no-op, not an error.
        """
        pass

    @abstractmethod
    async def search(self, user_id: str, query: str) -> List[Report]:
        """
        Case-insensitive substring search over title and description.

        Only active reports owned by the user are returned, most recent first.
        """
        pass


class DocumentRepository(ABC):
    """Abstract repository interface for documents."""

    @abstractmethod
    async def find_by_id(self, document_id: str) -> Optional[Document]:
        """
        Find a document by id, whether or not it has been soft-deleted.
        """
        pass

    @abstractmethod
    async def find_by_report_id(self, report_id: str, include_deleted: bool = False) -> List[Document]:
        """
        List documents attached to a report, most recently created first.

        Args:
            report_id: Owning report identifier
            include_deleted: When True the soft-delete filter is dropped entirely
        """
        pass

    @abstractmethod
    async def find_by_hash(self, report_id: str, file_hash: str) -> Optional[Document]:
        """
        Find an active document with the given content hash in a report.

        Used for deduplication before upload. Soft-deleted documents never
        match, so deleting a document frees its hash for reuse.
        """
        pass

    @abstractmethod
    async def save(self, document: Document) -> Document:
        """
        Insert the document, or update its mutable fields if the id exists.

        Identity fields (id, report_id, file_hash, storage_path) are never
        rewritten by an update.
        """
        pass

    @abstractmethod
    async def delete(self, document_id: str) -> None:
        """
        Soft delete a document. A missing id is a no-op, not an error.
        """
        pass

    @abstractmethod
    async def search(self, report_id: str, query: str) -> List[Document]:
        """
        Case-insensitive substring search over filename, notes and parsed content.

        Only active documents in the report are returned, most recent first.
        """
        pass
