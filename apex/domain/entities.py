"""
Domain entities for reports and documents.

Entities are plain records: constructing one enforces nothing. The
helpers below are advisory and must be called explicitly by whoever
needs the policy.
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Optional, Union

from .exceptions import ValidationError

MAX_TITLE_LENGTH = 200


@dataclass
class Report:
    """A top-level container owned by a user."""

    id: str
    user_id: str
    title: str
    created_at: datetime
    updated_at: datetime
    description: Optional[str] = None
    deleted_at: Optional[datetime] = None


@dataclass
class Document:
    """A file attached to exactly one report."""

    id: str
    report_id: str
    filename: str
    file_hash: str
    storage_path: str
    created_at: datetime
    updated_at: datetime
    parsed_content: Optional[str] = None
    notes: str = field(default="")
    deleted_at: Optional[datetime] = None


Entity = Union[Report, Document]


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def is_deleted(entity: Entity) -> bool:
    return entity.deleted_at is not None


def is_active(entity: Entity) -> bool:
    return not is_deleted(entity)


def has_been_parsed(document: Document) -> bool:
    """True when parsing produced non-empty text."""
    return bool(document.parsed_content)


def has_consistent_timestamps(entity: Entity) -> bool:
    """A deletion can never precede creation."""
    return entity.deleted_at is None or entity.deleted_at >= entity.created_at


def is_valid_title(title: Optional[str], max_length: int = MAX_TITLE_LENGTH) -> bool:
    if title is None:
        return False
    trimmed = title.strip()
    return 0 < len(trimmed) <= max_length


def validate_title(title: Optional[str], max_length: int = MAX_TITLE_LENGTH) -> str:
    """
    Normalize a report title.

    Returns:
        The title with surrounding whitespace removed

    Raises:
        ValidationError: if the title is empty or longer than max_length
    """
    trimmed = (title or "").strip()
    if not trimmed:
        raise ValidationError("title", "Report title cannot be empty")
    if len(trimmed) > max_length:
        raise ValidationError(
            "title",
            f"Report title too long (max {max_length} characters)",
        )
    return trimmed
