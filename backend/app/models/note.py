"""
Notes API — Note SQLAlchemy Model
===================================

What:  ORM model representing the `notes` table.
Why:   Maps Python objects to database rows for type-safe database operations.
How:   Inherits from SQLAlchemy's DeclarativeBase; Alembic reads this for migrations.
Who:   Used by NoteService for CRUD operations and by Alembic for schema management.

Table Design Rationale:
    - UUID primary key: assigned by the store layer, never by the client
    - title: UNIQUE constraint `uq_notes_title`; the database, not the
      application, guarantees that two concurrent creates cannot both win
    - content: TEXT, no length limit
    - created / changed: UTC with timezone; changed is refreshed on update
"""

import uuid
from datetime import datetime, timezone

from sqlalchemy import DateTime, Text, UniqueConstraint, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from app.database import Base


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Note(Base):
    """
    A titled note.

    Lifecycle:
        1. Created by POST /api/note (id, created, changed assigned here)
        2. Overwritten by PUT /api/note/{id} (title, content, changed)
        3. Hard-deleted by DELETE /api/note/{id}

    Query Patterns:
        - Get by id:    SELECT ... WHERE id = :uuid       (primary key)
        - Get by title: SELECT ... WHERE title = :title   (unique index)
        - List:         SELECT ... ORDER BY created, id
    """

    __tablename__ = "notes"

    # Generic Uuid type: native UUID on PostgreSQL, CHAR(32) on SQLite
    id: Mapped[uuid.UUID] = mapped_column(
        Uuid(as_uuid=True),
        primary_key=True,
        default=uuid.uuid4,
    )

    # Exact, case-sensitive equality: '=' and UNIQUE use the same collation
    title: Mapped[str] = mapped_column(Text, nullable=False)

    content: Mapped[str] = mapped_column(Text, nullable=False)

    created: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
    )

    # Same default callable as created; NoteService passes one shared value
    # on insert so that created == changed holds exactly.
    changed: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
    )

    __table_args__ = (
        UniqueConstraint("title", name="uq_notes_title"),
    )

    def __repr__(self) -> str:
        """Developer-friendly string representation for debugging."""
        return f"<Note(id={self.id}, title={self.title!r}, changed='{self.changed}')>"
