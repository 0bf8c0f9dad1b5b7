"""
Notes API — Note Service (Business Logic)
===========================================

What:  The six note operations: list, get by id, get by title, create,
       update, delete.
Why:   Keeps persistence and not-found/conflict decisions out of the routes.
How:   Each method runs one statement against the session it is given and
       returns a NoteOut (or nothing) or raises a typed exception.
Who:   Called by route handlers in app/routes/notes.py.

Uniqueness:
    Titles are protected by the `uq_notes_title` constraint. create_note()
    and update_note() simply write and commit; when the database rejects
    the write, the service checks whether the rejected title is now taken
    and, if so, raises ConflictError. There is no check-then-insert window.

Design Decision:
    NoteService is stateless — it receives the db session for each call.
    This enables:
    1. Easy testing: Mock the session independently
    2. Transaction safety: Each request gets its own session
    3. No shared mutable state between concurrent requests
"""

import logging
from typing import List, Optional
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from app.exceptions import ConflictError, DatabaseError, NotFoundError
from app.models.note import Note, utcnow
from app.schemas.note import NoteOut, NoteWrite

logger = logging.getLogger(__name__)


def parse_note_id(raw: str) -> Optional[UUID]:
    """Parse a path identifier; None when it is not a well-formed UUID."""
    try:
        return UUID(raw)
    except (ValueError, AttributeError, TypeError):
        return None


class NoteService:
    """
    Business logic layer for note operations.

    Error Handling Strategy:
        Missing rows → NotFoundError("Note not found")
        Empty collection → NotFoundError("No notes found")
        Title taken → ConflictError
        Any other SQLAlchemyError → DatabaseError (generic 500 to the client)
    """

    async def list_notes(self, db: AsyncSession) -> List[NoteOut]:
        """
        Return every note, oldest first.

        Raises:
            NotFoundError: The collection is empty. An empty list is treated
                as absence, not as an empty success.
        """
        try:
            result = await db.execute(select(Note).order_by(Note.created, Note.id))
            notes = list(result.scalars().all())
        except SQLAlchemyError as e:
            logger.error("Database error listing notes: %s", str(e), exc_info=True)
            raise DatabaseError(
                message="Could not retrieve notes",
                context={"error_type": type(e).__name__},
            )

        if not notes:
            raise NotFoundError(message="No notes found")
        return [NoteOut.model_validate(note) for note in notes]

    async def get_note(self, db: AsyncSession, note_id: str) -> NoteOut:
        """
        Retrieve a single note by its identifier.

        A malformed identifier never reaches the database; it is reported
        as not found, exactly like an unknown one.
        """
        note = await self._load(db, note_id)
        return NoteOut.model_validate(note)

    async def get_note_by_title(self, db: AsyncSession, title: str) -> NoteOut:
        """Retrieve the note whose title equals `title` exactly (case-sensitive)."""
        try:
            note = await self._find_by_title(db, title)
        except SQLAlchemyError as e:
            logger.error("Database error fetching note by title: %s", str(e))
            raise DatabaseError(
                message="Could not retrieve the note",
                context={"title": title},
            )
        if note is None:
            raise NotFoundError(context={"title": title})
        return NoteOut.model_validate(note)

    async def create_note(self, db: AsyncSession, payload: NoteWrite) -> NoteOut:
        """
        Insert a new note; id, created and changed are assigned here.

        Raises:
            ConflictError: Another note already has this title.
            DatabaseError: Any other store failure (e.g. a missing field).
        """
        now = utcnow()
        note = Note(
            title=payload.title,
            content=payload.content,
            created=now,
            changed=now,
        )
        db.add(note)
        await self._commit(db, payload.title, operation="create")

        logger.info("Note created: %s", note.id)
        return NoteOut.model_validate(note)

    async def update_note(self, db: AsyncSession, note_id: str, payload: NoteWrite) -> None:
        """
        Overwrite title and content and refresh `changed`.

        id and created are left untouched.

        Raises:
            NotFoundError: No note has this id (or the id is malformed).
            ConflictError: The new title belongs to a different note.
        """
        note = await self._load(db, note_id)
        note.title = payload.title
        note.content = payload.content
        note.changed = utcnow()
        await self._commit(db, payload.title, operation="update", exclude_id=note.id)

        logger.info("Note updated: %s", note.id)

    async def delete_note(self, db: AsyncSession, note_id: str) -> None:
        """Permanently remove a note. Raises NotFoundError when it does not exist."""
        note = await self._load(db, note_id)
        try:
            await db.delete(note)
            await db.commit()
        except SQLAlchemyError as e:
            logger.error("Database error deleting note %s: %s", note_id, str(e))
            raise DatabaseError(
                message="Could not delete the note",
                context={"note_id": note_id},
            )

        logger.info("Note deleted: %s", note.id)

    # ── Internal helpers ──────────────────────────────────────────────────

    async def _load(self, db: AsyncSession, note_id: str) -> Note:
        parsed = parse_note_id(note_id)
        if parsed is None:
            raise NotFoundError(context={"note_id": note_id, "reason": "malformed"})

        try:
            note = await db.get(Note, parsed)
        except SQLAlchemyError as e:
            logger.error("Database error fetching note %s: %s", note_id, str(e))
            raise DatabaseError(
                message="Could not retrieve the note",
                context={"note_id": note_id},
            )

        if note is None:
            raise NotFoundError(context={"note_id": note_id})
        return note

    async def _find_by_title(self, db: AsyncSession, title: str) -> Optional[Note]:
        result = await db.execute(select(Note).where(Note.title == title))
        return result.scalar_one_or_none()

    async def _commit(
        self,
        db: AsyncSession,
        title: Optional[str],
        operation: str,
        exclude_id: Optional[UUID] = None,
    ) -> None:
        """
        Flush and commit pending writes, translating a unique-title violation.

        The commit happens here, before the route builds its response, so a
        201/204 is only ever sent for a write that is already durable.

        An IntegrityError is a conflict only if, after rolling back, some
        other note really holds the title; a NOT NULL failure on a missing
        field is a plain DatabaseError.
        """
        try:
            await db.flush()
            await db.commit()
        except IntegrityError as e:
            await db.rollback()
            if title is not None and await self._title_taken(db, title, exclude_id):
                logger.info("Rejected %s: title %r already exists", operation, title)
                raise ConflictError(context={"title": title})
            logger.error("Integrity error on note %s: %s", operation, str(e))
            raise DatabaseError(
                message=f"Could not {operation} the note",
                context={"error_type": type(e).__name__},
            )
        except SQLAlchemyError as e:
            logger.error("Database error on note %s: %s", operation, str(e), exc_info=True)
            raise DatabaseError(
                message=f"Could not {operation} the note",
                context={"error_type": type(e).__name__},
            )

    async def _title_taken(
        self,
        db: AsyncSession,
        title: str,
        exclude_id: Optional[UUID],
    ) -> bool:
        try:
            existing = await self._find_by_title(db, title)
        except SQLAlchemyError:
            return False
        return existing is not None and existing.id != exclude_id


# Stateless; one instance shared by all requests
note_service = NoteService()
