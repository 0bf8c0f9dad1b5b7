"""
Notes API — Note Service Unit Tests
=====================================

What:  Tests for NoteService business logic.
How:   Uses mock DB sessions (no real DB); the endpoint tests in
       test_notes_api.py cover the same operations against SQLite.

What we test:
    ✅ Malformed ids are rejected before any query is issued
    ✅ Missing rows raise NotFoundError
    ✅ Empty listing raises NotFoundError("No notes found")
    ✅ IntegrityError becomes ConflictError only when the title is taken
    ✅ Other SQLAlchemy errors become DatabaseError
"""

from unittest.mock import AsyncMock, MagicMock
from uuid import uuid4

import pytest
from sqlalchemy.exc import IntegrityError, OperationalError

from app.exceptions import ConflictError, DatabaseError, NotFoundError
from app.models.note import Note
from app.schemas.note import NoteWrite
from app.services.note_service import NoteService, parse_note_id


def _integrity_error() -> IntegrityError:
    return IntegrityError("INSERT INTO notes ...", {}, Exception("constraint failed"))


def _scalar_result(value):
    result = MagicMock()
    result.scalar_one_or_none.return_value = value
    return result


class TestParseNoteId:
    """Tests for path identifier parsing."""

    def test_valid_uuid(self):
        note_id = uuid4()
        assert parse_note_id(str(note_id)) == note_id

    @pytest.mark.parametrize("raw", ["", "abc", "1234", "6f1c2b9e-4a8d-4c55-9b1e"])
    def test_malformed(self, raw):
        assert parse_note_id(raw) is None


class TestNoteServiceGet:
    """Tests for get_note / get_note_by_title."""

    def setup_method(self):
        self.service = NoteService()

    @pytest.mark.asyncio
    async def test_get_note_found(self, mock_db_session, sample_note_data):
        mock_db_session.get.return_value = Note(**sample_note_data)

        result = await self.service.get_note(mock_db_session, str(sample_note_data["id"]))

        assert result.id == sample_note_data["id"]
        assert result.title == sample_note_data["title"]
        assert result.created == result.changed

    @pytest.mark.asyncio
    async def test_get_note_not_found(self, mock_db_session):
        mock_db_session.get.return_value = None

        with pytest.raises(NotFoundError) as exc_info:
            await self.service.get_note(mock_db_session, str(uuid4()))

        assert exc_info.value.message == "Note not found"

    @pytest.mark.asyncio
    async def test_malformed_id_skips_database(self, mock_db_session):
        with pytest.raises(NotFoundError):
            await self.service.get_note(mock_db_session, "not-a-uuid")

        mock_db_session.get.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_database_failure_is_wrapped(self, mock_db_session):
        mock_db_session.get.side_effect = OperationalError("SELECT", {}, Exception("gone"))

        with pytest.raises(DatabaseError):
            await self.service.get_note(mock_db_session, str(uuid4()))

    @pytest.mark.asyncio
    async def test_get_by_title(self, mock_db_session, sample_note_data):
        mock_db_session.execute.return_value = _scalar_result(Note(**sample_note_data))

        result = await self.service.get_note_by_title(mock_db_session, "Groceries")

        assert result.title == "Groceries"

    @pytest.mark.asyncio
    async def test_get_by_title_not_found(self, mock_db_session):
        mock_db_session.execute.return_value = _scalar_result(None)

        with pytest.raises(NotFoundError):
            await self.service.get_note_by_title(mock_db_session, "missing")


class TestNoteServiceList:
    """Tests for list_notes."""

    def setup_method(self):
        self.service = NoteService()

    @pytest.mark.asyncio
    async def test_list_notes_empty(self, mock_db_session):
        """An empty collection is reported as absence, not as []."""
        result = MagicMock()
        result.scalars.return_value.all.return_value = []
        mock_db_session.execute.return_value = result

        with pytest.raises(NotFoundError) as exc_info:
            await self.service.list_notes(mock_db_session)

        assert exc_info.value.message == "No notes found"

    @pytest.mark.asyncio
    async def test_list_notes_with_results(self, mock_db_session, sample_note_data):
        notes = []
        for i in range(3):
            data = dict(sample_note_data, id=uuid4(), title=f"Note {i}")
            notes.append(Note(**data))
        result = MagicMock()
        result.scalars.return_value.all.return_value = notes
        mock_db_session.execute.return_value = result

        listed = await self.service.list_notes(mock_db_session)

        assert [note.title for note in listed] == ["Note 0", "Note 1", "Note 2"]


class TestNoteServiceWrite:
    """Tests for create_note / update_note / delete_note."""

    def setup_method(self):
        self.service = NoteService()

    @pytest.mark.asyncio
    async def test_create_sets_equal_timestamps(self, mock_db_session):
        async def assign_id():
            added = mock_db_session.add.call_args.args[0]
            added.id = uuid4()
        mock_db_session.flush = AsyncMock(side_effect=assign_id)

        result = await self.service.create_note(
            mock_db_session, NoteWrite(title="Todo", content="Write tests")
        )

        assert result.title == "Todo"
        assert result.created == result.changed
        mock_db_session.add.assert_called_once()
        mock_db_session.commit.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_create_duplicate_title_conflicts(self, mock_db_session, sample_note_data):
        mock_db_session.flush.side_effect = _integrity_error()
        mock_db_session.execute.return_value = _scalar_result(Note(**sample_note_data))

        with pytest.raises(ConflictError) as exc_info:
            await self.service.create_note(
                mock_db_session, NoteWrite(title="Groceries", content="again")
            )

        assert exc_info.value.message == "Note with this title already exists"
        mock_db_session.rollback.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_create_missing_field_is_database_error(self, mock_db_session):
        mock_db_session.flush.side_effect = _integrity_error()

        with pytest.raises(DatabaseError):
            await self.service.create_note(mock_db_session, NoteWrite(title=None, content="x"))

        mock_db_session.execute.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_create_integrity_error_without_existing_title(self, mock_db_session):
        mock_db_session.flush.side_effect = _integrity_error()
        mock_db_session.execute.return_value = _scalar_result(None)

        with pytest.raises(DatabaseError):
            await self.service.create_note(mock_db_session, NoteWrite(title="t", content=None))

    @pytest.mark.asyncio
    async def test_update_overwrites_and_refreshes_changed(self, mock_db_session, sample_note_data):
        note = Note(**sample_note_data)
        mock_db_session.get.return_value = note
        original_created = note.created

        await self.service.update_note(
            mock_db_session,
            str(sample_note_data["id"]),
            NoteWrite(title="Renamed", content="New body"),
        )

        assert note.title == "Renamed"
        assert note.content == "New body"
        assert note.id == sample_note_data["id"]
        assert note.created == original_created
        assert note.changed >= original_created
        mock_db_session.flush.assert_awaited_once()
        mock_db_session.commit.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_update_to_own_title_is_not_conflict(self, mock_db_session, sample_note_data):
        note = Note(**sample_note_data)
        mock_db_session.get.return_value = note
        mock_db_session.flush.side_effect = _integrity_error()
        mock_db_session.execute.return_value = _scalar_result(note)

        with pytest.raises(DatabaseError):
            await self.service.update_note(
                mock_db_session, str(note.id), NoteWrite(title=note.title, content=None)
            )

    @pytest.mark.asyncio
    async def test_update_missing_note(self, mock_db_session):
        mock_db_session.get.return_value = None

        with pytest.raises(NotFoundError):
            await self.service.update_note(
                mock_db_session, str(uuid4()), NoteWrite(title="a", content="b")
            )

        mock_db_session.flush.assert_not_awaited()
        mock_db_session.commit.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_commit_failure_is_database_error(self, mock_db_session):
        mock_db_session.commit.side_effect = OperationalError("COMMIT", {}, Exception("disk I/O error"))

        with pytest.raises(DatabaseError):
            await self.service.create_note(mock_db_session, NoteWrite(title="t", content="c"))

    @pytest.mark.asyncio
    async def test_delete(self, mock_db_session, sample_note_data):
        note = Note(**sample_note_data)
        mock_db_session.get.return_value = note

        await self.service.delete_note(mock_db_session, str(note.id))

        mock_db_session.delete.assert_awaited_once_with(note)
        mock_db_session.commit.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_delete_missing_note(self, mock_db_session):
        mock_db_session.get.return_value = None

        with pytest.raises(NotFoundError):
            await self.service.delete_note(mock_db_session, str(uuid4()))

        mock_db_session.delete.assert_not_awaited()
