"""
Notes API — Notes Route Handlers
==================================

What:  The six note endpoints.
Why:   Maps HTTP verbs and paths onto NoteService operations.
How:   Extracts path parameters and body, delegates to NoteService, wraps the
       result in the success envelope with the status for that operation.
       NotFoundError / ConflictError raised by the service are rendered by
       the handlers registered in main.py.

Route Inventory:
    GET    /api/notes              200 list      | 404 "No notes found"
    GET    /api/note/{id}          200 note      | 404 "Note not found"
    GET    /api/note/read/{title}  200 note      | 404 "Note not found"
    POST   /api/note               201 note      | 409 title exists
    PUT    /api/note/{id}          204           | 404, 409
    DELETE /api/note/{id}          204           | 404
"""

import logging

from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.database import get_db_session
from app.schemas.note import (
    ErrorEnvelope,
    NoteEnvelope,
    NoteListEnvelope,
    NoteWrite,
)
from app.services.note_service import note_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["Notes"])

NOT_FOUND = {404: {"description": "Note not found", "model": ErrorEnvelope}}
CONFLICT = {409: {"description": "Title already exists", "model": ErrorEnvelope}}
SERVER_ERROR = {500: {"description": "Server error", "model": ErrorEnvelope}}


@router.get(
    "/notes",
    response_model=NoteListEnvelope,
    responses={
        404: {"description": "No notes exist", "model": ErrorEnvelope},
        **SERVER_ERROR,
    },
    summary="List all notes",
)
async def list_notes(
    db: AsyncSession = Depends(get_db_session),
) -> NoteListEnvelope:
    """
    Return every note with its count.

    An empty collection answers 404 "No notes found" rather than an empty
    200; existing clients depend on that.
    """
    notes = await note_service.list_notes(db)
    return NoteListEnvelope(count=len(notes), data=notes)


@router.get(
    "/note/read/{title}",
    response_model=NoteEnvelope,
    responses={**NOT_FOUND, **SERVER_ERROR},
    summary="Get a note by its exact title",
)
async def get_note_by_title(
    title: str,
    db: AsyncSession = Depends(get_db_session),
) -> NoteEnvelope:
    note = await note_service.get_note_by_title(db, title)
    return NoteEnvelope(data=note)


@router.get(
    "/note/{note_id}",
    response_model=NoteEnvelope,
    responses={**NOT_FOUND, **SERVER_ERROR},
    summary="Get a note by ID",
)
async def get_note(
    note_id: str,
    db: AsyncSession = Depends(get_db_session),
) -> NoteEnvelope:
    """
    Args:
        note_id: Taken as a plain string, not a UUID-typed parameter, so that
                 a malformed id answers 404 instead of FastAPI's 422.
    """
    note = await note_service.get_note(db, note_id)
    return NoteEnvelope(data=note)


@router.post(
    "/note",
    response_model=NoteEnvelope,
    status_code=status.HTTP_201_CREATED,
    responses={**CONFLICT, **SERVER_ERROR},
    summary="Create a note",
)
async def create_note(
    payload: NoteWrite,
    db: AsyncSession = Depends(get_db_session),
) -> NoteEnvelope:
    note = await note_service.create_note(db, payload)
    return NoteEnvelope(data=note)


@router.put(
    "/note/{note_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
    responses={**NOT_FOUND, **CONFLICT, **SERVER_ERROR},
    summary="Overwrite a note's title and content",
)
async def update_note(
    note_id: str,
    payload: NoteWrite,
    db: AsyncSession = Depends(get_db_session),
) -> Response:
    # 204 must not carry a body; the status alone signals success
    await note_service.update_note(db, note_id, payload)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.delete(
    "/note/{note_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
    responses={**NOT_FOUND, **SERVER_ERROR},
    summary="Delete a note",
)
async def delete_note(
    note_id: str,
    db: AsyncSession = Depends(get_db_session),
) -> Response:
    await note_service.delete_note(db, note_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
