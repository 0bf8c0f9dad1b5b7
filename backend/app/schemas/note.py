"""
Notes API — Pydantic Request/Response Schemas
===============================================

What:  Pydantic models defining the API contract between clients and backend.
Why:   Automatic serialization and OpenAPI doc generation.
How:   FastAPI uses these models to parse request bodies, serialize responses,
       and generate Swagger/OpenAPI documentation automatically.

Envelope:
    Every JSON body is wrapped in the same envelope:
        success:  {"success": true, "data": {...}}
        list:     {"success": true, "count": n, "data": [...]}
        failure:  {"success": false, "message": "..."}

Design Decision:
    Schemas are separate from SQLAlchemy models so that the wire names
    stay fixed even if the table changes.
"""

import uuid
from datetime import datetime
from typing import List, Literal, Optional

from pydantic import BaseModel, Field


# ══════════════════════════════════════════════════════════════════════════
# Request Models — What clients send
# ══════════════════════════════════════════════════════════════════════════


class NoteWrite(BaseModel):
    """
    Body of POST /api/note and PUT /api/note/{id}.

    Both fields are optional here on purpose: this layer performs no
    validation of its own. A missing field reaches the store as NULL, the
    NOT NULL constraint rejects it, and the error translator answers 500.
    """
    title: Optional[str] = Field(default=None, description="Unique note title")
    content: Optional[str] = Field(default=None, description="Note body")


# ══════════════════════════════════════════════════════════════════════════
# Response Models — What the API returns to clients
# ══════════════════════════════════════════════════════════════════════════


class NoteOut(BaseModel):
    """Full representation of a note."""
    id: uuid.UUID = Field(description="Store-assigned note identifier (UUID)")
    title: str = Field(description="Unique note title")
    content: str = Field(description="Note body")
    created: datetime = Field(description="When the note was created (UTC ISO 8601)")
    changed: datetime = Field(description="When the note was last modified (UTC ISO 8601)")

    model_config = {"from_attributes": True}


class NoteEnvelope(BaseModel):
    """Returned by GET /api/note/{id}, GET /api/note/read/{title} and POST /api/note."""
    success: Literal[True] = True
    data: NoteOut


class NoteListEnvelope(BaseModel):
    """Returned by GET /api/notes. `count` always equals len(data)."""
    success: Literal[True] = True
    count: int = Field(description="Number of notes in data")
    data: List[NoteOut]


class ErrorEnvelope(BaseModel):
    """
    Failure body for every non-2xx response.

    Example:
        {"success": false, "message": "Note not found"}
    """
    success: Literal[False] = False
    message: str = Field(description="Human-readable reason")


class HealthResponse(BaseModel):
    """
    Health check response showing service and dependency status.
    Returned by GET /health for monitoring and load balancer health checks.
    """
    status: str = Field(description="Overall service status: healthy, unhealthy")
    version: str = Field(description="Application version")
    database: str = Field(description="Database connectivity: connected, disconnected")
    uptime_seconds: float = Field(description="Seconds since service started")
