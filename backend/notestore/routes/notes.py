"""
NoteStore — Notes Route Handlers
==================================

What:  The note CRUD surface.
How:   Extracts the note name and body from the request, delegates to
       NoteStore, and answers in plain text (or JSON for the listing).
       Failures are raised as application exceptions and turned into
       responses by the handlers registered in main.py.

Endpoints:
    GET    /notes          → 200 JSON [{name, text}, ...]
    GET    /notes/{name}   → 200 text/plain note body
    PUT    /notes/{name}   → 200 confirmation (raw text body replaces the note)
    DELETE /notes/{name}   → 200 confirmation
    POST   /write          → 201 confirmation (form fields note_name, note)
"""

import logging
from typing import List

from fastapi import APIRouter, Depends, Form, Request
from fastapi.responses import PlainTextResponse

from notestore.dependencies import get_note_store
from notestore.exceptions import ValidationError
from notestore.schemas.note import ErrorResponse, NoteItem
from notestore.services.note_store import ENCODING, NoteStore

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Notes"])


@router.get(
    "/notes",
    response_model=List[NoteItem],
    responses={
        200: {"description": "Every note with its full text"},
        500: {"description": "Storage directory could not be read", "model": ErrorResponse},
    },
    summary="List all notes",
)
async def list_notes(store: NoteStore = Depends(get_note_store)) -> List[NoteItem]:
    """
    Return every note in the storage directory, sorted by name.

    Notes that cannot be read at listing time are left out rather than
    failing the request.
    """
    return await store.list_notes()


@router.get(
    "/notes/{name}",
    response_class=PlainTextResponse,
    responses={
        200: {"description": "Raw note text", "content": {"text/plain": {}}},
        404: {"description": "Note not found", "model": ErrorResponse},
        500: {"description": "Storage error", "model": ErrorResponse},
    },
    summary="Read a note",
)
async def get_note(name: str, store: NoteStore = Depends(get_note_store)) -> PlainTextResponse:
    text = await store.get_note(name)
    return PlainTextResponse(text)


@router.put(
    "/notes/{name}",
    response_class=PlainTextResponse,
    responses={
        200: {"description": "Note replaced"},
        400: {"description": "Body is not UTF-8 text", "model": ErrorResponse},
        404: {"description": "Note not found", "model": ErrorResponse},
        500: {"description": "Storage error", "model": ErrorResponse},
    },
    summary="Replace a note's text",
)
async def replace_note(
    name: str,
    request: Request,
    store: NoteStore = Depends(get_note_store),
) -> PlainTextResponse:
    """
    Overwrite an existing note with the raw request body.

    The body is taken as-is whatever the Content-Type; it only has to be
    valid UTF-8. The note must already exist (use POST /write to create).
    """
    body = await request.body()
    try:
        text = body.decode(ENCODING)
    except UnicodeDecodeError:
        raise ValidationError(
            message="Note text must be UTF-8 encoded.",
            field="body",
            context={"name": name, "size": len(body)},
        )

    await store.replace_note(name, text)
    return PlainTextResponse(f"Note '{name}' updated.")


@router.delete(
    "/notes/{name}",
    response_class=PlainTextResponse,
    responses={
        200: {"description": "Note deleted"},
        404: {"description": "Note not found", "model": ErrorResponse},
        500: {"description": "Storage error", "model": ErrorResponse},
    },
    summary="Delete a note",
)
async def delete_note(name: str, store: NoteStore = Depends(get_note_store)) -> PlainTextResponse:
    await store.delete_note(name)
    return PlainTextResponse(f"Note '{name}' deleted.")


@router.post(
    "/write",
    status_code=201,
    response_class=PlainTextResponse,
    responses={
        201: {"description": "Note created"},
        400: {"description": "Name already taken or invalid", "model": ErrorResponse},
        500: {"description": "Storage error", "model": ErrorResponse},
    },
    summary="Create a note from a form submission",
)
async def write_note(
    note_name: str = Form(..., description="Name of the new note"),
    note: str = Form(..., description="Text of the new note"),
    store: NoteStore = Depends(get_note_store),
) -> PlainTextResponse:
    """
    Create a new note from urlencoded or multipart form fields.

    Who:     The /UploadForm.html page, or any client posting a form.
    Fails with 400 when a note with that name already exists.
    """
    await store.create_note(note_name, note)
    return PlainTextResponse("The note was successfully created!", status_code=201)
