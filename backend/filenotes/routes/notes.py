"""
FileNotes: Notes Route Handlers
==================================

What:  The notes API: read, update, delete, list, and create via form post.
How:   Each handler resolves the note name to a path, calls one NoteStore
       operation, and formats the result. Failures are raised as exceptions
       and turned into responses by the global handlers in main.py.

Route Inventory:
    GET    /notes            200 JSON [{name, text}]   500 on storage failure
    GET    /notes/{name}     200 text                  404
    PUT    /notes/{name}     200 "Note updated"        404
    DELETE /notes/{name}     200 "Deleted"             404
    POST   /write            201 "Created"             400 (exists / bad input)

Why {name:path}:
    A plain {name} segment never sees "a%2F..%2Fb"; Starlette decodes it and
    the route stops matching. Capturing the whole remainder hands every such
    name to the path resolver, which strips it down to its last segment.
"""

import logging
from typing import List

from fastapi import APIRouter, Depends, Form, Request
from fastapi.responses import PlainTextResponse

from filenotes.dependencies import get_note_store
from filenotes.exceptions import ValidationError
from filenotes.schemas.note import ErrorResponse, NoteItem
from filenotes.services.note_store import NoteStore

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Notes"])

_TEXT_BODY = {
    "requestBody": {
        "required": True,
        "content": {"text/plain": {"schema": {"type": "string"}}},
    }
}


@router.get(
    "/notes",
    response_model=List[NoteItem],
    responses={500: {"description": "Storage failure", "model": ErrorResponse}},
    summary="List all notes",
    description=(
        "Returns every note in the store root as {name, text}. "
        "Order follows directory enumeration and is not guaranteed."
    ),
)
async def list_notes(store: NoteStore = Depends(get_note_store)) -> List[NoteItem]:
    return await store.list_all()


@router.get(
    "/notes/{name:path}",
    response_class=PlainTextResponse,
    responses={
        200: {"description": "Note text", "content": {"text/plain": {}}},
        400: {"description": "Invalid note name", "model": ErrorResponse},
        404: {"description": "Note not found", "model": ErrorResponse},
    },
    summary="Read a note",
)
async def read_note(name: str, store: NoteStore = Depends(get_note_store)) -> PlainTextResponse:
    text = await store.read(store.resolve(name))
    return PlainTextResponse(text)


@router.put(
    "/notes/{name:path}",
    response_class=PlainTextResponse,
    responses={
        200: {"description": "Note updated", "content": {"text/plain": {}}},
        400: {"description": "Invalid note name or body", "model": ErrorResponse},
        404: {"description": "Note not found", "model": ErrorResponse},
    },
    summary="Replace the text of an existing note",
    openapi_extra=_TEXT_BODY,
)
async def update_note(
    name: str,
    request: Request,
    store: NoteStore = Depends(get_note_store),
) -> PlainTextResponse:
    """
    The raw request body becomes the new note text.

    Why read the body by hand:
        A `str` body parameter makes FastAPI expect JSON. Notes are plain
        text, so the bytes are decoded as UTF-8 here instead.
    """
    path = store.resolve(name)
    raw = await request.body()
    try:
        text = raw.decode("utf-8")
    except UnicodeDecodeError:
        raise ValidationError(message="Note text must be UTF-8", field="body")

    result = await store.update(path, text)
    return PlainTextResponse(result.message)


@router.delete(
    "/notes/{name:path}",
    response_class=PlainTextResponse,
    responses={
        200: {"description": "Note deleted", "content": {"text/plain": {}}},
        400: {"description": "Invalid note name", "model": ErrorResponse},
        404: {"description": "Note not found", "model": ErrorResponse},
    },
    summary="Delete a note",
)
async def delete_note(name: str, store: NoteStore = Depends(get_note_store)) -> PlainTextResponse:
    result = await store.delete(store.resolve(name))
    return PlainTextResponse(result.message)


@router.post(
    "/write",
    status_code=201,
    response_class=PlainTextResponse,
    responses={
        201: {"description": "Note created", "content": {"text/plain": {}}},
        400: {"description": "Note exists, or note_name missing/invalid", "model": ErrorResponse},
    },
    summary="Create a new note from a form post",
)
async def write_note(
    note_name: str = Form(..., description="Name of the new note"),
    note: str = Form(default="", description="Note text (may be empty)"),
    store: NoteStore = Depends(get_note_store),
) -> PlainTextResponse:
    """
    Create a note; never overwrites an existing one.

    A missing or empty note_name is rejected with 400 by the
    RequestValidationError handler. A missing note field creates an
    empty note.
    """
    result = await store.create(store.resolve(note_name), note)
    return PlainTextResponse(result.message, status_code=201)
