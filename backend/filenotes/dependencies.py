"""
FileNotes: FastAPI Dependencies
==================================

What:  Hands the per-app Settings, NoteStore, and start time to route handlers.
Why:   Both are built once in create_app() and kept on app.state, so there
       is no module-level singleton to patch in tests; a test builds its
       own app around its own temporary directory.
"""

from fastapi import Request

from filenotes.config import Settings
from filenotes.services.note_store import NoteStore


def get_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_note_store(request: Request) -> NoteStore:
    return request.app.state.note_store


def get_started_at(request: Request) -> float:
    """Wall-clock time at which create_app() built this app."""
    return request.app.state.started_at
