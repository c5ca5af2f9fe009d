"""
NoteStore — FastAPI Dependencies
==================================

What:  Injects the per-app NoteStore into route handlers.
Why:   The store is built once in create_app() and kept on app.state;
       routes receive it through Depends() instead of importing a global.
"""

from fastapi import Request

from notestore.services.note_store import NoteStore


def get_note_store(request: Request) -> NoteStore:
    return request.app.state.note_store
