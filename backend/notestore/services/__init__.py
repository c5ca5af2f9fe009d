# Services package init
"""
NoteStore — Services Layer
============================

What:  Storage logic sitting between routes (HTTP) and the storage directory.
Why:   Routes handle HTTP; services handle existence preconditions and file I/O.

Service Inventory:
    - NoteStore: create / get / replace / delete / list notes as .txt files
"""

from notestore.services.note_store import NoteStore

__all__ = ["NoteStore"]
