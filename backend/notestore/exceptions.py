"""
NoteStore — Custom Exception Hierarchy
========================================

What:  Application-specific exceptions for every way a note operation can fail.
Why:   Services raise domain errors; global handlers in main.py turn them into
       HTTP responses. Routes never build error responses by hand.
How:   Each exception carries a user-facing message and a context dict that
       is logged server-side but never returned to the client.

Exception Hierarchy:
    NoteStoreError (base)       → 500 Internal Server Error
    ├── ValidationError         → 400 Bad Request (bad name, bad body)
    ├── NoteExistsError         → 400 Bad Request (create on an existing note)
    ├── NotFoundError           → 404 Not Found
    └── FileStorageError        → 500 Internal Server Error (any other OSError)
"""

from typing import Any, Dict, Optional


class NoteStoreError(Exception):
    """
    Base exception for all NoteStore application errors.

    Attributes:
        message:  User-facing error description (safe to return in API response)
        context:  Additional debug info (logged but NOT returned to client)
    """

    def __init__(
        self,
        message: str = "An unexpected error occurred",
        context: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.context = context or {}
        super().__init__(self.message)


class ValidationError(NoteStoreError):
    """
    Raised when client input cannot be accepted as-is.

    When:    Note name escapes the storage directory, request body is not
             UTF-8, or a required form field is missing.
    HTTP:    400 Bad Request
    """

    def __init__(
        self,
        message: str = "Validation failed",
        field: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        if field:
            ctx["field"] = field
        super().__init__(message=message, context=ctx)
        self.field = field


class NoteExistsError(NoteStoreError):
    """
    Raised when a create targets a note name that is already taken.

    HTTP:    400 Bad Request
    """

    def __init__(self, name: str, context: Optional[Dict[str, Any]] = None):
        ctx = context or {}
        ctx["name"] = name
        super().__init__(message="A note with that name already exists.", context=ctx)
        self.name = name


class NotFoundError(NoteStoreError):
    """
    Raised when a read, replace or delete targets a note with no backing file.

    HTTP:    404 Not Found
    """

    def __init__(
        self,
        resource: str = "note",
        resource_id: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        message = f"The requested {resource} was not found"
        if resource_id:
            message = f"{resource} '{resource_id}' was not found"
        ctx = context or {}
        ctx["resource"] = resource
        if resource_id:
            ctx["resource_id"] = resource_id
        super().__init__(message=message, context=ctx)


class FileStorageError(NoteStoreError):
    """
    Raised when a filesystem operation fails for any reason other than the
    note being absent or already present.

    When:    Permission denied, disk full, storage directory missing or not a
             directory, I/O error.
    HTTP:    500 Internal Server Error
    """

    def __init__(
        self,
        message: str = "File storage operation failed",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)
