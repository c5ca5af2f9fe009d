"""
NoteStore — Pydantic Response Schemas
=======================================

What:  Pydantic models defining the JSON parts of the API contract.
Why:   Automatic serialization and a single place to see what clients receive.
Who:   Returned by NoteStore.list_notes(), the health route and the error
       handlers in main.py.

Most endpoints answer in plain text (note bodies and confirmations), so only
the listing, the health report and error envelopes need a schema.
"""

from typing import Optional

from pydantic import BaseModel, Field


class NoteItem(BaseModel):
    """
    What:  One note in the GET /notes listing.
    Why:   Listing returns every note's full text, keyed by its name.
    """
    name: str = Field(description="Note name (file name without the .txt suffix)")
    text: str = Field(description="Full note text")


class ErrorResponse(BaseModel):
    """
    What:  Standardized error body for all API errors.

    Example:
        {
            "error": "not_found",
            "message": "note 'groceries' was not found",
            "request_id": "1a2b3c4d"
        }
    """
    error: str = Field(description="Machine-readable error code")
    message: str = Field(description="Human-readable error description")
    details: Optional[dict] = Field(default=None, description="Additional error context")
    request_id: Optional[str] = Field(default=None, description="Request correlation ID")


class HealthResponse(BaseModel):
    """Health report returned by GET /health."""
    status: str = Field(description="Overall service status: healthy, degraded, unhealthy")
    version: str = Field(description="Application version")
    storage: str = Field(description="Storage directory state: available, read_only, missing")
    uptime_seconds: float = Field(description="Seconds since the app was created")
