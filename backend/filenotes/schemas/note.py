"""
FileNotes: Pydantic Request/Response Schemas
===============================================

What:  Pydantic models defining the API contract of the notes service.
Why:   Explicit shapes for listing, write outcomes, health, and errors;
       FastAPI uses them for serialization and OpenAPI docs.
How:   Plain-text endpoints (read, update, delete, write) answer with short
       text bodies; the schemas here describe the JSON ones.
"""

from typing import Literal, Optional

from pydantic import BaseModel, Field


# ══════════════════════════════════════════════════════════════════════════
# Note Models
# ══════════════════════════════════════════════════════════════════════════


class NoteItem(BaseModel):
    """
    What:  A note as returned by GET /notes.
    Why:   name is the filename; text is the full file contents, verbatim.
    """
    name: str = Field(description="Note name (the file name in the store root)")
    text: str = Field(description="Full note text")


class NoteWriteResult(BaseModel):
    """Outcome of create, update, or delete; `message` becomes the response body."""
    status: Literal["created", "updated", "deleted"]
    message: str


# ══════════════════════════════════════════════════════════════════════════
# Service Models
# ══════════════════════════════════════════════════════════════════════════


class HealthResponse(BaseModel):
    """
    What:  Service health status for monitoring.
    Who:   Returned by GET /health.
    """
    status: Literal["healthy", "unhealthy"] = Field(
        description="healthy when the storage root is a usable directory"
    )
    version: str = Field(description="Backend version")
    storage_root: str = Field(description="Absolute path of the note directory")
    uptime_seconds: float = Field(description="Seconds since app creation")


class ErrorResponse(BaseModel):
    """
    What:  Error envelope returned by every exception handler.

    Example:
        {
            "error": "not_found",
            "message": "Note 'groceries' was not found",
            "request_id": "a1b2c3d4"
        }
    """
    error: str = Field(description="Machine-readable error code")
    message: str = Field(description="Human-readable error description")
    details: Optional[dict] = Field(default=None, description="Field-level details, if any")
    request_id: str = Field(default="", description="Correlation ID for this request")
