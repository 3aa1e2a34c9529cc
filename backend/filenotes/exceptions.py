"""
FileNotes: Custom Exception Hierarchy
========================================

What:  Defines application-specific exceptions for the note store and HTTP layer.
Why:   Filesystem outcomes (missing file, existing file, OS failure) need to
       reach the client as specific HTTP status codes without leaking paths.
How:   Each exception carries a message and an optional context dict.
       Global exception handlers (registered in main.py) catch these and
       return structured JSON error responses with the right status code.
Who:   Raised by the path resolver and note store; caught by global handlers.
When:  During request processing, whenever a note operation cannot complete.

Exception Hierarchy:
    FileNotesError (base)
    ├── ValidationError            → 400 Bad Request (client can fix)
    │   └── InvalidNoteNameError   → 400 Bad Request
    ├── NotFoundError              → 404 Not Found
    │   └── NoteNotFoundError      → 404 Not Found
    ├── ConflictError              → 400 Bad Request
    │   └── NoteConflictError      → 400 Bad Request
    └── FileStorageError           → 500 Internal Server Error

Note on ConflictError:
    Creating a note that already exists answers 400, not 409. Clients of the
    /write form treat "already exists" as a bad submission.
"""

from typing import Any, Dict, Optional


class FileNotesError(Exception):
    """
    Base exception for all FileNotes application errors.

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


class ValidationError(FileNotesError):
    """
    Raised when client input fails validation.

    When:    Missing form fields, undecodable request bodies, unusable note names.
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


class InvalidNoteNameError(ValidationError):
    """
    Raised by the path resolver when a name cannot become a filename.

    Examples: "", "..", "a/", "bad\\x00name", a 300-character name.
    """

    def __init__(self, name: str, reason: str):
        super().__init__(
            message=f"Invalid note name: {reason}",
            field="note_name",
            context={"name": name, "reason": reason},
        )
        self.name = name
        self.reason = reason


class NotFoundError(FileNotesError):
    """
    Raised when a requested resource does not exist.

    HTTP:    404 Not Found
    """

    def __init__(
        self,
        resource: str = "resource",
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


class NoteNotFoundError(NotFoundError):
    """No file backs the requested note name."""

    def __init__(self, name: str, context: Optional[Dict[str, Any]] = None):
        super().__init__(resource="Note", resource_id=name, context=context)
        self.name = name


class ConflictError(FileNotesError):
    """
    Raised when a create collides with an existing resource.

    HTTP:    400 Bad Request
    """

    def __init__(
        self,
        message: str = "Resource already exists",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class NoteConflictError(ConflictError):
    """A note with this name already exists."""

    def __init__(self, name: str, context: Optional[Dict[str, Any]] = None):
        super().__init__(message=f"Note '{name}' already exists", context=context)
        self.name = name


class FileStorageError(FileNotesError):
    """
    Raised when file system operations fail.

    What:    Could not enumerate, read, write, or delete on the storage volume.
    When:    Permission denied, disk full, unreadable bytes, I/O error.
    HTTP:    500 Internal Server Error

    Recovery:
        None. There are no retries; the failure is surfaced immediately and the
        OS error is kept in `context` for the server log only.
    """

    def __init__(
        self,
        message: str = "File storage operation failed",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)
