"""
FileNotes: Path Resolver
===========================

What:  Maps a user-supplied note name to a file path inside the store root.
Why:   Note names come straight from URLs and form fields. Without sanitizing,
       "../../etc/passwd" would read or delete files outside the store.
How:   Keeps only the final path segment, rejects segments that cannot be a
       plain filename, then joins the segment onto the root.
Who:   Called by the note routes before every Note Store operation.

Sanitization rules:
    "../../etc/passwd" → "passwd"
    "/abs/path/note"   → "note"
    "dir\\note"        → "note"      (backslash is a separator too)
    "note/"            → "note"      (trailing separators are ignored)
    "", "/", ".", ".." → InvalidNoteNameError
    NUL or control chars, or more than 255 UTF-8 bytes → InvalidNoteNameError

    No I/O is performed: the result says nothing about whether the file exists.
"""

import re
from pathlib import Path

from filenotes.exceptions import InvalidNoteNameError

# Longest single filename most filesystems accept (NAME_MAX), in bytes
MAX_NAME_BYTES = 255

_SEPARATORS = re.compile(r"[/\\]+")
_CONTROL_CHARS = re.compile(r"[\x00-\x1f\x7f]")


def sanitize_note_name(name: str) -> str:
    """
    Reduce a raw note name to a single safe filename segment.

    Raises:
        InvalidNoteNameError: the segment is empty, a dot entry, contains
            control characters, or is too long.
    """
    segments = [s for s in _SEPARATORS.split(name or "") if s]
    segment = segments[-1] if segments else ""

    if not segment:
        raise InvalidNoteNameError(name, "name is empty")
    if segment in (".", ".."):
        raise InvalidNoteNameError(name, f"'{segment}' is not a file name")
    if _CONTROL_CHARS.search(segment):
        raise InvalidNoteNameError(name, "name contains control characters")
    if len(segment.encode("utf-8", errors="surrogatepass")) > MAX_NAME_BYTES:
        raise InvalidNoteNameError(name, f"name is longer than {MAX_NAME_BYTES} bytes")

    return segment


def resolve_note_path(name: str, root: Path) -> Path:
    """Join the sanitized form of `name` onto `root`."""
    return Path(root) / sanitize_note_name(name)
