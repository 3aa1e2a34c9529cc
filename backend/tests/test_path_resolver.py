"""
FileNotes: Path Resolver Unit Tests
======================================

What:  Name sanitization and confinement to the store root.
Why:   This is the only thing standing between a URL and arbitrary files.

Test Strategy:
    ✅ Traversal sequences collapse to the final segment
    ✅ Absolute paths and backslash paths collapse the same way
    ✅ Empty, dot, control-character, and over-long names are rejected
    ✅ Every accepted name resolves to a direct child of the root
"""

from pathlib import Path

import pytest

from filenotes.exceptions import InvalidNoteNameError, ValidationError
from filenotes.services.path_resolver import (
    MAX_NAME_BYTES,
    resolve_note_path,
    sanitize_note_name,
)

ROOT = Path("/srv/notes")


class TestSanitizeNoteName:

    @pytest.mark.parametrize(
        ("raw", "expected"),
        [
            ("groceries", "groceries"),
            ("../secret", "secret"),
            ("../../etc/passwd", "passwd"),
            ("/etc/passwd", "passwd"),
            ("a/b/c", "c"),
            ("..\\..\\windows\\win.ini", "win.ini"),
            ("todo/", "todo"),
            ("todo.txt", "todo.txt"),
            ("my note", "my note"),
            ("заметка", "заметка"),
            (".hidden", ".hidden"),
        ],
    )
    def test_keeps_final_segment(self, raw, expected):
        assert sanitize_note_name(raw) == expected

    @pytest.mark.parametrize("raw", ["", "/", "//", ".", "..", "../..", "a/..", "\\"])
    def test_rejects_empty_and_dot_names(self, raw):
        with pytest.raises(InvalidNoteNameError):
            sanitize_note_name(raw)

    @pytest.mark.parametrize("raw", ["bad\x00name", "line\nbreak", "tab\there", "del\x7f"])
    def test_rejects_control_characters(self, raw):
        with pytest.raises(InvalidNoteNameError, match="control characters"):
            sanitize_note_name(raw)

    def test_rejects_overlong_name(self):
        with pytest.raises(InvalidNoteNameError, match="longer than"):
            sanitize_note_name("x" * (MAX_NAME_BYTES + 1))

    def test_length_limit_counts_utf8_bytes(self):
        # 128 two-byte characters = 256 bytes
        with pytest.raises(InvalidNoteNameError):
            sanitize_note_name("é" * 128)
        assert sanitize_note_name("x" * MAX_NAME_BYTES) == "x" * MAX_NAME_BYTES

    def test_invalid_name_is_a_validation_error(self):
        """Routes rely on this to answer 400."""
        with pytest.raises(ValidationError):
            sanitize_note_name("..")


class TestResolveNotePath:

    def test_joins_onto_root(self):
        assert resolve_note_path("todo", ROOT) == ROOT / "todo"

    def test_traversal_stays_inside_root(self):
        assert resolve_note_path("../secret", ROOT) == ROOT / "secret"

    @pytest.mark.parametrize(
        "raw",
        ["../secret", "../../../../etc/shadow", "/abs/olute", "a/../../b", "..\\up", "x/./y"],
    )
    def test_result_is_direct_child_of_root(self, raw):
        path = resolve_note_path(raw, ROOT)
        assert path.parent == ROOT
        assert path.name not in ("", ".", "..")
