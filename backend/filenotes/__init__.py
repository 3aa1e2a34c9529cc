"""
FileNotes: Application Package
=================================

What: Plain-text notes over HTTP, each note one file in a flat directory.

Architecture Note:

    ┌─────────────────────────────────────┐
    │           Routes (API Layer)        │  ← HTTP concerns only
    ├─────────────────────────────────────┤
    │   Services (Path Resolver, Store)   │  ← sanitization, file I/O
    ├─────────────────────────────────────┤
    │        Schemas (API contracts)      │  ← Pydantic models
    ├─────────────────────────────────────┤
    │      Filesystem (store root)        │  ← one file per note
    └─────────────────────────────────────┘
"""

__version__ = "1.0.0"
