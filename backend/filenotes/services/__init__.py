# Services package init
"""
FileNotes: Services Layer
============================

What:  Note storage logic sitting between routes (HTTP) and the filesystem.
Why:   Routes handle HTTP; services own name sanitization and file I/O.

Service Inventory:
    - path_resolver: note name → confined path inside the store root (no I/O)
    - NoteStore: create, read, update, delete, and list notes on disk

Why services are separate from routes:
    Services can be unit-tested against a temporary directory without HTTP,
    and the routes stay thin: extract, delegate, format.
"""
