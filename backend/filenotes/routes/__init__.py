# Routes package init
"""
FileNotes: API Routes Package
================================

Route Inventory:
    - notes.py:   GET /notes, GET|PUT|DELETE /notes/{name}, POST /write
    - health.py:  GET /health
    - pages.py:   GET /  (HTML form posting to /write)

Design Principle:
    Routes are THIN: extract the name and body, call the NoteStore, format
    the response. Status codes for failures come from exception handlers.
"""
