"""FileNotes: API schemas."""
