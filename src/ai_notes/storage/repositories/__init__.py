"""Repository classes for database operations."""

from ai_notes.storage.repositories.note_repo import NoteRepository

__all__ = ["NoteRepository"]
