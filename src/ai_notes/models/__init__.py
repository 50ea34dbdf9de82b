"""Data models for AI Notes."""

from ai_notes.models.base import Base
from ai_notes.models.note import (
    BatchSummarizeRequest,
    NoteCreate,
    NoteModel,
    NoteSummaryResponse,
    SummarizeRequest,
)

__all__ = [
    "Base",
    "NoteModel",
    "NoteCreate",
    "NoteSummaryResponse",
    "SummarizeRequest",
    "BatchSummarizeRequest",
]
