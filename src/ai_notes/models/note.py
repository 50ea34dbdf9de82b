"""
Note data model.

Only the columns the summarization feature reads or writes are modelled.
"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field
from sqlalchemy import Boolean, DateTime, Index, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from ai_notes.models.base import Base

SUMMARY_MAX_LENGTH = 1000


class NoteModel(Base):
    """SQLAlchemy ORM model for Note."""

    __tablename__ = "notes"

    __table_args__ = (
        Index("ix_notes_user_deleted", "user_id", "is_deleted"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    user_id: Mapped[str] = mapped_column(String(64), nullable=False, index=True)

    title: Mapped[str] = mapped_column(String(200), nullable=False)
    content: Mapped[str] = mapped_column(Text, nullable=False)
    is_deleted: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)

    # AI summary
    summary: Mapped[Optional[str]] = mapped_column(String(SUMMARY_MAX_LENGTH), nullable=True)
    summarized_at: Mapped[Optional[datetime]] = mapped_column(DateTime, nullable=True)

    # Timestamps
    created_at: Mapped[datetime] = mapped_column(DateTime, default=datetime.utcnow, nullable=False)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime, default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False
    )

    def __repr__(self) -> str:
        return f"<NoteModel(id={self.id}, user_id='{self.user_id}', title='{self.title}')>"


# Pydantic models for API


class NoteCreate(BaseModel):
    """Schema for creating a note."""

    user_id: str = Field(..., min_length=1, max_length=64, description="Owner identifier")
    title: str = Field(..., min_length=1, max_length=200, description="Note title")
    content: str = Field(..., min_length=1, description="Note body")


class NoteSummaryResponse(BaseModel):
    """Schema for a note's summary fields in API responses."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    title: str
    summary: Optional[str] = None
    summarized_at: Optional[datetime] = None


class SummarizeRequest(BaseModel):
    """Body of a single-note summarize request."""

    style: str = Field(default="concise", description="concise, bullet or detailed")


class BatchSummarizeRequest(BaseModel):
    """Body of a batch summarize request."""

    note_ids: list[int] = Field(..., min_length=1, description="Notes to summarize")
    style: str = Field(default="concise", description="concise, bullet or detailed")
