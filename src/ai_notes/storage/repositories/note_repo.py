"""
Note repository for database operations.
"""

from datetime import datetime, timedelta
from typing import Optional

from sqlalchemy.orm import Session

from ai_notes.logger import get_logger
from ai_notes.models import NoteModel
from ai_notes.models.note import SUMMARY_MAX_LENGTH, NoteCreate

logger = get_logger(__name__)


class NoteRepository:
    """Repository for the note operations the summarization feature needs."""

    def __init__(self, session: Session) -> None:
        """Initialize repository with a database session.

        Args:
            session: SQLAlchemy Session instance
        """
        self.session = session

    def create(self, data: NoteCreate) -> NoteModel:
        """Create a note.

        Args:
            data: Note creation schema

        Returns:
            Created NoteModel instance
        """
        note = NoteModel(user_id=data.user_id, title=data.title, content=data.content)
        self.session.add(note)
        self.session.flush()
        self.session.refresh(note)
        return note

    def get_for_user(self, note_id: int, user_id: str) -> Optional[NoteModel]:
        """Get a live (not deleted) note owned by ``user_id``."""
        return (
            self.session.query(NoteModel)
            .filter(
                NoteModel.id == note_id,
                NoteModel.user_id == user_id,
                NoteModel.is_deleted.is_(False),
            )
            .first()
        )

    def list_for_user_by_ids(self, note_ids: list[int], user_id: str) -> list[NoteModel]:
        """Get the live notes among ``note_ids`` owned by ``user_id``, ordered by ID."""
        if not note_ids:
            return []

        return (
            self.session.query(NoteModel)
            .filter(
                NoteModel.id.in_(note_ids),
                NoteModel.user_id == user_id,
                NoteModel.is_deleted.is_(False),
            )
            .order_by(NoteModel.id)
            .all()
        )

    def update_summary(
        self,
        note: NoteModel,
        summary: str,
        summarized_at: Optional[datetime] = None,
    ) -> NoteModel:
        """Store a generated summary and its timestamp on a note.

        Summaries longer than the column allows are cut to fit.
        """
        if len(summary) > SUMMARY_MAX_LENGTH:
            logger.warning(
                f"Summary for note {note.id} truncated from {len(summary)} "
                f"to {SUMMARY_MAX_LENGTH} characters"
            )
        note.summary = summary[:SUMMARY_MAX_LENGTH]
        note.summarized_at = summarized_at or datetime.utcnow()
        self.session.flush()
        self.session.refresh(note)
        return note

    @staticmethod
    def has_fresh_summary(
        note: NoteModel,
        max_age: timedelta,
        now: Optional[datetime] = None,
    ) -> bool:
        """Whether the note's summary was generated within ``max_age``."""
        if not note.summary or not note.summarized_at:
            return False
        now = now or datetime.utcnow()
        return note.summarized_at > now - max_age
