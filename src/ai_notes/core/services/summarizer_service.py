"""
Facade for note summarization operations.

Wraps the async Summarizer for synchronous callers such as Flask views.
"""

import asyncio
from typing import Optional

from ai_notes.core.summarizer import Summarizer
from ai_notes.core.types import SummarizationResult
from ai_notes.logger import get_logger


class SummarizerService:
    """Facade for note summarization operations."""

    def __init__(
        self,
        summarizer: Optional[Summarizer] = None,
        max_attempts: Optional[int] = None,
    ):
        """Initialize summarizer service.

        Args:
            summarizer: Summarizer to wrap (built from config when omitted)
            max_attempts: Retry attempt budget override
        """
        if summarizer is None:
            from ai_notes.core.factories import create_summarizer

            summarizer = create_summarizer(max_attempts=max_attempts)

        self._summarizer = summarizer
        self._logger = get_logger(__name__)

    @property
    def summarizer(self) -> Summarizer:
        return self._summarizer

    @property
    def min_input_length(self) -> int:
        return self._summarizer.min_input_length

    def summarize(
        self,
        text: str,
        max_length: Optional[int] = None,
        style: Optional[str] = None,
        requester_id: Optional[str] = None,
    ) -> SummarizationResult:
        """Summarize text.

        Raises:
            InvalidInputError: If the text fails validation
        """
        return asyncio.run(
            self._summarizer.summarize(
                text,
                max_length=max_length,
                style=style,
                requester_id=requester_id,
            )
        )

    def get_stats(self) -> dict:
        return self._summarizer.get_stats()

    def health_check(self) -> dict:
        return asyncio.run(self._summarizer.health_check())


def create_summarizer_service(max_attempts: Optional[int] = None) -> SummarizerService:
    """Create a SummarizerService instance.

    Args:
        max_attempts: Retry attempt budget override

    Returns:
        Configured SummarizerService
    """
    return SummarizerService(max_attempts=max_attempts)
