"""
Facade services for core modules.

External code (web layer, scripts) should use these services rather than
driving the async core directly.

Example:
    from ai_notes.core.services import SummarizerService

    service = SummarizerService()
    result = service.summarize(note.content, style="bullet")
"""

from ai_notes.core.services.summarizer_service import (
    SummarizerService,
    create_summarizer_service,
)

__all__ = [
    "SummarizerService",
    "create_summarizer_service",
]
