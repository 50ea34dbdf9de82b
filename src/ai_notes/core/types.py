"""Dataclasses shared across the summarization core."""

from dataclasses import dataclass
from enum import Enum
from typing import Optional


class SummaryStyle(str, Enum):
    """Output formatting applied to a summary."""

    CONCISE = "concise"
    BULLET = "bullet"
    DETAILED = "detailed"


class ProviderName(str, Enum):
    """Tier that produced a summary."""

    HUGGINGFACE = "huggingface"
    OPENAI = "openai"
    FALLBACK = "fallback"
    SIMPLE = "simple"


@dataclass(frozen=True)
class SummarizationRequest:
    """Validated summarization input."""

    text: str
    max_length: int
    style: SummaryStyle = SummaryStyle.CONCISE
    requester_id: Optional[str] = None


@dataclass
class SummarizationResult:
    """Summary produced by one tier of the fallback chain."""

    summary: str
    provider: str
    word_count: int
    original_length: int

    @classmethod
    def build(cls, summary: str, provider: str, original: str) -> "SummarizationResult":
        """Create a result, deriving the word count and original length."""
        return cls(
            summary=summary,
            provider=provider,
            word_count=len(summary.split()),
            original_length=len(original),
        )

    def to_dict(self) -> dict:
        return {
            "summary": self.summary,
            "provider": self.provider,
            "word_count": self.word_count,
            "original_length": self.original_length,
        }

    def __repr__(self) -> str:
        return f"<SummarizationResult(provider={self.provider}, words={self.word_count})>"


@dataclass
class ScoredSentence:
    """Candidate sentence inside one extractive summarization run."""

    sentence: str
    score: float
    index: int
