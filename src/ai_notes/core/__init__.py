"""Core summarization modules for AI Notes.

The web layer and scripts go through ``ai_notes.core.services``; the classes
below are exported for library use, type hints and tests.
"""

from ai_notes.core.errors import (
    FallbackError,
    InvalidInputError,
    InvalidResponseError,
    ProviderAuthenticationError,
    ProviderError,
    ProviderRateLimitError,
    ProviderTimeoutError,
    ProviderUnavailableError,
    SummarizationError,
)
from ai_notes.core.extractive import ExtractiveSummarizer
from ai_notes.core.factories import create_summarizer
from ai_notes.core.providers import (
    BaseProvider,
    FallbackProvider,
    HuggingFaceProvider,
    OpenAIProvider,
)
from ai_notes.core.retry import RetryPolicy, retry_async
from ai_notes.core.services import SummarizerService, create_summarizer_service
from ai_notes.core.stats import StatsCollector, StatsSnapshot
from ai_notes.core.summarizer import Summarizer, select_provider
from ai_notes.core.truncation import simple_truncate
from ai_notes.core.types import (
    ProviderName,
    ScoredSentence,
    SummarizationRequest,
    SummarizationResult,
    SummaryStyle,
)

__all__ = [
    # Orchestration
    "Summarizer",
    "select_provider",
    "create_summarizer",
    "SummarizerService",
    "create_summarizer_service",
    # Providers
    "BaseProvider",
    "HuggingFaceProvider",
    "OpenAIProvider",
    "FallbackProvider",
    # Algorithms
    "ExtractiveSummarizer",
    "simple_truncate",
    "RetryPolicy",
    "retry_async",
    "StatsCollector",
    "StatsSnapshot",
    # Types
    "ProviderName",
    "ScoredSentence",
    "SummarizationRequest",
    "SummarizationResult",
    "SummaryStyle",
    # Errors
    "SummarizationError",
    "InvalidInputError",
    "ProviderError",
    "ProviderTimeoutError",
    "ProviderAuthenticationError",
    "ProviderRateLimitError",
    "InvalidResponseError",
    "FallbackError",
    "ProviderUnavailableError",
]
