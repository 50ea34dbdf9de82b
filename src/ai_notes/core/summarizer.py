"""
Summarizer for generating note summaries.

Runs one configured provider (Hugging Face, OpenAI or the local extractive
engine) with retry, validates what comes back, and degrades to extractive
summarization and finally to plain truncation so a valid request always
gets a summary.
"""

import asyncio
import re
from typing import Any, Awaitable, Callable, Optional

import httpx

from ai_notes.config import ProviderConfig
from ai_notes.core.errors import (
    FallbackError,
    InvalidInputError,
    InvalidResponseError,
    ProviderUnavailableError,
)
from ai_notes.core.providers import (
    BaseProvider,
    FallbackProvider,
    HuggingFaceProvider,
    OpenAIProvider,
)
from ai_notes.core.retry import RetryPolicy, retry_async
from ai_notes.core.stats import StatsCollector
from ai_notes.core.truncation import fit_within, simple_truncate
from ai_notes.core.types import (
    ProviderName,
    SummarizationRequest,
    SummarizationResult,
    SummaryStyle,
)
from ai_notes.logger import get_logger

logger = get_logger(__name__)

MIN_SUMMARY_LENGTH = 10
HEALTH_CHECK_TEXT = "This is a test sentence for health check purposes."

FAILURE_PATTERNS = (
    re.compile(r"^(I cannot|I can't|Unable to|Sorry, I cannot)", re.IGNORECASE),
    re.compile(r"^(As an AI|I'm an AI|I am an AI)", re.IGNORECASE),
    re.compile(r"^(Error|Failed|Exception)", re.IGNORECASE),
)


def select_provider(
    config: ProviderConfig,
    fallback: Optional[FallbackProvider] = None,
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> BaseProvider:
    """Pick the primary provider from the configured credentials.

    Hugging Face wins when its key is present, then OpenAI, then the local
    extractive engine.
    """
    if config.huggingface_api_key:
        return HuggingFaceProvider(
            api_key=config.huggingface_api_key,
            models=config.huggingface_models,
            base_url=config.huggingface_base_url,
            timeout_seconds=config.timeout_seconds,
            transport=transport,
        )
    if config.openai_api_key:
        return OpenAIProvider(
            api_key=config.openai_api_key,
            model=config.openai_model,
            base_url=config.openai_base_url,
            timeout_seconds=config.timeout_seconds,
            transport=transport,
        )
    return fallback or FallbackProvider()


class Summarizer:
    """Summarization orchestrator with a provider → extractive → truncation chain."""

    def __init__(
        self,
        provider: Optional[BaseProvider] = None,
        fallback: Optional[FallbackProvider] = None,
        retry_policy: Optional[RetryPolicy] = None,
        stats: Optional[StatsCollector] = None,
        min_input_length: int = 100,
        max_input_length: int = 50_000,
        default_max_length: int = 150,
        default_style: str = "concise",
        sleep: Callable[[float], Awaitable[Any]] = asyncio.sleep,
    ) -> None:
        """Initialize the summarizer.

        Args:
            provider: Primary provider; the fallback provider when omitted
            fallback: Extractive provider used after primary failures
            retry_policy: Retry policy for the primary provider
            stats: Counter collector (a fresh one when omitted)
            min_input_length: Minimum trimmed input length
            max_input_length: Maximum trimmed input length
            default_max_length: Summary size used when a call gives none
            default_style: Style used when a call gives none
            sleep: Coroutine used for backoff waits
        """
        self._fallback = fallback or FallbackProvider()
        self._provider = provider or self._fallback
        self.retry_policy = retry_policy or RetryPolicy()
        self.stats = stats or StatsCollector()
        self.min_input_length = min_input_length
        self.max_input_length = max_input_length
        self.default_max_length = default_max_length
        self.default_style = SummaryStyle(default_style)
        self._sleep = sleep

        logger.info(f"Summarizer initialized with provider: {self.current_provider}")

    @property
    def current_provider(self) -> str:
        """Name of the provider chosen at construction."""
        return self._provider.name

    @property
    def provider(self) -> BaseProvider:
        return self._provider

    def validate_request(
        self,
        text: Any,
        max_length: Optional[int] = None,
        style: Optional[str] = None,
        requester_id: Optional[str] = None,
    ) -> SummarizationRequest:
        """Check input bounds and options.

        Raises:
            InvalidInputError: If the text or options are unusable
        """
        if not text or not isinstance(text, str):
            raise InvalidInputError("Content must be a non-empty string")

        trimmed = text.strip()
        if len(trimmed) < self.min_input_length:
            raise InvalidInputError(
                f"Content must be at least {self.min_input_length} characters long "
                "for meaningful summarization"
            )
        if len(trimmed) > self.max_input_length:
            raise InvalidInputError(
                f"Content is too long for summarization (max {self.max_input_length:,} characters)"
            )

        if max_length is None:
            max_length = self.default_max_length
        if isinstance(max_length, bool) or not isinstance(max_length, int) or max_length <= 0:
            raise InvalidInputError("max_length must be a positive integer")

        if style is None:
            summary_style = self.default_style
        else:
            try:
                summary_style = SummaryStyle(str(style).lower())
            except ValueError:
                valid = ", ".join(s.value for s in SummaryStyle)
                raise InvalidInputError(f"Invalid style: {style!r}. Must be one of {valid}") from None

        return SummarizationRequest(
            text=trimmed,
            max_length=max_length,
            style=summary_style,
            requester_id=requester_id,
        )

    def validate_response(self, summary: Any, original: str) -> str:
        """Reject provider output that does not look like a summary.

        Raises:
            InvalidResponseError: If the text is missing, out of bounds, or a
                known failure phrase
        """
        if not summary or not isinstance(summary, str):
            raise InvalidResponseError("Invalid AI response format", provider=self.current_provider)

        trimmed = summary.strip()
        if len(trimmed) < MIN_SUMMARY_LENGTH:
            raise InvalidResponseError("AI response too short", provider=self.current_provider)
        if len(trimmed) > len(original):
            raise InvalidResponseError("AI response longer than original content", provider=self.current_provider)

        for pattern in FAILURE_PATTERNS:
            if pattern.search(trimmed):
                raise InvalidResponseError("AI response indicates failure", provider=self.current_provider)

        return trimmed

    async def summarize(
        self,
        text: str,
        max_length: Optional[int] = None,
        style: Optional[str] = None,
        requester_id: Optional[str] = None,
    ) -> SummarizationResult:
        """Summarize text, degrading through the fallback chain on failure.

        Args:
            text: Input text
            max_length: Target summary size in tokens
            style: concise, bullet or detailed
            requester_id: Caller identifier, used for logging only

        Returns:
            SummarizationResult naming the tier that produced the summary

        Raises:
            InvalidInputError: If the input fails validation
        """
        request = self.validate_request(text, max_length, style, requester_id)

        request_number = self.stats.record_request()
        logger.info(
            f"Summarization request #{request_number} for requester: "
            f"{request.requester_id or 'unknown'}"
        )

        provider = self._provider
        try:
            raw = await retry_async(
                lambda: provider.summarize(request.text, request.max_length, request.style),
                self.retry_policy,
                sleep=self._sleep,
                on_retry=self._log_retry,
            )
            if provider.is_network:
                summary = self.validate_response(raw, request.text)
            else:
                summary = self._bounded(self._require_text(raw), request)

            logger.info(f"Summarization successful using {provider.name}")
            return SummarizationResult.build(summary, provider.name, request.text)

        except Exception as e:
            self.stats.record_error()
            logger.error(f"Summarization failed with {provider.name}: {e}")

            if provider.is_network:
                return await self._summarize_with_fallback(request)

            logger.warning("All methods failed, using simple truncation")
            return self._summarize_with_truncation(request)

    async def _summarize_with_fallback(self, request: SummarizationRequest) -> SummarizationResult:
        try:
            logger.info("Attempting fallback summarization method")
            raw = await self._fallback.summarize(request.text, request.max_length, request.style)
            summary = self._bounded(self._require_text(raw), request)
            return SummarizationResult.build(summary, ProviderName.FALLBACK.value, request.text)
        except Exception as e:
            logger.error(f"Fallback summarization failed: {e}")
            return self._summarize_with_truncation(request)

    def _summarize_with_truncation(self, request: SummarizationRequest) -> SummarizationResult:
        summary = self._bounded(simple_truncate(request.text, request.max_length), request)
        if not summary:
            raise ProviderUnavailableError("No summarization method produced a result")
        return SummarizationResult.build(summary, ProviderName.SIMPLE.value, request.text)

    @staticmethod
    def _bounded(summary: str, request: SummarizationRequest) -> str:
        """Keep locally produced summaries no longer than the input."""
        return fit_within(summary, request.text, request.max_length)

    @staticmethod
    def _require_text(raw: Any) -> str:
        if not isinstance(raw, str) or not raw.strip():
            raise FallbackError("Extractive summarization produced no text")
        return raw.strip()

    def _log_retry(self, attempt: int, error: Exception, delay_ms: int) -> None:
        logger.warning(
            f"Provider {self.current_provider} attempt {attempt}/{self.retry_policy.max_attempts} "
            f"failed, retrying in {delay_ms}ms: {error}"
        )

    def get_stats(self) -> dict:
        """Return request/error counters, success rate and current provider."""
        return self.stats.snapshot(self.current_provider).to_dict()

    async def health_check(self) -> dict:
        """Probe the paid provider with one tiny request.

        Free and local providers are reported healthy without a call.
        """
        provider = self._provider
        if provider.is_paid:
            try:
                await provider.summarize(HEALTH_CHECK_TEXT, 50, SummaryStyle.CONCISE)
            except Exception as e:
                logger.warning(f"Health check failed for {provider.name}: {e}")
                return {"status": "unhealthy", "provider": provider.name, "error": str(e)}
        return {"status": "healthy", "provider": provider.name}
