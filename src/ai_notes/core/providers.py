"""
Summarization providers.

Each provider turns text into a summary string. Network providers map one
HTTP API each; the fallback provider runs the local extractive engine.
"""

import math
from abc import ABC, abstractmethod
from typing import Any, Mapping, Optional, Sequence

import httpx

from ai_notes.core.errors import (
    FallbackError,
    ProviderAuthenticationError,
    ProviderError,
    ProviderRateLimitError,
    ProviderTimeoutError,
)
from ai_notes.core.extractive import ExtractiveSummarizer
from ai_notes.core.types import ProviderName, SummaryStyle
from ai_notes.logger import get_logger

logger = get_logger(__name__)

DEFAULT_TIMEOUT = 30.0


class BaseProvider(ABC):
    """Interface every summarization provider implements."""

    name: str = ""
    is_network: bool = False
    is_paid: bool = False

    @abstractmethod
    async def summarize(self, text: str, max_length: int, style: SummaryStyle) -> str:
        """Summarize ``text``.

        Args:
            text: Trimmed input text
            max_length: Target summary size in tokens
            style: Requested output style

        Returns:
            Raw summary text (validated by the caller)

        Raises:
            ProviderError: When no usable summary was returned
        """

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__}(name={self.name})>"


class HuggingFaceProvider(BaseProvider):
    """Hugging Face Inference API summarization models."""

    name = ProviderName.HUGGINGFACE.value
    is_network = True

    MAX_MODEL_LENGTH = 142  # BART output limit
    MIN_LENGTH = 30

    def __init__(
        self,
        api_key: str,
        models: Sequence[str] = ("facebook/bart-large-cnn", "sshleifer/distilbart-cnn-12-6"),
        base_url: str = "https://api-inference.huggingface.co/models",
        timeout_seconds: float = DEFAULT_TIMEOUT,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        if not api_key:
            raise ProviderAuthenticationError("Hugging Face API key not configured", provider=self.name)
        if not models:
            raise ValueError("At least one Hugging Face model is required")

        self.api_key = api_key
        self.models = list(models)
        self.base_url = base_url.rstrip("/")
        self.timeout_seconds = timeout_seconds
        self._transport = transport

    async def summarize(self, text: str, max_length: int, style: SummaryStyle) -> str:
        last_error: Optional[ProviderError] = None

        async with httpx.AsyncClient(
            headers={
                "Authorization": f"Bearer {self.api_key}",
                "Content-Type": "application/json",
            },
            timeout=self.timeout_seconds,
            transport=self._transport,
        ) as client:
            for model in self.models:
                try:
                    return await self._summarize_with_model(client, model, text, max_length)
                except ProviderError as e:
                    last_error = e
                    logger.warning(f"Hugging Face model {model} failed: {e}")

        if isinstance(last_error, ProviderTimeoutError):
            raise ProviderTimeoutError("All Hugging Face models timed out", provider=self.name) from last_error
        raise ProviderError("All Hugging Face models failed", provider=self.name) from last_error

    async def _summarize_with_model(
        self,
        client: httpx.AsyncClient,
        model: str,
        text: str,
        max_length: int,
    ) -> str:
        payload = {
            "inputs": text,
            "parameters": {
                "max_length": min(max_length, self.MAX_MODEL_LENGTH),
                "min_length": self.MIN_LENGTH,
                "do_sample": False,
            },
        }

        try:
            response = await client.post(f"{self.base_url}/{model}", json=payload)
        except httpx.TimeoutException as e:
            raise ProviderTimeoutError(f"Hugging Face request timed out: {e}", provider=self.name) from e
        except httpx.HTTPError as e:
            raise ProviderError(f"Hugging Face connection error: {e}", provider=self.name) from e

        if response.status_code >= 400:
            raise _status_error(response, self.name, "Hugging Face")

        data = _safe_json(response, self.name)
        summary = ""
        if isinstance(data, list) and data and isinstance(data[0], Mapping):
            summary = data[0].get("summary_text") or data[0].get("generated_text") or ""

        if not isinstance(summary, str) or not summary.strip():
            raise ProviderError(f"Empty response from Hugging Face model {model}", provider=self.name)

        return summary.strip()


class OpenAIProvider(BaseProvider):
    """OpenAI chat completions summarization."""

    name = ProviderName.OPENAI.value
    is_network = True
    is_paid = True

    BASE_PROMPT = "You are a helpful assistant that creates concise, accurate summaries."

    def __init__(
        self,
        api_key: str,
        model: str = "gpt-3.5-turbo",
        base_url: str = "https://api.openai.com/v1",
        timeout_seconds: float = DEFAULT_TIMEOUT,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        if not api_key:
            raise ProviderAuthenticationError("OpenAI API key not configured", provider=self.name)

        self.api_key = api_key
        self.model = model
        self.base_url = base_url.rstrip("/")
        self.timeout_seconds = timeout_seconds
        self._transport = transport

    def build_system_prompt(self, style: SummaryStyle) -> str:
        if style == SummaryStyle.BULLET:
            return f"{self.BASE_PROMPT} Format your summary as bullet points highlighting key information."
        if style == SummaryStyle.DETAILED:
            return f"{self.BASE_PROMPT} Provide a comprehensive summary that covers all important aspects."
        return f"{self.BASE_PROMPT} Create a brief, clear summary focusing on the main points and key takeaways."

    async def summarize(self, text: str, max_length: int, style: SummaryStyle) -> str:
        user_prompt = (
            f"Please summarize the following text in approximately "
            f"{math.ceil(max_length / 4)} words:\n\n{text}"
        )
        payload = {
            "model": self.model,
            "messages": [
                {"role": "system", "content": self.build_system_prompt(style)},
                {"role": "user", "content": user_prompt},
            ],
            "max_tokens": max_length,
            "temperature": 0.3,
            "top_p": 0.9,
        }

        try:
            async with httpx.AsyncClient(
                base_url=self.base_url,
                headers={
                    "Authorization": f"Bearer {self.api_key}",
                    "Content-Type": "application/json",
                },
                timeout=self.timeout_seconds,
                transport=self._transport,
            ) as client:
                response = await client.post("/chat/completions", json=payload)
        except httpx.TimeoutException as e:
            raise ProviderTimeoutError("OpenAI request timeout", provider=self.name) from e
        except httpx.HTTPError as e:
            raise ProviderError(f"OpenAI connection error: {e}", provider=self.name) from e

        if response.status_code >= 400:
            raise _status_error(response, self.name, "OpenAI")

        data = _safe_json(response, self.name)
        choices = data.get("choices") if isinstance(data, Mapping) else None
        summary = None
        if isinstance(choices, list) and choices and isinstance(choices[0], Mapping):
            message = choices[0].get("message")
            if isinstance(message, Mapping):
                summary = message.get("content")

        if not isinstance(summary, str) or not summary.strip():
            raise ProviderError("Empty response from OpenAI", provider=self.name)

        return summary.strip()


class FallbackProvider(BaseProvider):
    """Local extractive summarization; needs no credentials."""

    name = ProviderName.FALLBACK.value
    is_network = False

    def __init__(self, engine: Optional[ExtractiveSummarizer] = None) -> None:
        self.engine = engine or ExtractiveSummarizer()

    async def summarize(self, text: str, max_length: int, style: SummaryStyle) -> str:
        try:
            return self.engine.summarize(text, max_length=max_length, style=style)
        except Exception as e:
            raise FallbackError(f"Extractive summarization failed: {e}") from e


def _safe_json(response: httpx.Response, provider: str) -> Any:
    try:
        return response.json()
    except ValueError as e:
        raise ProviderError(f"{provider} returned a non-JSON response", provider=provider) from e


def _status_error(response: httpx.Response, provider: str, label: str) -> ProviderError:
    """Map an HTTP error response to the matching ProviderError."""
    status = response.status_code
    message = None
    try:
        body = response.json()
    except ValueError:
        body = None
    if isinstance(body, Mapping):
        error = body.get("error")
        message = error.get("message") if isinstance(error, Mapping) else error

    if status in (401, 403):
        return ProviderAuthenticationError(f"Invalid {label} API key", provider=provider, status_code=status)
    if status == 429:
        return ProviderRateLimitError(f"{label} rate limit exceeded", provider=provider, status_code=status)
    if status >= 500:
        return ProviderError(f"{label} service temporarily unavailable", provider=provider, status_code=status)
    return ProviderError(
        f"{label} API error: {message or 'Unknown error'}",
        provider=provider,
        status_code=status,
    )
