"""Error types raised by the summarization core."""


class SummarizationError(RuntimeError):
    """Base error for summarization failures."""


class InvalidInputError(SummarizationError):
    """Raised when the input text fails type or length validation."""


class ProviderError(SummarizationError):
    """Raised when a network provider fails to return a usable summary."""

    def __init__(self, message: str, provider: str = "", status_code: int | None = None) -> None:
        super().__init__(message)
        self.provider = provider
        self.status_code = status_code


class ProviderTimeoutError(ProviderError):
    """Raised when a provider does not answer within its timeout."""


class ProviderAuthenticationError(ProviderError):
    """Raised when the provider rejects or lacks a credential."""


class ProviderRateLimitError(ProviderError):
    """Raised when the provider answers HTTP 429."""


class InvalidResponseError(ProviderError):
    """Raised when a provider's text does not look like a summary."""


class FallbackError(SummarizationError):
    """Raised when the extractive engine fails unexpectedly."""


class ProviderUnavailableError(SummarizationError):
    """Raised when no tier of the fallback chain produced a summary."""
