"""
Factory functions for creating core components from configuration.

Usage:
    from ai_notes.core.factories import create_summarizer

    # Create with default configuration
    summarizer = create_summarizer()

    # Create with overrides
    summarizer = create_summarizer(max_attempts=3)
"""

from typing import Optional

import httpx

from ai_notes.config import Config, get_config
from ai_notes.core.extractive import ExtractiveSummarizer
from ai_notes.core.providers import BaseProvider, FallbackProvider
from ai_notes.core.retry import RetryPolicy
from ai_notes.core.stats import StatsCollector
from ai_notes.core.summarizer import Summarizer, select_provider


def create_extractive_summarizer(config: Optional[Config] = None) -> ExtractiveSummarizer:
    """Create an ExtractiveSummarizer with the configured weighting."""
    config = config or get_config()
    return ExtractiveSummarizer(
        first_sentence_bonus=config.summarizer.first_sentence_bonus,
        last_sentence_bonus=config.summarizer.last_sentence_bonus,
        max_candidate_sentences=config.summarizer.max_candidate_sentences,
    )


def create_retry_policy(
    max_attempts: Optional[int] = None,
    config: Optional[Config] = None,
) -> RetryPolicy:
    """Create the retry policy for the primary provider."""
    config = config or get_config()
    return RetryPolicy(
        max_attempts=max_attempts or config.summarizer.max_attempts,
        base_delay_ms=config.summarizer.backoff_base_ms,
        max_delay_ms=config.summarizer.backoff_max_ms,
    )


def create_summarizer(
    provider: Optional[BaseProvider] = None,
    max_attempts: Optional[int] = None,
    stats: Optional[StatsCollector] = None,
    transport: Optional[httpx.AsyncBaseTransport] = None,
    config: Optional[Config] = None,
) -> Summarizer:
    """Create a configured Summarizer.

    Provider credentials are read once here; the chosen provider stays fixed
    for the summarizer's lifetime.

    Args:
        provider: Override the provider chosen from credentials
        max_attempts: Override the retry attempt budget
        stats: Shared counter collector
        transport: httpx transport for network providers (tests)
        config: Configuration (global config when omitted)

    Returns:
        Configured Summarizer instance
    """
    config = config or get_config()
    fallback = FallbackProvider(create_extractive_summarizer(config))

    return Summarizer(
        provider=provider or select_provider(config.providers, fallback=fallback, transport=transport),
        fallback=fallback,
        retry_policy=create_retry_policy(max_attempts, config),
        stats=stats,
        min_input_length=config.summarizer.min_input_length,
        max_input_length=config.summarizer.max_input_length,
        default_max_length=config.summarizer.default_max_length,
        default_style=config.summarizer.default_style,
    )
