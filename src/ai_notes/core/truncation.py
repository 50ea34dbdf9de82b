"""
Last-resort summary by truncation.

Used when every other tier of the fallback chain has failed, so nothing in
here may raise.
"""

import math
import re

SENTENCE_SPLIT_RE = re.compile(r"[.!?]+")
ELLIPSIS = "..."
DEFAULT_MAX_LENGTH = 150


def _coerce_max_length(max_length) -> int:
    try:
        value = int(max_length)
    except (TypeError, ValueError):
        value = DEFAULT_MAX_LENGTH
    return max(1, value)


def truncate_chars(text: str, limit: int) -> str:
    """Cut ``text`` to ``limit`` characters, preferring a word boundary.

    The cut snaps back to the last space when that space lies within the
    final 20% of the window. An ellipsis is appended only if text was dropped.
    """
    if len(text) <= limit:
        return text

    truncated = text[:limit]
    last_space = truncated.rfind(" ")
    if last_space > limit * 0.8:
        return truncated[:last_space] + ELLIPSIS
    return truncated + ELLIPSIS


def simple_truncate(text, max_length=DEFAULT_MAX_LENGTH) -> str:
    """Shorten text to roughly ``max_length`` tokens.

    Whole sentences are kept while they fit in ``max_length / 4`` words.
    Text without sentence punctuation is cut at ``max_length * 4`` characters.

    Args:
        text: Input text (non-strings are coerced)
        max_length: Target size in tokens

    Returns:
        Truncated text, never longer than about ``max_length * 4`` characters
    """
    if text is None:
        text = ""
    elif not isinstance(text, str):
        text = str(text)

    max_length = _coerce_max_length(max_length)
    target_words = math.ceil(max_length / 4)
    char_limit = math.ceil(max_length * 4)

    if not SENTENCE_SPLIT_RE.search(text):
        return truncate_chars(text, char_limit)

    sentences = [s.strip() for s in SENTENCE_SPLIT_RE.split(text) if s.strip()]
    if not sentences:
        return truncate_chars(text.strip(), char_limit)

    parts: list[str] = []
    word_count = 0

    for sentence in sentences:
        words = sentence.split()
        if word_count + len(words) <= target_words:
            parts.append(sentence)
            word_count += len(words)
        elif not parts:
            # First sentence alone overflows the budget
            head = truncate_chars(" ".join(words[:target_words]), char_limit)
            return head if head.endswith(ELLIPSIS) else head + ELLIPSIS
        else:
            break

    summary = ". ".join(parts)
    if summary and not summary.endswith("."):
        summary += "."

    # Very long words can still blow the character budget
    return truncate_chars(summary, char_limit)


def fit_within(summary: str, original: str, max_length=DEFAULT_MAX_LENGTH) -> str:
    """Return ``summary`` unless it is longer than ``original``.

    An oversized summary is replaced by a truncation of ``original``, cut
    harder when needed so the result never exceeds ``len(original)``.
    """
    if len(summary) <= len(original):
        return summary

    shorter = simple_truncate(original, max_length)
    if len(shorter) <= len(original):
        return shorter
    return truncate_chars(original, max(0, len(original) - len(ELLIPSIS)))
