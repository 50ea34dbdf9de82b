"""
Extractive summarizer used when no network provider is available.

Scores the input's own sentences by word frequency, position, length,
keywords and numeric content, then stitches the best ones back together in
document order.
"""

import math
import re
from collections import Counter
from typing import Optional

from ai_notes.core.truncation import ELLIPSIS, fit_within, simple_truncate, truncate_chars
from ai_notes.core.types import ScoredSentence, SummaryStyle
from ai_notes.logger import get_logger

logger = get_logger(__name__)

SENTENCE_SPLIT_RE = re.compile(r"[.!?]+")
WORD_SPLIT_RE = re.compile(r"\W+")
DIGIT_RE = re.compile(r"\d")

STOP_WORDS = frozenset({
    "the", "and", "or", "but", "in", "on", "at", "to", "for", "of", "with", "by",
    "is", "are", "was", "were", "be", "been", "have", "has", "had",
    "do", "does", "did", "will", "would", "could", "should", "may", "might", "can",
    "this", "that", "these", "those",
})

KEYWORDS = (
    "important", "key", "main", "significant", "conclusion", "summary", "result",
    "therefore", "however", "moreover", "furthermore", "consequently", "finally",
    "first", "second", "third", "primary", "secondary", "essential", "critical",
    "shows", "demonstrates", "indicates", "reveals", "suggests", "proves",
)

BULLET = "•"

# Score multipliers
KEYWORD_BONUS = 1.4
NUMERIC_BONUS = 1.2
SHORT_PENALTY = 0.3
LONG_PENALTY = 0.7
IDEAL_LENGTH_BONUS = 1.2

# Selection
SELECTION_RATIO = 0.3
MIN_SELECTED = 2
MAX_SELECTED = 4
WORDS_PER_TOKEN = 3.5

# Characters of source text a keyword summary must leave room for
MIN_KEYWORD_TAIL = 20


class ExtractiveSummarizer:
    """Frequency-based extractive summarization."""

    def __init__(
        self,
        first_sentence_bonus: float = 1.8,
        last_sentence_bonus: float = 1.3,
        max_candidate_sentences: int = 20,
        min_sentence_length: int = 10,
    ) -> None:
        """Initialize the extractive summarizer.

        Args:
            first_sentence_bonus: Score multiplier for the first sentence
            last_sentence_bonus: Score multiplier for the last sentence
            max_candidate_sentences: Only the first N sentences are considered
            min_sentence_length: Fragments this short or shorter are dropped
        """
        self.first_sentence_bonus = first_sentence_bonus
        self.last_sentence_bonus = last_sentence_bonus
        self.max_candidate_sentences = max_candidate_sentences
        self.min_sentence_length = min_sentence_length

    def _split_sentences(self, text: str) -> list[str]:
        """Split text into candidate sentences.

        Text without any sentence punctuation yields no candidates.
        """
        if not SENTENCE_SPLIT_RE.search(text):
            return []

        sentences = [s.strip() for s in SENTENCE_SPLIT_RE.split(text)]
        sentences = [s for s in sentences if len(s) > self.min_sentence_length]
        return sentences[: self.max_candidate_sentences]

    @staticmethod
    def _tokenize(text: str) -> list[str]:
        return [w for w in WORD_SPLIT_RE.split(text.lower()) if len(w) > 2]

    def word_frequencies(self, text: str) -> Counter:
        """Count content words (longer than two characters, not stop words)."""
        return Counter(w for w in self._tokenize(text) if w not in STOP_WORDS)

    def _score_sentence(
        self,
        sentence: str,
        position: int,
        total: int,
        frequencies: Counter,
    ) -> float:
        """Score a sentence for importance.

        Args:
            sentence: Sentence text
            position: Position in document (0-indexed)
            total: Total number of candidate sentences
            frequencies: Word frequencies of the whole document

        Returns:
            Score (higher is more important)
        """
        words = self._tokenize(sentence)
        score = float(sum(frequencies.get(w, 0) for w in words))

        if position == 0:
            score *= self.first_sentence_bonus
        if position == total - 1:
            score *= self.last_sentence_bonus

        word_count = len(words)
        if word_count < 5:
            score *= SHORT_PENALTY
        if word_count > 35:
            score *= LONG_PENALTY
        if 8 <= word_count <= 25:
            score *= IDEAL_LENGTH_BONUS

        lowered = sentence.lower()
        for keyword in KEYWORDS:
            if keyword in lowered:
                score *= KEYWORD_BONUS

        if DIGIT_RE.search(sentence):
            score *= NUMERIC_BONUS

        return score

    def score_sentences(self, sentences: list[str], text: str) -> list[ScoredSentence]:
        """Score every candidate sentence against the document's frequencies."""
        frequencies = self.word_frequencies(text)
        total = len(sentences)
        return [
            ScoredSentence(
                sentence=sentence,
                score=self._score_sentence(sentence, i, total, frequencies),
                index=i,
            )
            for i, sentence in enumerate(sentences)
        ]

    @staticmethod
    def _selection_size(total: int) -> int:
        return min(max(MIN_SELECTED, math.ceil(total * SELECTION_RATIO)), MAX_SELECTED)

    def select_sentences(self, scored: list[ScoredSentence]) -> list[str]:
        """Pick the top sentences and restore their document order."""
        ranked = sorted(scored, key=lambda s: s.score, reverse=True)
        selected = ranked[: self._selection_size(len(scored))]
        selected.sort(key=lambda s: s.index)
        return [s.sentence for s in selected]

    @staticmethod
    def _assemble(sentences: list[str], target_words: int) -> str:
        """Concatenate sentences while the running word count fits the target."""
        parts: list[str] = []
        word_count = 0

        for sentence in sentences:
            words = sentence.split()
            if word_count + len(words) <= target_words:
                text = sentence.strip()
                if not text.endswith((".", "!", "?")):
                    text += "."
                parts.append(text)
                word_count += len(words)
            elif not parts:
                # Never emit nothing because the first pick is too long
                truncated = " ".join(words[: max(10, target_words)])
                return truncated if truncated.endswith(".") else truncated + ELLIPSIS

        return " ".join(parts)

    def keyword_summary(self, text: str, max_words: int) -> str:
        """Summarize as a list of top words followed by truncated text."""
        limit = int(min(10, max_words / 2))
        top_words = [word for word, _ in self.word_frequencies(text).most_common(limit)]

        if not top_words:
            return simple_truncate(text, max_words * 5)

        prefix = f"Key topics: {', '.join(top_words)}. "
        room = len(text) - len(prefix)
        if room < MIN_KEYWORD_TAIL:
            return simple_truncate(text, max_words * 5)

        tail = simple_truncate(text, max_words * 3)
        if len(tail) > room:
            tail = truncate_chars(text, room - len(ELLIPSIS))
        return prefix + tail

    @staticmethod
    def format_style(summary: str, style: SummaryStyle) -> str:
        """Apply bullet or detailed formatting to an assembled summary."""
        if not summary:
            return summary

        if style == SummaryStyle.BULLET:
            points = [p.strip() for p in SENTENCE_SPLIT_RE.split(summary) if len(p.strip()) > 15]
            if not points:
                points = [summary.strip()]
            return "\n".join(f"{BULLET} {point}" for point in points)

        if style == SummaryStyle.DETAILED:
            return f"Summary: {summary}"

        return summary

    def summarize(
        self,
        text: str,
        max_length: int = 150,
        style: Optional[SummaryStyle] = None,
    ) -> str:
        """Generate an extractive summary.

        Args:
            text: Input text
            max_length: Target summary size in tokens
            style: Output style (concise when omitted)

        Returns:
            Summary text
        """
        style = SummaryStyle(style) if style else SummaryStyle.CONCISE
        target_words = math.ceil(max_length / WORDS_PER_TOKEN)

        sentences = self._split_sentences(text)
        summary = ""
        if sentences:
            scored = self.score_sentences(sentences, text)
            summary = self._assemble(self.select_sentences(scored), target_words).strip()

        if not summary:
            logger.debug("No sentences qualified, using keyword summary")
            summary = self.keyword_summary(text, target_words)

        styled = self.format_style(summary, style)
        summary = fit_within(styled, text, max_length)
        if summary != styled:
            logger.debug("Styled summary longer than input, truncating instead")
        logger.info(f"Extractive summarization completed: {len(summary)} characters")
        return summary
