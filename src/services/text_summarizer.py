"""Extractive text summarization for uploaded project documents.

Sentences are scored on position, length, importance keywords and a few
structural hints, then the best ones are packed greedily into the length
budget and put back in document order.

Very large inputs (by length or sentence count) take a quick path that
keeps the leading words instead of scoring sentences.
"""

import hashlib
import logging
import math
import re
import threading
from collections import OrderedDict
from collections.abc import Iterable
from dataclasses import dataclass

from src.models.config import SummarizerConfig
from src.services.keywords import ELLIPSIS, IMPORTANT_KEYWORDS, LINKING_VERBS, MAX_KEYWORD_MATCHES

logger = logging.getLogger(__name__)

# Average characters per word and per sentence used to size budgets
CHARS_PER_WORD = 5
CHARS_PER_SENTENCE = 50

SENTENCE_BOUNDARY = re.compile(r"(?<=[.!?])\s+")
WHITESPACE = re.compile(r"\s+")
LINKING_VERB_PATTERN = re.compile(rf"\b({'|'.join(LINKING_VERBS)})\b")
DIGIT_PATTERN = re.compile(r"\d")
PUNCTUATION_PATTERN = re.compile(r"[:\-]")


@dataclass
class ScoredSentence:
    """A sentence with its score and position in the cleaned text."""

    text: str
    score: float
    index: int


class SummaryCache:
    """Bounded LRU cache of summaries keyed by a content hash."""

    def __init__(self, capacity: int = 128):
        self.capacity = capacity
        self._entries: OrderedDict[str, str] = OrderedDict()
        self._lock = threading.Lock()

    @staticmethod
    def key_for(text: str) -> str:
        digest = hashlib.sha256(text.encode("utf-8", "surrogatepass")).hexdigest()
        return f"{len(text)}:{digest}"

    def get(self, key: str) -> str | None:
        with self._lock:
            if key not in self._entries:
                return None
            self._entries.move_to_end(key)
            return self._entries[key]

    def set(self, key: str, summary: str) -> None:
        with self._lock:
            self._entries[key] = summary
            self._entries.move_to_end(key)
            while len(self._entries) > self.capacity:
                self._entries.popitem(last=False)

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, key: str) -> bool:
        return key in self._entries


class TextSummarizer:
    """Summarizes long text to at most ``target_length`` characters.

    Identical inputs are memoized in a SummaryCache, which may be shared
    between summarizers; writes are idempotent.
    """

    def __init__(
        self,
        target_length: int | None = None,
        cache: SummaryCache | None = None,
        config: SummarizerConfig | None = None,
        keywords: Iterable[str] = IMPORTANT_KEYWORDS,
    ):
        """Initialize the summarizer.

        Args:
            target_length: Maximum summary length. Defaults to config.target_length.
            cache: Summary cache. A private one is created if not provided.
            config: Thresholds and scoring constants.
            keywords: Importance keywords, matched case-insensitively.

        Raises:
            ValueError: If target_length leaves no room beside the ellipsis.
        """
        self.config = config or SummarizerConfig()
        self.target_length = target_length or self.config.target_length
        if self.target_length <= len(ELLIPSIS):
            raise ValueError(
                f"target_length must be greater than {len(ELLIPSIS)}, got {self.target_length}"
            )
        self.cache = cache if cache is not None else SummaryCache(self.config.cache_capacity)
        self.keywords = tuple(dict.fromkeys(k.lower() for k in keywords))

    def summarize(self, text: str) -> str:
        """Summarize text, returning it unchanged when already short enough."""
        if not text or len(text) <= self.target_length:
            return text

        cache_key = self.cache.key_for(text)
        cached = self.cache.get(cache_key)
        if cached is not None:
            logger.debug("Returning cached summary")
            return cached

        if len(text) > self.config.quick_mode_threshold:
            logger.debug(f"Quick mode for {len(text)} character input")
            summary = self.quick_summarize(text)
        else:
            summary = self._extractive_summary(text)

        self.cache.set(cache_key, summary)
        return summary

    def _extractive_summary(self, text: str) -> str:
        cleaned = self.clean_text(text)
        sentences = self.split_into_sentences(cleaned)

        if len(sentences) > self.config.max_sentences:
            logger.debug(f"Quick mode for {len(sentences)} sentences")
            return self.quick_summarize(text)

        scored = self.score_sentences(sentences)
        selected = self.select_sentences(scored)
        summary = self.reconstruct_summary(selected)
        if not summary:
            # Nothing fit the budget; keep the opening of the document instead
            return self._truncate(cleaned)
        return summary

    def quick_summarize(self, text: str) -> str:
        """Keep the first target_length / 5 words."""
        words = text.split()
        target_words = self.target_length // CHARS_PER_WORD
        return " ".join(words[:target_words]) + ELLIPSIS

    def clean_text(self, text: str) -> str:
        return WHITESPACE.sub(" ", text).strip()

    def split_into_sentences(self, text: str) -> list[str]:
        """Split on terminal punctuation and drop fragments."""
        return [
            sentence
            for sentence in SENTENCE_BOUNDARY.split(text)
            if len(sentence) > self.config.min_sentence_length
        ]

    def score_sentences(self, sentences: list[str]) -> list[ScoredSentence]:
        """Score every sentence, processing in fixed-size batches."""
        total = len(sentences)
        position_scores = self.calculate_position_scores(total)
        results: list[ScoredSentence] = []

        batch_size = self.config.batch_size
        for start in range(0, total, batch_size):
            for index in range(start, min(start + batch_size, total)):
                sentence = sentences[index]
                score = self.calculate_sentence_score(sentence, index, position_scores)
                results.append(ScoredSentence(text=sentence, score=score, index=index))

        return results

    def calculate_position_scores(self, total: int) -> list[int]:
        """Lead and closing sentences score 3, the next bands 2, the middle 1."""
        scores = []
        for index in range(total):
            position = index / total
            if position <= 0.2 or position >= 0.8:
                scores.append(3)
            elif position <= 0.4 or position >= 0.6:
                scores.append(2)
            else:
                scores.append(1)
        return scores

    def calculate_sentence_score(
        self, sentence: str, index: int, position_scores: list[int]
    ) -> float:
        score = position_scores[index]

        length = len(sentence)
        if 50 <= length <= 150:
            score += 3
        elif 30 <= length <= 200:
            score += 2
        else:
            score += 1

        lowered = sentence.lower()
        keyword_count = 0
        for keyword in self.keywords:
            if keyword in lowered:
                keyword_count += 1
                if keyword_count >= MAX_KEYWORD_MATCHES:
                    break
        score += min(
            keyword_count * self.config.keyword_score_multiplier,
            self.config.max_keyword_score,
        )

        if LINKING_VERB_PATTERN.search(lowered):
            score += 2
        if DIGIT_PATTERN.search(sentence):
            score += 1
        if PUNCTUATION_PATTERN.search(sentence):
            score += 1

        return score

    def select_sentences(self, scored: list[ScoredSentence]) -> list[ScoredSentence]:
        """Greedily take top sentences until the next one would overflow."""
        candidates = sorted(scored, key=lambda s: s.score, reverse=True)
        candidates = candidates[: math.ceil(self.target_length / CHARS_PER_SENTENCE)]

        selected = []
        used = 0
        for sentence in candidates:
            # +1 for the joining space
            needed = len(sentence.text) + 1
            if used + needed > self.target_length:
                break
            selected.append(sentence)
            used += needed

        return sorted(selected, key=lambda s: s.index)

    def reconstruct_summary(self, selected: list[ScoredSentence]) -> str:
        if not selected:
            return ""
        return self._truncate(" ".join(s.text for s in selected))

    def _truncate(self, text: str) -> str:
        if len(text) <= self.target_length:
            return text
        return text[: self.target_length - len(ELLIPSIS)] + ELLIPSIS

    def clear_cache(self) -> None:
        self.cache.clear()

    def get_cache_stats(self) -> dict[str, int]:
        """Cache size with a rough memory estimate (100 bytes per entry)."""
        size = len(self.cache)
        return {
            "size": size,
            "memoryUsage": size * 100,
            "capacity": self.cache.capacity,
        }


# Module-level singleton
_text_summarizer: TextSummarizer | None = None


def get_text_summarizer(config: SummarizerConfig | None = None) -> TextSummarizer:
    """Get the global summarizer.

    Args:
        config: Summarizer settings (only used on first call).
    """
    global _text_summarizer
    if _text_summarizer is None:
        _text_summarizer = TextSummarizer(config=config)
    return _text_summarizer


def reset_text_summarizer() -> None:
    """Reset the global summarizer (for testing)."""
    global _text_summarizer
    _text_summarizer = None
