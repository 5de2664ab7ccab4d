"""Language detection over the per-language week/day keyword tables.

Each detector owns its memoization cache: a bounded LRU keyed by the
document prefix and guarded by a lock so one detector can be shared by
worker threads.
"""

import re
import threading
from collections import OrderedDict
from functools import lru_cache

from loguru import logger

from coachplan.config.settings import settings
from coachplan.extraction.enums import Language, LanguageConfidence
from coachplan.extraction.patterns import DAY_NAME_ALIASES, DAY_NAMES, DAYS_OF_WEEK, WEEK_KEYWORDS
from coachplan.extraction.schemas import LanguageDetection

HIGH_CONFIDENCE_THRESHOLD = 3


@lru_cache(maxsize=None)
def week_keyword_regex(keyword: str) -> re.Pattern[str]:
    """Match a week keyword as a whole word or glued to a number ("wk3").

    Single-letter keywords only match glued to a number ("w2").
    """
    if len(keyword) == 1:
        return re.compile(rf"\b{re.escape(keyword)}(?=\d)", re.IGNORECASE)
    return re.compile(rf"\b{re.escape(keyword)}(?:\b|(?=\d))", re.IGNORECASE)


@lru_cache(maxsize=None)
def day_name_regex(name: str) -> re.Pattern[str]:
    return re.compile(rf"\b{re.escape(name)}\b", re.IGNORECASE)


def day_tokens_for(language: Language) -> dict[str, str]:
    """Return localized day token -> canonical English day for a language.

    English tokens are always included so mixed-language documents still
    resolve English headers.
    """
    tokens: dict[str, str] = dict(zip(DAYS_OF_WEEK, DAYS_OF_WEEK, strict=True))
    tokens.update(zip(DAY_NAMES[language], DAYS_OF_WEEK, strict=True))
    if language != Language.ENGLISH:
        tokens.update(DAY_NAME_ALIASES)
    return tokens


def week_keywords_for(language: Language) -> tuple[str, ...]:
    """Week keywords for a language plus the English ones, longest first."""
    keywords = set(WEEK_KEYWORDS[Language.ENGLISH]) | set(WEEK_KEYWORDS[language])
    return tuple(sorted(keywords, key=len, reverse=True))


def normalize_day(token: str) -> str | None:
    """Map any supported day spelling to its English token, or None."""
    lowered = token.strip().lower()
    if lowered in DAYS_OF_WEEK:
        return lowered
    for names in DAY_NAMES.values():
        if lowered in names:
            return DAYS_OF_WEEK[names.index(lowered)]
    return DAY_NAME_ALIASES.get(lowered)


def score_languages(sample: str) -> dict[Language, int]:
    """Count week and day keyword occurrences per language.

    Args:
        sample: Text to score (already truncated by the caller)

    Returns:
        Score per language, in table order
    """
    scores: dict[Language, int] = {}
    for language in Language:
        score = 0
        for keyword in WEEK_KEYWORDS[language]:
            score += len(week_keyword_regex(keyword).findall(sample))
        for name in DAY_NAMES[language]:
            score += len(day_name_regex(name).findall(sample))
        scores[language] = score
    return scores


class LanguageDetector:
    """Scores a document against the keyword tables and memoizes per prefix."""

    def __init__(
        self,
        cache_size: int | None = None,
        sample_chars: int | None = None,
        cache_key_chars: int | None = None,
    ):
        self.cache_size = cache_size if cache_size is not None else settings.language_cache_size
        self.sample_chars = sample_chars if sample_chars is not None else settings.language_sample_chars
        self.cache_key_chars = cache_key_chars if cache_key_chars is not None else settings.language_cache_key_chars
        if self.cache_size <= 0:
            raise ValueError(f"cache_size must be positive, got {self.cache_size}")
        self._cache: OrderedDict[str, LanguageDetection] = OrderedDict()
        self._lock = threading.Lock()

    def detect(self, text: str) -> LanguageDetection:
        """Return the best-matching language for a document.

        The first ``sample_chars`` characters are scored; ties go to the
        language listed first in ``Language``. Confidence is high when the
        winning score exceeds 3.
        """
        key = text[: self.cache_key_chars]
        with self._lock:
            cached = self._cache.get(key)
            if cached is not None:
                self._cache.move_to_end(key)
                return cached

        scores = score_languages(text[: self.sample_chars])
        best_language = Language.ENGLISH
        best_score = -1
        for language, score in scores.items():
            if score > best_score:
                best_language, best_score = language, score

        confidence = LanguageConfidence.HIGH if best_score > HIGH_CONFIDENCE_THRESHOLD else LanguageConfidence.MEDIUM
        detection = LanguageDetection(language=best_language, confidence=confidence, score=best_score)
        logger.debug(
            "Detected document language",
            language=detection.language.value,
            score=detection.score,
            confidence=detection.confidence.value,
        )

        with self._lock:
            self._cache[key] = detection
            self._cache.move_to_end(key)
            while len(self._cache) > self.cache_size:
                self._cache.popitem(last=False)
        return detection

    def clear_cache(self) -> None:
        with self._lock:
            count = len(self._cache)
            self._cache.clear()
        logger.debug(f"Cleared language cache ({count} entries)")

    def cached_entries(self) -> int:
        with self._lock:
            return len(self._cache)
