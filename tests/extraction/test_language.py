from concurrent.futures import ThreadPoolExecutor

import pytest

from coachplan.extraction.enums import Language, LanguageConfidence
from coachplan.extraction.language import LanguageDetector, day_tokens_for, normalize_day, score_languages


def test_detects_english_with_high_confidence():
    detector = LanguageDetector()
    detection = detector.detect("Week 1\nMonday: drills\nWednesday: passing\nWeek 2\nFriday: games")

    assert detection.language == Language.ENGLISH
    assert detection.confidence == LanguageConfidence.HIGH
    assert detection.score == 5


def test_detects_spanish(spanish_document):
    detection = LanguageDetector().detect(spanish_document)

    assert detection.language == Language.SPANISH
    assert detection.confidence == LanguageConfidence.MEDIUM


def test_tie_goes_to_first_language_in_table():
    # "domingo" is both Spanish and Portuguese
    scores = score_languages("domingo")
    assert scores[Language.SPANISH] == scores[Language.PORTUGUESE] == 1

    assert LanguageDetector().detect("domingo").language == Language.SPANISH


def test_no_keywords_defaults_to_english():
    detection = LanguageDetector().detect("nothing to see here")

    assert detection.language == Language.ENGLISH
    assert detection.score == 0
    assert detection.confidence == LanguageConfidence.MEDIUM


def test_week_keyword_glued_to_number_counts():
    assert score_languages("wk3 and wk4")[Language.ENGLISH] == 2


def test_single_letter_week_keyword_needs_glued_number():
    assert score_languages("circuit w 2 balls")[Language.ENGLISH] == 0
    assert score_languages("w2 recovery")[Language.ENGLISH] == 1


def test_only_sample_prefix_is_scored():
    detector = LanguageDetector(sample_chars=20)
    text = "x" * 30 + " semana lunes martes"

    assert detector.detect(text).score == 0


def test_cache_hit_returns_same_detection():
    detector = LanguageDetector()
    first = detector.detect("Week 1 Monday")

    assert detector.detect("Week 1 Monday") is first
    assert detector.cached_entries() == 1


def test_cache_is_bounded_lru():
    detector = LanguageDetector(cache_size=2)
    first_a = detector.detect("a")
    first_b = detector.detect("b")
    detector.detect("a")
    detector.detect("c")

    assert detector.cached_entries() == 2
    assert detector.detect("a") is first_a
    assert detector.detect("b") is not first_b


def test_cache_keyed_by_prefix():
    detector = LanguageDetector(cache_key_chars=5)
    first = detector.detect("Week 1 Monday")

    assert detector.detect("Week 9 Sunday") is first


def test_clear_cache():
    detector = LanguageDetector()
    detector.detect("Week 1")
    detector.clear_cache()

    assert detector.cached_entries() == 0


def test_cache_size_must_be_positive():
    with pytest.raises(ValueError, match="cache_size must be positive"):
        LanguageDetector(cache_size=0)


def test_detector_shared_across_threads():
    detector = LanguageDetector(cache_size=4)
    texts = [f"Semana {n} lunes" for n in range(1, 9)] * 5

    with ThreadPoolExecutor(max_workers=8) as pool:
        results = list(pool.map(detector.detect, texts))

    assert {result.language for result in results} == {Language.SPANISH}
    assert detector.cached_entries() <= 4


def test_normalize_day():
    assert normalize_day("Lunes") == "monday"
    assert normalize_day("mercredi") == "wednesday"
    assert normalize_day("miercoles") == "wednesday"
    assert normalize_day("Sonntag") == "sunday"
    assert normalize_day("week_overview") is None


def test_day_tokens_always_include_english():
    tokens = day_tokens_for(Language.GERMAN)

    assert tokens["monday"] == "monday"
    assert tokens["montag"] == "monday"
