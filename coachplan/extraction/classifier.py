"""Structure classifier.

Finds week, day and session markers in a document and selects one
OrganizationPattern from a fixed decision table:

1. week markers and day markers inside week spans -> weekly_with_days
2. week markers only                               -> weekly_only
3. day markers without week markers                -> daily_only
4. session markers                                 -> session_based
5. anything else                                   -> unstructured
"""

import re

from loguru import logger

from coachplan.extraction.enums import Language, OrganizationLevel, OrganizationPattern, SessionMarkerKind
from coachplan.extraction.fields import find_duration, identify_session_type
from coachplan.extraction.language import LanguageDetector, day_tokens_for, week_keywords_for
from coachplan.extraction.patterns import PROGRESSION_KEYWORDS
from coachplan.extraction.schemas import (
    DayMarker,
    DayStructure,
    SessionMarker,
    SessionStructure,
    StructureAnalysis,
    TimeStructure,
    WeekMarker,
    WeekStructure,
)

MIN_WEEK = 1
MAX_WEEK = 52

_HEADER_PREFIX_CHARS = " \t#*-•>|"

_SESSION_PATTERNS: tuple[tuple[SessionMarkerKind, re.Pattern[str]], ...] = (
    (SessionMarkerKind.NUMBERED, re.compile(r"\bsession\s*#?\s*(\d+)", re.IGNORECASE)),
    (SessionMarkerKind.WORKOUT, re.compile(r"\bworkout\s*#?\s*(\d+)", re.IGNORECASE)),
    (SessionMarkerKind.TIMESTAMP, re.compile(r"^[ \t]*(?:[-*•][ \t]*)?(\d{1,2}:\d{2})\b", re.MULTILINE)),
    (SessionMarkerKind.TRAINING_SESSION, re.compile(r"\btraining\s+session\b", re.IGNORECASE)),
)

_TIME_TOKEN_RE = re.compile(r"\b\d{1,2}:\d{2}\b|\b\d{1,2}\s*(?:am|pm)\b", re.IGNORECASE)

# Points per structural signal when assessing the organization level
_LEVEL_POINTS = 2

_CONFIDENCE_WEIGHTS = {
    "weeks": 0.3,
    "days": 0.25,
    "sessions": 0.25,
    "time": 0.2,
}


def _line_bounds(text: str, position: int) -> tuple[int, int]:
    start = text.rfind("\n", 0, position) + 1
    end = text.find("\n", position)
    return start, len(text) if end == -1 else end


def _line_at(text: str, position: int) -> str:
    start, end = _line_bounds(text, position)
    return text[start:end].strip()


def _week_regex(language: Language) -> re.Pattern[str]:
    keywords = week_keywords_for(language)
    words = "|".join(re.escape(keyword) for keyword in keywords if len(keyword) > 1)
    letters = "|".join(re.escape(keyword) for keyword in keywords if len(keyword) == 1)
    # single letters only count when glued to the number ("w2", never "w 2")
    prefix = f"(?:{words})\\s*[#:.]?\\s*"
    if letters:
        prefix = f"(?:{prefix}|(?:{letters}))"
    return re.compile(rf"\b(?:training\s+)?{prefix}(\d+)\b", re.IGNORECASE)


def _day_regex(tokens: dict[str, str]) -> re.Pattern[str]:
    alternation = "|".join(re.escape(token) for token in sorted(tokens, key=len, reverse=True))
    return re.compile(rf"\b({alternation})\b", re.IGNORECASE)


def detect_week_structure(text: str, language: Language = Language.ENGLISH) -> WeekStructure:
    """Find "Week N" markers, discarding numbers outside 1..52."""
    markers: list[WeekMarker] = []
    discarded = 0
    for match in _week_regex(language).finditer(text):
        week_number = int(match.group(1))
        if not MIN_WEEK <= week_number <= MAX_WEEK:
            discarded += 1
            logger.debug(f"Discarding out-of-range week marker '{match.group(0)}'")
            continue
        line_start, _ = _line_bounds(text, match.start())
        markers.append(
            WeekMarker(
                week_number=week_number,
                position=match.start(),
                line_index=text.count("\n", 0, match.start()),
                text=match.group(0),
                context=_line_at(text, match.start()),
                is_header=text[line_start : match.start()].strip(_HEADER_PREFIX_CHARS) == "",
            )
        )

    if discarded:
        logger.warning(f"Discarded {discarded} week marker(s) outside {MIN_WEEK}-{MAX_WEEK}")

    detected = sorted({marker.week_number for marker in markers})
    return WeekStructure(
        total_weeks=max(detected) if detected else 0,
        detected_weeks=detected,
        week_markers=markers,
        has_week_structure=bool(markers),
    )


def detect_day_structure(text: str, language: Language = Language.ENGLISH) -> DayStructure:
    tokens = day_tokens_for(language)
    markers: list[DayMarker] = []
    frequency: dict[str, int] = {}
    for match in _day_regex(tokens).finditer(text):
        token = match.group(1)
        day = tokens[token.lower()]
        frequency[day] = frequency.get(day, 0) + 1
        markers.append(DayMarker(day=day, token=token, position=match.start(), context=_line_at(text, match.start())))

    detected = list(dict.fromkeys(marker.day for marker in markers))
    return DayStructure(
        total_days=len(detected),
        detected_days=detected,
        day_markers=markers,
        day_frequency=frequency,
        has_day_structure=bool(markers),
    )


def detect_session_structure(text: str) -> SessionStructure:
    """Find numbered sessions/workouts, "training session" labels and timestamped lines.

    Overlapping matches keep the earlier pattern in priority order, and a
    numbered session repeated later in the text is kept only once.
    """
    accepted: list[tuple[int, int, SessionMarker]] = []
    seen_numbers: set[tuple[SessionMarkerKind, int]] = set()
    for kind, pattern in _SESSION_PATTERNS:
        for match in pattern.finditer(text):
            start, end = match.start(), match.end()
            if any(start < other_end and other_start < end for other_start, other_end, _ in accepted):
                continue
            number: int | None = None
            if kind in (SessionMarkerKind.NUMBERED, SessionMarkerKind.WORKOUT):
                number = int(match.group(1))
                if (kind, number) in seen_numbers:
                    continue
                seen_numbers.add((kind, number))
            context = _line_at(text, start)
            accepted.append(
                (
                    start,
                    end,
                    SessionMarker(
                        kind=kind,
                        text=match.group(0).strip(),
                        position=start,
                        session_number=number,
                        session_type=identify_session_type(context),
                        context=context,
                    ),
                )
            )

    markers = [marker for _, _, marker in sorted(accepted, key=lambda item: item[0])]
    return SessionStructure(
        total_sessions=len(markers),
        session_markers=markers,
        has_session_structure=bool(markers),
    )


def detect_time_structure(text: str) -> TimeStructure:
    times = [match.group(0) for match in _TIME_TOKEN_RE.finditer(text)]
    return TimeStructure(
        has_time_info=bool(times),
        has_duration_info=find_duration(text) is not None,
        times=times[:10],
    )


def assess_organization_level(
    text: str,
    weeks: WeekStructure,
    days: DayStructure,
    sessions: SessionStructure,
    time: TimeStructure,
) -> OrganizationLevel:
    lowered = text.lower()
    signals = [
        weeks.has_week_structure,
        days.has_day_structure,
        sessions.has_session_structure,
        time.has_duration_info,
        any(keyword in lowered for keyword in PROGRESSION_KEYWORDS),
    ]
    points = _LEVEL_POINTS * sum(signals)
    if points >= 8:
        return OrganizationLevel.HIGHLY_STRUCTURED
    if points >= 5:
        return OrganizationLevel.MODERATELY_STRUCTURED
    if points >= 2:
        return OrganizationLevel.BASIC_STRUCTURE
    return OrganizationLevel.UNSTRUCTURED


def structure_confidence(
    weeks: WeekStructure,
    days: DayStructure,
    sessions: SessionStructure,
    time: TimeStructure,
) -> float:
    confidence = 0.0
    if weeks.has_week_structure:
        confidence += _CONFIDENCE_WEIGHTS["weeks"]
    if days.has_day_structure:
        confidence += _CONFIDENCE_WEIGHTS["days"]
    if sessions.has_session_structure:
        confidence += _CONFIDENCE_WEIGHTS["sessions"]
    if time.has_time_info or time.has_duration_info:
        confidence += _CONFIDENCE_WEIGHTS["time"]
    return round(min(confidence, 1.0), 2)


def determine_organization_pattern(
    weeks: WeekStructure,
    days: DayStructure,
    sessions: SessionStructure,
) -> OrganizationPattern:
    if weeks.has_week_structure:
        first_week = min(marker.position for marker in weeks.week_markers)
        if any(marker.position >= first_week for marker in days.day_markers):
            return OrganizationPattern.WEEKLY_WITH_DAYS
        return OrganizationPattern.WEEKLY_ONLY
    if days.has_day_structure:
        return OrganizationPattern.DAILY_ONLY
    if sessions.has_session_structure:
        return OrganizationPattern.SESSION_BASED
    return OrganizationPattern.UNSTRUCTURED


def classify(text: str, detector: LanguageDetector | None = None) -> StructureAnalysis:
    """Analyze a document's structure and pick its organization pattern.

    Args:
        text: Plain document text
        detector: Language detector (and cache) to use; a private one is
            created when omitted

    Returns:
        StructureAnalysis with exactly one OrganizationPattern
    """
    detection = (detector or LanguageDetector()).detect(text)
    weeks = detect_week_structure(text, detection.language)
    days = detect_day_structure(text, detection.language)
    sessions = detect_session_structure(text)
    time = detect_time_structure(text)

    pattern = determine_organization_pattern(weeks, days, sessions)
    analysis = StructureAnalysis(
        organization_pattern=pattern,
        organization_level=assess_organization_level(text, weeks, days, sessions, time),
        language=detection,
        week_structure=weeks,
        day_structure=days,
        session_structure=sessions,
        time_structure=time,
        confidence=structure_confidence(weeks, days, sessions, time),
    )
    logger.info(
        "Classified document structure",
        pattern=pattern.value,
        language=detection.language.value,
        weeks=len(weeks.detected_weeks),
        days=len(days.detected_days),
        sessions=sessions.total_sessions,
    )
    return analysis
