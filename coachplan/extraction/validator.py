"""Validation and confidence scoring for an extracted schedule.

Whole-document confidence is the sum of four 0-25 sub-scores divided by
100. Each session is also scored on its own (1.0 minus deductions, floor
0.3) so callers can flag individual sessions for manual review.
"""

from loguru import logger

from coachplan.extraction.enums import OrganizationLevel
from coachplan.extraction.schemas import (
    SessionEntry,
    SessionValidation,
    StructureAnalysis,
    ValidationReport,
    ValidationScores,
    WeekSession,
)

MAX_SUBSCORE = 25

STRUCTURE_SCORES: dict[OrganizationLevel, int] = {
    OrganizationLevel.HIGHLY_STRUCTURED: 25,
    OrganizationLevel.MODERATELY_STRUCTURED: 18,
    OrganizationLevel.BASIC_STRUCTURE: 10,
    OrganizationLevel.UNSTRUCTURED: 5,
}

# (minimum mean characters, score), checked in order
CONTENT_SCORE_BANDS: tuple[tuple[int, int], ...] = ((500, 25), (200, 18), (100, 10))
MIN_CONTENT_SCORE = 5

WEEK_GAP_PENALTY = 3
DUPLICATE_WEEK_PENALTY = 3
SESSION_COUNT_PENALTY = 5
SESSION_COUNT_TOLERANCE = 2
DURATION_PENALTY = 3
DURATION_TOLERANCE = 0.5

MISSING_WEEKS_PENALTY = 10
MISSING_WEEKS_RATIO = 0.8
MISSING_FIELDS_PENALTY = 8

MIN_PLAUSIBLE_DURATION = 30
MAX_PLAUSIBLE_DURATION = 180
MIN_SESSION_CONTENT_CHARS = 50
SESSION_CONFIDENCE_FLOOR = 0.3
VALID_SESSION_CONFIDENCE = 0.6


def _all_entries(weeks: list[WeekSession]) -> list[SessionEntry]:
    return [entry for week in weeks for daily in week.daily_sessions for entry in daily.sessions_for_day]


def score_structure(analysis: StructureAnalysis, warnings: list[str]) -> int:
    level = analysis.organization_level
    if level == OrganizationLevel.UNSTRUCTURED:
        warnings.append("Document has little recognizable structure")
    return STRUCTURE_SCORES[level]


def score_content(weeks: list[WeekSession], warnings: list[str], errors: list[str]) -> int:
    """Score the mean raw-content length of the daily sessions."""
    lengths = [len(daily.raw_content) for week in weeks for daily in week.daily_sessions]
    mean_length = sum(lengths) / len(lengths) if lengths else 0.0
    for minimum, band_score in CONTENT_SCORE_BANDS:
        if mean_length > minimum:
            if band_score < 18:
                warnings.append(f"Limited content per session (average {mean_length:.0f} characters)")
            return band_score
    errors.append(f"Very little content extracted per session (average {mean_length:.0f} characters)")
    return MIN_CONTENT_SCORE


def score_consistency(weeks: list[WeekSession], warnings: list[str], errors: list[str]) -> int:
    score = MAX_SUBSCORE
    numbers = [week.week_number for week in weeks]

    for previous, current in zip(numbers, numbers[1:], strict=False):
        if current == previous:
            errors.append(f"Duplicate week number {current}")
            score -= DUPLICATE_WEEK_PENALTY
        elif current - previous > 1:
            warnings.append(f"Gap in week numbering between week {previous} and week {current}")
            score -= WEEK_GAP_PENALTY

    counts = [len(week.daily_sessions) for week in weeks]
    if counts:
        mean_count = sum(counts) / len(counts)
        if any(abs(count - mean_count) > SESSION_COUNT_TOLERANCE for count in counts):
            warnings.append("Session counts vary significantly between weeks")
            score -= SESSION_COUNT_PENALTY

    durations = [entry.duration for entry in _all_entries(weeks)]
    if durations:
        mean_duration = sum(durations) / len(durations)
        if any(abs(duration - mean_duration) > mean_duration * DURATION_TOLERANCE for duration in durations):
            warnings.append("Session durations are inconsistent")
            score -= DURATION_PENALTY

    return max(score, 0)


def score_completeness(weeks: list[WeekSession], analysis: StructureAnalysis, warnings: list[str]) -> int:
    score = MAX_SUBSCORE
    expected_weeks = analysis.week_structure.total_weeks
    if expected_weeks and len(weeks) < expected_weeks * MISSING_WEEKS_RATIO:
        warnings.append(f"Extracted {len(weeks)} of {expected_weeks} expected weeks")
        score -= MISSING_WEEKS_PENALTY

    missing_fields = 0
    for entry in _all_entries(weeks):
        missing_fields += int(entry.duration <= 0)
        missing_fields += int(not entry.activities)
        missing_fields += int(not entry.focus)
    if missing_fields > 2 * len(weeks):
        warnings.append(f"{missing_fields} session fields (duration, activities, focus) are missing")
        score -= MISSING_FIELDS_PENALTY

    return max(score, 0)


def validate_session(entry: SessionEntry) -> SessionValidation:
    """Score one session on its own.

    Deductions: 0.15 missing duration, 0.05 implausible duration (outside
    30-180 minutes), 0.15 content under 50 characters, 0.10 each for no
    activities and no focus.
    """
    confidence = 1.0
    warnings: list[str] = []

    if not entry.duration or entry.duration <= 0:
        confidence -= 0.15
        warnings.append("Missing or invalid duration")
    elif not MIN_PLAUSIBLE_DURATION <= entry.duration <= MAX_PLAUSIBLE_DURATION:
        confidence -= 0.05
        warnings.append(f"Unusual duration: {entry.duration} minutes")

    if len(entry.raw_content) < MIN_SESSION_CONTENT_CHARS:
        confidence -= 0.15
        warnings.append("Limited session content")

    if not entry.activities:
        confidence -= 0.10
        warnings.append("No activities identified")

    if not entry.focus:
        confidence -= 0.10
        warnings.append("No focus areas identified")

    confidence = max(round(confidence, 2), SESSION_CONFIDENCE_FLOOR)
    return SessionValidation(
        session_id=entry.id,
        week_number=entry.week_number,
        day=entry.day,
        confidence=confidence,
        is_valid=confidence >= VALID_SESSION_CONFIDENCE,
        warnings=warnings,
    )


def score(weeks: list[WeekSession], analysis: StructureAnalysis) -> ValidationReport:
    """Score an extracted schedule against the document's structure analysis.

    Consistency and completeness only consider weeks grounded in the
    document; a fully synthetic schedule scores 0 on both.

    Args:
        weeks: Extracted weeks, ordered by week number
        analysis: Classifier output for the same document

    Returns:
        ValidationReport with sub-scores, overall confidence and per-session results
    """
    warnings: list[str] = []
    errors: list[str] = []

    structure_score = score_structure(analysis, warnings)
    content_score = score_content(weeks, warnings, errors)

    grounded = [week for week in weeks if not week.synthetic]
    if grounded:
        consistency_score = score_consistency(grounded, warnings, errors)
        completeness_score = score_completeness(grounded, analysis, warnings)
    else:
        warnings.append("No sessions were found in the document text; the schedule is a generated fallback")
        consistency_score = 0
        completeness_score = 0

    scores = ValidationScores(
        structure_score=structure_score,
        content_score=content_score,
        consistency_score=consistency_score,
        completeness_score=completeness_score,
    )
    per_session = [validate_session(entry) for entry in _all_entries(weeks)]
    report = ValidationReport(
        overall_confidence=round(scores.total / 100, 2),
        scores=scores,
        warnings=warnings,
        errors=errors,
        per_session_validation=per_session,
    )
    logger.info(
        "Scored extraction",
        overall_confidence=report.overall_confidence,
        warnings=len(warnings),
        errors=len(errors),
        invalid_sessions=sum(not item.is_valid for item in per_session),
    )
    return report


def apply_session_validation(weeks: list[WeekSession], report: ValidationReport) -> list[WeekSession]:
    """Return copies of the weeks with each session's confidence and warnings filled in."""
    by_id = {item.session_id: item for item in report.per_session_validation}

    def annotate(entry: SessionEntry) -> SessionEntry:
        validation = by_id.get(entry.id)
        if validation is None:
            return entry.model_copy(deep=True)
        return entry.model_copy(
            update={
                "extraction_confidence": validation.confidence,
                "extraction_warnings": [*entry.extraction_warnings, *validation.warnings],
            },
            deep=True,
        )

    return [
        week.model_copy(
            update={
                "daily_sessions": [
                    daily.model_copy(update={"sessions_for_day": [annotate(entry) for entry in daily.sessions_for_day]})
                    for daily in week.daily_sessions
                ]
            }
        )
        for week in weeks
    ]
