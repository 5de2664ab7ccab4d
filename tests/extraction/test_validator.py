from datetime import date

import pytest

from coachplan.extraction.classifier import classify
from coachplan.extraction.schemas import AcademyInfo, DailySession, SessionEntry, WeekSession, WeekStructure
from coachplan.extraction.validator import (
    apply_session_validation,
    score,
    score_completeness,
    score_consistency,
    score_content,
    validate_session,
)

ACADEMY = AcademyInfo(
    name="Test Academy",
    sport="soccer",
    age_group="U10",
    program="Test Program",
    location="Field 1",
    difficulty="beginner",
)


def _entry(week_number, day_number, duration=60, content="x" * 60, activities=("Passing",), focus=("passing",)):
    return SessionEntry(
        id=f"session-{week_number}-{day_number}",
        week_number=week_number,
        day_number=day_number,
        session_number=1,
        day="monday",
        date=date(2024, 1, 1),
        title="Session",
        time="08:00",
        duration=duration,
        location=ACADEMY.location,
        type="Team Training",
        participants=12,
        activities=list(activities),
        focus=list(focus),
        raw_content=content,
        academy=ACADEMY,
    )


def _week(week_number, entries, synthetic=False, content="x" * 600):
    daily = [
        DailySession(
            id=f"day-{week_number}-{index}",
            week_number=week_number,
            day_number=index,
            day="monday",
            date=date(2024, 1, 1),
            raw_content=content,
            sessions_for_day=[entry],
        )
        for index, entry in enumerate(entries, start=1)
    ]
    return WeekSession(
        id=f"week-{week_number}",
        week_number=week_number,
        title=f"Week {week_number}",
        description="",
        raw_content=content,
        total_duration=sum(entry.duration for entry in entries),
        daily_sessions=daily,
        synthetic=synthetic,
    )


@pytest.fixture
def analysis():
    return classify("Week 1\nMonday\nPassing drills for 60 minutes\nWeek 2\nMonday\nShooting drills")


def test_consistent_weeks_score_full():
    warnings, errors = [], []
    weeks = [_week(1, [_entry(1, 1)]), _week(2, [_entry(2, 1)])]

    assert score_consistency(weeks, warnings, errors) == 25
    assert warnings == [] and errors == []


def test_gap_in_week_numbers():
    warnings, errors = [], []
    weeks = [_week(1, [_entry(1, 1)]), _week(3, [_entry(3, 1)])]

    assert score_consistency(weeks, warnings, errors) == 22
    assert warnings == ["Gap in week numbering between week 1 and week 3"]


def test_duplicate_week_numbers():
    warnings, errors = [], []
    weeks = [_week(1, [_entry(1, 1)]), _week(1, [_entry(1, 2)])]

    assert score_consistency(weeks, warnings, errors) == 22
    assert errors == ["Duplicate week number 1"]


def test_session_count_variance():
    warnings, errors = [], []
    weeks = [_week(1, [_entry(1, 1)]), _week(2, [_entry(2, day) for day in range(1, 7)])]

    assert score_consistency(weeks, warnings, errors) == 20
    assert "Session counts vary significantly between weeks" in warnings


def test_duration_deviation():
    warnings, errors = [], []
    weeks = [_week(1, [_entry(1, 1, duration=60)]), _week(2, [_entry(2, 1, duration=200)])]

    assert score_consistency(weeks, warnings, errors) == 22
    assert "Session durations are inconsistent" in warnings


def test_completeness_missing_weeks(analysis):
    warnings = []
    expecting_ten = analysis.model_copy(update={"week_structure": WeekStructure(total_weeks=10, has_week_structure=True)})

    assert score_completeness([_week(1, [_entry(1, 1)]), _week(2, [_entry(2, 1)])], expecting_ten, warnings) == 15
    assert warnings == ["Extracted 2 of 10 expected weeks"]


def test_completeness_missing_fields(analysis):
    warnings = []
    bare = [_entry(1, day, activities=(), focus=()) for day in (1, 2, 3)]

    assert score_completeness([_week(1, bare), _week(2, [_entry(2, 1)])], analysis, warnings) == 17


@pytest.mark.parametrize(("length", "expected"), [(600, 25), (300, 18), (150, 10), (40, 5)])
def test_content_bands(length, expected):
    warnings, errors = [], []

    assert score_content([_week(1, [_entry(1, 1)], content="x" * length)], warnings, errors) == expected


def test_very_little_content_is_an_error():
    warnings, errors = [], []
    score_content([_week(1, [_entry(1, 1)], content="x")], warnings, errors)

    assert len(errors) == 1


def test_validate_session_full_confidence():
    result = validate_session(_entry(1, 1))

    assert result.confidence == 1.0
    assert result.is_valid
    assert result.warnings == []


def test_validate_session_deductions():
    result = validate_session(_entry(1, 1, duration=200, content="short", activities=(), focus=()))

    assert result.confidence == 0.6
    assert result.is_valid
    assert len(result.warnings) == 4


def test_synthetic_schedule_scores_zero_on_grounded_checks(analysis):
    weeks = [_week(number, [_entry(number, 1)], synthetic=True) for number in range(1, 5)]
    report = score(weeks, analysis)

    assert report.scores.consistency_score == 0
    assert report.scores.completeness_score == 0
    assert report.overall_confidence == round((report.scores.structure_score + report.scores.content_score) / 100, 2)
    assert any("generated fallback" in warning for warning in report.warnings)


def test_score_matches_subscores(analysis):
    weeks = [_week(1, [_entry(1, 1)]), _week(2, [_entry(2, 1)])]
    report = score(weeks, analysis)

    assert report.overall_confidence == round(report.scores.total / 100, 2)
    assert len(report.per_session_validation) == 2


def test_apply_session_validation_returns_copies(analysis):
    weeks = [_week(1, [_entry(1, 1, content="short")])]
    report = score(weeks, analysis)

    annotated = apply_session_validation(weeks, report)

    original = weeks[0].daily_sessions[0].sessions_for_day[0]
    updated = annotated[0].daily_sessions[0].sessions_for_day[0]
    assert original.extraction_confidence == 1.0
    assert original.extraction_warnings == []
    assert updated.extraction_confidence == 0.85
    assert updated.extraction_warnings == ["Limited session content"]
