"""Summaries of an extraction result for listing and scheduling views."""

from coachplan.extraction.schemas import ExtractionResult, ExtractionStats, UpcomingSession


def get_extraction_stats(result: ExtractionResult) -> ExtractionStats:
    weeks = result.sessions
    days = [daily for week in weeks for daily in week.daily_sessions]
    entries = [entry for daily in days for entry in daily.sessions_for_day]

    return ExtractionStats(
        total_weeks=len(weeks),
        total_daily_sessions=len(days),
        total_session_entries=len(entries),
        average_sessions_per_week=round(len(days) / len(weeks), 2) if weeks else 0.0,
        sports=sorted({entry.academy.sport for entry in entries}),
        equipment=sorted({item for entry in entries for item in entry.equipment}),
        focus=sorted({tag for entry in entries for tag in entry.focus}),
        organization_pattern=result.organization_pattern,
        overall_confidence=result.validation.overall_confidence,
    )


def to_upcoming_sessions(result: ExtractionResult) -> list[UpcomingSession]:
    """Flatten the tree into schedule rows sorted by date, then time."""
    rows = [
        UpcomingSession(
            session_id=entry.id,
            week_number=entry.week_number,
            day=entry.day,
            date=entry.date,
            time=entry.time,
            duration=entry.duration,
            title=entry.title,
            type=entry.type,
            location=entry.location,
            focus=list(entry.focus),
            academy_name=entry.academy.name,
        )
        for week in result.sessions
        for daily in week.daily_sessions
        for entry in daily.sessions_for_day
    ]
    return sorted(rows, key=lambda row: (row.date, row.time, row.week_number))
