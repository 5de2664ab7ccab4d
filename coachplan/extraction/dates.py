"""Calendar helpers for placing extracted sessions on dates.

Schedules are anchored on a base date: week 1 starts on the base date,
week N on base + (N - 1) * 7 days.
"""

from datetime import date, timedelta

from coachplan.extraction.language import normalize_day
from coachplan.extraction.patterns import DAYS_OF_WEEK


def week_start(week_number: int, base_date: date) -> date:
    """Return the first calendar day of a schedule week."""
    if week_number < 1:
        raise ValueError(f"week_number must be >= 1, got {week_number}")
    return base_date + timedelta(days=(week_number - 1) * 7)


def date_for(week_number: int, day_name: str, base_date: date | None = None) -> date:
    """Return the date of a named day within a schedule week.

    Moves forward 0-6 days from the week start to the day's weekday, never
    backward. Names that are not weekdays (e.g. "week_overview") stay on
    the week start.

    Args:
        week_number: 1-based week in the schedule
        day_name: Day-of-week token in any supported language
        base_date: First day of the schedule (defaults to today)

    Returns:
        Calendar date for the session
    """
    start = week_start(week_number, base_date or date.today())
    day = normalize_day(day_name)
    if day is None:
        return start
    offset = (DAYS_OF_WEEK.index(day) - start.weekday()) % 7
    return start + timedelta(days=offset)
