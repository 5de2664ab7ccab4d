"""Extraction strategies, one per OrganizationPattern.

Each handler takes an ExtractionContext and returns WeekSessions ordered
by week number. A handler called on a document that lacks the structure
it expects falls back to the unstructured schedule, so every handler can
be invoked on its own.
"""

from collections.abc import Callable

from loguru import logger

from coachplan.extraction.boundaries import (
    INCOMPLETE_CONTENT_NOTE,
    DayGroup,
    group_days_in_week,
    split_day_into_sessions,
    split_week_text,
    week_anchors,
)
from coachplan.extraction.builders import (
    ExtractionContext,
    build_daily_session,
    build_overview_day,
    build_session_entry,
    build_week_session,
    derive_focus_from_days,
    display_day,
)
from coachplan.extraction.enums import OrganizationPattern
from coachplan.extraction.errors import UnknownPatternError
from coachplan.extraction.fields import (
    basic_equipment,
    extract_notes,
    extract_week_description,
    find_duration,
    generate_default_focus,
)
from coachplan.extraction.patterns import SESSION_DAY_ROTATION, UNSTRUCTURED_TRAINING_DAYS
from coachplan.extraction.schemas import DailySession, Drill, WeekSession

StrategyHandler = Callable[[ExtractionContext], list[WeekSession]]

DAYS_PER_DAILY_WEEK = 5
SESSIONS_PER_WEEK = 3
UNSTRUCTURED_WEEKS = 4
UNSTRUCTURED_CONTENT_CHARS = 1000
PROSE_DAY_EXCERPT_CHARS = 1000


def _chunks(items: list, size: int) -> list[list]:
    return [items[index : index + size] for index in range(0, len(items), size)]


def _day_from_group(ctx: ExtractionContext, week_number: int, day_number: int, group: DayGroup) -> DailySession:
    chunks = split_day_into_sessions(group.content)
    header_duration = find_duration(group.header) if len(chunks) == 1 else None
    warnings: list[str] = []
    extra_notes: list[str] = []
    if group.is_incomplete:
        warnings.append(f"{INCOMPLETE_CONTENT_NOTE}: {display_day(group.day)} has little or no text")
        extra_notes.append(INCOMPLETE_CONTENT_NOTE)

    entries = [
        build_session_entry(
            ctx,
            week_number=week_number,
            day_number=day_number,
            session_number=index,
            day=group.day,
            content=chunk,
            header=group.header,
            duration=find_duration(chunk) or header_duration,
            notes=extract_notes(chunk) + extra_notes,
            warnings=warnings,
        )
        for index, chunk in enumerate(chunks, start=1)
    ]
    return build_daily_session(
        ctx,
        week_number=week_number,
        day_number=day_number,
        day=group.day,
        raw_content=group.content,
        sessions=entries,
        is_shared=group.is_shared,
        shared_with=group.shared_with,
    )


def extract_weekly_with_days(ctx: ExtractionContext) -> list[WeekSession]:
    """Slice per week header, then group each week by day headers.

    A week without recognizable day headers becomes a single week-overview day.
    """
    anchors = week_anchors(ctx.analysis.week_structure)
    if not anchors:
        logger.warning("No week markers for weekly_with_days extraction; using fallback schedule")
        return extract_unstructured(ctx)

    weeks: list[WeekSession] = []
    for anchor, week_text in split_week_text(ctx.text, anchors):
        groups = group_days_in_week(week_text, ctx.language, ctx.settings.min_day_content_chars)
        if groups:
            daily = [_day_from_group(ctx, anchor.week_number, index, group) for index, group in enumerate(groups, start=1)]
        else:
            logger.debug(f"Week {anchor.week_number} has no day headers; using week overview")
            daily = [build_overview_day(ctx, anchor.week_number, week_text)]
        weeks.append(build_week_session(ctx, week_number=anchor.week_number, raw_content=week_text, daily_sessions=daily))

    return sorted(weeks, key=lambda week: week.week_number)


def _overview_weeks(ctx: ExtractionContext, headers_only: bool) -> list[WeekSession]:
    anchors = week_anchors(ctx.analysis.week_structure, headers_only=headers_only)
    weeks = [
        build_week_session(
            ctx,
            week_number=anchor.week_number,
            raw_content=week_text,
            daily_sessions=[build_overview_day(ctx, anchor.week_number, week_text)],
        )
        for anchor, week_text in split_week_text(ctx.text, anchors)
    ]
    return sorted(weeks, key=lambda week: week.week_number)


def extract_weekly_only(ctx: ExtractionContext) -> list[WeekSession]:
    """One week-overview session per week header."""
    weeks = _overview_weeks(ctx, headers_only=True)
    if not weeks:
        logger.warning("No week markers for weekly_only extraction; using fallback schedule")
        return extract_unstructured(ctx)
    return weeks


def _prose_day_groups(ctx: ExtractionContext) -> list[DayGroup]:
    """Day excerpts for documents that mention days without header lines.

    Each day owns the text from its first mention to the next mention of a
    different day.
    """
    markers = ctx.analysis.day_structure.day_markers
    groups: list[DayGroup] = []
    for day in ctx.analysis.day_structure.detected_days:
        first = next(marker for marker in markers if marker.day == day)
        following = [marker.position for marker in markers if marker.position > first.position and marker.day != day]
        end = min(following) if following else len(ctx.text)
        excerpt = ctx.text[first.position : end].strip()[:PROSE_DAY_EXCERPT_CHARS]
        groups.append(DayGroup(day=day, content=excerpt or f"Training content for {day}", header=first.context))
    return groups


def extract_daily_only(ctx: ExtractionContext) -> list[WeekSession]:
    """Partition days into weeks of at most five, one session per day."""
    groups = group_days_in_week(ctx.text, ctx.language, ctx.settings.min_day_content_chars) or _prose_day_groups(ctx)
    if not groups:
        logger.warning("No day markers for daily_only extraction; using fallback schedule")
        return extract_unstructured(ctx)

    weeks: list[WeekSession] = []
    for week_number, week_groups in enumerate(_chunks(groups, DAYS_PER_DAILY_WEEK), start=1):
        daily: list[DailySession] = []
        for day_number, group in enumerate(week_groups, start=1):
            entry = build_session_entry(
                ctx,
                week_number=week_number,
                day_number=day_number,
                session_number=1,
                day=group.day,
                content=group.content,
                header=group.header,
                duration=ctx.settings.default_session_duration,
                warnings=[f"{INCOMPLETE_CONTENT_NOTE}: {display_day(group.day)} has little or no text"]
                if group.is_incomplete
                else None,
            )
            daily.append(
                build_daily_session(
                    ctx,
                    week_number=week_number,
                    day_number=day_number,
                    day=group.day,
                    raw_content=group.content,
                    sessions=[entry],
                    is_shared=group.is_shared,
                    shared_with=group.shared_with,
                )
            )
        raw_content = "\n\n".join(dict.fromkeys(group.content for group in week_groups))
        weeks.append(
            build_week_session(
                ctx,
                week_number=week_number,
                raw_content=raw_content,
                daily_sessions=daily,
                focus=derive_focus_from_days(daily),
            )
        )
    return weeks


def extract_session_based(ctx: ExtractionContext) -> list[WeekSession]:
    """Group session markers three per week, assigning days round-robin."""
    markers = ctx.analysis.session_structure.session_markers
    if not markers:
        logger.warning("No session markers for session_based extraction; using fallback schedule")
        return extract_unstructured(ctx)

    positions = [marker.position for marker in markers] + [len(ctx.text)]
    contents = [ctx.text[start:end].strip() for start, end in zip(positions, positions[1:], strict=False)]

    weeks: list[WeekSession] = []
    indexed = list(zip(markers, contents, strict=True))
    for week_number, week_items in enumerate(_chunks(indexed, SESSIONS_PER_WEEK), start=1):
        daily: list[DailySession] = []
        for index, (marker, content) in enumerate(week_items):
            day = SESSION_DAY_ROTATION[index % len(SESSION_DAY_ROTATION)]
            entry = build_session_entry(
                ctx,
                week_number=week_number,
                day_number=index + 1,
                session_number=1,
                day=day,
                content=content,
                header=marker.context,
                title=marker.context or marker.text,
                session_type=marker.session_type,
            )
            daily.append(
                build_daily_session(
                    ctx,
                    week_number=week_number,
                    day_number=index + 1,
                    day=day,
                    raw_content=content,
                    sessions=[entry],
                )
            )
        weeks.append(
            build_week_session(
                ctx,
                week_number=week_number,
                raw_content="\n\n".join(content for _, content in week_items),
                daily_sessions=daily,
                focus=derive_focus_from_days(daily),
            )
        )
    return weeks


def extract_unstructured(ctx: ExtractionContext) -> list[WeekSession]:
    """Synthesize four weeks of Monday/Wednesday/Friday sessions.

    Every session shares the first 1000 characters of the document as raw
    content and carries sport defaults; weeks are marked synthetic.
    """
    logger.warning("No usable structure found; generating fallback schedule", document=ctx.document_id)
    sport = ctx.academy.sport
    raw_content = ctx.text[:UNSTRUCTURED_CONTENT_CHARS]
    description = extract_week_description(raw_content)

    weeks: list[WeekSession] = []
    for week_number in range(1, UNSTRUCTURED_WEEKS + 1):
        focus = generate_default_focus(week_number, sport)
        daily: list[DailySession] = []
        for day_number, day in enumerate(UNSTRUCTURED_TRAINING_DAYS, start=1):
            entry = build_session_entry(
                ctx,
                week_number=week_number,
                day_number=day_number,
                session_number=1,
                day=day,
                content=raw_content,
                duration=ctx.settings.default_session_duration,
                title=f"{ctx.academy.name} - Week {week_number}, {display_day(day)} Training",
                session_type="Team Training",
                activities=[f"{display_day(day)} training activities"],
                drills=[Drill(name=f"Basic {sport} drills", description="Fundamental skill development")],
                objectives=[f"Week {week_number} skill development"],
                equipment=basic_equipment(sport),
                focus=list(focus),
                notes=[f"Standard {day} training session"],
            )
            daily.append(
                build_daily_session(
                    ctx,
                    week_number=week_number,
                    day_number=day_number,
                    day=day,
                    raw_content=raw_content,
                    sessions=[entry],
                )
            )
        weeks.append(
            build_week_session(
                ctx,
                week_number=week_number,
                raw_content=raw_content,
                daily_sessions=daily,
                focus=focus,
                title=f"Week {week_number} Training",
                description=description,
                synthetic=True,
            )
        )
    return weeks


def alternative_extraction(ctx: ExtractionContext) -> list[WeekSession]:
    """Re-extract as one overview session per week mentioned anywhere in the text.

    Used when the primary strategy's output looks incomplete: inline week
    mentions count as anchors too, not only week headers. Returns [] when
    the document mentions no weeks.
    """
    return _overview_weeks(ctx, headers_only=False)


STRATEGIES: dict[OrganizationPattern, StrategyHandler] = {
    OrganizationPattern.WEEKLY_WITH_DAYS: extract_weekly_with_days,
    OrganizationPattern.WEEKLY_ONLY: extract_weekly_only,
    OrganizationPattern.DAILY_ONLY: extract_daily_only,
    OrganizationPattern.SESSION_BASED: extract_session_based,
    OrganizationPattern.UNSTRUCTURED: extract_unstructured,
}


def get_strategy(pattern: OrganizationPattern | str) -> StrategyHandler:
    try:
        return STRATEGIES[OrganizationPattern(pattern)]
    except ValueError as err:
        raise UnknownPatternError(
            "UNKNOWN_PATTERN",
            f"No extraction strategy for pattern {pattern!r}",
            {"available": [value.value for value in OrganizationPattern]},
        ) from err
