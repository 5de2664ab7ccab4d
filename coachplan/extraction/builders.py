"""Assembly of SessionEntry / DailySession / WeekSession nodes.

Strategies decide what text belongs to which week and day; these helpers
turn that text into fully populated, content-addressed nodes.
"""

from dataclasses import dataclass
from datetime import date

from coachplan.config.settings import Settings
from coachplan.extraction.dates import date_for
from coachplan.extraction.enums import Language
from coachplan.extraction.fields import (
    estimate_participants,
    extract_activities,
    extract_drills,
    extract_equipment,
    extract_focus,
    extract_notes,
    extract_objectives,
    extract_time,
    extract_week_description,
    extract_week_title,
    find_duration,
    identify_session_type,
)
from coachplan.extraction.ids import day_id, session_id, week_id
from coachplan.extraction.patterns import DEFAULT_FOCUS
from coachplan.extraction.schemas import AcademyInfo, DailySession, Drill, SessionEntry, StructureAnalysis, WeekSession

WEEK_OVERVIEW_DAY = "week_overview"


@dataclass(frozen=True)
class ExtractionContext:
    """Everything a strategy needs for one extraction call.

    Attributes:
        text: Full document text
        document_id: Source document id, part of every generated id
        analysis: Classifier output for the document
        academy: Academy info snapshot copied into every session
        base_date: First day of the schedule
        settings: Extraction defaults
    """

    text: str
    document_id: str
    analysis: StructureAnalysis
    academy: AcademyInfo
    base_date: date
    settings: Settings

    @property
    def language(self) -> Language:
        return self.analysis.language.language

    @property
    def pattern(self) -> str:
        return self.analysis.organization_pattern.value


def display_day(day: str) -> str:
    return day.replace("_", " ").title()


def build_session_entry(
    ctx: ExtractionContext,
    *,
    week_number: int,
    day_number: int,
    session_number: int,
    day: str,
    content: str,
    header: str = "",
    duration: int | None = None,
    title: str | None = None,
    session_type: str | None = None,
    activities: list[str] | None = None,
    drills: list[Drill] | None = None,
    objectives: list[str] | None = None,
    equipment: list[str] | None = None,
    focus: list[str] | None = None,
    notes: list[str] | None = None,
    warnings: list[str] | None = None,
) -> SessionEntry:
    """Build one leaf session, extracting every field not passed explicitly.

    The header (day or session heading) supplies the time when the content
    has none. An explicit duration wins over one found in the content.
    """
    sport = ctx.academy.sport
    resolved_duration = duration or find_duration(content) or ctx.settings.default_session_duration
    return SessionEntry(
        id=session_id(ctx.document_id, week_number, day_number, session_number, content),
        week_number=week_number,
        day_number=day_number,
        session_number=session_number,
        day=day,
        date=date_for(week_number, day, ctx.base_date),
        title=title or f"{ctx.academy.name} - Week {week_number}, {display_day(day)} Session {session_number}",
        time=extract_time(content, default=extract_time(header, default=ctx.settings.default_session_time)),
        duration=resolved_duration,
        location=ctx.academy.location,
        type=session_type or identify_session_type(content),
        participants=estimate_participants(f"{ctx.academy.age_group}\n{content}"),
        activities=extract_activities(content) if activities is None else activities,
        drills=extract_drills(content, sport) if drills is None else drills,
        objectives=extract_objectives(content) if objectives is None else objectives,
        equipment=extract_equipment(content, sport) if equipment is None else equipment,
        focus=extract_focus(content) if focus is None else focus,
        notes=extract_notes(content) if notes is None else notes,
        raw_content=content,
        academy=ctx.academy.model_copy(deep=True),
        extraction_warnings=list(warnings or []),
    )


def build_daily_session(
    ctx: ExtractionContext,
    *,
    week_number: int,
    day_number: int,
    day: str,
    raw_content: str,
    sessions: list[SessionEntry],
    is_shared: bool = False,
    shared_with: list[str] | None = None,
) -> DailySession:
    return DailySession(
        id=day_id(ctx.document_id, week_number, day_number, day, raw_content),
        week_number=week_number,
        day_number=day_number,
        day=day,
        date=date_for(week_number, day, ctx.base_date),
        raw_content=raw_content,
        is_shared_session=is_shared,
        shared_with=list(shared_with or []),
        sessions_for_day=sessions,
    )


def build_overview_day(ctx: ExtractionContext, week_number: int, week_text: str) -> DailySession:
    """One "week overview" day carrying the whole week text as a single session."""
    entry = build_session_entry(
        ctx,
        week_number=week_number,
        day_number=1,
        session_number=1,
        day=WEEK_OVERVIEW_DAY,
        content=week_text,
        duration=find_duration(week_text) or ctx.settings.overview_session_duration,
        title=f"{ctx.academy.name} - Week {week_number} Overview",
        session_type="Weekly Overview",
    )
    return build_daily_session(
        ctx,
        week_number=week_number,
        day_number=1,
        day=WEEK_OVERVIEW_DAY,
        raw_content=week_text,
        sessions=[entry],
    )


def derive_focus_from_days(daily_sessions: list[DailySession], limit: int = 3) -> list[str]:
    tags: list[str] = []
    for daily in daily_sessions:
        for entry in daily.sessions_for_day:
            for tag in entry.focus:
                if tag not in DEFAULT_FOCUS and tag not in tags:
                    tags.append(tag)
    return tags[:limit] or list(DEFAULT_FOCUS)


def build_week_session(
    ctx: ExtractionContext,
    *,
    week_number: int,
    raw_content: str,
    daily_sessions: list[DailySession],
    focus: list[str] | None = None,
    title: str | None = None,
    description: str | None = None,
    synthetic: bool = False,
) -> WeekSession:
    week_focus = focus if focus is not None else extract_focus(raw_content)
    return WeekSession(
        id=week_id(ctx.document_id, ctx.pattern, week_number, raw_content),
        week_number=week_number,
        title=title or extract_week_title(raw_content, week_number, week_focus),
        description=description or extract_week_description(raw_content),
        raw_content=raw_content,
        focus=week_focus,
        total_duration=sum(entry.duration for daily in daily_sessions for entry in daily.sessions_for_day),
        daily_sessions=daily_sessions,
        synthetic=synthetic,
    )
