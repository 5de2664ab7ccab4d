"""Boundary & grouping engine.

Splits a document into week spans and a week into day spans. Day headers
come in two shapes, checked in this order per line:

- shared headers naming several days ("Day 1 (Monday) & Day 3 (Friday)",
  "Monday/Friday/Saturday"); every day in the group owns the same text
- individual headers ("## Day 2 (Wednesday)", "Monday (1 hour)", "Monday:")

A day's text runs from the line after its header to the next header of a
day outside its group, the next major section, or the end of the week,
whichever comes first.
"""

import re
from dataclasses import dataclass, field
from functools import lru_cache

from loguru import logger

from coachplan.config.settings import settings
from coachplan.extraction.enums import Language
from coachplan.extraction.language import day_tokens_for, week_keywords_for
from coachplan.extraction.patterns import DAY_WORDS, MAJOR_SECTION_PATTERNS, SESSION_SPLIT_PATTERNS
from coachplan.extraction.schemas import WeekMarker, WeekStructure

INCOMPLETE_CONTENT_NOTE = "Content extraction incomplete"

_SESSION_SPLIT_RES = [re.compile(pattern, re.IGNORECASE) for pattern in SESSION_SPLIT_PATTERNS]
_MAJOR_SECTION_RES = [re.compile(pattern, re.IGNORECASE) for pattern in MAJOR_SECTION_PATTERNS]


@dataclass(frozen=True)
class DayHeader:
    day: str
    line_index: int
    header: str
    group: tuple[str, ...] = ()


@dataclass
class DayGroup:
    """Text owned by one day of a week.

    Attributes:
        day: Canonical English day token
        content: Owned text, byte-identical across a shared group
        is_shared: Whether the header named several days
        shared_with: The other days registered from the same header
        header: Header line the day was found on
        line_index: Header line within the week text
        is_incomplete: Owned text was shorter than the minimum
    """

    day: str
    content: str
    is_shared: bool = False
    shared_with: list[str] = field(default_factory=list)
    header: str = ""
    line_index: int = 0
    is_incomplete: bool = False


@dataclass(frozen=True)
class _HeaderPatterns:
    tokens: dict[str, str]
    shared_numbered: re.Pattern[str]
    numbered_unit: re.Pattern[str]
    shared_named: re.Pattern[str]
    named_unit: re.Pattern[str]
    individual: tuple[re.Pattern[str], ...]
    week_section: re.Pattern[str]


@lru_cache(maxsize=None)
def _header_patterns(language: Language) -> _HeaderPatterns:
    tokens = day_tokens_for(language)
    day_alt = "|".join(re.escape(token) for token in sorted(tokens, key=len, reverse=True))
    words = set(DAY_WORDS[Language.ENGLISH]) | set(DAY_WORDS[language])
    word_alt = "|".join(re.escape(word) for word in sorted(words, key=len, reverse=True))
    week_alt = "|".join(re.escape(keyword) for keyword in week_keywords_for(language) if len(keyword) > 1)

    numbered_unit = rf"(?:{word_alt})\s*\d+\s*\(\s*({day_alt})\s*\)"
    joiner = r"\s*(?:&|/|,|\+|\band\b)\s*"
    prefix = r"^[#*>\s-]*"
    return _HeaderPatterns(
        tokens=tokens,
        shared_numbered=re.compile(rf"{prefix}{numbered_unit}(?:{joiner}{numbered_unit})+", re.IGNORECASE),
        numbered_unit=re.compile(numbered_unit, re.IGNORECASE),
        shared_named=re.compile(rf"{prefix}(?:{day_alt})(?:\s*[/&]\s*(?:{day_alt}))+\b", re.IGNORECASE),
        named_unit=re.compile(rf"\b({day_alt})\b", re.IGNORECASE),
        individual=(
            re.compile(rf"{prefix}{numbered_unit}", re.IGNORECASE),
            re.compile(rf"{prefix}(?:{word_alt})\s*\d+\s*[-–—:]\s*({day_alt})\b", re.IGNORECASE),
            re.compile(rf"{prefix}({day_alt})(?:\s*\(.*?\))?[\s*:]*$", re.IGNORECASE),
            re.compile(rf"{prefix}({day_alt})\**\s*[-–—:]", re.IGNORECASE),
        ),
        week_section=re.compile(rf"^(?:{week_alt})\s+\d+", re.IGNORECASE),
    )


# -----------------------------
# Week spans
# -----------------------------
def week_anchors(week_structure: WeekStructure, headers_only: bool = True) -> list[WeekMarker]:
    """Pick one marker per week number to slice the document on.

    Markers that open their line are preferred; inline mentions ("as in
    week 2") are used only when no week header exists at all.
    """
    markers = week_structure.week_markers
    if headers_only and any(marker.is_header for marker in markers):
        markers = [marker for marker in markers if marker.is_header]

    anchors: dict[int, WeekMarker] = {}
    for marker in markers:
        anchors.setdefault(marker.week_number, marker)
    return sorted(anchors.values(), key=lambda marker: marker.position)


def split_week_text(text: str, anchors: list[WeekMarker]) -> list[tuple[WeekMarker, str]]:
    """Slice the document from each anchor to the next one."""
    spans: list[tuple[WeekMarker, str]] = []
    for index, anchor in enumerate(anchors):
        end = anchors[index + 1].position if index + 1 < len(anchors) else len(text)
        spans.append((anchor, text[anchor.position : end]))
    return spans


# -----------------------------
# Day spans
# -----------------------------
def is_major_section(line: str, language: Language = Language.ENGLISH) -> bool:
    stripped = line.strip()
    if any(pattern.match(stripped) for pattern in _MAJOR_SECTION_RES):
        return True
    return _header_patterns(language).week_section.match(stripped) is not None


def _match_shared(line: str, patterns: _HeaderPatterns) -> list[str]:
    match = patterns.shared_numbered.match(line)
    unit = patterns.numbered_unit
    if match is None:
        match = patterns.shared_named.match(line)
        unit = patterns.named_unit
    if match is None:
        return []
    days = [patterns.tokens[found.group(1).lower()] for found in unit.finditer(match.group(0))]
    return list(dict.fromkeys(days))


def _match_individual(line: str, patterns: _HeaderPatterns) -> str | None:
    for pattern in patterns.individual:
        match = pattern.match(line)
        if match:
            return patterns.tokens[match.group(1).lower()]
    return None


def find_day_headers(lines: list[str], language: Language = Language.ENGLISH) -> list[DayHeader]:
    """Register day headers in line order.

    A day is registered once per week. A shared header registers only the
    days not seen yet, and groups exactly those days, so every member of a
    group ends up with the same text.
    """
    patterns = _header_patterns(language)
    registered: dict[str, DayHeader] = {}
    for index, raw_line in enumerate(lines):
        line = raw_line.strip()
        if not line:
            continue

        shared_days = _match_shared(line, patterns)
        if shared_days:
            new_days = [day for day in shared_days if day not in registered]
            group = tuple(new_days) if len(new_days) > 1 else ()
            for day in new_days:
                registered[day] = DayHeader(day=day, line_index=index, header=line, group=group)
            continue

        day = _match_individual(line, patterns)
        if day and day not in registered:
            registered[day] = DayHeader(day=day, line_index=index, header=line)

    return sorted(registered.values(), key=lambda header: header.line_index)


def group_days_in_week(
    week_text: str,
    language: Language = Language.ENGLISH,
    min_content_chars: int | None = None,
) -> list[DayGroup]:
    """Group a week's text by day, in order of first appearance.

    Args:
        week_text: Text of one week (or of a whole document without weeks)
        language: Detected document language; English headers always match
        min_content_chars: Owned text shorter than this is flagged incomplete

    Returns:
        One DayGroup per registered day; empty when no header was found
    """
    minimum = settings.min_day_content_chars if min_content_chars is None else min_content_chars
    lines = week_text.split("\n")
    headers = find_day_headers(lines, language)
    header_lines = sorted({header.line_index for header in headers})

    groups: list[DayGroup] = []
    for header in headers:
        next_header = next((line for line in header_lines if line > header.line_index), len(lines))
        end = next_header
        for index in range(header.line_index + 1, next_header):
            if is_major_section(lines[index], language):
                end = index
                break

        owned = lines[header.line_index + 1 : end]
        while owned and not owned[0].strip():
            owned.pop(0)
        content = "\n".join(owned).strip()

        is_incomplete = len(content) < minimum
        if is_incomplete:
            logger.warning(
                f"Day '{header.day}' has only {len(content)} characters of content",
                header=header.header,
            )
            if not content:
                content = f"Training session for {header.day}\n\n{INCOMPLETE_CONTENT_NOTE}."

        groups.append(
            DayGroup(
                day=header.day,
                content=content,
                is_shared=bool(header.group),
                shared_with=[day for day in header.group if day != header.day],
                header=header.header,
                line_index=header.line_index,
                is_incomplete=is_incomplete,
            )
        )

    logger.debug(f"Grouped {len(groups)} day(s) in week text", shared=sum(group.is_shared for group in groups))
    return groups


def split_day_into_sessions(content: str) -> list[str]:
    """Split one day's text on "Session N" labels, clock times and phase keywords.

    A marker line opens a new session only once the current one has text.
    Returns the whole content as a single session when fewer than two
    sessions result.
    """
    sessions: list[str] = []
    current: list[str] = []
    for line in content.split("\n"):
        opens_session = any(pattern.search(line) for pattern in _SESSION_SPLIT_RES)
        if opens_session and "\n".join(current).strip():
            sessions.append("\n".join(current).strip())
            current = [line]
        else:
            current.append(line)
    if "\n".join(current).strip():
        sessions.append("\n".join(current).strip())

    return sessions if len(sessions) > 1 else [content]
