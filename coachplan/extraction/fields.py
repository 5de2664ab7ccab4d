"""Field extractors.

Stateless functions pulling one field out of a span of text. Every
extractor takes the text and an optional position hint; with a hint the
search is narrowed to a window around that position. A miss never
raises: each extractor returns the default named in its docstring.
"""

import re

from coachplan.config.settings import settings
from coachplan.extraction.enums import ActivityCategory
from coachplan.extraction.patterns import (
    ACTION_VERBS,
    ACTIVITY_TAXONOMY,
    BASIC_EQUIPMENT,
    DEFAULT_FOCUS,
    DEFAULT_PARTICIPANTS,
    DEFAULT_SESSION_TYPE,
    DESCRIPTION_LEAD_WORDS,
    DRILL_DATABASE,
    DRILL_KEYWORDS,
    EQUIPMENT_DATABASE,
    EQUIPMENT_VARIATIONS,
    FOCUS_KEYWORDS,
    HEADER_LINE_PATTERN,
    HOUR_UNITS,
    MINUTE_UNITS,
    NOTE_KEYWORDS,
    OBJECTIVE_KEYWORDS,
    PARTICIPANT_RULES,
    SCHEDULING_LINE_PATTERNS,
    SESSION_TYPE_RULES,
    SPORT_ALIASES,
    SPORT_FOCUS_ROTATION,
    WEEK_KEYWORDS,
)
from coachplan.extraction.schemas import ActivityClassification, Drill

DEFAULT_WEEK_DESCRIPTION = "Training week focused on skill development and physical conditioning."

_WINDOW_BEFORE = 200
_WINDOW_AFTER = 800

_TIME_RE = re.compile(r"\b(\d{1,2}):(\d{2})(?:\s*(am|pm))?\b|\b(\d{1,2})\s*(am|pm)\b", re.IGNORECASE)

_DURATION_UNITS = sorted(MINUTE_UNITS + HOUR_UNITS, key=len, reverse=True)
_DURATION_RE = re.compile(
    rf"(\d+(?:[.,]\d+)?)\s*({'|'.join(_DURATION_UNITS)})\b",
    re.IGNORECASE,
)

_WEEK_WORDS = sorted({kw for kws in WEEK_KEYWORDS.values() for kw in kws if len(kw) > 1}, key=len, reverse=True)
_WEEK_TITLE_RE = re.compile(
    rf"^\s*(?:#+\s*)?(?:training\s+)?(?:{'|'.join(_WEEK_WORDS)})\s*\d+\s*[:\-–—]\s*(.+?)\s*$",
    re.IGNORECASE,
)

_HEADER_RE = re.compile(HEADER_LINE_PATTERN, re.IGNORECASE)
_SCHEDULING_RES = [re.compile(pattern, re.IGNORECASE) for pattern in SCHEDULING_LINE_PATTERNS]
_LIST_PREFIX_RE = re.compile(r"^\s*(?:\d+[.)]|[-•*]|[a-z]\))\s*")
_NUMBERED_RE = re.compile(r"^\s*\d+[.)]\s*")
_DRILL_RE = re.compile(rf"\b(?:{'|'.join(DRILL_KEYWORDS)})s?\b", re.IGNORECASE)
_MINUTES_SUFFIX_RE = re.compile(r"\s*\(\d+\s*(?:minutes?|mins?)\)", re.IGNORECASE)

_ACTIVITY_SHAPES = [
    re.compile(r"^\d+\."),
    re.compile(r"^[A-Z][a-z].*:"),
    re.compile(r"^-\s"),
    re.compile(r"^•\s"),
    re.compile(r"^[a-z]\)"),
]


def _scope(text: str, position: int | None) -> str:
    if position is None:
        return text
    start = max(0, position - _WINDOW_BEFORE)
    return text[start : position + _WINDOW_AFTER]


def _contains_word(haystack: str, needle: str) -> bool:
    return re.search(rf"(?<!\w){re.escape(needle)}(?!\w)", haystack) is not None


def _lines(text: str) -> list[str]:
    return [line.strip() for line in text.splitlines() if line.strip()]


def _clean_line(line: str) -> str:
    return _LIST_PREFIX_RE.sub("", line).strip()


def _dedupe(items: list[str]) -> list[str]:
    seen: set[str] = set()
    result: list[str] = []
    for item in items:
        key = item.lower()
        if key not in seen:
            seen.add(key)
            result.append(item)
    return result


def _sport_key(sport: str) -> str:
    lowered = sport.lower()
    return SPORT_ALIASES.get(lowered, lowered)


# -----------------------------
# Time & duration
# -----------------------------
def _apply_meridiem(hour: int, meridiem: str) -> int:
    if meridiem.lower() == "pm":
        return hour if hour == 12 else hour + 12
    return 0 if hour == 12 else hour


def extract_time(text: str, position: int | None = None, default: str | None = None) -> str:
    """Return the first clock time as zero-padded HH:MM.

    Accepts ``HH:MM``, ``HH:MM am/pm`` and ``H am/pm``. Defaults to the
    configured session time ("08:00").
    """
    for match in _TIME_RE.finditer(_scope(text, position)):
        if match.group(1) is not None:
            hour, minute = int(match.group(1)), int(match.group(2))
            if hour > 23 or minute > 59:
                continue
            if match.group(3) and 1 <= hour <= 12:
                hour = _apply_meridiem(hour, match.group(3))
            return f"{hour:02d}:{minute:02d}"
        hour = int(match.group(4))
        if not 1 <= hour <= 12:
            continue
        return f"{_apply_meridiem(hour, match.group(5)):02d}:00"
    return default or settings.default_session_time


def find_duration(text: str, position: int | None = None) -> int | None:
    """Return the first duration in minutes, or None when there is none."""
    for match in _DURATION_RE.finditer(_scope(text, position)):
        value = float(match.group(1).replace(",", "."))
        unit = match.group(2).lower()
        minutes = round(value * 60) if unit in HOUR_UNITS else round(value)
        if minutes > 0:
            return minutes
    return None


def extract_duration(text: str, position: int | None = None, default: int | None = None) -> int:
    """Return the first duration in minutes; hours count x60. Defaults to 90."""
    found = find_duration(text, position)
    if found is not None:
        return found
    return default or settings.default_session_duration


# -----------------------------
# Line classification
# -----------------------------
def is_scheduling_line(line: str) -> bool:
    """True for lines such as "(2 hours each)" that describe timing, not content."""
    lowered = line.strip().lower()
    return any(pattern.search(lowered) for pattern in _SCHEDULING_RES)


def is_header_line(line: str) -> bool:
    stripped = line.strip()
    if _HEADER_RE.match(stripped) or len(stripped) < 10:
        return True
    return stripped.isupper()


def classify_activity(line: str) -> ActivityClassification:
    """Score a line against the activity taxonomy.

    Keywords weigh 3, synonyms 2 and known activities 4. Confidence is
    the best score divided by 10, capped at 1.

    Args:
        line: Single line of text

    Returns:
        Best category (None when nothing matched) and its confidence
    """
    lowered = line.lower()
    best_category: ActivityCategory | None = None
    best_score = 0
    for category, entry in ACTIVITY_TAXONOMY.items():
        score = 3 * sum(1 for keyword in entry.keywords if _contains_word(lowered, keyword))
        score += 2 * sum(1 for synonym in entry.synonyms if _contains_word(lowered, synonym))
        score += 4 * sum(1 for activity in entry.activities if activity in lowered)
        if score > best_score:
            best_category, best_score = category, score
    return ActivityClassification(category=best_category, confidence=min(best_score / 10, 1.0))


def is_activity(line: str) -> bool:
    stripped = line.strip()
    if len(stripped) < 5 or _HEADER_RE.match(stripped):
        return False
    if any(shape.match(stripped) for shape in _ACTIVITY_SHAPES):
        return True
    if classify_activity(stripped).category is not None:
        return True
    if find_duration(stripped) is not None:
        return True
    lowered = stripped.lower()
    return any(_contains_word(lowered, verb) for verb in ACTION_VERBS)


def is_drill(line: str) -> bool:
    return bool(_DRILL_RE.search(line) or _NUMBERED_RE.match(line))


def is_objective(line: str) -> bool:
    lowered = line.lower()
    return any(keyword in lowered for keyword in OBJECTIVE_KEYWORDS)


def is_note(line: str) -> bool:
    stripped = line.strip()
    lowered = stripped.lower()
    return stripped.startswith("*") or any(_contains_word(lowered, keyword) for keyword in NOTE_KEYWORDS)


# -----------------------------
# List extractors
# -----------------------------
def extract_activities(text: str, position: int | None = None, limit: int = 15) -> list[str]:
    """Return activity lines with list markers stripped. Defaults to []."""
    activities = [_clean_line(line) for line in _lines(_scope(text, position)) if is_activity(line)]
    return _dedupe([activity for activity in activities if activity])[:limit]


def extract_drills(text: str, sport: str = "general", position: int | None = None, limit: int = 10) -> list[Drill]:
    """Return drills named in the text. Defaults to [].

    A drill is a line mentioning a drill/exercise or a numbered line. Its
    name is the text before a colon, else the first 30 characters; a
    mention of a known drill attaches that drill's type and focus.
    """
    references = {**DRILL_DATABASE.get("general", {}), **DRILL_DATABASE.get(_sport_key(sport), {})}
    drills: list[Drill] = []
    seen: set[str] = set()
    for line in _lines(_scope(text, position)):
        if _HEADER_RE.match(line) or not is_drill(line):
            continue
        cleaned = _clean_line(line)
        if not cleaned:
            continue
        if ":" in cleaned:
            name, _, rest = cleaned.partition(":")
            name, description = name.strip(), rest.strip() or cleaned
        else:
            name, description = cleaned[:30].strip(), cleaned
        if not name or name.lower() in seen:
            continue
        seen.add(name.lower())

        drill = Drill(name=name, description=description, duration=find_duration(line))
        lowered = line.lower()
        for reference_name, reference in references.items():
            if reference_name in lowered:
                drill.type = reference.type
                drill.focus = list(reference.focus)
                break
        drills.append(drill)
        if len(drills) >= limit:
            break
    return drills


def extract_objectives(text: str, position: int | None = None, limit: int = 5) -> list[str]:
    """Return focus/objective/goal lines. Defaults to []."""
    objectives = [_clean_line(line) for line in _lines(_scope(text, position)) if is_objective(line)]
    return _dedupe([objective for objective in objectives if objective])[:limit]


def extract_notes(text: str, position: int | None = None, limit: int = 5) -> list[str]:
    """Return coaching notes (lines starting with "*" or mentioning note/emphasize/encourage)."""
    notes = [line.lstrip("*").strip() for line in _lines(_scope(text, position)) if is_note(line)]
    return _dedupe([note for note in notes if note])[:limit]


def extract_equipment(text: str, sport: str = "general", position: int | None = None) -> list[str]:
    """Return equipment items mentioned for the sport (and general kit). Defaults to []."""
    lowered = _scope(text, position).lower()
    tables = [EQUIPMENT_DATABASE.get(_sport_key(sport), {}), EQUIPMENT_DATABASE["general"]]
    found: list[str] = []
    for table in tables:
        for items in table.values():
            for item in items:
                names = (item, *EQUIPMENT_VARIATIONS.get(item, ()))
                if any(_contains_word(lowered, name) for name in names):
                    found.append(item)
    return _dedupe(found)


# -----------------------------
# Focus, title & description
# -----------------------------
def extract_title_focus(text: str, max_lines: int = 5) -> str | None:
    """Return the text after "Week N:" in the first lines, original casing kept."""
    for line in text.splitlines()[:max_lines]:
        match = _WEEK_TITLE_RE.match(line)
        if not match or is_scheduling_line(line):
            continue
        candidate = re.sub(r"\(.*?\)", "", match.group(1)).strip(" -–—:.,")
        if 3 <= len(candidate) <= 150:
            return candidate
    return None


def extract_focus(text: str, position: int | None = None, limit: int = 3) -> list[str]:
    """Return focus tags: a week-title focus first, then technique keywords.

    Defaults to ["general training"].
    """
    scoped = _scope(text, position)
    tags: list[str] = []
    title_focus = extract_title_focus(scoped)
    if title_focus:
        tags.append(title_focus)

    lowered = scoped.lower()
    keywords = [keyword for keyword in FOCUS_KEYWORDS if _contains_word(lowered, keyword)]
    tags.extend(keywords[:limit])
    return _dedupe(tags) or list(DEFAULT_FOCUS)


def extract_week_title(text: str, week_number: int, focus: list[str] | None = None) -> str:
    title_focus = extract_title_focus(text)
    if title_focus:
        return f"Week {week_number}: {title_focus}"
    tags = [tag for tag in focus or [] if tag not in DEFAULT_FOCUS]
    if tags:
        return f"Week {week_number} - {', '.join(tag.title() for tag in tags)}"
    return f"Week {week_number} Training"


def extract_week_description(text: str, max_length: int = 200) -> str:
    """Summarize a week from its first content lines.

    Lines that are headers, scheduling notes or shorter than 15
    characters are skipped. Lines opening with a session phase
    (warm-up, technical, ...) are preferred.
    """
    candidates = [
        line for line in _lines(text) if len(line) >= 15 and not is_header_line(line) and not is_scheduling_line(line)
    ]
    if not candidates:
        return DEFAULT_WEEK_DESCRIPTION

    phased = [
        _MINUTES_SUFFIX_RE.sub("", _clean_line(line))
        for line in candidates
        if _clean_line(line).lower().startswith(DESCRIPTION_LEAD_WORDS)
    ][:3]
    description = " ".join(phased or [_clean_line(line) for line in candidates[:3]]).strip()
    if len(description) > max_length:
        description = description[: max_length - 3].rstrip() + "..."
    return description or DEFAULT_WEEK_DESCRIPTION


# -----------------------------
# Session descriptors
# -----------------------------
def identify_session_type(text: str) -> str:
    lowered = text.lower()
    for keywords, session_type in SESSION_TYPE_RULES:
        if any(keyword in lowered for keyword in keywords):
            return session_type
    return DEFAULT_SESSION_TYPE


def estimate_participants(text: str) -> int:
    lowered = text.lower()
    for keywords, count in PARTICIPANT_RULES:
        if any(keyword in lowered for keyword in keywords):
            return count
    return DEFAULT_PARTICIPANTS


def generate_default_focus(week_number: int, sport: str) -> list[str]:
    """Rotate through the sport's four core focus areas week by week."""
    rotation = SPORT_FOCUS_ROTATION.get(_sport_key(sport), SPORT_FOCUS_ROTATION["general"])
    return [rotation[(week_number - 1) % len(rotation)]]


def basic_equipment(sport: str) -> list[str]:
    return list(BASIC_EQUIPMENT.get(_sport_key(sport), BASIC_EQUIPMENT["general"]))
