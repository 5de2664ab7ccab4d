"""Academy/program header extraction.

Reads the first lines of a document for the academy or club name and a
program title, and the whole text for sport and age group. Anything not
found falls back to the plan metadata, then to fixed defaults.
"""

import re

from coachplan.extraction.patterns import (
    ACADEMY_HEADER_LINES,
    ACADEMY_NAME_PATTERN,
    AGE_GROUP_PATTERN,
    PROGRAM_LINE_KEYWORDS,
    SPORT_PATTERN,
)
from coachplan.extraction.schemas import AcademyInfo, PlanMetadata

DEFAULT_ACADEMY_NAME = "Training Academy"
DEFAULT_SPORT = "soccer"
DEFAULT_AGE_GROUP = "Youth"
DEFAULT_PROGRAM = "Training Program"
DEFAULT_LOCATION = "Training Facility"
DEFAULT_DIFFICULTY = "intermediate"

_ACADEMY_RE = re.compile(ACADEMY_NAME_PATTERN, re.IGNORECASE)
_SPORT_RE = re.compile(SPORT_PATTERN, re.IGNORECASE)
_AGE_RE = re.compile(AGE_GROUP_PATTERN, re.IGNORECASE)


def _find_academy_name(lines: list[str]) -> str | None:
    for line in lines:
        match = _ACADEMY_RE.match(line.strip())
        if match:
            return " ".join(match.group(1).split())
    return None


def _find_program(lines: list[str]) -> str | None:
    # Uppercase keywords only: program titles are set in capitals
    for line in lines:
        if any(keyword in line for keyword in PROGRAM_LINE_KEYWORDS):
            return line.strip()
    return None


def extract_academy_info(text: str, plan: PlanMetadata | None = None) -> AcademyInfo:
    """Derive academy information from the document header and plan metadata.

    Args:
        text: Plain document text
        plan: Caller's plan metadata, used for any field the text lacks

    Returns:
        AcademyInfo with every field populated
    """
    plan = plan or PlanMetadata()
    header_lines = text.split("\n")[:ACADEMY_HEADER_LINES]

    sport_match = _SPORT_RE.search(text)
    age_match = _AGE_RE.search(text)

    return AcademyInfo(
        name=_find_academy_name(header_lines) or plan.academy_name or plan.title or DEFAULT_ACADEMY_NAME,
        sport=sport_match.group(1).lower() if sport_match else (plan.category or DEFAULT_SPORT).lower(),
        age_group=" ".join(age_match.group(1).split()) if age_match else DEFAULT_AGE_GROUP,
        program=_find_program(header_lines) or plan.title or DEFAULT_PROGRAM,
        location=DEFAULT_LOCATION,
        difficulty=plan.difficulty or DEFAULT_DIFFICULTY,
    )
