"""Root conftest for all tests.

Shared sample documents and helpers for building extraction inputs.
"""

from datetime import date

import pytest

from coachplan.config.settings import settings
from coachplan.extraction.academy import extract_academy_info
from coachplan.extraction.builders import ExtractionContext
from coachplan.extraction.classifier import classify
from coachplan.extraction.language import LanguageDetector
from coachplan.extraction.schemas import PlanMetadata

BASE_DATE = date(2024, 1, 1)  # a Monday

EXPLICIT_DOCUMENT = (
    "Week 1: Passing Basics\nMonday (1 hour)\nWarm-up jog\nPassing drills\nWednesday (1 hour)\nShooting practice"
)

SHARED_DOCUMENT = "Day 1 (Monday) & Day 3 (Friday)\nSprint ladders"

SPANISH_DOCUMENT = "Semana 2\nlunes\nCalentamiento y pases cortos en parejas\nmiércoles\nTiros a puerta y juego reducido"

FEATURELESS_DOCUMENT = "Bring water and a good attitude to every practice."

ACADEMY_DOCUMENT = """ELITE SOCCER ACADEMY
U12 COACHING PLAN

Week 1: Ball Mastery
Monday (90 minutes)
Warm-up: light jogging and dynamic stretching (15 minutes)
1. Dribbling through cones: close control in pairs (20 minutes)
2. Passing drill: two-touch passing in triangles
Focus on first touch and scanning
* Keep the groups small
Cool-down: static stretching
Thursday (90 minutes)
Technical: shooting practice from the edge of the box with footballs
Small sided game 4v4 with bibs and mini goals

Week 2: Passing Under Pressure
Day 1 (Monday) & Day 3 (Wednesday)
Rondo 5v2 in a 12x12 grid with cones (20 minutes)
Positional play with three zones and scanning cues
Saturday
Match play 7v7 and team tactics review for the whole squad
"""


@pytest.fixture
def base_date() -> date:
    return BASE_DATE


@pytest.fixture
def plan() -> PlanMetadata:
    return PlanMetadata(id="plan-1", title="Spring Development Plan", category="soccer", difficulty="beginner")


@pytest.fixture
def detector() -> LanguageDetector:
    return LanguageDetector(cache_size=8)


@pytest.fixture
def make_context():
    """Build an ExtractionContext for a document text."""

    def _make(text: str, plan: PlanMetadata | None = None) -> ExtractionContext:
        return ExtractionContext(
            text=text,
            document_id="doc-1",
            analysis=classify(text, LanguageDetector()),
            academy=extract_academy_info(text, plan),
            base_date=BASE_DATE,
            settings=settings,
        )

    return _make


@pytest.fixture
def explicit_document() -> str:
    return EXPLICIT_DOCUMENT


@pytest.fixture
def shared_document() -> str:
    return SHARED_DOCUMENT


@pytest.fixture
def spanish_document() -> str:
    return SPANISH_DOCUMENT


@pytest.fixture
def featureless_document() -> str:
    return FEATURELESS_DOCUMENT


@pytest.fixture
def academy_document() -> str:
    return ACADEMY_DOCUMENT


@pytest.fixture
def sample_documents() -> list[str]:
    return [EXPLICIT_DOCUMENT, SHARED_DOCUMENT, SPANISH_DOCUMENT, FEATURELESS_DOCUMENT, ACADEMY_DOCUMENT]
