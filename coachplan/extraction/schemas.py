"""Pydantic models for extraction inputs, analysis and the Week -> Day -> Session tree."""

import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from coachplan.extraction.enums import (
    ActivityCategory,
    Language,
    LanguageConfidence,
    OrganizationLevel,
    OrganizationPattern,
    SessionMarkerKind,
)


# -----------------------------
# Inputs
# -----------------------------
class RawDocument(BaseModel):
    """Plain text of a source document, as produced by an upstream text extractor."""

    model_config = ConfigDict(frozen=True)

    text: str
    id: str = "document"
    metadata_hints: dict[str, Any] = Field(default_factory=dict)


class PlanMetadata(BaseModel):
    """Lightweight plan record supplied by the caller alongside the document."""

    model_config = ConfigDict(frozen=True)

    id: str = "plan"
    title: str | None = None
    category: str | None = None
    difficulty: str | None = None
    academy_name: str | None = None


class SessionSetup(BaseModel):
    """Caller-supplied setup data merged into an extracted tree after the fact."""

    model_config = ConfigDict(frozen=True)

    coaching_plan_name: str | None = None
    entity_name: str | None = None
    training_time: str | None = None


# -----------------------------
# Structure analysis
# -----------------------------
class LanguageDetection(BaseModel):
    language: Language
    confidence: LanguageConfidence
    score: int = Field(ge=0)


class WeekMarker(BaseModel):
    week_number: int = Field(ge=1, le=52)
    position: int = Field(ge=0)
    line_index: int = Field(ge=0)
    text: str
    context: str
    is_header: bool = False


class WeekStructure(BaseModel):
    total_weeks: int = 0
    detected_weeks: list[int] = Field(default_factory=list)
    week_markers: list[WeekMarker] = Field(default_factory=list)
    has_week_structure: bool = False


class DayMarker(BaseModel):
    day: str
    token: str
    position: int = Field(ge=0)
    context: str


class DayStructure(BaseModel):
    total_days: int = 0
    detected_days: list[str] = Field(default_factory=list)
    day_markers: list[DayMarker] = Field(default_factory=list)
    day_frequency: dict[str, int] = Field(default_factory=dict)
    has_day_structure: bool = False


class SessionMarker(BaseModel):
    kind: SessionMarkerKind
    text: str
    position: int = Field(ge=0)
    session_number: int | None = None
    session_type: str
    context: str


class SessionStructure(BaseModel):
    total_sessions: int = 0
    session_markers: list[SessionMarker] = Field(default_factory=list)
    has_session_structure: bool = False


class TimeStructure(BaseModel):
    has_time_info: bool = False
    has_duration_info: bool = False
    times: list[str] = Field(default_factory=list)


class StructureAnalysis(BaseModel):
    """Classifier output for one document. Read-only once produced."""

    organization_pattern: OrganizationPattern
    organization_level: OrganizationLevel
    language: LanguageDetection
    week_structure: WeekStructure
    day_structure: DayStructure
    session_structure: SessionStructure
    time_structure: TimeStructure
    confidence: float = Field(ge=0.0, le=1.0)


# -----------------------------
# Extracted tree
# -----------------------------
class AcademyInfo(BaseModel):
    name: str
    sport: str
    age_group: str
    program: str
    location: str
    difficulty: str


class Drill(BaseModel):
    name: str
    description: str
    duration: int | None = None
    type: str | None = None
    focus: list[str] = Field(default_factory=list)


class ActivityClassification(BaseModel):
    category: ActivityCategory | None
    confidence: float = Field(ge=0.0, le=1.0)


class SessionEntry(BaseModel):
    """Leaf session inside one training day."""

    id: str
    week_number: int = Field(ge=1)
    day_number: int = Field(ge=1)
    session_number: int = Field(ge=1)
    day: str
    date: datetime.date
    title: str
    time: str
    duration: int = Field(gt=0)
    location: str
    type: str
    participants: int = Field(ge=1)
    activities: list[str] = Field(default_factory=list)
    drills: list[Drill] = Field(default_factory=list)
    objectives: list[str] = Field(default_factory=list)
    equipment: list[str] = Field(default_factory=list)
    focus: list[str] = Field(default_factory=list)
    notes: list[str] = Field(default_factory=list)
    raw_content: str
    academy: AcademyInfo
    extraction_confidence: float = Field(default=1.0, ge=0.0, le=1.0)
    extraction_warnings: list[str] = Field(default_factory=list)
    coaching_plan_name: str | None = None
    entity_name: str | None = None
    training_time: str | None = None

    @field_validator("time")
    @classmethod
    def validate_time(cls, value: str) -> str:
        """Require zero-padded 24h HH:MM."""
        hour, _, minute = value.partition(":")
        if len(hour) != 2 or len(minute) != 2 or not (hour + minute).isdigit():
            raise ValueError(f"time must be HH:MM, got {value!r}")
        if int(hour) > 23 or int(minute) > 59:
            raise ValueError(f"time out of range: {value!r}")
        return value


class DailySession(BaseModel):
    """One training day inside a week; shared days duplicate identical content."""

    id: str
    week_number: int = Field(ge=1)
    day_number: int = Field(ge=1)
    day: str
    date: datetime.date
    raw_content: str
    is_shared_session: bool = False
    shared_with: list[str] = Field(default_factory=list)
    sessions_for_day: list[SessionEntry] = Field(default_factory=list)
    coaching_plan_name: str | None = None
    entity_name: str | None = None
    training_time: str | None = None

    @model_validator(mode="after")
    def validate_shared(self) -> "DailySession":
        if self.is_shared_session and not self.shared_with:
            raise ValueError(f"Shared session on {self.day} must name the days it is shared with")
        return self


class WeekSession(BaseModel):
    """One training week with its ordered days."""

    id: str
    week_number: int = Field(ge=1)
    title: str
    description: str
    raw_content: str
    focus: list[str] = Field(default_factory=list)
    total_duration: int = Field(ge=0)
    daily_sessions: list[DailySession] = Field(default_factory=list)
    synthetic: bool = False
    coaching_plan_name: str | None = None
    entity_name: str | None = None

    @model_validator(mode="after")
    def validate_total_duration(self) -> "WeekSession":
        expected = sum(entry.duration for day in self.daily_sessions for entry in day.sessions_for_day)
        if self.total_duration != expected:
            raise ValueError(f"Week {self.week_number} total_duration={self.total_duration} does not match session sum {expected}")
        return self


# -----------------------------
# Validation
# -----------------------------
class SessionValidation(BaseModel):
    session_id: str
    week_number: int
    day: str
    confidence: float = Field(ge=0.0, le=1.0)
    is_valid: bool
    warnings: list[str] = Field(default_factory=list)


class ValidationScores(BaseModel):
    structure_score: int = Field(ge=0, le=25)
    content_score: int = Field(ge=0, le=25)
    consistency_score: int = Field(ge=0, le=25)
    completeness_score: int = Field(ge=0, le=25)

    @property
    def total(self) -> int:
        return self.structure_score + self.content_score + self.consistency_score + self.completeness_score


class ValidationReport(BaseModel):
    overall_confidence: float = Field(ge=0.0, le=1.0)
    scores: ValidationScores
    warnings: list[str] = Field(default_factory=list)
    errors: list[str] = Field(default_factory=list)
    per_session_validation: list[SessionValidation] = Field(default_factory=list)


# -----------------------------
# Result
# -----------------------------
class ExtractionResult(BaseModel):
    """Everything one extraction call returns to its caller."""

    academy_info: AcademyInfo
    sessions: list[WeekSession]
    structure_analysis: StructureAnalysis
    validation: ValidationReport
    total_weeks: int
    total_sessions: int
    organization_pattern: OrganizationPattern
    extracted_at: str
    source_document: str
    source_plan: str


class UpcomingSession(BaseModel):
    session_id: str
    week_number: int
    day: str
    date: datetime.date
    time: str
    duration: int
    title: str
    type: str
    location: str
    focus: list[str] = Field(default_factory=list)
    academy_name: str


class ExtractionStats(BaseModel):
    total_weeks: int
    total_daily_sessions: int
    total_session_entries: int
    average_sessions_per_week: float
    sports: list[str]
    equipment: list[str]
    focus: list[str]
    organization_pattern: OrganizationPattern
    overall_confidence: float
