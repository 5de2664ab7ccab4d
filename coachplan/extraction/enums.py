"""Canonical enums for structure detection and session extraction.

All enums are string-based so extraction results serialize to JSON
without custom encoders.
"""

from enum import StrEnum


# -----------------------------
# Document Language
# -----------------------------
class Language(StrEnum):
    """Supported document languages, in detection tie-break order."""

    ENGLISH = "english"
    SPANISH = "spanish"
    FRENCH = "french"
    GERMAN = "german"
    PORTUGUESE = "portuguese"
    ITALIAN = "italian"


class LanguageConfidence(StrEnum):
    """Confidence tier attached to a language detection."""

    HIGH = "high"
    MEDIUM = "medium"


# -----------------------------
# Organization Pattern
# -----------------------------
class OrganizationPattern(StrEnum):
    """Top-level structural category of a document; selects the extraction strategy."""

    WEEKLY_WITH_DAYS = "weekly_with_days"
    WEEKLY_ONLY = "weekly_only"
    DAILY_ONLY = "daily_only"
    SESSION_BASED = "session_based"
    UNSTRUCTURED = "unstructured"


class OrganizationLevel(StrEnum):
    """How much structure the document exposes overall."""

    HIGHLY_STRUCTURED = "highly_structured"
    MODERATELY_STRUCTURED = "moderately_structured"
    BASIC_STRUCTURE = "basic_structure"
    UNSTRUCTURED = "unstructured"


# -----------------------------
# Activity Taxonomy
# -----------------------------
class ActivityCategory(StrEnum):
    """Five-category activity taxonomy used for line classification."""

    WARM_UP = "warm_up"
    TECHNICAL = "technical"
    TACTICAL = "tactical"
    CONDITIONING = "conditioning"
    COOL_DOWN = "cool_down"


# -----------------------------
# Session Markers
# -----------------------------
class SessionMarkerKind(StrEnum):
    """Kind of textual anchor that opened a session."""

    NUMBERED = "numbered"
    WORKOUT = "workout"
    TRAINING_SESSION = "training_session"
    TIMESTAMP = "timestamp"
