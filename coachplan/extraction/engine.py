"""Top-level extraction entry point.

Raw text + plan metadata -> language & structure classification ->
one strategy -> validation -> ExtractionResult. Nothing here keeps state
between calls apart from the language detector's cache, which the caller
may own and pass in.
"""

from datetime import UTC, date, datetime

from loguru import logger

from coachplan.config.settings import Settings, settings
from coachplan.extraction.academy import extract_academy_info
from coachplan.extraction.builders import ExtractionContext
from coachplan.extraction.classifier import classify
from coachplan.extraction.errors import ExtractionError, InvalidDocumentError
from coachplan.extraction.language import LanguageDetector
from coachplan.extraction.schemas import ExtractionResult, PlanMetadata, RawDocument, ValidationReport, WeekSession
from coachplan.extraction.strategies import alternative_extraction, get_strategy
from coachplan.extraction.validator import apply_session_validation, score


def _coerce_document(document: RawDocument | str) -> RawDocument:
    if isinstance(document, str):
        document = RawDocument(text=document)
    elif not isinstance(document, RawDocument):
        logger.error(f"Rejecting document of type {type(document).__name__}")
        raise InvalidDocumentError(
            "INVALID_DOCUMENT_TEXT",
            f"Document text must be a string, got {type(document).__name__}",
        )

    if not document.text.strip():
        logger.error(f"Rejecting empty document {document.id}")
        raise InvalidDocumentError("EMPTY_DOCUMENT", "Document text is empty", {"document_id": document.id})
    return document


def _try_alternative(
    ctx: ExtractionContext,
    weeks: list[WeekSession],
    report: ValidationReport,
) -> tuple[list[WeekSession], ValidationReport]:
    alternative = alternative_extraction(ctx)
    if len(alternative) <= len(weeks):
        logger.debug(f"Alternative extraction found {len(alternative)} week(s); keeping primary result")
        return weeks, report

    logger.info(f"Adopting alternative extraction: {len(alternative)} weeks instead of {len(weeks)}")
    alternative_report = score(alternative, ctx.analysis)
    warning = f"Used alternative week extraction ({len(alternative)} weeks instead of {len(weeks)})"
    return alternative, alternative_report.model_copy(update={"warnings": [*alternative_report.warnings, warning]})


def extract_sessions(
    document: RawDocument | str,
    plan: PlanMetadata | None = None,
    *,
    detector: LanguageDetector | None = None,
    base_date: date | None = None,
    allow_alternative: bool = False,
    config: Settings | None = None,
) -> ExtractionResult:
    """Extract a Week -> Day -> Session schedule from document text.

    Structural ambiguity never raises: the document falls through the
    organization patterns down to the unstructured fallback, and problems
    are reported in ``result.validation``.

    Args:
        document: Raw document (or its plain text)
        plan: Plan metadata used for academy defaults and provenance
        detector: Language detector whose cache should be reused
        base_date: First day of the schedule (defaults to today)
        allow_alternative: Re-run as one overview per mentioned week when
            the completeness score is below the configured threshold
        config: Settings override

    Returns:
        ExtractionResult owned by the caller

    Raises:
        InvalidDocumentError: If the document is not text or is empty
    """
    document = _coerce_document(document)
    plan = plan or PlanMetadata()
    config = config or settings
    detector = detector or LanguageDetector(
        config.language_cache_size,
        config.language_sample_chars,
        config.language_cache_key_chars,
    )

    try:
        analysis = classify(document.text, detector)
        academy = extract_academy_info(document.text, plan)
        ctx = ExtractionContext(
            text=document.text,
            document_id=document.id,
            analysis=analysis,
            academy=academy,
            base_date=base_date or date.today(),
            settings=config,
        )

        weeks = get_strategy(analysis.organization_pattern)(ctx)
        report = score(weeks, analysis)
        if allow_alternative and report.scores.completeness_score < config.alternative_completeness_threshold:
            weeks, report = _try_alternative(ctx, weeks, report)
        weeks = apply_session_validation(weeks, report)
    except ExtractionError:
        raise
    except Exception:
        logger.exception(f"Session extraction failed for document {document.id} (plan {plan.id})")
        raise

    result = ExtractionResult(
        academy_info=academy,
        sessions=weeks,
        structure_analysis=analysis,
        validation=report,
        total_weeks=len(weeks),
        total_sessions=sum(len(week.daily_sessions) for week in weeks),
        organization_pattern=analysis.organization_pattern,
        extracted_at=datetime.now(UTC).isoformat(),
        source_document=document.id,
        source_plan=plan.id,
    )
    logger.info(
        f"Extracted {result.total_weeks} week(s), {result.total_sessions} session day(s)",
        pattern=result.organization_pattern.value,
        confidence=report.overall_confidence,
    )
    return result
