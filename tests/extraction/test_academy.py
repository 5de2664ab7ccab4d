from coachplan.extraction.academy import extract_academy_info
from coachplan.extraction.schemas import PlanMetadata


def test_header_fields(academy_document):
    info = extract_academy_info(academy_document)

    assert info.name == "ELITE SOCCER ACADEMY"
    assert info.sport == "soccer"
    assert info.age_group == "U12"
    assert info.program == "U12 COACHING PLAN"


def test_defaults_without_header():
    info = extract_academy_info("Run some laps and stretch afterwards.")

    assert info.name == "Training Academy"
    assert info.sport == "soccer"
    assert info.age_group == "Youth"
    assert info.program == "Training Program"
    assert info.location == "Training Facility"
    assert info.difficulty == "intermediate"


def test_plan_metadata_fallbacks():
    plan = PlanMetadata(title="Summer Camp", category="Tennis", difficulty="advanced")
    info = extract_academy_info("Serve practice for players aged 10-12 years", plan)

    assert info.name == "Summer Camp"
    assert info.sport == "tennis"
    assert info.age_group == "10-12 years"
    assert info.program == "Summer Camp"
    assert info.difficulty == "advanced"


def test_club_name_whitespace_is_normalized():
    info = extract_academy_info("RIVERSIDE   FOOTBALL CLUB\nweekly sessions")

    assert info.name == "RIVERSIDE FOOTBALL CLUB"
    assert info.sport == "football"
