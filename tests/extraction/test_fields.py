import pytest

from coachplan.extraction.enums import ActivityCategory
from coachplan.extraction.fields import (
    DEFAULT_WEEK_DESCRIPTION,
    basic_equipment,
    classify_activity,
    estimate_participants,
    extract_activities,
    extract_drills,
    extract_duration,
    extract_equipment,
    extract_focus,
    extract_notes,
    extract_objectives,
    extract_time,
    extract_week_description,
    extract_week_title,
    find_duration,
    generate_default_focus,
    identify_session_type,
    is_header_line,
    is_scheduling_line,
)


@pytest.mark.parametrize(
    ("text", "expected"),
    [
        ("Start at 6:30 sharp", "06:30"),
        ("Evening block 5:30 pm", "17:30"),
        ("Late film 12:15 am", "00:15"),
        ("Already 24h 17:45 pm", "17:45"),
        ("Kick-off 7pm", "19:00"),
        ("Meet at 12am", "00:00"),
        ("Lunch session 12 pm", "12:00"),
        ("25:99 then 9am", "09:00"),
        ("no time given", "08:00"),
    ],
)
def test_extract_time(text, expected):
    assert extract_time(text) == expected


def test_extract_time_custom_default():
    assert extract_time("nothing", default="17:30") == "17:30"


@pytest.mark.parametrize(
    ("text", "expected"),
    [
        ("Warm-up 45 minutes", 45),
        ("Match 2 hours", 120),
        ("Tempo 1.5 hrs", 90),
        ("Drills 20 mins", 20),
        ("Calentamiento 30 minutos", 30),
        ("Training 1 hour", 60),
        ("no duration here", 90),
    ],
)
def test_extract_duration(text, expected):
    assert extract_duration(text) == expected


def test_find_duration_misses_return_none():
    assert find_duration("5 sets of 10 reps") is None


def test_position_hint_narrows_search():
    text = "Intro 10 minutes " + "x" * 1500 + " Main 45 minutes"

    assert find_duration(text) == 10
    assert find_duration(text, position=text.index("Main")) == 45


def test_focus_from_week_title_keeps_case():
    focus = extract_focus("Week 3: Passing Under Pressure\nRondos and passing lanes")

    assert focus[0] == "Passing Under Pressure"
    assert "passing" in focus


def test_focus_keywords_are_limited():
    focus = extract_focus("shooting, passing, dribbling, defending and tactics")

    assert focus == ["shooting", "passing", "dribbling"]


def test_focus_default():
    assert extract_focus("nothing relevant here") == ["general training"]


def test_week_title_variants():
    assert extract_week_title("Week 2: Finishing\nShots on goal", 2) == "Week 2: Finishing"
    assert extract_week_title("Lots of shots", 2, ["shooting"]) == "Week 2 - Shooting"
    assert extract_week_title("Nothing here", 5, ["general training"]) == "Week 5 Training"


def test_scheduling_title_is_ignored():
    assert extract_week_title("Week 1: Monday and Friday 2 hours each", 1) == "Week 1 Training"


def test_week_description_prefers_phase_lines():
    text = (
        "Week 1\nWarm-up: dynamic movement (10 minutes)\n"
        "Technical: passing patterns in triangles\nSome other long line of text here"
    )

    assert extract_week_description(text) == "Warm-up: dynamic movement Technical: passing patterns in triangles"


def test_week_description_falls_back_to_first_lines():
    text = "Week 1\nPlayers rotate through three stations\nEach station lasts a while"

    assert extract_week_description(text) == "Players rotate through three stations Each station lasts a while"


def test_week_description_truncated():
    description = extract_week_description("x" * 300)

    assert len(description) == 200
    assert description.endswith("...")


def test_week_description_default():
    assert extract_week_description("Week 1\nShort") == DEFAULT_WEEK_DESCRIPTION


def test_extract_activities():
    text = "1. Passing in pairs\n- Cone dribbling\nRest\nPerform 10 sprints\nThe weather was nice today"

    assert extract_activities(text) == ["Passing in pairs", "Cone dribbling", "Perform 10 sprints"]


def test_extract_activities_default_is_empty():
    assert extract_activities("The weather was nice today") == []


def test_classify_activity():
    warm_up = classify_activity("Light jogging and dynamic stretching")
    assert warm_up.category == ActivityCategory.WARM_UP
    assert warm_up.confidence == 1.0

    spanish = classify_activity("Calentamiento general")
    assert spanish.category == ActivityCategory.WARM_UP
    assert spanish.confidence == pytest.approx(0.2)

    assert classify_activity("zzz").category is None


def test_extract_drills():
    text = "Passing drill: pairs 10m apart (15 minutes)\n2. Rondo 5v2\nGeneral chat"
    drills = extract_drills(text, "soccer")

    assert [drill.name for drill in drills] == ["Passing drill", "Rondo 5v2"]
    assert drills[0].description == "pairs 10m apart (15 minutes)"
    assert drills[0].duration == 15
    assert drills[1].type == "tactical"
    assert "possession" in drills[1].focus


def test_extract_objectives_and_notes():
    text = "Goal: improve first touch\nFocus on scanning\nRandom line\n* Keep groups small\nCoaches should encourage talk"

    assert extract_objectives(text) == ["Goal: improve first touch", "Focus on scanning"]
    assert extract_notes(text) == ["Keep groups small", "Coaches should encourage talk"]


def test_extract_equipment_with_variants():
    equipment = extract_equipment("Set up cones and bring footballs and bibs", "soccer")

    assert {"cones", "bibs", "soccer ball"} <= set(equipment)
    assert len(equipment) == len(set(equipment))


def test_extract_equipment_default_is_empty():
    assert extract_equipment("Talk about effort", "tennis") == []


@pytest.mark.parametrize(
    ("text", "expected"),
    [
        ("Warm up drills", "Warm-up Session"),
        ("Technical passing", "Technical Training"),
        ("Small sided game", "Match/Game"),
        ("", "Team Training"),
    ],
)
def test_identify_session_type(text, expected):
    assert identify_session_type(text) == expected


def test_estimate_participants():
    assert estimate_participants("individual session") == 1
    assert estimate_participants("youth squad") == 12
    assert estimate_participants("senior team") == 15


def test_sport_defaults():
    assert generate_default_focus(5, "soccer") == ["ball control"]
    assert generate_default_focus(2, "basketball") == ["shooting"]
    assert generate_default_focus(3, "curling") == ["tactics"]
    assert basic_equipment("football") == ["soccer balls", "cones", "goals", "bibs"]


def test_line_classification():
    assert is_scheduling_line("(2 hours each)")
    assert is_header_line("Week 3")
    assert is_header_line("WARM UP BLOCK AREA")
    assert not is_header_line("Passing patterns in triangles")
