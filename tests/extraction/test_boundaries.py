from coachplan.extraction.boundaries import (
    INCOMPLETE_CONTENT_NOTE,
    group_days_in_week,
    is_major_section,
    split_day_into_sessions,
    split_week_text,
    week_anchors,
)
from coachplan.extraction.classifier import detect_week_structure
from coachplan.extraction.enums import Language


def test_shared_numbered_header(shared_document):
    groups = group_days_in_week(shared_document)

    assert [group.day for group in groups] == ["monday", "friday"]
    monday, friday = groups
    assert monday.is_shared and friday.is_shared
    assert monday.shared_with == ["friday"]
    assert friday.shared_with == ["monday"]
    assert monday.content == friday.content == "Sprint ladders"


def test_short_content_is_flagged_but_kept(shared_document):
    groups = group_days_in_week(shared_document)

    assert all(group.is_incomplete for group in groups)
    assert all(group.content == "Sprint ladders" for group in groups)


def test_shared_slash_header():
    text = (
        "Monday/Friday/Saturday\nCore circuit and mobility work for everyone\n"
        "Sunday\nRest and recovery walk for the squad"
    )
    groups = {group.day: group for group in group_days_in_week(text)}

    assert list(groups) == ["monday", "friday", "saturday", "sunday"]
    assert groups["friday"].shared_with == ["monday", "saturday"]
    assert not groups["sunday"].is_shared
    assert {groups[day].content for day in ("monday", "friday", "saturday")} == {
        "Core circuit and mobility work for everyone"
    }
    assert groups["sunday"].content == "Rest and recovery walk for the squad"


def test_days_ordered_by_first_appearance():
    text = "## Day 2 (Wednesday)\nPassing in pairs for twenty minutes\nMonday —\nWarm-up and long rondo rotations"
    groups = group_days_in_week(text)

    assert [group.day for group in groups] == ["wednesday", "monday"]
    assert groups[0].content == "Passing in pairs for twenty minutes"


def test_day_header_variants():
    text = "Tuesday:\nFinishing drills in the box\n**Thursday**\nSmall sided games with two goals\nDay 6 - Saturday\nFriendly match"
    groups = group_days_in_week(text)

    assert [group.day for group in groups] == ["tuesday", "thursday", "saturday"]


def test_day_registered_once_and_shared_group_only_new_days():
    text = "Monday\nLong passing circuit and finishing\nMonday/Friday\nShared sprint work and agility ladder"
    groups = {group.day: group for group in group_days_in_week(text)}

    assert groups["monday"].content == "Long passing circuit and finishing"
    assert not groups["friday"].is_shared
    assert groups["friday"].shared_with == []
    assert groups["friday"].content == "Shared sprint work and agility ladder"


def test_major_section_ends_day():
    text = "Monday\nPassing drills in small groups\n==========\nAppendix notes that do not belong"
    (monday,) = group_days_in_week(text)

    assert monday.content == "Passing drills in small groups"


def test_alternative_drills_section_ends_last_day():
    text = "Friday\nCrossing and finishing from wide areas\nAlternative Drills\nHeaders in pairs"
    (friday,) = group_days_in_week(text)

    assert friday.content == "Crossing and finishing from wide areas"


def test_embedded_subheadings_are_kept():
    text = "Tuesday\nWarm-up\n  jog 10 minutes\n\nMain set\n  4x4 small sided games"
    (tuesday,) = group_days_in_week(text)

    assert tuesday.content == "Warm-up\n  jog 10 minutes\n\nMain set\n  4x4 small sided games"


def test_leading_blank_lines_trimmed():
    (thursday,) = group_days_in_week("Thursday\n\n\nShooting practice from the edge of the box")

    assert thursday.content == "Shooting practice from the edge of the box"
    assert not thursday.is_incomplete


def test_empty_day_gets_placeholder():
    groups = group_days_in_week("Monday\nTuesday\nRecovery swim and stretching routine")
    monday = groups[0]

    assert monday.is_incomplete
    assert monday.content == f"Training session for monday\n\n{INCOMPLETE_CONTENT_NOTE}."


def test_no_headers_yields_no_groups():
    assert group_days_in_week("We usually train on Monday and Friday evenings at the club.") == []


def test_localized_headers():
    text = "lunes\nCalentamiento y pases cortos en parejas\nDía 3 (viernes)\nPartido reducido con porterías pequeñas"
    groups = group_days_in_week(text, Language.SPANISH)

    assert [group.day for group in groups] == ["monday", "friday"]


def test_split_day_on_numbered_sessions():
    assert split_day_into_sessions("Session 1\nPassing\nSession 2\nShooting") == [
        "Session 1\nPassing",
        "Session 2\nShooting",
    ]


def test_split_day_on_clock_times():
    sessions = split_day_into_sessions("09:00 Technical block\nCone dribbling\n11:30 Match play\nSmall games")

    assert sessions == ["09:00 Technical block\nCone dribbling", "11:30 Match play\nSmall games"]


def test_split_day_without_second_marker_is_one_session():
    content = "Warm-up jog\nPassing drills"

    assert split_day_into_sessions(content) == [content]


def test_week_anchors_prefer_headers():
    text = "Intro mentions week 3 first.\nWeek 1\nBasics\nWeek 2\nMore"
    anchors = week_anchors(detect_week_structure(text))

    assert [anchor.week_number for anchor in anchors] == [1, 2]


def test_week_anchors_fall_back_to_inline_mentions():
    text = "We start in week 1 with basics and move to week 2 for speed."
    anchors = week_anchors(detect_week_structure(text))

    assert [anchor.week_number for anchor in anchors] == [1, 2]


def test_split_week_text_slices_between_anchors():
    text = "Week 1\nBasics\nWeek 2\nMore"
    spans = split_week_text(text, week_anchors(detect_week_structure(text)))

    assert [span for _, span in spans] == ["Week 1\nBasics\n", "Week 2\nMore"]


def test_is_major_section():
    assert is_major_section("Week 4")
    assert is_major_section("-------")
    assert is_major_section("Specific Drills")
    assert is_major_section("Semana 3", Language.SPANISH)
    assert not is_major_section("Passing")
