"""
Tests for event-day timeline templates
"""

from datetime import datetime

import pytest

from eventra.core.errors import ValidationFailedError
from eventra.schemas.ai import TimelineActivity
from eventra.services.timeline_service import TimelineService

START = datetime(2030, 6, 30, 9, 0)
END = datetime(2030, 6, 30, 17, 0)

def titles(timeline):
    return [item["title"] for item in timeline["items"]]

def test_conference_day_fits_sessions_between_start_and_end():
    timeline = TimelineService.generate_timeline("Conference", START, END)

    assert timeline["duration"] == 8.0
    assert titles(timeline) == [
        "Setup",
        "Registration & Check-in",
        "Welcome & Introduction",
        "Session 1",
        "Networking Break",
        "Lunch Break",
        "Session 2",
        "Networking Break",
        "Session 3",
        "Closing Remarks",
        "Networking Reception",
    ]
    setup = timeline["items"][0]
    assert setup["start_time"] == datetime(2030, 6, 30, 7, 0)
    assert setup["duration"] == 120
    assert timeline["items"][-1]["end_time"] == END

def test_optional_blocks_can_be_left_out():
    timeline = TimelineService.generate_timeline(
        "birthday",
        datetime(2030, 6, 30, 18, 0),
        datetime(2030, 6, 30, 23, 0),
        include_meals=False,
        include_setup=False
    )

    assert titles(timeline) == ["Guest Arrival", "Welcome Drinks", "Games & Entertainment", "Music & Dancing"]
    assert timeline["items"][-1]["duration"] == 150

def test_custom_activities_are_merged_in_order():
    activity = TimelineActivity(
        title="Sponsor booth tour",
        start_time=datetime(2030, 6, 30, 8, 30),
        end_time=datetime(2030, 6, 30, 8, 50),
        location="Hall B"
    )

    timeline = TimelineService.generate_timeline("webinar", START, END, custom_activities=[activity])

    custom = next(item for item in timeline["items"] if item["title"] == "Sponsor booth tour")
    assert custom["type"] == "custom"
    assert custom["duration"] == 20
    assert custom["location"] == "Hall B"
    assert titles(timeline)[:2] == ["Setup", "Sponsor booth tour"]
    assert titles(timeline)[-1] == "Closing & Farewells"

def test_wedding_traditions_fall_inside_dancing():
    timeline = TimelineService.generate_timeline(
        "wedding", datetime(2030, 6, 30, 15, 0), datetime(2030, 6, 30, 23, 0), include_setup=False
    )

    by_title = {item["title"]: item for item in timeline["items"]}
    dancing = by_title["Dancing"]
    assert dancing["start_time"] <= by_title["Cake Cutting"]["start_time"] < dancing["end_time"]
    assert by_title["Grand Send-Off"]["end_time"] == datetime(2030, 6, 30, 23, 0)

def test_items_are_sorted_by_start():
    timeline = TimelineService.generate_timeline("corporate", START, END)

    starts = [item["start_time"] for item in timeline["items"]]
    assert starts == sorted(starts)

def test_end_must_follow_start():
    with pytest.raises(ValidationFailedError):
        TimelineService.generate_timeline("conference", END, START)
