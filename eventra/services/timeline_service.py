"""
Event-day timeline generation

Timelines are built from per-event-type templates: a cursor walks forward
from the start time and each block is placed after the previous one. Blocks
that only fill leftover time are skipped when less than half an hour remains.
"""

import time
from datetime import datetime, timedelta
from typing import Any, Dict, List, Optional

from eventra.core.errors import ValidationFailedError
from eventra.schemas.ai import TimelineActivity

SETUP_MINUTES = 120
MIN_FILLER_MINUTES = 30

class TimelineBuilder:
    """Collects timeline items while tracking the next free slot"""

    def __init__(self, timeline_id: str, start: datetime, end: datetime):
        self.timeline_id = timeline_id
        self.start = start
        self.end = end
        self.cursor = start
        self.items: List[Dict[str, Any]] = []

    def place(self, key: str, title: str, begin: datetime, finish: datetime,
              item_type: str, description: str, location: Optional[str] = None) -> None:
        item = {
            "id": f"{self.timeline_id}-{key}",
            "title": title,
            "start_time": begin,
            "end_time": finish,
            "duration": int((finish - begin).total_seconds() // 60),
            "type": item_type,
            "description": description,
        }
        if location:
            item["location"] = location
        self.items.append(item)

    def add(self, key: str, title: str, minutes: int, item_type: str, description: str) -> None:
        """Place a block at the cursor and move the cursor past it"""
        finish = self.cursor + timedelta(minutes=minutes)
        self.place(key, title, self.cursor, finish, item_type, description)
        self.cursor = finish

    def add_at(self, key: str, title: str, begin: datetime, minutes: int,
               item_type: str, description: str) -> None:
        """Place a block that overlaps others, leaving the cursor alone"""
        self.place(key, title, begin, begin + timedelta(minutes=minutes), item_type, description)

    def fill_until(self, key: str, title: str, finish: datetime, item_type: str, description: str) -> None:
        """Stretch a block from the cursor to finish when enough time is left"""
        if finish - self.cursor >= timedelta(minutes=MIN_FILLER_MINUTES):
            self.place(key, title, self.cursor, finish, item_type, description)
            self.cursor = finish

    def minutes_left(self, reserve: int = 0) -> int:
        return int((self.end - self.cursor).total_seconds() // 60) - reserve

def _conference(b: TimelineBuilder, include_meals: bool, include_breaks: bool) -> None:
    b.add("registration", "Registration & Check-in", 60, "registration", "Attendee registration and badge pickup")
    b.add("welcome", "Welcome & Introduction", 30, "speech", "Opening remarks and agenda overview")

    session_minutes, break_minutes, lunch_minutes, closing_minutes = 70, 20, 60, 30
    block = session_minutes + (break_minutes if include_breaks else 0)
    available = b.minutes_left(closing_minutes) - (lunch_minutes if include_meals else 0)
    sessions = max(1, min(6, (available + (break_minutes if include_breaks else 0)) // block))

    for i in range(sessions):
        b.add(f"session-{i + 1}", f"Session {i + 1}", session_minutes, "session", "Conference session")
        if include_breaks and i < sessions - 1:
            b.add(f"break-{i + 1}", "Networking Break", break_minutes, "break", "Coffee and networking")
        if include_meals and i == max(sessions // 2 - 1, 0):
            b.add("lunch", "Lunch Break", lunch_minutes, "meal", "Lunch for all attendees")

    b.add("closing", "Closing Remarks", closing_minutes, "speech", "Summary and thanks to speakers and sponsors")
    b.fill_until("reception", "Networking Reception", b.end, "networking", "Informal networking with drinks")

def _corporate(b: TimelineBuilder, include_meals: bool, include_breaks: bool) -> None:
    b.add("coffee", "Welcome Coffee", 30, "reception", "Coffee and light refreshments on arrival")
    b.add("intro", "Introduction & Agenda", 20, "presentation", "Objectives for the day")
    b.add("update", "Company Update", 45, "presentation", "Business update and performance review")
    if include_breaks:
        b.add("break-1", "Coffee Break", 15, "break", "Short refreshment break")
    b.add("teambuilding", "Team Building Activity", 90, "activity", "Facilitated team exercise")
    if include_meals:
        b.add("lunch", "Lunch", 60, "meal", "Lunch for all participants")
    b.add("strategy", "Strategic Planning Session", 120, "workshop", "Working session on priorities")
    if include_breaks:
        b.add("break-2", "Afternoon Break", 15, "break", "Short refreshment break")
    b.add("actions", "Action Planning & Next Steps", 45, "workshop", "Owners and deadlines for follow-ups")
    b.fill_until("drinks", "Networking Drinks", b.end, "reception", "Informal networking and drinks")

def _birthday(b: TimelineBuilder, include_meals: bool, include_breaks: bool) -> None:
    b.add("arrival", "Guest Arrival", 30, "reception", "Guests arrive and are welcomed")
    b.add("drinks", "Welcome Drinks", 30, "reception", "Drinks and mingling")
    if include_meals:
        b.add("meal", "Birthday Meal", 60, "meal", "Meal service for all guests")
        b.add("cake", "Cake & Speeches", 30, "tradition", "Birthday cake and a few words")
    b.add("games", "Games & Entertainment", 90, "entertainment", "Party games and entertainment")
    b.fill_until("dancing", "Music & Dancing", b.end, "entertainment", "Music and open dance floor")

def _wedding(b: TimelineBuilder, include_meals: bool, include_breaks: bool) -> None:
    b.add("ceremony", "Wedding Ceremony", 45, "ceremony", "Wedding ceremony")
    b.add("cocktail", "Cocktail Hour", 60, "reception", "Drinks and appetizers while the wedding party takes photos")
    b.add("entrance", "Grand Entrance", 30, "reception", "Introduction of the wedding party and newlyweds")
    if include_meals:
        dinner_start = b.cursor
        b.add("dinner", "Dinner Service", 90, "meal", "Dinner service for all guests")
        b.add_at("toasts", "Toasts and Speeches", dinner_start + timedelta(minutes=30), 30,
                 "speech", "Toasts and speeches from the wedding party")
    b.add("firstdance", "First Dance", 30, "entertainment", "First dance and parent dances")

    dancing_start = b.cursor
    send_off = b.end - timedelta(minutes=30)
    b.fill_until("dancing", "Dancing", send_off, "entertainment", "Open dance floor for all guests")
    for key, title, offset, description in (
        ("cake", "Cake Cutting", 60, "Cake cutting ceremony"),
        ("toss", "Bouquet & Garter Toss", 120, "Traditional bouquet and garter toss"),
    ):
        begin = dancing_start + timedelta(minutes=offset)
        if begin + timedelta(minutes=15) <= b.cursor:
            b.add_at(key, title, begin, 15, "tradition", description)
    b.fill_until("sendoff", "Grand Send-Off", b.end, "closing", "Farewell to the couple")

def _default(b: TimelineBuilder, include_meals: bool, include_breaks: bool) -> None:
    b.add("arrival", "Guest Arrival", 30, "reception", "Guests arrive and are welcomed")
    b.add("welcome", "Welcome & Introduction", 15, "presentation", "Welcome and overview")

    segments, break_minutes, meal_minutes, closing_minutes = 3, 15, 45, 15
    reserved = closing_minutes
    reserved += break_minutes * (segments - 1) if include_breaks else 0
    reserved += meal_minutes if include_meals else 0
    segment_minutes = max(15, b.minutes_left(reserved) // segments)

    for i in range(segments):
        b.add(f"activity-{i + 1}", f"Main Activity {i + 1}", segment_minutes, "activity", "Main event programme")
        if include_breaks and i < segments - 1:
            b.add(f"break-{i + 1}", "Break", break_minutes, "break", "Short break")
        if include_meals and i == segments // 2 - 1:
            b.add("meal", "Meal Service", meal_minutes, "meal", "Meal for all guests")

    closing_end = max(b.end, b.cursor + timedelta(minutes=closing_minutes))
    b.place("closing", "Closing & Farewells", b.cursor, closing_end, "closing", "Closing remarks and goodbyes")
    b.cursor = closing_end

TEMPLATES = {
    "conference": _conference,
    "corporate": _corporate,
    "birthday": _birthday,
    "wedding": _wedding,
}

class TimelineService:
    """Builds an event-day schedule from templates and custom slots"""

    @staticmethod
    def generate_timeline(
        event_type: str,
        start: datetime,
        end: datetime,
        include_meals: bool = True,
        include_setup: bool = True,
        include_breaks: bool = True,
        custom_activities: Optional[List[TimelineActivity]] = None
    ) -> Dict[str, Any]:
        if end <= start:
            raise ValidationFailedError("End time must be after start time")

        builder = TimelineBuilder(str(int(time.time() * 1000)), start, end)

        for i, activity in enumerate(custom_activities or []):
            builder.place(
                f"custom-{i}", activity.title, activity.start_time, activity.end_time,
                activity.type, activity.description or "", activity.location
            )

        if include_setup:
            builder.add_at("setup", "Setup", start - timedelta(minutes=SETUP_MINUTES), SETUP_MINUTES,
                           "setup", "Prepare venue and setup for the event")

        template = TEMPLATES.get(event_type.lower(), _default)
        template(builder, include_meals, include_breaks)

        return {
            "start": start,
            "end": end,
            "duration": (end - start).total_seconds() / 3600,
            "items": sorted(builder.items, key=lambda item: item["start_time"]),
        }
