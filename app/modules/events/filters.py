"""Browsing filters for the public listing and the moderation view."""

from dataclasses import dataclass
from datetime import date, datetime, timedelta
from enum import Enum
from typing import Dict, Iterable, List, Optional

import pytz

from core.config import settings
from modules.events.models import ALL_CATEGORIES, ALL_CITIES, Event, EventStatus
from modules.events.timestamps import utc_now


class DateWindow(str, Enum):
    ALL = "all"
    TODAY = "today"
    WEEKEND = "weekend"
    MONTH = "month"


@dataclass
class EventFilter:
    search: str = ""
    category: str = ALL_CATEGORIES
    city: str = ALL_CITIES
    date: DateWindow = DateWindow.ALL


def _weekend_days(today: date) -> List[date]:
    # Saturday is 5, Sunday is 6
    if today.weekday() == 6:
        return [today]
    saturday = today + timedelta(days=(5 - today.weekday()) % 7)
    return [saturday, saturday + timedelta(days=1)]


def _matches_window(local_day: date, window: DateWindow, today: date) -> bool:
    if window == DateWindow.TODAY:
        return local_day == today
    if window == DateWindow.WEEKEND:
        return local_day in _weekend_days(today)
    if window == DateWindow.MONTH:
        return (local_day.year, local_day.month) == (today.year, today.month)
    return True


def filter_events(
    events: Iterable[Event],
    flt: EventFilter,
    now: Optional[datetime] = None,
    tz: Optional[str] = None,
) -> List[Event]:
    """Apply search, category, city and date window filters, keeping order.

    Calendar days are evaluated in ``tz`` (default: EVENTS_TIMEZONE).
    """
    zone = pytz.timezone(tz or settings.events.EVENTS_TIMEZONE)
    today = (now or utc_now()).astimezone(zone).date()
    window = DateWindow(flt.date)
    term = (flt.search or "").strip().lower()

    matched = []
    for event in events:
        if term and term not in event.title.lower() and term not in event.description.lower():
            continue
        if flt.city != ALL_CITIES and event.city != flt.city:
            continue
        if flt.category != ALL_CATEGORIES and event.category.value != flt.category:
            continue
        if not _matches_window(event.date.astimezone(zone).date(), window, today):
            continue
        matched.append(event)
    return matched


def partition_by_status(events: Iterable[Event]) -> Dict[EventStatus, List[Event]]:
    """Group events into one bucket per status, each keeping input order."""
    buckets: Dict[EventStatus, List[Event]] = {status: [] for status in EventStatus}
    for event in events:
        buckets[event.status].append(event)
    return buckets
