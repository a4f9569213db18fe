# vacation_planner/opening_hours.py
import re
from typing import List, Optional, Sequence, Tuple

from .data_models import Place, Weekday

DAY_MINUTES = 24 * 60

_RANGE = re.compile(
    r"(\d{1,2})(?::(\d{2}))?\s*([AP]M)?\s*[–—-]\s*(\d{1,2})(?::(\d{2}))?\s*([AP]M)?",
    re.IGNORECASE,
)


def _normalize(text: str) -> str:
    # Maps API puts thin and narrow no-break spaces around times
    for ch in ("\u202f", "\u2009", "\xa0"):
        text = text.replace(ch, " ")
    return text.strip()


def _to_minutes(hour: str, minute: Optional[str], meridiem: Optional[str]) -> int:
    h = int(hour)
    m = int(minute or 0)
    if meridiem:
        h = h % 12 + (12 if meridiem.upper() == "PM" else 0)
    return h * 60 + m


def parse_day_hours(text: str) -> List[Tuple[int, int]]:
    """
    Parses the part after "Monday:" into (open, close) minute pairs.

    "Open 24 hours" is the whole day, "Closed" is empty. Ranges running past
    midnight are cut at the end of the day.
    """
    text = _normalize(text)
    lowered = text.lower()
    if "open 24 hours" in lowered:
        return [(0, DAY_MINUTES)]
    if "closed" in lowered:
        return []

    ranges = []
    for sh, sm, smer, eh, em, emer in _RANGE.findall(text):
        end = _to_minutes(eh, em, emer or None)
        start = _to_minutes(sh, sm, smer or emer or None)
        if not smer and emer and start > end:
            # "11:30 – 1:00 PM": the start is in the morning
            start = _to_minutes(sh, sm, "AM")
        if end <= start:
            end = DAY_MINUTES
        ranges.append((start, end))
    return ranges


def hours_for_weekday(hours: Sequence[str], weekday: Weekday) -> Optional[List[Tuple[int, int]]]:
    """Opening ranges for one day, or None when the text has no line for it."""
    day_name = weekday.name.lower()
    for line in hours:
        day, _, rest = _normalize(line).partition(":")
        if day.strip().lower() == day_name:
            return parse_day_hours(rest)
    return None


def is_open(place: Place, weekday: Weekday, start_hour: int, end_hour: int) -> bool:
    """
    True if the place is open at some point of [start_hour, end_hour) on weekday.

    Places without any opening hours text are assumed open.
    """
    if not place.hours:
        return True
    ranges = hours_for_weekday(place.hours, weekday)
    if ranges is None:
        return False
    window_start, window_end = start_hour * 60, end_hour * 60
    return any(start < window_end and end > window_start for start, end in ranges)
