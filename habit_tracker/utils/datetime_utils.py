# utils/datetime_utils.py

from datetime import datetime, date, timedelta
from typing import List, Union

import pytz

from habit_tracker.config import config

DAY_FORMAT = "%Y-%m-%d"

DayLike = Union[str, date]

def now_local() -> datetime:
    """Current time in the configured timezone, or system local time"""
    if config.calendar.timezone:
        return datetime.now(pytz.timezone(config.calendar.timezone))
    return datetime.now()

def format_day(d: date) -> str:
    return d.strftime(DAY_FORMAT)

def parse_day(day_id: str) -> date:
    """Parse a YYYY-MM-DD day id, raising ValueError when malformed"""
    if not isinstance(day_id, str) or len(day_id) != 10:
        raise ValueError(f"Invalid day id: {day_id!r}")
    parsed = datetime.strptime(day_id, DAY_FORMAT).date()
    # strptime also accepts padded or non-ASCII digits; one day has one id
    if format_day(parsed) != day_id:
        raise ValueError(f"Invalid day id: {day_id!r}")
    return parsed

def is_valid_day(value) -> bool:
    try:
        parse_day(value)
    except ValueError:
        return False
    return True

def to_day_id(day: DayLike) -> str:
    """Normalize a date or day id to a validated day id"""
    if isinstance(day, datetime):
        return format_day(day.date())
    if isinstance(day, date):
        return format_day(day)
    return format_day(parse_day(day))

def today() -> str:
    return format_day(now_local().date())

def add_days(day_id: str, days: int) -> str:
    return format_day(parse_day(day_id) + timedelta(days=days))

def day_range(n: int) -> List[str]:
    """n consecutive day ids ending with today, oldest first"""
    current = now_local().date()
    return [format_day(current - timedelta(days=i)) for i in range(n - 1, -1, -1)]

def is_today(day_id: str) -> bool:
    return day_id == today()

def day_name(day_id: str) -> str:
    """Short weekday label, e.g. 'Mon'"""
    return parse_day(day_id).strftime("%a")

def month_day(day_id: str) -> str:
    """Short month/day label, e.g. 'Jan 5'"""
    d = parse_day(day_id)
    return f"{d.strftime('%b')} {d.day}"
