"""
End Time Parsing
Turns a time of day like 9:00AM into the next matching UTC instant in the bot's region
"""

import re
from datetime import datetime, timedelta, timezone

from .config import REGION_LABEL, REGION_UTC_OFFSET_HOURS
from .errors import InvalidTimeFormat, InvalidTimeRange

TIME_PATTERN = re.compile(r"^(\d{1,2}):(\d{2})(AM|PM)$", re.IGNORECASE)


def region_timezone():
    """Fixed-offset timezone for the bot's region (no DST rules)"""
    return timezone(timedelta(hours=REGION_UTC_OFFSET_HOURS), REGION_LABEL)


def to_24_hour(hours: int, period: str) -> int:
    """Convert a 1-12 clock hour plus AM/PM to 0-23"""
    period = period.upper()
    if period == "PM" and hours != 12:
        return hours + 12
    if period == "AM" and hours == 12:
        return 0
    return hours


def parse_end_time(time_str: str, now: datetime = None) -> datetime:
    """
    Parse a 12-hour time of day into the next occurrence of that time

    Args:
        time_str: Time like "9:00AM" or "11:30pm"
        now: Current instant (defaults to the current UTC time)

    Returns:
        datetime: Timezone-aware UTC instant, today in the region if still
        ahead, otherwise tomorrow

    Raises:
        InvalidTimeFormat: String does not match H:MM(AM|PM)
        InvalidTimeRange: Hours outside 1-12 or minutes outside 0-59
    """
    match = TIME_PATTERN.match(time_str.strip()) if isinstance(time_str, str) else None
    if not match:
        raise InvalidTimeFormat()

    hours = int(match.group(1))
    minutes = int(match.group(2))
    period = match.group(3)

    if hours < 1 or hours > 12 or minutes < 0 or minutes > 59:
        raise InvalidTimeRange()

    if now is None:
        now = datetime.now(timezone.utc)
    elif now.tzinfo is None:
        now = now.replace(tzinfo=timezone.utc)

    local_now = now.astimezone(region_timezone())
    target = local_now.replace(hour=to_24_hour(hours, period), minute=minutes, second=0, microsecond=0)

    # Already passed today -> same time tomorrow
    if target <= local_now:
        target += timedelta(days=1)

    return target.astimezone(timezone.utc)


def format_clock(dt: datetime) -> str:
    """Format an instant as a regional 12-hour clock string, e.g. 9:00AM"""
    local = dt.astimezone(region_timezone())
    hour = local.hour % 12 or 12
    period = "AM" if local.hour < 12 else "PM"
    return f"{hour}:{local.minute:02d}{period}"


def format_local_time(dt: datetime) -> str:
    """Format an instant for embeds, e.g. Oct 18, 2026 09:00 AM WAT"""
    local = dt.astimezone(region_timezone())
    return f"{local.strftime('%b %d, %Y %I:%M %p')} {REGION_LABEL}"
