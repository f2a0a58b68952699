"""Date and weekend helpers for fixture timestamps.

Every timestamp belongs to one weekend bucket: the Saturday of its
Friday-Sunday window. Friday moves forward a day, Sunday back a day.
Monday-Thursday map to the Saturday of the same Monday-based week.
"""

import calendar
from datetime import date, datetime, time, timedelta, timezone
from typing import Optional, Union

from fixturecheck.models import DEFAULT_RULES, CompetitionRules

FRIDAY = 4
SATURDAY = 5
SUNDAY = 6


def parse_timestamp(value: Union[str, datetime, None]) -> Optional[datetime]:
    """Parse an ISO-8601 timestamp into a naive UTC datetime.

    Returns None for empty or malformed input.
    """
    if isinstance(value, datetime):
        dt = value
    elif not value:
        return None
    else:
        s = str(value).strip()
        if s.endswith(("Z", "z")):
            s = s[:-1] + "+00:00"
        try:
            dt = datetime.fromisoformat(s)
        except ValueError:
            return None
    if dt.tzinfo is not None:
        dt = dt.astimezone(timezone.utc).replace(tzinfo=None)
    return dt


def _minute(dt: datetime) -> time:
    return time(dt.hour, dt.minute)


def date_rejection(dt: datetime,
                   rules: CompetitionRules = DEFAULT_RULES) -> Optional[str]:
    """Return why ``dt`` is not a competition slot, or None if it is."""
    if dt.month not in rules.months:
        allowed = "/".join(calendar.month_abbr[m] for m in rules.months)
        return f"{calendar.month_name[dt.month]} is outside {allowed}"

    dow = dt.weekday()
    if dow == FRIDAY:
        if _minute(dt) < rules.friday_earliest:
            return f"Friday kick-off before {rules.friday_earliest:%H:%M}"
        return None
    if dow == SATURDAY:
        return None
    if dow == SUNDAY:
        if _minute(dt) > rules.sunday_latest:
            return f"Sunday kick-off after {rules.sunday_latest:%H:%M}"
        return None
    return f"{dt:%A} is not a Friday, Saturday or Sunday"


def is_allowed_slot(dt: datetime,
                    rules: CompetitionRules = DEFAULT_RULES) -> bool:
    return date_rejection(dt, rules) is None


def weekend_bucket(dt: Union[datetime, date]) -> date:
    """Saturday of the weekend ``dt`` belongs to."""
    d = dt.date() if isinstance(dt, datetime) else dt
    return d + timedelta(days=SATURDAY - d.weekday())


def previous_weekend(dt: Union[datetime, date]) -> date:
    """Saturday of the weekend immediately before ``dt``'s weekend."""
    return weekend_bucket(dt) - timedelta(days=7)


def week_of_month(d: Union[datetime, date]) -> int:
    """1 for days 1-7, 2 for days 8-14, and so on."""
    return (d.day - 1) // 7 + 1
