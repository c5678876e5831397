#file: backend/utils.py

from datetime import datetime
import pytz

from backend.config import TIMEZONE


def get_current_time(timezone: str = TIMEZONE) -> datetime:
    """Get current time in the configured local timezone, truncated to the hour."""
    now = datetime.now(pytz.utc).astimezone(pytz.timezone(timezone))
    return now.replace(minute = 0, second = 0, microsecond = 0)

def localize(moment: datetime, timezone: str = TIMEZONE) -> datetime:
    """Attach or convert a datetime to the configured local timezone."""
    tz = pytz.timezone(timezone)
    if moment.tzinfo is None:
        return tz.localize(moment)
    return moment.astimezone(tz)

def clamp(value: float, low: float, high: float) -> float:
    return max(low, min(high, value))

def round_half_up(value: float) -> int:
    """Round .5 away from zero for non-negative values, unlike the builtin banker's rounding."""
    return int(value + 0.5) if value >= 0 else -int(-value + 0.5)
