"""Time source abstraction and calendar-day helpers."""

from datetime import date, datetime, timedelta, tzinfo
from typing import Protocol
from zoneinfo import ZoneInfo

from dateutil import tz


class Clock(Protocol):
    """Source of the current, timezone-aware instant."""

    def now(self) -> datetime:
        """Return the current time. Always timezone-aware."""
        ...


class SystemClock:
    """Wall-clock time in a named zone, or the machine's local zone.

    The local zone is resolved per instant, so values on either side of a
    daylight-saving change keep their own offset.
    """

    def __init__(self, zone: tzinfo | None = None) -> None:
        self._tz = zone if zone is not None else tz.tzlocal()

    @property
    def zone(self) -> tzinfo:
        return self._tz

    @classmethod
    def from_name(cls, name: str | None) -> "SystemClock":
        return cls(ZoneInfo(name) if name else None)

    def now(self) -> datetime:
        return datetime.now(self._tz)


def ensure_aware(value: datetime, reference: datetime) -> datetime:
    """Attach the reference's zone to a naive datetime."""
    if value.tzinfo is None:
        return value.replace(tzinfo=reference.tzinfo)
    return value


def calendar_day(value: datetime, reference: datetime) -> date:
    """Calendar date of ``value`` as seen from the zone of ``reference``."""
    return ensure_aware(value, reference).astimezone(reference.tzinfo).date()


def calendar_days_between(later: datetime, earlier: datetime) -> int:
    """Whole calendar days from ``earlier`` to ``later`` in ``later``'s zone.

    Negative when ``earlier`` falls on a later day.
    """
    return (later.date() - calendar_day(earlier, later)).days


def is_same_day(value: datetime, now: datetime) -> bool:
    return calendar_day(value, now) == now.date()


def week_bounds(now: datetime) -> tuple[datetime, datetime]:
    """Monday 00:00 through the last microsecond of Sunday, in ``now``'s zone."""
    start_day = now.date() - timedelta(days=now.weekday())
    start = datetime.combine(start_day, datetime.min.time(), tzinfo=now.tzinfo)
    end = start + timedelta(days=7) - timedelta(microseconds=1)
    return start, end
