"""Calendar-day windows in a fixed IANA time zone.

The digest covers "yesterday" as seen from a fixed zone, regardless of the
host machine's local time. Both the ingestion run and anything that needs to
locate a daily file compute the date from (zone, now) alone.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime, time, timedelta, timezone
from zoneinfo import ZoneInfo

DEFAULT_TIME_ZONE = "America/Sao_Paulo"

_DAY_START = time(0, 0, 0)
_DAY_END = time(23, 59, 59, 999000)


@dataclass(frozen=True)
class DateWindow:
    """Inclusive UTC instant interval covering one zone-local calendar day."""

    day: date
    start: datetime
    end: datetime

    @property
    def label(self) -> str:
        return self.day.isoformat()


class TimeWindow:
    """Date math pinned to a single named time zone."""

    def __init__(self, time_zone: str = DEFAULT_TIME_ZONE) -> None:
        self.time_zone = time_zone
        self.tz = ZoneInfo(time_zone)

    def local_date(self, instant: datetime) -> date:
        return _as_aware(instant).astimezone(self.tz).date()

    def calendar_date(self, instant: datetime) -> str:
        """Render an instant as the zone-local YYYY-MM-DD string."""
        return self.local_date(instant).isoformat()

    def day_window(self, day: date) -> DateWindow:
        """Return [00:00:00.000, 23:59:59.999] of day in this zone, as UTC instants.

        Each bound is resolved with the offset in force at that wall-clock
        time, so a DST day spans 23 or 25 hours instead of being shifted.
        """
        start = datetime.combine(day, _DAY_START, tzinfo=self.tz)
        end = datetime.combine(day, _DAY_END, tzinfo=self.tz)
        return DateWindow(
            day=day,
            start=start.astimezone(timezone.utc),
            end=end.astimezone(timezone.utc),
        )

    def yesterday(self, now: datetime) -> date:
        return self.local_date(now) - timedelta(days=1)

    def yesterday_window(self, now: datetime) -> DateWindow:
        return self.day_window(self.yesterday(now))

    def yesterday_date_string(self, now: datetime) -> str:
        return self.yesterday(now).isoformat()

    @staticmethod
    def is_within(instant: datetime | None, window: DateWindow) -> bool:
        """Inclusive membership test by instant comparison."""
        if instant is None:
            return False
        return window.start <= _as_aware(instant) <= window.end


def _as_aware(instant: datetime) -> datetime:
    # Naive datetimes are UTC; the host's local zone never leaks in.
    if instant.tzinfo is None:
        return instant.replace(tzinfo=timezone.utc)
    return instant
