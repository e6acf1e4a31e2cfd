"""고정 시간대(기본 Asia/Tehran) 기준의 현재 시각/일자 계산을 담당하는 시계 어댑터입니다."""

from datetime import date, datetime, time, timedelta, timezone
from typing import Optional, Tuple
from zoneinfo import ZoneInfo

from hr_admin.config import settings


def to_utc(value: datetime) -> datetime:
    """Return an aware UTC datetime. Naive values are assumed to already be UTC."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


class Clock:
    """Resolves "now" and civil-day boundaries in one fixed timezone.

    Every instant handed out is an aware UTC datetime; the zone is only used to
    decide which calendar day an instant belongs to.
    """

    def __init__(self, tz_name: Optional[str] = None):
        self.tz_name = tz_name or settings.TIMEZONE
        self.tz = ZoneInfo(self.tz_name)

    def now(self) -> datetime:
        return datetime.now(timezone.utc)

    def today(self) -> date:
        return self.civil_date(self.now())

    def local(self, value: datetime) -> datetime:
        return to_utc(value).astimezone(self.tz)

    def civil_date(self, value: datetime) -> date:
        return self.local(value).date()

    def day_bounds(self, day: date) -> Tuple[datetime, datetime]:
        # [start, end) 구간. 자정 기준은 현지 시간대이고 반환값은 UTC이다.
        start = datetime.combine(day, time.min, tzinfo=self.tz)
        end = datetime.combine(day + timedelta(days=1), time.min, tzinfo=self.tz)
        return start.astimezone(timezone.utc), end.astimezone(timezone.utc)

    def range_bounds(self, start_day: Optional[date], end_day: Optional[date]) -> Tuple[Optional[datetime], Optional[datetime]]:
        lower = self.day_bounds(start_day)[0] if start_day else None
        upper = self.day_bounds(end_day)[1] if end_day else None
        return lower, upper

    def effective_instant(self, timestamp: Optional[datetime]) -> datetime:
        if timestamp is None:
            return self.now()
        return to_utc(timestamp)


class FixedClock(Clock):
    def __init__(self, instant: datetime, tz_name: Optional[str] = None):
        super().__init__(tz_name)
        self.instant = to_utc(instant)

    def now(self) -> datetime:
        return self.instant


def get_clock() -> Clock:
    return Clock(settings.TIMEZONE)
