"""여러 스키마가 공유하는 시각 타입입니다."""

from datetime import datetime
from typing import Annotated
from zoneinfo import ZoneInfo

from pydantic import AfterValidator

from hr_admin.config import settings
from hr_admin.utils.clock import to_utc


def _localize(value: datetime) -> datetime:
    # 오프셋 없는 입력 시각은 고정 시간대의 현지 시각으로 해석한다.
    if value.tzinfo is None:
        value = value.replace(tzinfo=ZoneInfo(settings.TIMEZONE))
    return to_utc(value)


# 요청으로 들어오는 시각
LocalInstant = Annotated[datetime, AfterValidator(_localize)]
# 저장소에서 읽은 시각(naive면 UTC)
UtcInstant = Annotated[datetime, AfterValidator(to_utc)]
