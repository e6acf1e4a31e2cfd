"""SQLAlchemy 모델 패키지 초기화 모듈입니다."""

from hr_admin.models.user import AppUser
from hr_admin.models.personnel import Personnel, CommutingMember, Dependent
from hr_admin.models.commute_log import CommuteLog, CommuteEditLog
from hr_admin.models.hourly_commute import HourlyCommuteLog

__all__ = [
    "AppUser",
    "Personnel", "CommutingMember", "Dependent",
    "CommuteLog", "CommuteEditLog",
    "HourlyCommuteLog",
]
