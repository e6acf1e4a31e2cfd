"""시간 단위 외출/복귀 기록의 SQLAlchemy 모델 정의입니다."""

from sqlalchemy import Column, Integer, String, Text, DateTime, Index, text
from sqlalchemy.sql import func
from hr_admin.database import Base

_ACTIVE_WHERE = text("entry_time IS NULL")


class HourlyCommuteLog(Base):
    __tablename__ = "hourly_commute_logs"

    id = Column(Integer, primary_key=True, autoincrement=True)
    personnel_code = Column(String(255), nullable=False)
    full_name = Column(String(255), nullable=False)
    guard_name = Column(String(255), nullable=False)
    exit_time = Column(DateTime(timezone=True))
    # 복귀 시각. 기존 백업과의 호환을 위해 컬럼명은 entry_time을 유지한다.
    return_time = Column("entry_time", DateTime(timezone=True))
    reason = Column(Text)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now())

    __table_args__ = (
        Index("idx_hourly_commute_exit", "exit_time"),
        Index(
            "uq_hourly_commute_active",
            "personnel_code",
            unique=True,
            postgresql_where=_ACTIVE_WHERE,
            sqlite_where=_ACTIVE_WHERE,
        ),
    )
