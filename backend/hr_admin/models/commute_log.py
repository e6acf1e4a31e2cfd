"""출입(상근/조퇴) 기록과 수정 이력의 SQLAlchemy 모델 정의입니다."""

from sqlalchemy import Column, Integer, String, Date, DateTime, ForeignKey, Index, text
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from hr_admin.database import Base

LOG_TYPE_MAIN = "main"
LOG_TYPE_SHORT_LEAVE = "short_leave"
LOG_TYPES = (LOG_TYPE_MAIN, LOG_TYPE_SHORT_LEAVE)

_OPEN_MAIN_WHERE = text("exit_time IS NULL AND log_type = 'main'")


class CommuteLog(Base):
    __tablename__ = "commute_logs"

    id = Column(Integer, primary_key=True, autoincrement=True)
    personnel_code = Column(String(255), nullable=False)
    guard_name = Column(String(255), nullable=False)
    # short_leave 기록은 복귀 시각을 entry_time에, 외출 시각을 exit_time에 저장한다.
    entry_time = Column(DateTime(timezone=True), nullable=False, server_default=func.now())
    exit_time = Column(DateTime(timezone=True))
    log_type = Column(String(20), nullable=False, default=LOG_TYPE_MAIN, server_default=LOG_TYPE_MAIN)
    work_date = Column(Date)  # entry_time의 현지(고정 시간대) 일자
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now())

    edit_logs = relationship(
        "CommuteEditLog",
        back_populates="commute_log",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )

    __table_args__ = (
        Index("idx_commute_logs_entry", "entry_time"),
        Index("idx_commute_logs_person_day", "personnel_code", "work_date"),
        # 동시 입실 요청 경합을 막는 저장소 레벨 제약: 사람/일자당 열린 상근 기록 1건
        Index(
            "uq_commute_logs_open_main",
            "personnel_code",
            "work_date",
            unique=True,
            postgresql_where=_OPEN_MAIN_WHERE,
            sqlite_where=_OPEN_MAIN_WHERE,
        ),
    )


class CommuteEditLog(Base):
    __tablename__ = "commute_edit_logs"

    id = Column(Integer, primary_key=True, autoincrement=True)
    commute_log_id = Column(Integer, ForeignKey("commute_logs.id", ondelete="CASCADE"))
    personnel_code = Column(String(255), nullable=False)
    editor_name = Column(String(255), nullable=False)
    edit_timestamp = Column(DateTime(timezone=True), server_default=func.now())
    field_name = Column(String(255), nullable=False)
    old_value = Column(String(255))
    new_value = Column(String(255))

    commute_log = relationship("CommuteLog", back_populates="edit_logs")

    __table_args__ = (
        Index("idx_commute_edit_logs_log", "commute_log_id"),
    )
