"""Hourly Commute Service 도메인 서비스 레이어입니다. 근무 중 시간 단위 외출/복귀 규칙을 캡슐화합니다."""

import logging
from datetime import date
from typing import List, Optional

from sqlalchemy.orm import Session

from hr_admin.errors import ConflictError, NotFoundError, ValidationError
from hr_admin.models.hourly_commute import HourlyCommuteLog
from hr_admin.models.personnel import CommutingMember
from hr_admin.utils.clock import Clock
from hr_admin.utils.helpers import commit_or_raise

logger = logging.getLogger(__name__)

ACTIVE_EXIT_CONFLICT = "이 직원은 아직 복귀하지 않은 외출 기록이 있습니다."


def get_active_for(db: Session, personnel_code: str) -> Optional[HourlyCommuteLog]:
    return (
        db.query(HourlyCommuteLog)
        .filter(
            HourlyCommuteLog.personnel_code == personnel_code,
            HourlyCommuteLog.return_time.is_(None),
        )
        .first()
    )


def log_out(
    db: Session,
    personnel_code: str,
    full_name: str,
    guard_name: str,
    reason: Optional[str] = None,
    *,
    clock: Clock,
) -> HourlyCommuteLog:
    for value, label in ((personnel_code, "직원 코드"), (full_name, "이름"), (guard_name, "경비원 이름")):
        if not value or not value.strip():
            raise ValidationError(f"{label}은(는) 필수 입력값입니다.")

    # 외출은 일자와 무관하게 사람당 1건만 진행 중일 수 있다.
    if get_active_for(db, personnel_code):
        raise ConflictError(ACTIVE_EXIT_CONFLICT)

    now = clock.now()
    log = HourlyCommuteLog(
        personnel_code=personnel_code,
        full_name=full_name,
        guard_name=guard_name,
        exit_time=now,
        return_time=None,
        reason=reason or None,
        created_at=now,
        updated_at=now,
    )
    db.add(log)
    commit_or_raise(db, conflict_message=ACTIVE_EXIT_CONFLICT)
    db.refresh(log)
    logger.info("[hourly] exit logged personnel=%s id=%s", personnel_code, log.id)
    return log


def log_return(db: Session, log_id: int, *, clock: Clock) -> HourlyCommuteLog:
    now = clock.now()
    # 조건부 UPDATE 한 번으로 처리한다. 갱신된 행이 없으면 없는 기록이거나 이미 복귀한 기록이다.
    updated = (
        db.query(HourlyCommuteLog)
        .filter(HourlyCommuteLog.id == log_id, HourlyCommuteLog.return_time.is_(None))
        .update(
            {HourlyCommuteLog.return_time: now, HourlyCommuteLog.updated_at: now},
            synchronize_session=False,
        )
    )
    if updated == 0:
        db.rollback()
        raise NotFoundError("복귀를 기록할 진행 중인 외출 기록이 없습니다.")
    commit_or_raise(db)
    log = db.query(HourlyCommuteLog).filter(HourlyCommuteLog.id == log_id).first()
    logger.info("[hourly] return logged id=%s", log_id)
    return log


def query_active(db: Session) -> List[HourlyCommuteLog]:
    return (
        db.query(HourlyCommuteLog)
        .filter(HourlyCommuteLog.return_time.is_(None))
        .order_by(HourlyCommuteLog.exit_time.asc())
        .all()
    )


def query_by_day(db: Session, day: date, *, clock: Clock) -> List[HourlyCommuteLog]:
    start, end = clock.day_bounds(day)
    return (
        db.query(HourlyCommuteLog)
        .filter(
            HourlyCommuteLog.return_time.isnot(None),
            HourlyCommuteLog.exit_time >= start,
            HourlyCommuteLog.exit_time < end,
        )
        .order_by(HourlyCommuteLog.exit_time.desc())
        .all()
    )


def query_report(
    db: Session,
    start_date: Optional[date],
    end_date: Optional[date],
    *,
    clock: Clock,
    personnel_code: Optional[str] = None,
    department: Optional[str] = None,
    position: Optional[str] = None,
) -> List[dict]:
    if start_date and end_date and start_date > end_date:
        raise ValidationError("시작일은 종료일보다 늦을 수 없습니다.")

    query = (
        db.query(HourlyCommuteLog, CommutingMember.department, CommutingMember.position)
        .join(CommutingMember, HourlyCommuteLog.personnel_code == CommutingMember.personnel_code)
    )
    lower, upper = clock.range_bounds(start_date, end_date)
    if lower is not None:
        query = query.filter(HourlyCommuteLog.exit_time >= lower)
    if upper is not None:
        query = query.filter(HourlyCommuteLog.exit_time < upper)
    if personnel_code:
        query = query.filter(HourlyCommuteLog.personnel_code == personnel_code)
    if department:
        query = query.filter(CommutingMember.department == department)
    if position:
        query = query.filter(CommutingMember.position == position)

    rows = query.order_by(HourlyCommuteLog.full_name, HourlyCommuteLog.exit_time.desc()).all()
    return [
        {
            "id": log.id,
            "personnel_code": log.personnel_code,
            "full_name": log.full_name,
            "department": dept,
            "position": pos,
            "guard_name": log.guard_name,
            "exit_time": log.exit_time,
            "return_time": log.return_time,
            "reason": log.reason,
        }
        for log, dept, pos in rows
    ]


def delete(db: Session, log_id: int) -> None:
    log = db.query(HourlyCommuteLog).filter(HourlyCommuteLog.id == log_id).first()
    if not log:
        raise NotFoundError("삭제할 외출 기록을 찾을 수 없습니다.")
    db.delete(log)
    commit_or_raise(db)
    logger.info("[hourly] record deleted id=%s", log_id)
