"""Commute Service 도메인 서비스 레이어입니다. 상근 입실/퇴실, 조퇴 기록과 일자별 조회 규칙을 캡슐화합니다."""

import logging
from datetime import date, datetime, timedelta
from typing import List, Optional

from sqlalchemy.orm import Session

from hr_admin.config import settings
from hr_admin.errors import ConflictError, NotFoundError, ValidationError
from hr_admin.models.commute_log import CommuteLog, LOG_TYPE_MAIN, LOG_TYPE_SHORT_LEAVE
from hr_admin.models.personnel import CommutingMember
from hr_admin.services import edit_log_service
from hr_admin.utils.clock import Clock, to_utc
from hr_admin.utils.helpers import commit_or_raise

logger = logging.getLogger(__name__)

OPEN_ENTRY_CONFLICT = "이 직원은 오늘 이미 입실 처리되어 있습니다. 먼저 퇴실을 기록해야 합니다."


def _require(value, label: str):
    if value is None or (isinstance(value, str) and not value.strip()):
        raise ValidationError(f"{label}은(는) 필수 입력값입니다.")
    return value


def get_log(db: Session, log_id: int) -> CommuteLog:
    log = db.query(CommuteLog).filter(CommuteLog.id == log_id).first()
    if not log:
        raise NotFoundError("출입 기록을 찾을 수 없습니다.")
    return log


def find_open_entry(db: Session, personnel_code: str, day: date, *, clock: Clock) -> Optional[CommuteLog]:
    # 일자 비교는 UTC 절삭이 아니라 고정 시간대 기준 [00:00, 24:00) 구간으로 한다.
    start, end = clock.day_bounds(day)
    return (
        db.query(CommuteLog)
        .filter(
            CommuteLog.personnel_code == personnel_code,
            CommuteLog.log_type == LOG_TYPE_MAIN,
            CommuteLog.exit_time.is_(None),
            CommuteLog.entry_time >= start,
            CommuteLog.entry_time < end,
        )
        .order_by(CommuteLog.entry_time.desc())
        .first()
    )


def log_entry(
    db: Session,
    personnel_code: str,
    guard_name: str,
    *,
    clock: Clock,
    timestamp: Optional[datetime] = None,
) -> CommuteLog:
    _require(personnel_code, "직원 코드")
    _require(guard_name, "경비원 이름")

    entry_time = clock.effective_instant(timestamp)
    work_date = clock.civil_date(entry_time)
    if find_open_entry(db, personnel_code, work_date, clock=clock):
        raise ConflictError(OPEN_ENTRY_CONFLICT)

    now = clock.now()
    log = CommuteLog(
        personnel_code=personnel_code,
        guard_name=guard_name,
        entry_time=entry_time,
        exit_time=None,
        log_type=LOG_TYPE_MAIN,
        work_date=work_date,
        created_at=now,
        updated_at=now,
    )
    db.add(log)
    # 조회와 삽입 사이의 경합은 부분 유니크 인덱스가 막고, 위반 시 충돌로 응답한다.
    commit_or_raise(db, conflict_message=OPEN_ENTRY_CONFLICT)
    db.refresh(log)
    logger.info("[commute] entry logged personnel=%s day=%s id=%s", personnel_code, work_date, log.id)
    return log


def log_exit(
    db: Session,
    personnel_code: str,
    *,
    clock: Clock,
    timestamp: Optional[datetime] = None,
) -> CommuteLog:
    """Close the person's open main entry.

    The entry is looked up on the civil day of the exit instant. An exit before
    ``OVERNIGHT_EXIT_CUTOFF_HOUR`` (local) also closes an entry left open on the
    previous civil day.
    """
    _require(personnel_code, "직원 코드")

    exit_time = clock.effective_instant(timestamp)
    exit_day = clock.civil_date(exit_time)
    window_start, window_end = clock.day_bounds(exit_day)
    if clock.local(exit_time).hour < settings.OVERNIGHT_EXIT_CUTOFF_HOUR:
        window_start, _ = clock.day_bounds(exit_day - timedelta(days=1))

    log = (
        db.query(CommuteLog)
        .filter(
            CommuteLog.personnel_code == personnel_code,
            CommuteLog.log_type == LOG_TYPE_MAIN,
            CommuteLog.exit_time.is_(None),
            CommuteLog.entry_time >= window_start,
            CommuteLog.entry_time < window_end,
            CommuteLog.entry_time <= exit_time,
        )
        .order_by(CommuteLog.entry_time.desc())
        .first()
    )
    if not log:
        raise NotFoundError("퇴실을 기록할 열린 입실 기록이 없습니다.")

    log.exit_time = exit_time
    log.updated_at = clock.now()
    commit_or_raise(db)
    db.refresh(log)
    logger.info("[commute] exit logged personnel=%s id=%s", personnel_code, log.id)
    return log


def log_short_leave(
    db: Session,
    personnel_code: str,
    guard_name: str,
    exit_time: Optional[datetime],
    return_time: Optional[datetime],
    *,
    clock: Clock,
) -> CommuteLog:
    _require(personnel_code, "직원 코드")
    _require(guard_name, "경비원 이름")
    _require(exit_time, "외출 시각")
    _require(return_time, "복귀 시각")

    exit_time = to_utc(exit_time)
    return_time = to_utc(return_time)
    if return_time < exit_time:
        raise ValidationError("복귀 시각은 외출 시각보다 빠를 수 없습니다.")

    now = clock.now()
    log = CommuteLog(
        personnel_code=personnel_code,
        guard_name=guard_name,
        entry_time=return_time,
        exit_time=exit_time,
        log_type=LOG_TYPE_SHORT_LEAVE,
        work_date=clock.civil_date(return_time),
        created_at=now,
        updated_at=now,
    )
    db.add(log)
    commit_or_raise(db)
    db.refresh(log)
    logger.info("[commute] short leave logged personnel=%s id=%s", personnel_code, log.id)
    return log


def edit_record(
    db: Session,
    log_id: int,
    entry_time: Optional[datetime],
    exit_time: Optional[datetime],
    editor_name: str,
    *,
    clock: Clock,
) -> CommuteLog:
    _require(entry_time, "입실 시각")
    _require(editor_name, "수정자 이름")

    entry_time = to_utc(entry_time)
    exit_time = to_utc(exit_time) if exit_time is not None else None
    if exit_time is not None and exit_time < entry_time:
        raise ValidationError("퇴실 시각은 입실 시각보다 빠를 수 없습니다.")

    log = get_log(db, log_id)
    edit_log_service.record_field_edits(
        db,
        log,
        editor_name,
        [
            ("entry_time", log.entry_time, entry_time),
            ("exit_time", log.exit_time, exit_time),
        ],
        clock=clock,
    )
    log.entry_time = entry_time
    log.exit_time = exit_time
    log.work_date = clock.civil_date(entry_time)
    log.updated_at = clock.now()
    # 수정 이력과 기록 변경은 같은 트랜잭션으로 커밋된다.
    commit_or_raise(db, conflict_message=OPEN_ENTRY_CONFLICT)
    db.refresh(log)
    logger.info("[commute] record edited id=%s editor=%s", log_id, editor_name)
    return log


def delete_record(db: Session, log_id: int) -> None:
    log = get_log(db, log_id)
    db.delete(log)
    commit_or_raise(db)
    logger.info("[commute] record deleted id=%s", log_id)


def _joined_query(db: Session):
    return db.query(
        CommuteLog,
        CommutingMember.full_name,
        CommutingMember.department,
        CommutingMember.position,
    ).outerjoin(CommutingMember, CommuteLog.personnel_code == CommutingMember.personnel_code)


def _to_row(log: CommuteLog, full_name, department, position) -> dict:
    return {
        "id": log.id,
        "personnel_code": log.personnel_code,
        "full_name": full_name,
        "department": department,
        "position": position,
        "guard_name": log.guard_name,
        "entry_time": log.entry_time,
        "exit_time": log.exit_time,
        "log_type": log.log_type,
    }


def query_by_day(
    db: Session,
    day: date,
    *,
    clock: Clock,
    personnel_code: Optional[str] = None,
    department: Optional[str] = None,
) -> List[dict]:
    start, end = clock.day_bounds(day)
    query = _joined_query(db).filter(CommuteLog.entry_time >= start, CommuteLog.entry_time < end)
    if personnel_code:
        query = query.filter(CommuteLog.personnel_code == personnel_code)
    if department:
        query = query.filter(CommutingMember.department == department)
    rows = query.order_by(CommuteLog.entry_time.desc()).all()
    return [_to_row(*row) for row in rows]


def query_range(
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

    # 보고서는 출입 대상자로 등록된 직원만 포함한다.
    query = _joined_query(db).filter(CommutingMember.full_name.isnot(None))
    lower, upper = clock.range_bounds(start_date, end_date)
    if lower is not None:
        query = query.filter(CommuteLog.entry_time >= lower)
    if upper is not None:
        query = query.filter(CommuteLog.entry_time < upper)
    if personnel_code:
        query = query.filter(CommuteLog.personnel_code == personnel_code)
    if department:
        query = query.filter(CommutingMember.department == department)
    if position:
        query = query.filter(CommutingMember.position == position)
    rows = query.order_by(CommuteLog.entry_time.desc()).all()
    return [_to_row(*row) for row in rows]


def query_present(db: Session, day: date, *, clock: Clock) -> List[dict]:
    start, end = clock.day_bounds(day)
    rows = (
        _joined_query(db)
        .filter(
            CommuteLog.log_type == LOG_TYPE_MAIN,
            CommuteLog.exit_time.is_(None),
            CommuteLog.entry_time >= start,
            CommuteLog.entry_time < end,
        )
        .order_by(CommuteLog.entry_time.asc())
        .all()
    )
    return [_to_row(*row) for row in rows]
