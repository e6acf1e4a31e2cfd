"""출입 기록 수정 이력(감사 로그) 적재/조회 도메인 서비스입니다."""

from datetime import date, datetime
from typing import Iterable, List, Optional, Tuple

from sqlalchemy.orm import Session

from hr_admin.models.commute_log import CommuteEditLog, CommuteLog
from hr_admin.models.personnel import CommutingMember
from hr_admin.utils.clock import Clock
from hr_admin.utils.helpers import format_instant
from hr_admin.errors import ValidationError

FieldChange = Tuple[str, Optional[datetime], Optional[datetime]]


def _same_instant(old: Optional[datetime], new: Optional[datetime]) -> bool:
    return format_instant(old) == format_instant(new)


def record_field_edits(
    db: Session,
    log: CommuteLog,
    editor_name: str,
    changes: Iterable[FieldChange],
    *,
    clock: Clock,
) -> List[CommuteEditLog]:
    """Stage one edit-log row per changed field. The caller owns the commit."""
    edited_at = clock.now()
    rows = []
    for field_name, old_value, new_value in changes:
        if _same_instant(old_value, new_value):
            continue
        row = CommuteEditLog(
            commute_log_id=log.id,
            personnel_code=log.personnel_code,
            editor_name=editor_name,
            edit_timestamp=edited_at,
            field_name=field_name,
            old_value=format_instant(old_value),
            new_value=format_instant(new_value),
        )
        db.add(row)
        rows.append(row)
    return rows


def list_for_log(db: Session, log_id: int) -> List[CommuteEditLog]:
    return (
        db.query(CommuteEditLog)
        .filter(CommuteEditLog.commute_log_id == log_id)
        .order_by(CommuteEditLog.edit_timestamp.desc(), CommuteEditLog.id.desc())
        .all()
    )


def query_edit_logs(
    db: Session,
    *,
    clock: Clock,
    start_date: Optional[date] = None,
    end_date: Optional[date] = None,
    personnel_code: Optional[str] = None,
    department: Optional[str] = None,
    position: Optional[str] = None,
) -> List[dict]:
    if start_date and end_date and start_date > end_date:
        raise ValidationError("시작일은 종료일보다 늦을 수 없습니다.")

    query = (
        db.query(CommuteEditLog, CommuteLog.entry_time, CommutingMember.full_name)
        .join(CommuteLog, CommuteEditLog.commute_log_id == CommuteLog.id)
        .outerjoin(CommutingMember, CommuteEditLog.personnel_code == CommutingMember.personnel_code)
    )
    lower, upper = clock.range_bounds(start_date, end_date)
    if lower is not None:
        query = query.filter(CommuteLog.entry_time >= lower)
    if upper is not None:
        query = query.filter(CommuteLog.entry_time < upper)
    if personnel_code:
        query = query.filter(CommuteEditLog.personnel_code == personnel_code)
    if department:
        query = query.filter(CommutingMember.department == department)
    if position:
        query = query.filter(CommutingMember.position == position)

    rows = query.order_by(CommuteEditLog.edit_timestamp.desc(), CommuteEditLog.id.desc()).all()
    return [
        {
            "id": edit.id,
            "commute_log_id": edit.commute_log_id,
            "personnel_code": edit.personnel_code,
            "full_name": full_name,
            "editor_name": edit.editor_name,
            "edit_timestamp": edit.edit_timestamp,
            "field_name": edit.field_name,
            "old_value": edit.old_value,
            "new_value": edit.new_value,
            "record_date": record_date,
        }
        for edit, record_date, full_name in rows
    ]
