"""Commute Logs 기능 API 라우터입니다. 요청을 검증하고 서비스 레이어로 비즈니스 로직을 위임합니다."""

from datetime import date

from fastapi import APIRouter, Depends, Query, Response, status
from sqlalchemy.orm import Session

from hr_admin.database import get_db
from hr_admin.middleware.auth_middleware import get_current_user, require_roles
from hr_admin.models.user import AppUser
from hr_admin.schemas.commute import (
    CommuteActionRequest,
    CommuteActionResult,
    CommuteEditLogOut,
    CommuteLogEditRequest,
    CommuteLogEditResult,
    CommuteLogListOut,
    CommuteReportOut,
    PresentReportOut,
)
from hr_admin.services import commute_service, edit_log_service
from hr_admin.utils.clock import Clock, get_clock
from hr_admin.utils.permissions import LEDGER_ADMIN_ROLES

router = APIRouter(prefix="/api/commute-logs", tags=["commute-logs"])


@router.post("", response_model=CommuteActionResult, status_code=status.HTTP_201_CREATED)
def log_commute(
    data: CommuteActionRequest,
    response: Response,
    db: Session = Depends(get_db),
    clock: Clock = Depends(get_clock),
    current_user: AppUser = Depends(get_current_user),
):
    if data.action == "entry":
        log = commute_service.log_entry(
            db, data.personnel_code, data.guard_name, clock=clock, timestamp=data.timestamp
        )
        return {"message": "입실이 기록되었습니다.", "log": log}
    if data.action == "exit":
        log = commute_service.log_exit(db, data.personnel_code, clock=clock, timestamp=data.timestamp)
        response.status_code = status.HTTP_200_OK
        return {"message": "퇴실이 기록되었습니다.", "log": log}
    log = commute_service.log_short_leave(
        db, data.personnel_code, data.guard_name, data.exit_time, data.return_time, clock=clock
    )
    return {"message": "조퇴(단시간 외출)가 기록되었습니다.", "log": log}


@router.get("", response_model=CommuteLogListOut)
def list_day_logs(
    day: date | None = Query(None, alias="date"),
    personnel_code: str | None = Query(None),
    department: str | None = Query(None),
    db: Session = Depends(get_db),
    clock: Clock = Depends(get_clock),
    current_user: AppUser = Depends(get_current_user),
):
    target_day = day or clock.today()
    logs = commute_service.query_by_day(
        db, target_day, clock=clock, personnel_code=personnel_code, department=department
    )
    return {"logs": logs}


@router.get("/report", response_model=CommuteReportOut)
def commute_report(
    start_date: date | None = Query(None),
    end_date: date | None = Query(None),
    personnel_code: str | None = Query(None),
    department: str | None = Query(None),
    position: str | None = Query(None),
    db: Session = Depends(get_db),
    clock: Clock = Depends(get_clock),
    current_user: AppUser = Depends(require_roles(*LEDGER_ADMIN_ROLES)),
):
    reports = commute_service.query_range(
        db,
        start_date,
        end_date,
        clock=clock,
        personnel_code=personnel_code,
        department=department,
        position=position,
    )
    return {"reports": reports}


@router.get("/present", response_model=PresentReportOut)
def present_report(
    day: date | None = Query(None, alias="date"),
    db: Session = Depends(get_db),
    clock: Clock = Depends(get_clock),
    current_user: AppUser = Depends(get_current_user),
):
    return {"present": commute_service.query_present(db, day or clock.today(), clock=clock)}


@router.put("/{log_id}", response_model=CommuteLogEditResult)
def edit_log(
    log_id: int,
    data: CommuteLogEditRequest,
    db: Session = Depends(get_db),
    clock: Clock = Depends(get_clock),
    current_user: AppUser = Depends(require_roles(*LEDGER_ADMIN_ROLES)),
):
    log = commute_service.edit_record(
        db, log_id, data.entry_time, data.exit_time, data.editor_name, clock=clock
    )
    return {"message": "출입 기록이 수정되었습니다.", "id": log.id}


@router.delete("/{log_id}")
def delete_log(
    log_id: int,
    db: Session = Depends(get_db),
    current_user: AppUser = Depends(require_roles(*LEDGER_ADMIN_ROLES)),
):
    commute_service.delete_record(db, log_id)
    return {"message": "삭제되었습니다."}


@router.get("/{log_id}/edits", response_model=list[CommuteEditLogOut])
def list_log_edits(
    log_id: int,
    db: Session = Depends(get_db),
    current_user: AppUser = Depends(require_roles(*LEDGER_ADMIN_ROLES)),
):
    commute_service.get_log(db, log_id)
    return edit_log_service.list_for_log(db, log_id)
