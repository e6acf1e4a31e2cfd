"""Hourly Commute 기능 API 라우터입니다. 요청을 검증하고 서비스 레이어로 비즈니스 로직을 위임합니다."""

from datetime import date
from typing import Literal

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from hr_admin.database import get_db
from hr_admin.errors import ValidationError
from hr_admin.middleware.auth_middleware import get_current_user, require_roles
from hr_admin.models.user import AppUser
from hr_admin.schemas.hourly_commute import (
    HourlyCommuteListOut,
    HourlyCommuteResult,
    HourlyExitRequest,
    HourlyReportOut,
)
from hr_admin.services import hourly_commute_service
from hr_admin.utils.clock import Clock, get_clock
from hr_admin.utils.permissions import LEDGER_ADMIN_ROLES

router = APIRouter(prefix="/api/hourly-commute", tags=["hourly-commute"])


@router.get("", response_model=HourlyCommuteListOut)
def list_hourly_logs(
    status_filter: Literal["active"] | None = Query(None, alias="status"),
    day: date | None = Query(None, alias="date"),
    db: Session = Depends(get_db),
    clock: Clock = Depends(get_clock),
    current_user: AppUser = Depends(get_current_user),
):
    if status_filter == "active":
        return {"logs": hourly_commute_service.query_active(db)}
    if day is not None:
        return {"logs": hourly_commute_service.query_by_day(db, day, clock=clock)}
    raise ValidationError("status=active 또는 date=YYYY-MM-DD 중 하나를 지정해야 합니다.")


@router.get("/report", response_model=HourlyReportOut)
def hourly_report(
    start_date: date | None = Query(None),
    end_date: date | None = Query(None),
    personnel_code: str | None = Query(None),
    department: str | None = Query(None),
    position: str | None = Query(None),
    db: Session = Depends(get_db),
    clock: Clock = Depends(get_clock),
    current_user: AppUser = Depends(require_roles(*LEDGER_ADMIN_ROLES)),
):
    reports = hourly_commute_service.query_report(
        db,
        start_date,
        end_date,
        clock=clock,
        personnel_code=personnel_code,
        department=department,
        position=position,
    )
    return {"reports": reports}


@router.post("", response_model=HourlyCommuteResult, status_code=status.HTTP_201_CREATED)
def log_hourly_exit(
    data: HourlyExitRequest,
    db: Session = Depends(get_db),
    clock: Clock = Depends(get_clock),
    current_user: AppUser = Depends(get_current_user),
):
    log = hourly_commute_service.log_out(
        db, data.personnel_code, data.full_name, data.guard_name, data.reason, clock=clock
    )
    return {"message": "시간제 외출이 기록되었습니다.", "log": log}


@router.put("/{log_id}", response_model=HourlyCommuteResult)
def log_hourly_return(
    log_id: int,
    db: Session = Depends(get_db),
    clock: Clock = Depends(get_clock),
    current_user: AppUser = Depends(get_current_user),
):
    log = hourly_commute_service.log_return(db, log_id, clock=clock)
    return {"message": "복귀가 기록되었습니다.", "log": log}


@router.delete("/{log_id}")
def delete_hourly_log(
    log_id: int,
    db: Session = Depends(get_db),
    current_user: AppUser = Depends(require_roles(*LEDGER_ADMIN_ROLES)),
):
    hourly_commute_service.delete(db, log_id)
    return {"message": "삭제되었습니다."}
