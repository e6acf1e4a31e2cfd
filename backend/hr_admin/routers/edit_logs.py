"""출입 기록 수정 이력 보고서 API 라우터입니다."""

from datetime import date

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from hr_admin.database import get_db
from hr_admin.middleware.auth_middleware import require_roles
from hr_admin.models.user import AppUser
from hr_admin.schemas.commute import CommuteEditLogListOut
from hr_admin.services import edit_log_service
from hr_admin.utils.clock import Clock, get_clock
from hr_admin.utils.permissions import LEDGER_ADMIN_ROLES

router = APIRouter(prefix="/api/edit-logs", tags=["edit-logs"])


@router.get("", response_model=CommuteEditLogListOut)
def list_edit_logs(
    start_date: date | None = Query(None),
    end_date: date | None = Query(None),
    personnel_code: str | None = Query(None),
    department: str | None = Query(None),
    position: str | None = Query(None),
    db: Session = Depends(get_db),
    clock: Clock = Depends(get_clock),
    current_user: AppUser = Depends(require_roles(*LEDGER_ADMIN_ROLES)),
):
    logs = edit_log_service.query_edit_logs(
        db,
        clock=clock,
        start_date=start_date,
        end_date=end_date,
        personnel_code=personnel_code,
        department=department,
        position=position,
    )
    return {"logs": logs}
