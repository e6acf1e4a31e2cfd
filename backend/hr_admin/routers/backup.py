"""Backup 기능 API 라우터입니다. 전체 데이터 스냅샷 조회/복원/초기화를 관리자에게만 제공합니다."""

from typing import Any

from fastapi import APIRouter, Body, Depends
from sqlalchemy.orm import Session

from hr_admin.database import get_db
from hr_admin.middleware.auth_middleware import require_roles
from hr_admin.models.user import AppUser
from hr_admin.schemas.backup import BackupRestoreResult, MessageOut
from hr_admin.services import backup_service
from hr_admin.utils.clock import Clock, get_clock
from hr_admin.utils.permissions import ADMIN

router = APIRouter(prefix="/api/backup", tags=["backup"])


@router.get("")
def export_backup(
    db: Session = Depends(get_db),
    current_user: AppUser = Depends(require_roles(ADMIN)),
):
    return backup_service.export_snapshot(db)


@router.post("", response_model=BackupRestoreResult)
def restore_backup(
    snapshot: Any = Body(...),
    db: Session = Depends(get_db),
    clock: Clock = Depends(get_clock),
    current_user: AppUser = Depends(require_roles(ADMIN)),
):
    counts = backup_service.restore_snapshot(db, snapshot, clock=clock)
    return {"message": "백업 데이터가 복원되었습니다.", "restored": counts}


@router.delete("", response_model=MessageOut)
def wipe_backup_tables(
    db: Session = Depends(get_db),
    current_user: AppUser = Depends(require_roles(ADMIN)),
):
    backup_service.wipe_all(db)
    return {"message": "모든 데이터가 삭제되었습니다."}
