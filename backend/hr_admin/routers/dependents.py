"""Dependents 기능 API 라우터입니다. 직원별 부양가족 조회/등록/수정/삭제와 일괄 반영을 제공합니다."""

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from hr_admin.database import get_db
from hr_admin.middleware.auth_middleware import require_roles
from hr_admin.models.user import AppUser
from hr_admin.schemas.backup import MessageOut
from hr_admin.schemas.personnel import (
    DependentCreate,
    DependentImportRequest,
    DependentListOut,
    DependentOut,
    DependentUpdate,
    ImportResult,
)
from hr_admin.services import dependent_service
from hr_admin.utils.permissions import LEDGER_ADMIN_ROLES

router = APIRouter(prefix="/api/dependents", tags=["dependents"])


@router.get("", response_model=DependentListOut)
def list_dependents(
    personnel_code: str | None = Query(None),
    db: Session = Depends(get_db),
    current_user: AppUser = Depends(require_roles(*LEDGER_ADMIN_ROLES)),
):
    return {"dependents": dependent_service.list_dependents(db, personnel_code)}


@router.post("", response_model=DependentOut, status_code=status.HTTP_201_CREATED)
def create_dependent(
    data: DependentCreate,
    db: Session = Depends(get_db),
    current_user: AppUser = Depends(require_roles(*LEDGER_ADMIN_ROLES)),
):
    return dependent_service.create_dependent(db, data)


@router.post("/import", response_model=ImportResult)
def import_dependents(
    data: DependentImportRequest,
    db: Session = Depends(get_db),
    current_user: AppUser = Depends(require_roles(*LEDGER_ADMIN_ROLES)),
):
    return dependent_service.import_dependents(db, data.rows)


@router.put("/{dependent_id}", response_model=DependentOut)
def update_dependent(
    dependent_id: int,
    data: DependentUpdate,
    db: Session = Depends(get_db),
    current_user: AppUser = Depends(require_roles(*LEDGER_ADMIN_ROLES)),
):
    return dependent_service.update_dependent(db, dependent_id, data)


@router.delete("/{dependent_id}", response_model=MessageOut)
def delete_dependent(
    dependent_id: int,
    db: Session = Depends(get_db),
    current_user: AppUser = Depends(require_roles(*LEDGER_ADMIN_ROLES)),
):
    dependent_service.delete_dependent(db, dependent_id)
    return {"message": "삭제되었습니다."}
