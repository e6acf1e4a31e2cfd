"""Personnel 기능 API 라우터입니다. 요청을 검증하고 서비스 레이어로 비즈니스 로직을 위임합니다."""

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from hr_admin.database import get_db
from hr_admin.middleware.auth_middleware import require_roles
from hr_admin.models.user import AppUser
from hr_admin.schemas.backup import MessageOut
from hr_admin.schemas.personnel import (
    ImportResult,
    PersonnelCreate,
    PersonnelImportRequest,
    PersonnelOut,
    PersonnelPageOut,
    PersonnelResult,
    PersonnelUpdate,
)
from hr_admin.services import personnel_service
from hr_admin.utils.permissions import LEDGER_ADMIN_ROLES

router = APIRouter(prefix="/api/personnel", tags=["personnel"])


@router.get("", response_model=PersonnelPageOut)
def list_personnel(
    page: int = Query(1, ge=1),
    page_size: int = Query(20, ge=1, le=200),
    search: str | None = Query(None),
    db: Session = Depends(get_db),
    current_user: AppUser = Depends(require_roles(*LEDGER_ADMIN_ROLES)),
):
    rows, total = personnel_service.list_personnel(db, page=page, page_size=page_size, search=search)
    return {"personnel": rows, "total_count": total}


@router.post("", response_model=PersonnelResult, status_code=status.HTTP_201_CREATED)
def create_personnel(
    data: PersonnelCreate,
    db: Session = Depends(get_db),
    current_user: AppUser = Depends(require_roles(*LEDGER_ADMIN_ROLES)),
):
    person = personnel_service.create_personnel(db, data)
    return {"message": "직원 정보가 등록되었습니다.", "personnel": person}


@router.post("/import", response_model=ImportResult)
def import_personnel(
    data: PersonnelImportRequest,
    db: Session = Depends(get_db),
    current_user: AppUser = Depends(require_roles(*LEDGER_ADMIN_ROLES)),
):
    return personnel_service.import_personnel(db, data.rows)


@router.get("/{personnel_id}", response_model=PersonnelOut)
def get_personnel(
    personnel_id: int,
    db: Session = Depends(get_db),
    current_user: AppUser = Depends(require_roles(*LEDGER_ADMIN_ROLES)),
):
    return personnel_service.get_personnel(db, personnel_id)


@router.put("/{personnel_id}", response_model=PersonnelResult)
def update_personnel(
    personnel_id: int,
    data: PersonnelUpdate,
    db: Session = Depends(get_db),
    current_user: AppUser = Depends(require_roles(*LEDGER_ADMIN_ROLES)),
):
    person = personnel_service.update_personnel(db, personnel_id, data)
    return {"message": "직원 정보가 수정되었습니다.", "personnel": person}


@router.delete("/{personnel_id}", response_model=MessageOut)
def delete_personnel(
    personnel_id: int,
    db: Session = Depends(get_db),
    current_user: AppUser = Depends(require_roles(*LEDGER_ADMIN_ROLES)),
):
    personnel_service.delete_personnel(db, personnel_id)
    return {"message": "삭제되었습니다."}
