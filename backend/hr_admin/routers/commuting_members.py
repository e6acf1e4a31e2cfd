"""Commuting Members 기능 API 라우터입니다. 요청을 검증하고 서비스 레이어로 비즈니스 로직을 위임합니다."""

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from hr_admin.database import get_db
from hr_admin.middleware.auth_middleware import get_current_user, require_roles
from hr_admin.models.user import AppUser
from hr_admin.schemas.member import CommutingMemberCreate, CommutingMemberListOut, CommutingMemberOut
from hr_admin.services import member_service
from hr_admin.utils.permissions import LEDGER_ADMIN_ROLES

router = APIRouter(prefix="/api/commuting-members", tags=["commuting-members"])


@router.get("", response_model=CommutingMemberListOut)
def list_members(db: Session = Depends(get_db), current_user: AppUser = Depends(get_current_user)):
    return {"members": member_service.list_members(db)}


@router.post("", response_model=CommutingMemberOut, status_code=status.HTTP_201_CREATED)
def create_member(
    data: CommutingMemberCreate,
    db: Session = Depends(get_db),
    current_user: AppUser = Depends(require_roles(*LEDGER_ADMIN_ROLES)),
):
    return member_service.create_member(db, data)
