"""Users 기능 API 라우터입니다. 앱 사용자 계정 관리는 관리자에게만 허용합니다."""

from typing import List

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from hr_admin.database import get_db
from hr_admin.middleware.auth_middleware import require_roles
from hr_admin.models.user import AppUser
from hr_admin.schemas.backup import MessageOut
from hr_admin.schemas.user import UserBulkUpsertRequest, UserBulkUpsertResult, UserOut, UserUpdate
from hr_admin.services import user_service
from hr_admin.utils.permissions import ADMIN

router = APIRouter(prefix="/api/users", tags=["users"])


@router.get("", response_model=List[UserOut])
def list_users(
    db: Session = Depends(get_db),
    _current_user: AppUser = Depends(require_roles(ADMIN)),
):
    return user_service.list_users(db)


@router.post("", response_model=UserBulkUpsertResult)
def upsert_users(
    data: UserBulkUpsertRequest,
    db: Session = Depends(get_db),
    _current_user: AppUser = Depends(require_roles(ADMIN)),
):
    return user_service.bulk_upsert_users(db, data)


@router.put("/{user_id}", response_model=UserOut)
def update_user(
    user_id: int,
    data: UserUpdate,
    db: Session = Depends(get_db),
    _current_user: AppUser = Depends(require_roles(ADMIN)),
):
    return user_service.update_user(db, user_id, data)


@router.delete("/{user_id}", response_model=MessageOut)
def delete_user(
    user_id: int,
    db: Session = Depends(get_db),
    current_user: AppUser = Depends(require_roles(ADMIN)),
):
    user_service.delete_user(db, user_id, current_user)
    return {"message": "사용자가 삭제되었습니다."}
