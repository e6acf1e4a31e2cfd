"""User Service 도메인 서비스 레이어입니다. 앱 사용자 계정(관리자/인사/경비) 관리를 담당합니다."""

import logging
from typing import List

from sqlalchemy.orm import Session

from hr_admin.errors import ConflictError, NotFoundError, ValidationError
from hr_admin.models.user import AppUser
from hr_admin.schemas.user import UserBulkUpsertRequest, UserUpdate
from hr_admin.utils.helpers import commit_or_raise
from hr_admin.utils.permissions import ADMIN, ALLOWED_ROLES

logger = logging.getLogger(__name__)

DUPLICATE_USERNAME = "이미 사용 중인 사용자 이름입니다."


def list_users(db: Session) -> List[AppUser]:
    return db.query(AppUser).order_by(AppUser.username).all()


def get_user(db: Session, user_id: int) -> AppUser:
    user = db.query(AppUser).filter(AppUser.id == user_id).first()
    if not user:
        raise NotFoundError("사용자를 찾을 수 없습니다.")
    return user


def _ensure_not_last_admin_change(db: Session, user: AppUser, next_role: str, next_active: bool) -> None:
    is_admin_leaving = user.role == ADMIN and user.is_active and (next_role != ADMIN or next_active is False)
    if is_admin_leaving:
        admin_count = db.query(AppUser).filter(AppUser.role == ADMIN, AppUser.is_active == True).count()  # noqa: E712
        if admin_count <= 1:
            raise ValidationError("마지막 관리자 계정은 변경하거나 삭제할 수 없습니다.")


def bulk_upsert_users(db: Session, data: UserBulkUpsertRequest) -> dict:
    created = 0
    updated = 0
    errors: list[str] = []
    seen = {}

    for index, item in enumerate(data.rows, start=1):
        username = item.username.strip()
        role = item.role.strip()
        if role not in ALLOWED_ROLES:
            errors.append(f"{index}행: 역할 값이 올바르지 않습니다. ({role})")
            continue

        existing = seen.get(username) or db.query(AppUser).filter(AppUser.username == username).first()
        if not existing:
            user = AppUser(username=username, password=item.password, full_name=item.full_name, role=role, is_active=True)
            db.add(user)
            seen[username] = user
            created += 1
            continue

        _ensure_not_last_admin_change(db, existing, role, True)
        existing.password = item.password
        existing.full_name = item.full_name
        existing.role = role
        seen[username] = existing
        updated += 1

    commit_or_raise(db, conflict_message=DUPLICATE_USERNAME)
    logger.info("[user] upsert created=%s updated=%s failed=%s", created, updated, len(errors))
    return {"created": created, "updated": updated, "failed": len(errors), "errors": errors}


def update_user(db: Session, user_id: int, data: UserUpdate) -> AppUser:
    user = get_user(db, user_id)
    if data.role not in ALLOWED_ROLES:
        raise ValidationError("유효하지 않은 역할입니다.", data.role)
    clash = db.query(AppUser.id).filter(AppUser.username == data.username, AppUser.id != user.id).first()
    if clash:
        raise ConflictError(DUPLICATE_USERNAME)
    _ensure_not_last_admin_change(db, user, data.role, data.is_active)

    user.username = data.username
    user.full_name = data.full_name
    user.role = data.role
    user.is_active = data.is_active
    if data.password:
        user.password = data.password
    commit_or_raise(db, conflict_message=DUPLICATE_USERNAME)
    db.refresh(user)
    logger.info("[user] updated id=%s role=%s", user.id, user.role)
    return user


def delete_user(db: Session, user_id: int, current_user: AppUser) -> None:
    user = get_user(db, user_id)
    if user.id == current_user.id:
        raise ValidationError("현재 로그인한 계정은 삭제할 수 없습니다.")
    _ensure_not_last_admin_change(db, user, "", False)
    db.delete(user)
    commit_or_raise(db)
    logger.info("[user] deleted id=%s", user_id)
