"""Bearer 토큰으로 현재 사용자(경비원/인사 담당자/관리자)를 확인하고 역할별 접근을 제한합니다."""

import logging

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from sqlalchemy.orm import Session
from jose import JWTError, jwt
from hr_admin.database import get_db
from hr_admin.models.user import AppUser
from hr_admin.config import settings
from hr_admin.services.auth_service import ALGORITHM

logger = logging.getLogger(__name__)

security = HTTPBearer()


def _unauthorized(detail: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=detail,
        headers={"WWW-Authenticate": "Bearer"},
    )


def decode_token(token: str) -> dict:
    try:
        return jwt.decode(token, settings.SECRET_KEY, algorithms=[ALGORITHM])
    except JWTError:
        raise _unauthorized("인증 토큰이 유효하지 않거나 만료되었습니다.")


def get_current_user(
    credentials: HTTPAuthorizationCredentials = Depends(security),
    db: Session = Depends(get_db),
) -> AppUser:
    payload = decode_token(credentials.credentials)
    subject = payload.get("sub")
    if subject is None or not str(subject).isdigit():
        raise _unauthorized("인증 토큰에 사용자 정보가 없습니다.")

    user = db.query(AppUser).filter(AppUser.id == int(subject), AppUser.is_active == True).first()
    if not user:
        raise _unauthorized("사용자를 찾을 수 없거나 비활성화된 계정입니다.")
    return user


def require_roles(*roles: str):
    """Dependency factory: only users whose role is in ``roles`` pass."""

    def checker(current_user: AppUser = Depends(get_current_user)) -> AppUser:
        if current_user.role not in roles:
            logger.warning("[auth] role %s denied (needs %s) user=%s", current_user.role, roles, current_user.username)
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail=f"이 작업에는 다음 권한이 필요합니다: {', '.join(roles)}",
            )
        return current_user

    return checker
