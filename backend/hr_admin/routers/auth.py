"""Auth 기능 API 라우터입니다. 요청을 검증하고 서비스 레이어로 비즈니스 로직을 위임합니다."""

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from hr_admin.database import get_db
from hr_admin.schemas.user import LoginRequest, TokenResponse, UserOut
from hr_admin.services.auth_service import authenticate, create_access_token
from hr_admin.middleware.auth_middleware import get_current_user
from hr_admin.models.user import AppUser

router = APIRouter(prefix="/api/auth", tags=["auth"])


@router.post("/login", response_model=TokenResponse)
def login(request: LoginRequest, db: Session = Depends(get_db)):
    user = authenticate(db, request.username, request.password)
    token = create_access_token(user.id)
    return TokenResponse(access_token=token, user=UserOut.model_validate(user))


@router.get("/me", response_model=UserOut)
def me(current_user: AppUser = Depends(get_current_user)):
    return current_user
