"""User 요청/응답 계약을 위한 Pydantic 스키마입니다."""

from pydantic import BaseModel, Field
from typing import List, Optional


class LoginRequest(BaseModel):
    username: str
    password: str


class UserOut(BaseModel):
    id: int
    username: str
    full_name: Optional[str] = None
    role: str
    is_active: bool

    model_config = {"from_attributes": True}


class TokenResponse(BaseModel):
    access_token: str
    token_type: str = "bearer"
    user: UserOut


class UserUpsertItem(BaseModel):
    username: str = Field(min_length=1)
    password: str = Field(min_length=1)
    full_name: Optional[str] = None
    role: str


class UserBulkUpsertRequest(BaseModel):
    rows: List[UserUpsertItem]


class UserBulkUpsertResult(BaseModel):
    created: int
    updated: int
    failed: int
    errors: List[str]


class UserUpdate(BaseModel):
    username: str = Field(min_length=1)
    # 비어 있으면 기존 비밀번호를 유지한다.
    password: Optional[str] = None
    full_name: Optional[str] = None
    role: str
    is_active: bool = True
