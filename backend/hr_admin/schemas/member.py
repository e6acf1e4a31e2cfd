"""Commuting Member 요청/응답 계약을 위한 Pydantic 스키마입니다."""

from typing import List, Optional

from pydantic import BaseModel, Field


class CommutingMemberCreate(BaseModel):
    personnel_code: str = Field(min_length=1)
    full_name: str = Field(min_length=1)
    department: Optional[str] = None
    position: Optional[str] = None


class CommutingMemberOut(CommutingMemberCreate):
    id: int

    model_config = {"from_attributes": True}


class CommutingMemberListOut(BaseModel):
    members: List[CommutingMemberOut]
