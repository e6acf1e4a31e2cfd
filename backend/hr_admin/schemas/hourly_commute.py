"""Hourly Commute 요청/응답 계약을 위한 Pydantic 스키마입니다."""

from typing import List, Optional

from pydantic import BaseModel, Field

from hr_admin.schemas.common import UtcInstant


class HourlyExitRequest(BaseModel):
    personnel_code: str = Field(min_length=1)
    full_name: str = Field(min_length=1)
    guard_name: str = Field(min_length=1)
    reason: Optional[str] = None


class HourlyCommuteLogOut(BaseModel):
    id: int
    personnel_code: str
    full_name: str
    guard_name: str
    exit_time: Optional[UtcInstant] = None
    return_time: Optional[UtcInstant] = None
    reason: Optional[str] = None
    created_at: Optional[UtcInstant] = None
    updated_at: Optional[UtcInstant] = None

    model_config = {"from_attributes": True}


class HourlyCommuteResult(BaseModel):
    message: str
    log: HourlyCommuteLogOut


class HourlyCommuteListOut(BaseModel):
    logs: List[HourlyCommuteLogOut]


class HourlyReportRow(BaseModel):
    id: int
    personnel_code: str
    full_name: str
    department: Optional[str] = None
    position: Optional[str] = None
    guard_name: str
    exit_time: Optional[UtcInstant] = None
    return_time: Optional[UtcInstant] = None
    reason: Optional[str] = None


class HourlyReportOut(BaseModel):
    reports: List[HourlyReportRow]
