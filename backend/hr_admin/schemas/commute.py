"""Commute Log 요청/응답 계약을 위한 Pydantic 스키마입니다."""

from datetime import date, datetime
from typing import List, Literal, Optional

from pydantic import BaseModel, Field

from hr_admin.schemas.common import LocalInstant, UtcInstant


class CommuteActionRequest(BaseModel):
    personnel_code: str = Field(min_length=1)
    guard_name: str = Field(min_length=1)
    action: Literal["entry", "exit", "short_leave"]
    # 입실/퇴실 시각 지정(없으면 현재 시각)
    timestamp: Optional[LocalInstant] = None
    # short_leave 전용
    exit_time: Optional[LocalInstant] = None
    return_time: Optional[LocalInstant] = None


class CommuteLogOut(BaseModel):
    id: int
    personnel_code: str
    guard_name: str
    entry_time: UtcInstant
    exit_time: Optional[UtcInstant] = None
    log_type: str
    work_date: Optional[date] = None
    created_at: Optional[UtcInstant] = None
    updated_at: Optional[UtcInstant] = None

    model_config = {"from_attributes": True}


class CommuteActionResult(BaseModel):
    message: str
    log: CommuteLogOut


class CommuteLogDetailOut(BaseModel):
    id: int
    personnel_code: str
    full_name: Optional[str] = None
    department: Optional[str] = None
    position: Optional[str] = None
    guard_name: str
    entry_time: UtcInstant
    exit_time: Optional[UtcInstant] = None
    log_type: str


class CommuteLogListOut(BaseModel):
    logs: List[CommuteLogDetailOut]


class CommuteReportOut(BaseModel):
    reports: List[CommuteLogDetailOut]


class PresentReportOut(BaseModel):
    present: List[CommuteLogDetailOut]


class CommuteLogEditRequest(BaseModel):
    entry_time: LocalInstant
    exit_time: Optional[LocalInstant] = None
    editor_name: str = Field(min_length=1)


class CommuteLogEditResult(BaseModel):
    message: str
    id: int


class CommuteEditLogOut(BaseModel):
    id: int
    commute_log_id: Optional[int] = None
    personnel_code: str
    editor_name: str
    edit_timestamp: Optional[UtcInstant] = None
    field_name: str
    old_value: Optional[str] = None
    new_value: Optional[str] = None

    model_config = {"from_attributes": True}


class CommuteEditLogReportRow(CommuteEditLogOut):
    full_name: Optional[str] = None
    record_date: Optional[UtcInstant] = None


class CommuteEditLogListOut(BaseModel):
    logs: List[CommuteEditLogReportRow]
