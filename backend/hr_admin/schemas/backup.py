"""Backup 요청/응답 계약을 위한 Pydantic 스키마입니다."""

from typing import Dict

from pydantic import BaseModel


class BackupRestoreResult(BaseModel):
    message: str
    restored: Dict[str, int]


class MessageOut(BaseModel):
    message: str
