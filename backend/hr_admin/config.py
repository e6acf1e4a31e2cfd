"""환경 변수 기반 애플리케이션 설정을 중앙에서 관리합니다."""

from pydantic_settings import BaseSettings
from typing import List
from pathlib import Path


class Settings(BaseSettings):
    DATABASE_URL: str = "sqlite:///./hr_admin.db"
    SECRET_KEY: str = "change-me-to-a-random-secret-key"
    DEBUG: bool = True
    ALLOWED_ORIGINS: List[str] = ["http://localhost:3000", "http://localhost:8000"]
    LOG_LEVEL: str = "INFO"

    # JWT
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 480

    # 출입 기록의 "하루" 경계는 이 시간대 기준으로 자른다.
    TIMEZONE: str = "Asia/Tehran"
    # 이 시각(현지, 시) 이전의 퇴실만 전날 열린 입실 기록을 닫을 수 있다.
    OVERNIGHT_EXIT_CUTOFF_HOUR: int = 6

    # Backup restore
    BACKUP_BATCH_SIZE: int = 250

    class Config:
        # 실행 cwd와 무관하게 backend/.env를 로드한다.
        env_file = str(Path(__file__).resolve().parents[1] / ".env")


settings = Settings()
