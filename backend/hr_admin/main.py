"""FastAPI 애플리케이션 진입점. 로깅, 미들웨어, 오류 핸들러, API 라우터를 등록합니다."""

import logging

from fastapi import Depends, FastAPI
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.requests import Request
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from hr_admin.config import settings
from hr_admin.database import Base, engine, get_db, check_connection
from hr_admin.errors import ServiceError, error_body, request_validation_handler, service_error_handler
import hr_admin.models  # noqa: F401 - 모델 import로 metadata 등록
from hr_admin.routers import (
    auth,
    backup,
    commute_logs,
    commuting_members,
    dependents,
    edit_logs,
    hourly_commute,
    personnel,
    users,
)

logging.basicConfig(
    level=settings.LOG_LEVEL,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)

app = FastAPI(
    title="HR 출입 관리 시스템",
    description="직원 출입/외출 기록과 전체 데이터 백업·복원을 제공하는 인사 관리 백엔드",
    version="1.0.0",
    docs_url="/docs",
    redoc_url="/redoc",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.ALLOWED_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.add_exception_handler(ServiceError, service_error_handler)
app.add_exception_handler(RequestValidationError, request_validation_handler)


@app.exception_handler(SQLAlchemyError)
async def storage_error_handler(request: Request, exc: SQLAlchemyError) -> JSONResponse:
    logger.error("[db] unhandled storage error on %s %s: %s", request.method, request.url.path, exc)
    return JSONResponse(
        status_code=500,
        content=error_body("데이터베이스 작업에 실패했습니다.", "storage", str(exc)),
    )


# Register all routers
app.include_router(auth.router)
app.include_router(users.router)
app.include_router(personnel.router)
app.include_router(dependents.router)
app.include_router(commuting_members.router)
app.include_router(commute_logs.router)
app.include_router(edit_logs.router)
app.include_router(hourly_commute.router)
app.include_router(backup.router)


@app.on_event("startup")
def ensure_schema():
    # 신규 배포 시 누락된 테이블을 자동 생성합니다.
    Base.metadata.create_all(bind=engine)


@app.get("/api/health")
def health_check():
    return {"status": "ok", "service": "HR 출입 관리 시스템"}


@app.get("/api/health/db")
def database_health_check(db: Session = Depends(get_db)):
    check_connection(db)
    return {"status": "ok", "database": engine.dialect.name}
