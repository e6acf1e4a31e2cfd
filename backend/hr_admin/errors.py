"""서비스 레이어 공통 오류 분류(검증/충돌/미존재/저장소)를 정의합니다."""

from typing import Optional

from fastapi import HTTPException, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse


class ServiceError(HTTPException):
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    error_type = "error"

    def __init__(self, message: str, cause: Optional[str] = None):
        super().__init__(status_code=self.status_code, detail=message)
        self.message = message
        self.cause = cause

    def __str__(self) -> str:
        if self.cause:
            return f"{self.message} ({self.cause})"
        return self.message


class ValidationError(ServiceError):
    status_code = status.HTTP_400_BAD_REQUEST
    error_type = "validation"


class ConflictError(ServiceError):
    status_code = status.HTTP_409_CONFLICT
    error_type = "conflict"


class NotFoundError(ServiceError):
    status_code = status.HTTP_404_NOT_FOUND
    error_type = "not_found"


class StorageError(ServiceError):
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    error_type = "storage"


def error_body(message: str, error_type: str, cause: Optional[str] = None) -> dict:
    body = {"detail": message, "error_type": error_type}
    if cause:
        body["cause"] = cause
    return body


async def service_error_handler(request: Request, exc: ServiceError) -> JSONResponse:
    return JSONResponse(
        status_code=exc.status_code,
        content=error_body(exc.message, exc.error_type, exc.cause),
    )


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    # 필수 필드 누락/형식 오류는 422 대신 400으로 응답한다.
    fields = []
    for err in exc.errors():
        loc = ".".join(str(part) for part in err.get("loc", ()) if part != "body")
        fields.append(f"{loc}: {err.get('msg')}")
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content=error_body("요청 데이터가 누락되었거나 올바르지 않습니다.", "validation", "; ".join(fields)),
    )
