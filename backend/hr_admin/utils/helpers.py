"""서비스 레이어 공용 헬퍼(커밋/오류 변환, 값 직렬화)입니다."""

import logging
from datetime import datetime
from typing import Optional

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from hr_admin.errors import ConflictError, StorageError
from hr_admin.utils.clock import to_utc

logger = logging.getLogger(__name__)


def commit_or_raise(db: Session, *, conflict_message: Optional[str] = None) -> None:
    """Commit the session, translating store failures into service errors.

    With ``conflict_message`` set, an ``IntegrityError`` means a uniqueness
    rule fired and is reported as a conflict instead of a storage failure.
    """
    try:
        db.commit()
    except IntegrityError as exc:
        db.rollback()
        if conflict_message:
            raise ConflictError(conflict_message, str(exc.orig)) from exc
        logger.error("[db] integrity error on commit: %s", exc.orig)
        raise StorageError("데이터 무결성 제약 조건을 위반했습니다.", str(exc.orig)) from exc
    except SQLAlchemyError as exc:
        db.rollback()
        logger.error("[db] commit failed: %s", exc)
        raise StorageError("데이터베이스 작업에 실패했습니다.", str(exc)) from exc


def format_instant(value: Optional[datetime]) -> Optional[str]:
    if value is None:
        return None
    return to_utc(value).isoformat()
