"""Personnel Service 도메인 서비스 레이어입니다. 인사 기본정보 조회/등록/수정/삭제와 엑셀 일괄 등록을 담당합니다."""

import logging
from typing import List, Optional, Tuple

from sqlalchemy import or_
from sqlalchemy.orm import Session

from hr_admin.errors import ConflictError, NotFoundError, ValidationError
from hr_admin.models.personnel import Dependent, Personnel
from hr_admin.schemas.personnel import PersonnelCreate, PersonnelImportRow, PersonnelUpdate
from hr_admin.utils.helpers import commit_or_raise

logger = logging.getLogger(__name__)

DUPLICATE_CODE = "이미 등록된 직원 코드입니다."
DUPLICATE_NATIONAL_ID = "이미 등록된 주민(국가) 식별번호입니다."


def list_personnel(
    db: Session,
    *,
    page: int = 1,
    page_size: int = 20,
    search: Optional[str] = None,
) -> Tuple[List[Personnel], int]:
    query = db.query(Personnel)
    if search:
        like = f"%{search.strip()}%"
        query = query.filter(
            or_(
                Personnel.first_name.ilike(like),
                Personnel.last_name.ilike(like),
                Personnel.personnel_code.ilike(like),
                Personnel.national_id.ilike(like),
            )
        )
    total = query.count()
    page = max(1, page)
    page_size = max(1, min(page_size, 200))
    rows = (
        query.order_by(Personnel.last_name, Personnel.first_name, Personnel.id)
        .offset((page - 1) * page_size)
        .limit(page_size)
        .all()
    )
    return rows, total


def get_personnel(db: Session, personnel_id: int) -> Personnel:
    person = db.query(Personnel).filter(Personnel.id == personnel_id).first()
    if not person:
        raise NotFoundError("직원 정보를 찾을 수 없습니다.")
    return person


def _ensure_unique(db: Session, personnel_code: str, national_id: Optional[str], exclude_id: Optional[int] = None):
    query = db.query(Personnel)
    if exclude_id is not None:
        query = query.filter(Personnel.id != exclude_id)
    if query.filter(Personnel.personnel_code == personnel_code).first():
        raise ConflictError(DUPLICATE_CODE)
    if national_id and query.filter(Personnel.national_id == national_id).first():
        raise ConflictError(DUPLICATE_NATIONAL_ID)


def _clean(data) -> dict:
    # 빈 문자열은 NULL로 저장해야 national_id 유니크 제약이 빈 값끼리 충돌하지 않는다.
    values = data.model_dump()
    return {key: (value.strip() or None) if isinstance(value, str) else value for key, value in values.items()}


def _has_names(values: dict) -> bool:
    return bool(values["personnel_code"] and values["first_name"] and values["last_name"])


def _require_names(values: dict) -> None:
    if not _has_names(values):
        raise ValidationError("직원 코드, 이름, 성은 필수입니다.")


def create_personnel(db: Session, data: PersonnelCreate) -> Personnel:
    values = _clean(data)
    _require_names(values)
    _ensure_unique(db, values["personnel_code"], values["national_id"])
    person = Personnel(**values)
    db.add(person)
    commit_or_raise(db, conflict_message=DUPLICATE_CODE)
    db.refresh(person)
    logger.info("[personnel] created personnel=%s id=%s", person.personnel_code, person.id)
    return person


def update_personnel(db: Session, personnel_id: int, data: PersonnelUpdate) -> Personnel:
    person = get_personnel(db, personnel_id)
    values = _clean(data)
    _require_names(values)
    _ensure_unique(db, values["personnel_code"], values["national_id"], exclude_id=person.id)

    if values["personnel_code"] != person.personnel_code:
        has_dependents = db.query(Dependent).filter(Dependent.personnel_code == person.personnel_code).first()
        if has_dependents:
            raise ValidationError("부양가족이 등록된 직원의 직원 코드는 변경할 수 없습니다.")

    for key, value in values.items():
        setattr(person, key, value)
    commit_or_raise(db, conflict_message=DUPLICATE_CODE)
    db.refresh(person)
    logger.info("[personnel] updated id=%s", person.id)
    return person


def delete_personnel(db: Session, personnel_id: int) -> None:
    person = get_personnel(db, personnel_id)
    db.delete(person)
    commit_or_raise(db)
    logger.info("[personnel] deleted personnel=%s id=%s", person.personnel_code, personnel_id)


def import_personnel(db: Session, rows: List[PersonnelImportRow]) -> dict:
    """Insert new personnel from spreadsheet rows in one transaction.

    Rows whose personnel code already exists are skipped. Rows missing the code
    or a name are reported and skipped. A national id clash aborts the whole
    import.
    """
    if not rows:
        raise ValidationError("등록할 직원 목록이 비어 있습니다.")

    existing = {code for (code,) in db.query(Personnel.personnel_code).all()}
    created = 0
    skipped = 0
    errors: list[str] = []

    for index, row in enumerate(rows, start=1):
        values = _clean(row)
        if not _has_names(values):
            errors.append(f"{index}행: 직원 코드, 이름, 성은 필수입니다.")
            continue
        if values["personnel_code"] in existing:
            skipped += 1
            continue
        db.add(Personnel(**values))
        existing.add(values["personnel_code"])
        created += 1

    commit_or_raise(db, conflict_message="일괄 등록 중 중복된 식별번호가 있어 전체 등록이 취소되었습니다.")
    logger.info("[personnel] import created=%s skipped=%s failed=%s", created, skipped, len(errors))
    return {
        "message": f"{len(rows)}건을 처리했습니다.",
        "created": created,
        "updated": 0,
        "skipped": skipped,
        "failed": len(errors),
        "errors": errors,
    }
