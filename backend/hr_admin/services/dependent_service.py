"""Dependent Service 도메인 서비스 레이어입니다. 직원별 부양가족 정보와 엑셀 일괄 반영을 담당합니다."""

import logging
from typing import List, Optional

from sqlalchemy.orm import Session

from hr_admin.errors import ConflictError, NotFoundError, ValidationError
from hr_admin.models.personnel import Dependent, Personnel
from hr_admin.schemas.personnel import DependentCreate, DependentImportRow, DependentUpdate
from hr_admin.utils.helpers import commit_or_raise

logger = logging.getLogger(__name__)

DUPLICATE_NATIONAL_ID = "이미 등록된 부양가족 식별번호입니다."
_IMPORT_REQUIRED = ("personnel_code", "first_name", "last_name", "national_id", "relation_type", "birth_date", "gender")


def list_dependents(db: Session, personnel_code: Optional[str] = None) -> List[Dependent]:
    query = db.query(Dependent)
    if personnel_code:
        return query.filter(Dependent.personnel_code == personnel_code).order_by(
            Dependent.last_name, Dependent.first_name
        ).all()
    return query.order_by(Dependent.personnel_code, Dependent.last_name, Dependent.first_name).all()


def get_dependent(db: Session, dependent_id: int) -> Dependent:
    dependent = db.query(Dependent).filter(Dependent.id == dependent_id).first()
    if not dependent:
        raise NotFoundError("부양가족 정보를 찾을 수 없습니다.")
    return dependent


def _require_personnel(db: Session, personnel_code: str) -> None:
    if not db.query(Personnel.id).filter(Personnel.personnel_code == personnel_code).first():
        raise ValidationError("등록되지 않은 직원 코드입니다.", personnel_code)


def _ensure_unique_national_id(db: Session, national_id: str, exclude_id: Optional[int] = None) -> None:
    query = db.query(Dependent.id).filter(Dependent.national_id == national_id)
    if exclude_id is not None:
        query = query.filter(Dependent.id != exclude_id)
    if query.first():
        raise ConflictError(DUPLICATE_NATIONAL_ID)


def create_dependent(db: Session, data: DependentCreate) -> Dependent:
    _require_personnel(db, data.personnel_code)
    _ensure_unique_national_id(db, data.national_id)
    dependent = Dependent(**data.model_dump())
    db.add(dependent)
    commit_or_raise(db, conflict_message=DUPLICATE_NATIONAL_ID)
    db.refresh(dependent)
    logger.info("[dependent] created personnel=%s id=%s", dependent.personnel_code, dependent.id)
    return dependent


def update_dependent(db: Session, dependent_id: int, data: DependentUpdate) -> Dependent:
    dependent = get_dependent(db, dependent_id)
    _require_personnel(db, data.personnel_code)
    _ensure_unique_national_id(db, data.national_id, exclude_id=dependent.id)
    for key, value in data.model_dump().items():
        setattr(dependent, key, value)
    commit_or_raise(db, conflict_message=DUPLICATE_NATIONAL_ID)
    db.refresh(dependent)
    logger.info("[dependent] updated id=%s", dependent.id)
    return dependent


def delete_dependent(db: Session, dependent_id: int) -> None:
    dependent = get_dependent(db, dependent_id)
    db.delete(dependent)
    commit_or_raise(db)
    logger.info("[dependent] deleted id=%s", dependent_id)


def import_dependents(db: Session, rows: List[DependentImportRow]) -> dict:
    """Upsert dependents keyed by national id in one transaction.

    Unknown personnel codes reject the whole batch before anything is written.
    """
    valid = []
    errors: list[str] = []
    for index, row in enumerate(rows, start=1):
        values = {key: (value or "").strip() or None for key, value in row.model_dump().items()}
        missing = [key for key in _IMPORT_REQUIRED if not values[key]]
        if missing:
            errors.append(f"{index}행: 필수 항목이 비어 있습니다. ({', '.join(missing)})")
            continue
        valid.append((index, values))

    if not valid:
        raise ValidationError("반영할 수 있는 부양가족 행이 없습니다.", "; ".join(errors) or None)

    codes = {values["personnel_code"] for _, values in valid}
    known = {code for (code,) in db.query(Personnel.personnel_code).filter(Personnel.personnel_code.in_(codes)).all()}
    unknown = sorted(codes - known)
    if unknown:
        raise ValidationError("등록되지 않은 직원 코드가 포함되어 있습니다.", ", ".join(unknown))

    created = 0
    updated = 0
    staged = {}
    for index, values in valid:
        national_id = values["national_id"]
        current = staged.get(national_id) or db.query(Dependent).filter(Dependent.national_id == national_id).first()
        if current is None:
            current = Dependent(**values)
            db.add(current)
            staged[national_id] = current
            created += 1
            continue
        if current.personnel_code != values["personnel_code"]:
            errors.append(f"{index}행: 식별번호 {national_id}는 다른 직원의 부양가족으로 등록되어 있습니다.")
            continue
        for key in ("relation_type", "first_name", "last_name", "birth_date", "gender"):
            setattr(current, key, values[key])
        staged[national_id] = current
        updated += 1

    commit_or_raise(db, conflict_message=DUPLICATE_NATIONAL_ID)
    logger.info("[dependent] import created=%s updated=%s failed=%s", created, updated, len(errors))
    return {
        "message": f"{created + updated}건을 반영했습니다.",
        "created": created,
        "updated": updated,
        "skipped": 0,
        "failed": len(errors),
        "errors": errors,
    }
