"""Backup Service 도메인 서비스 레이어입니다. 전체 데이터 스냅샷 생성과 단일 트랜잭션 복원을 담당합니다."""

import logging
from collections import OrderedDict
from datetime import date, datetime
from typing import Any, Dict, Iterable, List, Mapping, Optional

from pydantic import TypeAdapter
from pydantic import ValidationError as PydanticValidationError
from sqlalchemy import Date, DateTime, Table, select, text
from sqlalchemy.engine import Connection
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

import hr_admin.models  # noqa: F401 - 모델 import로 metadata 등록
from hr_admin.config import settings
from hr_admin.database import Base
from hr_admin.errors import StorageError, ValidationError
from hr_admin.utils.clock import Clock, to_utc

logger = logging.getLogger(__name__)

# 스냅샷에 포함되는 테이블. 복원 순서는 이 목록과 FK 관계로부터 계산한다.
BACKUP_TABLES = (
    "personnel",
    "commuting_members",
    "dependents",
    "commute_logs",
    "hourly_commute_logs",
    "commute_edit_logs",
)

_DATETIME = TypeAdapter(datetime)
_DATE = TypeAdapter(date)

Snapshot = Dict[str, List[Dict[str, Any]]]


def dependency_order(table_names: Iterable[str], metadata=Base.metadata) -> List[Table]:
    """Order tables so that every table follows the tables its foreign keys point to.

    Ties keep the declaration order of ``table_names``.
    """
    names = list(table_names)
    pending = [metadata.tables[name] for name in names]
    ordered: List[Table] = []
    placed = set()
    while pending:
        for table in pending:
            parents = {
                fk.column.table.name
                for fk in table.foreign_keys
                if fk.column.table.name in names and fk.column.table.name != table.name
            }
            if parents <= placed:
                ordered.append(table)
                placed.add(table.name)
                pending.remove(table)
                break
        else:
            raise ValueError(f"cyclic foreign keys between backup tables: {[t.name for t in pending]}")
    return ordered


BACKUP_ORDER = dependency_order(BACKUP_TABLES)


def _export_value(column, value):
    if isinstance(value, datetime) and isinstance(column.type, DateTime) and column.type.timezone:
        return to_utc(value)
    return value


def export_snapshot(db: Session) -> Snapshot:
    snapshot: Snapshot = OrderedDict()
    for table in BACKUP_ORDER:
        rows = db.execute(select(table).order_by(table.c.id)).mappings().all()
        snapshot[table.name] = [
            {column.name: _export_value(column, row[column.name]) for column in table.columns}
            for row in rows
        ]
    logger.info(
        "[backup] snapshot exported %s",
        ", ".join(f"{name}={len(rows)}" for name, rows in snapshot.items()),
    )
    return snapshot


def _coerce_value(column, value):
    if value is None:
        return None
    if isinstance(column.type, DateTime):
        if isinstance(value, str):
            value = _DATETIME.validate_python(value)
        return to_utc(value) if column.type.timezone else value
    if isinstance(column.type, Date) and isinstance(value, str):
        return _DATE.validate_python(value)
    return value


def _fill_derived(table: Table, values: Dict[str, Any], clock: Clock) -> None:
    # 이전 시스템의 스냅샷에는 work_date가 없다. 비워 두면 열린 기록 유니크 인덱스가 동작하지 않는다.
    if table.name == "commute_logs" and values.get("work_date") is None and values.get("entry_time") is not None:
        values["work_date"] = clock.civil_date(values["entry_time"])


def _prepare_rows(table: Table, rows: List[Any], clock: Clock) -> List[Dict[str, Any]]:
    prepared = []
    for index, row in enumerate(rows):
        if not isinstance(row, Mapping):
            raise ValidationError(f'백업 데이터가 올바르지 않습니다. "{table.name}"의 {index}번째 항목이 객체가 아닙니다.')
        values = {}
        for column in table.columns:
            try:
                values[column.name] = _coerce_value(column, row.get(column.name))
            except PydanticValidationError as exc:
                raise ValidationError(
                    f'백업 데이터가 올바르지 않습니다. "{table.name}.{column.name}" 값을 해석할 수 없습니다.',
                    str(exc),
                ) from exc
        _fill_derived(table, values, clock)
        prepared.append(values)
    return prepared


def validate_snapshot(snapshot: Any, clock: Optional[Clock] = None) -> Dict[str, List[Dict[str, Any]]]:
    """Check the snapshot shape and coerce row values. Never touches the store."""
    clock = clock or Clock(settings.TIMEZONE)
    if not isinstance(snapshot, Mapping):
        raise ValidationError("백업 데이터는 테이블 이름을 키로 하는 객체여야 합니다.")

    missing = [table.name for table in BACKUP_ORDER if table.name not in snapshot]
    if missing:
        raise ValidationError("백업 데이터에 필요한 테이블이 없습니다.", ", ".join(missing))

    unknown = sorted(set(snapshot) - set(BACKUP_TABLES))
    if unknown:
        logger.warning("[backup] ignoring unknown sections in snapshot: %s", ", ".join(unknown))

    prepared = OrderedDict()
    for table in BACKUP_ORDER:
        rows = snapshot[table.name]
        if not isinstance(rows, list):
            raise ValidationError(f'백업 데이터가 올바르지 않습니다. "{table.name}" 항목은 배열이어야 합니다.')
        prepared[table.name] = _prepare_rows(table, rows, clock)
    return prepared


def _truncate_all(conn: Connection) -> None:
    if conn.dialect.name == "postgresql":
        preparer = conn.dialect.identifier_preparer
        names = ", ".join(preparer.format_table(table) for table in BACKUP_ORDER)
        conn.execute(text(f"TRUNCATE TABLE {names} RESTART IDENTITY CASCADE"))
        return
    for table in reversed(BACKUP_ORDER):
        conn.execute(table.delete())


def _realign_identity(conn: Connection, table: Table) -> None:
    # 원래 id로 넣은 뒤 시퀀스를 max(id)에 맞춰야 이후 신규 행과 충돌하지 않는다.
    if conn.dialect.name != "postgresql":
        return
    table_sql = conn.dialect.identifier_preparer.format_table(table)
    conn.execute(
        text(
            f"SELECT setval(pg_get_serial_sequence(:table_name, 'id'), "
            f"COALESCE(MAX(id), 1), MAX(id) IS NOT NULL) FROM {table_sql}"
        ),
        {"table_name": table.name},
    )


def restore_snapshot(db: Session, snapshot: Any, *, clock: Optional[Clock] = None) -> Dict[str, int]:
    prepared = validate_snapshot(snapshot, clock)
    batch_size = max(1, settings.BACKUP_BATCH_SIZE)
    counts: Dict[str, int] = {}
    try:
        conn = db.connection()
        _truncate_all(conn)
        for table in BACKUP_ORDER:
            rows = prepared[table.name]
            counts[table.name] = len(rows)
            if not rows:
                continue
            for offset in range(0, len(rows), batch_size):
                conn.execute(table.insert(), rows[offset:offset + batch_size])
            _realign_identity(conn, table)
        db.commit()
    except SQLAlchemyError as exc:
        db.rollback()
        logger.error("[backup] restore rolled back: %s", exc)
        raise StorageError("백업 복원에 실패했습니다. 기존 데이터는 변경되지 않았습니다.", str(exc)) from exc
    except Exception:
        db.rollback()
        raise
    logger.info("[backup] restore committed %s", counts)
    return counts


def wipe_all(db: Session) -> None:
    try:
        _truncate_all(db.connection())
        db.commit()
    except SQLAlchemyError as exc:
        db.rollback()
        logger.error("[backup] wipe rolled back: %s", exc)
        raise StorageError("전체 데이터 삭제에 실패했습니다.", str(exc)) from exc
    logger.warning("[backup] all backup tables wiped")
