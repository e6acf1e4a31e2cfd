"""출입 기록 수정 시 감사 이력 적재 테스트입니다."""

from datetime import date

import pytest

from hr_admin.errors import ConflictError, NotFoundError, ValidationError
from hr_admin.models.commute_log import CommuteEditLog, CommuteLog
from hr_admin.services import commute_service, edit_log_service
from hr_admin.utils.clock import to_utc
from tests.conftest import tehran


def test_edit_appends_one_row_per_changed_field(db, clock):
    log = commute_service.log_entry(db, "1001", "Guard A", clock=clock, timestamp=tehran(2024, 3, 1, 8, 0))

    edited = commute_service.edit_record(
        db, log.id, tehran(2024, 3, 1, 7, 30), tehran(2024, 3, 1, 16, 0), "HR Editor", clock=clock
    )
    assert to_utc(edited.entry_time) == to_utc(tehran(2024, 3, 1, 7, 30))
    assert to_utc(edited.exit_time) == to_utc(tehran(2024, 3, 1, 16, 0))

    trail = edit_log_service.list_for_log(db, log.id)
    assert sorted(row.field_name for row in trail) == ["entry_time", "exit_time"]
    entry_row = next(row for row in trail if row.field_name == "entry_time")
    assert entry_row.old_value == "2024-03-01T04:30:00+00:00"
    assert entry_row.new_value == "2024-03-01T04:00:00+00:00"
    assert entry_row.editor_name == "HR Editor"
    assert entry_row.personnel_code == "1001"
    exit_row = next(row for row in trail if row.field_name == "exit_time")
    assert exit_row.old_value is None


def test_edit_with_unchanged_values_records_nothing(db, clock):
    log = commute_service.log_entry(db, "1001", "Guard A", clock=clock, timestamp=tehran(2024, 3, 1, 8, 0))
    commute_service.edit_record(db, log.id, tehran(2024, 3, 1, 8, 0), None, "HR Editor", clock=clock)
    assert db.query(CommuteEditLog).count() == 0


def test_edit_moves_record_to_new_civil_day(db, clock):
    log = commute_service.log_entry(db, "1001", "Guard A", clock=clock, timestamp=tehran(2024, 3, 1, 8, 0))
    edited = commute_service.edit_record(db, log.id, tehran(2024, 3, 2, 8, 0), None, "HR Editor", clock=clock)
    assert edited.work_date == date(2024, 3, 2)


def test_edit_missing_record_is_not_found(db, clock):
    with pytest.raises(NotFoundError):
        commute_service.edit_record(db, 404, tehran(2024, 3, 1, 8, 0), None, "HR Editor", clock=clock)


def test_edit_rejects_exit_before_entry(db, clock):
    log = commute_service.log_entry(db, "1001", "Guard A", clock=clock)
    with pytest.raises(ValidationError):
        commute_service.edit_record(
            db, log.id, tehran(2024, 3, 1, 9, 0), tehran(2024, 3, 1, 8, 0), "HR Editor", clock=clock
        )
    assert db.query(CommuteEditLog).count() == 0


def test_reopening_record_that_would_duplicate_open_entry_conflicts(db, clock):
    closed = commute_service.log_entry(db, "1001", "Guard A", clock=clock, timestamp=tehran(2024, 3, 1, 7, 0))
    commute_service.log_exit(db, "1001", clock=clock, timestamp=tehran(2024, 3, 1, 8, 0))
    commute_service.log_entry(db, "1001", "Guard A", clock=clock, timestamp=tehran(2024, 3, 1, 9, 0))

    with pytest.raises(ConflictError):
        commute_service.edit_record(db, closed.id, tehran(2024, 3, 1, 7, 0), None, "HR Editor", clock=clock)
    # 실패한 수정은 이력도 남기지 않는다.
    assert db.query(CommuteEditLog).count() == 0
    assert db.query(CommuteLog).filter(CommuteLog.id == closed.id).one().exit_time is not None


def test_deleting_record_cascades_to_its_trail(db, clock):
    log = commute_service.log_entry(db, "1001", "Guard A", clock=clock, timestamp=tehran(2024, 3, 1, 8, 0))
    commute_service.edit_record(db, log.id, tehran(2024, 3, 1, 7, 0), None, "HR Editor", clock=clock)
    assert db.query(CommuteEditLog).count() == 1

    commute_service.delete_record(db, log.id)
    assert db.query(CommuteEditLog).count() == 0


def test_query_edit_logs_report(db, clock, seed_members):
    first = commute_service.log_entry(db, "1001", "Guard A", clock=clock, timestamp=tehran(2024, 3, 1, 8, 0))
    second = commute_service.log_entry(db, "1002", "Guard A", clock=clock, timestamp=tehran(2024, 3, 5, 8, 0))
    commute_service.edit_record(db, first.id, tehran(2024, 3, 1, 7, 0), None, "HR Editor", clock=clock)
    commute_service.edit_record(db, second.id, tehran(2024, 3, 5, 7, 0), None, "HR Editor", clock=clock)

    rows = edit_log_service.query_edit_logs(db, clock=clock, start_date=date(2024, 3, 1), end_date=date(2024, 3, 2))
    assert [row["personnel_code"] for row in rows] == ["1001"]
    assert rows[0]["full_name"] == "Ali Rezaei"
    assert rows[0]["record_date"] is not None

    rows = edit_log_service.query_edit_logs(db, clock=clock, department="Finance")
    assert [row["commute_log_id"] for row in rows] == [second.id]
