"""Permissions 관련 공용 역할 상수입니다."""

ADMIN = "admin"
HR = "hr"
GUARD = "guard"

# 출입 기록 수정/삭제와 보고서 조회는 경비원에게 허용하지 않는다.
LEDGER_ADMIN_ROLES = (ADMIN, HR)
ALLOWED_ROLES = {ADMIN, HR, GUARD}
