"""Member Service 도메인 서비스 레이어입니다. 출입 대상자(commuting member) 목록을 관리합니다."""

import logging
from typing import List

from sqlalchemy.orm import Session

from hr_admin.models.personnel import CommutingMember
from hr_admin.schemas.member import CommutingMemberCreate
from hr_admin.utils.helpers import commit_or_raise

logger = logging.getLogger(__name__)


def list_members(db: Session) -> List[CommutingMember]:
    return db.query(CommutingMember).order_by(CommutingMember.full_name).all()


def create_member(db: Session, data: CommutingMemberCreate) -> CommutingMember:
    member = CommutingMember(**data.model_dump())
    db.add(member)
    commit_or_raise(db, conflict_message="이미 등록된 직원 코드입니다.")
    db.refresh(member)
    logger.info("[member] commuting member added personnel=%s", member.personnel_code)
    return member
