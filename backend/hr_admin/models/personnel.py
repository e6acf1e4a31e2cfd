"""Personnel 도메인(인사 기본정보, 출입 대상자, 부양가족)의 SQLAlchemy 모델 정의입니다."""

from sqlalchemy import Column, Integer, String, ForeignKey, Index
from sqlalchemy.orm import relationship
from hr_admin.database import Base


class Personnel(Base):
    __tablename__ = "personnel"

    id = Column(Integer, primary_key=True, autoincrement=True)
    personnel_code = Column(String(255), unique=True, nullable=False)
    first_name = Column(String(255), nullable=False)
    last_name = Column(String(255), nullable=False)
    father_name = Column(String(255))
    national_id = Column(String(255), unique=True)
    id_number = Column(String(255))
    # 일자 필드는 양력 변환 전 원문(페르시아력)을 그대로 보관한다.
    birth_year = Column(String(255))
    birth_date = Column(String(255))
    birth_place = Column(String(255))
    issue_date = Column(String(255))
    issue_place = Column(String(255))
    marital_status = Column(String(255))
    military_status = Column(String(255))
    job_title = Column(String(255))
    position = Column(String(255))
    employment_type = Column(String(255))
    department = Column(String(255))
    service_location = Column(String(255))
    hire_date = Column(String(255))
    education_level = Column(String(255))
    field_of_study = Column(String(255))
    job_group = Column(String(255))
    sum_of_decree_factors = Column(String(255))
    status = Column(String(255))

    dependents = relationship("Dependent", back_populates="personnel", cascade="all, delete-orphan")


class CommutingMember(Base):
    __tablename__ = "commuting_members"

    id = Column(Integer, primary_key=True, autoincrement=True)
    personnel_code = Column(String(255), unique=True, nullable=False)
    full_name = Column(String(255), nullable=False)
    department = Column(String(255))
    position = Column(String(255))


class Dependent(Base):
    __tablename__ = "dependents"

    id = Column(Integer, primary_key=True, autoincrement=True)
    personnel_code = Column(
        String(255),
        ForeignKey("personnel.personnel_code", ondelete="CASCADE"),
        nullable=False,
    )
    first_name = Column(String(255), nullable=False)
    last_name = Column(String(255), nullable=False)
    father_name = Column(String(255))
    relation_type = Column(String(255), nullable=False)
    birth_date = Column(String(255), nullable=False)
    gender = Column(String(255), nullable=False)
    birth_month = Column(String(255))
    birth_day = Column(String(255))
    id_number = Column(String(255))
    national_id = Column(String(255), unique=True, nullable=False)
    guardian_national_id = Column(String(255))
    issue_place = Column(String(255))
    insurance_type = Column(String(255))

    personnel = relationship("Personnel", back_populates="dependents")

    __table_args__ = (
        Index("idx_dependents_personnel", "personnel_code"),
    )
