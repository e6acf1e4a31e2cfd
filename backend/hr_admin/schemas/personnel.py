"""Personnel/Dependent 요청/응답 계약을 위한 Pydantic 스키마입니다."""

from typing import List, Optional

from pydantic import BaseModel, Field


class PersonnelBase(BaseModel):
    personnel_code: str = Field(min_length=1)
    first_name: str = Field(min_length=1)
    last_name: str = Field(min_length=1)
    father_name: Optional[str] = None
    national_id: Optional[str] = None
    id_number: Optional[str] = None
    birth_year: Optional[str] = None
    birth_date: Optional[str] = None
    birth_place: Optional[str] = None
    issue_date: Optional[str] = None
    issue_place: Optional[str] = None
    marital_status: Optional[str] = None
    military_status: Optional[str] = None
    job_title: Optional[str] = None
    position: Optional[str] = None
    employment_type: Optional[str] = None
    department: Optional[str] = None
    service_location: Optional[str] = None
    hire_date: Optional[str] = None
    education_level: Optional[str] = None
    field_of_study: Optional[str] = None
    job_group: Optional[str] = None
    sum_of_decree_factors: Optional[str] = None
    status: Optional[str] = None


class PersonnelCreate(PersonnelBase):
    pass


class PersonnelUpdate(PersonnelBase):
    pass


class PersonnelOut(PersonnelBase):
    id: int

    model_config = {"from_attributes": True}


class PersonnelPageOut(BaseModel):
    personnel: List[PersonnelOut]
    total_count: int


class PersonnelResult(BaseModel):
    message: str
    personnel: PersonnelOut


class PersonnelImportRow(BaseModel):
    # 엑셀 행은 필수값이 빠져 있을 수 있어 서비스에서 행 단위로 검사한다.
    personnel_code: Optional[str] = None
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    father_name: Optional[str] = None
    national_id: Optional[str] = None
    id_number: Optional[str] = None
    birth_year: Optional[str] = None
    birth_date: Optional[str] = None
    birth_place: Optional[str] = None
    issue_date: Optional[str] = None
    issue_place: Optional[str] = None
    marital_status: Optional[str] = None
    military_status: Optional[str] = None
    job_title: Optional[str] = None
    position: Optional[str] = None
    employment_type: Optional[str] = None
    department: Optional[str] = None
    service_location: Optional[str] = None
    hire_date: Optional[str] = None
    education_level: Optional[str] = None
    field_of_study: Optional[str] = None
    job_group: Optional[str] = None
    sum_of_decree_factors: Optional[str] = None
    status: Optional[str] = None


class PersonnelImportRequest(BaseModel):
    rows: List[PersonnelImportRow]


class DependentBase(BaseModel):
    personnel_code: str = Field(min_length=1)
    first_name: str = Field(min_length=1)
    last_name: str = Field(min_length=1)
    father_name: Optional[str] = None
    relation_type: str = Field(min_length=1)
    birth_date: str = Field(min_length=1)
    gender: str = Field(min_length=1)
    birth_month: Optional[str] = None
    birth_day: Optional[str] = None
    id_number: Optional[str] = None
    national_id: str = Field(min_length=1)
    guardian_national_id: Optional[str] = None
    issue_place: Optional[str] = None
    insurance_type: Optional[str] = None


class DependentCreate(DependentBase):
    pass


class DependentUpdate(DependentBase):
    pass


class DependentOut(DependentBase):
    id: int

    model_config = {"from_attributes": True}


class DependentListOut(BaseModel):
    dependents: List[DependentOut]


class DependentImportRow(BaseModel):
    personnel_code: Optional[str] = None
    relation_type: Optional[str] = None
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    national_id: Optional[str] = None
    birth_date: Optional[str] = None
    gender: Optional[str] = None


class DependentImportRequest(BaseModel):
    rows: List[DependentImportRow]


class ImportResult(BaseModel):
    message: str
    created: int
    updated: int
    skipped: int
    failed: int
    errors: List[str]
