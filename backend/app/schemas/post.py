from pydantic import Field, field_validator, model_validator
from typing import Optional, List
from datetime import date

from app.models.post import ActiveStatus
from app.schemas.base import CamelModel


class LocationSchema(CamelModel):
    """근무지 (요청/응답 공용)"""
    province_code: Optional[int] = None
    province_name: Optional[str] = None
    specific_address: Optional[str] = None


class ProfessionSnapshot(CamelModel):
    id: str
    name: str
    total_posts: int = 0


class LevelSnapshot(CamelModel):
    id: str
    name: str


class BusinessSnapshot(CamelModel):
    id: str
    name: str
    profile_image_id: Optional[str] = None


class BenefitSnapshot(CamelModel):
    id: str
    name: str


# === 조회 요청 ===
class PostsGetRequest(CamelModel):
    """공고 목록 조회 필터 + 페이지 정보 (모든 필터는 선택, AND 조건으로 결합)"""
    search: Optional[str] = None
    profession_id: Optional[str] = None
    min_salary: Optional[int] = None
    max_salary: Optional[int] = None
    province_code: Optional[int] = None
    working_format: Optional[str] = None
    recruiter_id: Optional[str] = None
    business_id: Optional[str] = None
    active_status: Optional[ActiveStatus] = None
    active_statuses: Optional[List[ActiveStatus]] = None
    from_date: Optional[date] = None
    to_date: Optional[date] = None
    is_expired: Optional[bool] = None
    page: int = Field(1, ge=1)
    page_size: int = Field(10, ge=1, le=100)

    @model_validator(mode="after")
    def check_ranges(self):
        if self.min_salary is not None and self.max_salary is not None and self.min_salary > self.max_salary:
            raise ValueError("minSalary must not be greater than maxSalary")
        if self.from_date is not None and self.to_date is not None and self.from_date > self.to_date:
            raise ValueError("fromDate must not be after toDate")
        return self


# === 생성/수정 요청 ===
class PostCreateRequest(CamelModel):
    title: str = Field(..., min_length=1)
    profession_id: str
    level_id: str
    benefit_ids: List[str] = Field(default_factory=list)
    min_salary_string: Optional[str] = None
    max_salary_string: Optional[str] = None
    currency: Optional[str] = None
    locations: List[LocationSchema] = Field(default_factory=list)
    working_format: Optional[str] = None
    years_of_experience: Optional[str] = None
    requisition_number: Optional[int] = None
    application_deadline: Optional[date] = None
    description: Optional[str] = None
    other_requirements: Optional[str] = None

    @field_validator("title")
    @classmethod
    def strip_title(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("title must not be blank")
        return value


class PostHeadingInfoUpdateRequest(CamelModel):
    title: str = Field(..., min_length=1)
    min_salary_string: Optional[str] = None
    max_salary_string: Optional[str] = None
    currency: Optional[str] = None
    locations: List[LocationSchema] = Field(default_factory=list)
    years_of_experience: Optional[str] = None
    requisition_number: Optional[int] = None
    application_deadline: Optional[date] = None

    @field_validator("title")
    @classmethod
    def strip_title(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("title must not be blank")
        return value


class PostDetailedInfoUpdateRequest(CamelModel):
    description: Optional[str] = None
    other_requirements: Optional[str] = None


class PostGeneralInfoUpdateRequest(CamelModel):
    profession_id: str
    level_id: str
    benefit_ids: List[str] = Field(default_factory=list)
    working_format: Optional[str] = None


class PostActiveStatusUpdateRequest(CamelModel):
    active_status: ActiveStatus


class PostCounterUpdateRequest(CamelModel):
    """지원자 수/조회수 증감 (부호 있는 값)"""
    number: int


# === 응답 ===
class PostResponse(CamelModel):
    id: str
    title: str
    description: Optional[str] = None
    other_requirements: Optional[str] = None
    profession: Optional[ProfessionSnapshot] = None
    level: Optional[LevelSnapshot] = None
    business: Optional[BusinessSnapshot] = None
    benefits: List[BenefitSnapshot] = Field(default_factory=list)
    locations: List[LocationSchema] = Field(default_factory=list)
    min_salary: Optional[int] = None
    min_salary_string: Optional[str] = None
    max_salary: Optional[int] = None
    max_salary_string: Optional[str] = None
    currency: Optional[str] = None
    working_format: Optional[str] = None
    years_of_experience: Optional[str] = None
    requisition_number: Optional[int] = None
    application_deadline: Optional[date] = None
    recruiter_id: Optional[str] = None
    jd_id: Optional[str] = None
    total_views: int = 0
    total_applications: int = 0
    active_status: ActiveStatus
    created_at: Optional[date] = None


class PaginationResponse(CamelModel):
    total_elements: int
    total_pages: int
    current_page: int
    page_size: int
    data: List[PostResponse] = Field(default_factory=list)
