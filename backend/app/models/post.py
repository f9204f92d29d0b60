from enum import Enum
from typing import Optional, List
from datetime import datetime
from beanie import Document
from pydantic import BaseModel, Field


class ActiveStatus(str, Enum):
    """공고 게시 상태"""
    PENDING = "Pending"
    OPENING = "Opening"
    STOPPED = "Stopped"
    CLOSED = "Closed"
    BLOCKED = "Blocked"


# 아래 스냅샷들은 작성 시점에 원격 서비스에서 복사해 둔 값 (실시간 조인 아님)
class PostProfession(BaseModel):
    id: str
    name: str
    total_posts: int = 0


class PostLevel(BaseModel):
    id: str
    name: str


class PostBusiness(BaseModel):
    id: str
    name: str
    profile_image_id: Optional[str] = None


class PostBenefit(BaseModel):
    id: str
    name: str


class PostLocation(BaseModel):
    province_code: Optional[int] = None
    province_name: Optional[str] = None
    specific_address: Optional[str] = None


class Post(Document):
    title: str = Field(..., description="공고 제목 (삭제되지 않은 공고 간 유일)")
    description: Optional[str] = Field(None, description="상세 설명")
    other_requirements: Optional[str] = Field(None, description="기타 요구사항")

    profession: Optional[PostProfession] = None
    level: Optional[PostLevel] = None
    business: Optional[PostBusiness] = None
    benefits: List[PostBenefit] = Field(default_factory=list)
    locations: List[PostLocation] = Field(default_factory=list)

    # 급여: 숫자 값 + 원본 표시 문자열
    min_salary: Optional[int] = None
    min_salary_string: Optional[str] = None
    max_salary: Optional[int] = None
    max_salary_string: Optional[str] = None
    currency: Optional[str] = None

    working_format: Optional[str] = None
    years_of_experience: Optional[str] = None
    requisition_number: Optional[int] = None
    application_deadline: Optional[datetime] = Field(None, description="지원 마감일 (자정 기준)")

    recruiter_id: Optional[str] = None
    jd_id: Optional[str] = Field(None, description="JD 파일 ID (blob 경로의 마지막 요소)")

    total_views: int = 0
    total_applications: int = 0
    active_status: ActiveStatus = ActiveStatus.PENDING

    created_at: datetime = Field(default_factory=datetime.now, description="문서 생성 시각")

    class Settings:
        name = "posts"
