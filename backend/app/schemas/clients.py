from typing import Optional, List
from datetime import date

from app.schemas.base import CamelModel


# === 연동 서비스 응답 DTO ===
class BusinessResponse(CamelModel):
    id: str
    name: str
    profile_image_id: Optional[str] = None


class RawRecruiterResponse(CamelModel):
    id: str
    email: Optional[str] = None
    name: Optional[str] = None
    role: Optional[str] = None
    phone: Optional[str] = None
    profile_image_id: Optional[str] = None
    nation: Optional[str] = None
    active_business: bool = False
    business_id: Optional[str] = None
    locked: Optional[bool] = None


class ProfessionResponse(CamelModel):
    id: str
    name: str
    category_id: Optional[str] = None
    total_posts: int = 0


class CategoryResponse(CamelModel):
    id: str
    name: str


class LevelResponse(CamelModel):
    id: str
    name: str


class BenefitResponse(CamelModel):
    id: str
    name: str


# === 검색 인덱스 문서 ===
class IndexNamedRef(CamelModel):
    id: Optional[str] = None
    name: Optional[str] = None


class IndexLocation(CamelModel):
    province_name: Optional[str] = None
    specific_address: Optional[str] = None


class IndexBusiness(CamelModel):
    id: Optional[str] = None
    name: Optional[str] = None
    profile_image_id: Optional[str] = None


class PostIndexDocument(CamelModel):
    """검색 인덱스에 기록하는 비정규화 공고 문서 (응답도 같은 형태로 되돌아옴)"""
    id: str
    title: str
    profession: Optional[IndexNamedRef] = None
    category: Optional[IndexNamedRef] = None
    min_salary: Optional[int] = None
    min_salary_string: Optional[str] = None
    max_salary: Optional[int] = None
    max_salary_string: Optional[str] = None
    currency: Optional[str] = None
    level: Optional[IndexNamedRef] = None
    locations: List[IndexLocation] = []
    business: Optional[IndexBusiness] = None
    working_format: Optional[str] = None
    application_deadline: Optional[date] = None
    created_at: Optional[date] = None
