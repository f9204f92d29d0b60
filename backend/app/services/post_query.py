"""
공고 목록 조회 필터 빌더

선택적 필터들을 하나의 MongoDB 필터 문서로 조합합니다.
값이 없는(None 또는 공백) 필터는 조건을 추가하지 않으며, 추가된 조건들은 AND로 결합됩니다.
"""

import re
from datetime import date, datetime, time, timedelta
from typing import Any, Dict, Optional

from app.schemas.post import PostsGetRequest
from app.utils.cache import BaseCacheManager


def _is_blank(value: Optional[str]) -> bool:
    return value is None or not value.strip()


def _start_of_day(value: date) -> datetime:
    return datetime.combine(value, time.min)


def build_posts_filter(request: PostsGetRequest, today: Optional[date] = None) -> Dict[str, Any]:
    """
    목록 조회 요청으로부터 MongoDB 필터를 생성합니다.

    Args:
        request: 조회 필터 + 페이지 정보
        today: 마감 여부 계산 기준일 (기본값: 오늘)

    Returns:
        Post 컬렉션용 필터 문서
    """
    today = today or date.today()
    query: Dict[str, Any] = {}

    # 제목 부분 일치 (대소문자 무시)
    if not _is_blank(request.search):
        query["title"] = {"$regex": re.escape(request.search.strip()), "$options": "i"}

    if not _is_blank(request.profession_id):
        query["profession.id"] = request.profession_id

    # 급여 범위 (양 끝 포함)
    if request.min_salary is not None:
        query["min_salary"] = {"$gte": request.min_salary}
    if request.max_salary is not None:
        query["max_salary"] = {"$lte": request.max_salary}

    if request.province_code is not None:
        query["locations"] = {"$elemMatch": {"province_code": request.province_code}}

    if not _is_blank(request.working_format):
        query["working_format"] = request.working_format

    if not _is_blank(request.recruiter_id):
        query["recruiter_id"] = request.recruiter_id

    if not _is_blank(request.business_id):
        query["business.id"] = request.business_id

    # 단일 상태와 상태 목록은 하나의 조건으로 합침
    if request.active_status is not None or request.active_statuses is not None:
        status_criteria: Dict[str, Any] = {}
        if request.active_status is not None:
            status_criteria["$eq"] = request.active_status.value
        if request.active_statuses is not None:
            status_criteria["$in"] = [status.value for status in request.active_statuses]
        query["active_status"] = status_criteria

    # 생성일 범위 (toDate 당일 포함)
    if request.from_date is not None or request.to_date is not None:
        created_criteria: Dict[str, Any] = {}
        if request.from_date is not None:
            created_criteria["$gte"] = _start_of_day(request.from_date)
        if request.to_date is not None:
            created_criteria["$lt"] = _start_of_day(request.to_date + timedelta(days=1))
        query["created_at"] = created_criteria

    # 마감 여부: 마감일 <= 오늘 이면 마감, > 오늘 이면 진행 중
    # 상태 필터와 함께 들어와도 별도 조정 없이 둘 다 적용
    if request.is_expired is not None:
        today_start = _start_of_day(today)
        if request.is_expired:
            query["application_deadline"] = {"$lte": today_start}
        else:
            query["application_deadline"] = {"$gt": today_start}

    return query


def build_listing_cache_key(request: PostsGetRequest, today: Optional[date] = None) -> str:
    """파라미터 조합마다 고유한 목록 캐시 키"""
    params = request.model_dump(mode="json", exclude_none=True)
    if request.is_expired is not None:
        # 마감 여부 결과는 날짜에 따라 달라짐
        params["today"] = (today or date.today()).isoformat()
    return BaseCacheManager.generate_cache_key(**params)
