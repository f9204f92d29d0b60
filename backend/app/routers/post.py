from datetime import date
from typing import List, Optional
from fastapi import APIRouter, Depends, File, Form, Query, Response, UploadFile, status
from pydantic import ValidationError
from app.models.post import ActiveStatus
from app.schemas.post import (
    PaginationResponse,
    PostActiveStatusUpdateRequest,
    PostCounterUpdateRequest,
    PostCreateRequest,
    PostDetailedInfoUpdateRequest,
    PostGeneralInfoUpdateRequest,
    PostHeadingInfoUpdateRequest,
    PostResponse,
    PostsGetRequest,
)
from app.services.post_service import PostService
from app.utils.dependencies import get_current_user_id, get_post_service
from app.utils.exceptions import BadRequestException
from app.utils.logger import app_logger

router = APIRouter(prefix="/api/posts", tags=["posts"])


def _validation_failure(e: ValidationError) -> BadRequestException:
    return BadRequestException(
        "요청 값이 올바르지 않습니다.",
        error_code="VALIDATION_FAILED",
        extra_data={"errors": e.errors(include_url=False, include_context=False, include_input=False)},
    )


def get_posts_request(
    search: Optional[str] = Query(None, description="제목 검색어 (부분 일치, 대소문자 무시)"),
    profession_id: Optional[str] = Query(None, alias="professionId", description="직무 ID"),
    min_salary: Optional[int] = Query(None, alias="minSalary", description="최소 급여 (이상)"),
    max_salary: Optional[int] = Query(None, alias="maxSalary", description="최대 급여 (이하)"),
    province_code: Optional[int] = Query(None, alias="provinceCode", description="근무지 지역 코드"),
    working_format: Optional[str] = Query(None, alias="workingFormat", description="근무 형태"),
    recruiter_id: Optional[str] = Query(None, alias="recruiterId", description="채용 담당자 ID"),
    business_id: Optional[str] = Query(None, alias="businessId", description="기업 ID"),
    active_status: Optional[ActiveStatus] = Query(None, alias="activeStatus", description="게시 상태"),
    active_statuses: Optional[List[ActiveStatus]] = Query(None, alias="activeStatuses", description="게시 상태 목록"),
    from_date: Optional[date] = Query(None, alias="fromDate", description="생성일 시작 (포함)"),
    to_date: Optional[date] = Query(None, alias="toDate", description="생성일 끝 (포함)"),
    is_expired: Optional[bool] = Query(None, alias="isExpired", description="마감 여부"),
    page: int = Query(1, description="페이지 번호 (1부터 시작)"),
    page_size: int = Query(10, alias="pageSize", description="페이지 크기 (최대 100)"),
) -> PostsGetRequest:
    try:
        return PostsGetRequest(
            search=search,
            profession_id=profession_id,
            min_salary=min_salary,
            max_salary=max_salary,
            province_code=province_code,
            working_format=working_format,
            recruiter_id=recruiter_id,
            business_id=business_id,
            active_status=active_status,
            active_statuses=active_statuses,
            from_date=from_date,
            to_date=to_date,
            is_expired=is_expired,
            page=page,
            page_size=page_size,
        )
    except ValidationError as e:
        raise _validation_failure(e)


@router.get(
    "",
    response_model=PaginationResponse,
    summary="공고 목록 조회 (필터/페이징 지원)",
    description="""
    선택 필터를 AND 조건으로 조합하여 공고를 조회합니다.\n
    - 값이 없는 필터는 적용되지 않습니다.\n
    - `minSalary`/`maxSalary`는 양 끝을 포함합니다.\n
    - `isExpired`는 오늘 날짜 기준으로 계산하며 `activeStatus` 필터와 함께 적용됩니다.
    """
)
async def get_posts(
    request: PostsGetRequest = Depends(get_posts_request),
    service: PostService = Depends(get_post_service),
):
    return await service.get_posts(request)


@router.get(
    "/recruiters/{recruiter_id}/ids",
    response_model=List[str],
    summary="채용 담당자별 공고 ID 목록"
)
async def get_post_ids_by_recruiter_id(recruiter_id: str, service: PostService = Depends(get_post_service)):
    return await service.get_post_ids_by_recruiter_id(recruiter_id)


@router.get("/{post_id}", response_model=PostResponse, summary="공고 상세 조회")
async def get_post_by_id(post_id: str, service: PostService = Depends(get_post_service)):
    return await service.get_post_by_id(post_id)


@router.post(
    "",
    response_model=PostResponse,
    status_code=status.HTTP_201_CREATED,
    summary="공고 생성",
    description="""
    multipart 요청: `post` (공고 JSON), `jdFile` (JD 파일).\n
    작성자는 `X-User-Id` 헤더의 채용 담당자이며, 공고는 Pending 상태로 생성됩니다.
    """
)
async def create_post(
    post: str = Form(..., description="PostCreateRequest JSON"),
    jd_file: UploadFile = File(..., alias="jdFile", description="JD 파일"),
    user_id: str = Depends(get_current_user_id),
    service: PostService = Depends(get_post_service),
):
    try:
        request = PostCreateRequest.model_validate_json(post)
    except ValidationError as e:
        raise _validation_failure(e)

    jd_content = await jd_file.read()
    if not jd_content:
        raise BadRequestException("JD 파일이 비어 있습니다.", error_code="VALIDATION_FAILED")

    app_logger.info(f"공고 생성 요청: user_id={user_id}, title={request.title}, jd={jd_file.filename}")
    return await service.create_post(user_id, request, jd_content)


@router.put("/{post_id}/headingInfo", response_model=PostResponse, summary="공고 기본 정보 수정")
async def update_post_heading_info(
    post_id: str,
    request: PostHeadingInfoUpdateRequest,
    service: PostService = Depends(get_post_service),
):
    return await service.update_post_heading_info(post_id, request)


@router.put("/{post_id}/detailedInfo", response_model=PostResponse, summary="공고 상세 정보 수정")
async def update_post_detailed_info(
    post_id: str,
    request: PostDetailedInfoUpdateRequest,
    service: PostService = Depends(get_post_service),
):
    return await service.update_post_detailed_info(post_id, request)


@router.put("/{post_id}/generalInfo", response_model=PostResponse, summary="공고 일반 정보 수정")
async def update_post_general_info(
    post_id: str,
    request: PostGeneralInfoUpdateRequest,
    service: PostService = Depends(get_post_service),
):
    return await service.update_post_general_info(post_id, request)


@router.put("/{post_id}/activeStatus", response_model=PostResponse, summary="공고 게시 상태 변경")
async def update_post_active_status(
    post_id: str,
    request: PostActiveStatusUpdateRequest,
    service: PostService = Depends(get_post_service),
):
    return await service.update_post_active_status(post_id, request)


@router.get("/{post_id}/jd", summary="공고 JD 파일 조회")
async def get_post_jd(post_id: str, service: PostService = Depends(get_post_service)):
    content = await service.get_post_jd(post_id)
    return Response(content=content, media_type="application/pdf")


@router.put("/{post_id}/totalApplications", response_model=PostResponse, summary="지원자 수 증감")
async def update_post_total_applications(
    post_id: str,
    request: PostCounterUpdateRequest,
    service: PostService = Depends(get_post_service),
):
    return await service.update_post_total_applications(post_id, request.number)


@router.put("/{post_id}/totalViews", response_model=PostResponse, summary="조회수 증감")
async def update_post_total_views(
    post_id: str,
    request: PostCounterUpdateRequest,
    service: PostService = Depends(get_post_service),
):
    return await service.update_post_total_views(post_id, request.number)
