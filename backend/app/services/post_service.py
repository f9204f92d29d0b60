"""
Post Service

공고 CRUD, 연동 서비스 스냅샷 조합, 검색 인덱스 기록, JD 파일 저장, 캐시 무효화를 담당합니다.
"""

import base64
import math
import uuid
from datetime import date, datetime, time
from typing import Callable, List, Optional

from app.models.post import (
    ActiveStatus,
    Post,
    PostBenefit,
    PostBusiness,
    PostLevel,
    PostLocation,
    PostProfession,
)
from app.schemas.clients import (
    CategoryResponse,
    IndexBusiness,
    IndexLocation,
    IndexNamedRef,
    PostIndexDocument,
)
from app.schemas.post import (
    LocationSchema,
    PaginationResponse,
    PostActiveStatusUpdateRequest,
    PostCreateRequest,
    PostDetailedInfoUpdateRequest,
    PostGeneralInfoUpdateRequest,
    PostHeadingInfoUpdateRequest,
    PostResponse,
    PostsGetRequest,
)
from app.services.blob_storage import BlobStorage, build_jd_path
from app.services.clients import BusinessClient, SearchIndexClient, TaxonomyClient, UserClient
from app.services.event_publisher import POST_CREATED, POST_STATUS_CHANGED, PostEventPublisher
from app.services.post_query import build_listing_cache_key, build_posts_filter
from app.services.post_repository import PostRepository
from app.services.salary import parse_salary
from app.utils.cache import POST_CACHE, POST_JD_CACHE, POSTS_CACHE, BaseCacheManager
from app.utils.exceptions import BadRequestException, ConflictException, NotFoundException
from app.utils.logger import post_logger

TITLE_IN_USE_MESSAGE = "이미 사용 중인 공고 제목입니다."


def _to_datetime(value: Optional[date]) -> Optional[datetime]:
    return datetime.combine(value, time.min) if value is not None else None


def _to_locations(locations: List[LocationSchema]) -> List[PostLocation]:
    return [PostLocation(**location.model_dump()) for location in locations]


class PostService:
    """
    공고 서비스

    모든 연동 호출은 동기적으로 순서대로 실행되며, 실패 시 보상 처리 없이 예외를 그대로 전파합니다.
    """

    def __init__(
        self,
        repository: PostRepository,
        cache: BaseCacheManager,
        business_client: BusinessClient,
        user_client: UserClient,
        taxonomy_client: TaxonomyClient,
        search_index_client: SearchIndexClient,
        blob_storage: BlobStorage,
        event_publisher: PostEventPublisher,
        clock: Callable[[], datetime] = datetime.now,
    ):
        self.repository = repository
        self.cache = cache
        self.business_client = business_client
        self.user_client = user_client
        self.taxonomy_client = taxonomy_client
        self.search_index_client = search_index_client
        self.blob_storage = blob_storage
        self.event_publisher = event_publisher
        self.clock = clock

    # === 조회 ===
    async def get_posts(self, request: PostsGetRequest) -> PaginationResponse:
        """필터 + 페이지 조회 (결과가 없는 페이지는 캐시하지 않음)"""
        today = self.clock().date()
        cache_key = build_listing_cache_key(request, today)

        cached = await self.cache.get_cached_data(POSTS_CACHE, cache_key)
        if cached is not None:
            return PaginationResponse.model_validate(cached)

        query = build_posts_filter(request, today)
        posts, total = await self.repository.find_page(query, request.page, request.page_size)

        response = PaginationResponse(
            total_elements=total,
            total_pages=math.ceil(total / request.page_size) if total else 0,
            current_page=request.page,
            page_size=request.page_size,
            data=[self.to_response(post) for post in posts],
        )

        if response.total_elements > 0:
            await self.cache.set_cached_data(POSTS_CACHE, cache_key, response.model_dump(mode="json"))

        post_logger.info(f"공고 목록 조회 완료: 총 {total}건, page={request.page}, 필터={query}")
        return response

    async def get_post_by_id(self, post_id: str) -> PostResponse:
        cached = await self.cache.get_cached_data(POST_CACHE, post_id)
        if cached is not None:
            return PostResponse.model_validate(cached)

        post = await self._find_by_id_or_raise(post_id)
        response = self.to_response(post)
        await self.cache.set_cached_data(POST_CACHE, post_id, response.model_dump(mode="json"))

        post_logger.info(f"공고 상세 조회 완료: id={post_id}")
        return response

    async def get_post_jd(self, post_id: str) -> bytes:
        """JD 파일 조회 (post id 기준 캐시, base64로 저장)"""
        cached = await self.cache.get_cached_data(POST_JD_CACHE, post_id)
        if cached is not None:
            return base64.b64decode(cached)

        post = await self._find_by_id_or_raise(post_id)
        if not post.jd_id:
            raise NotFoundException("Job description", detail="공고에 등록된 JD 파일이 없습니다.")

        content = await self.blob_storage.get_object(build_jd_path(post_id, post.jd_id))
        await self.cache.set_cached_data(POST_JD_CACHE, post_id, base64.b64encode(content).decode("ascii"))

        post_logger.info(f"공고 JD 조회 완료: id={post_id}, {len(content)} bytes")
        return content

    async def get_post_ids_by_recruiter_id(self, recruiter_id: str) -> List[str]:
        posts = await self.repository.find_by_recruiter_id(recruiter_id)
        post_ids = [str(post.id) for post in posts]
        post_logger.info(f"채용 담당자별 공고 ID 조회 완료: recruiter_id={recruiter_id}, {len(post_ids)}건")
        return post_ids

    # === 생성 ===
    async def create_post(self, user_id: str, request: PostCreateRequest, jd_content: bytes) -> PostResponse:
        """
        공고 생성

        1. 제목 중복 확인
        2. 직급/복리후생/직무 스냅샷 조회
        3. 채용 담당자 -> 소속 기업 스냅샷 조회
        4. Pending 상태로 저장
        5. JD 파일 저장 후 jd_id 기록 (두 번의 쓰기, 원자적이지 않음)
        6. 검색 인덱스 기록
        7. 인덱스가 돌려준 급여 값으로 덮어쓰기
        8. 목록 캐시 전체 삭제

        단계 사이에서 실패하면 이미 완료된 단계는 되돌리지 않습니다.
        운영자가 정리할 수 있도록 완료된 단계와 post id를 로그로 남깁니다.
        """
        completed_steps: List[str] = []
        post: Optional[Post] = None

        try:
            if await self.repository.exists_by_title(request.title):
                raise ConflictException(TITLE_IN_USE_MESSAGE)
            completed_steps.append("check_title")

            level = await self._get_post_level(request.level_id)
            benefits = await self._get_post_benefits(request.benefit_ids)
            profession_response = await self.taxonomy_client.get_profession_by_id(request.profession_id)
            profession = PostProfession(
                id=profession_response.id,
                name=profession_response.name,
                total_posts=profession_response.total_posts,
            )
            completed_steps.append("resolve_taxonomy")

            recruiter = await self.user_client.get_raw_recruiter_by_id(user_id)
            if not recruiter.business_id:
                raise NotFoundException("Business", detail="채용 담당자의 소속 기업을 찾을 수 없습니다.")
            business = await self._get_post_business(recruiter.business_id)
            category = None
            if profession_response.category_id:
                category = await self.taxonomy_client.get_category_by_id(profession_response.category_id)
            completed_steps.append("resolve_recruiter")

            post = Post(
                title=request.title,
                description=request.description,
                other_requirements=request.other_requirements,
                profession=profession,
                level=level,
                business=business,
                benefits=benefits,
                locations=_to_locations(request.locations),
                min_salary=parse_salary(request.min_salary_string),
                min_salary_string=request.min_salary_string,
                max_salary=parse_salary(request.max_salary_string),
                max_salary_string=request.max_salary_string,
                currency=request.currency,
                working_format=request.working_format,
                years_of_experience=request.years_of_experience,
                requisition_number=request.requisition_number,
                application_deadline=_to_datetime(request.application_deadline),
                recruiter_id=user_id,
                active_status=ActiveStatus.PENDING,
                total_views=0,
                total_applications=0,
                created_at=self.clock(),
            )
            await self.repository.save(post)
            completed_steps.append("persist_post")

            jd_id = str(uuid.uuid4())
            await self.blob_storage.put_object(build_jd_path(str(post.id), jd_id), jd_content)
            completed_steps.append("store_jd")

            post.jd_id = jd_id
            await self.repository.save(post)
            completed_steps.append("persist_jd_id")

            indexed = await self.search_index_client.create_post_index(self._build_index_document(post, category))
            post_logger.info(
                f"검색 인덱스 기록 완료: id={indexed.id}, "
                f"min_salary={indexed.min_salary}, max_salary={indexed.max_salary}"
            )
            post_logger.debug(f"검색 인덱스 응답: {indexed.model_dump(mode='json', by_alias=True)}")
            completed_steps.append("write_index")

            # 인덱스 응답의 급여 값이 기준
            post.min_salary = indexed.min_salary
            post.max_salary = indexed.max_salary
            await self.repository.save(post)
            completed_steps.append("apply_index_salary")
        except Exception as e:
            post_logger.error(
                f"공고 생성 실패: title={request.title}, "
                f"post_id={post.id if post is not None else None}, "
                f"완료 단계={completed_steps}, 오류: {str(e)}"
            )
            raise

        await self.cache.clear_cache(POSTS_CACHE)

        response = self.to_response(post)
        await self.event_publisher.publish(
            POST_CREATED,
            {"postId": response.id, "recruiterId": user_id, "businessId": post.business.id},
        )

        post_logger.info(f"공고 생성 완료: id={response.id}, title={response.title}")
        return response

    # === 부분 수정 ===
    async def update_post_heading_info(self, post_id: str, request: PostHeadingInfoUpdateRequest) -> PostResponse:
        post = await self._find_by_id_or_raise(post_id)

        if await self.repository.exists_by_title_excluding(post_id, request.title):
            raise ConflictException(TITLE_IN_USE_MESSAGE)

        post.title = request.title
        post.min_salary = parse_salary(request.min_salary_string)
        post.min_salary_string = request.min_salary_string
        post.max_salary = parse_salary(request.max_salary_string)
        post.max_salary_string = request.max_salary_string
        post.currency = request.currency
        post.locations = _to_locations(request.locations)
        post.years_of_experience = request.years_of_experience
        post.requisition_number = request.requisition_number
        post.application_deadline = _to_datetime(request.application_deadline)

        return await self._save_and_refresh_cache(post, "기본 정보")

    async def update_post_detailed_info(self, post_id: str, request: PostDetailedInfoUpdateRequest) -> PostResponse:
        post = await self._find_by_id_or_raise(post_id)

        post.description = request.description
        post.other_requirements = request.other_requirements

        return await self._save_and_refresh_cache(post, "상세 정보")

    async def update_post_general_info(self, post_id: str, request: PostGeneralInfoUpdateRequest) -> PostResponse:
        post = await self._find_by_id_or_raise(post_id)

        post.profession = await self._get_post_profession(request.profession_id)
        post.level = await self._get_post_level(request.level_id)
        post.benefits = await self._get_post_benefits(request.benefit_ids)
        post.working_format = request.working_format

        return await self._save_and_refresh_cache(post, "일반 정보")

    async def update_post_active_status(self, post_id: str, request: PostActiveStatusUpdateRequest) -> PostResponse:
        """
        게시 상태 변경

        Opening으로 바뀌면 직무 공고 수 +1, Opening에서 다른 상태로 바뀌면 -1.
        이미 Opening인 공고를 다시 Opening으로 바꾸는 요청은 공고 수를 바꾸지 않습니다.
        직무 서비스 호출과 로컬 저장은 하나의 트랜잭션이 아닙니다.
        """
        post = await self._find_by_id_or_raise(post_id)
        previous_status = post.active_status
        new_status = request.active_status

        delta = 0
        if new_status == ActiveStatus.OPENING and previous_status != ActiveStatus.OPENING:
            delta = 1
        elif previous_status == ActiveStatus.OPENING and new_status != ActiveStatus.OPENING:
            delta = -1

        if delta and post.profession is not None:
            await self.taxonomy_client.update_profession_total_posts(post.profession.id, delta)

        post.active_status = new_status
        response = await self._save_and_refresh_cache(post, "게시 상태")

        await self.event_publisher.publish(
            POST_STATUS_CHANGED,
            {"postId": post_id, "from": previous_status.value, "to": new_status.value},
        )
        return response

    async def update_post_total_applications(self, post_id: str, number: int) -> PostResponse:
        post = await self._find_by_id_or_raise(post_id)
        total = post.total_applications + number
        if total < 0:
            raise BadRequestException("지원자 수는 0보다 작을 수 없습니다.", error_code="VALIDATION_FAILED")
        post.total_applications = total
        return await self._save_and_refresh_cache(post, "지원자 수")

    async def update_post_total_views(self, post_id: str, number: int) -> PostResponse:
        post = await self._find_by_id_or_raise(post_id)
        total = post.total_views + number
        if total < 0:
            raise BadRequestException("조회수는 0보다 작을 수 없습니다.", error_code="VALIDATION_FAILED")
        post.total_views = total
        return await self._save_and_refresh_cache(post, "조회수")

    # === 내부 헬퍼 ===
    async def _save_and_refresh_cache(self, post: Post, label: str) -> PostResponse:
        """저장 후 단건 캐시 갱신 + 목록 캐시 전체 삭제"""
        await self.repository.save(post)

        response = self.to_response(post)
        await self.cache.set_cached_data(POST_CACHE, response.id, response.model_dump(mode="json"))
        await self.cache.clear_cache(POSTS_CACHE)

        post_logger.info(f"공고 {label} 수정 완료: id={response.id}")
        return response

    async def _find_by_id_or_raise(self, post_id: str) -> Post:
        post = await self.repository.find_by_id(post_id)
        if post is None:
            post_logger.warning(f"공고를 찾을 수 없음: id={post_id}")
            raise NotFoundException("Post")
        return post

    async def _get_post_profession(self, profession_id: str) -> PostProfession:
        profession = await self.taxonomy_client.get_profession_by_id(profession_id)
        return PostProfession(id=profession_id, name=profession.name, total_posts=profession.total_posts)

    async def _get_post_level(self, level_id: str) -> PostLevel:
        level = await self.taxonomy_client.get_level_by_id(level_id)
        return PostLevel(id=level_id, name=level.name)

    async def _get_post_benefits(self, benefit_ids: List[str]) -> List[PostBenefit]:
        benefits = await self.taxonomy_client.get_benefits_by_ids(benefit_ids)
        return [PostBenefit(id=benefit.id, name=benefit.name) for benefit in benefits]

    async def _get_post_business(self, business_id: str) -> PostBusiness:
        business = await self.business_client.get_business_by_id(business_id)
        return PostBusiness(id=business_id, name=business.name, profile_image_id=business.profile_image_id)

    @staticmethod
    def _build_index_document(post: Post, category: Optional[CategoryResponse]) -> PostIndexDocument:
        """검색 인덱스용 비정규화 문서"""
        return PostIndexDocument(
            id=str(post.id),
            title=post.title,
            profession=IndexNamedRef(id=post.profession.id, name=post.profession.name) if post.profession else None,
            category=IndexNamedRef(id=category.id, name=category.name) if category else None,
            min_salary=post.min_salary,
            min_salary_string=post.min_salary_string,
            max_salary=post.max_salary,
            max_salary_string=post.max_salary_string,
            currency=post.currency,
            level=IndexNamedRef(id=post.level.id, name=post.level.name) if post.level else None,
            locations=[
                IndexLocation(province_name=location.province_name, specific_address=location.specific_address)
                for location in post.locations
            ],
            business=IndexBusiness(
                id=post.business.id,
                name=post.business.name,
                profile_image_id=post.business.profile_image_id,
            ) if post.business else None,
            working_format=post.working_format,
            application_deadline=post.application_deadline.date() if post.application_deadline else None,
            created_at=post.created_at.date(),
        )

    @staticmethod
    def to_response(post: Post) -> PostResponse:
        return PostResponse.model_validate({
            "id": str(post.id),
            "title": post.title,
            "description": post.description,
            "other_requirements": post.other_requirements,
            "profession": post.profession.model_dump() if post.profession else None,
            "level": post.level.model_dump() if post.level else None,
            "business": post.business.model_dump() if post.business else None,
            "benefits": [benefit.model_dump() for benefit in post.benefits],
            "locations": [location.model_dump() for location in post.locations],
            "min_salary": post.min_salary,
            "min_salary_string": post.min_salary_string,
            "max_salary": post.max_salary,
            "max_salary_string": post.max_salary_string,
            "currency": post.currency,
            "working_format": post.working_format,
            "years_of_experience": post.years_of_experience,
            "requisition_number": post.requisition_number,
            "application_deadline": post.application_deadline.date() if post.application_deadline else None,
            "recruiter_id": post.recruiter_id,
            "jd_id": post.jd_id,
            "total_views": post.total_views,
            "total_applications": post.total_applications,
            "active_status": post.active_status,
            "created_at": post.created_at.date() if post.created_at else None,
        })
