from __future__ import annotations

from datetime import datetime
from types import SimpleNamespace
from typing import Dict, List, Optional, Tuple

import pytest
from mongomock_motor import AsyncMongoMockClient
from redis.exceptions import ConnectionError as RedisConnectionError

from app.database.mongo import init_mongo
from app.schemas.clients import (
    BenefitResponse,
    BusinessResponse,
    CategoryResponse,
    LevelResponse,
    PostIndexDocument,
    ProfessionResponse,
    RawRecruiterResponse,
)
from app.schemas.post import PostCreateRequest
from app.services.blob_storage import BlobStorage
from app.services.event_publisher import PostEventPublisher
from app.services.post_repository import PostRepository
from app.services.post_service import PostService
from app.utils.cache import CacheManager
from app.utils.exceptions import NotFoundException

FIXED_NOW = datetime(2024, 5, 10, 9, 30)


class FakeTaxonomyClient:
    def __init__(self) -> None:
        self.professions: Dict[str, ProfessionResponse] = {
            "P1": ProfessionResponse(id="P1", name="Engineering", category_id="C1", total_posts=5),
            "P2": ProfessionResponse(id="P2", name="Design", category_id="C2", total_posts=2),
        }
        self.categories = {
            "C1": CategoryResponse(id="C1", name="IT"),
            "C2": CategoryResponse(id="C2", name="Art"),
        }
        self.levels = {
            "L1": LevelResponse(id="L1", name="Junior"),
            "L2": LevelResponse(id="L2", name="Senior"),
        }
        self.benefits = {
            "B1": BenefitResponse(id="B1", name="Insurance"),
            "B2": BenefitResponse(id="B2", name="Bonus"),
            "B3": BenefitResponse(id="B3", name="Remote"),
        }
        self.counter_calls: List[Tuple[str, int]] = []

    async def get_profession_by_id(self, profession_id: str) -> ProfessionResponse:
        if profession_id not in self.professions:
            raise NotFoundException("Profession")
        return self.professions[profession_id]

    async def update_profession_total_posts(self, profession_id: str, number: int) -> None:
        self.counter_calls.append((profession_id, number))
        profession = self.professions[profession_id]
        profession.total_posts += number

    async def get_category_by_id(self, category_id: str) -> CategoryResponse:
        if category_id not in self.categories:
            raise NotFoundException("Category")
        return self.categories[category_id]

    async def get_level_by_id(self, level_id: str) -> LevelResponse:
        if level_id not in self.levels:
            raise NotFoundException("Level")
        return self.levels[level_id]

    async def get_benefits_by_ids(self, benefit_ids: List[str]) -> List[BenefitResponse]:
        missing = [benefit_id for benefit_id in benefit_ids if benefit_id not in self.benefits]
        if missing:
            raise NotFoundException("Benefit")
        return [self.benefits[benefit_id] for benefit_id in benefit_ids]


class FakeBusinessClient:
    def __init__(self) -> None:
        self.businesses = {"BZ1": BusinessResponse(id="BZ1", name="Acme", profile_image_id="img-1")}

    async def get_business_by_id(self, business_id: str) -> BusinessResponse:
        if business_id not in self.businesses:
            raise NotFoundException("Business")
        return self.businesses[business_id]


class FakeUserClient:
    def __init__(self) -> None:
        self.recruiters = {
            "U1": RawRecruiterResponse(id="U1", name="Recruiter One", business_id="BZ1"),
            "U2": RawRecruiterResponse(id="U2", name="Freelancer", business_id=None),
        }

    async def get_raw_recruiter_by_id(self, user_id: str) -> RawRecruiterResponse:
        if user_id not in self.recruiters:
            raise NotFoundException("Recruiter")
        return self.recruiters[user_id]


class FakeSearchIndexClient:
    def __init__(self) -> None:
        self.documents: List[PostIndexDocument] = []
        self.salary_override: Optional[Tuple[Optional[int], Optional[int]]] = None
        self.error: Optional[Exception] = None

    async def create_post_index(self, document: PostIndexDocument) -> PostIndexDocument:
        if self.error is not None:
            raise self.error
        self.documents.append(document)
        if self.salary_override is None:
            return document
        min_salary, max_salary = self.salary_override
        return document.model_copy(update={"min_salary": min_salary, "max_salary": max_salary})


class FakeBlobStorage(BlobStorage):
    def __init__(self) -> None:
        self.objects: Dict[str, bytes] = {}

    async def put_object(self, path: str, content: bytes) -> None:
        self.objects[path] = content

    async def get_object(self, path: str) -> bytes:
        if path not in self.objects:
            raise NotFoundException("Job description")
        return self.objects[path]

    async def delete_object(self, path: str) -> bool:
        return self.objects.pop(path, None) is not None

    async def object_exists(self, path: str) -> bool:
        return path in self.objects


class FakeEventPublisher:
    def __init__(self) -> None:
        self.events: List[Tuple[str, dict]] = []

    async def publish(self, event_type: str, payload: dict) -> int:
        self.events.append((event_type, payload))
        return 1

    async def close(self) -> None:
        return None


class UnreachableRedis:
    async def publish(self, channel: str, message: str) -> int:
        raise RedisConnectionError("Error 111 connecting to localhost:6379")


def unreachable_event_publisher() -> PostEventPublisher:
    publisher = PostEventPublisher(redis_url="redis://unused", channel="post-events")
    publisher._redis = UnreachableRedis()
    return publisher


@pytest.fixture
async def mongo():
    client = AsyncMongoMockClient()
    await init_mongo(client)
    yield client


@pytest.fixture
def collaborators() -> SimpleNamespace:
    return SimpleNamespace(
        taxonomy=FakeTaxonomyClient(),
        business=FakeBusinessClient(),
        user=FakeUserClient(),
        search_index=FakeSearchIndexClient(),
        blob=FakeBlobStorage(),
        events=FakeEventPublisher(),
        cache=CacheManager(),
    )


@pytest.fixture
def service(mongo, collaborators) -> PostService:
    return PostService(
        repository=PostRepository(),
        cache=collaborators.cache,
        business_client=collaborators.business,
        user_client=collaborators.user,
        taxonomy_client=collaborators.taxonomy,
        search_index_client=collaborators.search_index,
        blob_storage=collaborators.blob,
        event_publisher=collaborators.events,
        clock=lambda: FIXED_NOW,
    )


def make_create_request(**overrides) -> PostCreateRequest:
    payload = {
        "title": "Backend Engineer",
        "professionId": "P1",
        "levelId": "L1",
        "benefitIds": ["B1", "B2"],
        "minSalaryString": "1,000",
        "maxSalaryString": "2,000",
        "currency": "USD",
        "locations": [{"provinceCode": 79, "provinceName": "Ho Chi Minh", "specificAddress": "District 1"}],
        "workingFormat": "Full-time",
        "yearsOfExperience": "2+ years",
        "requisitionNumber": 3,
        "applicationDeadline": "2024-06-30",
        "description": "Build APIs",
        "otherRequirements": "English",
    }
    payload.update(overrides)
    return PostCreateRequest.model_validate(payload)
