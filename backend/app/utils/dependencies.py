from datetime import timedelta
from typing import Optional
from fastapi import Header
from app.config import settings
from app.services.blob_storage import LocalBlobStorage
from app.services.clients import BusinessClient, SearchIndexClient, TaxonomyClient, UserClient
from app.services.event_publisher import PostEventPublisher
from app.services.post_repository import PostRepository
from app.services.post_service import PostService
from app.utils.cache import BaseCacheManager, CacheManager
from app.utils.exceptions import BadRequestException
from app.utils.redis_cache import RedisCacheManager

# 전역 인스턴스 (최초 사용 시 생성)
_cache_manager: Optional[BaseCacheManager] = None
_post_service: Optional[PostService] = None

def get_cache_manager() -> BaseCacheManager:
    """CACHE_BACKEND 설정에 따라 캐시 관리자 선택"""
    global _cache_manager
    if _cache_manager is None:
        ttl = timedelta(seconds=settings.CACHE_TTL_SECONDS)
        if settings.CACHE_BACKEND == "memory":
            _cache_manager = CacheManager(default_ttl=ttl)
        else:
            _cache_manager = RedisCacheManager(default_ttl=ttl)
    return _cache_manager

def get_post_service() -> PostService:
    global _post_service
    if _post_service is None:
        _post_service = PostService(
            repository=PostRepository(),
            cache=get_cache_manager(),
            business_client=BusinessClient(),
            user_client=UserClient(),
            taxonomy_client=TaxonomyClient(),
            search_index_client=SearchIndexClient(),
            blob_storage=LocalBlobStorage(settings.BLOB_STORAGE_DIR),
            event_publisher=PostEventPublisher(),
        )
    return _post_service

async def close_dependencies():
    """앱 종료 시 외부 연결 정리"""
    global _cache_manager, _post_service
    if _post_service is not None:
        await _post_service.business_client.close()
        await _post_service.user_client.close()
        await _post_service.taxonomy_client.close()
        await _post_service.search_index_client.close()
        await _post_service.event_publisher.close()
        _post_service = None
    if _cache_manager is not None:
        await _cache_manager.close()
        _cache_manager = None

# 인증은 게이트웨이에서 처리되고, 사용자 ID만 헤더로 전달됨
def get_current_user_id(x_user_id: Optional[str] = Header(None, alias="X-User-Id")) -> str:
    if not x_user_id or not x_user_id.strip():
        raise BadRequestException("X-User-Id 헤더가 필요합니다.", error_code="VALIDATION_FAILED")
    return x_user_id.strip()
