import hashlib
import json
import logging
from abc import ABC, abstractmethod
from datetime import datetime, timedelta
from typing import Dict, Any, Optional

logger = logging.getLogger(__name__)

# 캐시 이름 (키 공간)
POSTS_CACHE = "posts"     # 목록 페이지
POST_CACHE = "post"       # 단건 (post id)
POST_JD_CACHE = "postJd"  # JD 파일 (post id)


class BaseCacheManager(ABC):
    """캐시 관리자 공통 인터페이스 (명시적 get/set/evict/clear)"""

    def __init__(self, default_ttl: timedelta = timedelta(hours=1)):
        self.default_ttl = default_ttl

    @staticmethod
    def generate_cache_key(*args, **kwargs) -> str:
        """
        캐시 키 생성

        인자들을 키 정렬된 JSON으로 직렬화한 뒤 해시합니다.
        값에 구분자(":" 등)가 들어 있어도 서로 다른 인자 조합은 다른 키가 됩니다.
        """
        payload = json.dumps({"args": list(args), "kwargs": kwargs}, sort_keys=True, default=str, ensure_ascii=False)
        return hashlib.sha256(payload.encode("utf-8")).hexdigest()

    @abstractmethod
    async def get_cached_data(self, cache_name: str, cache_key: str) -> Optional[Any]:
        ...

    @abstractmethod
    async def set_cached_data(self, cache_name: str, cache_key: str, data: Any, ttl: Optional[timedelta] = None) -> None:
        ...

    @abstractmethod
    async def evict(self, cache_name: str, cache_key: str) -> None:
        ...

    @abstractmethod
    async def clear_cache(self, cache_name: str) -> int:
        ...

    async def ping(self) -> bool:
        return True

    async def close(self) -> None:
        return None


class CacheManager(BaseCacheManager):
    """프로세스 내 메모리 캐시 관리자"""

    def __init__(self, default_ttl: timedelta = timedelta(hours=1)):
        super().__init__(default_ttl)
        self.caches: Dict[str, Dict[str, Any]] = {}

    def get_cache(self, cache_name: str) -> Dict[str, Any]:
        """캐시 딕셔너리를 가져오거나 생성"""
        if cache_name not in self.caches:
            self.caches[cache_name] = {}
        return self.caches[cache_name]

    def is_cache_valid(self, cache_entry: Optional[Dict[str, Any]]) -> bool:
        """캐시가 유효한지 확인"""
        if not cache_entry:
            return False

        created_time = cache_entry.get('created_time')
        if not created_time:
            return False

        cache_ttl = cache_entry.get('ttl') or self.default_ttl
        return datetime.now() - created_time < cache_ttl

    async def get_cached_data(self, cache_name: str, cache_key: str) -> Optional[Any]:
        """캐시된 데이터 조회"""
        cache = self.get_cache(cache_name)
        cached_result = cache.get(cache_key)

        if self.is_cache_valid(cached_result):
            logger.info(f"캐시 히트: {cache_name}:{cache_key}")
            return cached_result.get('data')

        if cached_result is not None:
            # 만료된 항목 정리
            del cache[cache_key]
        return None

    async def set_cached_data(self, cache_name: str, cache_key: str, data: Any, ttl: Optional[timedelta] = None) -> None:
        """데이터를 캐시에 저장"""
        cache = self.get_cache(cache_name)
        cache[cache_key] = {
            'data': data,
            'created_time': datetime.now(),
            'ttl': ttl or self.default_ttl
        }
        logger.info(f"캐시 저장: {cache_name}:{cache_key}")

    async def evict(self, cache_name: str, cache_key: str) -> None:
        """단일 캐시 항목 삭제"""
        self.get_cache(cache_name).pop(cache_key, None)
        logger.info(f"캐시 삭제: {cache_name}:{cache_key}")

    async def clear_cache(self, cache_name: str) -> int:
        """캐시 이름 아래 모든 항목 삭제"""
        cache = self.get_cache(cache_name)
        deleted_count = len(cache)
        cache.clear()
        logger.info(f"캐시 전체 삭제: {cache_name}, 삭제된 캐시 수: {deleted_count}")
        return deleted_count

    def get_cache_status(self) -> Dict[str, Any]:
        """캐시 상태 조회"""
        return {
            "total_caches": {cache_name: len(cache) for cache_name, cache in self.caches.items()}
        }
