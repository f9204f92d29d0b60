import json
import logging
from datetime import timedelta
from typing import Any, Optional
import redis.asyncio as redis
from app.config import settings
from app.utils.cache import BaseCacheManager

logger = logging.getLogger(__name__)

class RedisCacheManager(BaseCacheManager):
    """Redis 기반 분산 캐시 관리자"""

    def __init__(self, redis_url: str = None, default_ttl: timedelta = timedelta(hours=1)):
        super().__init__(default_ttl)
        self.redis_url = redis_url or settings.REDIS_URL
        self._redis = None

    async def get_redis(self):
        """Redis 연결 가져오기"""
        if self._redis is None:
            self._redis = redis.from_url(self.redis_url, decode_responses=True)
        return self._redis

    async def close(self):
        """Redis 연결 종료"""
        if self._redis:
            await self._redis.aclose()
            self._redis = None

    async def ping(self) -> bool:
        client = await self.get_redis()
        return bool(await client.ping())

    async def get_cached_data(self, cache_name: str, cache_key: str) -> Optional[Any]:
        """캐시된 데이터 조회 (조회 실패는 캐시 미스로 처리)"""
        try:
            client = await self.get_redis()
            full_key = f"{cache_name}:{cache_key}"
            cached_data = await client.get(full_key)

            if cached_data:
                logger.info(f"Redis 캐시 히트: {full_key}")
                return json.loads(cached_data)

            return None
        except Exception as e:
            logger.error(f"Redis 캐시 조회 실패: {str(e)}")
            return None

    async def set_cached_data(self, cache_name: str, cache_key: str, data: Any, ttl: Optional[timedelta] = None) -> None:
        """데이터를 캐시에 저장 (저장 실패는 로그만 남김)"""
        try:
            client = await self.get_redis()
            full_key = f"{cache_name}:{cache_key}"
            cache_ttl = int((ttl or self.default_ttl).total_seconds())

            await client.setex(full_key, cache_ttl, json.dumps(data, default=str))
            logger.info(f"Redis 캐시 저장: {full_key}, TTL: {cache_ttl}초")
        except Exception as e:
            logger.error(f"Redis 캐시 저장 실패: {str(e)}")

    # 무효화 실패는 오래된 응답이 남으므로 호출자에게 전파
    async def evict(self, cache_name: str, cache_key: str) -> None:
        """단일 캐시 항목 삭제"""
        client = await self.get_redis()
        full_key = f"{cache_name}:{cache_key}"
        await client.delete(full_key)
        logger.info(f"Redis 캐시 삭제: {full_key}")

    async def clear_cache(self, cache_name: str) -> int:
        """캐시 이름 아래 모든 키 삭제"""
        client = await self.get_redis()
        keys = await client.keys(f"{cache_name}:*")
        deleted_count = 0
        if keys:
            deleted_count = await client.delete(*keys)
        logger.info(f"Redis 캐시 전체 삭제: {cache_name}, 삭제된 캐시 수: {deleted_count}")
        return deleted_count
