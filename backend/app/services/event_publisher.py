import json
import logging
from datetime import datetime
from typing import Any, Dict, Optional
import redis.asyncio as redis
from redis.exceptions import RedisError
from app.config import settings
from app.utils.exceptions import UpstreamServiceException
from app.utils.logger import client_logger

logger = logging.getLogger(__name__)

EVENT_CHANNEL_SERVICE = "event-channel"

POST_CREATED = "POST_CREATED"
POST_STATUS_CHANGED = "POST_STATUS_CHANGED"


class PostEventPublisher:
    """공고 이벤트 발행 (Redis pub/sub)"""

    def __init__(self, redis_url: Optional[str] = None, channel: Optional[str] = None):
        self.redis_url = redis_url or settings.REDIS_URL
        self.channel = channel or settings.POST_EVENTS_CHANNEL
        self._redis = None

    async def get_redis(self):
        if self._redis is None:
            self._redis = redis.from_url(self.redis_url, decode_responses=True)
        return self._redis

    async def publish(self, event_type: str, payload: Dict[str, Any]) -> int:
        """이벤트 발행 후 수신한 구독자 수 반환 (Redis 오류는 UpstreamServiceException)"""
        message = json.dumps(
            {"type": event_type, "payload": payload, "publishedAt": datetime.now().isoformat()},
            default=str,
        )
        try:
            client = await self.get_redis()
            receivers = await client.publish(self.channel, message)
        except RedisError as e:
            client_logger.error(f"이벤트 발행 실패: {event_type} -> {self.channel}, 오류: {str(e)}")
            raise UpstreamServiceException(EVENT_CHANNEL_SERVICE, str(e)) from e
        logger.info(f"이벤트 발행: {event_type} -> {self.channel}, 수신자 {receivers}명")
        return receivers

    async def close(self):
        if self._redis:
            await self._redis.aclose()
            self._redis = None
