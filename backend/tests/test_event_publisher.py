import json

import pytest

from app.services.event_publisher import POST_CREATED, POST_STATUS_CHANGED, PostEventPublisher
from app.utils.exceptions import UpstreamServiceException

from conftest import UnreachableRedis


class RecordingRedis:
    def __init__(self) -> None:
        self.messages = []
        self.closed = False

    async def publish(self, channel: str, message: str) -> int:
        self.messages.append((channel, message))
        return 2

    async def aclose(self) -> None:
        self.closed = True


async def test_publish_sends_typed_json_message() -> None:
    publisher = PostEventPublisher(redis_url="redis://unused", channel="post-events")
    fake = RecordingRedis()
    publisher._redis = fake

    receivers = await publisher.publish(POST_STATUS_CHANGED, {"postId": "p1", "from": "Pending", "to": "Opening"})

    assert receivers == 2
    channel, raw = fake.messages[0]
    message = json.loads(raw)
    assert channel == "post-events"
    assert message["type"] == POST_STATUS_CHANGED
    assert message["payload"] == {"postId": "p1", "from": "Pending", "to": "Opening"}
    assert "publishedAt" in message

    await publisher.close()
    assert fake.closed is True


async def test_publish_failure_maps_to_upstream_error() -> None:
    publisher = PostEventPublisher(redis_url="redis://unused", channel="post-events")
    publisher._redis = UnreachableRedis()

    with pytest.raises(UpstreamServiceException) as exc_info:
        await publisher.publish(POST_CREATED, {"postId": "p1"})

    assert exc_info.value.status_code == 502
    assert exc_info.value.service == "event-channel"
