from typing import Optional
import httpx
from app.config import settings
from app.schemas.clients import PostIndexDocument
from app.services.clients.base import BaseServiceClient


class SearchIndexClient(BaseServiceClient):
    """검색 인덱스(elastic) 서비스 클라이언트"""

    service_name = "elastic-service"

    def __init__(self, base_url: Optional[str] = None, client: Optional[httpx.AsyncClient] = None):
        super().__init__(base_url or settings.SEARCH_INDEX_URL, client=client)

    async def create_post_index(self, document: PostIndexDocument) -> PostIndexDocument:
        """공고 문서를 인덱스에 기록하고, 인덱스가 돌려준 문서를 반환"""
        data = await self._request(
            "POST",
            "/api/post",
            "Post index",
            json=document.model_dump(mode="json", by_alias=True),
        )
        return PostIndexDocument.model_validate(data)
