from typing import Optional
import httpx
from app.config import settings
from app.schemas.clients import RawRecruiterResponse
from app.services.clients.base import BaseServiceClient


class UserClient(BaseServiceClient):
    """사용자(채용 담당자) 서비스 클라이언트"""

    service_name = "user-service"

    def __init__(self, base_url: Optional[str] = None, client: Optional[httpx.AsyncClient] = None):
        super().__init__(base_url or settings.USER_SERVICE_URL, client=client)

    async def get_raw_recruiter_by_id(self, user_id: str) -> RawRecruiterResponse:
        """채용 담당자 정보 + 소속 기업 ID 조회"""
        data = await self._request("GET", f"/api/recruiters/{user_id}/raw", "Recruiter")
        return RawRecruiterResponse.model_validate(data)
