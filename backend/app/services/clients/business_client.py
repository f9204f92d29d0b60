from typing import Optional
import httpx
from app.config import settings
from app.schemas.clients import BusinessResponse
from app.services.clients.base import BaseServiceClient


class BusinessClient(BaseServiceClient):
    """기업(business) 서비스 클라이언트"""

    service_name = "business-service"

    def __init__(self, base_url: Optional[str] = None, client: Optional[httpx.AsyncClient] = None):
        super().__init__(base_url or settings.BUSINESS_SERVICE_URL, client=client)

    async def get_business_by_id(self, business_id: str) -> BusinessResponse:
        data = await self._request("GET", f"/api/businesses/{business_id}", "Business")
        return BusinessResponse.model_validate(data)
