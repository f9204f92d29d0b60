from typing import Any, Optional
import httpx
from app.config import settings
from app.utils.exceptions import NotFoundException, UpstreamServiceException
from app.utils.logger import client_logger


class BaseServiceClient:
    """연동 서비스 HTTP 클라이언트 공통 처리

    - 404 응답은 NotFoundException(resource)로 변환
    - 그 외 오류 응답/전송 오류/타임아웃은 UpstreamServiceException으로 변환
    - 재시도 없음 (실패 즉시 요청 실패로 전파)
    """

    service_name = "service"

    def __init__(self, base_url: str, timeout: Optional[float] = None, client: Optional[httpx.AsyncClient] = None):
        self.base_url = base_url.rstrip("/")
        self.client = client or httpx.AsyncClient(timeout=timeout or settings.RPC_TIMEOUT_SECONDS)

    async def _request(self, method: str, path: str, resource: str, **kwargs) -> Any:
        url = f"{self.base_url}{path}"
        try:
            response = await self.client.request(method, url, **kwargs)
        except httpx.HTTPError as e:
            client_logger.error(f"{self.service_name} 호출 실패: {method} {url}, 오류: {str(e)}")
            raise UpstreamServiceException(self.service_name, str(e)) from e

        if response.status_code == 404:
            client_logger.warning(f"{self.service_name} 리소스 없음: {method} {url}")
            raise NotFoundException(resource)
        if response.status_code >= 400:
            client_logger.error(f"{self.service_name} 오류 응답: {method} {url}, status={response.status_code}")
            raise UpstreamServiceException(self.service_name, f"status={response.status_code} {response.text}")

        if not response.content:
            return None
        return response.json()

    async def close(self):
        await self.client.aclose()
