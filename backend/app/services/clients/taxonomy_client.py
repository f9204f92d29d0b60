from typing import List, Optional
import httpx
from app.config import settings
from app.schemas.clients import BenefitResponse, CategoryResponse, LevelResponse, ProfessionResponse
from app.services.clients.base import BaseServiceClient
from app.utils.exceptions import NotFoundException


class TaxonomyClient(BaseServiceClient):
    """직무(profession)/카테고리/직급(level)/복리후생(benefit) 서비스 클라이언트"""

    service_name = "taxonomy-service"

    def __init__(self, base_url: Optional[str] = None, client: Optional[httpx.AsyncClient] = None):
        super().__init__(base_url or settings.TAXONOMY_SERVICE_URL, client=client)

    async def get_profession_by_id(self, profession_id: str) -> ProfessionResponse:
        data = await self._request("GET", f"/api/professions/{profession_id}", "Profession")
        return ProfessionResponse.model_validate(data)

    async def update_profession_total_posts(self, profession_id: str, number: int) -> None:
        """직무별 게시 공고 수 증감"""
        await self._request(
            "PUT",
            f"/api/professions/{profession_id}/totalPosts",
            "Profession",
            params={"number": number},
        )

    async def get_category_by_id(self, category_id: str) -> CategoryResponse:
        data = await self._request("GET", f"/api/categories/{category_id}", "Category")
        return CategoryResponse.model_validate(data)

    async def get_level_by_id(self, level_id: str) -> LevelResponse:
        data = await self._request("GET", f"/api/levels/{level_id}", "Level")
        return LevelResponse.model_validate(data)

    async def get_benefits_by_ids(self, benefit_ids: List[str]) -> List[BenefitResponse]:
        """복리후생 일괄 조회 (하나라도 없으면 NotFound)"""
        unique_ids = list(dict.fromkeys(benefit_ids))
        if not unique_ids:
            return []

        data = await self._request("GET", "/api/benefits", "Benefit", params={"ids": ",".join(unique_ids)})
        benefits = {item.id: item for item in (BenefitResponse.model_validate(b) for b in data or [])}

        missing = [benefit_id for benefit_id in unique_ids if benefit_id not in benefits]
        if missing:
            raise NotFoundException("Benefit", detail=f"Benefit을(를) 찾을 수 없습니다: {', '.join(missing)}")
        return [benefits[benefit_id] for benefit_id in unique_ids]
