from typing import Optional
from motor.motor_asyncio import AsyncIOMotorClient
from beanie import init_beanie
from app.config import settings
from app.models.post import Post

motor_client: Optional[AsyncIOMotorClient] = None

async def init_mongo(client: Optional[AsyncIOMotorClient] = None):
    """beanie 초기화 (client를 넘기면 해당 클라이언트 사용)"""
    global motor_client
    motor_client = client or AsyncIOMotorClient(settings.MONGO_URI)
    await init_beanie(
        database=motor_client[settings.MONGO_DB_NAME],
        document_models=[Post],
    )

async def ping_mongo() -> bool:
    """MongoDB 연결 상태 확인"""
    if motor_client is None:
        return False
    await motor_client.admin.command("ping")
    return True

async def close_mongo():
    """MongoDB 연결을 안전하게 종료합니다."""
    global motor_client
    if motor_client:
        motor_client.close()
        motor_client = None
