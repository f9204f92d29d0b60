import os
from dotenv import load_dotenv
from pydantic_settings import BaseSettings

load_dotenv()

class Settings(BaseSettings):
    # 로그 레벨 (DEBUG, INFO, WARNING, ERROR)
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")

    # 서버 실행 설정
    APP_HOST: str = os.getenv("APP_HOST", "0.0.0.0")
    APP_PORT: int = int(os.getenv("APP_PORT", "8000"))
    APP_RELOAD: bool = os.getenv("APP_RELOAD", "false").lower() == "true"

    # MongoDB 설정 (공고 문서 저장소)
    MONGO_URI: str = os.getenv("MONGO_URI", "mongodb://localhost:27017")
    MONGO_DB_NAME: str = os.getenv("MONGO_DB_NAME", "post_db")

    # Redis 설정 (응답 캐시 + 이벤트 채널)
    REDIS_URL: str = os.getenv("REDIS_URL", "redis://localhost:6379")
    CACHE_BACKEND: str = os.getenv("CACHE_BACKEND", "redis")  # "redis" or "memory"
    CACHE_TTL_SECONDS: int = int(os.getenv("CACHE_TTL_SECONDS", "3600"))
    POST_EVENTS_CHANNEL: str = os.getenv("POST_EVENTS_CHANNEL", "post-events")

    # 연동 서비스 URL
    BUSINESS_SERVICE_URL: str = os.getenv("BUSINESS_SERVICE_URL", "http://localhost:8081")
    USER_SERVICE_URL: str = os.getenv("USER_SERVICE_URL", "http://localhost:8082")
    TAXONOMY_SERVICE_URL: str = os.getenv("TAXONOMY_SERVICE_URL", "http://localhost:8083")
    SEARCH_INDEX_URL: str = os.getenv("SEARCH_INDEX_URL", "http://localhost:8084")

    # 원격 호출 타임아웃 (재시도 없음)
    RPC_TIMEOUT_SECONDS: float = float(os.getenv("RPC_TIMEOUT_SECONDS", "10.0"))

    # JD 파일 저장 경로
    BLOB_STORAGE_DIR: str = os.getenv("BLOB_STORAGE_DIR", "./storage")

    # CORS 설정
    CORS_ORIGINS: str = os.getenv("CORS_ORIGINS", "http://localhost:3000")  # 콤마 구분

settings = Settings()
