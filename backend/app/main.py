from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from contextlib import asynccontextmanager
from app.config import settings
from app.database import init_mongo, close_mongo, ping_mongo
from app.routers import post
from app.utils.dependencies import close_dependencies, get_cache_manager
from app.utils.exceptions import AppException, create_error_response
from app.utils.logger import app_logger

# 앱 시작 시 MongoDB(beanie) 초기화, 종료 시 외부 연결 정리
@asynccontextmanager
async def lifespan(app: FastAPI):
    await init_mongo()
    app_logger.info("Post Service 시작")
    yield
    await close_dependencies()
    await close_mongo()
    app_logger.info("Post Service 종료")

# FastAPI 앱 생성
app = FastAPI(
    title="Post Service API",
    lifespan=lifespan
)

@app.get("/")
async def root():
    """API 루트 경로"""
    return {
        "message": "Post Service API",
        "version": "1.0.0",
        "docs": "/docs",
    }

@app.get("/health")
async def health_check():
    """MongoDB / 캐시 연결 상태 확인"""
    dependencies = {}
    for name, check in (("mongo", ping_mongo), ("cache", get_cache_manager().ping)):
        try:
            dependencies[name] = "connected" if await check() else "disconnected"
        except Exception as e:
            app_logger.warning(f"헬스 체크 실패: {name}, 오류: {str(e)}")
            dependencies[name] = "error"

    all_connected = all(value == "connected" for value in dependencies.values())
    return {"status": "healthy" if all_connected else "degraded", "dependencies": dependencies}

@app.exception_handler(AppException)
async def app_exception_handler(request: Request, exc: AppException):
    return JSONResponse(
        status_code=exc.status_code,
        content=create_error_response(exc.status_code, exc.detail, exc.error_code, exc.extra_data),
    )

@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    return JSONResponse(
        status_code=400,
        content=create_error_response(
            400,
            "요청 값이 올바르지 않습니다.",
            "VALIDATION_FAILED",
            {"errors": jsonable_encoder(
                [{k: v for k, v in error.items() if k not in ("ctx", "input", "url")} for error in exc.errors()]
            )},
        ),
    )

# CORS 설정
app.add_middleware(
    CORSMiddleware,
    allow_origins=[origin.strip() for origin in settings.CORS_ORIGINS.split(",") if origin.strip()],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# 라우터 등록
app.include_router(post.router)
