from app.config import settings

if __name__ == "__main__":
    import uvicorn
    print(f"🚀 Post Service 시작 중... (포트: {settings.APP_PORT})")
    print(f"   📚 Swagger: http://localhost:{settings.APP_PORT}/docs")
    uvicorn.run(
        "app.main:app",
        host=settings.APP_HOST,
        port=settings.APP_PORT,
        reload=settings.APP_RELOAD
    )
