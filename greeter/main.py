from fastapi import FastAPI
from fastapi.responses import PlainTextResponse
from greeter.core.config import settings
from greeter.core.errors import not_found_handler
from greeter.core.logger import logger
from greeter.core.middleware import RequestLoggingMiddleware
from greeter.core.server import serve

GREETING = (
    "Hi, My name is Sagar Goswami. An ambitious DevOps Engineer with experience "
    "in AWS, Docker, CI/CD, Shell Script, Linux, and Git."
)

# FastAPI 앱 생성 - 단일 라우트만 노출하므로 문서 경로는 비활성화
app = FastAPI(
    title=settings.PROJECT_NAME,
    version="1.0.0",
    docs_url=None,
    redoc_url=None,
    openapi_url=None,
)

# 요청 로깅 미들웨어 추가
app.add_middleware(RequestLoggingMiddleware)

# GET 외 메서드로 / 요청 시 405 대신 404
app.add_exception_handler(405, not_found_handler)


@app.on_event("startup")
async def startup_event():
    port = getattr(app.state, "port", settings.PORT)
    logger.info(f"Server running on port {port}", extra={
        "host": settings.HOST,
        "port": port
    })


@app.on_event("shutdown")
async def shutdown_event():
    logger.info("SERVER_SHUTDOWN")


@app.get("/", response_class=PlainTextResponse)
async def root():
    return GREETING


def run():
    serve(app, settings)


if __name__ == "__main__":
    run()
