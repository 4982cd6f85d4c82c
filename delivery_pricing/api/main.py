"""
API 서버 메인 애플리케이션
"""

from contextlib import asynccontextmanager
from typing import Optional

from fastapi import Depends, FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse, PlainTextResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from delivery_pricing.config import Settings, get_settings
from delivery_pricing.monitoring import LogSink, get_logger, setup_logging

from .dependencies import get_log_sink
from .middleware import TimingMiddleware
from .routers import products

logger = get_logger(__name__)


def create_app(settings: Optional[Settings] = None, log_sink: Optional[LogSink] = None) -> FastAPI:
    """
    FastAPI 앱 생성

    Args:
        settings: 애플리케이션 설정 (기본값: 환경 변수)
        log_sink: 외부에서 관리하는 로그 싱크 (없으면 앱이 생성하고 종료 시 중지)
    """
    settings = settings or get_settings()
    owns_sink = log_sink is None
    sink = log_sink if log_sink is not None else LogSink()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """애플리케이션 생명주기 관리"""
        setup_logging(
            log_level=settings.log_level,
            log_file=settings.log_file,
            json_logs=settings.is_production(),
        )
        sink.start()
        logger.info("API 서버 시작")

        yield

        logger.info("API 서버 종료")
        if owns_sink:
            sink.stop()
        else:
            sink.flush()

    app = FastAPI(
        title="Delivery Pricing API",
        description="상품 카탈로그와 배송사별 배송비/총액 계산",
        version="1.0.0",
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.log_sink = sink

    app.add_middleware(TimingMiddleware)
    app.include_router(products.router, prefix="/products", tags=["products"])

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException):
        """HTTP 예외 처리"""
        return JSONResponse(
            status_code=exc.status_code,
            content={
                "error": {"code": exc.status_code, "message": exc.detail, "path": str(request.url.path)}
            },
        )

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError):
        """검증 오류 처리"""
        return JSONResponse(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            content={"error": {"code": 422, "message": "Validation Error", "details": exc.errors()}},
        )

    @app.exception_handler(Exception)
    async def general_exception_handler(request: Request, exc: Exception):
        """일반 예외 처리 (상세 내용은 로그에만 남김)"""
        logger.exception(f"처리되지 않은 예외: {exc}")
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"error": {"code": 500, "message": "Internal Server Error"}},
        )

    @app.get("/", response_class=PlainTextResponse)
    def hello(log_sink: LogSink = Depends(get_log_sink)):
        """기본 페이지"""
        log_sink.info("Home page accessed successfully")
        return "Hello, World!\n"

    @app.get("/health")
    def health_check(log_sink: LogSink = Depends(get_log_sink)):
        """헬스 체크"""
        return {"status": "ok", "log_sink": "running" if log_sink.running else "stopped"}

    return app


app = create_app()


def run(host: Optional[str] = None, port: Optional[int] = None):
    """API 서버 실행"""
    import uvicorn

    settings = get_settings()
    host = host or settings.app_host
    if port is None:
        if not settings.app_port:
            logger.warning(f"APP_PORT 미설정, 기본 포트 {settings.resolved_port()} 사용")
        port = settings.resolved_port()

    logger.info(f"API 서버 시작: http://{host}:{port}")

    uvicorn.run(
        "delivery_pricing.api.main:app",
        host=host,
        port=port,
        reload=settings.is_development() and settings.debug,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    run()
