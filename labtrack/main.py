# labtrack/main.py

import logging
from typing import AsyncGenerator, Optional
from contextlib import asynccontextmanager

from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlmodel.ext.asyncio.session import AsyncSession
from fastapi import FastAPI, Depends
from fastapi.middleware.cors import CORSMiddleware

# 핵심 설정 및 데이터베이스 모듈 임포트
from labtrack.core.config import settings
from labtrack.core.database import Database
from labtrack.core.dependencies import get_db_session
from labtrack.core.exceptions import Unclassified, register_exception_handlers

# 각 도메인의 라우터들을 임포트합니다.
from labtrack.domains.usr.routers import router as usr_router
from labtrack.domains.lims.routers import router as lims_router

logger = logging.getLogger(__name__)


# -- 애플리케이션 수명 주기 이벤트 핸들러 --
# 애플리케이션 시작 시 저장소 연결 및 멱등 마이그레이션, 종료 시 커넥션 풀 정리를 수행합니다.
@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    logging.basicConfig(
        level=logging.DEBUG if settings.DEBUG_MODE else logging.INFO,
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )
    database: Database = app.state.db
    logger.info("%s starting (env=%s)", settings.APP_NAME, settings.APP_ENV)

    database.connect()
    if settings.AUTO_CREATE_TABLES:
        await database.create_db_and_tables()

    yield  # 애플리케이션 실행

    logger.info("%s shutting down", settings.APP_NAME)
    await database.dispose()


def create_app(database: Optional[Database] = None) -> FastAPI:
    """
    FastAPI 애플리케이션 인스턴스를 생성합니다.
    저장소 핸들을 넘기지 않으면 설정의 DATABASE_URL로 생성합니다 (연결은 lifespan에서).
    """
    app = FastAPI(
        title=settings.APP_NAME,
        description=settings.APP_DESCRIPTION,
        version=settings.APP_VERSION,
        docs_url="/docs",       # Swagger UI
        redoc_url="/redoc",     # ReDoc
        lifespan=lifespan,
    )
    app.state.db = database or Database(
        settings.DATABASE_URL.get_secret_value(),
        echo=settings.DEBUG_MODE,
    )

    register_exception_handlers(app)

    # -- CORS 미들웨어 설정 --
    # 세션 쿠키를 주고받아야 하므로 allow_credentials=True 이며, 출처는 설정으로 제한합니다.
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # -- 도메인 라우터 포함 (경로 접두사 없음) --
    app.include_router(usr_router)
    app.include_router(lims_router)

    app.add_api_route("/", read_root, methods=["GET"], summary="API Root")
    app.add_api_route("/health-check", health_check, methods=["GET"], summary="Health Check")
    return app


# -- 루트 엔드포인트 --
async def read_root():
    """API의 시작점을 알리고 문서 링크를 제공합니다."""
    return {"message": f"Welcome to {settings.APP_NAME}. Visit /docs for interactive API documentation."}


# -- 헬스 체크 엔드포인트 --
async def health_check(session: AsyncSession = Depends(get_db_session)):
    """
    데이터베이스에 간단한 쿼리를 실행하여 서비스의 정상 작동 여부를 확인합니다.
    """
    try:
        result = await session.execute(text("SELECT 1"))
        result.scalar_one()
    except SQLAlchemyError:
        logger.exception("Database health check failed")
        raise Unclassified("Database connection error")
    return {"status": "ok", "database_connection": "successful"}


app = create_app()


# -- Uvicorn 서버 직접 실행 (개발용) --
# if __name__ == "__main__":
#     import uvicorn
#     uvicorn.run("labtrack.main:app", host="0.0.0.0", port=8000, reload=True, log_level="info")
