# labtrack/core/database.py

"""
애플리케이션의 데이터베이스 연결 및 세션 관리를 담당하는 모듈입니다.

- 엔진과 세션 공장을 소유하는 `Database` 핸들을 정의합니다.
  모듈 전역 엔진을 두지 않고, 애플리케이션 팩토리가 생성하여 `app.state.db`에 주입합니다.
- 시작 시 1회 실행되는 멱등 마이그레이션(테이블 및 유니크 인덱스 생성)을 제공합니다.
- 요청마다 세션을 여닫는 FastAPI 의존성(get_session)을 제공합니다.
"""

import logging
from typing import Any, AsyncGenerator, Optional
from contextlib import asynccontextmanager

from fastapi import Request
from sqlalchemy import text
from sqlalchemy.ext.asyncio import create_async_engine, AsyncEngine, async_sessionmaker
from sqlmodel import SQLModel
from sqlmodel.ext.asyncio.session import AsyncSession

logger = logging.getLogger(__name__)

# 도메인 테이블이 위치하는 PostgreSQL 스키마 목록
SCHEMAS = ["usr", "lims"]


class Database:
    """
    비동기 엔진과 세션 공장을 감싸는 저장소 핸들입니다.
    connect() / dispose()로 수명 주기를 명시적으로 관리합니다.
    """

    def __init__(self, url: str, *, echo: bool = False, **engine_kwargs: Any):
        self.url = url
        self.echo = echo
        self.engine_kwargs = engine_kwargs
        self.engine: Optional[AsyncEngine] = None
        self.session_factory: Optional[async_sessionmaker] = None

    @property
    def is_sqlite(self) -> bool:
        return self.url.startswith("sqlite")

    def connect(self) -> None:
        """엔진과 세션 공장을 생성합니다. 이미 연결되어 있으면 아무 것도 하지 않습니다."""
        if self.engine is not None:
            return
        engine_kwargs = dict(self.engine_kwargs)
        if self.is_sqlite:
            # SQLite에는 스키마가 없으므로 도메인 스키마를 기본 스키마로 매핑합니다.
            engine_kwargs.setdefault(
                "execution_options", {"schema_translate_map": {name: None for name in SCHEMAS}}
            )
        self.engine = create_async_engine(self.url, echo=self.echo, **engine_kwargs)
        self.session_factory = async_sessionmaker(
            bind=self.engine,
            class_=AsyncSession,
            autoflush=False,
            expire_on_commit=False,
        )
        logger.info("Database engine created (%s)", self.engine.url.get_backend_name())

    async def dispose(self) -> None:
        """커넥션 풀을 종료합니다."""
        if self.engine is None:
            return
        await self.engine.dispose()
        self.engine = None
        self.session_factory = None
        logger.info("Database engine disposed")

    async def create_db_and_tables(self) -> None:
        """
        스키마, 테이블 및 유니크 인덱스를 생성합니다.
        create_all은 이미 존재하는 객체를 건너뛰므로 여러 번 실행해도 안전합니다.
        """
        # 모든 테이블이 SQLModel.metadata에 등록되도록 모델을 임포트합니다.
        from labtrack.domains import models  # noqa: F401

        if self.engine is None:
            raise RuntimeError("Database.connect() must be called before migrating")

        async with self.engine.begin() as conn:
            if not self.is_sqlite:
                for schema_name in SCHEMAS:
                    await conn.execute(text(f"CREATE SCHEMA IF NOT EXISTS {schema_name}"))
            await conn.run_sync(SQLModel.metadata.create_all)
        logger.info("Database schema migration finished")

    async def drop_tables(self) -> None:
        if self.engine is None:
            return
        async with self.engine.begin() as conn:
            await conn.run_sync(SQLModel.metadata.drop_all)

    @asynccontextmanager
    async def session(self) -> AsyncGenerator[AsyncSession, None]:
        """독립적인 비동기 세션을 제공하는 컨텍스트 관리자입니다."""
        if self.session_factory is None:
            raise RuntimeError("Database is not connected")
        async with self.session_factory() as session:
            yield session


# =============================================================================
# 비동기 데이터베이스 세션 의존성 주입
# =============================================================================
async def get_session(request: Request) -> AsyncGenerator[AsyncSession, None]:
    """
    FastAPI 의존성 주입을 위한 비동기 데이터베이스 세션 제너레이터입니다.
    요청마다 새로운 세션을 생성하고, 요청 처리 후 세션을 자동으로 닫습니다.
    """
    database: Database = request.app.state.db
    async with database.session() as session:
        yield session
