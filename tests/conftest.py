# tests/conftest.py

import os
from typing import AsyncGenerator, Callable, Awaitable
from contextlib import asynccontextmanager

# 애플리케이션 설정은 임포트 시점에 로드되므로, labtrack 임포트 전에 테스트용 값을 지정합니다.
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite://")
os.environ.setdefault("SECRET_KEY", "test-secret-key-for-labtrack")
os.environ.setdefault("APP_ENV", "testing")
os.environ.setdefault("AUTO_CREATE_TABLES", "false")

import pytest
import pytest_asyncio
from httpx import AsyncClient, ASGITransport, Response
from fastapi import FastAPI
from sqlalchemy.pool import StaticPool
from sqlmodel.ext.asyncio.session import AsyncSession

from labtrack.main import create_app
from labtrack.core.config import settings
from labtrack.core.database import Database
from labtrack.core.security import get_password_hash

# --- 사용자 모델 임포트 ---
from labtrack.domains.usr import models as usr_models


# --- 테스트용 데이터베이스 설정 ---
# 테스트마다 새로운 인메모리 SQLite 저장소를 사용합니다.
# StaticPool: 하나의 연결을 공유해야 같은 인메모리 DB를 계속 볼 수 있습니다.
TEST_DATABASE_URL = "sqlite+aiosqlite://"

ADMIN_PASSWORD = "sysadmpass123"
USER_PASSWORD = "testpass123"


# --- 데이터베이스 픽스처 ---
@pytest_asyncio.fixture(scope="function")
async def database() -> AsyncGenerator[Database, None]:
    """
    테스트 함수마다 스키마를 새로 만든 저장소 핸들을 제공합니다.
    """
    db = Database(
        TEST_DATABASE_URL,
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    db.connect()
    await db.create_db_and_tables()
    yield db
    await db.drop_tables()
    await db.dispose()


@pytest_asyncio.fixture(scope="function")
async def db_session(database: Database) -> AsyncGenerator[AsyncSession, None]:
    """API 호출 결과를 저장소에서 직접 확인할 때 사용하는 세션입니다."""
    async with database.session() as session:
        yield session


@pytest_asyncio.fixture(scope="function")
async def test_app(database: Database) -> FastAPI:
    """
    테스트 저장소를 주입한 애플리케이션.
    ASGITransport는 lifespan을 실행하지 않으므로 연결/마이그레이션은 database 픽스처가 담당합니다.
    """
    return create_app(database=database)


# --- 역할별 사용자 픽스처 (팩토리 사용으로 간결화) ---
@pytest.fixture(scope="function")
def user_factory(database: Database) -> Callable[..., Awaitable[usr_models.User]]:
    """
    역할과 속성을 지정하여 테스트 사용자를 생성하는 팩토리 함수를 반환합니다.
    **kwargs를 User 모델 생성자에 전달합니다.
    """
    async def _create_user(
        username: str,
        password: str,
        role: usr_models.UserRole,
        is_active: bool = True,
        **kwargs,
    ) -> usr_models.User:
        user_data = {
            "username": username,
            "password_hash": get_password_hash(password),
            "email": f"{username}@example.com",
            "role": role,
            "is_active": is_active,
            **kwargs,
        }
        user = usr_models.User(**user_data)
        async with database.session() as session:
            session.add(user)
            await session.commit()
            await session.refresh(user)
        return user
    return _create_user


@pytest_asyncio.fixture(scope="function")
async def test_admin_user(user_factory: Callable) -> usr_models.User:
    """관리자(ADMIN) 사용자를 생성합니다."""
    return await user_factory("sysadm", ADMIN_PASSWORD, role=usr_models.UserRole.ADMIN, full_name="Admin Test User")


@pytest_asyncio.fixture(scope="function")
async def test_user(user_factory: Callable) -> usr_models.User:
    """일반 사용자(GENERAL_USER)를 생성합니다."""
    return await user_factory("testuser", USER_PASSWORD, role=usr_models.UserRole.GENERAL_USER, full_name="General Test User")


# --- 클라이언트 픽스처 ---
@pytest_asyncio.fixture(scope="function")
async def client(test_app: FastAPI) -> AsyncGenerator[AsyncClient, None]:
    """로그인하지 않은 AsyncClient를 반환합니다."""
    transport = ASGITransport(app=test_app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


def session_cookie_from(response: Response) -> str:
    """
    로그인 응답의 Set-Cookie 헤더에서 세션 토큰 값을 꺼냅니다.
    """
    for header in response.headers.get_list("set-cookie"):
        name, _, rest = header.partition("=")
        if name.strip() == settings.COOKIE_NAME:
            return rest.split(";", 1)[0].strip('"')
    pytest.fail(f"No {settings.COOKIE_NAME} cookie in response: {response.headers}")


@pytest.fixture(scope="function")
def authorized_client_factory(test_app: FastAPI) -> Callable[..., AsyncGenerator[AsyncClient, None]]:
    """
    특정 사용자로 로그인된 AsyncClient를 생성하는 팩토리 함수를 반환합니다.
    로그인은 실제 /login 엔드포인트를 호출하며, 발급된 세션 쿠키를 이후 요청에 포함합니다.
    소유자 확인용 username 쿼리 파라미터도 기본으로 붙입니다.
    """
    @asynccontextmanager
    async def _create_client_context(user: usr_models.User, password: str) -> AsyncGenerator[AsyncClient, None]:
        transport = ASGITransport(app=test_app)
        async with AsyncClient(transport=transport, base_url="http://test") as ac:
            res = await ac.post("/login", json={"username": user.username, "password": password})
            if res.status_code != 200:
                pytest.fail(f"Login failed for {user.username}: {res.text}")

            token = session_cookie_from(res)
            ac.headers["Cookie"] = f"{settings.COOKIE_NAME}={token}"
            ac.params = {"username": user.username}
            yield ac

    return _create_client_context


@pytest_asyncio.fixture(scope="function")
async def admin_client(
    authorized_client_factory: Callable[..., AsyncGenerator[AsyncClient, None]],
    test_admin_user: usr_models.User,
) -> AsyncGenerator[AsyncClient, None]:
    """관리자로 인증된 클라이언트를 반환합니다."""
    async with authorized_client_factory(test_admin_user, ADMIN_PASSWORD) as ac:
        yield ac


@pytest_asyncio.fixture(scope="function")
async def authorized_client(
    authorized_client_factory: Callable[..., AsyncGenerator[AsyncClient, None]],
    test_user: usr_models.User,
) -> AsyncGenerator[AsyncClient, None]:
    """일반 사용자로 인증된 클라이언트를 반환합니다."""
    async with authorized_client_factory(test_user, USER_PASSWORD) as ac:
        yield ac
