# labtrack/core/dependencies.py

"""
FastAPI 애플리케이션의 의존성 주입(Dependency Injection)을 모아 두는 모듈입니다.

- 데이터베이스 세션 (get_db_session).
- 접근 제어: 현재 신원, 소유자 확인, 관리자 역할 확인.

라우터는 이 모듈만 임포트하여 `deps.xxx` 형태로 사용합니다.
"""

from typing import AsyncGenerator

from fastapi import Request
from sqlmodel.ext.asyncio.session import AsyncSession

from labtrack.core.database import get_session

# flake8: noqa
from labtrack.core.security import (
    Identity,
    get_current_identity,  # 세션 쿠키 -> 신원
    get_owner_identity,    # 신원 + username 파라미터 일치 확인
    get_admin_identity,    # 신원 + 관리자 역할 확인
)


async def get_db_session(request: Request) -> AsyncGenerator[AsyncSession, None]:
    """
    FastAPI 의존성 주입을 위한 비동기 데이터베이스 세션 제너레이터입니다.
    labtrack.core.database.get_session을 래핑하여 사용합니다.
    """
    async for session in get_session(request):
        yield session
