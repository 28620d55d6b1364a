# labtrack/domains/usr/routers.py

"""
'usr' 도메인 (인증)과 관련된 API 엔드포인트를 정의하는 모듈입니다.

- POST /login  : 자격 증명이 일치하면 세션 쿠키 발급
- POST /logout : 세션 쿠키 삭제 (항상 성공, 저장소 접근 없음)
"""

import logging

from fastapi import APIRouter, Depends, Response, status
from sqlmodel.ext.asyncio.session import AsyncSession

from labtrack.core import dependencies as deps
from labtrack.core import security
from labtrack.core.exceptions import InvalidCredentials
from labtrack.core.schemas import MessageResponse

from . import crud as usr_crud
from . import schemas as usr_schemas

logger = logging.getLogger(__name__)

router = APIRouter(
    tags=["Authentication (인증)"],
)


@router.post("/login", response_model=usr_schemas.LoginResponse, status_code=status.HTTP_200_OK, summary="로그인 (세션 쿠키 발급)")
async def login(
    credentials: usr_schemas.LoginRequest,
    response: Response,
    db: AsyncSession = Depends(deps.get_db_session),
):
    user = await usr_crud.user.authenticate(db, username=credentials.username, password=credentials.password)
    if not user:
        raise InvalidCredentials()

    token = security.create_session_token(user.username, user.role)
    security.set_session_cookie(response, token)
    logger.info("User %s logged in", user.username)
    return {"message": "Login successful", "username": user.username, "role": user.role}


@router.post("/logout", response_model=MessageResponse, summary="로그아웃 (세션 쿠키 삭제)")
async def logout(response: Response):
    security.clear_session_cookie(response)
    return {"message": "Logout successful"}
