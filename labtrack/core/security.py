# labtrack/core/security.py

"""
애플리케이션의 보안 관련 유틸리티 함수 및 의존성 주입을 정의하는 모듈입니다.

- 비밀번호 해싱 및 검증 (bcrypt, 솔트 포함 해시 비교).
- 세션 토큰(JWT) 생성 및 검증.
- http-only 세션 쿠키 발급/삭제.
- 요청 단위 접근 제어(Access Guard):
    Anonymous -> (쿠키 존재?) -> Verified{username, role} | Rejected
  토큰 검증 단계에서는 저장소에 접근하지 않습니다.
"""

import logging
from datetime import datetime, timedelta, timezone
from typing import Optional

from jose import jwt, JWTError
from passlib.context import CryptContext
from fastapi import Depends, Query, Response
from fastapi.security import APIKeyCookie
from pydantic import BaseModel

from labtrack.core.config import settings
from labtrack.core.exceptions import Forbidden, Unauthorized
from labtrack.domains.usr.models import UserRole

logger = logging.getLogger(__name__)


# --- 비밀번호 해싱 설정 ---
pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """일반 텍스트 비밀번호와 해싱된 비밀번호를 비교합니다."""
    try:
        return pwd_context.verify(plain_password, hashed_password)
    except (ValueError, TypeError):
        # 해시 형식이 아닌 값(예: 이전 평문 저장 데이터)은 일치하지 않는 것으로 처리
        logger.warning("Stored password hash is not a recognised hash format")
        return False


def get_password_hash(password: str) -> str:
    """주어진 비밀번호를 해싱합니다."""
    return pwd_context.hash(password)


# --- 세션 쿠키 스키마 ---
# auto_error=False: 쿠키가 없을 때 직접 Unauthorized를 발생시켜 응답 형식을 통일합니다.
cookie_scheme = APIKeyCookie(name=settings.COOKIE_NAME, auto_error=False)


class Identity(BaseModel):
    """검증된 토큰에서 추출한 요청 단위 신원 정보 (저장하지 않음)"""
    username: str
    role: UserRole

    @property
    def is_admin(self) -> bool:
        return self.role == UserRole.ADMIN


# --- JWT 토큰 생성 및 검증 ---
def create_access_token(data: dict, expires_delta: Optional[timedelta] = None) -> str:
    """
    세션 토큰을 생성합니다. 기본 만료 시간은 ACCESS_TOKEN_EXPIRE_MINUTES (하루) 입니다.
    """
    to_encode = data.copy()
    expire = datetime.now(timezone.utc) + (expires_delta or timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES))
    to_encode.update({"exp": expire})
    return jwt.encode(to_encode, settings.SECRET_KEY.get_secret_value(), algorithm=settings.ALGORITHM)


def create_session_token(username: str, role: UserRole) -> str:
    return create_access_token({"sub": username, "role": int(role)})


def decode_session_token(token: str) -> Identity:
    """
    토큰을 검증하고 Identity를 반환합니다.
    서명 불일치, 만료, 필수 클레임 누락은 모두 Unauthorized 입니다.
    """
    try:
        payload = jwt.decode(token, settings.SECRET_KEY.get_secret_value(), algorithms=[settings.ALGORITHM])
    except JWTError as e:
        logger.debug("Session token rejected: %s", e)
        raise Unauthorized()

    username = payload.get("sub")
    role = payload.get("role")
    if not username or role is None:
        raise Unauthorized()
    try:
        return Identity(username=username, role=UserRole(role))
    except ValueError:
        raise Unauthorized()


# --- 세션 쿠키 ---
def _cookie_attributes() -> dict:
    # 운영 환경은 크로스 사이트 요청을 위해 secure + SameSite=None, 그 외는 strict
    if settings.is_production:
        return {"secure": True, "samesite": "none"}
    return {"secure": False, "samesite": "strict"}


def set_session_cookie(response: Response, token: str) -> None:
    response.set_cookie(
        key=settings.COOKIE_NAME,
        value=token,
        max_age=settings.ACCESS_TOKEN_EXPIRE_MINUTES * 60,
        httponly=True,
        **_cookie_attributes(),
    )


def clear_session_cookie(response: Response) -> None:
    response.delete_cookie(
        key=settings.COOKIE_NAME,
        httponly=True,
        **_cookie_attributes(),
    )


# =============================================================================
# 접근 제어 의존성 (Access Guard)
# =============================================================================
async def get_current_identity(token: Optional[str] = Depends(cookie_scheme)) -> Identity:
    """
    세션 쿠키의 토큰을 검증하여 현재 신원을 반환합니다.
    쿠키가 없으면 저장소에 접근하기 전에 Unauthorized를 발생시킵니다.
    """
    if not token:
        raise Unauthorized()
    return decode_session_token(token)


async def get_owner_identity(
    username: Optional[str] = Query(None, description="요청자 신원 (토큰의 사용자명과 같아야 함)"),
    identity: Identity = Depends(get_current_identity),
) -> Identity:
    """
    소유자 확인: 호출자가 넘긴 username이 토큰의 신원과 같아야 합니다.
    다른 계정의 토큰을 재사용하는 요청을 막습니다.
    """
    if username != identity.username:
        logger.info("Identity mismatch: token=%s, requested=%s", identity.username, username)
        raise Forbidden()
    return identity


async def get_admin_identity(identity: Identity = Depends(get_current_identity)) -> Identity:
    """역할 확인: 관리자(ADMIN) 역할이 필요합니다."""
    if not identity.is_admin:
        logger.info("Role check failed for %s (role=%s)", identity.username, identity.role.name)
        raise Forbidden("Not enough permissions. Admin role required.")
    return identity
