# labtrack/domains/usr/schemas.py

"""
'usr' 도메인 (사용자 및 인증)의 API 데이터 전송 객체(DTO)를 정의하는 모듈입니다.
"""

from typing import Optional
from sqlmodel import SQLModel, Field
from pydantic import BaseModel, EmailStr

from . import models as usr_models


# =============================================================================
# 1. 사용자 (User) 스키마
# =============================================================================
class UserBase(SQLModel):
    """사용자 정보의 기본 필드를 정의하는 스키마"""
    username: str = Field(..., max_length=50)
    email: Optional[EmailStr] = Field(None, max_length=100)
    full_name: Optional[str] = Field(None, max_length=100)
    role: usr_models.UserRole = Field(default=usr_models.UserRole.GENERAL_USER, description="사용자 역할")
    is_active: bool = True


class UserCreate(UserBase):
    """사용자 생성을 위한 스키마 (관리 스크립트에서 사용)"""
    password: str = Field(..., min_length=8)


# =============================================================================
# 2. 인증 (Login) 스키마
# =============================================================================
class LoginRequest(BaseModel):
    """로그인 요청 본문"""
    username: str
    password: str


class LoginResponse(BaseModel):
    """로그인 성공 응답. 토큰 자체는 http-only 쿠키로만 전달됩니다."""
    message: str
    username: str
    role: usr_models.UserRole
