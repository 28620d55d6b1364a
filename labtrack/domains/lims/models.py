# labtrack/domains/lims/models.py

"""
'lims' 도메인 (PostgreSQL 'lims' 스키마)의 데이터베이스 ORM 모델을 정의하는 모듈입니다.

- lims.phlebotomists : 채혈 담당자 명부
- lims.due_samples   : 처리 대기 시료. 참조한 채혈 담당자의 스냅샷을 JSON 배열로 내장합니다.
  (읽기 성능을 위한 비정규화이며, 이후 담당자 정보가 바뀌거나 삭제되어도 소급 갱신하지 않습니다.)
"""

from typing import Optional, List, Dict, Any
from datetime import datetime, UTC
from enum import Enum

from sqlalchemy import JSON
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.sql import func
from sqlalchemy.types import TIMESTAMP

from sqlmodel import Field, SQLModel, Column

# PostgreSQL에서는 JSONB, 그 외 저장소(SQLite 등)에서는 일반 JSON 컬럼을 사용합니다.
JSONType = JSON().with_variant(JSONB(), "postgresql")


class SampleStatus(str, Enum):
    """시료 처리 상태. 생성 시에는 항상 DUE 입니다."""
    DUE = "Due"
    COLLECTED = "Collected"
    DELIVERED = "Delivered"
    CANCELLED = "Cancelled"


# =============================================================================
# 1. lims.phlebotomists 테이블 모델
# =============================================================================
class PhlebotomistBase(SQLModel):
    phlebotomist_id: str = Field(max_length=50, sa_column_kwargs={"unique": True}, description="채혈 담당자 외부 ID (호출자 지정, 유일)")
    name: str = Field(max_length=100, index=True, description="채혈 담당자 이름")
    phone: Optional[str] = Field(default=None, max_length=30, description="연락처")
    email: Optional[str] = Field(default=None, max_length=100, description="이메일")
    address: Optional[str] = Field(default=None, max_length=255, description="주소")
    notes: Optional[str] = Field(default=None, description="비고")


class Phlebotomist(PhlebotomistBase, table=True):
    __tablename__ = "phlebotomists"
    __table_args__ = {'schema': 'lims'}

    id: Optional[int] = Field(default=None, primary_key=True)
    created_at: Optional[datetime] = Field(
        default_factory=lambda: datetime.now(UTC),
        sa_column=Column(TIMESTAMP(timezone=True), server_default=func.now()),
        description="레코드 생성 일시"
    )
    updated_at: Optional[datetime] = Field(
        default_factory=lambda: datetime.now(UTC),
        sa_column=Column(TIMESTAMP(timezone=True), server_default=func.now()),
        description="레코드 마지막 업데이트 일시"
    )


# =============================================================================
# 2. lims.due_samples 테이블 모델
# =============================================================================
class DueSampleBase(SQLModel):
    invoice: str = Field(max_length=50, sa_column_kwargs={"unique": True}, description="송장 번호 (호출자 지정, 유일)")
    status: str = Field(default=SampleStatus.DUE.value, max_length=20, index=True, description="처리 상태")
    patient_name: Optional[str] = Field(default=None, max_length=100, description="환자명")
    patient_phone: Optional[str] = Field(default=None, max_length=30, description="환자 연락처")
    test_name: Optional[str] = Field(default=None, max_length=255, description="검사명")
    amount: Optional[float] = Field(default=None, description="미수 금액")
    notes: Optional[str] = Field(default=None, description="비고")
    # 참조 해석에 사용한 채혈 담당자 외부 ID (마지막으로 해석된 값)
    phlebotomist_id: str = Field(max_length=50, index=True, description="참조 채혈 담당자 외부 ID")


class DueSample(DueSampleBase, table=True):
    __tablename__ = "due_samples"
    __table_args__ = {'schema': 'lims'}

    id: Optional[int] = Field(default=None, primary_key=True)
    # 쓰기 시점의 채혈 담당자 전체 스냅샷 목록 (중복 없이 추가만 됨)
    phlebotomist_snapshots: List[Dict[str, Any]] = Field(
        default_factory=list,
        sa_column=Column(JSONType, nullable=False),
        description="채혈 담당자 스냅샷 목록"
    )
    filter_date: Optional[datetime] = Field(
        default=None,
        sa_column=Column(TIMESTAMP(timezone=True), index=True),
        description="날짜 필터용 생성 시각 (UTC)"
    )
    day: Optional[int] = Field(default=None, description="생성 일 (고정 시간대 기준)")
    month: Optional[int] = Field(default=None, description="생성 월 (고정 시간대 기준)")
    year: Optional[int] = Field(default=None, description="생성 년 (고정 시간대 기준)")
    created_at: Optional[datetime] = Field(
        default_factory=lambda: datetime.now(UTC),
        sa_column=Column(TIMESTAMP(timezone=True), server_default=func.now()),
        description="레코드 생성 일시"
    )
    updated_at: Optional[datetime] = Field(
        default_factory=lambda: datetime.now(UTC),
        sa_column=Column(TIMESTAMP(timezone=True), server_default=func.now()),
        description="레코드 마지막 업데이트 일시"
    )
