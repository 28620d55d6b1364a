# labtrack/domains/lims/schemas.py

"""
'lims' 도메인 (채혈 담당자 및 대기 시료)의 Pydantic 스키마를 정의하는 모듈입니다.

이 스키마들은 API 요청(Request) 및 응답(Response) 데이터의 유효성을 검사하고,
데이터를 직렬화(Serialization) 및 역직렬화(Deserialization)하는 데 사용됩니다.
"""

from typing import List, Optional, Dict, Any
from datetime import datetime
from pydantic import BaseModel, ConfigDict, Field as PydanticField

from .models import SampleStatus


# =============================================================================
# 1. 채혈 담당자 (Phlebotomist) 스키마
# =============================================================================
class PhlebotomistBase(BaseModel):
    phlebotomist_id: str = PydanticField(min_length=1, max_length=50, description="채혈 담당자 외부 ID")
    name: str = PydanticField(min_length=1, max_length=100, description="채혈 담당자 이름")
    phone: Optional[str] = PydanticField(default=None, max_length=30, description="연락처")
    email: Optional[str] = PydanticField(default=None, max_length=100, description="이메일")
    address: Optional[str] = PydanticField(default=None, max_length=255, description="주소")
    notes: Optional[str] = PydanticField(default=None, description="비고")


class PhlebotomistCreate(PhlebotomistBase):
    pass


class PhlebotomistUpdate(BaseModel):  # 업데이트는 모두 Optional
    phlebotomist_id: Optional[str] = PydanticField(None, min_length=1, max_length=50, description="채혈 담당자 외부 ID")
    name: Optional[str] = PydanticField(None, min_length=1, max_length=100, description="채혈 담당자 이름")
    phone: Optional[str] = PydanticField(None, max_length=30, description="연락처")
    email: Optional[str] = PydanticField(None, max_length=100, description="이메일")
    address: Optional[str] = PydanticField(None, max_length=255, description="주소")
    notes: Optional[str] = PydanticField(None, description="비고")


class PhlebotomistResponse(PhlebotomistBase):
    model_config = ConfigDict(from_attributes=True)

    id: int
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


# =============================================================================
# 2. 대기 시료 (DueSample) 스키마
# =============================================================================
class DueSampleBase(BaseModel):
    invoice: str = PydanticField(min_length=1, max_length=50, description="송장 번호")
    patient_name: Optional[str] = PydanticField(default=None, max_length=100, description="환자명")
    patient_phone: Optional[str] = PydanticField(default=None, max_length=30, description="환자 연락처")
    test_name: Optional[str] = PydanticField(default=None, max_length=255, description="검사명")
    amount: Optional[float] = PydanticField(default=None, ge=0, description="미수 금액")
    notes: Optional[str] = PydanticField(default=None, description="비고")


class DueSampleCreate(DueSampleBase):
    """
    시료 생성 요청. status는 받지 않으며 항상 'Due'로 생성됩니다.
    """
    phlebotomist_id: str = PydanticField(min_length=1, max_length=50, description="참조할 채혈 담당자 외부 ID")


class DueSampleUpdate(BaseModel):
    """
    시료 부분 업데이트 요청.
    스냅샷 목록은 이 스키마에 없으므로 클라이언트가 이력을 조작할 수 없습니다.
    """
    model_config = ConfigDict(use_enum_values=True)

    invoice: Optional[str] = PydanticField(None, min_length=1, max_length=50, description="송장 번호")
    status: Optional[SampleStatus] = PydanticField(None, description="처리 상태")
    patient_name: Optional[str] = PydanticField(None, max_length=100, description="환자명")
    patient_phone: Optional[str] = PydanticField(None, max_length=30, description="환자 연락처")
    test_name: Optional[str] = PydanticField(None, max_length=255, description="검사명")
    amount: Optional[float] = PydanticField(None, ge=0, description="미수 금액")
    notes: Optional[str] = PydanticField(None, description="비고")
    phlebotomist_id: Optional[str] = PydanticField(None, min_length=1, max_length=50, description="새로 참조할 채혈 담당자 외부 ID")


class DueSampleResponse(DueSampleBase):
    model_config = ConfigDict(from_attributes=True)

    id: int
    status: str
    phlebotomist_id: str
    phlebotomist_snapshots: List[Dict[str, Any]] = PydanticField(default_factory=list)
    filter_date: Optional[datetime] = None
    day: Optional[int] = None
    month: Optional[int] = None
    year: Optional[int] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
