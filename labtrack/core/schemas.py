# labtrack/core/schemas.py

"""
여러 도메인이 공통으로 사용하는 응답 스키마입니다.

- 목록 응답: {data, total}
- 변경 응답: 저장소 처리 결과(acknowledgement) 형태
"""

from typing import Generic, List, TypeVar
from pydantic import BaseModel

T = TypeVar("T")


class ListResponse(BaseModel, Generic[T]):
    data: List[T]
    total: int


class InsertResult(BaseModel):
    acknowledged: bool = True
    inserted_id: int


class UpdateResult(BaseModel):
    acknowledged: bool = True
    matched_count: int = 0
    modified_count: int = 0


class DeleteResult(BaseModel):
    acknowledged: bool = True
    deleted_count: int = 0


class MessageResponse(BaseModel):
    message: str
