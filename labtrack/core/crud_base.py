# labtrack/core/crud_base.py

"""
공통 CRUD(Create, Read, Update, Delete) 작업을 위한 기본 클래스 모듈입니다.
모든 메서드는 비동기(async) 환경에 맞게 작성되었습니다.

유니크 제약 위반은 쓰기 이후 저장소가 돌려주는 IntegrityError로 감지하여
DuplicateKey로 변환합니다 (사전 조회로 막지 않음).
"""

import logging
from typing import Generic, List, Optional, Type, TypeVar, Any, Dict, Tuple, Union
from datetime import date

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlmodel import SQLModel, select
from sqlmodel.ext.asyncio.session import AsyncSession
from pydantic import BaseModel

from labtrack.core.exceptions import DuplicateKey, Unclassified
from labtrack.core.query_builder import PageSpec, build_query
from labtrack.core.schemas import UpdateResult
from labtrack.utils.clock import now_utc

logger = logging.getLogger(__name__)

ModelType = TypeVar("ModelType", bound=SQLModel)
CreateSchemaType = TypeVar("CreateSchemaType", bound=BaseModel)
UpdateSchemaType = TypeVar("UpdateSchemaType", bound=BaseModel)


class CRUDBase(Generic[ModelType, CreateSchemaType, UpdateSchemaType]):
    """
    모든 CRUD 작업에 대한 기본 클래스를 정의합니다.

    하위 클래스는 다음 속성으로 동작을 조정합니다.
    - search_field: 검색어(search)를 적용할 문자열 컬럼
    - date_field: 하루 단위 날짜 필터를 적용할 타임스탬프 컬럼
    - duplicate_message: 유니크 제약 위반 시 응답 메시지
    - required_fields: 부분 업데이트에서 null로 덮어쓸 수 없는 필드 (null이면 무시)
    """
    search_field: Optional[str] = None
    date_field: Optional[str] = None
    duplicate_message: str = "Duplicate key"
    required_fields: Tuple[str, ...] = ()

    def __init__(self, model: Type[ModelType]):
        self.model = model

    async def get(self, db: AsyncSession, id: Any) -> Optional[ModelType]:
        """ID를 기준으로 단일 레코드를 조회합니다."""
        return await db.get(self.model, id)

    async def get_by_attribute(
        self, db: AsyncSession, *, attribute: str, value: Any
    ) -> Optional[ModelType]:
        statement = select(self.model).where(getattr(self.model, attribute) == value)
        response = await db.execute(statement)
        return response.scalars().first()

    async def get_page(
        self,
        db: AsyncSession,
        *,
        filters: Optional[Dict[str, Any]] = None,  # 정확히 일치하는 속성 필터: {"attribute_name": "value"}
        search: Optional[str] = None,              # search_field에 대한 부분 문자열 검색
        day: Optional[date] = None,                # date_field에 대한 하루 단위 필터
        page_spec: Optional[PageSpec] = None,      # None이면 전체 조회
    ) -> Tuple[List[ModelType], int]:
        """
        필터, 검색, 날짜 범위, 페이징을 적용한 목록과 전체 건수를 함께 반환합니다.
        """
        statement, count_statement = build_query(
            self.model,
            filters=filters,
            search=search,
            search_field=self.search_field,
            day=day,
            date_field=self.date_field,
            page_spec=page_spec,
        )
        result = await db.execute(statement)
        items = result.scalars().all()
        total = (await db.execute(count_statement)).scalar_one()
        return list(items), total

    async def _commit(self, db: AsyncSession, db_obj: Optional[ModelType] = None) -> None:
        """
        커밋하고, 저장소 오류를 도메인 오류로 변환합니다.
        실패 시 롤백하므로 부분적으로 반영된 상태는 남지 않습니다.
        """
        try:
            await db.commit()
        except IntegrityError as e:
            await db.rollback()
            logger.info("Unique constraint violated on %s: %s", self.model.__name__, e.orig)
            raise DuplicateKey(self.duplicate_message)
        except SQLAlchemyError:
            await db.rollback()
            logger.exception("Store write failed on %s", self.model.__name__)
            raise Unclassified()
        if db_obj is not None:
            await db.refresh(db_obj)

    async def create(self, db: AsyncSession, *, obj_in: Union[CreateSchemaType, Dict[str, Any]]) -> ModelType:
        """새로운 레코드를 생성합니다."""
        obj_in_data = obj_in if isinstance(obj_in, dict) else obj_in.model_dump()
        db_obj = self.model.model_validate(obj_in_data)
        db.add(db_obj)
        await self._commit(db, db_obj)
        return db_obj

    def update_data(self, obj_in: Union[UpdateSchemaType, Dict[str, Any]]) -> Dict[str, Any]:
        """요청에 실제로 포함된 필드만 추출합니다. 필수 필드의 null 값은 버립니다."""
        data = dict(obj_in) if isinstance(obj_in, dict) else obj_in.model_dump(exclude_unset=True)
        for field in self.required_fields:
            if field in data and data[field] is None:
                data.pop(field)
        return data

    @staticmethod
    def changed_fields(db_obj: ModelType, update_data: Dict[str, Any]) -> Dict[str, Any]:
        """현재 값과 다른 필드만 골라냅니다."""
        return {key: value for key, value in update_data.items() if getattr(db_obj, key) != value}

    async def update(
        self, db: AsyncSession, *, db_obj: ModelType, obj_in: Union[UpdateSchemaType, Dict[str, Any]]
    ) -> ModelType:
        """기존 레코드를 얕은 병합 방식으로 업데이트합니다."""
        if isinstance(obj_in, dict):
            update_data = obj_in
        else:
            update_data = obj_in.model_dump(exclude_unset=True)
        for key, value in update_data.items():
            setattr(db_obj, key, value)
        if hasattr(db_obj, "updated_at"):
            db_obj.updated_at = now_utc()

        db.add(db_obj)
        await self._commit(db, db_obj)
        return db_obj

    async def update_by_id(
        self, db: AsyncSession, *, id: Any, obj_in: Union[UpdateSchemaType, Dict[str, Any]]
    ) -> UpdateResult:
        """
        ID로 레코드를 찾아 업데이트하고 처리 결과를 반환합니다.
        대상이 없으면 matched_count=0으로 응답합니다.
        """
        db_obj = await self.get(db, id)
        if db_obj is None:
            return UpdateResult(matched_count=0, modified_count=0)

        changes = self.changed_fields(db_obj, self.update_data(obj_in))
        if not changes:
            return UpdateResult(matched_count=1, modified_count=0)

        await self.update(db, db_obj=db_obj, obj_in=changes)
        return UpdateResult(matched_count=1, modified_count=1)

    async def delete(self, db: AsyncSession, *, id: Any) -> Optional[ModelType]:
        """ID를 기준으로 레코드를 삭제합니다. 다른 레코드로 연쇄 삭제하지 않습니다."""
        db_obj = await db.get(self.model, id)
        if db_obj:
            await db.delete(db_obj)
            await self._commit(db)
        return db_obj
