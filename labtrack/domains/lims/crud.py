# labtrack/domains/lims/crud.py

"""
'lims' 도메인의 CRUD 로직을 담당하는 모듈입니다.

대기 시료의 쓰기 작업은 참조 무결성 검사를 거칩니다.
- 생성/수정 시 채혈 담당자 외부 ID를 해석하고, 없으면 아무 것도 저장하지 않고 거부합니다.
- 해석된 담당자의 전체 스냅샷을 시료에 내장합니다 (중복 없이 추가).
"""

import logging
from typing import Any, Dict, List, Optional, Tuple

from sqlmodel.ext.asyncio.session import AsyncSession

from labtrack.core.crud_base import CRUDBase
from labtrack.core.exceptions import ReferenceNotFound
from labtrack.core.schemas import UpdateResult
from labtrack.utils.clock import calendar_stamp, now_utc

from . import models as lims_models
from . import schemas as lims_schemas

logger = logging.getLogger(__name__)


def append_if_absent(items: List[Dict[str, Any]], item: Dict[str, Any]) -> List[Dict[str, Any]]:
    """
    item과 값이 같은(deep equality) 항목이 없을 때만 뒤에 추가한 새 리스트를 반환합니다.
    원본 리스트는 변경하지 않습니다.
    """
    if item in items:
        return list(items)
    return [*items, item]


# =============================================================================
# 1. 채혈 담당자 (Phlebotomist) CRUD
# =============================================================================
class CRUDPhlebotomist(CRUDBase[lims_models.Phlebotomist, lims_schemas.PhlebotomistCreate, lims_schemas.PhlebotomistUpdate]):
    search_field = "name"
    duplicate_message = "phlebotomist id must be unique"
    required_fields = ("phlebotomist_id", "name")

    def __init__(self):
        super().__init__(model=lims_models.Phlebotomist)

    async def get_by_phlebotomist_id(self, db: AsyncSession, *, phlebotomist_id: str) -> Optional[lims_models.Phlebotomist]:
        """외부 ID로 채혈 담당자를 조회합니다 (정확히 일치)."""
        return await self.get_by_attribute(db, attribute="phlebotomist_id", value=phlebotomist_id)

    async def create(self, db: AsyncSession, *, obj_in: lims_schemas.PhlebotomistCreate) -> lims_models.Phlebotomist:
        now = now_utc()
        return await super().create(db, obj_in={**obj_in.model_dump(), "created_at": now, "updated_at": now})


phlebotomist = CRUDPhlebotomist()


# =============================================================================
# 2. 대기 시료 (DueSample) CRUD
# =============================================================================
class CRUDDueSample(CRUDBase[lims_models.DueSample, lims_schemas.DueSampleCreate, lims_schemas.DueSampleUpdate]):
    search_field = "invoice"
    date_field = "filter_date"
    duplicate_message = "invoice must be unique"
    required_fields = ("invoice", "status", "phlebotomist_id")

    def __init__(self):
        super().__init__(model=lims_models.DueSample)

    async def resolve_phlebotomist(self, db: AsyncSession, *, phlebotomist_id: str) -> lims_models.Phlebotomist:
        """참조된 채혈 담당자를 찾습니다. 없으면 ReferenceNotFound."""
        found = await phlebotomist.get_by_phlebotomist_id(db, phlebotomist_id=phlebotomist_id)
        if found is None:
            logger.info("Phlebotomist reference %r did not resolve", phlebotomist_id)
            raise ReferenceNotFound("Phlebotomist not found")
        return found

    @staticmethod
    def snapshot(record: lims_models.Phlebotomist) -> Dict[str, Any]:
        """채혈 담당자 레코드 전체를 JSON 직렬화 가능한 dict로 복사합니다."""
        return lims_schemas.PhlebotomistResponse.model_validate(record).model_dump(mode="json")

    def prepare_create(self, obj_in: lims_schemas.DueSampleCreate, snapshot: Dict[str, Any]) -> Dict[str, Any]:
        """
        생성할 레코드 값을 만듭니다.
        status는 항상 Due, 스냅샷 목록은 해석된 담당자 하나로 시작합니다.
        """
        now = now_utc()
        return {
            **obj_in.model_dump(),
            "status": lims_models.SampleStatus.DUE.value,
            "phlebotomist_snapshots": [snapshot],
            "filter_date": now,
            "created_at": now,
            "updated_at": now,
            **calendar_stamp(now),
        }

    async def create(self, db: AsyncSession, *, obj_in: lims_schemas.DueSampleCreate) -> lims_models.DueSample:
        """참조를 먼저 해석한 뒤 한 번의 INSERT로 저장합니다."""
        ref = await self.resolve_phlebotomist(db, phlebotomist_id=obj_in.phlebotomist_id)
        return await super().create(db, obj_in=self.prepare_create(obj_in, self.snapshot(ref)))

    async def prepare_update(
        self, db: AsyncSession, obj_in: lims_schemas.DueSampleUpdate
    ) -> Tuple[Dict[str, Any], Optional[Dict[str, Any]]]:
        """
        (병합할 필드, 추가할 스냅샷)을 반환합니다.
        새 phlebotomist_id가 있으면 해석하며, 실패하면 업데이트 전체가 거부됩니다.
        """
        update_data = self.update_data(obj_in)
        new_ref = update_data.get("phlebotomist_id")
        if new_ref is None:
            return update_data, None
        ref = await self.resolve_phlebotomist(db, phlebotomist_id=new_ref)
        return update_data, self.snapshot(ref)

    async def update_by_id(self, db: AsyncSession, *, id: Any, obj_in: lims_schemas.DueSampleUpdate) -> UpdateResult:
        update_data, snapshot = await self.prepare_update(db, obj_in)

        db_obj = await self.get(db, id)
        if db_obj is None:
            return UpdateResult(matched_count=0, modified_count=0)

        changes = self.changed_fields(db_obj, update_data)
        if snapshot is not None:
            current = db_obj.phlebotomist_snapshots or []
            snapshots = append_if_absent(current, snapshot)
            if len(snapshots) != len(current):
                # 리스트를 새로 할당해야 JSON 컬럼 변경이 감지됩니다.
                changes["phlebotomist_snapshots"] = snapshots

        if not changes:
            return UpdateResult(matched_count=1, modified_count=0)

        await self.update(db, db_obj=db_obj, obj_in=changes)
        return UpdateResult(matched_count=1, modified_count=1)


due_sample = CRUDDueSample()
