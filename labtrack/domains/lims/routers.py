# labtrack/domains/lims/routers.py

"""
'lims' 도메인 (채혈 담당자 및 대기 시료) 관련 API 엔드포인트를 정의하는 모듈입니다.

- 조회 엔드포인트와 시료 생성/수정은 세션 + 소유자 확인(username 쿼리 파라미터)이 필요합니다.
- 채혈 담당자 변경과 시료 삭제는 세션 + 관리자 역할이 필요합니다.
"""

from typing import Optional
from datetime import date
from sqlmodel.ext.asyncio.session import AsyncSession
from fastapi import APIRouter, Depends, status, Query

# 중앙 의존성 관리 모듈 임포트
from labtrack.core import dependencies as deps
from labtrack.core.query_builder import parse_page
from labtrack.core.schemas import ListResponse, InsertResult, UpdateResult, DeleteResult

# 도메인 관련 모듈 임포트
from . import crud as lims_crud
from . import schemas as lims_schemas
from .models import SampleStatus

router = APIRouter(
    tags=["Laboratory Sample Tracking (시료 추적)"],  # Swagger UI에 표시될 태그
)


# =============================================================================
# 1. 대시보드 (Overview)
# =============================================================================
@router.get("/overview", response_model=ListResponse[lims_schemas.DueSampleResponse], summary="전체 대기 시료 조회 (페이징 없음)")
async def read_overview(
    db: AsyncSession = Depends(deps.get_db_session),
    identity: deps.Identity = Depends(deps.get_owner_identity),
):
    """모든 대기 시료를 최신순으로 조회합니다."""
    items, total = await lims_crud.due_sample.get_page(db)
    return {"data": items, "total": total}


# =============================================================================
# 2. 채혈 담당자 (Phlebotomist) 라우터
# =============================================================================
@router.get("/get-all-phlebotomist", response_model=ListResponse[lims_schemas.PhlebotomistResponse], summary="채혈 담당자 목록 조회")
async def read_phlebotomists(
    page: Optional[str] = Query(None, description="0부터 시작하는 페이지 번호"),
    limit: Optional[str] = Query(None, description="페이지 크기"),
    search: Optional[str] = Query(None, description="이름 부분 검색 (대소문자 무시)"),
    db: AsyncSession = Depends(deps.get_db_session),
    identity: deps.Identity = Depends(deps.get_owner_identity),
):
    """
    채혈 담당자 목록을 페이지 단위로 조회합니다.
    page/limit 값이 잘못되면 기본값으로 보정합니다.
    """
    items, total = await lims_crud.phlebotomist.get_page(
        db, search=search, page_spec=parse_page(page, limit)
    )
    return {"data": items, "total": total}


@router.post("/add-phlebotomist", response_model=InsertResult, status_code=status.HTTP_201_CREATED, summary="새 채혈 담당자 등록")
async def create_phlebotomist(
    phlebotomist_in: lims_schemas.PhlebotomistCreate,
    db: AsyncSession = Depends(deps.get_db_session),
    admin: deps.Identity = Depends(deps.get_admin_identity),
):
    """새로운 채혈 담당자를 등록합니다. 관리자 권한이 필요합니다."""
    db_obj = await lims_crud.phlebotomist.create(db=db, obj_in=phlebotomist_in)
    return InsertResult(inserted_id=db_obj.id)


@router.patch("/update-phlebotomist", response_model=UpdateResult, summary="채혈 담당자 부분 업데이트")
async def update_phlebotomist(
    phlebotomist_in: lims_schemas.PhlebotomistUpdate,
    id: int = Query(..., description="채혈 담당자 내부 ID"),
    db: AsyncSession = Depends(deps.get_db_session),
    admin: deps.Identity = Depends(deps.get_admin_identity),
):
    """
    내부 ID로 채혈 담당자 정보를 업데이트합니다. 관리자 권한이 필요합니다.
    이미 생성된 시료의 스냅샷에는 반영되지 않습니다.
    """
    return await lims_crud.phlebotomist.update_by_id(db, id=id, obj_in=phlebotomist_in)


@router.delete("/delete-phlebotomist", response_model=DeleteResult, summary="채혈 담당자 삭제")
async def delete_phlebotomist(
    id: int = Query(..., description="채혈 담당자 내부 ID"),
    db: AsyncSession = Depends(deps.get_db_session),
    admin: deps.Identity = Depends(deps.get_admin_identity),
):
    """내부 ID로 채혈 담당자를 삭제합니다. 이를 참조하는 시료는 변경되지 않습니다."""
    deleted = await lims_crud.phlebotomist.delete(db, id=id)
    return DeleteResult(deleted_count=1 if deleted else 0)


# =============================================================================
# 3. 대기 시료 (DueSample) 라우터
# =============================================================================
@router.get("/get-all-sample", response_model=ListResponse[lims_schemas.DueSampleResponse], summary="대기 시료 목록 조회")
async def read_samples(
    page: Optional[str] = Query(None, description="0부터 시작하는 페이지 번호"),
    limit: Optional[str] = Query(None, description="페이지 크기"),
    search: Optional[str] = Query(None, description="송장 번호 부분 검색 (대소문자 무시)"),
    sample_status: Optional[SampleStatus] = Query(None, alias="status", description="처리 상태"),
    invoice: Optional[str] = Query(None, description="송장 번호 (정확히 일치)"),
    day: Optional[date] = Query(None, alias="date", description="생성일 (YYYY-MM-DD, 고정 시간대 기준)"),
    db: AsyncSession = Depends(deps.get_db_session),
    identity: deps.Identity = Depends(deps.get_owner_identity),
):
    """
    대기 시료 목록을 페이지 단위로 조회합니다.
    date 필터는 해당 날짜 하루 전체 범위에 속하는 시료를 반환합니다.
    """
    filters = {
        "status": sample_status.value if sample_status else None,
        "invoice": invoice,
    }
    items, total = await lims_crud.due_sample.get_page(
        db, filters=filters, search=search, day=day, page_spec=parse_page(page, limit)
    )
    return {"data": items, "total": total}


@router.post("/add-sample", response_model=InsertResult, status_code=status.HTTP_201_CREATED, summary="새 대기 시료 등록")
async def create_sample(
    sample_in: lims_schemas.DueSampleCreate,
    db: AsyncSession = Depends(deps.get_db_session),
    identity: deps.Identity = Depends(deps.get_owner_identity),
):
    """
    새 대기 시료를 등록합니다.
    참조한 채혈 담당자가 없으면 404를 반환하며 아무 것도 저장하지 않습니다.
    """
    db_obj = await lims_crud.due_sample.create(db=db, obj_in=sample_in)
    return InsertResult(inserted_id=db_obj.id)


@router.patch("/update-sample", response_model=UpdateResult, summary="대기 시료 부분 업데이트")
async def update_sample(
    sample_in: lims_schemas.DueSampleUpdate,
    id: int = Query(..., description="대기 시료 내부 ID"),
    db: AsyncSession = Depends(deps.get_db_session),
    identity: deps.Identity = Depends(deps.get_owner_identity),
):
    return await lims_crud.due_sample.update_by_id(db, id=id, obj_in=sample_in)


@router.delete("/delete-sample", response_model=DeleteResult, summary="대기 시료 삭제")
async def delete_sample(
    id: int = Query(..., description="대기 시료 내부 ID"),
    db: AsyncSession = Depends(deps.get_db_session),
    admin: deps.Identity = Depends(deps.get_admin_identity),
):
    deleted = await lims_crud.due_sample.delete(db, id=id)
    return DeleteResult(deleted_count=1 if deleted else 0)
