# labtrack/core/query_builder.py

"""
목록 조회용 쿼리 빌더 모듈입니다.

사용자가 넘긴 필터 파라미터(페이지, 검색어, 상태, 날짜 등)를
정규화된 SELECT 문, 같은 조건의 COUNT 문, 그리고 페이지 정보로 변환합니다.

- 값이 없는 필터는 조건에서 제외됩니다 (오류가 아님).
- 검색은 대소문자를 무시하는 부분 문자열 일치입니다 (ILIKE '%term%').
- 날짜 필터는 하루를 [당일 시작, 익일 시작) 범위로 바꿔 적용합니다.
- 정렬은 내부 ID 내림차순(최신순)이 기본입니다.
"""

from dataclasses import dataclass
from datetime import date
from typing import Any, Dict, Optional, Tuple, Type

from sqlalchemy import func, select as sa_select
from sqlalchemy.sql import Select
from sqlmodel import SQLModel, select

from labtrack.core.config import settings
from labtrack.utils.clock import day_range

# 저장소 OFFSET 은 부호 있는 64비트 정수입니다.
MAX_OFFSET = 2 ** 63 - 1


@dataclass(frozen=True)
class PageSpec:
    """오프셋 기반 페이지 정보"""
    page: int
    limit: int

    @property
    def skip(self) -> int:
        return self.page * self.limit


def _as_int(value: Any, default: int) -> int:
    if value is None or isinstance(value, bool):
        return default
    try:
        return int(value)
    except (TypeError, ValueError):
        return default


def parse_page(
    page: Any = None,
    limit: Any = None,
    *,
    default_limit: Optional[int] = None,
    max_limit: Optional[int] = None,
) -> PageSpec:
    """
    page/limit 입력을 PageSpec으로 정규화합니다.
    잘못된 숫자 입력은 거부하지 않고 기본값으로 대체하거나 범위 안으로 보정합니다.
    """
    default_limit = default_limit or settings.DEFAULT_PAGE_SIZE
    max_limit = max_limit or settings.MAX_PAGE_SIZE

    size = _as_int(limit, default_limit)
    if size < 1:
        size = default_limit
    size = min(size, max_limit)

    # 아주 큰 페이지 번호는 빈 페이지가 되도록 OFFSET 범위 안에서 멈춥니다.
    page_no = min(max(_as_int(page, 0), 0), MAX_OFFSET // size)
    return PageSpec(page=page_no, limit=size)


def build_query(
    model: Type[SQLModel],
    *,
    filters: Optional[Dict[str, Any]] = None,
    search: Optional[str] = None,
    search_field: Optional[str] = None,
    day: Optional[date] = None,
    date_field: Optional[str] = None,
    page_spec: Optional[PageSpec] = None,
    order_by_field: str = "id",
) -> Tuple[Select, Select]:
    """
    (목록 SELECT 문, COUNT 문)을 만듭니다.
    page_spec이 없으면 페이징 없이 전체를 조회합니다.
    """
    conditions = []

    # 1. 정확히 일치해야 하는 속성 필터
    for attribute, value in (filters or {}).items():
        if value is None:
            continue
        conditions.append(getattr(model, attribute) == value)

    # 2. 부분 문자열 검색 (와일드카드 문자는 이스케이프)
    term = search.strip() if search else ""
    if term and search_field:
        conditions.append(getattr(model, search_field).icontains(term, autoescape=True))

    # 3. 하루 단위 날짜 범위 (정확히 같은 시각 비교는 하지 않음)
    if day is not None and date_field:
        start, end = day_range(day)
        date_column = getattr(model, date_field)
        conditions.append(date_column >= start)
        conditions.append(date_column < end)

    statement = select(model)
    count_statement = sa_select(func.count()).select_from(model)
    if conditions:
        statement = statement.where(*conditions)
        count_statement = count_statement.where(*conditions)

    # 4. 정렬 및 페이징. 정수 ID는 삽입 순서대로 증가하므로 동시 삽입에도 순서가 안정적입니다.
    statement = statement.order_by(getattr(model, order_by_field).desc())
    if page_spec is not None:
        statement = statement.offset(page_spec.skip).limit(page_spec.limit)

    return statement, count_statement
