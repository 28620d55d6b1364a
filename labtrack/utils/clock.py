# labtrack/utils/clock.py

"""
시각 관련 유틸리티입니다.

저장되는 모든 타임스탬프는 UTC이며, 일/월/년 같은 편의 필드와
하루 단위 날짜 필터는 설정의 고정 시간대(TIMEZONE)를 기준으로 계산합니다.
"""

from datetime import date, datetime, time, timedelta, timezone, tzinfo
from functools import lru_cache
from typing import Dict, Optional, Tuple
from zoneinfo import ZoneInfo

from labtrack.core.config import settings


@lru_cache(maxsize=8)
def _zone(name: str) -> tzinfo:
    return ZoneInfo(name)


def get_zone(name: Optional[str] = None) -> tzinfo:
    """이름이 없으면 호출 시점의 설정 시간대를 사용합니다."""
    return _zone(name or settings.TIMEZONE)


def now_utc() -> datetime:
    return datetime.now(timezone.utc)


def calendar_stamp(moment: datetime, zone: Optional[tzinfo] = None) -> Dict[str, int]:
    """주어진 시각을 고정 시간대로 변환하여 day/month/year 필드를 만듭니다."""
    local = moment.astimezone(zone or get_zone())
    return {"day": local.day, "month": local.month, "year": local.year}


def day_range(day: date, zone: Optional[tzinfo] = None) -> Tuple[datetime, datetime]:
    """
    하루를 고정 시간대 기준 반개구간 [당일 00:00, 익일 00:00)으로 변환한 뒤 UTC로 반환합니다.
    """
    zone = zone or get_zone()
    start = datetime.combine(day, time.min, tzinfo=zone)
    end = datetime.combine(day + timedelta(days=1), time.min, tzinfo=zone)
    return start.astimezone(timezone.utc), end.astimezone(timezone.utc)
