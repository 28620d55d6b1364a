# labtrack/utils/__init__.py

"""
LabTrack 애플리케이션의 'utils' 패키지입니다.

특정 비즈니스 도메인에 속하지 않는 범용 유틸리티 함수들을 포함합니다.

주요 서브모듈:
- `clock.py`: 고정 시간대 기준의 현재 시각, 일/월/년 스탬프, 하루 단위 범위 계산.
"""

# flake8: noqa
from . import clock

__title__ = "LabTrack Application Utilities"
__version__ = "0.1.0"
__all__ = ["clock"]
