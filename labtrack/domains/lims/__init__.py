# labtrack/domains/lims/__init__.py

"""
'lims' 도메인 패키지입니다 (PostgreSQL 'lims' 스키마).

채혈 담당자(Phlebotomist) 명부와 처리 대기 시료(DueSample)를 관리합니다.
시료는 생성/수정 시점의 채혈 담당자 스냅샷을 내장하며,
참조한 담당자가 없으면 쓰기를 거부합니다.

주요 서브모듈:
- `models.py`: lims.phlebotomists, lims.due_samples 테이블과 SampleStatus.
- `schemas.py`: 요청 및 응답 스키마.
- `crud.py`: 참조 해석, 스냅샷 기록, 목록 조회.
- `routers.py`: /overview, /get-all-*, /add-*, /update-*, /delete-* 엔드포인트.
"""

__title__ = "LabTrack Sample Tracking Domain"
__description__ = "Manages phlebotomists and due samples."
__version__ = "0.1.0"
__all__ = []
