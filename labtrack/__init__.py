# labtrack/__init__.py

"""
LabTrack FastAPI 애플리케이션의 메인 패키지입니다.

채혈 담당자(phlebotomist) 명부와 처리 대기 중인 시료(due sample) 큐를 관리하는
REST 백엔드이며, 다음 서브패키지로 구성됩니다.

- core: 설정, 데이터베이스 수명 주기, 보안(세션 쿠키/JWT), 공통 CRUD 및 쿼리 빌더
- domains: 비즈니스 도메인별 모델/스키마/CRUD/라우터 (usr, lims)
"""

APP_NAME = "LabTrack API"
APP_VERSION = "0.1.0"

__version__ = APP_VERSION
__title__ = APP_NAME
__description__ = "Lab sample tracking (phlebotomists & due samples) API backend."
__all__ = []
