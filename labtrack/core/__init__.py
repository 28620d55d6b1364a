# labtrack/core/__init__.py

"""
LabTrack 애플리케이션의 핵심 구성 요소 패키지입니다.

주요 서브모듈:
- `config.py`: 애플리케이션 설정 및 환경 변수 관리 (Pydantic Settings).
- `database.py`: 저장소 핸들(Database), 멱등 마이그레이션, 요청 단위 세션.
- `exceptions.py`: 도메인 오류 분류와 `{"message": ...}` 응답 처리기.
- `security.py`: 비밀번호 해싱, 세션 토큰(JWT)과 쿠키, 접근 제어 의존성.
- `query_builder.py`: 목록 조회 필터를 SELECT/COUNT 문으로 변환.
- `crud_base.py`: 공통 CRUD 기본 클래스.
- `dependencies.py`: 라우터가 사용하는 의존성 모음.

명시적인 임포트 경로(예: from labtrack.core.config import settings)를 사용합니다.
"""

__title__ = "LabTrack Core"
__description__ = "Core components for the LabTrack FastAPI application."
__version__ = "0.1.0"
__all__ = []
