# tests/__init__.py

"""
LabTrack 애플리케이션의 테스트 스위트 패키지입니다.

- `conftest.py`: 테스트마다 새로 만드는 인메모리 SQLite 저장소, 역할별 사용자,
                 /login으로 로그인한 클라이언트 픽스처.
- `core/`: 쿼리 빌더, 시각 유틸리티 등 단위 테스트.
- `domains/`: 도메인별(usr, lims) API 통합 테스트.
"""

__title__ = "LabTrack API Tests"
__version__ = "0.1.0"
__all__ = []
