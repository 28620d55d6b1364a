# labtrack/domains/usr/__init__.py

"""
'usr' 도메인 패키지입니다 (PostgreSQL 'usr' 스키마).

사용자 계정과 세션 쿠키 기반 로그인/로그아웃을 담당합니다.
API로 사용자를 등록하지 않으며, 계정은 scripts/create_admin.py로 만듭니다.

주요 서브모듈:
- `models.py`: usr.users 테이블과 UserRole.
- `schemas.py`: 사용자 및 로그인 요청/응답 스키마.
- `crud.py`: 사용자 조회, 생성(비밀번호 해싱), 인증.
- `routers.py`: POST /login, POST /logout.
"""

__title__ = "LabTrack User Domain"
__description__ = "Manages user accounts and cookie-based authentication."
__version__ = "0.1.0"
__all__ = []
