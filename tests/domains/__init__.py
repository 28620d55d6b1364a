# tests/domains/__init__.py

"""
도메인별 API 통합 테스트 패키지입니다.

- `test_auth_n.py`: 'usr' 도메인 로그인/로그아웃과 접근 제어.
- `test_lims_n.py`: 'lims' 도메인 채혈 담당자와 대기 시료.
"""

__all__ = []
