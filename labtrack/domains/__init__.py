# labtrack/domains/__init__.py

"""
비즈니스 도메인 패키지입니다. 각 도메인은 PostgreSQL 스키마 하나에 대응합니다.

- usr : 사용자 계정과 로그인/로그아웃
- lims: 채혈 담당자 명부와 대기 시료
"""
