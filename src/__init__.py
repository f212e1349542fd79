"""Steam 카탈로그 매칭/캐싱 서비스"""

__version__ = "1.0.0"
