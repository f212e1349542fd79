"""테스트 자산(데이터) 레이어

규칙:
- 로직 없음 (단순 dict/list/str, 응답 생성 헬퍼만 허용)
- 서비스/네트워크 의존 없음
"""

from .replies import html_reply, json_reply
from .review_payloads import REVIEW_PAYLOADS
from .search_payloads import SEARCH_PAYLOADS
from .store_pages import STORE_PAGES

__all__ = [
    "html_reply",
    "json_reply",
    "REVIEW_PAYLOADS",
    "SEARCH_PAYLOADS",
    "STORE_PAGES",
]
