"""Steam 크롤러 (검색 API / 상점 페이지 / 사용자 리뷰 / 통계)"""

from .fetcher import ResilientFetcher
from .reviews import SteamReviewsClient
from .search import SteamSearchClient, build_search_queries
from .stats import SteamStatsClient

__all__ = [
    "ResilientFetcher",
    "SteamReviewsClient",
    "SteamSearchClient",
    "SteamStatsClient",
    "build_search_queries",
]
