"""Steam crawler modules (shared HTTP client + retry + Steam endpoints).

공개 API는 이 파일에서만 export합니다.
"""

from .http_client import HttpResponse, SharedHttpClient, get_shared_http_client
from .retry import RetryPolicy, linear_backoff, retry_async
from .steam import ResilientFetcher, SteamReviewsClient, SteamSearchClient, SteamStatsClient

__all__ = [
    "HttpResponse",
    "SharedHttpClient",
    "get_shared_http_client",
    "RetryPolicy",
    "linear_backoff",
    "retry_async",
    "ResilientFetcher",
    "SteamReviewsClient",
    "SteamSearchClient",
    "SteamStatsClient",
]
