"""Steam 요청용 Resilient Fetcher (타임아웃 + 재시도 + 백오프)"""

from __future__ import annotations

import asyncio
import json
from typing import Any, Awaitable, Callable, Optional

from src.core.config import settings
from src.core.exceptions import (
    HttpStatusException,
    NetworkException,
    NetworkTimeoutException,
    ParsingException,
)
from src.core.logging import logger
from src.crawlers.http_client import HttpResponse, SharedHttpClient, get_shared_http_client
from src.crawlers.retry import RetryPolicy, retry_async


class ResilientFetcher:
    """공유 HTTP 클라이언트 위에 시도별 타임아웃과 재시도를 씌운 fetcher.

    - 시도마다 asyncio.wait_for로 타임아웃(취소) 적용
    - 타임아웃/전송 오류/2xx 외 응답은 NetworkException 계열로 기록 후 재시도
    - 모든 시도가 실패하면 마지막 예외를 던짐 (부분 결과 없음)
    """

    def __init__(
        self,
        client: Optional[SharedHttpClient] = None,
        policy: Optional[RetryPolicy] = None,
        timeout_s: Optional[float] = None,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    ) -> None:
        self.client = client or get_shared_http_client()
        self.policy = policy or RetryPolicy.from_settings()
        self.timeout_s = timeout_s if timeout_s is not None else settings.steam_request_timeout_s
        self._sleep = sleep

    async def _attempt(self, url: str) -> HttpResponse:
        try:
            res = await asyncio.wait_for(
                self.client.get(url, timeout_s=self.timeout_s),
                timeout=self.timeout_s,
            )
        except asyncio.TimeoutError as e:
            raise NetworkTimeoutException(url, self.timeout_s) from e
        except NetworkException:
            raise
        except Exception as e:
            raise NetworkException(url, f"{type(e).__name__}: {e}") from e

        if not res.ok:
            raise HttpStatusException(url, res.status_code)
        return res

    async def fetch_with_retry(self, url: str) -> HttpResponse:
        url_display = url if len(url) <= 120 else url[:120] + "..."
        logger.info(f"[STEAM_FETCH] Fetching {url_display} (timeout={self.timeout_s:.1f}s)")
        res = await retry_async(
            lambda: self._attempt(url),
            self.policy,
            retry_on=(NetworkException,),
            sleep=self._sleep,
            label="Steam fetch",
        )
        logger.info(f"[STEAM_FETCH] OK (status={res.status_code}, len={len(res.text)})")
        return res

    async def fetch_json(self, url: str) -> Any:
        """fetch 후 JSON 디코딩. 디코딩 실패는 재시도하지 않습니다."""
        res = await self.fetch_with_retry(url)
        try:
            return json.loads(res.text)
        except (json.JSONDecodeError, ValueError) as e:
            raise ParsingException(f"invalid JSON from {url}: {e}") from e
