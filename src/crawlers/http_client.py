"""공유 HTTP 클라이언트 (curl_cffi)

- 요청마다 AsyncSession을 만들면 TLS/커넥션 오버헤드가 커지므로
  프로세스 단위로 세션을 재사용합니다.
- Steam 연령 확인 페이지를 피하기 위한 고정 헤더/쿠키를 세션에 붙입니다.
- 앱 종료 시 close()로 정리합니다.
"""

from __future__ import annotations

import asyncio
from dataclasses import dataclass
from typing import Optional, Dict

from curl_cffi.requests import AsyncSession

from src.core.config import settings
from src.core.logging import logger


@dataclass(frozen=True)
class HttpResponse:
    status_code: int
    text: str

    @property
    def ok(self) -> bool:
        return 200 <= self.status_code < 300


def default_headers() -> Dict[str, str]:
    return {
        "User-Agent": settings.steam_user_agent,
        "Accept": "text/html,application/xhtml+xml,application/xml;q=0.9,*/*;q=0.8",
        "Accept-Language": settings.steam_accept_language,
        "Accept-Encoding": "gzip, deflate, br",
        "Connection": "keep-alive",
        "Upgrade-Insecure-Requests": "1",
        "Cookie": settings.steam_age_gate_cookie,
    }


class SharedHttpClient:
    def __init__(self) -> None:
        self._lock = asyncio.Lock()
        self._session: Optional[AsyncSession] = None

    async def _ensure_session(self) -> AsyncSession:
        async with self._lock:
            if self._session is not None:
                return self._session
            self._session = AsyncSession(
                impersonate=settings.http_impersonate,
                headers=default_headers(),
                allow_redirects=True,
                max_clients=settings.http_max_clients,
                trust_env=False,
            )
            return self._session

    async def get(self, url: str, *, timeout_s: float) -> HttpResponse:
        """GET 요청. 전송 오류는 호출자(재시도 계층)로 그대로 전파됩니다."""
        sess = await self._ensure_session()
        resp = await sess.get(url, timeout=timeout_s, allow_redirects=True)
        status = getattr(resp, "status_code", 0) or 0
        text = getattr(resp, "text", "") or ""
        return HttpResponse(status_code=status, text=text)

    async def close(self) -> None:
        async with self._lock:
            if self._session is None:
                return
            try:
                await self._session.close()
            except Exception as e:
                logger.info(f"[HTTP_CLIENT] Session close failed: {type(e).__name__}: {e!r}")
            self._session = None


_shared_http_client = SharedHttpClient()


def get_shared_http_client() -> SharedHttpClient:
    return _shared_http_client


async def shutdown_shared_http_client() -> None:
    await _shared_http_client.close()
