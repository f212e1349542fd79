"""전역 테스트 설정

역할:
- 테스트 환경 구성
- 공통 Fake 주입 (HTTP 클라이언트, 시계, sleep)

금지:
- 실제 네트워크 호출
"""

from __future__ import annotations

import os
import sys
from pathlib import Path
from typing import Callable, Union

import pytest


# 프로젝트 루트를 경로에 추가
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from src.crawlers.http_client import HttpResponse  # noqa: E402
from src.crawlers.retry import RetryPolicy  # noqa: E402
from src.crawlers.steam.fetcher import ResilientFetcher  # noqa: E402
from src.services.impl.cache_service import TTLCache  # noqa: E402
from src.services.impl.steam_integration_service import SteamIntegrationService  # noqa: E402


@pytest.fixture(scope="session", autouse=True)
def test_env() -> None:
    """테스트 환경 변수 설정 (세션 전역)"""
    os.environ["ENVIRONMENT"] = "test"
    os.environ["LOG_LEVEL"] = "INFO"


Reply = Union[HttpResponse, Exception]


class FakeHttpClient:
    """SharedHttpClient 대체용 가짜 클라이언트

    - responder(url) 가 HttpResponse 또는 Exception 을 돌려줌 (Exception이면 raise)
    - 호출된 URL을 순서대로 기록
    """

    def __init__(self, responder: Callable[[str], Reply]):
        self.responder = responder
        self.calls: list[str] = []

    async def get(self, url: str, *, timeout_s: float) -> HttpResponse:
        _ = timeout_s
        self.calls.append(url)
        reply = self.responder(url)
        if isinstance(reply, Exception):
            raise reply
        return reply

    def calls_to(self, fragment: str) -> list[str]:
        return [u for u in self.calls if fragment in u]


class SleepRecorder:
    """asyncio.sleep 대체 - 실제로 기다리지 않고 지연값만 기록"""

    def __init__(self) -> None:
        self.delays: list[float] = []

    async def __call__(self, delay: float) -> None:
        self.delays.append(delay)


class FakeClock:
    def __init__(self, start: float = 1000.0) -> None:
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture
def sleep_recorder() -> SleepRecorder:
    return SleepRecorder()


@pytest.fixture
def fake_clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def make_fetcher(sleep_recorder: SleepRecorder):
    """responder로 FakeHttpClient + ResilientFetcher 생성"""

    def _make(responder: Callable[[str], Reply], timeout_s: float = 10.0):
        client = FakeHttpClient(responder)
        fetcher = ResilientFetcher(
            client=client,
            policy=RetryPolicy(max_attempts=3, base_delay_s=1.0),
            timeout_s=timeout_s,
            sleep=sleep_recorder,
        )
        return client, fetcher

    return _make


@pytest.fixture
def make_service(make_fetcher):
    """responder로 SteamIntegrationService 생성 (캐시는 새 인스턴스)"""

    def _make(responder: Callable[[str], Reply], cache: TTLCache | None = None):
        client, fetcher = make_fetcher(responder)
        service = SteamIntegrationService(cache=cache or TTLCache(ttl_seconds=300), fetcher=fetcher)
        return client, service

    return _make
