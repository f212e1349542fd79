"""Retry policy and async retry combinator.

재시도 정책(시도 횟수/기본 지연/백오프 함수)을 값 객체로 분리해
fetch 로직과 독립적으로 테스트할 수 있게 합니다.
"""

from __future__ import annotations

import asyncio
from dataclasses import dataclass, field
from typing import Awaitable, Callable, Optional, Tuple, Type, TypeVar

from src.core.config import settings
from src.core.logging import logger

T = TypeVar("T")


def linear_backoff(base_delay_s: float, attempt: int) -> float:
    """attempt번째 실패 후 대기 시간 (1s, 2s, 3s ...)"""
    return base_delay_s * attempt


@dataclass(frozen=True)
class RetryPolicy:
    """재시도 정책.

    - max_attempts: 총 시도 횟수 (첫 시도 포함)
    - base_delay_s: 백오프 기본 지연 (초)
    - backoff: (base_delay_s, attempt) -> 대기 초
    """

    max_attempts: int = 3
    base_delay_s: float = 1.0
    backoff: Callable[[float, int], float] = field(default=linear_backoff)

    def __post_init__(self):
        if self.max_attempts <= 0:
            raise ValueError("max_attempts must be positive")
        if self.base_delay_s < 0:
            raise ValueError("base_delay_s must be >= 0")

    def delay_for(self, attempt: int) -> float:
        return max(0.0, self.backoff(self.base_delay_s, attempt))

    @classmethod
    def from_settings(cls) -> "RetryPolicy":
        return cls(
            max_attempts=settings.steam_retry_attempts,
            base_delay_s=settings.steam_retry_delay_s,
        )


async def retry_async(
    operation: Callable[[], Awaitable[T]],
    policy: RetryPolicy,
    *,
    retry_on: Tuple[Type[BaseException], ...] = (Exception,),
    sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    label: str = "operation",
) -> T:
    """operation을 정책에 따라 순차적으로 재시도.

    retry_on에 해당하는 예외만 재시도하고, 모든 시도가 실패하면
    마지막 예외를 그대로 다시 던집니다.
    """
    last_error: Optional[BaseException] = None

    for attempt in range(1, policy.max_attempts + 1):
        try:
            return await operation()
        except retry_on as e:
            last_error = e
            logger.warning(
                f"[RETRY] {label} attempt {attempt}/{policy.max_attempts} failed: {e}"
            )
            if attempt < policy.max_attempts:
                await sleep(policy.delay_for(attempt))

    if last_error is None:
        raise RuntimeError(f"{label}: all retry attempts failed")
    raise last_error
