"""인메모리 TTL 캐시 서비스 - 캐싱 로직만 담당"""
import time
from dataclasses import dataclass
from typing import Any, Callable, Dict, Optional

from src.core.config import settings
from src.core.logging import logger


@dataclass
class CacheEntry:
    key: str
    value: Any
    written_at: float


class TTLCache:
    """키별 만료 시간을 가진 인메모리 캐시

    - 만료 항목은 조회 시점에 삭제 (lazy eviction, 백그라운드 정리 없음)
    - max_entries가 0/None이면 무제한, 가득 차면 만료 항목 → 가장 오래된 항목 순으로 제거
    - 락이 없으므로 단일 이벤트 루프에서만 사용
    """

    def __init__(
        self,
        ttl_seconds: Optional[float] = None,
        max_entries: Optional[int] = None,
        clock: Callable[[], float] = time.monotonic,
    ):
        self.ttl_seconds = float(ttl_seconds if ttl_seconds is not None else settings.cache_ttl)
        if self.ttl_seconds <= 0:
            raise ValueError("ttl_seconds must be positive")
        self.max_entries = max_entries if max_entries is not None else settings.cache_max_entries
        self._clock = clock
        self._entries: Dict[str, CacheEntry] = {}

    def _is_fresh(self, entry: CacheEntry, now: float) -> bool:
        return now - entry.written_at < self.ttl_seconds

    def get(self, key: str) -> Optional[Any]:
        """
        캐시 조회

        Args:
            key: 캐시 키

        Returns:
            저장된 값 또는 None (없거나 만료된 경우)
        """
        entry = self._entries.get(key)
        if entry is None:
            logger.debug(f"[STEAM_CACHE] miss: {key}")
            return None

        if not self._is_fresh(entry, self._clock()):
            del self._entries[key]
            logger.debug(f"[STEAM_CACHE] expired: {key}")
            return None

        logger.debug(f"[STEAM_CACHE] hit: {key}")
        return entry.value

    def set(self, key: str, value: Any) -> None:
        """항상 덮어쓰며 기록 시각을 갱신"""
        now = self._clock()
        self._entries.pop(key, None)
        if self.max_entries and len(self._entries) >= self.max_entries:
            self._evict(now)
        self._entries[key] = CacheEntry(key=key, value=value, written_at=now)

    def _evict(self, now: float) -> None:
        expired = [k for k, e in self._entries.items() if not self._is_fresh(e, now)]
        for k in expired:
            del self._entries[k]

        # dict는 삽입 순서를 유지하므로 맨 앞이 가장 오래 전에 기록된 항목
        while self.max_entries and len(self._entries) >= self.max_entries:
            oldest = next(iter(self._entries))
            del self._entries[oldest]
            logger.debug(f"[STEAM_CACHE] evicted (capacity): {oldest}")

    def delete(self, key: str) -> bool:
        return self._entries.pop(key, None) is not None

    def clear(self) -> None:
        self._entries.clear()
        logger.info("[STEAM_CACHE] cleared")

    def stats(self) -> Dict[str, int]:
        """만료됐지만 아직 조회되지 않은 항목도 size에 포함됩니다."""
        return {"size": len(self._entries)}
