"""TTLCache 유닛 테스트 (가짜 시계 사용)"""
import pytest

from src.services.impl.cache_service import TTLCache


class TestTTLCache:
    """TTL 캐시 테스트"""

    def test_get_miss(self, fake_clock) -> None:
        cache = TTLCache(ttl_seconds=300, clock=fake_clock)
        assert cache.get("missing") is None

    def test_set_and_get(self, fake_clock) -> None:
        cache = TTLCache(ttl_seconds=300, clock=fake_clock)
        cache.set("steam_app_hollow knight", {"steam_app_id": 367520})
        assert cache.get("steam_app_hollow knight") == {"steam_app_id": 367520}

    def test_fresh_just_before_ttl(self, fake_clock) -> None:
        cache = TTLCache(ttl_seconds=300, clock=fake_clock)
        cache.set("k", "v")
        fake_clock.advance(299.999)
        assert cache.get("k") == "v"

    def test_expired_at_ttl(self, fake_clock) -> None:
        cache = TTLCache(ttl_seconds=300, clock=fake_clock)
        cache.set("k", "v")
        fake_clock.advance(300.001)
        assert cache.get("k") is None

    def test_expired_entry_removed_on_read(self, fake_clock) -> None:
        cache = TTLCache(ttl_seconds=10, clock=fake_clock)
        cache.set("k", "v")
        fake_clock.advance(11)

        # 조회 전에는 size에 포함
        assert cache.stats() == {"size": 1}
        assert cache.get("k") is None
        assert cache.stats() == {"size": 0}

    def test_overwrite_refreshes_timestamp(self, fake_clock) -> None:
        cache = TTLCache(ttl_seconds=10, clock=fake_clock)
        cache.set("k", "old")
        fake_clock.advance(8)
        cache.set("k", "new")
        fake_clock.advance(8)
        assert cache.get("k") == "new"

    def test_clear_and_stats(self, fake_clock) -> None:
        cache = TTLCache(ttl_seconds=300, clock=fake_clock)
        cache.set("a", 1)
        cache.set("b", 2)
        assert cache.stats() == {"size": 2}

        cache.clear()
        assert cache.stats() == {"size": 0}
        assert cache.get("a") is None

    def test_delete(self, fake_clock) -> None:
        cache = TTLCache(ttl_seconds=300, clock=fake_clock)
        cache.set("a", 1)
        assert cache.delete("a") is True
        assert cache.delete("a") is False

    def test_unbounded_when_max_entries_zero(self, fake_clock) -> None:
        cache = TTLCache(ttl_seconds=300, max_entries=0, clock=fake_clock)
        for i in range(50):
            cache.set(f"k{i}", i)
        assert cache.stats() == {"size": 50}

    def test_capacity_evicts_oldest(self, fake_clock) -> None:
        cache = TTLCache(ttl_seconds=300, max_entries=2, clock=fake_clock)
        cache.set("a", 1)
        fake_clock.advance(1)
        cache.set("b", 2)
        fake_clock.advance(1)
        cache.set("c", 3)

        assert cache.get("a") is None
        assert cache.get("b") == 2
        assert cache.get("c") == 3

    def test_capacity_evicts_expired_first(self, fake_clock) -> None:
        cache = TTLCache(ttl_seconds=10, max_entries=2, clock=fake_clock)
        cache.set("a", 1)
        fake_clock.advance(5)
        cache.set("b", 2)
        fake_clock.advance(6)  # a 만료, b 유효
        cache.set("c", 3)

        assert cache.stats() == {"size": 2}
        assert cache.get("b") == 2
        assert cache.get("c") == 3

    def test_overwrite_does_not_evict_at_capacity(self, fake_clock) -> None:
        cache = TTLCache(ttl_seconds=300, max_entries=2, clock=fake_clock)
        cache.set("a", 1)
        cache.set("b", 2)
        cache.set("b", 3)
        assert cache.get("a") == 1
        assert cache.get("b") == 3

    @pytest.mark.parametrize("ttl", [0, -1])
    def test_invalid_ttl(self, ttl: float) -> None:
        with pytest.raises(ValueError):
            TTLCache(ttl_seconds=ttl)
