"""Steam 통계 보조 조회 (동시 접속자 수, SteamSpy 소유자 추정치)"""

from __future__ import annotations

from typing import Optional
from urllib.parse import urlencode

from pydantic import ValidationError

from src.core.config import settings
from src.core.exceptions import EntryNotFoundException, ParsingException
from src.core.logging import logger
from src.schemas.steam_schema import SteamPlayerCount, SteamSpyData

from .fetcher import ResilientFetcher


def parse_owners_lower_bound(owners: Optional[str]) -> Optional[int]:
    """SteamSpy owners 문자열에서 하한값 추출

    예시:
    - "100,000,000 .. 200,000,000" -> 100000000
    - "20,000" -> 20000
    """
    if not owners or not isinstance(owners, str):
        return None

    lower = owners.split("..")[0].strip() if ".." in owners else owners.strip()
    digits = lower.replace(",", "")
    if not digits.isdigit():
        return None
    return int(digits)


class SteamStatsClient:
    def __init__(self, fetcher: Optional[ResilientFetcher] = None) -> None:
        self.fetcher = fetcher or ResilientFetcher()

    async def get_current_players(self, steam_app_id: int) -> SteamPlayerCount:
        """
        현재 동시 접속자 수 조회

        Raises:
            EntryNotFoundException: Steam이 result != 1을 돌려준 경우
            ParsingException: 응답 구조가 예상과 다른 경우
            NetworkException: 재시도 소진
        """
        url = f"{settings.steam_player_count_url}?{urlencode({'appid': steam_app_id})}"
        payload = await self.fetcher.fetch_json(url)

        response = payload.get("response") if isinstance(payload, dict) else None
        if not isinstance(response, dict):
            raise ParsingException("player count response has no 'response' object")

        if response.get("result") != 1:
            logger.info(f"[STEAM_STATS] No player data for app {steam_app_id}")
            raise EntryNotFoundException(str(steam_app_id))

        try:
            count = int(response.get("player_count", 0))
        except (TypeError, ValueError) as e:
            raise ParsingException(f"invalid player_count: {e}") from e

        try:
            return SteamPlayerCount(steam_app_id=steam_app_id, player_count=max(0, count))
        except ValidationError as e:
            raise ParsingException(f"invalid player count payload: {e.error_count()} errors") from e

    async def get_steamspy_data(self, steam_app_id: int) -> SteamSpyData:
        """SteamSpy appdetails 조회. 다른 appid가 오면 미발견으로 처리."""
        url = f"{settings.steamspy_url}?{urlencode({'request': 'appdetails', 'appid': steam_app_id})}"
        payload = await self.fetcher.fetch_json(url)
        if not isinstance(payload, dict):
            raise ParsingException("SteamSpy response is not an object")

        if str(payload.get("appid") or "") != str(steam_app_id):
            raise EntryNotFoundException(str(steam_app_id))

        playtime = payload.get("average_forever")
        try:
            return SteamSpyData(
                steam_app_id=steam_app_id,
                steam_name=payload.get("name") or None,
                owners_lower_bound=parse_owners_lower_bound(payload.get("owners")),
                average_playtime=playtime if isinstance(playtime, int) else None,
            )
        except ValidationError as e:
            raise ParsingException(f"invalid SteamSpy payload: {e.error_count()} errors") from e
