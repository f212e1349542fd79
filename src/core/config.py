"""설정 관리 - 환경 변수 로드 및 검증"""
from pydantic_settings import BaseSettings
from pydantic import field_validator


class Settings(BaseSettings):
    """애플리케이션 설정"""

    # Steam 엔드포인트
    steam_search_url: str = "https://store.steampowered.com/api/storesearch/"
    steam_store_url: str = "https://store.steampowered.com/app/"
    steam_player_count_url: str = (
        "https://api.steampowered.com/ISteamUserStats/GetNumberOfCurrentPlayers/v1/"
    )
    steamspy_url: str = "https://steamspy.com/api.php"
    steam_reviews_url: str = "https://store.steampowered.com/appreviews/"
    steam_country_code: str = "us"
    steam_language: str = "en"

    # 고정 요청 헤더 (연령 확인 페이지 우회용 쿠키 포함)
    steam_user_agent: str = "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36"
    steam_accept_language: str = "en-US,en;q=0.5"
    steam_age_gate_cookie: str = "birthtime=946684800; lastagecheckage=1-January-2000; mature_content=1"

    # HTTP / 재시도
    # NOTE: 3회 시도, 1초 선형 백오프(1s, 2s), 시도당 10초 타임아웃
    steam_request_timeout_s: float = 10.0
    steam_retry_attempts: int = 3
    steam_retry_delay_s: float = 1.0
    http_impersonate: str = "chrome110"
    http_max_clients: int = 20

    # 사용자 리뷰 (appreviews API)
    steam_reviews_language: str = "english"
    steam_reviews_per_page: int = 20
    steam_reviews_limit: int = 10

    # 매칭
    match_threshold: float = 0.6

    # 캐시
    cache_ttl: int = 300  # 5분
    cache_max_entries: int = 0  # 0이면 무제한

    # API
    api_title: str = "Steam 카탈로그 매칭 서비스"
    api_version: str = "1.0.0"
    api_description: str = "게임 제목을 Steam 상점 항목으로 매칭하고 리뷰/태그/메타데이터를 캐시합니다."

    # 로깅
    log_level: str = "INFO"

    @field_validator("cache_ttl")
    @classmethod
    def validate_cache_ttl(cls, v: int) -> int:
        if v <= 0:
            raise ValueError("cache_ttl must be positive")
        return v

    @field_validator("cache_max_entries")
    @classmethod
    def validate_cache_max_entries(cls, v: int) -> int:
        if v < 0:
            raise ValueError("cache_max_entries must be >= 0")
        return v

    @field_validator("steam_request_timeout_s", "steam_retry_delay_s")
    @classmethod
    def validate_timings(cls, v: float) -> float:
        if v <= 0:
            raise ValueError("steam timings must be positive")
        return v

    @field_validator("steam_retry_attempts", "http_max_clients", "steam_reviews_per_page", "steam_reviews_limit")
    @classmethod
    def validate_counts(cls, v: int) -> int:
        if v <= 0:
            raise ValueError("retry attempts, client and review counts must be positive")
        return v

    @field_validator("match_threshold")
    @classmethod
    def validate_match_threshold(cls, v: float) -> float:
        if not 0.0 < v <= 1.0:
            raise ValueError("match_threshold must be in (0, 1]")
        return v

    class Config:
        env_file = ".env"
        case_sensitive = False


settings = Settings()
