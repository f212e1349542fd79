"""Pydantic 스키마 정의 (Steam 카탈로그)"""
from datetime import datetime
from typing import Any, Optional
from pydantic import BaseModel, Field, ValidationError


class SteamSearchItem(BaseModel):
    """검색 API가 돌려준 원본 후보 (점수화/검증 전)"""
    id: int = Field(..., description="Steam App ID")
    name: str = Field(..., description="상점 표시명")
    type: str = Field(..., description="항목 종류 (app, sub, bundle ...)")
    aux_flags: dict[str, Any] = Field(default_factory=dict, description="가격/플랫폼 등 부가 필드")

    @classmethod
    def from_api(cls, item: Any) -> Optional["SteamSearchItem"]:
        """검색 응답의 항목 하나를 변환. 구조가 깨진 항목은 None."""
        if not isinstance(item, dict):
            return None
        name = item.get("name")
        entry_type = item.get("type")
        if not isinstance(name, str) or not name or not isinstance(entry_type, str) or not entry_type:
            return None
        aux = {k: v for k, v in item.items() if k not in ("id", "name", "type")}
        try:
            return cls(id=item.get("id"), name=name, type=entry_type, aux_flags=aux)
        except ValidationError:
            return None


class SteamMatchResult(BaseModel):
    """매처 판정 결과"""
    steam_app_id: int
    steam_name: str
    score: float = Field(..., ge=0.0, le=1.0)


class SteamAppInfo(BaseModel):
    """확정된 Steam 항목"""
    steam_app_id: int
    steam_name: str


class SteamReviewData(BaseModel):
    """리뷰 요약 문구 (예: "Very Positive")"""
    steam_all_review: Optional[str] = None
    steam_recent_review: Optional[str] = None

    def with_backfill(self) -> "SteamReviewData":
        """전체 리뷰가 없으면 최근 리뷰로 채운 사본을 반환"""
        if not self.steam_all_review and self.steam_recent_review:
            return self.model_copy(update={"steam_all_review": self.steam_recent_review})
        return self


class SteamTagsData(BaseModel):
    """인기 태그 (상점 표시 순서 유지)"""
    steam_popular_tags: Optional[list[str]] = None


class SteamMetadata(BaseModel):
    """가격/할인/출시일 원문 라벨"""
    steam_price: Optional[str] = None
    steam_discount: Optional[str] = None
    steam_release_date: Optional[str] = None


class CompleteSteamData(SteamReviewData, SteamTagsData, SteamMetadata):
    """캐시 및 반환 단위 (AppInfo + 리뷰 + 태그 + 메타데이터)

    ID로 직접 조회한 경우 steam_name은 빈 문자열로 남습니다.
    """
    steam_app_id: int
    steam_name: str = ""


class SteamIntegrationResult(BaseModel):
    """공개 오퍼레이션 결과 (예외 대신 success/error로 실패 전달)"""
    success: bool
    data: dict[str, Any] = Field(default_factory=dict)
    error: Optional[str] = None


class SteamPlayerCount(BaseModel):
    """현재 동시 접속자 수"""
    steam_app_id: int
    player_count: int = Field(..., ge=0)


class SteamSpyData(BaseModel):
    """SteamSpy 소유자 추정치"""
    steam_app_id: int
    steam_name: Optional[str] = None
    owners_lower_bound: Optional[int] = None
    average_playtime: Optional[int] = None


class SteamUserReview(BaseModel):
    """'도움이 됨' 기준 상위 사용자 리뷰 1건"""
    review_id: str = Field(..., description="md5(app_id-recommendationid) 앞 12자리")
    source: str = "steam"
    content: str
    original_published_at: str = Field(..., description="작성 시각 (ISO 8601, UTC)")


class SteamDetailedReviews(BaseModel):
    """제목 → 매칭된 항목 + 사용자 리뷰 목록 (미매칭 시 id/이름 None, 빈 목록)"""
    steam_app_id: Optional[int] = None
    steam_name: Optional[str] = None
    reviews: list[SteamUserReview] = Field(default_factory=list)


class HealthResponse(BaseModel):
    """헬스 체크 응답"""
    status: str
    timestamp: datetime
    version: str
    cache_size: int = 0


class CacheStatsResponse(BaseModel):
    """캐시 통계 응답"""
    size: int
