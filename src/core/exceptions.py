"""커스텀 예외 정의 (Structured Exception Hierarchy)"""
from typing import Any, Optional


# 기본 예외 클래스
class SteamCatalogException(Exception):
    """기본 예외 클래스 - 모든 커스텀 예외의 부모"""
    def __init__(self, message: str, error_code: str = "UNKNOWN_ERROR", details: Optional[dict[str, Any]] = None):
        self.message = message
        self.error_code = error_code
        self.details = details or {}
        super().__init__(self.message)

    def __str__(self) -> str:
        return f"[{self.error_code}] {self.message}"


# 네트워크 관련 예외 (재시도 대상)
class NetworkException(SteamCatalogException):
    """일시적 네트워크 오류 - Fetcher 내부에서 재시도됨"""
    def __init__(self, url: str, reason: str, error_code: str = "NETWORK_ERROR", details: Optional[dict[str, Any]] = None):
        message = f"Request to {url} failed: {reason}"
        super().__init__(message, error_code or "NETWORK_ERROR", details or {"url": url, "reason": reason})
        self.url = url
        self.reason = reason


class NetworkTimeoutException(NetworkException):
    """단일 시도 타임아웃"""
    def __init__(self, url: str, timeout_s: float, details: Optional[dict[str, Any]] = None):
        super().__init__(url, f"timed out after {timeout_s}s", "NETWORK_TIMEOUT",
                         details or {"url": url, "timeout_s": timeout_s})
        self.timeout_s = timeout_s


class HttpStatusException(NetworkException):
    """2xx가 아닌 응답"""
    def __init__(self, url: str, status_code: int, details: Optional[dict[str, Any]] = None):
        super().__init__(url, f"HTTP {status_code}", "HTTP_STATUS",
                         details or {"url": url, "status_code": status_code})
        self.status_code = status_code


# 조회 결과 관련 예외 (재시도하지 않음)
class EntryNotFoundException(SteamCatalogException):
    """검색 결과가 없거나 임계값을 넘는 후보가 없을 때"""
    def __init__(self, query: str, details: Optional[dict[str, Any]] = None):
        message = f'No Steam app found for "{query}"'
        super().__init__(message, "ENTRY_NOT_FOUND", details or {"query": query})
        self.query = query


class EntryUnavailableException(SteamCatalogException):
    """상점 페이지가 '이용 불가' 안내 페이지인 경우"""
    def __init__(self, steam_app_id: int, details: Optional[dict[str, Any]] = None):
        message = f"Steam app {steam_app_id} not available"
        super().__init__(message, "ENTRY_UNAVAILABLE", details or {"steam_app_id": steam_app_id})
        self.steam_app_id = steam_app_id


class ParsingException(SteamCatalogException):
    """JSON/HTML 파싱 오류"""
    def __init__(self, reason: str, details: Optional[dict[str, Any]] = None):
        message = f"Failed to parse response: {reason}"
        super().__init__(message, "PARSING_ERROR", details or {"reason": reason})


# 유효성 검증 관련 예외
class ValidationException(SteamCatalogException):
    """유효성 검증 예외"""
    def __init__(self, field: str, reason: str, details: Optional[dict[str, Any]] = None):
        message = f"Validation failed for '{field}': {reason}"
        super().__init__(message, "VALIDATION_ERROR",
                        details or {"field": field, "reason": reason})


class InvalidQueryException(ValidationException):
    """유효하지 않은 검색어"""
    def __init__(self, reason: str, field: str = "q", details: Optional[dict[str, Any]] = None):
        super().__init__(field, reason, details)
