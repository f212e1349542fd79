"""로깅 설정"""
import logging
import sys
import os
from typing import Optional

from src.core.config import settings


# Production 환경에서는 DEBUG 로그 비활성화
IS_PRODUCTION = os.getenv("ENVIRONMENT", "development") == "production"

LOGGER_NAME = "steam_catalog"

# 요청마다 연결/핸드셰이크 로그를 남기는 라이브러리 로거
NOISY_LIBRARY_LOGGERS = ("curl_cffi", "asyncio")

_PRODUCTION_FORMAT = "%(asctime)s - %(levelname)s - %(message)s"
_DEVELOPMENT_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(funcName)s:%(lineno)d - %(message)s"


def resolve_log_level(level: Optional[str] = None) -> int:
    """설정값(또는 인자) → logging 레벨. 알 수 없는 이름이면 INFO."""
    name = (level or settings.log_level).upper()
    # Production에서는 최소 INFO 레벨
    if IS_PRODUCTION and name == "DEBUG":
        name = "INFO"
    resolved = logging.getLevelName(name)
    return resolved if isinstance(resolved, int) else logging.INFO


def setup_logging(name: str = LOGGER_NAME, level: Optional[str] = None) -> logging.Logger:
    """
    서비스 로거 초기화

    - stdout 핸들러 1개 (재호출 시 중복 추가하지 않음)
    - 서비스 로그는 [STEAM_FETCH] 같은 컴포넌트 태그로 구분
    - 라이브러리 로거는 WARNING 이상만 출력

    Args:
        name: 로거 이름
        level: 로그 레벨 이름 (기본값: settings.log_level)
    """
    logger = logging.getLogger(name)
    log_level = resolve_log_level(level)
    logger.setLevel(log_level)
    # 루트 로거로 전파하지 않음 (핸들러 1개로만 출력)
    logger.propagate = False

    if not logger.handlers:
        console_handler = logging.StreamHandler(sys.stdout)
        console_handler.setFormatter(
            logging.Formatter(
                fmt=_PRODUCTION_FORMAT if IS_PRODUCTION else _DEVELOPMENT_FORMAT,
                datefmt="%Y-%m-%d %H:%M:%S",
            )
        )
        logger.addHandler(console_handler)
    for handler in logger.handlers:
        handler.setLevel(log_level)

    for noisy in NOISY_LIBRARY_LOGGERS:
        logging.getLogger(noisy).setLevel(logging.WARNING)

    return logger


logger = setup_logging()


def sanitize_for_log(value: str, max_length: int = 100) -> str:
    """사용자 입력(게임 제목 등)을 로그에 남기기 전에 정리

    Args:
        value: 로깅할 문자열
        max_length: 최대 길이

    Returns:
        개행이 제거되고 길이가 제한된 문자열
    """
    if not value:
        return "[empty]"

    # 로그 라인 위조 방지
    result = value.replace("\r", " ").replace("\n", " ")

    if len(result) > max_length:
        result = result[:max_length] + "..."

    return result
