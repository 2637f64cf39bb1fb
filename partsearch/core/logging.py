"""로깅 설정 (Security Enhanced)

프로세스 전체가 "parts_search" 로거 하나를 공유합니다.
컴포넌트는 메시지 앞에 [StaticFetch], [SmartSearch] 같은 태그를 붙입니다.
"""
import logging
import re
import sys
from typing import Any, Optional

from partsearch.core.config import settings


LOGGER_NAME = "parts_search"

_PRODUCTION_FORMAT = "%(asctime)s - %(levelname)s - %(message)s"
_DEVELOPMENT_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(funcName)s:%(lineno)d - %(message)s"

# key=value / key: value / "Bearer xxx" 형태의 값만 가림
_SENSITIVE = re.compile(
    r"(?i)\b(password|passwd|token|api[_-]?key|secret|bearer)\b(\s*[:=]\s*|\s+)(\S+)"
)


def _resolve_level(level: str, is_production: bool) -> int:
    name = (level or "INFO").upper()
    # Production에서는 최소 INFO 레벨
    if is_production and name == "DEBUG":
        name = "INFO"
    return getattr(logging, name, logging.INFO)


def setup_logging(level: Optional[str] = None, environment: Optional[str] = None) -> logging.Logger:
    """로거 초기화 및 설정 (여러 번 호출해도 핸들러는 하나)"""
    is_production = (environment or settings.environment) == "production"
    resolved = _resolve_level(level or settings.log_level, is_production)

    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(resolved)
    logger.propagate = False

    handler = next((h for h in logger.handlers if getattr(h, "_parts_search", False)), None)
    if handler is None:
        handler = logging.StreamHandler(sys.stdout)
        handler._parts_search = True  # type: ignore[attr-defined]
        logger.addHandler(handler)

    handler.setLevel(resolved)
    handler.setFormatter(
        logging.Formatter(
            fmt=_PRODUCTION_FORMAT if is_production else _DEVELOPMENT_FORMAT,
            datefmt="%Y-%m-%d %H:%M:%S",
        )
    )
    return logger


logger = setup_logging()


def sanitize_for_log(value: Any, max_length: int = 100) -> str:
    """민감 정보 마스킹 후 로깅용 한 줄 문자열 반환

    Args:
        value: 로깅할 값 (사용자 입력 검색어 등)
        max_length: 최대 길이

    Returns:
        마스킹/절단된 문자열
    """
    if value is None or value == "":
        return "[empty]"

    result = _SENSITIVE.sub(lambda m: f"{m.group(1)}{m.group(2)}***", str(value))

    # 줄바꿈은 한 줄로 (로그 위조 방지)
    result = result.replace("\r", " ").replace("\n", " ")

    if len(result) > max_length:
        result = result[:max_length] + "..."

    return result
