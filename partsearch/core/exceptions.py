"""커스텀 예외 정의 (Structured Exception Hierarchy)"""
from typing import Any, Optional


# 기본 예외 클래스
class PartSearchException(Exception):
    """기본 예외 클래스 - 모든 커스텀 예외의 부모"""
    def __init__(self, message: str, error_code: str = "UNKNOWN_ERROR", details: Optional[dict[str, Any]] = None):
        self.message = message
        self.error_code = error_code
        self.details = details or {}
        super().__init__(self.message)

    def __str__(self) -> str:
        return f"[{self.error_code}] {self.message}"


# 크롤러 관련 예외
class CrawlerException(PartSearchException):
    """크롤러 관련 예외의 기본 클래스

    소스별 fetch 경계에서 잡혀 해당 소스의 결과를 빈 목록으로 만듭니다.
    """
    def __init__(self, message: str, error_code: str = "CRAWLER_ERROR", details: Optional[dict[str, Any]] = None):
        super().__init__(message, error_code or "CRAWLER_ERROR", details)


class TransportError(CrawlerException):
    """Static fetch 네트워크/타임아웃/HTTP 상태 오류"""
    def __init__(self, url: str, reason: str, status_code: Optional[int] = None, details: Optional[dict[str, Any]] = None):
        message = f"HTTP fetch failed for {url}: {reason}"
        self.url = url
        self.status_code = status_code
        super().__init__(message, "TRANSPORT_ERROR",
                        details or {"url": url, "reason": reason, "status_code": status_code})


class NavigationError(CrawlerException):
    """Rendered fetch 페이지 이동 실패 (재시도 소진 후)"""
    def __init__(self, url: str, attempts: int, reason: str, details: Optional[dict[str, Any]] = None):
        message = f"Navigation to {url} failed after {attempts} attempt(s): {reason}"
        self.url = url
        self.attempts = attempts
        super().__init__(message, "NAVIGATION_ERROR",
                        details or {"url": url, "attempts": attempts, "reason": reason})


class NoContainerFound(CrawlerException):
    """후보 컨테이너 selector가 제한 시간 내에 하나도 나타나지 않음"""
    def __init__(self, source_id: str, selectors: tuple[str, ...], details: Optional[dict[str, Any]] = None):
        message = f"No product containers found for {source_id}"
        self.source_id = source_id
        self.selectors = selectors
        super().__init__(message, "NO_CONTAINER_FOUND",
                        details or {"source": source_id, "selectors": list(selectors)})


class CapacityExceeded(CrawlerException):
    """동시 브라우저 세션 상한 도달 (대기열 없음)"""
    def __init__(self, capacity: int, details: Optional[dict[str, Any]] = None):
        message = f"Maximum concurrent browser sessions reached ({capacity})"
        self.capacity = capacity
        super().__init__(message, "CAPACITY_EXCEEDED", details or {"capacity": capacity})


class BrowserException(CrawlerException):
    """브라우저 실행 오류"""
    def __init__(self, message: str, details: Optional[dict[str, Any]] = None):
        super().__init__(message, "BROWSER_ERROR", details)


# 검색어 보강 관련 예외
class EnhancementError(PartSearchException):
    """LLM 호출 또는 응답 파싱 실패"""
    def __init__(self, reason: str, details: Optional[dict[str, Any]] = None):
        message = f"Query enhancement failed: {reason}"
        super().__init__(message, "ENHANCEMENT_ERROR", details or {"reason": reason})


# 유효성 검증 관련 예외
class ValidationException(PartSearchException):
    """유효성 검증 예외"""
    def __init__(self, field: str, reason: str, details: Optional[dict[str, Any]] = None):
        message = f"Validation failed for '{field}': {reason}"
        super().__init__(message, "VALIDATION_ERROR",
                        details or {"field": field, "reason": reason})


class InvalidQueryException(ValidationException):
    """유효하지 않은 검색어"""
    def __init__(self, reason: str, details: Optional[dict[str, Any]] = None):
        super().__init__("query", reason, details)
