"""
에러 시나리오 및 복구 전략

부품 검색의 실패 시나리오와 그에 따른 처리 방식
"""

import pytest

from partsearch.core.exceptions import (
    BrowserException,
    CapacityExceeded,
    CrawlerException,
    EnhancementError,
    InvalidQueryException,
    NavigationError,
    NoContainerFound,
    PartSearchException,
    TransportError,
    ValidationException,
)
from partsearch.engine.strategy import ExecutionStrategy


class TestErrorScenarios:
    """에러 시나리오 테스트"""

    # ========== 크롤러 레이어 에러 ==========

    def test_transport_error(self):
        """Static fetch가 403으로 차단됨"""
        with pytest.raises(TransportError) as exc_info:
            raise TransportError("https://www.grainger.com/search?searchQuery=6203", "HTTP 403", status_code=403)

        error = exc_info.value
        assert error.error_code == "TRANSPORT_ERROR"
        assert error.status_code == 403
        assert error.details["status_code"] == 403
        assert str(error).startswith("[TRANSPORT_ERROR] HTTP fetch failed")
        # 복구: Rendered 경로로 폴백
        assert ExecutionStrategy.should_fallback_to_rendered([], error) is True

    def test_navigation_error(self):
        """재시도 후에도 페이지 이동 실패"""
        error = NavigationError("https://www.mcmaster.com", 3, "net::ERR_CONNECTION_RESET")

        assert error.error_code == "NAVIGATION_ERROR"
        assert error.attempts == 3
        assert "3 attempt(s)" in error.message

    def test_no_container_found(self):
        error = NoContainerFound("mscdirect", (".product-tile", ".search-result"))

        assert error.error_code == "NO_CONTAINER_FOUND"
        assert error.details["selectors"] == [".product-tile", ".search-result"]

    def test_capacity_exceeded(self):
        error = CapacityExceeded(3)

        assert error.error_code == "CAPACITY_EXCEEDED"
        assert "(3)" in error.message

    def test_crawler_errors_are_isolated_per_source(self):
        """크롤러 예외는 모두 소스 경계에서 흡수"""
        errors = [
            TransportError("u", "r"),
            NavigationError("u", 1, "r"),
            NoContainerFound("s", ()),
            CapacityExceeded(1),
            BrowserException("launch failed"),
        ]
        for error in errors:
            assert isinstance(error, CrawlerException)
            assert ExecutionStrategy.is_isolated_failure(error)

    # ========== 보강 레이어 에러 ==========

    def test_enhancement_error(self):
        error = EnhancementError("HTTP 429")

        assert error.error_code == "ENHANCEMENT_ERROR"
        assert error.details == {"reason": "HTTP 429"}
        assert not isinstance(error, CrawlerException)

    # ========== 입력 검증 에러 ==========

    def test_invalid_query(self):
        error = InvalidQueryException("query must be at least 2 characters long")

        assert isinstance(error, ValidationException)
        assert error.error_code == "VALIDATION_ERROR"
        assert error.details["field"] == "query"

    def test_all_errors_share_base(self):
        for cls in (CrawlerException, EnhancementError, ValidationException):
            assert issubclass(cls, PartSearchException)
