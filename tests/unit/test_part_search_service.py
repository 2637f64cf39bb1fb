"""검색 진입점 테스트."""

from __future__ import annotations

from unittest.mock import AsyncMock, MagicMock, patch

import pytest

from partsearch.core.exceptions import InvalidQueryException, ValidationException
from partsearch.engine.session_limiter import SessionLimiter
from partsearch.services.part_search_service import PartSearchService
from tests.fixtures.fakes import make_listing


def _supplier_search(hits: dict[str, list]) -> MagicMock:
    search = MagicMock()
    search.source_ids = ["mcmaster", "mscdirect", "grainger"]
    search.search = AsyncMock(side_effect=lambda query, max_results: hits.get(query, [])[:max_results])
    return search


@pytest.fixture
def service(offline_enhancer):
    hits = {
        "6203 bearing": [
            make_listing("6383K13", "Ball Bearing 6203"),
            make_listing("6383K14", "Ball Bearing 6203-2RS"),
            make_listing("MSC-1", "6203 Bearing", source_id="mscdirect"),
        ]
    }
    return PartSearchService(
        supplier_search=_supplier_search(hits),
        enhancer=offline_enhancer,
        limiter=SessionLimiter(max_sessions=3),
    )


class TestValidation:
    @pytest.mark.asyncio
    @pytest.mark.parametrize("query", ["", " ", " a ", None, 123])
    async def test_invalid_query(self, service, query):
        with pytest.raises(InvalidQueryException):
            await service.search(query)

    @pytest.mark.asyncio
    @pytest.mark.parametrize("limit", [0, 51, -1, True, "10"])
    async def test_invalid_limit(self, service, limit):
        with pytest.raises(ValidationException):
            await service.search("6203", limit=limit)

    def test_invalid_query_is_validation_error(self):
        assert issubclass(InvalidQueryException, ValidationException)


@pytest.mark.asyncio
async def test_search_response(service):
    response = await service.search("  6203 ", limit=10)

    assert response.original_query == "6203"
    assert response.query == "6203 bearing"
    assert response.enhancement_method == "rule_based"
    assert response.result_count == 3
    assert response.status == "good_results"
    assert response.advice == []
    assert response.suppliers_searched == ["mcmaster", "mscdirect", "grainger"]
    service.supplier_search.search.assert_awaited_with("6203 bearing", 10)


@pytest.mark.asyncio
async def test_search_limit_passed_through(service):
    response = await service.search("6203", limit=2)

    assert response.result_count == 2
    assert response.status == "few_results"
    assert response.advice


@pytest.mark.asyncio
async def test_search_no_results(service):
    response = await service.search("conveyor")

    assert response.result_count == 0
    assert response.status == "no_results"
    assert response.enhancement_method == "original"
    assert response.query == "conveyor"


@pytest.mark.asyncio
async def test_enhance_only(service):
    enhancement = await service.enhance("6203")
    assert enhancement.enhanced_query == "6203 bearing"
    service.supplier_search.search.assert_not_awaited()


def test_status(service):
    status = service.status()

    assert status["browser_sessions"] == {"active": 0, "capacity": 3}
    assert status["suppliers"] == ["mcmaster", "mscdirect", "grainger"]
    assert status["llm"]["configured"] is False
    assert status["llm"]["model"]


@pytest.mark.asyncio
async def test_shutdown_closes_shared_resources(service):
    with patch(
        "partsearch.crawlers.playwright.browser.shutdown_shared_browser", new=AsyncMock()
    ) as browser, patch(
        "partsearch.services.part_search_service.shutdown_shared_http_client", new=AsyncMock()
    ) as http:
        await service.shutdown()

    browser.assert_awaited_once()
    http.assert_awaited_once()
