"""Playwright page 설정/보조 함수.

Page 생성 후 지문 다양화(viewport/User-Agent), 리소스 차단 라우팅,
헤더 설정 등 공통 설정을 분리합니다.
"""

from __future__ import annotations

import random
from typing import Optional

from playwright.async_api import Page, Request, Route

from partsearch.core.config import settings
from partsearch.core.logging import logger
from partsearch.crawlers.http_client import browser_headers


BLOCKED_RESOURCE_TYPES = frozenset({"image", "media", "font", "stylesheet"})


def random_viewport() -> dict[str, int]:
    jitter = max(0, settings.crawler_viewport_jitter)
    return {
        "width": settings.crawler_viewport_width + random.randint(0, jitter),
        "height": settings.crawler_viewport_height + random.randint(0, jitter),
    }


async def _route_handler(route: Route, request: Request) -> None:
    try:
        if request.resource_type in BLOCKED_RESOURCE_TYPES:
            await route.abort()
        else:
            await route.continue_()
    except Exception as e:
        # 페이지가 이미 닫힌 뒤 도착한 요청 등
        logger.debug(f"[Playwright] route handling skipped: {type(e).__name__}")


async def configure_page(page: Page, user_agent: Optional[str] = None) -> Page:
    page.set_default_timeout(settings.crawler_navigation_timeout_ms)

    await page.set_viewport_size(random_viewport())
    await page.route("**/*", _route_handler)

    headers = browser_headers(user_agent)
    # Accept-Encoding은 브라우저가 직접 협상
    headers.pop("Accept-Encoding", None)
    await page.set_extra_http_headers(headers)

    return page
