"""Playwright 공용 브라우저/컨텍스트 관리.

브라우저 프로세스는 프로세스 전역 싱글턴이며 처음 필요할 때 띄웁니다 (lazy).
페이지는 fetch마다 새로 열고 닫습니다.
"""

from __future__ import annotations

import asyncio
import platform
from typing import Optional

from playwright.async_api import async_playwright, Browser, BrowserContext, Page, Playwright

from partsearch.core.config import settings
from partsearch.core.logging import logger
from partsearch.core.exceptions import BrowserException


_shared_lock = asyncio.Lock()
_shared_playwright: Optional[Playwright] = None
_shared_browser: Optional[Browser] = None
_shared_context: Optional[BrowserContext] = None


def build_launch_args() -> list[str]:
    args: list[str] = [
        "--disable-dev-shm-usage",
        "--disable-accelerated-2d-canvas",
        "--disable-gpu",
        "--disable-background-networking",
        "--disable-background-timer-throttling",
        "--disable-renderer-backgrounding",
        "--disable-features=TranslateUI",
        "--disable-ipc-flooding-protection",
        "--disable-extensions",
        "--no-first-run",
        "--no-default-browser-check",
    ]

    if platform.system().lower() == "linux":
        args.extend(["--no-sandbox", "--disable-setuid-sandbox"])

    deduped: list[str] = []
    seen: set[str] = set()
    for a in args:
        if a not in seen:
            seen.add(a)
            deduped.append(a)
    return deduped


async def _teardown_locked() -> None:
    """_shared_lock 보유 상태에서 호출"""
    global _shared_playwright, _shared_browser, _shared_context

    if _shared_context is not None:
        try:
            await _shared_context.close()
        except Exception as e:
            logger.debug(f"[Playwright] context close failed: {type(e).__name__}")
        _shared_context = None

    if _shared_browser is not None:
        try:
            await _shared_browser.close()
        except Exception as e:
            logger.debug(f"[Playwright] browser close failed: {type(e).__name__}")
        _shared_browser = None

    if _shared_playwright is not None:
        try:
            await _shared_playwright.stop()
        except Exception as e:
            logger.debug(f"[Playwright] driver stop failed: {type(e).__name__}")
        _shared_playwright = None


async def ensure_shared_browser() -> tuple[Playwright, Browser, BrowserContext]:
    global _shared_playwright, _shared_browser, _shared_context

    async with _shared_lock:
        if _shared_browser is not None and _shared_context is not None:
            try:
                if _shared_browser.is_connected():
                    return _shared_playwright, _shared_browser, _shared_context
            except Exception:
                logger.info("[Playwright] Shared browser state check failed, relaunching")

        await _teardown_locked()

        retries = max(1, settings.crawler_browser_launch_retries)
        last_err: Optional[Exception] = None
        for attempt in range(1, retries + 1):
            try:
                logger.info(f"[Playwright] Launching browser (attempt {attempt}/{retries})...")
                pw = await asyncio.wait_for(async_playwright().start(), timeout=20.0)
                _shared_playwright = pw

                browser = await asyncio.wait_for(
                    pw.chromium.launch(
                        headless=True,
                        args=build_launch_args(),
                        timeout=settings.crawler_navigation_timeout_ms,
                    ),
                    timeout=25.0,
                )
                _shared_browser = browser

                # User-Agent/viewport는 페이지 단위로 무작위화하므로 컨텍스트는 기본값
                context = await browser.new_context(locale="en-US")
                _shared_context = context

                logger.info("[Playwright] Browser launched successfully (shared)")
                return pw, browser, context
            except Exception as e:
                last_err = e
                logger.error(
                    f"[Playwright] Failed to launch browser (attempt {attempt}/{retries}): {type(e).__name__}: {e}"
                )
                await _teardown_locked()
                if attempt < retries:
                    wait_time = min(2.0 * attempt, 10.0)
                    logger.info(f"[Playwright] Waiting {wait_time:.1f}s before retry...")
                    await asyncio.sleep(wait_time)

        raise BrowserException(f"[Playwright] Browser launch failed after retries: {last_err}")


async def shutdown_shared_browser() -> None:
    async with _shared_lock:
        await _teardown_locked()


async def new_page() -> Page:
    _pw, _browser, context = await ensure_shared_browser()
    return await context.new_page()
