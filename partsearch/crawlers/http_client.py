"""공유 HTTP 클라이언트 (curl_cffi)

- Static Fetch에서 요청마다 AsyncSession을 만들면 TLS/커넥션 오버헤드가 커져서
  타임아웃/지연이 악화될 수 있어 프로세스 단위로 세션을 재사용합니다.
- User-Agent는 요청마다 무작위로 바꿉니다.
- 종료 시 close()로 정리합니다.
"""

from __future__ import annotations

import asyncio
import random
from typing import Optional, Dict

from curl_cffi.requests import AsyncSession

from partsearch.core.config import settings
from partsearch.core.exceptions import TransportError
from partsearch.core.logging import logger


def pick_user_agent() -> str:
    return random.choice(settings.crawler_user_agents)


def browser_headers(user_agent: Optional[str] = None) -> Dict[str, str]:
    """브라우저와 비슷한 기본 요청 헤더"""
    return {
        "User-Agent": user_agent or pick_user_agent(),
        "Accept": "text/html,application/xhtml+xml,application/xml;q=0.9,image/avif,image/webp,*/*;q=0.8",
        "Accept-Language": settings.crawler_accept_language,
        "Accept-Encoding": "gzip, deflate, br",
        "Cache-Control": "no-cache",
        "Pragma": "no-cache",
    }


class SharedHttpClient:
    def __init__(self) -> None:
        self._lock = asyncio.Lock()
        self._session: Optional[AsyncSession] = None

    async def _ensure_session(self) -> AsyncSession:
        async with self._lock:
            if self._session is not None:
                return self._session
            self._session = AsyncSession(
                impersonate=settings.crawler_http_impersonate,
                max_clients=settings.crawler_http_max_clients,
                trust_env=False,
            )
            return self._session

    async def get_text(
        self,
        url: str,
        *,
        timeout_s: float,
        headers: Optional[Dict[str, str]] = None,
        max_redirects: Optional[int] = None,
    ) -> tuple[int, str]:
        """GET 후 (status, body) 반환

        Raises:
            TransportError: 연결 실패/타임아웃/리다이렉트 후 2xx가 아닌 응답
        """
        sess = await self._ensure_session()
        redirects = settings.crawler_http_max_redirects if max_redirects is None else max_redirects
        try:
            resp = await sess.get(
                url,
                headers=headers or browser_headers(),
                timeout=timeout_s,
                allow_redirects=redirects > 0,
                max_redirects=redirects,
            )
        except Exception as e:
            logger.info(f"[HTTP_CLIENT] GET failed: {type(e).__name__}: {repr(e)}")
            raise TransportError(url, f"{type(e).__name__}: {e}") from e

        status = getattr(resp, "status_code", 0) or 0
        if not 200 <= status < 300:
            logger.info(f"[HTTP_CLIENT] GET non-2xx: status={status} url={url}")
            raise TransportError(url, f"HTTP {status}", status_code=status)

        return status, getattr(resp, "text", "") or ""

    async def close(self) -> None:
        async with self._lock:
            if self._session is None:
                return
            try:
                await self._session.close()
            except Exception as e:
                logger.warning(f"[HTTP_CLIENT] close failed: {type(e).__name__}: {e}")
            self._session = None


_shared_http_client = SharedHttpClient()


def get_shared_http_client() -> SharedHttpClient:
    return _shared_http_client


async def shutdown_shared_http_client() -> None:
    await _shared_http_client.close()
