"""Session Limiter - Bounded concurrency guard for rendered fetches

브라우저 엔진 리소스 상한을 지키기 위해 동시에 열 수 있는 Rendered Fetch
세션 수를 제한합니다.

- 상한에 도달하면 대기하지 않고 즉시 CapacityExceeded
- 세션은 async context manager로만 사용 → 성공/예외/타임아웃/취소 모든 경로에서 반환
- 카운터는 lock으로 보호 (스레드에서 호출되어도 안전)

Usage:
    limiter = SessionLimiter(max_sessions=3)

    async with limiter.session() as token:
        ...  # Playwright 작업
"""

from __future__ import annotations

import itertools
import threading
from contextlib import asynccontextmanager
from dataclasses import dataclass, field
from enum import Enum
from time import time
from typing import AsyncIterator, Optional

from partsearch.core.config import settings
from partsearch.core.exceptions import CapacityExceeded
from partsearch.core.logging import logger


class SessionState(str, Enum):
    """세션 토큰 상태 (Idle → Acquired → Released)"""

    IDLE = "idle"
    ACQUIRED = "acquired"
    RELEASED = "released"


@dataclass
class SessionToken:
    """활성 Rendered Fetch 1건에 해당하는 용량 단위 (저장되지 않음)"""

    token_id: int
    acquired_at: float = field(default_factory=time)
    state: SessionState = SessionState.IDLE

    @property
    def is_active(self) -> bool:
        return self.state == SessionState.ACQUIRED


class SessionLimiter:
    """동시 Rendered Fetch 카운팅 가드"""

    def __init__(self, max_sessions: Optional[int] = None):
        capacity = settings.crawler_browser_concurrency if max_sessions is None else max_sessions
        if capacity <= 0:
            raise ValueError("max_sessions must be positive")
        self._capacity = capacity
        self._active = 0
        self._lock = threading.Lock()
        self._ids = itertools.count(1)

    @property
    def capacity(self) -> int:
        return self._capacity

    @property
    def active(self) -> int:
        with self._lock:
            return self._active

    @property
    def available(self) -> int:
        with self._lock:
            return self._capacity - self._active

    def try_acquire(self) -> SessionToken:
        """세션 획득 (대기 없음)

        Raises:
            CapacityExceeded: 이미 상한만큼 활성 세션이 있는 경우
        """
        with self._lock:
            if self._active >= self._capacity:
                logger.warning(
                    f"[SessionLimiter] Capacity reached ({self._active}/{self._capacity}), rejecting"
                )
                raise CapacityExceeded(self._capacity)
            self._active += 1
            token = SessionToken(token_id=next(self._ids))
            token.state = SessionState.ACQUIRED
            active = self._active

        logger.debug(f"[SessionLimiter] Acquired token={token.token_id} ({active}/{self._capacity})")
        return token

    def release(self, token: SessionToken) -> None:
        """세션 반환 (같은 토큰을 두 번 반환해도 한 번만 반영)"""
        with self._lock:
            if token.state != SessionState.ACQUIRED:
                return
            token.state = SessionState.RELEASED
            self._active = max(0, self._active - 1)
            active = self._active

        logger.debug(f"[SessionLimiter] Released token={token.token_id} ({active}/{self._capacity})")

    @asynccontextmanager
    async def session(self) -> AsyncIterator[SessionToken]:
        token = self.try_acquire()
        try:
            yield token
        finally:
            self.release(token)

    def snapshot(self) -> dict:
        with self._lock:
            return {"active": self._active, "capacity": self._capacity}


_shared_limiter: Optional[SessionLimiter] = None
_shared_limiter_lock = threading.Lock()


def get_session_limiter() -> SessionLimiter:
    """프로세스 전역 SessionLimiter (lazy)"""
    global _shared_limiter
    with _shared_limiter_lock:
        if _shared_limiter is None:
            _shared_limiter = SessionLimiter()
        return _shared_limiter
