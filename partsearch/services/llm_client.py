"""Chat-completion HTTP client for query enhancement."""

from __future__ import annotations

from typing import Any, Optional

import httpx

from partsearch.core.config import settings
from partsearch.core.exceptions import EnhancementError
from partsearch.core.logging import logger


class LLMClient:
    """OpenAI 호환 chat-completion 엔드포인트용 비동기 클라이언트

    낮은 temperature, max_tokens 상한, 고정 타임아웃으로 한 번만 호출합니다.
    모든 실패(네트워크/2xx 외 응답/형식 오류)는 EnhancementError로 변환됩니다.
    """

    def __init__(
        self,
        api_key: Optional[str] = None,
        endpoint: Optional[str] = None,
        model: Optional[str] = None,
        *,
        temperature: Optional[float] = None,
        max_tokens: Optional[int] = None,
        timeout_s: Optional[float] = None,
        http_client: Optional[httpx.AsyncClient] = None,
    ):
        self.api_key = api_key if api_key is not None else settings.llm_api_key
        self.endpoint = endpoint or settings.llm_endpoint
        self.model = model or settings.llm_model
        self.temperature = settings.llm_temperature if temperature is None else temperature
        self.max_tokens = max_tokens or settings.llm_max_tokens
        self.timeout_s = timeout_s or settings.llm_timeout_s
        self._client = http_client
        self._owns_client = http_client is None

    @property
    def is_configured(self) -> bool:
        return bool(self.api_key)

    def _get_client(self) -> httpx.AsyncClient:
        if self._client is None:
            self._client = httpx.AsyncClient(timeout=httpx.Timeout(self.timeout_s))
        return self._client

    async def close(self) -> None:
        if self._client is not None and self._owns_client:
            await self._client.aclose()
            self._client = None

    async def complete(self, messages: list[dict[str, str]]) -> str:
        """메시지 목록을 보내고 첫 번째 choice의 content를 반환

        Raises:
            EnhancementError: 자격 증명 없음, HTTP/네트워크 오류, 응답 형식 오류
        """
        if not self.is_configured:
            raise EnhancementError("LLM API key is not configured")

        payload: dict[str, Any] = {
            "model": self.model,
            "messages": messages,
            "max_tokens": self.max_tokens,
            "temperature": self.temperature,
        }
        headers = {
            "Authorization": f"Bearer {self.api_key}",
            "Content-Type": "application/json",
        }

        client = self._get_client()
        try:
            response = await client.post(self.endpoint, json=payload, headers=headers, timeout=self.timeout_s)
            response.raise_for_status()
            data = response.json()
        except httpx.HTTPStatusError as e:
            raise EnhancementError(f"HTTP {e.response.status_code}") from e
        except httpx.RequestError as e:
            raise EnhancementError(f"Request error: {type(e).__name__}") from e
        except ValueError as e:
            raise EnhancementError("Response body is not JSON") from e

        try:
            content = data["choices"][0]["message"]["content"]
        except (KeyError, IndexError, TypeError) as e:
            raise EnhancementError("Malformed completion response") from e

        if not isinstance(content, str) or not content.strip():
            raise EnhancementError("Empty completion content")

        logger.debug(f"[LLMClient] completion received ({len(content)} chars)")
        return content
