"""설정 관리 - 환경 변수 로드 및 검증"""
from typing import Optional
from pydantic import AliasChoices, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


DEFAULT_USER_AGENTS = [
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 (KHTML, like Gecko) Chrome/120.0.0.0 Safari/537.36",
    "Mozilla/5.0 (Macintosh; Intel Mac OS X 10_15_7) AppleWebKit/537.36 (KHTML, like Gecko) Chrome/120.0.0.0 Safari/537.36",
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64; rv:121.0) Gecko/20100101 Firefox/121.0",
    "Mozilla/5.0 (X11; Linux x86_64) AppleWebKit/537.36 (KHTML, like Gecko) Chrome/120.0.0.0 Safari/537.36",
]


class Settings(BaseSettings):
    """애플리케이션 설정"""

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=False, extra="ignore")

    environment: str = "development"

    # 크롤러 공통
    # 요청마다 무작위로 하나를 골라 User-Agent로 사용합니다.
    crawler_user_agents: list[str] = Field(default_factory=lambda: list(DEFAULT_USER_AGENTS))
    crawler_accept_language: str = "en-US,en;q=0.5"
    crawler_max_results_per_source: int = 10

    # Static Fetch (HTTP 단일 요청)
    crawler_http_timeout_s: float = 30.0
    crawler_http_max_redirects: int = 5
    crawler_http_impersonate: str = "chrome110"
    crawler_http_max_clients: int = 20

    # Rendered Fetch (Playwright 폴백)
    # 동시 브라우저 세션 상한 (초과 요청은 대기하지 않고 즉시 실패)
    crawler_browser_concurrency: int = 3
    crawler_browser_launch_retries: int = 3
    crawler_navigation_timeout_ms: int = 30000
    crawler_navigation_retries: int = 2
    crawler_retry_delay_s: float = 3.0
    crawler_selector_timeout_ms: int = 8000
    crawler_pre_navigation_delay_min_s: float = 1.0
    crawler_pre_navigation_delay_max_s: float = 3.0
    crawler_viewport_width: int = 1366
    crawler_viewport_height: int = 768
    crawler_viewport_jitter: int = 200

    # 검색어 보강 (LLM)
    # OPENAI_API_KEY 또는 LLM_API_KEY 중 먼저 설정된 값을 사용합니다.
    llm_api_key: Optional[str] = Field(
        default=None,
        validation_alias=AliasChoices("llm_api_key", "openai_api_key"),
    )
    llm_endpoint: str = "https://api.openai.com/v1/chat/completions"
    llm_model: str = "gpt-4o-mini"
    llm_temperature: float = 0.1
    llm_max_tokens: int = 200
    llm_timeout_s: float = 10.0

    # 검색 API 계약
    search_min_query_length: int = 2
    search_default_limit: int = 10
    search_max_limit: int = 50

    # 로깅
    log_level: str = "INFO"

    @field_validator("crawler_user_agents")
    @classmethod
    def validate_user_agents(cls, v: list[str]) -> list[str]:
        agents = [ua.strip() for ua in v if ua and ua.strip()]
        if not agents:
            raise ValueError("crawler_user_agents must contain at least one user agent")
        return agents

    @field_validator("crawler_http_timeout_s", "llm_timeout_s")
    @classmethod
    def validate_timeouts(cls, v: float) -> float:
        if v <= 0:
            raise ValueError("timeouts must be positive")
        return v

    @field_validator("crawler_browser_concurrency", "crawler_max_results_per_source")
    @classmethod
    def validate_positive(cls, v: int) -> int:
        if v <= 0:
            raise ValueError("value must be positive")
        return v

    @field_validator("crawler_navigation_retries", "crawler_http_max_redirects")
    @classmethod
    def validate_non_negative(cls, v: int) -> int:
        if v < 0:
            raise ValueError("value must be >= 0")
        return v

    @field_validator("llm_temperature")
    @classmethod
    def validate_temperature(cls, v: float) -> float:
        if not 0.0 <= v <= 2.0:
            raise ValueError("llm_temperature must be between 0 and 2")
        return v

    @field_validator("llm_api_key")
    @classmethod
    def validate_api_key(cls, v: Optional[str]) -> Optional[str]:
        if v is None or not v.strip():
            return None
        return v.strip()

    @property
    def has_llm_credentials(self) -> bool:
        return bool(self.llm_api_key)


settings = Settings()
