"""전역 테스트 설정

역할:
- 테스트 환경 구성
- 공통 Dummy/Fake 주입

금지:
- 실제 네트워크 호출
- 실제 브라우저 실행
"""

from __future__ import annotations

import os
import sys
from pathlib import Path

import pytest


# 프로젝트 루트를 경로에 추가
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from partsearch.crawlers.catalog import SourceProfile, get_profile  # noqa: E402
from partsearch.services.llm_client import LLMClient  # noqa: E402
from partsearch.services.query_enhancer import QueryEnhancer  # noqa: E402


@pytest.fixture(scope="session", autouse=True)
def test_env() -> None:
    """테스트 환경 변수 설정 (세션 전역)"""
    os.environ["ENVIRONMENT"] = "test"
    os.environ["LOG_LEVEL"] = "INFO"


@pytest.fixture
def offline_enhancer() -> QueryEnhancer:
    """API 키 없는 보강기 (규칙/passthrough만 사용)"""
    return QueryEnhancer(llm_client=LLMClient(api_key=""))


@pytest.fixture
def mcmaster() -> SourceProfile:
    return get_profile("mcmaster")


@pytest.fixture
def mscdirect() -> SourceProfile:
    return get_profile("mscdirect")
