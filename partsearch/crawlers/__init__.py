"""Supplier crawler modules (HTTP static + Playwright rendered).

엔진 계층은 이 패키지의 하위 모듈을 직접 import합니다.
"""

from .catalog import SOURCE_CATALOG, FieldSelectorSet, SourceProfile, get_profile, list_sources
from .executor import FetchStrategy
from .result import RawRecord

__all__ = [
        "SOURCE_CATALOG",
        "FieldSelectorSet",
        "SourceProfile",
        "get_profile",
        "list_sources",
        "FetchStrategy",
        "RawRecord",
]
