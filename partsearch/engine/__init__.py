"""Engine Layer - Search cascade and per-source execution

This module provides the core engine layer, implementing:
- SearchOrchestrator: Enhanced → suggestion → original query cascade
- SupplierSearch: Concurrent fan-out over every configured supplier
- SourceFetcher: Static → Rendered fallback for one supplier
- ExecutionStrategy: Fallback and failure-isolation decisions
- SessionLimiter: Ceiling on concurrent browser sessions
- SmartSearchResult: Cascade outcome format
"""

from .orchestrator import SearchOrchestrator
from .result import SearchMethod, SmartSearchResult
from .session_limiter import SessionLimiter, SessionToken, get_session_limiter
from .source_fetcher import SourceFetcher
from .strategy import ExecutionPath, ExecutionStrategy
from .supplier_search import SupplierSearch

__all__ = [
    "SearchOrchestrator",
    "SupplierSearch",
    "SourceFetcher",
    "SearchMethod",
    "SmartSearchResult",
    "SessionLimiter",
    "SessionToken",
    "get_session_limiter",
    "ExecutionStrategy",
    "ExecutionPath",
]
