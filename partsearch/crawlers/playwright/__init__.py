"""Playwright module for rendered supplier fetches."""

from .browser import ensure_shared_browser, shutdown_shared_browser, new_page
from .pages import configure_page, random_viewport
from .extraction import PageExtractor, evaluate_in_page

__all__ = [
    "ensure_shared_browser",
    "shutdown_shared_browser",
    "new_page",
    "configure_page",
    "random_viewport",
    "PageExtractor",
    "evaluate_in_page",
]
