"""URL 파싱 유틸리티"""
from typing import Optional
from urllib.parse import urljoin


def normalize_href(href: Optional[str], base_url: str) -> str:
    """상대/프로토콜-상대 href를 절대 URL로 정규화합니다.

    - "//host/path" -> "https://host/path"
    - "/path" 또는 "path" -> base_url 기준 절대 URL
    - "http(s)://..." -> 그대로
    - "javascript:", "#..." 등 이동 불가 링크 -> ""
    """
    if not href:
        return ""

    h = href.strip()
    if not h or h.startswith("#"):
        return ""

    lowered = h.lower()
    if lowered.startswith(("javascript:", "mailto:", "tel:", "data:")):
        return ""

    if h.startswith("//"):
        return f"https:{h}"

    if lowered.startswith(("http://", "https://")):
        return h

    return urljoin(base_url.rstrip("/") + "/", h)
