"""페이지 컨텍스트 안에서의 계단식 필드 추출.

Rendered Fetch는 `PageExtractor` 계약 `(page, profile, container_selector, max_results)
-> list[RawRecord]`에만 의존합니다. 기본 구현은 정적 추출기와 같은 규칙
(후보 순서대로, 첫 번째 비어있지 않은 값)을 브라우저 JS로 실행합니다.
"""

from __future__ import annotations

from typing import Awaitable, Callable, List

from playwright.async_api import Page

from partsearch.crawlers.catalog import SourceProfile
from partsearch.crawlers.result import RawRecord
from partsearch.utils.url_utils import normalize_href


PageExtractor = Callable[[Page, SourceProfile, str, int], Awaitable[List[RawRecord]]]


_EXTRACT_JS = """
({ containerSelector, fields, maxResults }) => {
  const pick = (container, fieldSpec) => {
    for (const selector of fieldSpec.selectors) {
      let el = null;
      try {
        el = container.querySelector(selector);
      } catch (e) {
        continue;
      }
      if (!el) continue;
      const raw = fieldSpec.attribute ? el.getAttribute(fieldSpec.attribute) : el.textContent;
      const value = (raw || '').trim();
      if (value) return value;
    }
    return '';
  };

  const rows = [];
  const containers = Array.from(document.querySelectorAll(containerSelector)).slice(0, maxResults);
  for (const container of containers) {
    const row = {};
    for (const [field, fieldSpec] of Object.entries(fields)) {
      row[field] = pick(container, fieldSpec);
    }
    rows.push(row);
  }
  return rows;
}
"""


def build_field_specs(profile: SourceProfile) -> dict[str, dict]:
    """RawRecord 필드명 → {selectors, attribute}"""
    mapping = {
        "part_number": profile.part_number,
        "name": profile.name,
        "price_text": profile.price,
        "availability_text": profile.availability,
        "product_url": profile.product_url,
    }
    return {
        field: {"selectors": list(sel.selectors), "attribute": sel.attribute}
        for field, sel in mapping.items()
    }


async def evaluate_in_page(
    page: Page,
    profile: SourceProfile,
    container_selector: str,
    max_results: int,
) -> List[RawRecord]:
    rows = await page.evaluate(
        _EXTRACT_JS,
        {
            "containerSelector": container_selector,
            "fields": build_field_specs(profile),
            "maxResults": max_results,
        },
    )

    records: List[RawRecord] = []
    for row in rows or []:
        record = RawRecord.from_dict(row, profile.source_id)
        record.product_url = normalize_href(record.product_url, profile.base_url) or None
        if record.is_promotable:
            records.append(record)
    return records
