"""공급사 검색결과 HTML - 계단식(cascading) 필드 추출.

네트워크(fetch)와 분리된 순수 파싱 로직입니다.

- 후보 selector는 반드시 주어진 순서대로 시도합니다.
- 비어있지 않은 첫 번째 결과를 그대로 반환합니다 (병합/점수화 없음).
- 컨테이너도 같은 규칙: 1개 이상 매칭된 첫 번째 selector가 이기고
  나머지 후보는 시도하지 않습니다.
"""

from __future__ import annotations

from typing import Iterable, List, Optional, Union

from selectolax.parser import HTMLParser, Node

from partsearch.core.logging import logger
from partsearch.utils.url_utils import normalize_href

from .catalog import FieldSelectorSet, SourceProfile
from .result import RawRecord


def _node_value(node: Node, attribute: Optional[str]) -> str:
    if attribute:
        return (node.attributes.get(attribute) or "").strip()
    return (node.text() or "").strip()


def extract(
    container: Union[Node, HTMLParser],
    candidates: Union[FieldSelectorSet, Iterable[str]],
    attribute: Optional[str] = None,
) -> str:
    """후보 selector를 순서대로 시도해 첫 번째 비어있지 않은 값을 반환.

    Args:
        container: 검색 범위 (상품 컨테이너 노드)
        candidates: 순서 있는 후보 selector 목록
        attribute: 텍스트 대신 읽을 속성 이름 (FieldSelectorSet이면 그 설정을 사용)

    Returns:
        trim된 텍스트/속성 값, 없으면 ""
    """
    if isinstance(candidates, FieldSelectorSet):
        attribute = attribute or candidates.attribute
        selectors: Iterable[str] = candidates.selectors
    else:
        selectors = candidates

    for selector in selectors:
        node = container.css_first(selector)
        if node is None:
            continue
        value = _node_value(node, attribute)
        if value:
            return value
    return ""


def select_containers(
    root: Union[Node, HTMLParser],
    candidates: Union[FieldSelectorSet, Iterable[str]],
) -> tuple[Optional[str], List[Node]]:
    """1개 이상 매칭되는 첫 번째 컨테이너 selector와 그 노드 목록"""
    for selector in candidates:
        nodes = root.css(selector)
        if nodes:
            return selector, nodes
    return None, []


def extract_fields(container: Union[Node, HTMLParser], profile: SourceProfile) -> RawRecord:
    """컨테이너 하나에서 모든 필드를 추출 (승격 여부 판단 전)"""
    href = extract(container, profile.product_url)
    product_url = normalize_href(href, profile.base_url) or None
    return RawRecord(
        part_number=extract(container, profile.part_number),
        name=extract(container, profile.name),
        price_text=extract(container, profile.price),
        availability_text=extract(container, profile.availability),
        product_url=product_url,
        source_id=profile.source_id,
    )


def extract_records(html: str, profile: SourceProfile, max_results: int) -> List[RawRecord]:
    """검색결과 HTML → RawRecord 목록

    매칭이 없으면 빈 목록을 반환합니다 (예외 없음).
    """
    if not html or max_results <= 0:
        return []

    parser = HTMLParser(html)
    selector, containers = select_containers(parser, profile.container)
    if selector is None:
        logger.debug(f"[Extractor] {profile.source_id}: no container selector matched")
        return []

    logger.debug(
        f"[Extractor] {profile.source_id}: {len(containers)} containers with selector '{selector}'"
    )

    records: List[RawRecord] = []
    for container in containers[:max_results]:
        record = extract_fields(container, profile)
        if record.is_promotable:
            records.append(record)
    return records
