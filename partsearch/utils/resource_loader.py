"""리소스 파일(YAML) 로더 유틸리티"""
import os
import yaml
from typing import Any, Dict
from functools import lru_cache

from partsearch.core.logging import logger


def get_resource_path(relative_path: str) -> str:
    """패키지 리소스 절대 경로 반환"""
    # partsearch/utils/resource_loader.py -> partsearch/utils -> partsearch
    base_dir = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
    return os.path.join(base_dir, "resources", relative_path)


@lru_cache(maxsize=32)
def load_yaml_resource(relative_path: str) -> Dict[str, Any]:
    """YAML 리소스 로드 및 캐싱"""
    path = get_resource_path(relative_path)
    if not os.path.exists(path):
        logger.warning(f"Resource not found: {path}")
        return {}

    try:
        with open(path, "r", encoding="utf-8") as f:
            return yaml.safe_load(f) or {}
    except (OSError, yaml.YAMLError) as e:
        logger.error(f"Failed to load YAML resource {path}: {e}")
        return {}


def load_category_terms() -> Dict[str, list[str]]:
    """일반 카테고리 → 구체적 검색어 목록"""
    data = load_yaml_resource("search/categories.yaml")
    return data.get("category_terms", {})


def load_domain_terms() -> tuple[list[str], str]:
    """부품 번호 뒤에 붙일 도메인 단어 후보와 기본값"""
    data = load_yaml_resource("search/categories.yaml")
    return data.get("domain_terms", []), data.get("default_domain_term", "bearing")


def load_part_families() -> Dict[str, list[str]]:
    """제안 검색어 생성용 부품군"""
    data = load_yaml_resource("search/categories.yaml")
    return data.get("part_families", {})


def load_default_suggestions() -> list[str]:
    data = load_yaml_resource("search/categories.yaml")
    return data.get("default_suggestions", [])


def load_equipment_parts() -> Dict[str, list[str]]:
    """설비명 → 교체 부품 목록"""
    data = load_yaml_resource("search/equipment.yaml")
    return data.get("equipment_parts", {})
