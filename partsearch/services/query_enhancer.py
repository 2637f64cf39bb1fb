"""산업용 부품 검색어 보강 (규칙 기반 → LLM 단계적 적용).

규칙 검사는 고정 순서로 실행되며, 신뢰도 0.7 이상인 첫 결과가 나오면
즉시 반환합니다 (이후 규칙/LLM 호출 없음).

1. 부품 번호형 토큰 (예: 6203, skf-6203, skf 6203) → "[제조사] <토큰> <도메인 단어>" (0.9)
2. 2단어 이하 일반 카테고리 (예: bearing) → 구체적 검색어 표 (0.8)
3. 설비명 (예: conveyor) → 교체 부품 표 (0.7)
4. 치수 + 카테고리 (예: 25mm bearing, 1/2 inch bolt) → "<치수> <카테고리>" (0.8)

규칙이 없으면 API 키가 있을 때만 LLM을 호출합니다. LLM 실패는 절대
호출자에게 전파하지 않고 원래 검색어를 담은 error_fallback으로 바뀝니다.
"""

from __future__ import annotations

import json
import re
from typing import List, Optional, Sequence

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from partsearch.core.exceptions import EnhancementError
from partsearch.core.logging import logger, sanitize_for_log
from partsearch.schemas.listing_schema import EnhancementMethod, QueryEnhancement
from partsearch.utils.resource_loader import (
    load_category_terms,
    load_default_suggestions,
    load_domain_terms,
    load_equipment_parts,
    load_part_families,
)

from .llm_client import LLMClient


RULE_CONFIDENCE_THRESHOLD = 0.7
PART_NUMBER_CONFIDENCE = 0.9
CATEGORY_CONFIDENCE = 0.8
EQUIPMENT_CONFIDENCE = 0.7
DIMENSION_CONFIDENCE = 0.8
LLM_DEFAULT_CONFIDENCE = 0.6
PASSTHROUGH_CONFIDENCE = 0.3

_TOKEN = re.compile(r"[a-z0-9]+(?:-[a-z0-9]+)*")
_DIMENSION_TOKEN = re.compile(r"\d+(?:\.\d+)?(?:mm|cm|m|in|inch|inches|ft)")
# 25mm, 2.5 cm, 1/2 inch, 1 1/2" (분수 중간 숫자만 잡지 않도록 앞 문자 제한)
_DIMENSION = re.compile(
    r"(?<![\d./])(\d+(?:\.\d+)?(?:\s+\d+/\d+)?|\d+/\d+)\s*(mm|cm|inches|inch|in\b|\"|')"
)
# 부품 번호 앞 제조사 접두어로 보지 않는 단어
_NON_PREFIX_WORDS = frozenset({"a", "an", "the", "for", "of", "and", "or", "with", "part", "no", "size", "new"})
_JSON_FENCE = re.compile(r"```(?:json)?\s*([\s\S]*?)```")

SYSTEM_PROMPT = (
    "You are an expert industrial parts specialist. Your job is to help improve "
    "search queries for industrial parts databases."
)


class LLMEnhancementPayload(BaseModel):
    """LLM 응답 JSON 계약"""
    model_config = ConfigDict(populate_by_name=True)

    enhanced_query: str = Field(..., alias="enhancedQuery")
    alternatives: List[str] = Field(default_factory=list)
    confidence: float = LLM_DEFAULT_CONFIDENCE
    reasoning: Optional[str] = None

    @field_validator("confidence", mode="before")
    @classmethod
    def clamp_confidence(cls, v) -> float:
        if v is None:
            return LLM_DEFAULT_CONFIDENCE
        if isinstance(v, bool) or not isinstance(v, (int, float, str)):
            raise ValueError("confidence must be a number")
        try:
            value = float(v)
        except ValueError:
            raise ValueError("confidence must be a number") from None
        if value != value:  # NaN
            raise ValueError("confidence must be a number")
        return min(1.0, max(0.0, value))

    @field_validator("alternatives", mode="before")
    @classmethod
    def coerce_alternatives(cls, v) -> List[str]:
        if v is None or v == "":
            return []
        if isinstance(v, str):
            return [v.strip()]
        if not isinstance(v, (list, tuple)):
            raise ValueError("alternatives must be a list of strings")
        return [
            str(a).strip()
            for a in v
            if isinstance(a, (str, int, float)) and not isinstance(a, bool) and str(a).strip()
        ]


def build_llm_prompt(query: str) -> str:
    return f"""
I need to enhance this industrial parts search query for better results from suppliers like Grainger, McMaster-Carr, and MSC Direct.

Original query: "{query}"

Please provide:
1. An enhanced search query that will find more specific results
2. 3 alternative search queries if the first doesn't work
3. A confidence score (0-1) for how likely this is to find results

Rules:
- If you see a part number (like 6203, SKF-6203), keep it and add descriptive terms
- For generic terms like "bearing", add specific types or sizes
- For equipment names, suggest common replacement parts
- Use manufacturer part numbers when possible
- Keep queries concise (2-5 words)

Format your response as JSON:
{{
  "enhancedQuery": "specific search term",
  "alternatives": ["alt1", "alt2", "alt3"],
  "confidence": 0.85,
  "reasoning": "why this enhancement works"
}}
"""


class QueryEnhancer:
    """검색어 보강기

    Usage:
        enhancer = QueryEnhancer()
        enhancement = await enhancer.enhance("6203")
        enhancement.enhanced_query  # "6203 bearing"
    """

    def __init__(self, llm_client: Optional[LLMClient] = None):
        self.llm = llm_client or LLMClient()
        self.category_terms = load_category_terms()
        self.domain_terms, self.default_domain_term = load_domain_terms()
        self.equipment_parts = load_equipment_parts()
        self.part_families = load_part_families()
        self.default_suggestions = load_default_suggestions()

    async def enhance(self, query: str) -> QueryEnhancement:
        """검색어 보강 (예외를 던지지 않음)"""
        logger.info(f"[QueryEnhancer] Enhancing query: '{sanitize_for_log(query)}'")

        rule_result = self.rule_based_enhancement(query)
        if rule_result is not None and rule_result.confidence >= RULE_CONFIDENCE_THRESHOLD:
            logger.info(f"[QueryEnhancer] Rule-based enhancement: '{rule_result.enhanced_query}'")
            return rule_result

        if not self.llm.is_configured:
            logger.info("[QueryEnhancer] No enhancement available, using original query")
            return QueryEnhancement(
                original_query=query,
                enhanced_query=query,
                suggestions=self.generate_suggestions(query),
                confidence=PASSTHROUGH_CONFIDENCE,
                method=EnhancementMethod.PASSTHROUGH,
            )

        try:
            result = await self.llm_based_enhancement(query)
            logger.info(f"[QueryEnhancer] LLM enhancement ({result.method.value}): '{result.enhanced_query}'")
            return result
        except EnhancementError as e:
            logger.warning(f"[QueryEnhancer] LLM enhancement failed: {e}")
            return QueryEnhancement(
                original_query=query,
                enhanced_query=query,
                suggestions=self.generate_suggestions(query),
                confidence=PASSTHROUGH_CONFIDENCE,
                method=EnhancementMethod.ERROR_FALLBACK,
                error=e.message,
            )

    # ------------------------------------------------------------------
    # 규칙 기반
    # ------------------------------------------------------------------

    def rule_based_enhancement(self, query: str) -> Optional[QueryEnhancement]:
        """고정 순서 규칙 검사, 임계값을 넘는 첫 결과 반환 (없으면 None)"""
        normalized = " ".join(query.lower().split())
        if not normalized:
            return None

        rules = (
            self._part_number_rule,
            self._category_rule,
            self._equipment_rule,
            self._dimension_rule,
        )
        for rule in rules:
            result = rule(query, normalized)
            if result is not None and result.confidence >= RULE_CONFIDENCE_THRESHOLD:
                return result
        return None

    def _rule_result(
        self, query: str, enhanced: str, suggestions: Sequence[str], confidence: float
    ) -> QueryEnhancement:
        return QueryEnhancement(
            original_query=query,
            enhanced_query=enhanced,
            suggestions=[s for s in suggestions if s != enhanced],
            confidence=confidence,
            method=EnhancementMethod.RULE_BASED,
        )

    def _find_domain_term(self, normalized: str) -> Optional[str]:
        for term in self.domain_terms:
            if re.search(rf"\b{re.escape(term)}s?\b", normalized):
                return term
        return None

    def _family_variants(self, term: str) -> List[str]:
        return list(self.part_families.get(f"{term}s", []))

    def _part_number_rule(self, query: str, normalized: str) -> Optional[QueryEnhancement]:
        tokens = _TOKEN.findall(normalized)
        part_number = None
        prefix = None
        for index, token in enumerate(tokens):
            if not 3 <= len(token) <= 8:
                continue
            if not any(ch.isdigit() for ch in token):
                continue
            if _DIMENSION_TOKEN.fullmatch(token):
                continue
            part_number = token
            if index > 0 and self._is_manufacturer_prefix(tokens[index - 1]):
                prefix = tokens[index - 1]
            break

        if part_number is None:
            return None

        term = self._find_domain_term(normalized) or self.default_domain_term
        variants = [f"{part_number} {variant}" for variant in self._family_variants(term)[:2]]
        if prefix:
            # 제조사 접두어 유지 (예: skf 6203), 번호만으로 찾는 검색어는 대체 검색어로
            enhanced = f"{prefix} {part_number} {term}"
            suggestions = [f"{part_number} {term}"] + variants
        else:
            enhanced = f"{part_number} {term}"
            suggestions = variants or [part_number]
        return self._rule_result(query, enhanced, suggestions, PART_NUMBER_CONFIDENCE)

    def _is_manufacturer_prefix(self, token: str) -> bool:
        if not token.isalpha() or not 2 <= len(token) <= 6:
            return False
        if token in _NON_PREFIX_WORDS:
            return False
        # 카테고리/설비 단어는 접두어가 아님
        if self._find_domain_term(token) or token.rstrip("s") in self.category_terms:
            return False
        return token not in self.equipment_parts

    def _category_rule(self, query: str, normalized: str) -> Optional[QueryEnhancement]:
        # 숫자가 있으면 이미 구체적인 검색어
        if len(normalized.split()) > 2 or any(ch.isdigit() for ch in normalized):
            return None

        for generic, specifics in self.category_terms.items():
            if generic in normalized and specifics:
                return self._rule_result(query, specifics[0], specifics[1:], CATEGORY_CONFIDENCE)
        return None

    def _equipment_rule(self, query: str, normalized: str) -> Optional[QueryEnhancement]:
        for equipment, parts in self.equipment_parts.items():
            if equipment in normalized and parts:
                enhanced = f"{equipment} {parts[0]}"
                suggestions = [f"{equipment} {part}" for part in parts[1:]]
                return self._rule_result(query, enhanced, suggestions, EQUIPMENT_CONFIDENCE)
        return None

    def _dimension_rule(self, query: str, normalized: str) -> Optional[QueryEnhancement]:
        match = _DIMENSION.search(normalized)
        if not match:
            return None

        category = self._find_domain_term(normalized)
        if category is None:
            return None

        size, unit = match.group(1), match.group(2)
        dimension = f"{size} {unit}" if "/" in size else f"{size}{unit}"
        enhanced = f"{dimension} {category}"
        suggestions = [f"{dimension} {variant}" for variant in self._family_variants(category)[:2]]
        return self._rule_result(query, enhanced, suggestions, DIMENSION_CONFIDENCE)

    # ------------------------------------------------------------------
    # LLM
    # ------------------------------------------------------------------

    async def llm_based_enhancement(self, query: str) -> QueryEnhancement:
        """LLM 호출 후 응답 파싱

        Raises:
            EnhancementError: 호출 실패 또는 응답 형식 오류
        """
        content = await self.llm.complete(
            [
                {"role": "system", "content": SYSTEM_PROMPT},
                {"role": "user", "content": build_llm_prompt(query)},
            ]
        )
        try:
            return self.parse_llm_response(query, content)
        except (TypeError, ValueError, KeyError, AttributeError) as e:
            raise EnhancementError(f"Malformed LLM response: {type(e).__name__}") from e

    def parse_llm_response(self, original_query: str, content: str) -> QueryEnhancement:
        """엄격한 JSON 파싱 → 실패 시 줄 단위 휴리스틱"""
        payload = _decode_json(content)
        if payload is not None:
            try:
                parsed = LLMEnhancementPayload.model_validate(payload)
            except ValidationError as e:
                logger.debug(f"[QueryEnhancer] LLM JSON did not match contract: {e.error_count()} error(s)")
            else:
                enhanced = parsed.enhanced_query.strip() or original_query
                return QueryEnhancement(
                    original_query=original_query,
                    enhanced_query=enhanced,
                    suggestions=parsed.alternatives,
                    confidence=parsed.confidence,
                    method=EnhancementMethod.LLM,
                    reasoning=parsed.reasoning,
                )

        logger.info("[QueryEnhancer] Failed to parse LLM response as JSON, using line heuristic")
        return QueryEnhancement(
            original_query=original_query,
            enhanced_query=extract_query_line(content) or original_query,
            suggestions=[],
            confidence=LLM_DEFAULT_CONFIDENCE,
            method=EnhancementMethod.LLM_FALLBACK,
        )

    # ------------------------------------------------------------------
    # 제안/결과 분석
    # ------------------------------------------------------------------

    def generate_suggestions(self, query: str) -> List[str]:
        """부품군 기반 제안 검색어 (최대 3개)"""
        normalized = query.lower()
        suggestions: List[str] = []

        for family, parts in self.part_families.items():
            if family[:-1] in normalized:
                suggestions.extend(parts[:2])

        if not suggestions:
            suggestions = list(self.default_suggestions)

        return suggestions[:3]

    @staticmethod
    def analyze_results(query: str, results: Sequence) -> dict:
        """검색 결과 수에 따른 상태와 개선 팁"""
        if len(results) == 0:
            return {
                "status": "no_results",
                "suggestions": [
                    f'Try "{query} replacement"',
                    f'Search for "{query}" with manufacturer name',
                    f'Use more specific terms like "{query} specifications"',
                ],
            }

        if len(results) < 3:
            return {
                "status": "few_results",
                "suggestions": [
                    "Try broader terms",
                    "Search for compatible alternatives",
                    "Check different suppliers",
                ],
            }

        return {"status": "good_results", "suggestions": []}


def _decode_json(content: str) -> Optional[dict]:
    """응답 전체 또는 ```json 코드 블록을 JSON 객체로 파싱"""
    if not content:
        return None

    candidates = []
    fenced = _JSON_FENCE.search(content)
    if fenced:
        candidates.append(fenced.group(1))
    candidates.append(content)

    for candidate in candidates:
        try:
            decoded = json.loads(candidate.strip())
        except json.JSONDecodeError:
            continue
        if isinstance(decoded, dict):
            return decoded
    return None


def extract_query_line(content: str) -> str:
    """자유 텍스트에서 그럴듯한 검색어 한 줄 추출"""
    lines = [line.strip() for line in (content or "").splitlines() if line.strip()]
    for line in lines:
        lowered = line.lower()
        if "enhanced" in lowered or "search" in lowered:
            value = re.sub(r"^[^:]*:", "", line).strip().strip("\"'`,").strip()
            if value:
                return value
    return ""
