"""Crawler Result Standard Format

크롤러(Static/Rendered) 실행 결과의 표준 형식을 정의합니다.
"""

from dataclasses import dataclass
from typing import Optional, Dict, Any


@dataclass
class RawRecord:
    """소스 한 곳에서 추출한 가공 전 레코드

    Attributes:
        part_number: 공급사 부품 번호
        name: 상품명
        price_text: 가격 원문 (예: "$12.34 each")
        availability_text: 재고 문구 원문 (없으면 빈 문자열)
        product_url: 상품 상세 URL (없으면 None)
        source_id: 공급사 ID
    """

    part_number: str
    name: str
    price_text: str
    availability_text: str = ""
    product_url: Optional[str] = None
    source_id: str = ""

    @property
    def is_promotable(self) -> bool:
        """부품 번호/상품명/가격 원문이 모두 있어야 정규화 대상"""
        return bool(
            (self.part_number or "").strip()
            and (self.name or "").strip()
            and (self.price_text or "").strip()
        )

    @classmethod
    def from_dict(cls, data: Dict[str, Any], source_id: str) -> "RawRecord":
        """딕셔너리(브라우저 evaluate 결과 등)에서 RawRecord 생성

        Args:
            data: 필드 딕셔너리
            source_id: 공급사 ID

        Returns:
            RawRecord 인스턴스
        """
        return cls(
            part_number=str(data.get("part_number") or "").strip(),
            name=str(data.get("name") or "").strip(),
            price_text=str(data.get("price_text") or "").strip(),
            availability_text=str(data.get("availability_text") or "").strip(),
            product_url=(data.get("product_url") or None),
            source_id=source_id,
        )
