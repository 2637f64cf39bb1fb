"""테스트 자산 레이어

규칙:
- 엔진/네트워크 의존 없음
- 공급사 HTML은 supplier_pages, 가짜 객체는 fakes
"""
