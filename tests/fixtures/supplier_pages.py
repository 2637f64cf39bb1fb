"""공급사 검색결과 HTML 테스트 자산 (네트워크 독립)

- 단순 문자열만 보관
- pytest fixture 선언하지 않음
"""

MCMASTER_RESULTS = """
<html><body>
<table>
  <tr class="ProductTableRow">
    <td><span class="PartNumber"><a class="PartNumberLink" href="/6383K13">6383K13</a></span></td>
    <td class="ProductDescription">Ball Bearing 6203 Sealed</td>
    <td class="Price">$12.34 each</td>
    <td class="Availability">In stock</td>
  </tr>
  <tr class="ProductTableRow">
    <td><span class="PartNumber">6383K14</span></td>
    <td class="ProductDescription">Ball Bearing 6204 Open</td>
    <td class="Price">$15.00</td>
    <td class="Availability">Out of Stock</td>
  </tr>
  <tr class="ProductTableRow">
    <td><span class="PartNumber">6383K99</span></td>
    <td class="ProductDescription">Bearing without a price</td>
  </tr>
</table>
</body></html>
"""

# 첫 번째 컨테이너 후보(.product-tile)는 없고 두 번째(.search-result)만 있음
MSC_FALLBACK_CONTAINER = """
<html><body>
  <div class="search-result">
    <a class="product-title" href="https://www.mscdirect.com/product/details/03071552">6203 Ball Bearing</a>
    <span class="item-number">MSC-03071552</span>
    <span class="product-price">9.99 USD</span>
  </div>
</body></html>
"""

# 두 컨테이너 후보가 모두 존재 → 첫 번째만 사용
MSC_BOTH_CONTAINERS = """
<html><body>
  <div class="product-tile">
    <a class="product-title" href="/product/details/1">Oil Seal 25x40x7</a>
    <span class="product-number">MSC-1</span>
    <span class="price">$4.10</span>
    <span class="availability-message">Ships in 2 days</span>
  </div>
  <div class="search-result">
    <a class="product-title" href="/product/details/2">Ignored Result</a>
    <span class="product-number">MSC-2</span>
    <span class="price">$1.00</span>
  </div>
</body></html>
"""

NO_RESULTS_PAGE = """
<html><body><div class="no-results">No products matched your search.</div></body></html>
"""
