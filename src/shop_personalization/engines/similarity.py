"""
Similarity Engine

상품 간 유사도 기반 추천 ("비슷한 상품", "함께 구매한 상품", "최근 본 상품" 등)

모든 정렬은 stable (동점이면 카탈로그 순서 유지)
"""

from typing import Dict, List, Sequence

from ..models import Product

SAME_CATEGORY_SCORE = 5.0
SAME_BRAND_SCORE = 3.0
CLOSE_PRICE_SCORE = 2.0         # 가격 차이 < 20%
NEAR_PRICE_SCORE = 1.0          # 가격 차이 < 50%
SHARED_TAG_SCORE = 1.5


def similarity(base: Product, other: Product) -> float:
    """
    두 상품의 유사도

    category/brand는 양쪽 모두 값이 있을 때만 비교.
    base 가격이 없거나 0 이하이면 가격 항목은 건너뜀.
    """
    score = 0.0

    if base.category is not None and base.category == other.category:
        score += SAME_CATEGORY_SCORE

    if base.brand is not None and base.brand == other.brand:
        score += SAME_BRAND_SCORE

    if base.price is not None and base.price > 0 and other.price is not None:
        price_diff = abs(other.price - base.price) / base.price
        if price_diff < 0.2:
            score += CLOSE_PRICE_SCORE
        elif price_diff < 0.5:
            score += NEAR_PRICE_SCORE

    if base.tags and other.tags:
        shared = [tag for tag in base.tags if tag in other.tags]
        score += SHARED_TAG_SCORE * len(shared)

    return score


def _index_by_id(products: Sequence[Product]) -> Dict[str, Product]:
    """id -> 첫 번째로 등장한 상품"""
    index: Dict[str, Product] = {}
    for product in products:
        index.setdefault(product.id, product)
    return index


class SimilarityEngine:
    """상품 간 유사도 / 최근 본 상품 기반 추천"""

    def similar_products(self, product: Product, products: Sequence[Product], limit: int = 4) -> List[Product]:
        """본 상품을 제외한 유사도 상위 limit개"""
        scored = [(p, similarity(product, p)) for p in products if p.id != product.id]
        scored.sort(key=lambda item: item[1], reverse=True)
        return [p for p, _ in scored[:limit]]

    def frequently_bought_together(
        self,
        product: Product,
        products: Sequence[Product],
        limit: int = 3,
        min_rating: float = 4.0,
    ) -> List[Product]:
        """
        "함께 구매한 상품"

        NOTE: 실제 구매 조합 분석 없음. 같은 카테고리 + 평점 min_rating 이상을
              카탈로그 순서대로 limit개 반환하는 휴리스틱
        """
        if product.category is None:
            return []

        matches = [
            p for p in products
            if p.id != product.id
            and p.category == product.category
            and (p.rating or 0) >= min_rating
        ]
        return matches[:limit]

    def recently_viewed(self, products: Sequence[Product], recent_ids: Sequence[str]) -> List[Product]:
        """최근 본 ID 목록을 카탈로그에 투영 (카탈로그에 없는 ID는 버림)"""
        index = _index_by_id(products)
        return [index[pid] for pid in recent_ids if pid in index]

    def trending(self, products: Sequence[Product], limit: int = 6) -> List[Product]:
        """판매량 내림차순"""
        return sorted(products, key=lambda p: p.sales or 0, reverse=True)[:limit]

    def based_on_browsing(
        self,
        products: Sequence[Product],
        recent_ids: Sequence[str],
        limit: int = 6,
    ) -> List[Product]:
        """
        "최근 둘러본 상품 기반 추천"

        최근 본 상품이 없으면 trending으로 대체.
        있으면 최근 본 상품들의 카테고리 중 아직 보지 않은 상품을 평점 내림차순으로.
        """
        if not recent_ids:
            return self.trending(products, limit)

        viewed = self.recently_viewed(products, recent_ids)
        categories = {p.category for p in viewed if p.category is not None}
        seen = set(recent_ids)

        candidates = [p for p in products if p.category in categories and p.id not in seen]
        candidates.sort(key=lambda p: p.rating or 0, reverse=True)
        return candidates[:limit]
