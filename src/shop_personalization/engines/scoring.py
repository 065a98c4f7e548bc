"""
Scoring Engine

선호도 프로필 + 인기도 신호로 상품 관련도 점수 계산

점수 (모두 가산, 순서대로):
1. 2.0 x categories[category]
2. 1.5 x brands[brand]
3. 상품 tag마다 tags[tag]
4. 0.5 x priceRanges[bucket(price)]
5. 2.0 x rating
6. 3.0 x log10((sales or 1) + 1)
7. 최근 본 상품이면 전체 점수 x 0.5 (마지막에 적용)
"""

import math
from typing import Collection, Iterable, List, Optional, Sequence, Tuple

from ..models import PreferenceProfile, Product, price_bucket_for
from ..tracker import EventTracker

CATEGORY_WEIGHT = 2.0
BRAND_WEIGHT = 1.5
PRICE_RANGE_WEIGHT = 0.5
RATING_WEIGHT = 2.0
SALES_WEIGHT = 3.0
RECENTLY_VIEWED_PENALTY = 0.5


def score_product(
    product: Product,
    profile: PreferenceProfile,
    recently_viewed: Collection[str] = (),
) -> float:
    """프로필과 최근 본 상품 목록 기준 점수 (순수 함수)"""
    score = 0.0

    if product.category and product.category in profile.categories:
        score += CATEGORY_WEIGHT * profile.categories[product.category]

    if product.brand and product.brand in profile.brands:
        score += BRAND_WEIGHT * profile.brands[product.brand]

    for tag in product.tags:
        if tag in profile.tags:
            score += profile.tags[tag]

    if product.price is not None:
        bucket = price_bucket_for(product.price)
        if bucket in profile.price_ranges:
            score += PRICE_RANGE_WEIGHT * profile.price_ranges[bucket]

    score += RATING_WEIGHT * (product.rating or 0)
    score += SALES_WEIGHT * math.log10((product.sales or 1) + 1)

    # 다양성을 위한 novelty penalty
    if product.id in recently_viewed:
        score *= RECENTLY_VIEWED_PENALTY

    return score


class ScoringEngine:
    """
    개인화 점수 엔진

    EventTracker의 현재 상태를 읽기만 함
    """

    def __init__(self, tracker: EventTracker):
        self.tracker = tracker

    def score(self, product: Product) -> float:
        return score_product(product, self.tracker.profile, set(self.tracker.recently_viewed))

    def rank(
        self,
        products: Iterable[Product],
        limit: int = 10,
        exclude_ids: Collection[str] = (),
        category: Optional[str] = None,
    ) -> List[Tuple[Product, float]]:
        """
        필터링 후 점수 내림차순 정렬 (동점은 원래 순서 유지)

        Args:
            products: 카탈로그
            limit: 최대 개수
            exclude_ids: 제외할 상품 ID
            category: 지정 시 해당 카테고리만

        Returns:
            (Product, score) 리스트
        """
        excluded = {str(pid) for pid in exclude_ids}
        profile = self.tracker.profile
        recent = set(self.tracker.recently_viewed)

        scored = [
            (product, score_product(product, profile, recent))
            for product in products
            if product.id not in excluded and (category is None or product.category == category)
        ]
        # sort()는 stable
        scored.sort(key=lambda item: item[1], reverse=True)
        return scored[:limit]

    def recommend(
        self,
        products: Sequence[Product],
        limit: int = 10,
        exclude_ids: Collection[str] = (),
        category: Optional[str] = None,
    ) -> List[Product]:
        return [product for product, _ in self.rank(products, limit, exclude_ids, category)]
