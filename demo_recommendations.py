#!/usr/bin/env python3
"""
Shop Personalization Demo

입력:
- 카탈로그 JSON 파일 경로 (선택, 없으면 내장 샘플)

로직:
1. 설정(STORAGE_BACKEND 등)으로 저장소 / 캐시 / 추천 서비스 생성
2. 카탈로그 로드 (캐시 경유)
3. 조회 -> 장바구니 -> 구매 순으로 브라우징 세션 재생
4. 추천 화면별 결과 출력
"""

import argparse
import json
from pathlib import Path
from typing import Any, Dict, List

from shop_personalization import Product, create_services


SAMPLE_CATALOG: List[Dict[str, Any]] = [
    {"id": "p-1", "name": "Robe madras", "category": "robes", "brand": "Kreyol",
     "tags": ["coton", "ete"], "price": 4500, "rating": 4.6, "sales": 320},
    {"id": "p-2", "name": "Robe lin", "category": "robes", "brand": "Lakay",
     "tags": ["lin", "ete"], "price": 5200, "rating": 4.1, "sales": 85},
    {"id": "p-3", "name": "Sandales cuir", "category": "chaussures", "brand": "Kreyol",
     "tags": ["cuir"], "price": 3800, "rating": 4.8, "sales": 510},
    {"id": "p-4", "name": "Chemise guayabera", "category": "chemises", "brand": "Lakay",
     "tags": ["coton"], "price": 2900, "rating": 3.9, "sales": 40},
    {"id": "p-5", "name": "Sac paille", "category": "accessoires", "brand": "Atelier",
     "tags": ["ete", "artisanal"], "price": 900, "rating": 4.4, "sales": 150},
    {"id": "p-6", "name": "Robe soiree", "category": "robes", "brand": "Maison Jacmel",
     "tags": ["soie"], "price": 24000, "rating": 4.9, "sales": 12},
]

SESSION = [
    ("view", {"product_id": "p-2", "category": "robes", "brand": "Lakay", "tags": ["lin", "ete"], "price": 5200}),
    ("view", {"product_id": "p-5", "category": "accessoires", "tags": ["ete", "artisanal"], "price": 900}),
    ("search", {"category": "robes", "tags": ["ete"]}),
    ("add_to_cart", {"product_id": "p-2", "category": "robes", "brand": "Lakay", "price": 5200}),
    ("purchase", {"product_id": "p-2", "category": "robes", "brand": "Lakay", "price": 5200}),
]


def load_catalog(path: str) -> List[Dict[str, Any]]:
    with open(path, "r", encoding="utf-8") as f:
        return json.load(f)


def print_section(title: str, products: List[Product]):
    print(f"\n[{title}]")
    if not products:
        print("  (none)")
    for p in products:
        print(f"  - {p.id:<5} {p.extra.get('name', ''):<20} {p.category or '-':<12} rating={p.rating}")


def run_demo(catalog_path: str = None, clear: bool = False):
    if catalog_path and Path(catalog_path).exists():
        provider = lambda: load_catalog(catalog_path)
    else:
        provider = lambda: SAMPLE_CATALOG

    services = create_services(provider=provider, fallback=SAMPLE_CATALOG)
    recommender = services.recommender

    if clear:
        recommender.clear_user_data()
        services.cache.clear()

    products = services.catalog.load()
    print(f"[SYSTEM] Catalog: {len(products)} products")

    print_section("Before browsing", recommender.get_recommendations(products, limit=3))

    for kind, payload in SESSION:
        event = recommender.track_event(kind, payload)
        print(f"[EVENT] {event.kind.value:<12} {payload}")

    print(f"\n[PROFILE] {recommender.profile.to_dict()}")
    print(f"[PERSIST] ok={recommender.last_persist_result.ok}")

    viewed = products[1]
    print_section("Recommended for you", recommender.get_recommendations(products, limit=4))
    print_section(f"Similar to {viewed.id}", recommender.get_similar_products(viewed, products))
    print_section(f"Bought together with {viewed.id}", recommender.get_frequently_bought_together(viewed, products))
    print_section("Recently viewed", recommender.get_recently_viewed(products))
    print_section("Based on your browsing", recommender.get_based_on_browsing(products))

    print(f"\n[CACHE] {services.cache.get_stats()}")

    print("\n" + "=" * 60)
    print("  Demo Complete")
    print("=" * 60 + "\n")


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Shop personalization demo")
    parser.add_argument("--catalog", help="catalog JSON file (list of products)")
    parser.add_argument("--clear", action="store_true", help="clear stored user data and cache first")
    args = parser.parse_args()

    try:
        run_demo(args.catalog, args.clear)
    except KeyboardInterrupt:
        print("\n\n[SYSTEM] Demo interrupted.")
