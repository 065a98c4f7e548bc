"""
캐시 키 / TTL 정의

같은 계열의 키는 같은 prefix를 써서 invalidate_pattern으로 한 번에 무효화
    예: cache.invalidate_pattern(CacheKeys.family(CacheKeys.category_products("robes")))
"""

import re


class CacheKeys:
    """캐시 키 prefix 및 키 생성기"""
    PRODUCTS_CATALOG = "products_catalog"
    POPULAR_PRODUCTS = "popular_products"
    FLASH_SALE = "flash_sale_products"

    @staticmethod
    def product(product_id) -> str:
        return f"product:{product_id}"

    @staticmethod
    def category_products(category: str) -> str:
        return f"category:{category}"

    @staticmethod
    def search_results(query: str) -> str:
        return f"search:{query}"

    @staticmethod
    def vendor_stats(vendor_id: str) -> str:
        return f"vendor_stats:{vendor_id}"

    @staticmethod
    def user_cart(user_id: str) -> str:
        return f"cart:{user_id}"

    @staticmethod
    def family(prefix: str) -> "re.Pattern":
        """prefix로 시작하는 모든 키에 매칭되는 패턴"""
        return re.compile(f"^{re.escape(prefix)}")


class CacheTTL:
    """캐시 TTL (ms)"""
    PRODUCTS_CATALOG = 5 * 60 * 1000        # 5분
    POPULAR_PRODUCTS = 60 * 60 * 1000       # 1시간
    VENDOR_STATS = 15 * 60 * 1000           # 15분
    PRODUCT = 30 * 60 * 1000                # 30분
    CATEGORY_PRODUCTS = 30 * 60 * 1000      # 30분
    SEARCH_RESULTS = 15 * 60 * 1000         # 15분
    USER_CART = 24 * 60 * 60 * 1000         # 24시간
    FLASH_SALE = 5 * 60 * 1000              # 5분
