"""
Recommendation Engines

개인화 점수 / 상품 유사도 계산
"""

from .scoring import ScoringEngine, score_product
from .similarity import SimilarityEngine, similarity

__all__ = [
    "ScoringEngine",
    "score_product",
    "SimilarityEngine",
    "similarity",
]
