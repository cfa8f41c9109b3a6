"""Recommendation services"""

from .neighbors import NeighborResolver
from .prediction import ScorePredictor
from .recommendation import RecommendationEngine

__all__ = [
    "NeighborResolver",
    "ScorePredictor",
    "RecommendationEngine",
]
