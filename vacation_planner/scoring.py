# vacation_planner/scoring.py
from typing import Sequence

from .data_models import Place

# Rating points lost per price level step
PRICE_LEVEL_WEIGHT = 0.25


def score_places(places: Sequence[Place]) -> float:
    """
    Scores an ordered sequence of places; higher is better.

    Composite of the mean rating (0-5) and a penalty on the mean price level.
    Deterministic for identical input.
    """
    if not places:
        return 0.0
    n = len(places)
    mean_rating = sum(p.rating for p in places) / n
    mean_price_level = sum(p.price_level for p in places) / n
    return mean_rating - PRICE_LEVEL_WEIGHT * mean_price_level
