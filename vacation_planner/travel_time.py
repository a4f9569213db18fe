# vacation_planner/travel_time.py
from typing import Sequence

import numpy as np

from . import config
from .data_models import Place

EARTH_RADIUS_KM = 6371


def haversine_km(lat1, lon1, lat2, lon2):
    """Great-circle distance; accepts scalars or numpy arrays."""
    lat1, lon1, lat2, lon2 = map(np.radians, [lat1, lon1, lat2, lon2])
    dlat = lat2 - lat1
    dlon = lon2 - lon1
    a = np.sin(dlat / 2) ** 2 + np.cos(lat1) * np.cos(lat2) * np.sin(dlon / 2) ** 2
    c = 2 * np.arctan2(np.sqrt(a), np.sqrt(1 - a))
    return EARTH_RADIUS_KM * c


def travel_time_minutes(places: Sequence[Place], travel_speed_kmph: float = None) -> float:
    """
    Minutes spent travelling between consecutive places, in order.
    (Straight-line distance at a fixed speed; a routing API would be more accurate.)
    """
    if len(places) < 2:
        return 0.0
    speed = travel_speed_kmph or config.TRAVEL_SPEED_KMPH
    coords = np.array([p.location for p in places], dtype=float)
    distance_km = haversine_km(coords[:-1, 0], coords[:-1, 1], coords[1:, 0], coords[1:, 1])
    # Time in minutes = (Distance / Speed) * 60
    return float(distance_km.sum() / speed * 60)
