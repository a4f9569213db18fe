# vacation_planner/cache.py
import json
import logging
import os
import threading
from dataclasses import dataclass
from typing import Dict, List, Optional, Tuple

from .data_models import Category, Place, SlotSolution, TimeInterval, Weekday


@dataclass(frozen=True)
class SolutionCacheKey:
    city: str
    country: str
    radius: int
    tags: Tuple[str, ...]
    intervals: Tuple[TimeInterval, ...]
    weekday: Weekday

    def __str__(self) -> str:
        intervals = "_".join(f"{i.start}-{i.end}" for i in self.intervals)
        return ":".join([
            "slot_solution",
            self.city.strip().lower(),
            self.country.strip().lower(),
            str(self.radius),
            "".join(self.tags).upper(),
            intervals,
            self.weekday.name.lower(),
        ])


@dataclass(frozen=True)
class PlaceCacheKey:
    """Places of one category found around a geocoded center."""
    lat: float
    lng: float
    category: Category

    def __str__(self) -> str:
        return f"places:{self.lat:.4f},{self.lng:.4f}:{self.category.name.lower()}"


class JsonFileStore:
    """Key-value store kept in a single JSON object on disk."""

    def __init__(self, path: str, logger: Optional[logging.Logger] = None):
        self.path = path
        self.log = logger or logging.getLogger(__name__)
        self._lock = threading.Lock()

    def _read(self) -> Dict[str, object]:
        try:
            with open(self.path, "r", encoding="utf-8") as f:
                cache = json.load(f)
        except FileNotFoundError:
            return {}
        except json.JSONDecodeError as e:
            self.log.warning("Ignoring unreadable cache %s: %s", self.path, e)
            return {}
        if not isinstance(cache, dict):
            self.log.warning("Ignoring cache %s: expected an object, got %s", self.path, type(cache).__name__)
            return {}
        return cache

    def _write(self, cache: Dict[str, object]) -> None:
        directory = os.path.dirname(self.path)
        if directory:
            os.makedirs(directory, exist_ok=True)
        with open(self.path, "w", encoding="utf-8") as f:
            json.dump(cache, f, ensure_ascii=False, indent=2)

    def load(self, key: str):
        with self._lock:
            return self._read().get(key)

    def store(self, key: str, value) -> None:
        with self._lock:
            cache = self._read()
            cache[key] = value
            self._write(cache)


# --- Slot solutions ---

class SolutionCache:
    """Stores computed slot solutions. Staleness is the store's business."""

    def get(self, key: SolutionCacheKey) -> Optional[SlotSolution]:
        raise NotImplementedError

    def put(self, key: SolutionCacheKey, solution: SlotSolution) -> None:
        raise NotImplementedError


def _solution(data, log: logging.Logger) -> Optional[SlotSolution]:
    if data is None:
        return None
    try:
        return SlotSolution.from_dict(data)
    except (KeyError, TypeError, ValueError) as e:
        log.warning("Ignoring malformed cached slot solution: %s", e)
        return None


class InMemorySolutionCache(SolutionCache):

    def __init__(self, logger: Optional[logging.Logger] = None):
        self._store: Dict[str, dict] = {}
        self._lock = threading.Lock()
        self.log = logger or logging.getLogger(__name__)

    def get(self, key):
        with self._lock:
            data = self._store.get(str(key))
        return _solution(data, self.log)

    def put(self, key, solution):
        with self._lock:
            self._store[str(key)] = solution.to_dict()

    def __len__(self):
        return len(self._store)


class JsonFileSolutionCache(JsonFileStore, SolutionCache):
    """Persistent slot solution cache in a single JSON file."""

    def get(self, key):
        return _solution(self.load(str(key)), self.log)

    def put(self, key, solution):
        self.store(str(key), solution.to_dict())


# --- Places ---

class PlaceCache:
    """Stores places found by nearby searches, per center and category."""

    def get(self, key: PlaceCacheKey) -> List[Place]:
        raise NotImplementedError

    def put(self, key: PlaceCacheKey, places: List[Place]) -> None:
        raise NotImplementedError


class InMemoryPlaceCache(PlaceCache):

    def __init__(self):
        self._store: Dict[str, List[Place]] = {}
        self._lock = threading.Lock()

    def get(self, key):
        with self._lock:
            return list(self._store.get(str(key), []))

    def put(self, key, places):
        with self._lock:
            self._store[str(key)] = list(places)


class JsonFilePlaceCache(JsonFileStore, PlaceCache):
    """Persistent place cache in a single JSON file."""

    def get(self, key):
        data = self.load(str(key)) or []
        try:
            return [Place.from_dict(p) for p in data]
        except (KeyError, TypeError, ValueError) as e:
            self.log.warning("Ignoring malformed cached places for %s: %s", key, e)
            return []

    def put(self, key, places):
        self.store(str(key), [p.to_dict() for p in places])
