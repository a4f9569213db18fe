# vacation_planner/place_source.py
import asyncio
import logging
import math
import time
from typing import Dict, Iterable, List, Optional, Set, Tuple

import pandas as pd

from . import config
from .cache import PlaceCache, PlaceCacheKey
from .data_models import CategorizedPlaces, Category, Place, TimeInterval, Weekday, split_location
from .geocoding import Geocoder
from .maps_client import MapsClient
from .opening_hours import is_open
from .travel_time import haversine_km

# Maps place types searched for each category
PLACE_TYPES = {
    Category.VISIT: ["park", "amusement_park", "art_gallery", "museum"],
    Category.EATERY: ["cafe", "restaurant"],
}

# Estimated spend for a Maps price level
PRICE_BY_LEVEL = {0: 0.0, 1: 10.0, 2: 30.0, 3: 60.0, 4: 100.0}


def categorize(places: Iterable[Place]) -> CategorizedPlaces:
    """Splits places into the eatery and visit clusters, keeping their order."""
    eatery, visit = [], []
    for p in places:
        if p.category is Category.EATERY:
            eatery.append(p)
        elif p.category is Category.VISIT:
            visit.append(p)
        else:
            raise ValueError(f"Unknown place category: {p.category!r}")
    return CategorizedPlaces(eatery=tuple(eatery), visit=tuple(visit))


class PlaceSource:
    """Supplies deduplicated, detail-enriched places around a location."""

    def search(self, location: str, radius: int) -> List[Place]:
        raise NotImplementedError

    def categorized_places(self, location: str, radius: int, weekday: Weekday,
                           interval: TimeInterval, open_predicate=is_open) -> CategorizedPlaces:
        """Places open during the interval on weekday, split by category."""
        places = self.search(location, radius)
        matched = [p for p in places if open_predicate(p, weekday, interval.start, interval.end)]
        return categorize(matched)


# --- Static pools (files / DataFrames) ---

def _cell(value, default):
    if value is None:
        return default
    if isinstance(value, float) and math.isnan(value):
        return default
    return value


def _hours(value) -> Tuple[str, ...]:
    value = _cell(value, ())
    if isinstance(value, str):
        # CSV keeps the weekday lines in one cell
        return tuple(line.strip() for line in value.split("|") if line.strip())
    return tuple(value)


def places_from_frame(df: pd.DataFrame) -> List[Place]:
    """
    Builds places from a DataFrame with columns place_id, name, lat, lng,
    category and optionally price, rating, hours, price_level, address.
    """
    places = []
    for row in df.to_dict(orient="records"):
        price_level = int(_cell(row.get("price_level"), 0))
        places.append(Place(
            place_id=str(row["place_id"]),
            name=str(_cell(row.get("name"), "")),
            location=(float(row["lat"]), float(row["lng"])),
            category=Category.from_symbol(str(row["category"])),
            price=float(_cell(row.get("price"), PRICE_BY_LEVEL.get(price_level, 0.0))),
            rating=float(_cell(row.get("rating"), 0.0)),
            hours=_hours(row.get("hours")),
            price_level=price_level,
            address=str(_cell(row.get("address"), "")),
        ))
    return places


def load_places(path: str) -> List[Place]:
    """Reads a place pool from a .json (records) or .csv file."""
    if path.endswith(".csv"):
        df = pd.read_csv(path, dtype={"place_id": str})
    else:
        df = pd.read_json(path, orient="records", dtype=False)
    return places_from_frame(df)


class StaticPlaceSource(PlaceSource):
    """
    A fixed pool of places, e.g. one city exported to a file.

    When a center is given, searches keep only places within the radius.
    """

    def __init__(self, places: Iterable[Place], center: Optional[Tuple[float, float]] = None):
        unique: Dict[str, Place] = {}
        for p in places:
            unique.setdefault(p.place_id, p)
        self.places = list(unique.values())
        self.center = center

    @classmethod
    def from_file(cls, path: str, center: Optional[Tuple[float, float]] = None) -> "StaticPlaceSource":
        return cls(load_places(path), center=center)

    def search(self, location, radius):
        if self.center is None or radius <= 0:
            return list(self.places)
        lat, lng = self.center
        return [p for p in self.places
                if haversine_km(lat, lng, p.location[0], p.location[1]) * 1000 <= radius]


# --- Google Maps ---

class MapsPlaceSource(PlaceSource):
    """
    Nearby search against Google Maps.

    Each place type of a category is queried for up to ``max_request_times``
    pages until ``min_results`` results have come back. Results lacking
    opening hours get a concurrent detail lookup before parsing.

    With a place cache, a category is served from it once it holds
    ``min_results`` places within the radius; otherwise fresh results are
    merged into it.
    """

    def __init__(self, client: MapsClient, geocoder: Optional[Geocoder] = None,
                 max_request_times: int = config.MAX_REQUEST_TIMES,
                 min_results: int = config.MIN_NUM_RESULTS,
                 max_results: int = config.MAX_NUM_RESULTS,
                 page_delay: float = config.NEARBY_SEARCH_DELAY,
                 place_cache: Optional[PlaceCache] = None,
                 logger: Optional[logging.Logger] = None):
        self.client = client
        self.geocoder = geocoder or Geocoder(client, logger=logger)
        self.max_request_times = max_request_times
        self.min_results = min_results
        self.max_results = max_results
        self.page_delay = page_delay
        self.place_cache = place_cache
        self.log = logger or logging.getLogger(__name__)

    def search(self, location, radius):
        return asyncio.run(self.asearch(location, radius))

    async def asearch(self, location: str, radius: int) -> List[Place]:
        city, country = split_location(location)
        lat, lng = await self.geocoder.geocode(city, country)
        radius = min(radius, config.MAX_SEARCH_RADIUS)

        places: List[Place] = []
        seen: Set[str] = set()
        for category in Category:
            places.extend(await self._category_places(lat, lng, category, radius, seen))
        return places

    async def _category_places(self, lat: float, lng: float, category: Category, radius: int,
                               seen: Set[str]) -> List[Place]:
        if self.place_cache is None:
            return await self.nearby_search(f"{lat},{lng}", category, radius, seen)

        key = PlaceCacheKey(lat, lng, category)
        cached = self.place_cache.get(key)
        nearby = [p for p in cached
                  if haversine_km(lat, lng, p.location[0], p.location[1]) * 1000 <= radius]
        if len(nearby) >= self.min_results:
            self.log.info("Serving %d %s places around %s from cache", len(nearby), category.name, key)
            fresh = [p for p in nearby if p.place_id not in seen]
            seen.update(p.place_id for p in fresh)
            return fresh[:self.max_results]

        found = await self.nearby_search(f"{lat},{lng}", category, radius, seen)
        merged: Dict[str, Place] = {p.place_id: p for p in cached}
        merged.update((p.place_id, p) for p in found)
        self.place_cache.put(key, list(merged.values()))
        return found

    async def nearby_search(self, center: str, category: Category, radius: int,
                            seen: Optional[Set[str]] = None) -> List[Place]:
        place_types = PLACE_TYPES[category]
        next_page_tokens = {t: "" for t in place_types}
        seen = set() if seen is None else seen
        places: List[Place] = []
        total_results = 0
        req_times = 0
        started = time.monotonic()

        while total_results < self.min_results:
            for place_type in place_types:
                if req_times > 0 and not next_page_tokens[place_type]:  # no more pages
                    continue
                resp = await self.client.nearby_search(center, place_type, radius,
                                                       next_page_tokens[place_type])
                results = resp.get("results", [])
                await self._enrich(results)
                places.extend(self._parse(results, category, seen))
                total_results += len(results)
                next_page_tokens[place_type] = resp.get("next_page_token", "")

            req_times += 1
            if req_times == self.max_request_times or not any(next_page_tokens.values()):
                break
            # a next page token takes a moment to become valid
            await asyncio.sleep(self.page_delay)

        self.log.info("Nearby search at %s for %s: %d results, %d places in %.2fs",
                      center, category.name, total_results, len(places), time.monotonic() - started)
        if not places:
            self.log.debug("No %s places found around %s within %dm", category.name, center, radius)
        return places[:self.max_results]

    async def _enrich(self, results: List[Dict]) -> None:
        missing = [r for r in results if not (r.get("opening_hours") or {}).get("weekday_text")]
        if not missing:
            return
        details = await asyncio.gather(
            *(self.client.place_details(r["place_id"]) for r in missing),
            return_exceptions=True,
        )
        for res, detail in zip(missing, details):
            if isinstance(detail, Exception):
                self.log.warning("Detail search failed for %s: %s", res.get("place_id"), detail)
                continue
            found = detail.get("result", {})
            if found.get("opening_hours"):
                res["opening_hours"] = found["opening_hours"]
            if found.get("formatted_address"):
                res["formatted_address"] = found["formatted_address"]

    @staticmethod
    def _parse(results: List[Dict], category: Category, seen: Set[str]) -> List[Place]:
        places = []
        for res in results:
            place_id = res.get("place_id")
            if not place_id or place_id in seen:
                continue
            seen.add(place_id)
            location = res["geometry"]["location"]
            price_level = int(res.get("price_level") or 0)
            places.append(Place(
                place_id=place_id,
                name=res.get("name", ""),
                location=(float(location["lat"]), float(location["lng"])),
                category=category,
                price=PRICE_BY_LEVEL.get(price_level, 0.0),
                rating=float(res.get("rating") or 0.0),
                hours=tuple((res.get("opening_hours") or {}).get("weekday_text") or ()),
                price_level=price_level,
                address=res.get("formatted_address") or res.get("vicinity", ""),
            ))
        return places
