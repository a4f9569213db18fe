# vacation_planner/geocoding.py
import json
import logging
from typing import Dict, Optional, Tuple

from . import config
from .errors import GeocodingError
from .maps_client import MapsClient


class Geocoder:
    """
    Resolves "city, country" to the city center with:
      1) persistent on-disk JSON cache
      2) the Maps geocoding service on a miss
    """

    def __init__(self, client: MapsClient, cache_file: Optional[str] = None,
                 logger: Optional[logging.Logger] = None):
        self.client = client
        self.cache_file = cache_file or config.GEOCODE_CACHE_FILE
        self.log = logger or logging.getLogger(__name__)

    def _read_cache(self) -> Dict[str, Dict]:
        try:
            with open(self.cache_file, "r", encoding="utf-8") as f:
                cache = json.load(f)
        except FileNotFoundError:
            return {}
        except json.JSONDecodeError as e:
            self.log.warning("Ignoring unreadable geocode cache %s: %s", self.cache_file, e)
            return {}
        if not isinstance(cache, dict):
            self.log.warning("Ignoring geocode cache %s: expected an object", self.cache_file)
            return {}
        return cache

    def _write_cache(self, cache: Dict[str, Dict]) -> None:
        with open(self.cache_file, "w", encoding="utf-8") as f:
            json.dump(cache, f, ensure_ascii=False, indent=2)

    async def geocode(self, city: str, country: str) -> Tuple[float, float]:
        key = f"{city.strip().lower()},{country.strip().lower()}"
        cache = self._read_cache()
        if key in cache:
            return cache[key]["lat"], cache[key]["lng"]

        data = await self.client.geocode(city, country)
        results = data.get("results") or []
        if not results:
            raise GeocodingError(f"No geocoding result for {city}, {country}")

        location = results[0]["geometry"]["location"]
        lat, lng = float(location["lat"]), float(location["lng"])
        cache[key] = {"lat": lat, "lng": lng}
        self._write_cache(cache)
        self.log.debug("Geolocation cache miss for %s, %s is %.4f, %.4f", city, country, lat, lng)
        return lat, lng
