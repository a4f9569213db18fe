# vacation_planner/maps_client.py
import logging
import time
from typing import Dict, Optional

import httpx

from .errors import PlaceSourceError

MAPS_API_URL = "https://maps.googleapis.com/maps/api"
DETAIL_FIELDS = "name,opening_hours,formatted_address,adr_address"


class MapsClient:
    """Thin async wrapper around the Google Maps web services."""

    def __init__(self, api_key: str, timeout: float = 20.0,
                 transport: Optional[httpx.AsyncBaseTransport] = None,
                 logger: Optional[logging.Logger] = None):
        self.api_key = api_key
        self.timeout = timeout
        self.transport = transport
        self.log = logger or logging.getLogger(__name__)

    async def _call(self, service: str, params: Dict) -> Dict:
        params = {**params, "key": self.api_key}
        started = time.monotonic()
        try:
            async with httpx.AsyncClient(timeout=self.timeout, transport=self.transport) as client:
                r = await client.get(f"{MAPS_API_URL}/{service}/json", params=params)
                r.raise_for_status()
                data = r.json()
        except httpx.HTTPStatusError as e:
            raise PlaceSourceError(f"Maps API error {e.response.status_code} for {service}") from e
        except httpx.HTTPError as e:
            raise PlaceSourceError(f"Maps API request to {service} failed: {e}") from e

        status = data.get("status", "OK")
        if status not in ("OK", "ZERO_RESULTS"):
            raise PlaceSourceError(f"Maps API {service} returned {status}: {data.get('error_message', '')}")
        self.log.debug("Maps %s call took %.3fs", service, time.monotonic() - started)
        return data

    async def geocode(self, city: str, country: str) -> Dict:
        return await self._call("geocode", {"components": f"locality:{city}|country:{country}"})

    async def nearby_search(self, location: str, place_type: str, radius: int,
                            page_token: str = "", rank_by: str = "prominence") -> Dict:
        if page_token:
            # the token carries the original query
            return await self._call("place/nearbysearch", {"pagetoken": page_token})
        params = {"location": location, "type": place_type, "radius": radius, "rankby": rank_by}
        return await self._call("place/nearbysearch", params)

    async def place_details(self, place_id: str, fields: str = DETAIL_FIELDS) -> Dict:
        data = await self._call("place/details", {"place_id": place_id, "fields": fields})
        self.log.debug("Detailed place search for %s", data.get("result", {}).get("name", place_id))
        return data
