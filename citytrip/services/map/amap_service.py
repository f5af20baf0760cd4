import logging
import math
from typing import Dict, List, Optional

import httpx

from citytrip.config import settings
from citytrip.config.stations import get_corridor_stations
from citytrip.exceptions import ProviderUnavailableError
from citytrip.models.request import GeoPoint
from citytrip.models.response import (
    DrivingEstimate,
    Itinerary,
    SubwaySegment,
    WalkSegment,
)
from citytrip.services.map.map_service import MapService
from citytrip.services.map.quota import ProviderQuota, provider_quota

logger = logging.getLogger(__name__)

DEFAULT_TRANSIT_FARE = 9.0


class AmapService(MapService):
    """AMap (Gaode) web service implementation with simulated-data fallback"""

    def __init__(
        self,
        api_key: Optional[str] = None,
        *,
        quota: Optional[ProviderQuota] = None,
        mock_fallback: Optional[bool] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.api_key = api_key if api_key is not None else settings.amap_key
        self.transit_url = f"{settings.amap_base_url}/direction/transit/integrated"
        self.driving_url = f"{settings.amap_base_url}/direction/driving"
        self.quota = quota or provider_quota
        self.mock_fallback = (
            settings.amap_mock_fallback if mock_fallback is None else mock_fallback
        )
        self._transport = transport

        if not self.api_key:
            if not self.mock_fallback:
                raise ValueError("AMap API key is required when mock fallback is off")
            logger.warning("AMAP_KEY is not set, simulated itineraries will be used")

    async def fetch_transit_itineraries(
        self, origin: GeoPoint, destination: GeoPoint
    ) -> List[Itinerary]:
        """Integrated transit search (strategy 0: fastest), best first"""
        if not self.api_key:
            return self._mock_transit_itineraries()

        params = {
            "origin": self._format_location(origin),
            "destination": self._format_location(destination),
            "city": settings.amap_city,
            "cityd": settings.amap_city,
            "strategy": 0,
        }

        try:
            data = await self._get("transit", self.transit_url, params)
        except ProviderUnavailableError as e:
            if not self.mock_fallback:
                raise
            logger.warning(f"Transit query failed, using simulated data: {e}")
            return self._mock_transit_itineraries()

        route = data.get("route") or {}
        return self._parse_transit_itineraries(route.get("transits") or [])

    async def fetch_driving_estimate(
        self, origin: GeoPoint, destination: GeoPoint
    ) -> Optional[DrivingEstimate]:
        """Driving route (strategy 10: live traffic), used for taxi legs"""
        if not self.api_key:
            return self._mock_driving_estimate()

        params = {
            "origin": self._format_location(origin),
            "destination": self._format_location(destination),
            "extensions": "base",
            "strategy": 10,
        }

        try:
            data = await self._get("driving", self.driving_url, params)
        except ProviderUnavailableError as e:
            if not self.mock_fallback:
                raise
            logger.warning(f"Driving query failed, using simulated data: {e}")
            return self._mock_driving_estimate()

        paths = (data.get("route") or {}).get("paths") or []
        if not paths:
            return None
        return self._parse_driving_path(paths[0])

    async def get_stations_along_route(
        self, origin: GeoPoint, destination: GeoPoint
    ) -> List[GeoPoint]:
        """Corridor stations ordered from the origin side"""
        stations = get_corridor_stations()
        first, last = stations[0], stations[-1]
        if self._distance_deg(origin, first) > self._distance_deg(origin, last):
            stations.reverse()
        return [GeoPoint(**station) for station in stations]

    async def _get(self, endpoint: str, url: str, params: Dict) -> Dict:
        # Refused calls are not counted; sent ones are, whatever the outcome
        if not self.quota.acquire(endpoint):
            raise ProviderUnavailableError(
                f"API call limit exceeded. Max calls per day: {self.quota.daily_limit}"
            )

        try:
            async with httpx.AsyncClient(transport=self._transport) as client:
                response = await client.get(
                    url,
                    params={"key": self.api_key, "output": "json", **params},
                    timeout=settings.amap_timeout_s,
                )
                response.raise_for_status()
                data = response.json()
        except httpx.HTTPStatusError as e:
            raise ProviderUnavailableError(
                f"AMap API error: {e.response.status_code}"
            ) from e
        except httpx.HTTPError as e:
            raise ProviderUnavailableError(f"AMap request failed: {e}") from e

        if data.get("status") != "1":
            raise ProviderUnavailableError(
                f"AMap rejected request: {data.get('info', 'unknown error')}"
            )
        return data

    def _parse_transit_itineraries(self, transits: List[Dict]) -> List[Itinerary]:
        """Convert AMap transits to itineraries, keeping the provider order"""
        itineraries = []
        for transit in transits:
            if len(itineraries) >= settings.transit_routes_kept:
                break

            segments = self._parse_transit_segments(transit.get("segments") or [])
            rides = [seg for seg in segments if seg.mode == "subway"]
            if not rides:
                logger.debug("Skipping transit without a ride segment")
                continue

            # The fare is charged once per trip, on the first ride
            first_ride = rides[0]
            first_ride.cost = _to_float(transit.get("cost")) or DEFAULT_TRANSIT_FARE

            # Platform and transfer waiting only shows up in the trip duration
            gap = _seconds_to_minutes(transit.get("duration")) - sum(
                seg.duration for seg in segments
            )
            if gap > 0:
                first_ride.duration += gap
                first_ride.wait_time += gap

            itineraries.append(
                Itinerary.from_segments(f"subway_{len(itineraries)}", segments)
            )
        return itineraries

    def _parse_transit_segments(self, raw_segments: List[Dict]) -> List:
        """Walking, bus/subway and railway parts of each AMap segment, in order"""
        segments = []
        for raw in raw_segments:
            walking = raw.get("walking") or {}
            walk_distance = _to_int(walking.get("distance"))
            if walk_distance > 0:
                segments.append(
                    WalkSegment(
                        distance=walk_distance,
                        duration=_seconds_to_minutes(walking.get("duration")),
                    )
                )

            buslines = (raw.get("bus") or {}).get("buslines") or []
            if buslines:
                line = buslines[0]
                segments.append(
                    SubwaySegment(
                        line=line.get("name", ""),
                        from_name=(line.get("departure_stop") or {}).get("name", ""),
                        to_name=(line.get("arrival_stop") or {}).get("name", ""),
                        stations=_to_int(line.get("via_num")) + 2,
                        duration=_seconds_to_minutes(line.get("duration")),
                        distance=_to_int(line.get("distance")),
                    )
                )

            railway = raw.get("railway") or {}
            if railway.get("name") or railway.get("trip"):
                segments.append(
                    SubwaySegment(
                        line=railway.get("trip") or railway.get("name"),
                        from_name=(railway.get("departure_stop") or {}).get("name", ""),
                        to_name=(railway.get("arrival_stop") or {}).get("name", ""),
                        stations=len(railway.get("via_stops") or []) + 2,
                        duration=_seconds_to_minutes(railway.get("time")),
                        distance=_to_int(railway.get("distance")),
                    )
                )
        return segments

    def _parse_driving_path(self, path: Dict) -> DrivingEstimate:
        return DrivingEstimate(
            distance_m=_to_int(path.get("distance")),
            duration_min=_seconds_to_minutes(path.get("duration")),
        )

    def _mock_transit_itineraries(self) -> List[Itinerary]:
        """Simulated Daxing Airport -> Changping itinerary"""
        segments = [
            WalkSegment(distance=300, duration=4),
            SubwaySegment(
                line="大兴机场线",
                from_name="大兴机场站",
                to_name="草桥站",
                stations=3,
                duration=19,
                distance=27000,
                cost=DEFAULT_TRANSIT_FARE,
            ),
            SubwaySegment(
                line="4号线",
                from_name="草桥站",
                to_name="西直门站",
                stations=18,
                duration=24,
                distance=9700,
            ),
            SubwaySegment(
                line="昌平线",
                from_name="西直门站",
                to_name="生命科学园站",
                stations=4,
                duration=13,
                distance=7500,
            ),
            WalkSegment(distance=500, duration=5),
        ]
        return [Itinerary.from_segments("subway_mock_1", segments)]

    def _mock_driving_estimate(self) -> DrivingEstimate:
        return DrivingEstimate(distance_m=52000, duration_min=78)

    @staticmethod
    def _format_location(point: GeoPoint) -> str:
        return f"{point.lng:.6f},{point.lat:.6f}"

    @staticmethod
    def _distance_deg(point: GeoPoint, station: Dict) -> float:
        return math.hypot(point.lng - station["lng"], point.lat - station["lat"])


def _to_int(value) -> int:
    # AMap encodes numbers as strings and missing values as []
    try:
        return int(float(value))
    except (TypeError, ValueError):
        return 0


def _to_float(value) -> float:
    try:
        return float(value)
    except (TypeError, ValueError):
        return 0.0


def _seconds_to_minutes(value) -> int:
    return math.ceil(_to_int(value) / 60)
