"""Shared stubs for planner tests."""
import asyncio
from typing import Dict, List, Optional, Tuple

import pytest

from citytrip.models.request import GeoPoint
from citytrip.models.response import (
    DrivingEstimate,
    Itinerary,
    SubwaySegment,
    TaxiSegment,
    WalkSegment,
)
from citytrip.services.map.map_service import MapService


def airport_transit_itinerary(itinerary_id: str = "subway_0") -> Itinerary:
    """65 min, ¥9, 45 km: walk, three subway lines, walk"""
    return Itinerary.from_segments(
        itinerary_id,
        [
            WalkSegment(distance=300, duration=4),
            SubwaySegment(
                line="Daxing Airport Express",
                from_name="Daxing Airport",
                to_name="Caoqiao",
                stations=3,
                duration=19,
                distance=27000,
                cost=9.0,
            ),
            SubwaySegment(
                line="Line 4",
                from_name="Caoqiao",
                to_name="Xizhimen",
                stations=18,
                duration=24,
                distance=9700,
            ),
            SubwaySegment(
                line="Changping Line",
                from_name="Xizhimen",
                to_name="Life Science Park",
                stations=4,
                duration=13,
                distance=7500,
            ),
            WalkSegment(distance=500, duration=5),
        ],
    )


def short_transit_itinerary(itinerary_id: str = "subway_0") -> Itinerary:
    """20 min, ¥5, 10 km, a single ride"""
    return Itinerary.from_segments(
        itinerary_id,
        [
            SubwaySegment(
                line="Line 1",
                from_name="A",
                to_name="B",
                stations=6,
                duration=20,
                distance=10000,
                cost=5.0,
            )
        ],
    )


def taxi_segment(distance: int, duration: int = 13, cost: float = 22.6, wait: int = 3) -> TaxiSegment:
    return TaxiSegment(
        from_name="X",
        to_name="Y",
        distance=distance,
        duration=duration,
        cost=cost,
        wait_time=wait,
    )


class StubMapService(MapService):
    """In-memory provider keyed by (from name, to name)."""

    def __init__(
        self,
        *,
        transit: Optional[List[Itinerary]] = None,
        driving: Optional[DrivingEstimate] = None,
        stations: Optional[List[GeoPoint]] = None,
        transit_by_pair: Optional[Dict[Tuple[str, str], List[Itinerary]]] = None,
        driving_by_pair: Optional[Dict[Tuple[str, str], Optional[DrivingEstimate]]] = None,
        failing_driving_pairs: Tuple[Tuple[str, str], ...] = (),
        fail_transit: bool = False,
        fail_driving: bool = False,
        delay_s: float = 0.0,
    ):
        self.transit = transit if transit is not None else [short_transit_itinerary()]
        self.driving = driving if driving is not None else DrivingEstimate(distance_m=5000, duration_min=10)
        self.stations = stations or []
        self.transit_by_pair = transit_by_pair or {}
        self.driving_by_pair = driving_by_pair or {}
        self.failing_driving_pairs = set(failing_driving_pairs)
        self.fail_transit = fail_transit
        self.fail_driving = fail_driving
        self.delay_s = delay_s
        self.calls: List[Tuple[str, str, str]] = []
        self.in_flight = 0
        self.max_in_flight = 0

    async def _enter(self, kind: str, origin: GeoPoint, destination: GeoPoint):
        self.calls.append((kind, origin.name, destination.name))
        self.in_flight += 1
        self.max_in_flight = max(self.max_in_flight, self.in_flight)
        try:
            if self.delay_s:
                await asyncio.sleep(self.delay_s)
        finally:
            self.in_flight -= 1

    async def fetch_transit_itineraries(self, origin, destination):
        await self._enter("transit", origin, destination)
        if self.fail_transit:
            raise RuntimeError("transit provider down")
        key = (origin.name, destination.name)
        routes = self.transit_by_pair.get(key, self.transit)
        return [route.model_copy(deep=True) for route in routes]

    async def fetch_driving_estimate(self, origin, destination):
        await self._enter("driving", origin, destination)
        if (origin.name, destination.name) in self.failing_driving_pairs:
            raise RuntimeError(f"driving lookup failed for {origin.name}->{destination.name}")
        if self.fail_driving:
            raise RuntimeError("driving provider down")
        key = (origin.name, destination.name)
        return self.driving_by_pair.get(key, self.driving)

    async def get_stations_along_route(self, origin, destination):
        return list(self.stations)


@pytest.fixture
def origin() -> GeoPoint:
    return GeoPoint(lng=116.4107, lat=39.5097, name="Airport")


@pytest.fixture
def destination() -> GeoPoint:
    return GeoPoint(lng=116.2937, lat=40.0723, name="ResidentialArea")


@pytest.fixture
def stations() -> List[GeoPoint]:
    return [
        GeoPoint(lng=116.40, lat=39.60, name="A"),
        GeoPoint(lng=116.38, lat=39.80, name="B"),
        GeoPoint(lng=116.33, lat=39.95, name="C"),
    ]
