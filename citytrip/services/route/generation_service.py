from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass, field
from typing import List, Optional, Tuple, Union

from citytrip.config import settings
from citytrip.exceptions import ProviderUnavailableError
from citytrip.models.request import GeoPoint, Scenario
from citytrip.models.response import Itinerary, TaxiSegment
from citytrip.services.map.map_service import MapService
from citytrip.services.route.provider_gate import ProviderGate
from citytrip.services.route.pruning import RoutePruner
from citytrip.services.route.taxi_cost import TaxiCostEstimator

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class StartTaxi:
    """Taxi from the origin to a station, subway the rest of the way."""
    station: GeoPoint

    @property
    def route_id(self) -> str:
        return f"mixed_start_taxi_{self.station.name}"


@dataclass(frozen=True)
class EndTaxi:
    """Subway from the origin to a station, taxi the rest of the way."""
    station: GeoPoint

    @property
    def route_id(self) -> str:
        return f"mixed_end_taxi_{self.station.name}"


@dataclass(frozen=True)
class BothTaxi:
    """Taxi to a station, subway between stations, taxi to the destination."""
    start_station: GeoPoint
    end_station: GeoPoint

    @property
    def route_id(self) -> str:
        return f"mixed_both_taxi_{self.start_station.name}_{self.end_station.name}"


HybridPlan = Union[StartTaxi, EndTaxi, BothTaxi]
Leg = Tuple[GeoPoint, GeoPoint]


@dataclass
class HybridGenerationResult:
    routes: List[Itinerary] = field(default_factory=list)
    failures: List[str] = field(default_factory=list)


class HybridRouteGenerator:
    """
    Hybrid route generation - combines taxi legs with the provider's best
    transit itinerary along a corridor of subway stations.
    """

    def __init__(
        self,
        map_service: MapService,
        *,
        cost_estimator: Optional[TaxiCostEstimator] = None,
        pruner: Optional[RoutePruner] = None,
        station_count: Optional[int] = None,
        both_taxi_station_count: Optional[int] = None,
        taxi_wait_min: Optional[int] = None,
    ) -> None:
        self.map_service = map_service
        self.cost_estimator = cost_estimator or TaxiCostEstimator()
        self.pruner = pruner or RoutePruner()
        self.station_count = (
            settings.hybrid_station_count if station_count is None else station_count
        )
        self.both_taxi_station_count = (
            settings.both_taxi_station_count
            if both_taxi_station_count is None
            else both_taxi_station_count
        )
        self.taxi_wait_min = (
            settings.hybrid_taxi_wait_min if taxi_wait_min is None else taxi_wait_min
        )

    def build_plans(self, stations: List[GeoPoint]) -> List[HybridPlan]:
        """
        Enumerate hybrid plans for a station corridor ordered from the origin side.

        Start-taxi uses the stations nearest the origin, end-taxi the ones
        nearest the destination, and both-taxi pairs a few from each end.
        """
        if not stations:
            return []

        k = self.station_count
        near_origin = stations[:k]
        near_destination = stations[-k:] if k > 0 else []

        n = self.both_taxi_station_count
        plans: List[HybridPlan] = [StartTaxi(station) for station in near_origin]
        plans.extend(EndTaxi(station) for station in near_destination)
        if n > 0:
            for start_station in stations[:n]:
                for end_station in stations[-n:]:
                    if start_station == end_station:
                        continue
                    plans.append(BothTaxi(start_station, end_station))
        return plans

    async def generate(
        self,
        origin: GeoPoint,
        destination: GeoPoint,
        stations: List[GeoPoint],
        scenario: Scenario = Scenario.ROUTINE,
        gate: Optional[ProviderGate] = None,
    ) -> HybridGenerationResult:
        """Generate all hybrid candidates concurrently, then prune them."""
        gate = gate or ProviderGate()
        plans = self.build_plans(stations)
        outcomes = await asyncio.gather(
            *(self._assemble_safely(plan, origin, destination, scenario, gate) for plan in plans)
        )

        result = HybridGenerationResult()
        for route, failure in outcomes:
            if route is not None:
                result.routes.append(route)
            elif failure:
                result.failures.append(failure)

        generated = len(result.routes)
        result.routes = self.pruner.prune(result.routes)
        logger.info(
            f"Hybrid generation: {len(plans)} plans, {generated} built, "
            f"{len(result.routes)} kept after pruning, {len(result.failures)} failed"
        )
        return result

    async def _assemble_safely(
        self,
        plan: HybridPlan,
        origin: GeoPoint,
        destination: GeoPoint,
        scenario: Scenario,
        gate: ProviderGate,
    ) -> Tuple[Optional[Itinerary], Optional[str]]:
        try:
            return await self.assemble(plan, origin, destination, scenario, gate), None
        except Exception as e:
            logger.warning(f"Hybrid candidate {plan.route_id} failed: {e}")
            return None, f"{plan.route_id}: {e}"

    async def assemble(
        self,
        plan: HybridPlan,
        origin: GeoPoint,
        destination: GeoPoint,
        scenario: Scenario,
        gate: ProviderGate,
    ) -> Optional[Itinerary]:
        """
        Build one hybrid itinerary for a plan.

        Returns None when the provider has no transit itinerary for the
        plan's stations; raises when any leg cannot be fetched.
        """
        head, transit_leg, tail = self._legs(plan, origin, destination)

        transit_routes = await gate.call(
            self.map_service.fetch_transit_itineraries, *transit_leg
        )
        if not transit_routes:
            logger.debug(f"No transit itinerary for {plan.route_id}, skipped")
            return None
        transit = transit_routes[0]

        taxi_legs = [leg for leg in (head, tail) if leg is not None]
        taxi_segments = await asyncio.gather(
            *(self.taxi_segment(a, b, scenario, gate) for a, b in taxi_legs)
        )

        segments = []
        if head is not None:
            segments.append(taxi_segments[0])
        segments.extend(transit.segments)
        if tail is not None:
            segments.append(taxi_segments[-1])

        return Itinerary.from_segments(plan.route_id, segments)

    async def taxi_segment(
        self,
        start: GeoPoint,
        end: GeoPoint,
        scenario: Scenario,
        gate: ProviderGate,
    ) -> TaxiSegment:
        driving = await gate.call(self.map_service.fetch_driving_estimate, start, end)
        if driving is None:
            raise ProviderUnavailableError(
                f"no driving route from {start.name} to {end.name}"
            )

        cost = self.cost_estimator.estimate(
            driving.distance_m, driving.duration_min, scenario
        )
        return TaxiSegment(
            from_name=start.name,
            to_name=end.name,
            distance=driving.distance_m,
            duration=driving.duration_min + self.taxi_wait_min,
            cost=cost,
            wait_time=self.taxi_wait_min,
        )

    @staticmethod
    def _legs(
        plan: HybridPlan, origin: GeoPoint, destination: GeoPoint
    ) -> Tuple[Optional[Leg], Leg, Optional[Leg]]:
        """Split a plan into (head taxi, transit, tail taxi) legs."""
        if isinstance(plan, StartTaxi):
            return (origin, plan.station), (plan.station, destination), None
        if isinstance(plan, EndTaxi):
            return None, (origin, plan.station), (plan.station, destination)
        return (
            (origin, plan.start_station),
            (plan.start_station, plan.end_station),
            (plan.end_station, destination),
        )
