"""
Main route planning service
Integrates scenario detection, candidate generation, scoring and recommendation
"""
import asyncio
import logging
import math
from datetime import datetime, timezone
from typing import List, Optional, Tuple, Union

from pydantic import ValidationError

from citytrip.config import settings
from citytrip.exceptions import InvalidRouteRequestError
from citytrip.models.request import GeoPoint, RouteRequest, Scenario
from citytrip.models.response import Itinerary, RecommendationSet, TaxiSegment
from citytrip.services.map.amap_service import AmapService
from citytrip.services.map.map_service import MapService
from citytrip.services.route.generation_service import HybridRouteGenerator
from citytrip.services.route.provider_gate import ProviderGate
from citytrip.services.route.ranking_service import RouteRankingService
from citytrip.services.route.recommendation import select_recommendations
from citytrip.services.route.response_builder import ResponseBuilderService
from citytrip.services.route.scenario import detect_scenario, local_hour_of
from citytrip.services.route.taxi_cost import TaxiCostEstimator

logger = logging.getLogger(__name__)

CandidateBatch = Tuple[List[Itinerary], List[str]]


class RoutePlannerService:
    """
    Main route planning service

    Architecture: Scenario detection → Candidate generation → Scoring → Recommendation → Response building
    """

    def __init__(
        self,
        map_service: Optional[MapService] = None,
        *,
        cost_estimator: Optional[TaxiCostEstimator] = None,
        hybrid_generator: Optional[HybridRouteGenerator] = None,
        ranking_service: Optional[RouteRankingService] = None,
        response_builder: Optional[ResponseBuilderService] = None,
    ) -> None:
        self.map_service = map_service or AmapService()
        self.cost_estimator = cost_estimator or TaxiCostEstimator()
        self.hybrid_generator = hybrid_generator or HybridRouteGenerator(
            self.map_service, cost_estimator=self.cost_estimator
        )
        self.ranking_service = ranking_service or RouteRankingService()
        self.response_builder = response_builder or ResponseBuilderService()

    async def plan_route(self, request: Union[RouteRequest, dict]) -> RecommendationSet:
        """
        Plan a trip and return the recommended, fastest and cheapest options

        Raises:
            InvalidRouteRequestError: origin/destination or preference are malformed
        """
        request = self._validate(request)
        origin, destination = request.origin, request.destination
        moment = request.time or datetime.now(timezone.utc)

        logger.info(
            f"Planning {origin.name} -> {destination.name}, preference={request.preference.value}"
        )

        # Step 1: Detect travel scenario
        scenario = detect_scenario(
            destination.name, local_hour_of(moment), origin_name=origin.name
        )
        logger.info(f"Scenario: {scenario.value}")

        # Step 2: Generate pure and hybrid candidates
        gate = ProviderGate(timeout_s=request.options.timeout_s)
        candidates, failures = await self._generate_all_routes(request, scenario, gate)
        logger.info(f"Generated {len(candidates)} candidate routes")

        # Step 3: Score everything in one normalisation pool
        scored = self.ranking_service.score_routes(
            candidates, request.preference, scenario
        )

        # Step 4: Pick and tag recommendations
        recommendation = select_recommendations(scored, scenario)

        # Step 5: Build response
        max_results = request.options.max_results or settings.max_results
        return self.response_builder.build_response(
            recommendation,
            self.ranking_service.rank(scored),
            scenario=scenario,
            preference=request.preference,
            total_candidates=len(candidates),
            max_results=max_results,
            failures=failures,
        )

    async def _generate_all_routes(
        self, request: RouteRequest, scenario: Scenario, gate: ProviderGate
    ) -> CandidateBatch:
        origin, destination = request.origin, request.destination
        strategies = [
            self._transit_routes(origin, destination, gate),
            self._taxi_route(origin, destination, scenario, gate),
        ]
        if request.options.include_hybrid:
            strategies.append(self._hybrid_routes(origin, destination, scenario, gate))

        candidates: List[Itinerary] = []
        failures: List[str] = []
        for routes, errors in await asyncio.gather(*strategies):
            candidates.extend(routes)
            failures.extend(errors)
        return candidates, failures

    async def _transit_routes(
        self, origin: GeoPoint, destination: GeoPoint, gate: ProviderGate
    ) -> CandidateBatch:
        try:
            itineraries = await gate.call(
                self.map_service.fetch_transit_itineraries, origin, destination
            )
        except Exception as e:
            logger.warning(f"Pure transit generation failed: {e}")
            return [], [f"subway: {e}"]

        routes = [
            itinerary.model_copy(
                update={
                    "id": itinerary.id or f"subway_{index}",
                    "type": "subway",
                }
            )
            for index, itinerary in enumerate(itineraries[: settings.transit_routes_kept])
        ]
        return routes, []

    async def _taxi_route(
        self,
        origin: GeoPoint,
        destination: GeoPoint,
        scenario: Scenario,
        gate: ProviderGate,
    ) -> CandidateBatch:
        try:
            driving = await gate.call(
                self.map_service.fetch_driving_estimate, origin, destination
            )
        except Exception as e:
            logger.warning(f"Pure taxi generation failed: {e}")
            return [], [f"taxi_full: {e}"]

        if driving is None:
            return [], ["taxi_full: no driving route"]

        wait = settings.full_taxi_wait_min
        segment = TaxiSegment(
            from_name=origin.name,
            to_name=destination.name,
            distance=driving.distance_m,
            duration=driving.duration_min + wait,
            cost=self.cost_estimator.estimate(
                driving.distance_m, driving.duration_min, scenario
            ),
            wait_time=wait,
        )
        return [Itinerary.from_segments("taxi_full", [segment])], []

    async def _hybrid_routes(
        self,
        origin: GeoPoint,
        destination: GeoPoint,
        scenario: Scenario,
        gate: ProviderGate,
    ) -> CandidateBatch:
        try:
            stations = await gate.call(
                self.map_service.get_stations_along_route, origin, destination
            )
            result = await self.hybrid_generator.generate(
                origin, destination, stations, scenario, gate
            )
        except Exception as e:
            logger.warning(f"Hybrid generation failed: {e}")
            return [], [f"mixed: {e}"]
        return result.routes, result.failures

    @staticmethod
    def _validate(request: Union[RouteRequest, dict]) -> RouteRequest:
        if not isinstance(request, RouteRequest):
            try:
                request = RouteRequest.model_validate(request)
            except ValidationError as e:
                raise InvalidRouteRequestError(f"Invalid route request: {e}") from e

        for label, point in (("origin", request.origin), ("destination", request.destination)):
            if not (math.isfinite(point.lng) and math.isfinite(point.lat)):
                raise InvalidRouteRequestError(f"{label} coordinates must be finite numbers")
            if not (-180 <= point.lng <= 180 and -90 <= point.lat <= 90):
                raise InvalidRouteRequestError(
                    f"{label} coordinates out of range: ({point.lng}, {point.lat})"
                )
        return request
