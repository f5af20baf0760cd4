from typing import List, Optional

from citytrip.config import settings
from citytrip.models.response import Itinerary


class RoutePruner:
    """Drop low-value hybrid candidates and cap how many go on to scoring."""

    def __init__(
        self,
        min_taxi_leg_m: Optional[int] = None,
        max_routes: Optional[int] = None,
    ) -> None:
        self.min_taxi_leg_m = (
            settings.min_taxi_leg_m if min_taxi_leg_m is None else min_taxi_leg_m
        )
        self.max_routes = settings.max_hybrid_routes if max_routes is None else max_routes

    def prune(self, candidates: List[Itinerary]) -> List[Itinerary]:
        # Rule 1: a short taxi leg is not worth switching modes for
        worthwhile = [
            route
            for route in candidates
            if all(
                seg.distance > self.min_taxi_leg_m
                for seg in route.segments
                if seg.mode == "taxi"
            )
        ]

        # Rule 2: cheap pre-rank, one yuan weighs like two minutes
        worthwhile.sort(key=self.prefilter_score)
        return worthwhile[: self.max_routes]

    @staticmethod
    def prefilter_score(route: Itinerary) -> float:
        return route.total_duration + 2 * route.total_cost
