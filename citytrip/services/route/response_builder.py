"""
Response builder service - converts scored candidates to the planning result
Includes route summaries and request metadata
"""
from datetime import datetime, timezone
from typing import List, Optional

from citytrip.models.request import Preference, Scenario
from citytrip.models.response import (
    Itinerary,
    PlanMeta,
    RecommendationSet,
    RouteSummary,
    ScoredItinerary,
)
from citytrip.services.route.recommendation import Recommendation


def build_summary(route: Itinerary) -> RouteSummary:
    """Short human-readable description plus headline numbers"""
    taxi_count = sum(1 for seg in route.segments if seg.mode == "taxi")
    subway_count = sum(1 for seg in route.segments if seg.mode == "subway")

    if route.type == "taxi":
        description = "Taxi all the way"
    elif route.type == "subway":
        description = "Subway all the way"
    else:
        description = f"Taxi x{taxi_count} + Subway x{subway_count}"

    return RouteSummary(
        description=description,
        total_time=route.total_duration,
        total_cost=route.total_cost,
        walk_distance=sum(seg.distance for seg in route.segments if seg.mode == "walk"),
    )


class ResponseBuilderService:
    """Response builder service - assembles the recommendation set"""

    def build_response(
        self,
        recommendation: Recommendation,
        ranked_routes: List[ScoredItinerary],
        *,
        scenario: Scenario,
        preference: Preference,
        total_candidates: int,
        max_results: int,
        failures: Optional[List[str]] = None,
    ) -> RecommendationSet:
        """
        Build the planning result

        Args:
            recommendation: Selected recommended/fastest/cheapest routes
            ranked_routes: Scored routes, best composite score first
            total_candidates: Candidate count before truncation
            max_results: How many ranked routes to return

        Returns:
            RecommendationSet with metadata
        """
        return RecommendationSet(
            recommended=recommendation.recommended,
            fastest=recommendation.fastest,
            cheapest=recommendation.cheapest,
            all_routes=ranked_routes[:max_results],
            meta=PlanMeta(
                scenario=scenario,
                preference=preference,
                total_candidates=total_candidates,
                calculated_at=datetime.now(timezone.utc),
                failures=list(failures or []),
            ),
        )
