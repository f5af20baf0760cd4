"""
Response models for route planning
Includes travel segments, itineraries and the recommendation set
"""
from datetime import datetime
from typing import Annotated, List, Literal, Optional, Union

from pydantic import BaseModel, Field

from citytrip.models.request import Preference, Scenario


class TaxiSegment(BaseModel):
    """Taxi leg, duration includes the wait for pickup"""
    mode: Literal["taxi"] = "taxi"
    from_name: str
    to_name: str
    distance: int  # Distance in meters
    duration: int  # Minutes
    cost: float
    wait_time: int = 0


class SubwaySegment(BaseModel):
    """Subway ride on a single line"""
    mode: Literal["subway"] = "subway"
    line: str
    from_name: str
    to_name: str
    stations: int
    duration: int
    distance: int = 0
    cost: float = 0.0  # Fare of the whole transit trip sits on its first ride
    wait_time: int = 0  # Platform and transfer waiting, included in duration


class WalkSegment(BaseModel):
    """Walking leg"""
    mode: Literal["walk"] = "walk"
    distance: int
    duration: int
    cost: float = 0.0


Segment = Annotated[
    Union[TaxiSegment, SubwaySegment, WalkSegment], Field(discriminator="mode")
]


class DrivingEstimate(BaseModel):
    distance_m: int
    duration_min: int


class Itinerary(BaseModel):
    """One complete trip candidate"""
    id: str
    type: Literal["subway", "taxi", "mixed"]
    segments: List[Segment]
    total_duration: int
    total_cost: float
    total_distance: int

    @classmethod
    def from_segments(cls, itinerary_id: str, segments: List[Segment]) -> "Itinerary":
        """Build an itinerary whose type and totals are derived from its segments."""
        taxi_count = sum(1 for seg in segments if seg.mode == "taxi")
        if taxi_count == 0:
            route_type = "subway"
        elif taxi_count == 1 and len(segments) == 1:
            route_type = "taxi"
        else:
            route_type = "mixed"

        return cls(
            id=itinerary_id,
            type=route_type,
            segments=list(segments),
            total_duration=sum(seg.duration for seg in segments),
            total_cost=round(sum(seg.cost for seg in segments), 1),
            total_distance=sum(seg.distance for seg in segments),
        )


class Scores(BaseModel):
    time: int
    cost: int
    comfort: int
    total: float


class RouteSummary(BaseModel):
    description: str
    total_time: int
    total_cost: float
    walk_distance: int


class ScoredItinerary(Itinerary):
    scores: Scores
    summary: RouteSummary


class RecommendedItinerary(ScoredItinerary):
    tags: List[str] = []


class PlanMeta(BaseModel):
    scenario: Scenario
    preference: Preference
    total_candidates: int
    calculated_at: datetime
    failures: List[str] = []


class RecommendationSet(BaseModel):
    """Route planning result"""
    recommended: Optional[RecommendedItinerary] = None
    fastest: Optional[RecommendedItinerary] = None
    cheapest: Optional[RecommendedItinerary] = None
    all_routes: List[ScoredItinerary] = []
    meta: PlanMeta


class PlanRouteResponse(BaseModel):
    code: int = 0
    message: str = "success"
    data: Optional[RecommendationSet] = None
