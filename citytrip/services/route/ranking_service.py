"""Multi-criteria route scoring: time, cost and comfort under scenario-aware weights."""
from __future__ import annotations

from typing import Dict, List, NamedTuple

from citytrip.models.request import Preference, Scenario
from citytrip.models.response import Itinerary, ScoredItinerary, Scores
from citytrip.services.route.response_builder import build_summary


class Weights(NamedTuple):
    time: float
    cost: float
    comfort: float


# Fractions summing to 1, so the composite stays on the 0-100 scale
PREFERENCE_WEIGHTS: Dict[Preference, Weights] = {
    Preference.TIME: Weights(time=0.7, cost=0.2, comfort=0.1),
    Preference.COST: Weights(time=0.2, cost=0.7, comfort=0.1),
    Preference.BALANCE: Weights(time=0.4, cost=0.4, comfort=0.2),
}

# Replace the preference weights outright
SCENARIO_WEIGHTS: Dict[Scenario, Weights] = {
    Scenario.RUSH_TO_CATCH: Weights(time=0.8, cost=0.1, comfort=0.1),
    Scenario.LATE_NIGHT: Weights(time=0.4, cost=0.3, comfort=0.3),
}

TRANSFER_PENALTY = 15
WALK_PENALTY_PER_STEP = 5
WALK_PENALTY_STEP_M = 500
TAXI_WAIT_PENALTY_PER_MIN = 2


def get_weights(preference: Preference, scenario: Scenario) -> Weights:
    if scenario in SCENARIO_WEIGHTS:
        return SCENARIO_WEIGHTS[scenario]
    return PREFERENCE_WEIGHTS[preference]


def normalize(value: float, lowest: float, highest: float) -> float:
    """Rescale so the lowest value scores 100 and the highest 0."""
    if highest == lowest:
        return 100.0
    return 100.0 * (1 - (value - lowest) / (highest - lowest))


def comfort_score(route: Itinerary) -> float:
    segments = route.segments
    transfers = sum(
        1
        for prev, seg in zip(segments, segments[1:])
        if prev.mode == "subway" and seg.mode == "subway"
    )
    walk_distance = sum(seg.distance for seg in segments if seg.mode == "walk")
    taxi_wait = sum(seg.wait_time for seg in segments if seg.mode == "taxi")

    score = 100
    score -= transfers * TRANSFER_PENALTY
    score -= (walk_distance // WALK_PENALTY_STEP_M) * WALK_PENALTY_PER_STEP
    score -= taxi_wait * TAXI_WAIT_PENALTY_PER_MIN
    return max(0, score)


class RouteRankingService:
    """Score every candidate against the whole pool."""

    def score_routes(
        self,
        routes: List[Itinerary],
        preference: Preference,
        scenario: Scenario,
    ) -> List[ScoredItinerary]:
        """
        Score routes in their given order.

        Time and cost are normalised over the full candidate set, so pure
        and hybrid routes must be scored together to be comparable.
        """
        if not routes:
            return []

        durations = [route.total_duration for route in routes]
        costs = [route.total_cost for route in routes]
        min_time, max_time = min(durations), max(durations)
        min_cost, max_cost = min(costs), max(costs)
        weights = get_weights(preference, scenario)

        scored = []
        for route in routes:
            time_score = normalize(route.total_duration, min_time, max_time)
            cost_score = normalize(route.total_cost, min_cost, max_cost)
            comfort = comfort_score(route)

            total = (
                time_score * weights.time
                + cost_score * weights.cost
                + comfort * weights.comfort
            )

            scored.append(
                ScoredItinerary(
                    **route.model_dump(),
                    scores=Scores(
                        time=round(time_score),
                        cost=round(cost_score),
                        comfort=round(comfort),
                        total=round(total, 1),
                    ),
                    summary=build_summary(route),
                )
            )
        return scored

    @staticmethod
    def rank(scored: List[ScoredItinerary]) -> List[ScoredItinerary]:
        """Highest composite score first; ties keep their original order."""
        return sorted(scored, key=lambda route: route.scores.total, reverse=True)
