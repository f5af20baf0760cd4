from dataclasses import dataclass
from typing import List, Optional

from citytrip.models.request import Scenario
from citytrip.models.response import RecommendedItinerary, ScoredItinerary

DEFAULT_REASON = "Best overall value"

RECOMMEND_REASONS = {
    Scenario.LATE_NIGHT: "Safe and convenient",
    Scenario.RUSH_TO_CATCH: "Fastest arrival",
}


@dataclass
class Recommendation:
    recommended: Optional[RecommendedItinerary] = None
    fastest: Optional[RecommendedItinerary] = None
    cheapest: Optional[RecommendedItinerary] = None


def recommend_reason(route: ScoredItinerary, scenario: Scenario) -> str:
    if scenario == Scenario.PEAK:
        if route.type == "subway":
            return "Subway is more reliable at peak hours"
        return "Saves time while avoiding congestion"
    return RECOMMEND_REASONS.get(scenario, DEFAULT_REASON)


def select_recommendations(
    scored_routes: List[ScoredItinerary], scenario: Scenario
) -> Recommendation:
    """Pick fastest, cheapest and best-scored routes; ties go to the earlier route."""
    if not scored_routes:
        return Recommendation()

    fastest = min(scored_routes, key=lambda r: r.total_duration)
    slowest = max(scored_routes, key=lambda r: r.total_duration)
    cheapest = min(scored_routes, key=lambda r: r.total_cost)
    priciest = max(scored_routes, key=lambda r: r.total_cost)
    best = max(scored_routes, key=lambda r: r.scores.total)

    minutes_saved = round(slowest.total_duration - fastest.total_duration)
    money_saved = round(priciest.total_cost - cheapest.total_cost)

    return Recommendation(
        recommended=_tagged(best, ["Recommended", recommend_reason(best, scenario)]),
        fastest=_tagged(
            fastest, ["Fastest", f"{minutes_saved} min faster than the slowest option"]
        ),
        cheapest=_tagged(
            cheapest, ["Cheapest", f"Saves ¥{money_saved} compared with the priciest option"]
        ),
    )


def _tagged(route: ScoredItinerary, tags: List[str]) -> RecommendedItinerary:
    return RecommendedItinerary(**route.model_dump(), tags=tags)
