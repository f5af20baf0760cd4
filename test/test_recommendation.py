from conftest import short_transit_itinerary, taxi_segment

from citytrip.models.request import Preference, Scenario
from citytrip.models.response import Itinerary
from citytrip.services.route.ranking_service import RouteRankingService
from citytrip.services.route.recommendation import (
    DEFAULT_REASON,
    recommend_reason,
    select_recommendations,
)


def _score(routes, scenario=Scenario.ROUTINE, preference=Preference.BALANCE):
    return RouteRankingService().score_routes(routes, preference, scenario)


def _pool():
    subway = short_transit_itinerary("subway_0")  # 20 min, ¥5
    taxi = Itinerary.from_segments("taxi_full", [taxi_segment(9000, duration=15, cost=40.0, wait=5)])
    mixed = Itinerary.from_segments(
        "mixed_start_taxi_A", [taxi_segment(5000), *short_transit_itinerary().segments]
    )  # 33 min, ¥27.6
    return [subway, taxi, mixed]


def test_selects_fastest_cheapest_and_best_scored():
    scored = _score(_pool())
    result = select_recommendations(scored, Scenario.ROUTINE)

    assert result.fastest.id == "taxi_full"
    assert result.fastest.tags == ["Fastest", "18 min faster than the slowest option"]

    assert result.cheapest.id == "subway_0"
    assert result.cheapest.tags == ["Cheapest", "Saves ¥35 compared with the priciest option"]

    best = max(scored, key=lambda r: r.scores.total)
    assert result.recommended.id == best.id
    assert result.recommended.tags == ["Recommended", DEFAULT_REASON]


def test_ties_go_to_the_earlier_candidate():
    first = short_transit_itinerary("first")
    second = short_transit_itinerary("second")
    result = select_recommendations(_score([first, second]), Scenario.ROUTINE)

    assert result.fastest.id == "first"
    assert result.cheapest.id == "first"
    assert result.recommended.id == "first"
    assert result.fastest.tags[1] == "0 min faster than the slowest option"


def test_empty_pool_selects_nothing():
    result = select_recommendations([], Scenario.PEAK)
    assert result.recommended is None
    assert result.fastest is None
    assert result.cheapest is None


def test_scenario_reasons():
    subway, taxi, _ = _score(_pool())
    assert recommend_reason(subway, Scenario.PEAK) == "Subway is more reliable at peak hours"
    assert recommend_reason(taxi, Scenario.PEAK) == "Saves time while avoiding congestion"
    assert recommend_reason(taxi, Scenario.LATE_NIGHT) == "Safe and convenient"
    assert recommend_reason(subway, Scenario.RUSH_TO_CATCH) == "Fastest arrival"
    assert recommend_reason(subway, Scenario.ROUTINE) == "Best overall value"


def test_selection_keeps_scores_and_summary():
    result = select_recommendations(_score(_pool()), Scenario.ROUTINE)
    assert result.cheapest.scores.cost == 100
    assert result.cheapest.summary.description == "Subway all the way"
