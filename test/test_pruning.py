from conftest import short_transit_itinerary, taxi_segment

from citytrip.models.response import Itinerary
from citytrip.services.route.pruning import RoutePruner


def _hybrid(route_id: str, taxi_distance: int, taxi_duration: int = 13, taxi_cost: float = 22.6) -> Itinerary:
    transit = short_transit_itinerary()
    return Itinerary.from_segments(
        route_id,
        [taxi_segment(taxi_distance, taxi_duration, taxi_cost), *transit.segments],
    )


def test_short_taxi_legs_are_discarded():
    routes = [
        _hybrid("at_limit", 2000),
        _hybrid("just_over", 2001),
        _hybrid("short", 800),
    ]
    pruned = RoutePruner().prune(routes)
    assert [route.id for route in pruned] == ["just_over"]


def test_every_taxi_leg_must_be_long_enough():
    transit = short_transit_itinerary()
    both = Itinerary.from_segments(
        "both",
        [taxi_segment(6000), *transit.segments, taxi_segment(1500)],
    )
    assert RoutePruner().prune([both]) == []


def test_survivors_sorted_by_duration_plus_double_cost_and_capped():
    routes = [
        _hybrid(f"route_{i}", 5000, taxi_duration=10 + i, taxi_cost=40.0 - 2 * i)
        for i in range(12)
    ]
    pruned = RoutePruner().prune(routes)

    assert len(pruned) == 10
    keys = [RoutePruner.prefilter_score(route) for route in pruned]
    assert keys == sorted(keys)
    # Cost falls twice as fast as duration rises, so later routes rank first
    assert pruned[0].id == "route_11"
    assert "route_0" not in {route.id for route in pruned}


def test_thresholds_are_configurable():
    routes = [_hybrid("a", 2500), _hybrid("b", 4000), _hybrid("c", 6000)]
    pruned = RoutePruner(min_taxi_leg_m=3000, max_routes=1).prune(routes)
    assert len(pruned) == 1
    assert pruned[0].id in {"b", "c"}


def test_routes_without_taxi_pass_the_value_filter():
    assert RoutePruner().prune([short_transit_itinerary("pure")])[0].id == "pure"
