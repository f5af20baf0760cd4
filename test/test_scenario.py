from datetime import datetime, timezone

import pytest

from citytrip.models.request import Scenario
from citytrip.services.route.scenario import detect_scenario, local_hour_of


@pytest.mark.parametrize(
    "destination",
    ["北京大兴国际机场", "北京西火车站", "Capital AIRPORT T3", "Beijing South Railway Station"],
)
def test_hub_destination_beats_time_of_day(destination):
    assert detect_scenario(destination, 23) == Scenario.RUSH_TO_CATCH
    assert detect_scenario(destination, 8) == Scenario.RUSH_TO_CATCH
    assert detect_scenario(destination, 12) == Scenario.RUSH_TO_CATCH


def test_hub_origin_does_not_trigger_rush():
    assert detect_scenario("ResidentialArea", 12, origin_name="Airport") == Scenario.ROUTINE


@pytest.mark.parametrize(
    "hour, expected",
    [
        (0, Scenario.LATE_NIGHT),
        (4, Scenario.LATE_NIGHT),
        (5, Scenario.ROUTINE),
        (6, Scenario.ROUTINE),
        (7, Scenario.PEAK),
        (9, Scenario.PEAK),
        (10, Scenario.ROUTINE),
        (16, Scenario.ROUTINE),
        (17, Scenario.PEAK),
        (19, Scenario.PEAK),
        (20, Scenario.ROUTINE),
        (22, Scenario.ROUTINE),
        (23, Scenario.LATE_NIGHT),
    ],
)
def test_time_of_day_boundaries(hour, expected):
    assert detect_scenario("ResidentialArea", hour) == expected


def test_missing_destination_name_falls_back_to_time():
    assert detect_scenario(None, 18) == Scenario.PEAK


def test_custom_hub_keywords():
    assert detect_scenario("Ferry Terminal", 12, hub_keywords=["terminal"]) == Scenario.RUSH_TO_CATCH
    assert detect_scenario("Airport", 12, hub_keywords=["terminal"]) == Scenario.ROUTINE


def test_local_hour_converts_aware_times_to_city_timezone():
    moment = datetime(2025, 1, 6, 10, 0, tzinfo=timezone.utc)
    assert local_hour_of(moment) == 18
    assert local_hour_of(moment, "UTC") == 10


def test_local_hour_keeps_naive_times():
    assert local_hour_of(datetime(2025, 1, 6, 18, 0)) == 18
