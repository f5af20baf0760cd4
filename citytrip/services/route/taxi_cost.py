from typing import Optional

from citytrip.config import settings
from citytrip.models.request import Scenario


class TaxiCostEstimator:
    """Estimate a taxi fare from driving distance and duration."""

    def __init__(
        self,
        *,
        base_fare: Optional[float] = None,
        free_km: Optional[float] = None,
        per_km_rate: Optional[float] = None,
        per_minute_rate: Optional[float] = None,
        peak_multiplier: Optional[float] = None,
        late_night_multiplier: Optional[float] = None,
    ) -> None:
        self.base_fare = _pick(base_fare, settings.taxi_base_fare)
        self.free_km = _pick(free_km, settings.taxi_free_km)
        self.per_km_rate = _pick(per_km_rate, settings.taxi_per_km_rate)
        self.per_minute_rate = _pick(per_minute_rate, settings.taxi_per_minute_rate)
        self.multipliers = {
            Scenario.PEAK: _pick(peak_multiplier, settings.taxi_peak_multiplier),
            Scenario.LATE_NIGHT: _pick(
                late_night_multiplier, settings.taxi_late_night_multiplier
            ),
        }

    def estimate(
        self,
        distance_m: float,
        duration_min: float,
        scenario: Scenario = Scenario.ROUTINE,
    ) -> float:
        """
        Fare = base + km beyond the free distance * per-km rate + minutes * per-minute rate,
        scaled by the scenario surcharge and rounded to one decimal.
        """
        distance_km = max(0.0, distance_m) / 1000
        minutes = max(0.0, duration_min)

        cost = self.base_fare
        cost += max(0.0, distance_km - self.free_km) * self.per_km_rate
        cost += minutes * self.per_minute_rate
        cost *= self.multipliers.get(scenario, 1.0)

        return round(cost, 1)


def _pick(value: Optional[float], default: float) -> float:
    return default if value is None else value
