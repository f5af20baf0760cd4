from typing import List

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    # AMap (Gaode) web service configuration
    amap_key: str = ""
    amap_base_url: str = "https://restapi.amap.com/v3"
    amap_city: str = "北京"
    amap_timeout_s: float = 10.0
    # Serve simulated itineraries when the key is missing or a call fails
    amap_mock_fallback: bool = True

    # API configuration
    api_version: str = "1.0"
    log_level: str = "INFO"

    # API call limits
    max_api_calls_per_day: int = 5000
    max_concurrent_provider_calls: int = 4

    # Taxi fare table (Beijing express car)
    taxi_base_fare: float = 13.0
    taxi_free_km: float = 3.0
    taxi_per_km_rate: float = 2.3
    taxi_per_minute_rate: float = 0.5
    taxi_peak_multiplier: float = 1.3
    taxi_late_night_multiplier: float = 1.5

    # Candidate generation
    transit_routes_kept: int = 3
    full_taxi_wait_min: int = 5
    hybrid_taxi_wait_min: int = 3
    hybrid_station_count: int = 5
    both_taxi_station_count: int = 2

    # Pruning and result sizes
    min_taxi_leg_m: int = 2000
    max_hybrid_routes: int = 10
    max_results: int = 10

    # Scenario detection
    local_timezone: str = "Asia/Shanghai"
    hub_keywords: List[str] = [
        "机场",
        "火车站",
        "airport",
        "railway station",
        "train station",
    ]

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")


settings = Settings()
