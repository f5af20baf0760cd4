from datetime import datetime
from enum import Enum
from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, Field


class Preference(str, Enum):
    TIME = "time"
    COST = "cost"
    BALANCE = "balance"


class Scenario(str, Enum):
    RUSH_TO_CATCH = "rushToCatch"
    LATE_NIGHT = "lateNight"
    PEAK = "peak"
    ROUTINE = "routine"


class GeoPoint(BaseModel):
    model_config = ConfigDict(frozen=True)

    lng: float
    lat: float
    name: str = ""


class PlanOptions(BaseModel):
    include_hybrid: bool = True
    max_results: Optional[int] = Field(default=None, ge=1)
    # Overall deadline for provider calls, in seconds
    timeout_s: Optional[float] = Field(default=None, gt=0)


class RouteRequest(BaseModel):
    origin: GeoPoint
    destination: GeoPoint
    time: Optional[datetime] = None
    preference: Preference = Preference.BALANCE
    options: PlanOptions = PlanOptions()


class PlanRouteBody(BaseModel):
    """HTTP request body; endpoints are checked by the handler"""
    start: Optional[Dict[str, Any]] = None
    end: Optional[Dict[str, Any]] = None
    time: Optional[datetime] = None
    preference: Optional[str] = None
    options: Dict[str, Any] = {}
