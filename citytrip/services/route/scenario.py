"""Travel context classification from time of day and destination."""
from __future__ import annotations

from datetime import datetime
from typing import Iterable, Optional
from zoneinfo import ZoneInfo

from citytrip.config import settings
from citytrip.models.request import Scenario


def detect_scenario(
    destination_name: Optional[str],
    local_hour: int,
    *,
    origin_name: Optional[str] = None,
    hub_keywords: Optional[Iterable[str]] = None,
) -> Scenario:
    """Return exactly one scenario; a transport-hub destination beats time of day."""
    keywords = settings.hub_keywords if hub_keywords is None else hub_keywords
    destination = (destination_name or "").lower()
    if any(keyword.lower() in destination for keyword in keywords):
        return Scenario.RUSH_TO_CATCH

    if local_hour >= 23 or local_hour < 5:
        return Scenario.LATE_NIGHT

    if 7 <= local_hour <= 9 or 17 <= local_hour <= 19:
        return Scenario.PEAK

    return Scenario.ROUTINE


def local_hour_of(moment: datetime, timezone_name: Optional[str] = None) -> int:
    """Hour in the city's timezone; naive datetimes are taken as already local."""
    if moment.tzinfo is None:
        return moment.hour
    return moment.astimezone(ZoneInfo(timezone_name or settings.local_timezone)).hour
