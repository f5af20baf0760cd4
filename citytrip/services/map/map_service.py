from abc import ABC, abstractmethod
from typing import List, Optional

from citytrip.models.request import GeoPoint
from citytrip.models.response import DrivingEstimate, Itinerary


class MapService(ABC):
    """Map service abstract interface"""

    @abstractmethod
    async def fetch_transit_itineraries(
        self, origin: GeoPoint, destination: GeoPoint
    ) -> List[Itinerary]:
        """Get transit itineraries, best first. May be empty."""
        pass

    @abstractmethod
    async def fetch_driving_estimate(
        self, origin: GeoPoint, destination: GeoPoint
    ) -> Optional[DrivingEstimate]:
        """Get driving distance (meters) and duration (minutes) for a taxi leg"""
        pass

    @abstractmethod
    async def get_stations_along_route(
        self, origin: GeoPoint, destination: GeoPoint
    ) -> List[GeoPoint]:
        """Get subway stations between origin and destination, nearest to origin first"""
        pass
