"""
Custom exceptions for the citytrip planner
"""


class CityTripError(Exception):
    """Base exception for the citytrip planner"""
    pass


class ProviderUnavailableError(CityTripError):
    """Raised when a mapping provider call fails or returns nothing usable"""
    pass


class InvalidRouteRequestError(CityTripError):
    """Raised when origin/destination or preference are malformed"""
    pass
