# Route planning package
from .generation_service import HybridRouteGenerator
from .pruning import RoutePruner
from .ranking_service import RouteRankingService
from .response_builder import ResponseBuilderService
from .taxi_cost import TaxiCostEstimator



__all__ = [
    "HybridRouteGenerator",
    "RoutePruner",
    "RouteRankingService",
    "ResponseBuilderService",
    "TaxiCostEstimator",
    ]
