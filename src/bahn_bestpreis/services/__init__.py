"""Service layer"""

from .http_client import HttpClient
from .station_service import StationResolver, RemoteStationResolver, StaticStationResolver, create_station_resolver
from .fare_service import FareService
from .search_service import SearchService, BestpreisError, StationNotFoundError

__all__ = [
    "HttpClient",
    "StationResolver",
    "RemoteStationResolver",
    "StaticStationResolver",
    "create_station_resolver",
    "FareService",
    "SearchService",
    "BestpreisError",
    "StationNotFoundError",
]
