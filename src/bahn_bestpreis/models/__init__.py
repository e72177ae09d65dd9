"""Data models"""

from .station import StationRef
from .fare import SearchConfig, FareInterval, DailyResult
from .search import SearchPricesRequest, SearchParams, SearchMeta, SearchPricesResult, META_KEY

__all__ = [
    "StationRef",
    "SearchConfig",
    "FareInterval",
    "DailyResult",
    "SearchPricesRequest",
    "SearchParams",
    "SearchMeta",
    "SearchPricesResult",
    "META_KEY",
]
