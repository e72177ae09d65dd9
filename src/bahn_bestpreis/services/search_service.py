"""Multi-day best price search"""

import logging
from typing import Dict, Optional

from ..models.fare import DailyResult, SearchConfig
from ..models.search import SearchMeta, SearchParams, SearchPricesRequest, SearchPricesResult
from ..models.station import StationRef
from ..utils.config import Settings, get_settings
from ..utils.date_utils import date_key, generate_dates, parse_int
from .fare_service import FareService
from .http_client import HttpClient
from .station_service import StationResolver, create_station_resolver

logger = logging.getLogger(__name__)


class BestpreisError(Exception):
    """Base error of a search request"""


class StationNotFoundError(BestpreisError):
    """A start or destination station could not be resolved"""


class SearchService:
    """Resolves both stations, then queries the best price day by day"""

    def __init__(self, settings: Optional[Settings] = None,
                 station_resolver: Optional[StationResolver] = None,
                 fare_service: Optional[FareService] = None):
        self.settings = settings or get_settings()
        http_client = None
        if station_resolver is None or fare_service is None:
            http_client = HttpClient(self.settings)
        self.station_resolver = station_resolver or create_station_resolver(self.settings, http_client)
        self.fare_service = fare_service or FareService(http_client)

    async def search_station(self, query: str) -> Optional[StationRef]:
        return await self.station_resolver.resolve(query)

    def day_limit(self, value) -> int:
        """Days to search. A missing, zero or non-numeric value (e.g. "abc")
        falls back to the configured default instead of searching no days."""
        return (parse_int(value) if value else None) or self.settings.default_day_limit

    async def search_prices(self, request: SearchPricesRequest) -> SearchPricesResult:
        logger.info(f"Searching for start station: {request.start}")
        start_station = await self.station_resolver.resolve(str(request.start))
        if not start_station:
            raise StationNotFoundError(f"Start station \"{request.start}\" not found")

        logger.info(f"Searching for destination station: {request.ziel}")
        ziel_station = await self.station_resolver.resolve(str(request.ziel))
        if not ziel_station:
            raise StationNotFoundError(f"Destination station \"{request.ziel}\" not found")

        dates = generate_dates(
            str(request.abfahrtab), self.day_limit(request.day_limit), self.settings.timezone
        )

        days: Dict[str, DailyResult] = {}
        for day in dates:
            config = SearchConfig(
                departure_station_id=start_station.id,
                arrival_station_id=ziel_station.id,
                request_time=day,
                travel_class=request.klasse,
                max_transfers=request.maximale_umstiege,
                fast_connections_only=request.schnelle_verbindungen,
                germany_ticket_only=request.nur_deutschland_ticket_verbindungen,
            )
            days[date_key(day)] = await self.fare_service.query_best_price(config)

        meta = SearchMeta(
            start_station=start_station,
            ziel_station=ziel_station,
            search_params=SearchParams(
                klasse=request.klasse,
                maximale_umstiege=parse_int(request.maximale_umstiege),
                schnelle_verbindungen=bool(request.schnelle_verbindungen),
                nur_deutschland_ticket_verbindungen=bool(request.nur_deutschland_ticket_verbindungen),
            ),
        )
        return SearchPricesResult(days=days, meta=meta)
