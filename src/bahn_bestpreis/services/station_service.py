"""Station resolution"""

import json
import logging
import os
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Dict, Optional
from urllib.parse import quote

import aiofiles

from ..models.station import StationRef
from ..utils.config import Settings, get_settings
from .http_client import HttpClient

logger = logging.getLogger(__name__)

LOCATION_SEARCH_PATH = "/web/api/reiseloesung/orte"
LOCATION_SEARCH_LIMIT = 10
# characters encodeURIComponent leaves unescaped besides letters, digits and -_.~
URI_COMPONENT_SAFE = "!*'()"
DEFAULT_STATION_TABLE = Path(__file__).resolve().parent.parent / "resources" / "stations.json"


class StationResolver(ABC):
    """Maps a station name to a provider station id"""

    @abstractmethod
    async def resolve(self, query: str) -> Optional[StationRef]:
        """Return the station, or None when it cannot be found"""


class RemoteStationResolver(StationResolver):
    """Resolves names through the bahn.de location search"""

    def __init__(self, http_client: Optional[HttpClient] = None):
        self.http_client = http_client or HttpClient()

    async def resolve(self, query: str) -> Optional[StationRef]:
        if not query:
            return None
        logger.info(f"Searching station: \"{query}\"")
        # spaces as %20, not the + that httpx params would produce
        url = (
            f"{self.http_client.url(LOCATION_SEARCH_PATH)}"
            f"?suchbegriff={quote(query, safe=URI_COMPONENT_SAFE)}"
            f"&typ=ALL&limit={LOCATION_SEARCH_LIMIT}"
        )
        try:
            response = await self.http_client.get(url, headers=self.http_client.browser_headers())
            if not response.is_success:
                logger.warning(f"Location search failed with HTTP {response.status_code}")
                return None
            data = response.json()
        except Exception as e:
            logger.error(f"Station search failed for \"{query}\": {e!r}")
            return None

        if not isinstance(data, list) or not data:
            logger.info(f"No station found for \"{query}\"")
            return None
        station = data[0]
        if not isinstance(station, dict) or station.get("id") is None:
            logger.warning(f"Unusable location search result for \"{query}\": {station!r}")
            return None
        # the fare endpoint needs the id exactly as returned
        station_ref = StationRef(id=str(station["id"]), name=station.get("name") or "")
        logger.info(f"Found station: {station_ref.name} with id: {station_ref.id}")
        return station_ref


class StaticStationResolver(StationResolver):
    """Resolves names from a fixed table, falling back to the name itself"""

    def __init__(self, stations: Optional[Dict[str, str]] = None,
                 display_names: Optional[Dict[str, str]] = None):
        self.stations: Dict[str, str] = dict(stations or {})
        self.display_names: Dict[str, str] = dict(display_names or {})

    async def load(self, path=None):
        """Load the station table JSON: {"stations": {...}, "display_names": {...}}"""
        path = Path(path or DEFAULT_STATION_TABLE)
        if not os.path.exists(path):
            logger.error(f"Station table not found: {path}")
            return
        async with aiofiles.open(path, mode="r", encoding="utf-8") as f:
            content = await f.read()
        table = json.loads(content)
        self.stations = dict(table.get("stations", {}))
        self.display_names = dict(table.get("display_names", {}))
        logger.info(f"Loaded {len(self.stations)} stations from {path}")

    async def resolve(self, query: str) -> Optional[StationRef]:
        if not query:
            return None
        return StationRef(
            id=self.stations.get(query, query),
            name=self.display_names.get(query, query),
        )


def create_station_resolver(settings: Optional[Settings] = None,
                            http_client: Optional[HttpClient] = None) -> StationResolver:
    """Build the resolver selected by settings.station_resolver"""
    settings = settings or get_settings()
    if settings.station_resolver == "static":
        return StaticStationResolver()
    return RemoteStationResolver(http_client or HttpClient(settings))
