"""Search request and response models"""

from typing import Any, Dict, Optional
from pydantic import BaseModel, ConfigDict, Field

from .fare import DailyResult
from .station import StationRef

META_KEY = "_meta"


class SearchPricesRequest(BaseModel):
    """Body of POST /api/search-prices"""
    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    start: Optional[Any] = Field(None, description="Start station (free text)")
    ziel: Optional[Any] = Field(None, description="Destination station (free text)")
    abfahrtab: Optional[Any] = Field(None, description="First travel date (YYYY-MM-DD)")
    klasse: Optional[Any] = Field(None, description="Travel class, e.g. KLASSE_2")
    schnelle_verbindungen: Optional[Any] = Field(None, alias="schnelleVerbindungen")
    nur_deutschland_ticket_verbindungen: Optional[Any] = Field(None, alias="nurDeutschlandTicketVerbindungen")
    maximale_umstiege: Optional[Any] = Field(None, alias="maximaleUmstiege")
    day_limit: Optional[Any] = Field(None, alias="dayLimit", description="Number of days to search")

    def missing_required(self) -> bool:
        return not self.start or not self.ziel or not self.abfahrtab


class SearchParams(BaseModel):
    """Normalised search parameters echoed in the metadata"""
    model_config = ConfigDict(populate_by_name=True)

    klasse: Optional[Any] = None
    maximale_umstiege: Optional[int] = Field(None, alias="maximaleUmstiege")
    schnelle_verbindungen: bool = Field(False, alias="schnelleVerbindungen")
    nur_deutschland_ticket_verbindungen: bool = Field(False, alias="nurDeutschlandTicketVerbindungen")


class SearchMeta(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    start_station: StationRef = Field(..., alias="startStation")
    ziel_station: StationRef = Field(..., alias="zielStation")
    search_params: SearchParams = Field(..., alias="searchParams")


class SearchPricesResult(BaseModel):
    """Daily results in date order plus metadata"""
    days: Dict[str, DailyResult] = Field(default_factory=dict)
    meta: SearchMeta

    def to_response(self) -> Dict[str, Any]:
        """Flatten to the wire shape: one key per date plus _meta"""
        response: Dict[str, Any] = {
            day: result.model_dump(by_alias=True) for day, result in self.days.items()
        }
        response[META_KEY] = self.meta.model_dump(by_alias=True)
        return response
