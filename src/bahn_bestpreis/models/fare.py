"""Fare models"""

from datetime import datetime
from typing import Any, List, Union
from pydantic import BaseModel, ConfigDict, Field


class SearchConfig(BaseModel):
    """Parameters of one best-price request (one travel date)"""
    model_config = ConfigDict(populate_by_name=True)

    departure_station_id: str = Field(..., alias="abfahrtsHalt", description="Departure station id")
    arrival_station_id: str = Field(..., alias="ankunftsHalt", description="Arrival station id")
    request_time: datetime = Field(..., alias="anfrageZeitpunkt", description="Search timestamp")
    travel_class: Any = Field(None, alias="klasse", description="Travel class, passed through")
    max_transfers: Any = Field(None, alias="maximaleUmstiege", description="Maximum transfers, unvalidated")
    fast_connections_only: Any = Field(False, alias="schnelleVerbindungen", description="Fast connections only")
    germany_ticket_only: Any = Field(
        False, alias="nurDeutschlandTicketVerbindungen", description="Deutschlandticket connections only"
    )


class FareInterval(BaseModel):
    """One priced connection offer"""
    model_config = ConfigDict(populate_by_name=True)

    price: Union[int, float] = Field(0, alias="preis", description="Price amount")
    departure_time: Any = Field("", alias="abfahrtsZeitpunkt", description="Departure timestamp")
    arrival_time: Any = Field("", alias="ankunftsZeitpunkt", description="Arrival timestamp")
    departure_location: Any = Field(None, alias="abfahrtsOrt", description="Departure location")
    arrival_location: Any = Field(None, alias="ankunftsOrt", description="Arrival location")
    info: str = Field("", description="Human readable summary")


class DailyResult(BaseModel):
    """Best price of one travel date; price 0 means unavailable"""
    model_config = ConfigDict(populate_by_name=True)

    price: Union[int, float] = Field(0, alias="preis", description="Best price, 0 if unavailable")
    info: str = Field("", description="Summary of the best connection or a diagnostic message")
    departure_time: Any = Field("", alias="abfahrtsZeitpunkt", description="Departure of the best connection")
    arrival_time: Any = Field("", alias="ankunftsZeitpunkt", description="Arrival of the best connection")
    all_intervals: List[FareInterval] = Field(
        default_factory=list, alias="allIntervals", description="All intervals, cheapest first"
    )

    @classmethod
    def unavailable(cls, info: str) -> "DailyResult":
        return cls(price=0, info=info, departure_time="", arrival_time="", all_intervals=[])

    @classmethod
    def from_intervals(cls, intervals: List[FareInterval]) -> "DailyResult":
        """Mirror the cheapest of the (already sorted) intervals"""
        best = intervals[0]
        return cls(
            price=best.price,
            info=best.info,
            departure_time=best.departure_time,
            arrival_time=best.arrival_time,
            all_intervals=intervals,
        )
