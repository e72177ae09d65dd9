"""Best price (Tagesbestpreis) queries"""

import json
import logging
from typing import Any, Dict, List, Optional

from pydantic import ValidationError

from ..models.fare import DailyResult, FareInterval, SearchConfig
from ..utils.date_utils import date_key, format_de_datetime, parse_int, request_timestamp
from .http_client import HttpClient

logger = logging.getLogger(__name__)

BEST_PRICE_PATH = "/web/api/angebote/tagesbestpreis"
PRICE_UNAVAILABLE_MARKER = "Preisauskunft nicht möglich"

PRODUCT_CATEGORIES = [
    "ICE", "EC_IC", "IR", "REGIONAL", "SBAHN", "BUS", "SCHIFF", "UBAHN", "TRAM", "ANRUFPFLICHTIG",
]

MSG_NO_BEST_PRICE = "Kein Bestpreis verfügbar!"
MSG_JSON_ERROR = "JSON Parse Error"
MSG_NO_INTERVALS = "Keine Intervalle gefunden!"
MSG_NO_VALID_PRICES = "Keine gültigen Preise gefunden!"


def build_request_body(config: SearchConfig) -> Dict[str, Any]:
    """Request body for one travel date: a single adult without discounts"""
    return {
        "abfahrtsHalt": config.departure_station_id,
        "anfrageZeitpunkt": request_timestamp(config.request_time),
        "ankunftsHalt": config.arrival_station_id,
        "ankunftSuche": "ABFAHRT",
        "klasse": config.travel_class,
        "maxUmstiege": parse_int(config.max_transfers),
        "produktgattungen": list(PRODUCT_CATEGORIES),
        "reisende": [
            {
                "typ": "ERWACHSENER",
                "ermaessigungen": [
                    {
                        "art": "KEINE_ERMAESSIGUNG",
                        "klasse": "KLASSENLOS",
                    },
                ],
                "alter": [],
                "anzahl": 1,
            },
        ],
        "schnelleVerbindungen": bool(config.fast_connections_only),
        "sitzplatzOnly": False,
        "bikeCarriage": False,
        "reservierungsKontingenteVorhanden": False,
        "nurDeutschlandTicketVerbindungen": bool(config.germany_ticket_only),
        "deutschlandTicketVorhanden": False,
    }


def _price_amount(interval: Dict[str, Any]):
    price = interval.get("preis")
    amount = price.get("betrag") if isinstance(price, dict) else None
    if isinstance(amount, bool) or not amount:
        return 0
    if isinstance(amount, (int, float)):
        return amount
    try:
        return float(amount)
    except (TypeError, ValueError):
        return 0


def _first_section(interval: Any) -> Optional[Dict[str, Any]]:
    """verbindungen[0].verbindung.verbindungsAbschnitte[0], or None"""
    if not isinstance(interval, dict):
        return None
    try:
        section = interval["verbindungen"][0]["verbindung"]["verbindungsAbschnitte"][0]
    except (KeyError, IndexError, TypeError):
        return None
    return section if isinstance(section, dict) else None


def parse_interval(interval: Any, tz: Optional[str] = None) -> Optional[FareInterval]:
    section = _first_section(interval)
    if section is None:
        return None
    departure = section.get("abfahrtsZeitpunkt")
    arrival = section.get("ankunftsZeitpunkt")
    departure_location = section.get("abfahrtsOrt")
    arrival_location = section.get("ankunftsOrt")
    info = (
        f"{format_de_datetime(departure, tz)} {departure_location} -> "
        f"{format_de_datetime(arrival, tz)} {arrival_location}"
    )
    try:
        return FareInterval(
            price=_price_amount(interval),
            departure_time=departure,
            arrival_time=arrival,
            departure_location=departure_location,
            arrival_location=arrival_location,
            info=info,
        )
    except ValidationError as e:
        logger.warning(f"Skipping unusable interval: {e}")
        return None


def parse_best_price_response(status_code: int, body: str,
                              tz: Optional[str] = None) -> DailyResult:
    """
    Turn one upstream answer into a DailyResult.

    Failures never raise; they produce a price-0 result whose info carries
    the reason. Surviving intervals are sorted by price (stable), and the
    cheapest one fills the top-level fields.
    """
    if not 200 <= status_code < 300:
        logger.error(f"HTTP {status_code} error: {body[:500]}")
        return DailyResult.unavailable(f"API Error {status_code}: {body[:100]}")

    if PRICE_UNAVAILABLE_MARKER in body:
        logger.info("Price info not available for this date")
        return DailyResult.unavailable(MSG_NO_BEST_PRICE)

    try:
        data = json.loads(body)
    except ValueError as e:
        logger.error(f"Failed to parse JSON: {e}")
        return DailyResult.unavailable(MSG_JSON_ERROR)

    if not isinstance(data, dict) or data.get("intervalle") is None:
        logger.info("No intervals found in response")
        return DailyResult.unavailable(MSG_NO_INTERVALS)

    raw_intervals = data["intervalle"]
    if not isinstance(raw_intervals, list):
        raw_intervals = []
    logger.info(f"Found {len(raw_intervals)} intervals")

    intervals: List[FareInterval] = []
    for raw in raw_intervals:
        interval = parse_interval(raw, tz)
        if interval is not None:
            intervals.append(interval)

    if not intervals:
        return DailyResult.unavailable(MSG_NO_VALID_PRICES)

    intervals.sort(key=lambda iv: iv.price)
    return DailyResult.from_intervals(intervals)


class FareService:
    """Queries the best price of one day"""

    def __init__(self, http_client: Optional[HttpClient] = None):
        self.http_client = http_client or HttpClient()

    def request_headers(self) -> Dict[str, str]:
        base_url = self.http_client.settings.bahn_base_url
        return {
            "Accept": "application/json",
            "Content-Type": "application/json; charset=utf-8",
            "Accept-Encoding": "gzip",
            "Origin": base_url,
            "Referer": f"{base_url}/buchung/fahrplan/suche",
            "User-Agent": self.http_client.settings.user_agent,
            "Connection": "close",
        }

    async def query_best_price(self, config: SearchConfig) -> DailyResult:
        """Best price for config.request_time's date; never raises"""
        day = date_key(config.request_time)
        logger.info(f"Getting best price for {day}")
        try:
            response = await self.http_client.post(
                self.http_client.url(BEST_PRICE_PATH),
                json=build_request_body(config),
                headers=self.request_headers(),
            )
        except Exception as e:
            logger.error(f"Error in best price search for {day}: {e!r}")
            return DailyResult.unavailable(f"Fetch Error: {str(e) or 'Unknown'}")
        return parse_best_price_response(
            response.status_code, response.text, self.http_client.settings.timezone
        )
