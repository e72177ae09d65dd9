"""
Shared fixtures: settings without .env lookups and a fake bahn.de upstream.
"""

import json

import httpx
import pytest

from bahn_bestpreis.services.http_client import HttpClient
from bahn_bestpreis.utils.config import Settings


def make_interval(price, departure, arrival, dep_place="Hamburg Hbf", arr_place="Berlin Hbf"):
    """One tagesbestpreis interval record as bahn.de returns it"""
    return {
        "preis": {"betrag": price, "waehrung": "EUR"},
        "verbindungen": [
            {
                "verbindung": {
                    "verbindungsAbschnitte": [
                        {
                            "abfahrtsZeitpunkt": departure,
                            "ankunftsZeitpunkt": arrival,
                            "abfahrtsOrt": dep_place,
                            "ankunftsOrt": arr_place,
                        }
                    ]
                }
            }
        ],
    }


class FakeBahn:
    """Records requests and answers them from queued responses"""

    def __init__(self):
        self.requests = []
        self.locations = {}
        self.price_responses = []

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if request.url.path == "/web/api/reiseloesung/orte":
            query = request.url.params.get("suchbegriff")
            return httpx.Response(200, json=self.locations.get(query, []))
        if request.url.path == "/web/api/angebote/tagesbestpreis":
            response = self.price_responses.pop(0)
            if isinstance(response, Exception):
                raise response
            return response
        return httpx.Response(404, text="not found")

    def price_requests(self):
        return [r for r in self.requests if r.url.path.endswith("tagesbestpreis")]

    def price_bodies(self):
        return [json.loads(r.content) for r in self.price_requests()]


@pytest.fixture
def settings():
    return Settings(_env_file=None, bahn_base_url="https://www.bahn.de", timezone="Europe/Berlin")


@pytest.fixture
def fake_bahn():
    return FakeBahn()


@pytest.fixture
def http_client(settings, fake_bahn):
    return HttpClient(settings, transport=httpx.MockTransport(fake_bahn.handler))
