"""
Tests for the remote and static station resolvers.
"""

import json

import httpx
import pytest

from bahn_bestpreis.services.http_client import HttpClient
from bahn_bestpreis.services.station_service import (
    RemoteStationResolver,
    StaticStationResolver,
    create_station_resolver,
)
from bahn_bestpreis.utils.config import Settings

HAMBURG_ID = "A=1@O=Hamburg Hbf@X=10006909@Y=53552733@U=80@L=8002549@B=1@p=1712432556@"


class TestRemoteStationResolver:
    @pytest.mark.asyncio
    async def test_first_hit_wins_and_id_is_verbatim(self, http_client, fake_bahn):
        fake_bahn.locations["Hamburg"] = [
            {"id": HAMBURG_ID, "name": "Hamburg Hbf", "type": "ST"},
            {"id": "A=1@O=Hamburg-Altona@", "name": "Hamburg-Altona", "type": "ST"},
        ]
        resolver = RemoteStationResolver(http_client)

        station = await resolver.resolve("Hamburg")

        assert station.id == HAMBURG_ID
        assert station.name == "Hamburg Hbf"

    @pytest.mark.asyncio
    async def test_request_contract(self, http_client, fake_bahn):
        fake_bahn.locations["Frankfurt (Main)"] = [{"id": "X", "name": "Frankfurt(Main)Hbf"}]
        resolver = RemoteStationResolver(http_client)

        await resolver.resolve("Frankfurt (Main)")

        request = fake_bahn.requests[0]
        assert request.method == "GET"
        assert request.url.params["suchbegriff"] == "Frankfurt (Main)"
        assert request.url.params["typ"] == "ALL"
        assert request.url.params["limit"] == "10"
        assert "Firefox" in request.headers["User-Agent"]
        assert request.headers["Accept"] == "application/json"
        assert request.headers["Accept-Language"].startswith("de-DE")
        assert request.headers["Referer"] == "https://www.bahn.de/"

    @pytest.mark.asyncio
    async def test_query_encoded_like_uri_component(self, http_client, fake_bahn):
        fake_bahn.locations["Frankfurt Main/Süd"] = [{"id": "X", "name": "Frankfurt(Main)Süd"}]
        resolver = RemoteStationResolver(http_client)

        station = await resolver.resolve("Frankfurt Main/Süd")

        query = fake_bahn.requests[0].url.query.decode("ascii")
        assert query == "suchbegriff=Frankfurt%20Main%2FS%C3%BCd&typ=ALL&limit=10"
        assert station.name == "Frankfurt(Main)Süd"

    @pytest.mark.asyncio
    async def test_empty_result_is_not_found(self, http_client):
        resolver = RemoteStationResolver(http_client)

        assert await resolver.resolve("Atlantis") is None

    @pytest.mark.asyncio
    async def test_empty_query_makes_no_request(self, http_client, fake_bahn):
        resolver = RemoteStationResolver(http_client)

        assert await resolver.resolve("") is None
        assert fake_bahn.requests == []

    @pytest.mark.asyncio
    @pytest.mark.parametrize("response", [
        httpx.Response(500, text="boom"),
        httpx.Response(200, text="<html>kein json</html>"),
        httpx.Response(200, json={"error": "unexpected"}),
        httpx.Response(200, json=[{"name": "ohne id"}]),
    ])
    async def test_failures_collapse_to_not_found(self, settings, response):
        client = HttpClient(settings, transport=httpx.MockTransport(lambda request: response))
        resolver = RemoteStationResolver(client)

        assert await resolver.resolve("Berlin") is None

    @pytest.mark.asyncio
    async def test_network_error_is_not_found(self, settings):
        def handler(request):
            raise httpx.ConnectError("connection refused")

        client = HttpClient(settings, transport=httpx.MockTransport(handler))
        resolver = RemoteStationResolver(client)

        assert await resolver.resolve("Berlin") is None


class TestStaticStationResolver:
    @pytest.mark.asyncio
    async def test_known_city(self):
        resolver = StaticStationResolver(
            stations={"Berlin": "A=1@O=Berlin Hbf@L=8011160@"},
            display_names={"Berlin": "Berlin Hbf"},
        )

        station = await resolver.resolve("Berlin")

        assert station.id == "A=1@O=Berlin Hbf@L=8011160@"
        assert station.name == "Berlin Hbf"

    @pytest.mark.asyncio
    async def test_identity_fallback(self):
        resolver = StaticStationResolver(stations={}, display_names={"8000001": "Aachen Hbf"})

        unknown = await resolver.resolve("Kleinkleckersdorf")
        named_only = await resolver.resolve("8000001")

        assert unknown.id == "Kleinkleckersdorf"
        assert unknown.name == "Kleinkleckersdorf"
        assert named_only.id == "8000001"
        assert named_only.name == "Aachen Hbf"

    @pytest.mark.asyncio
    async def test_load_bundled_table(self):
        resolver = StaticStationResolver()

        await resolver.load()
        station = await resolver.resolve("München")

        assert "L=8000261@" in station.id
        assert station.name == "München Hbf"

    @pytest.mark.asyncio
    async def test_load_custom_table(self, tmp_path):
        path = tmp_path / "stations.json"
        path.write_text(json.dumps({
            "stations": {"Bonn": "A=1@O=Bonn Hbf@L=8000044@"},
            "display_names": {"Bonn": "Bonn Hbf"},
        }), encoding="utf-8")
        resolver = StaticStationResolver()

        await resolver.load(path)

        assert resolver.stations == {"Bonn": "A=1@O=Bonn Hbf@L=8000044@"}
        assert (await resolver.resolve("Bonn")).name == "Bonn Hbf"

    @pytest.mark.asyncio
    async def test_missing_table_keeps_identity_behaviour(self, tmp_path):
        resolver = StaticStationResolver()

        await resolver.load(tmp_path / "missing.json")

        assert (await resolver.resolve("Bonn")).id == "Bonn"


def test_create_station_resolver_follows_settings():
    remote = create_station_resolver(Settings(_env_file=None, station_resolver="remote"))
    static = create_station_resolver(Settings(_env_file=None, station_resolver="static"))

    assert isinstance(remote, RemoteStationResolver)
    assert isinstance(static, StaticStationResolver)
