import asyncio
import json
import os
import sys
from datetime import datetime, timezone

import aiofiles
import aiohttp

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), "..", "src")))

from bahn_bestpreis.services.station_service import (  # noqa: E402
    DEFAULT_STATION_TABLE,
    LOCATION_SEARCH_LIMIT,
    LOCATION_SEARCH_PATH,
    StaticStationResolver,
)
from bahn_bestpreis.utils.config import FIREFOX_USER_AGENT  # noqa: E402

BASE_URL = "https://www.bahn.de"
HEADERS = {
    "User-Agent": FIREFOX_USER_AGENT,
    "Accept": "application/json",
    "Accept-Language": "de-DE,de;q=0.9,en;q=0.8",
    "Referer": f"{BASE_URL}/",
}


async def lookup_station(session, city):
    """First location search hit for a city, or None"""
    params = {"suchbegriff": city, "typ": "ALL", "limit": str(LOCATION_SEARCH_LIMIT)}
    async with session.get(f"{BASE_URL}{LOCATION_SEARCH_PATH}", params=params) as resp:
        if resp.status != 200:
            raise Exception(f"request failed with status {resp.status}")
        data = await resp.json(content_type=None)
    if not data:
        return None
    return data[0]


async def update_stations(path=DEFAULT_STATION_TABLE):
    print("🚉 Station table update")
    print("=" * 50)
    print(f"🌐 Source: {BASE_URL}{LOCATION_SEARCH_PATH}")
    print(f"⏰ Time: {datetime.now(timezone.utc).strftime('%Y-%m-%d %H:%M:%S')} (UTC)")
    print("=" * 50)

    resolver = StaticStationResolver()
    await resolver.load(path)
    stations = dict(resolver.stations)
    display_names = dict(resolver.display_names)

    async with aiohttp.ClientSession(headers=HEADERS) as session:
        for city in sorted(stations):
            try:
                station = await lookup_station(session, city)
            except Exception as e:
                print(f"❌ {city}: {e}, keeping existing entry")
                continue
            if not station or not station.get("id"):
                print(f"⚠️  {city}: not found, keeping existing entry")
                continue
            stations[city] = station["id"]
            display_names[city] = station.get("name") or city
            print(f"    - {city} -> {display_names[city]}")

    async with aiofiles.open(path, "w", encoding="utf-8") as f:
        await f.write(json.dumps(
            {"stations": stations, "display_names": display_names},
            ensure_ascii=False,
            indent=2,
        ) + "\n")
    print(f"✨ Wrote {len(stations)} stations to {path}")


if __name__ == "__main__":
    asyncio.run(update_stations(sys.argv[1] if len(sys.argv) > 1 else DEFAULT_STATION_TABLE))
