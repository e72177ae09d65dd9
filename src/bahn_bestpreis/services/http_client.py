"""HTTP client service"""

import logging
from typing import Optional, Dict, Any
import httpx
from bahn_bestpreis.utils.config import Settings, get_settings

logger = logging.getLogger(__name__)


class HttpClient:
    """bahn.de HTTP client

    Every request runs on its own short-lived AsyncClient, so no connection
    is kept between calls. Responses are returned whatever their status;
    callers decide how to treat non-2xx answers.
    """

    def __init__(self, settings: Optional[Settings] = None,
                 transport: Optional[httpx.AsyncBaseTransport] = None):
        self.settings = settings or get_settings()
        self.transport = transport

    def browser_headers(self) -> Dict[str, str]:
        """Headers of a desktop Firefox; upstream degrades requests without them"""
        return {
            'User-Agent': self.settings.user_agent,
            'Accept': 'application/json',
            'Accept-Language': 'de-DE,de;q=0.9,en;q=0.8',
            'Referer': f'{self.settings.bahn_base_url}/',
        }

    def url(self, path: str) -> str:
        return f"{self.settings.bahn_base_url.rstrip('/')}{path}"

    def create_session(self) -> httpx.AsyncClient:
        """Create an HTTP session"""
        return httpx.AsyncClient(
            timeout=self.settings.request_timeout,
            follow_redirects=True,
            transport=self.transport,
        )

    async def get(self, url: str, params: Optional[Dict[str, Any]] = None,
                  headers: Optional[Dict[str, str]] = None) -> httpx.Response:
        """GET request"""
        async with self.create_session() as session:
            try:
                logger.info(f"GET {url}")
                response = await session.get(url, params=params, headers=headers)
                logger.info(f"Response status: {response.status_code}")
                return response
            except httpx.RequestError as e:
                logger.error(f"Request error: {e!r}")
                raise

    async def post(self, url: str, json: Optional[Any] = None,
                   headers: Optional[Dict[str, str]] = None) -> httpx.Response:
        """POST request"""
        async with self.create_session() as session:
            try:
                logger.info(f"POST {url}")
                response = await session.post(url, json=json, headers=headers)
                logger.info(f"Response status: {response.status_code}")
                return response
            except httpx.RequestError as e:
                logger.error(f"Request error: {e!r}")
                raise
