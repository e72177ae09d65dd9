import asyncio
import logging
from contextlib import asynccontextmanager
from datetime import datetime
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from fastapi.middleware.cors import CORSMiddleware
from pydantic import ValidationError
import uvicorn

from . import __version__
from .models.search import SearchPricesRequest
from .services.search_service import SearchService
from .services.station_service import StaticStationResolver
from .utils.config import Settings, get_settings
from .utils.log_utils import new_request_id, setup_logging

logger = logging.getLogger(__name__)

SERVER_NAME = "bahn-bestpreis-server"


def create_app(settings: Optional[Settings] = None,
               search_service: Optional[SearchService] = None) -> FastAPI:
    settings = settings or get_settings()
    search_service = search_service or SearchService(settings)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        logger.info(f"🚀 Starting {SERVER_NAME} (station resolver: {settings.station_resolver})")
        resolver = search_service.station_resolver
        if isinstance(resolver, StaticStationResolver) and not resolver.stations:
            await resolver.load(settings.station_table_path)
        yield

    app = FastAPI(
        title="Bahn Bestpreis Server",
        version=__version__,
        description="Tagesbestpreis search over several consecutive days",
        debug=settings.debug,
        lifespan=lifespan,
    )
    app.state.search_service = search_service

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"]
    )

    @app.middleware("http")
    async def request_scope(request: Request, call_next):
        request_id = new_request_id()
        response = await call_next(request)
        response.headers["X-Request-ID"] = request_id
        return response

    @app.get("/")
    async def root():
        return {
            "name": SERVER_NAME,
            "version": __version__,
            "status": "running",
            "station_resolver": settings.station_resolver,
        }

    @app.get("/health")
    async def health():
        return {
            "status": "healthy",
            "timestamp": datetime.now().isoformat(),
        }

    if settings.station_resolver == "remote":
        @app.get("/api/search-station")
        async def search_station(query: Optional[str] = None):
            try:
                if not query:
                    return JSONResponse({"error": "Missing query parameter"}, status_code=400)

                station = await search_service.search_station(query)
                if not station:
                    return JSONResponse({"error": "Station not found"}, status_code=404)

                return station.model_dump()
            except Exception as e:
                logger.error(f"Error in search-station endpoint: {e!r}")
                return JSONResponse(
                    {"error": "Internal server error", "message": str(e)},
                    status_code=500
                )

    @app.post("/api/search-prices")
    async def search_prices(request: Request):
        try:
            try:
                body = await request.json()
                search_request = SearchPricesRequest.model_validate(body)
            except (ValueError, ValidationError):
                return JSONResponse({"error": "Invalid JSON body"}, status_code=400)
            logger.info(f"Received request: {body}")

            if search_request.missing_required():
                return JSONResponse(
                    {"error": "Missing required fields: start, ziel, abfahrtab"},
                    status_code=400
                )

            result = await search_service.search_prices(search_request)
            response = result.to_response()
            logger.info(f"Sending response: {list(response.keys())}")
            return response
        except Exception as e:
            logger.error(f"Error in search-prices endpoint: {e!r}")
            return JSONResponse(
                {"error": "Internal server error", "message": str(e)},
                status_code=500
            )

    return app


def _build_default_app() -> FastAPI:
    settings = get_settings()
    setup_logging(settings.log_level)
    return create_app(settings)


app = _build_default_app()


async def main_server():
    """Run the HTTP server"""
    settings = get_settings()
    logger.info(f"📡 Search endpoint: http://{settings.server_host}:{settings.server_port}/api/search-prices")
    logger.info(f"📚 Health check: http://{settings.server_host}:{settings.server_port}/health")

    config = uvicorn.Config(
        app,
        host=settings.server_host,
        port=settings.server_port,
        log_level=settings.log_level.lower()
    )
    uvicorn_server = uvicorn.Server(config)
    await uvicorn_server.serve()


def main():
    asyncio.run(main_server())


if __name__ == "__main__":
    main()
