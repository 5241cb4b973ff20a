import logging
from contextlib import asynccontextmanager
from typing import List, Optional

from fastapi import Depends, FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from src.skypath.application import SearchItineraries
from src.skypath.config import Settings
from src.skypath.exceptions import SearchError

logger = logging.getLogger(__name__)

MISSING_PARAMS_MESSAGE = "origin, destination, and date are required"


# --- Pydantic Schemas (The JSON Contract) ---
# camelCase on the wire, read straight from the result dataclasses.


class CamelModel(BaseModel):
    model_config = ConfigDict(
        from_attributes=True,
        alias_generator=to_camel,
        populate_by_name=True,
    )


class SegmentSchema(CamelModel):
    flight_number: str
    airline: str
    origin: str
    destination: str
    departure_local: str
    arrival_local: str
    price: float
    aircraft: str


class ItinerarySchema(CamelModel):
    segments: List[SegmentSchema]
    layovers_minutes: List[int]
    total_duration_minutes: int
    total_price: float


class SearchResponse(CamelModel):
    origin: str
    destination: str
    date: str
    count: int  # Captures @property
    itineraries: List[ItinerarySchema]


class AirportOut(CamelModel):
    code: str
    name: str
    city: str
    country: str
    timezone: str


class ErrorResponse(BaseModel):
    message: str
    kind: Optional[str] = None


def configure_logging(level: str) -> None:
    """Configure console logging for the HTTP entry point."""
    logging.basicConfig(
        level=level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )


def get_searcher(request: Request) -> SearchItineraries:
    return request.app.state.searcher


def create_app(
    searcher: Optional[SearchItineraries] = None,
    settings: Optional[Settings] = None,
) -> FastAPI:
    """
    Build the HTTP application.

    Args:
        searcher: Pre-built searcher. If None, one is built from
            settings.data_path at startup; a dataset that fails to load
            aborts startup.
        settings: Settings; defaults to Settings.from_env().

    Returns:
        Configured FastAPI application.
    """
    settings = settings or Settings.from_env()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        if app.state.searcher is None:
            app.state.searcher = SearchItineraries(data_path=settings.data_path)
        yield

    app = FastAPI(title="SkyPath Itinerary Search API", lifespan=lifespan)
    app.state.searcher = searcher

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_allow_origins,
        allow_methods=["GET", "OPTIONS"],
        allow_headers=["Content-Type"],
    )

    @app.exception_handler(SearchError)
    async def search_error_handler(request: Request, exc: SearchError) -> JSONResponse:
        logger.info("Search rejected (%s): %s", exc.kind.value, exc)
        return JSONResponse(
            status_code=400,
            content=ErrorResponse(message=str(exc), kind=exc.kind.value).model_dump(),
        )

    @app.get("/api/health")
    def health():
        return {"ok": True}

    @app.get(
        "/api/search",
        response_model=SearchResponse,
        responses={400: {"model": ErrorResponse}},
    )
    def search(
        origin: str = "",
        destination: str = "",
        date: str = "",
        searcher: SearchItineraries = Depends(get_searcher),
    ):
        if not origin or not destination or not date:
            return JSONResponse(
                status_code=400,
                content=ErrorResponse(message=MISSING_PARAMS_MESSAGE).model_dump(),
            )

        result = searcher.search(origin, destination, date)
        return SearchResponse.model_validate(result)

    @app.get("/api/airports", response_model=List[AirportOut])
    def airports(searcher: SearchItineraries = Depends(get_searcher)):
        return [AirportOut.model_validate(a) for a in searcher.get_airports()]

    return app


_settings = Settings.from_env()
configure_logging(_settings.log_level)

# Run with: uvicorn src.api.search_api:app --port 8080
app = create_app(settings=_settings)
