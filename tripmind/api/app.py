"""FastAPI surface for the TripMind planning pipeline."""
from __future__ import annotations

# Load environment variables from .env file
from dotenv import load_dotenv

# Load .env file before any other imports that might need environment variables
load_dotenv()

import logging
from typing import Dict
from urllib.parse import quote

import sentry_sdk
from fastapi import FastAPI, HTTPException, Response
from fastapi.middleware.cors import CORSMiddleware

from tripmind.api.dependencies import get_trip_service, lifespan
from tripmind.api.response_builder import _result_to_response, trip_to_response
from tripmind.api.schemas import GenerateRequest, RefineTripRequest, TripResponse
from tripmind.core.config import ApiSettings
from tripmind.core.errors import GenerationError
from tripmind.core.schemas import Trip

_settings = ApiSettings.from_env()
logging.basicConfig(
    level=_settings.log_level,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)

if _settings.sentry_dsn:  # pragma: no cover - runtime configuration
    sentry_sdk.init(
        dsn=_settings.sentry_dsn,
        enable_logs=True,
        traces_sample_rate=1.0,
    )

app = FastAPI(title="TripMind API", version="0.1.0", lifespan=lifespan)

origins = [
    "http://localhost:3000",
    "http://localhost:3001",
]

app.add_middleware(
    CORSMiddleware,
    allow_origins=origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


def _content_disposition(filename: str) -> str:
    fallback = filename.encode("ascii", errors="replace").decode("ascii").replace("?", "_").replace('"', "_")
    return f"attachment; filename=\"{fallback}\"; filename*=UTF-8''{quote(filename)}"


@app.post("/trip/generate", response_model=TripResponse)
async def generate_trip(payload: GenerateRequest) -> TripResponse:
    """Generate a new trip from the traveller's request.

    The model response is sanitised and normalised into a Trip, then enriched
    with coordinates for the accommodation and each day plus a cover image.
    Malformed model output and failed lookups degrade to defaults and are
    reported in ``warnings``; only a failed model call is an error.

    Example JSON payload:
        ```json
        {
            "destination": "Lisbon, Portugal",
            "days": 4,
            "budget": 1200,
            "preferences": ["food", "culture"],
            "date": "2025-05-14"
        }
        ```

    Raises:
        HTTPException: 400 for invalid input, 500 when the model call fails
    """

    logger.info("Generating trip to %s (%s days, budget %s)", payload.destination, payload.days, payload.budget)
    service = get_trip_service()
    try:
        result = await service.generate(request=payload)
    except GenerationError as exc:
        logger.error(f"Generation failed: {str(exc)}")
        raise HTTPException(status_code=500, detail=str(exc)) from exc
    except ValueError as exc:
        logger.error(f"Value error during generation: {str(exc)}")
        raise HTTPException(status_code=400, detail=str(exc)) from exc
    except Exception as exc:
        logger.error(f"Unexpected error during generation: {str(exc)}", exc_info=True)
        raise HTTPException(status_code=500, detail=str(exc)) from exc

    return _result_to_response(result)


@app.post("/trip/refine", response_model=TripResponse)
async def refine_trip(payload: RefineTripRequest) -> TripResponse:
    """Apply free-text feedback to the current trip and return the replacement."""

    logger.info("Refining trip to %s", payload.current_trip.destination)
    service = get_trip_service()
    try:
        result = await service.refine(request=payload)
    except GenerationError as exc:
        logger.error(f"Refinement failed: {str(exc)}")
        raise HTTPException(status_code=500, detail=str(exc)) from exc
    except ValueError as exc:
        logger.error(f"Value error during refinement: {str(exc)}")
        raise HTTPException(status_code=400, detail=str(exc)) from exc
    except Exception as exc:
        logger.error(f"Unexpected error during refinement: {str(exc)}", exc_info=True)
        raise HTTPException(status_code=500, detail=str(exc)) from exc

    return _result_to_response(result)


@app.post("/trip/linkify", response_model=TripResponse)
async def linkify_trip(payload: Trip) -> TripResponse:
    """Annotate an existing trip for display without calling any service."""

    return trip_to_response(payload)


@app.post("/trip/export")
async def export_trip(payload: Trip) -> Response:
    """Render the trip as a paginated PDF attachment."""

    service = get_trip_service()
    try:
        document = service.export(payload)
    except Exception as exc:
        logger.error(f"Unexpected error during export: {str(exc)}", exc_info=True)
        raise HTTPException(status_code=500, detail=str(exc)) from exc

    logger.info("Exported %s (%s bytes)", document.filename, len(document.content))
    return Response(
        content=document.content,
        media_type=document.media_type,
        headers={"Content-Disposition": _content_disposition(document.filename)},
    )


@app.get("/health")
async def health_check() -> Dict[str, str]:
    """Simple health endpoint used for readiness checks."""

    return {"status": "healthy", "service": "tripmind-api"}
