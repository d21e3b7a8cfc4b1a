from tripmind.core.config import ApiSettings
from tripmind.core.enrichment import TripEnricher
from tripmind.core.graph_builder import build_trip_graph
from tripmind.core.llm import create_chat_model
from tripmind.core.renderer import DocumentRenderer, RenderedDocument
from tripmind.core.schemas import RefineRequest, State, Trip, TripRequest
from tripmind.services.geocoding import Geocoder, create_geocoder
from tripmind.services.unsplash import ImageSearch, create_unsplash_client

from langchain_core.language_models.chat_models import BaseChatModel
from typing import Any, Mapping, Optional
import logging

logger = logging.getLogger(__name__)

REQUIRED_SETTINGS = [
    "xai_api_key",
]


def _ensure_configuration(settings: ApiSettings) -> None:
    missing = [field for field in REQUIRED_SETTINGS if not getattr(settings, field)]
    if missing:
        joined = ", ".join(missing)
        raise RuntimeError(
            f"Missing required environment variables for trip workflow: {joined}"
        )


class TripService:
    """Container for the planning graph and its collaborators.

    Owns the chat model, the geocoding and image-search clients, the enricher
    and the compiled LangGraph workflow. Every collaborator can be injected,
    which is how the tests swap in fakes; anything not injected is built from
    ``settings``.

    Attributes:
        settings: API configuration with external service credentials
        llm: Chat model that authors and refines trips
        geocoder: Place-name resolver used by enrichment
        image_search: Image search client, ``None`` when no key is configured
        enricher: Coordinates/image orchestrator
        renderer: PDF document renderer
        graph: Compiled generate -> parse -> enrich workflow
    """

    def __init__(
        self,
        settings: ApiSettings,
        *,
        llm: Optional[BaseChatModel] = None,
        geocoder: Optional[Geocoder] = None,
        image_search: Optional[ImageSearch] = None,
        renderer: Optional[DocumentRenderer] = None,
    ) -> None:
        if llm is None:
            _ensure_configuration(settings)
            llm = create_chat_model(settings)

        self.settings = settings
        self.llm = llm
        self.geocoder = geocoder if geocoder is not None else create_geocoder(settings)

        if image_search is None and settings.unsplash_access_key:
            image_search = create_unsplash_client(settings)
        elif image_search is None:
            logger.warning("UNSPLASH_ACCESS_KEY not set; trips will not get a cover image")
        self.image_search = image_search

        self.enricher = TripEnricher(
            self.geocoder,
            self.image_search,
            max_concurrency=settings.enrichment_concurrency,
        )
        self.renderer = renderer or DocumentRenderer(currency_symbol=settings.currency_symbol)
        self.graph = build_trip_graph(
            llm=self.llm,
            enricher=self.enricher,
            currency_symbol=settings.currency_symbol,
        )

    def __repr__(self) -> str:
        llm_name = getattr(self.llm, "model_name", None) or getattr(self.llm, "model", None) or type(self.llm).__name__
        return (
            f"TripService(llm='{llm_name}', "
            f"geocoder={type(self.geocoder).__name__}, "
            f"image_search={type(self.image_search).__name__})"
        )

    async def close(self) -> None:
        for client in (self.geocoder, self.image_search):
            if client is not None:
                await client.aclose()

    async def generate(self, *, request: TripRequest) -> Mapping[str, Any]:
        """Generate, parse and enrich a new trip.

        Raises:
            GenerationError: If the chat model call fails
        """
        return await self.graph.ainvoke(State(request=request))

    async def refine(self, *, request: RefineRequest) -> Mapping[str, Any]:
        """Apply feedback to an existing trip; the result replaces it wholesale."""

        return await self.graph.ainvoke(
            State(feedback=request.feedback, current_trip=request.current_trip)
        )

    def export(self, trip: Trip) -> RenderedDocument:
        """Render the trip as a PDF document."""

        return self.renderer.render(trip)
