"""LangGraph nodes for the generate -> parse -> enrich planning workflow."""
from __future__ import annotations

import json
import logging
from typing import Any, Dict, List

from langchain_core.language_models.chat_models import BaseChatModel
from langchain_core.messages import BaseMessage, HumanMessage

from tripmind.core.enrichment import TripEnricher
from tripmind.core.errors import GenerationError
from tripmind.core.normalizer import missing_structural_fields, trip_from_result
from tripmind.core.prompts import generation_prompt, refinement_prompt
from tripmind.core.renderer import format_amount
from tripmind.core.sanitizer import ParseFailure, sanitize
from tripmind.core.schemas import State, Trip, TripRequest
from tripmind.core.seasons import adjusted_budget, is_high_season, season_for_date

logger = logging.getLogger(__name__)


def message_text(message: Any) -> str:
    """Flatten a chat model response into plain text."""

    content = getattr(message, "content", message)
    if isinstance(content, str):
        return content
    if isinstance(content, list):
        chunks: List[str] = []
        for chunk in content:
            if isinstance(chunk, dict) and chunk.get("type") == "text":
                chunks.append(chunk.get("text", ""))
            elif isinstance(chunk, str):
                chunks.append(chunk)
        return "\n".join(chunks)
    if isinstance(content, dict):
        try:
            return json.dumps(content)
        except (TypeError, ValueError):
            return str(content)
    return "" if content is None else str(content)


def build_generation_prompt(request: TripRequest, *, currency_symbol: str = "£") -> str:
    """Make the generation prompt for a new trip."""

    high_season = is_high_season(request.date)
    season = season_for_date(request.date)
    if request.date is None:
        start_label = "flexible"
    else:
        start_label = request.date.strftime("%d %B %Y")
    season_label = f"{season}, {'high' if high_season else 'low'} season" if season else "unknown"
    return generation_prompt.format(
        days=request.days,
        destination=request.destination,
        currency=currency_symbol,
        budget=format_amount(request.budget),
        preferences=", ".join(request.preferences) or "a balanced mix of sights, food and culture",
        start_label=start_label,
        season_label=season_label,
        price_trend="slightly higher" if high_season else "slightly cheaper",
        adjusted_budget=round(adjusted_budget(request.budget, request.date)),
    )


def build_refinement_prompt(feedback: str, current_trip: Trip) -> str:
    """Make the refinement prompt carrying the current trip as JSON."""

    return refinement_prompt.format(
        feedback=feedback.strip(),
        current_trip=current_trip.model_dump_json(indent=2, exclude_none=True),
    )


def make_generate_node(llm: BaseChatModel, *, currency_symbol: str = "£"):
    """Call the chat model; the only node whose failure is surfaced."""

    async def generate(state: State) -> Dict[str, Any]:
        if state.feedback and state.current_trip is not None:
            prompt = build_refinement_prompt(state.feedback, state.current_trip)
            name = "refinement"
        elif state.request is not None:
            prompt = build_generation_prompt(state.request, currency_symbol=currency_symbol)
            name = "generation"
        else:
            raise ValueError("Workflow state needs either a trip request or feedback with a current trip")

        logger.debug("%s prompt: %s", name, prompt)
        try:
            response: BaseMessage = await llm.ainvoke([HumanMessage(content=prompt.strip())])
        except Exception as exc:
            logger.error("Trip %s call failed: %s", name, exc, exc_info=True)
            raise GenerationError(str(exc) or type(exc).__name__) from exc

        raw_output = message_text(response).strip() or "{}"
        logger.debug("Raw %s output: %s", name, raw_output)
        return {"raw_output": raw_output}

    return generate


def make_parse_node():
    """Sanitise and normalise the raw output into a ``Trip``."""

    async def parse(state: State) -> Dict[str, Any]:
        if state.request is not None:
            destination = state.request.destination
        elif state.current_trip is not None:
            destination = state.current_trip.destination
        else:
            destination = None

        result = sanitize(state.raw_output)
        trip = trip_from_result(result, destination=destination)

        warnings: List[str] = []
        if isinstance(result, ParseFailure):
            warnings.append(f"Model output could not be parsed ({result.reason}); showing a default trip")
        elif state.feedback:
            missing = missing_structural_fields(result.payload)
            if missing:
                logger.warning("Refined trip dropped structural fields: %s", ", ".join(missing))
                warnings.append(f"Refined trip was missing: {', '.join(missing)}")

        logger.info("Parsed trip with %s itinerary day(s)", len(trip.itinerary))
        return {"trip": trip, "warnings": warnings}

    return parse


def make_enrich_node(enricher: TripEnricher):
    """Attach coordinates and an image; never fails the workflow."""

    async def enrich(state: State) -> Dict[str, Any]:
        if state.trip is None:
            return {}
        request = state.request
        outcome = await enricher.enrich(
            state.trip,
            start=request.date if request else None,
            preferences=request.preferences if request else (),
        )
        return {
            "trip": outcome.trip,
            "warnings": [f"Enrichment miss for {miss}" for miss in outcome.misses],
        }

    return enrich
