from __future__ import annotations

import logging
from typing import Any

from google import genai
from google.genai import types

from ..search.models import GroundingSource, LatLng, RestaurantInfo
from .config import DEFAULT_LLM_CONFIG, LLMConfig

logger = logging.getLogger(__name__)

EMPTY_RESPONSE_MESSAGE = "Received an empty response from the AI."


class RestaurantInfoError(RuntimeError):
    """Gemini request failed or returned no text."""


def _build_request_config(location: LatLng) -> types.GenerateContentConfig:
    return types.GenerateContentConfig(
        tools=[types.Tool(google_maps=types.GoogleMaps())],
        tool_config=types.ToolConfig(
            retrieval_config=types.RetrievalConfig(
                lat_lng=types.LatLng(
                    latitude=location.latitude,
                    longitude=location.longitude,
                ),
            ),
        ),
    )


def _extract_sources(response: Any) -> list[GroundingSource]:
    candidates = response.candidates or []
    if not candidates:
        return []

    metadata = candidates[0].grounding_metadata
    chunks = (metadata.grounding_chunks if metadata else None) or []

    sources: list[GroundingSource] = []
    for chunk in chunks:
        maps = chunk.maps
        if maps is None:
            sources.append(GroundingSource())
        else:
            sources.append(GroundingSource(uri=maps.uri, title=maps.title))
    return sources


def fetch_restaurant_info(
    query: str,
    location: LatLng,
    config: LLMConfig = DEFAULT_LLM_CONFIG,
) -> RestaurantInfo:
    """
    Ask Gemini about restaurants matching ``query`` near ``location``.

    Raises ValueError when no API key is configured and RestaurantInfoError
    for any request failure or empty answer. Nothing is retried.
    """
    if not config.api_key:
        raise ValueError("API_KEY environment variable not set")

    try:
        client = genai.Client(api_key=config.api_key)
        response = client.models.generate_content(
            model=config.model,
            contents=query,
            config=_build_request_config(location),
        )

        text = response.text
        if not text:
            raise RestaurantInfoError(EMPTY_RESPONSE_MESSAGE)

        sources = _extract_sources(response)

    except Exception as exc:
        logger.warning("Error fetching data from Gemini API", exc_info=True)
        raise RestaurantInfoError(
            f"Failed to get restaurant information: {exc}"
        ) from exc

    logger.info("Gemini answered %r with %d map sources", query, len(sources))
    return RestaurantInfo(text=text, sources=sources)
