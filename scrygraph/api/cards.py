"""
Card API endpoints.

Searches Scryfall and returns normalized cards with summary statistics.
"""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Query, status
from pydantic import BaseModel, Field

from scrygraph.analysis.query_stats import summarize_cards
from scrygraph.api.schemas import CardResponse, StatsResponse
from scrygraph.parsers.card_normalizer import normalize_card, normalize_cards
from scrygraph.services.scryfall_client import ScryfallClient, ScryfallError, get_scryfall_client

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/cards", tags=["cards"])


class SearchResponse(BaseModel):
    """Normalized search results."""

    query: str
    total_cards: int
    cards: list[CardResponse] = Field(default_factory=list)
    stats: StatsResponse


def scryfall_http_exception(error: ScryfallError) -> HTTPException:
    """Map a Scryfall failure to the response the client sees."""
    logger.warning("Scryfall request failed (%s): %s", error.status_code, error.message)
    if error.status_code == status.HTTP_404_NOT_FOUND:
        return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=error.message)
    return HTTPException(
        status_code=status.HTTP_502_BAD_GATEWAY,
        detail=f"Scryfall request failed: {error.message}",
    )


@router.get("/search", response_model=SearchResponse)
async def search_cards(
    q: Annotated[str, Query(min_length=1, description="Scryfall search query")],
    client: Annotated[ScryfallClient, Depends(get_scryfall_client)],
) -> SearchResponse:
    """
    Search Scryfall and normalize every matching card.

    Returns 404 when Scryfall finds no cards.
    """
    try:
        raw_cards = await client.search_cards(q)
    except ScryfallError as e:
        raise scryfall_http_exception(e) from e

    cards = normalize_cards(raw_cards)
    stats = summarize_cards(cards)

    return SearchResponse(
        query=q,
        total_cards=len(cards),
        cards=[CardResponse.model_validate(card) for card in cards],
        stats=StatsResponse.model_validate(stats),
    )


@router.get("/named", response_model=CardResponse)
async def card_by_name(
    fuzzy: Annotated[str, Query(min_length=1, description="Approximate card name")],
    client: Annotated[ScryfallClient, Depends(get_scryfall_client)],
) -> CardResponse:
    """Look up one card by fuzzy name match."""
    try:
        raw_card = await client.get_card_by_name(fuzzy)
    except ScryfallError as e:
        raise scryfall_http_exception(e) from e

    return CardResponse.model_validate(normalize_card(raw_card))
