"""
Graph API endpoints.

Renders chart data from either a live Scryfall search or a list of card
objects supplied by the caller, using a preset or a custom configuration.
"""

from typing import Annotated, Any

from fastapi import APIRouter, Depends, HTTPException, status
from pydantic import BaseModel, Field

from scrygraph.analysis.graph_transformer import transform
from scrygraph.analysis.presets import get_preset
from scrygraph.analysis.query_stats import summarize_cards
from scrygraph.analysis.validation import validate_graph_config
from scrygraph.api.cards import scryfall_http_exception
from scrygraph.api.schemas import (
    ChartResponse,
    GraphConfigModel,
    GraphSelection,
    StatsResponse,
)
from scrygraph.models.card import NormalizedCard
from scrygraph.models.graph import GraphConfig
from scrygraph.parsers.card_normalizer import normalize_cards
from scrygraph.services.scryfall_client import ScryfallClient, ScryfallError, get_scryfall_client

router = APIRouter(prefix="/graphs", tags=["graphs"])


class RenderRequest(GraphSelection):
    """Chart a Scryfall search."""

    query: str = Field(..., min_length=1, examples=["t:dragon"])


class TransformRequest(GraphSelection):
    """Chart card objects the client already holds."""

    cards: list[dict[str, Any]] = Field(
        default_factory=list,
        description="Scryfall card objects, any layout",
    )


class GraphResponse(BaseModel):
    """Chart data plus summary statistics for the cards it was built from."""

    total_cards: int
    chart: ChartResponse
    stats: StatsResponse


class ValidationResponse(BaseModel):
    valid: bool
    errors: list[str] = Field(default_factory=list)
    warnings: list[str] = Field(default_factory=list)
    suggestions: list[str] = Field(default_factory=list)


def resolve_config(selection: GraphSelection) -> GraphConfig:
    """Return the requested config; 404 if the preset does not exist."""
    if selection.config is not None:
        return selection.config.to_config()

    preset = get_preset(selection.preset_id or "")
    if preset is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Preset '{selection.preset_id}' not found",
        )
    return preset


def _build_response(cards: list[NormalizedCard], config: GraphConfig) -> GraphResponse:
    return GraphResponse(
        total_cards=len(cards),
        chart=ChartResponse.model_validate(transform(cards, config)),
        stats=StatsResponse.model_validate(summarize_cards(cards)),
    )


@router.post("/validate", response_model=ValidationResponse)
async def validate_graph(config: GraphConfigModel) -> ValidationResponse:
    """Check a custom configuration without rendering it."""
    result = validate_graph_config(config.to_config())
    return ValidationResponse(
        valid=result.valid,
        errors=result.errors,
        warnings=result.warnings,
        suggestions=result.suggestions,
    )


@router.post("/render", response_model=GraphResponse)
async def render_graph(
    request: RenderRequest,
    client: Annotated[ScryfallClient, Depends(get_scryfall_client)],
) -> GraphResponse:
    """Search Scryfall, normalize the results and build chart data."""
    config = resolve_config(request)

    try:
        raw_cards = await client.search_cards(request.query)
    except ScryfallError as e:
        raise scryfall_http_exception(e) from e

    return _build_response(normalize_cards(raw_cards), config)


@router.post("/transform", response_model=GraphResponse)
async def transform_cards(request: TransformRequest) -> GraphResponse:
    """Build chart data from supplied card objects. Does not contact Scryfall."""
    config = resolve_config(request)
    return _build_response(normalize_cards(request.cards), config)
