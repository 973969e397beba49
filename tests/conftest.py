import json
from collections.abc import AsyncIterator, Callable
from pathlib import Path
from typing import Any

import pytest
from httpx import ASGITransport, AsyncClient

from scrygraph.main import app
from scrygraph.models.card import NormalizedCard
from scrygraph.services.scryfall_client import ScryfallClient, get_scryfall_client

FIXTURES = Path(__file__).parent / "fixtures"


@pytest.fixture
def scryfall_cards() -> list[dict[str, Any]]:
    """One Scryfall card per layout policy (plus an unknown layout)."""
    with open(FIXTURES / "scryfall_cards.json", encoding="utf-8") as f:
        cards: list[dict[str, Any]] = json.load(f)
    return cards


@pytest.fixture
def scryfall_card(scryfall_cards: list[dict[str, Any]]) -> Callable[[str], dict[str, Any]]:
    """Look up a fixture card by its ID."""

    def lookup(card_id: str) -> dict[str, Any]:
        return next(card for card in scryfall_cards if card["id"] == card_id)

    return lookup


def make_card(card_id: str = "card", **overrides: Any) -> NormalizedCard:
    """Build a NormalizedCard with sensible defaults for transformer tests."""
    fields: dict[str, Any] = {
        "id": card_id,
        "name": card_id.title(),
        "layout": "normal",
        "cmc": 0.0,
        "colors": (),
        "color_identity": (),
        "types": (),
        "supertypes": (),
        "subtypes": (),
        "rarity": "common",
        "set_code": "tst",
        "set_name": "Test Set",
        "collector_number": "1",
        "released_at": "2020-01-01",
    }
    fields.update(overrides)
    return NormalizedCard(**fields)


@pytest.fixture
async def api_client() -> AsyncIterator[AsyncClient]:
    """API test client backed by a Scryfall client that never waits between requests."""
    app.dependency_overrides[get_scryfall_client] = lambda: ScryfallClient(
        base_url="https://api.scryfall.com", rate_limit_delay=0.0
    )

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client

    app.dependency_overrides.clear()
