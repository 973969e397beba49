"""
Scryfall card record shapes.

Records arrive as decoded JSON from the Scryfall API and are consumed as
plain dicts. These TypedDicts document the fields we read; none of them are
guaranteed to be present, so readers always use ``.get()``.

API docs: https://scryfall.com/docs/api/cards
"""

from enum import Enum
from typing import TypedDict


class Layout(str, Enum):
    """Every card layout Scryfall publishes."""

    NORMAL = "normal"
    SPLIT = "split"
    FLIP = "flip"
    TRANSFORM = "transform"
    MODAL_DFC = "modal_dfc"
    MELD = "meld"
    LEVELER = "leveler"
    CLASS = "class"
    SAGA = "saga"
    ADVENTURE = "adventure"
    MUTATE = "mutate"
    PROTOTYPE = "prototype"
    BATTLE = "battle"
    PLANAR = "planar"
    SCHEME = "scheme"
    VANGUARD = "vanguard"
    TOKEN = "token"
    DOUBLE_FACED_TOKEN = "double_faced_token"
    EMBLEM = "emblem"
    AUGMENT = "augment"
    HOST = "host"
    ART_SERIES = "art_series"
    REVERSIBLE_CARD = "reversible_card"

    @classmethod
    def parse(cls, value: object) -> "Layout | None":
        """Return the matching layout, or None for anything unrecognized."""
        try:
            return cls(value)
        except ValueError:
            return None


class ImageUris(TypedDict, total=False):
    small: str
    normal: str
    large: str
    png: str
    art_crop: str
    border_crop: str


class Prices(TypedDict, total=False):
    usd: str | None
    usd_foil: str | None
    eur: str | None
    eur_foil: str | None


class CardFace(TypedDict, total=False):
    """One printed side of a multi-faced card."""

    name: str
    mana_cost: str
    type_line: str
    oracle_text: str
    colors: list[str]
    power: str
    toughness: str
    defense: str
    image_uris: ImageUris
    cmc: float


class ScryfallCard(TypedDict, total=False):
    """A card object as returned by /cards/search."""

    id: str
    name: str
    layout: str
    mana_cost: str
    cmc: float
    type_line: str
    oracle_text: str
    power: str
    toughness: str
    defense: str
    colors: list[str]
    color_identity: list[str]
    keywords: list[str]
    rarity: str
    set: str
    set_name: str
    collector_number: str
    prices: Prices
    card_faces: list[CardFace]
    image_uris: ImageUris
    released_at: str


class ScryfallSearchResponse(TypedDict, total=False):
    """One page of a /cards/search response."""

    object: str
    total_cards: int
    has_more: bool
    next_page: str
    data: list[ScryfallCard]
