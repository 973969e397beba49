"""
Normalized card models.

A NormalizedCard is the layout-independent shape every chart works from.
Multi-faced Scryfall records are collapsed onto their primary face, with the
second face kept in BackFace for two-sided cards.

INVARIANTS:
- Built only by the card normalizer, read-only afterwards
- Unparseable numeric fields are None, never 0
- types/supertypes/subtypes come from the primary face's type line only
"""

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class BackFace:
    """
    Second face of a transform, modal double-faced or battle card.

    Attributes:
        name: Back face name
        type_line: Raw type line (e.g., "Legendary Planeswalker — Nissa")
        image_url: Normal-size image of the back face
        oracle_text: Rules text of the back face
        mana_cost: Mana cost string (e.g., "{1}{G}")
        colors: Color letters of the back face
        power: Numeric power, None if absent or non-numeric
        toughness: Numeric toughness, None if absent or non-numeric
        defense: Numeric defense (battles), None if absent
    """

    name: str
    type_line: str
    image_url: str | None = None
    oracle_text: str | None = None
    mana_cost: str | None = None
    colors: tuple[str, ...] | None = None
    power: float | None = None
    toughness: float | None = None
    defense: float | None = None


@dataclass(frozen=True, slots=True)
class NormalizedCard:
    """
    A Scryfall card flattened into one uniform shape.

    Attributes:
        id: Scryfall card ID (unique per printing)
        name: Full card name (e.g., "Fire // Ice")
        layout: Layout string as reported by Scryfall
        cmc: Mana value
        colors: Color letters (W, U, B, R, G)
        color_identity: Color identity letters
        types: Card types from the primary face (e.g., ("Creature",))
        supertypes: Supertypes from the primary face (e.g., ("Legendary",))
        subtypes: Subtypes from the primary face (e.g., ("Human", "Wizard"))
        rarity: Lowercase rarity (common, uncommon, rare, mythic, ...)
        set_code: Lowercase set code (e.g., "dmu")
        set_name: Full set name
        collector_number: Collector number within set
        released_at: Release date, ISO format
        oracle_text: Rules text; split cards join faces with "\\n//\\n"
        power: Numeric power, None if absent or non-numeric
        toughness: Numeric toughness, None if absent or non-numeric
        defense: Numeric defense, None if absent
        price_usd: USD price, None if unpriced
        price_eur: EUR price, None if unpriced
        image_url: Normal-size image
        back_face: Second face of two-sided cards
    """

    id: str
    name: str
    layout: str
    cmc: float
    colors: tuple[str, ...]
    color_identity: tuple[str, ...]
    types: tuple[str, ...]
    supertypes: tuple[str, ...]
    subtypes: tuple[str, ...]
    rarity: str
    set_code: str
    set_name: str
    collector_number: str
    released_at: str
    oracle_text: str | None = None
    power: float | None = None
    toughness: float | None = None
    defense: float | None = None
    price_usd: float | None = None
    price_eur: float | None = None
    image_url: str | None = None
    back_face: BackFace | None = None
