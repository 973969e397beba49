"""
Scryfall card normalizer.

Collapses Scryfall's layout variants (single-faced, split, flip, transform,
modal double-faced, battle, adventure, meld, ...) into one NormalizedCard
shape so charts never need to know about card layouts.

Which face each field comes from is decided by one extractor per layout
policy, looked up in _LAYOUT_EXTRACTORS. Layouts Scryfall adds later hit the
single-faced fallback.

Normalization never raises: malformed or missing fields become None (or an
empty tuple for list fields).
"""

import logging
import math
import re
from collections.abc import Callable, Iterable, Mapping
from dataclasses import dataclass
from typing import Any, NamedTuple

from scrygraph.models.card import BackFace, NormalizedCard
from scrygraph.models.scryfall import Layout

logger = logging.getLogger(__name__)

KNOWN_SUPERTYPES = frozenset({"Legendary", "Basic", "Snow", "World", "Ongoing"})
KNOWN_TYPES = frozenset(
    {
        "Creature",
        "Artifact",
        "Enchantment",
        "Land",
        "Planeswalker",
        "Instant",
        "Sorcery",
        "Battle",
        "Kindred",
        "Tribal",
    }
)

TYPE_LINE_SEPARATOR = "—"
SPLIT_TEXT_SEPARATOR = "\n//\n"

# Leading decimal number, same prefix rule as a lenient float parse:
# "2" -> 2.0, "1+*" -> 1.0, "*" -> no match
_LEADING_NUMBER = re.compile(r"\s*([+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?)")


class TypeLineParts(NamedTuple):
    supertypes: tuple[str, ...]
    types: tuple[str, ...]
    subtypes: tuple[str, ...]


@dataclass(frozen=True, slots=True)
class _LayoutData:
    """Fields whose source depends on the card layout."""

    colors: tuple[str, ...] | None = None
    cmc: float | None = None
    power: float | None = None
    toughness: float | None = None
    defense: float | None = None
    image_url: str | None = None
    oracle_text: str | None = None
    back_face: BackFace | None = None


def parse_numeric(value: Any) -> float | None:
    """
    Parse a power/toughness/defense/price value.

    Args:
        value: Raw value, usually a string such as "3", "1+*", "*" or "0.25"

    Returns:
        The leading number as a float, or None when there is none.
    """
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, int | float):
        number = float(value)
        return None if math.isnan(number) else number
    if not isinstance(value, str):
        return None

    match = _LEADING_NUMBER.match(value)
    if match is None:
        return None
    return float(match.group(1))


def parse_type_line(type_line: str) -> TypeLineParts:
    """
    Split a type line into supertypes, types and subtypes.

    Example:
        "Legendary Creature — Kitsune Cleric" ->
        (("Legendary",), ("Creature",), ("Kitsune", "Cleric"))

    Words before the dash that are neither a known supertype nor a known
    type are dropped.
    """
    parts = type_line.split(TYPE_LINE_SEPARATOR)
    type_words = parts[0].split()
    subtypes = tuple(parts[1].split()) if len(parts) > 1 else ()

    return TypeLineParts(
        supertypes=tuple(w for w in type_words if w in KNOWN_SUPERTYPES),
        types=tuple(w for w in type_words if w in KNOWN_TYPES),
        subtypes=subtypes,
    )


def _optional_str(value: Any) -> str | None:
    return value if isinstance(value, str) else None


def _colors(value: Any) -> tuple[str, ...] | None:
    if not isinstance(value, list | tuple):
        return None
    return tuple(c for c in value if isinstance(c, str))


def _image_url(obj: Mapping[str, Any]) -> str | None:
    image_uris = obj.get("image_uris")
    if not isinstance(image_uris, Mapping):
        return None
    return _optional_str(image_uris.get("normal"))


def _faces(card: Mapping[str, Any]) -> list[Mapping[str, Any]]:
    faces = card.get("card_faces")
    if not isinstance(faces, list):
        return []
    return [face for face in faces if isinstance(face, Mapping)]


def _primary_type_line(card: Mapping[str, Any]) -> str:
    faces = _faces(card)
    if faces and isinstance(faces[0].get("type_line"), str):
        return str(faces[0]["type_line"])
    return _optional_str(card.get("type_line")) or ""


# --- Layout extractors ---


def _extract_single_faced(card: Mapping[str, Any]) -> _LayoutData:
    return _LayoutData(
        colors=_colors(card.get("colors")),
        power=parse_numeric(card.get("power")),
        toughness=parse_numeric(card.get("toughness")),
        defense=parse_numeric(card.get("defense")),
        image_url=_image_url(card),
        oracle_text=_optional_str(card.get("oracle_text")),
    )


def _extract_split(card: Mapping[str, Any]) -> _LayoutData:
    """Split cards (Fire // Ice): both halves share one card."""
    faces = _faces(card)
    if not faces:
        return _extract_single_faced(card)

    colors: list[str] = []
    texts: list[str] = []
    for face in faces:
        for color in _colors(face.get("colors")) or ():
            if color not in colors:
                colors.append(color)
        text = _optional_str(face.get("oracle_text"))
        if text:
            texts.append(text)

    return _LayoutData(
        colors=tuple(colors),
        image_url=_image_url(faces[0]) or _image_url(card),
        oracle_text=SPLIT_TEXT_SEPARATOR.join(texts) if texts else None,
    )


def _extract_flip(card: Mapping[str, Any]) -> _LayoutData:
    """Flip cards: stats from the unflipped half, art is one image."""
    faces = _faces(card)
    if not faces:
        return _extract_single_faced(card)

    front = faces[0]
    return _LayoutData(
        colors=_colors(front.get("colors")),
        cmc=parse_numeric(front.get("cmc")),
        power=parse_numeric(front.get("power")),
        toughness=parse_numeric(front.get("toughness")),
        image_url=_image_url(card),
        oracle_text=_optional_str(front.get("oracle_text")),
    )


def _build_back_face(face: Mapping[str, Any]) -> BackFace:
    return BackFace(
        name=_optional_str(face.get("name")) or "",
        type_line=_optional_str(face.get("type_line")) or "",
        image_url=_image_url(face),
        oracle_text=_optional_str(face.get("oracle_text")),
        mana_cost=_optional_str(face.get("mana_cost")),
        colors=_colors(face.get("colors")),
        power=parse_numeric(face.get("power")),
        toughness=parse_numeric(face.get("toughness")),
        defense=parse_numeric(face.get("defense")),
    )


def _extract_double_faced(card: Mapping[str, Any]) -> _LayoutData:
    """Transform, modal double-faced and battle cards."""
    faces = _faces(card)
    if not faces:
        return _extract_single_faced(card)

    front = faces[0]
    colors = _colors(front.get("colors"))
    return _LayoutData(
        colors=colors if colors is not None else _colors(card.get("colors")),
        cmc=parse_numeric(front.get("cmc")),
        power=parse_numeric(front.get("power")),
        toughness=parse_numeric(front.get("toughness")),
        defense=parse_numeric(front.get("defense")),
        image_url=_image_url(front) or _image_url(card),
        oracle_text=_optional_str(front.get("oracle_text")),
        back_face=_build_back_face(faces[1]) if len(faces) > 1 else None,
    )


def _extract_adventure(card: Mapping[str, Any]) -> _LayoutData:
    """Adventure cards: the creature half is the card, the art is shared."""
    faces = _faces(card)
    if not faces:
        return _extract_single_faced(card)

    main = faces[0]
    return _LayoutData(
        colors=_colors(main.get("colors")),
        cmc=parse_numeric(main.get("cmc")),
        power=parse_numeric(main.get("power")),
        toughness=parse_numeric(main.get("toughness")),
        image_url=_image_url(card),
        oracle_text=_optional_str(main.get("oracle_text")),
    )


def _extract_meld(card: Mapping[str, Any]) -> _LayoutData:
    faces = _faces(card)
    if not faces:
        return _extract_single_faced(card)

    front = faces[0]
    return _LayoutData(
        colors=_colors(front.get("colors")),
        cmc=parse_numeric(front.get("cmc")),
        power=parse_numeric(front.get("power")),
        toughness=parse_numeric(front.get("toughness")),
        image_url=_image_url(front),
        oracle_text=_optional_str(front.get("oracle_text")),
    )


_LayoutExtractor = Callable[[Mapping[str, Any]], _LayoutData]

_LAYOUT_EXTRACTORS: dict[Layout, _LayoutExtractor] = {
    Layout.NORMAL: _extract_single_faced,
    Layout.LEVELER: _extract_single_faced,
    Layout.SAGA: _extract_single_faced,
    Layout.CLASS: _extract_single_faced,
    Layout.MUTATE: _extract_single_faced,
    Layout.PROTOTYPE: _extract_single_faced,
    Layout.SPLIT: _extract_split,
    Layout.FLIP: _extract_flip,
    Layout.TRANSFORM: _extract_double_faced,
    Layout.MODAL_DFC: _extract_double_faced,
    Layout.BATTLE: _extract_double_faced,
    Layout.ADVENTURE: _extract_adventure,
    Layout.MELD: _extract_meld,
    # Non-game and token layouts carry their stats at the top level
    Layout.PLANAR: _extract_single_faced,
    Layout.SCHEME: _extract_single_faced,
    Layout.VANGUARD: _extract_single_faced,
    Layout.TOKEN: _extract_single_faced,
    Layout.DOUBLE_FACED_TOKEN: _extract_single_faced,
    Layout.EMBLEM: _extract_single_faced,
    Layout.AUGMENT: _extract_single_faced,
    Layout.HOST: _extract_single_faced,
    Layout.ART_SERIES: _extract_single_faced,
    Layout.REVERSIBLE_CARD: _extract_single_faced,
}


def _extract_layout_data(card: Mapping[str, Any]) -> _LayoutData:
    layout = Layout.parse(card.get("layout"))
    if layout is None:
        logger.debug(
            "Unknown layout %r for card %r, using single-faced extraction",
            card.get("layout"),
            card.get("name"),
        )
        return _extract_single_faced(card)
    return _LAYOUT_EXTRACTORS[layout](card)


def normalize_card(card: Mapping[str, Any]) -> NormalizedCard:
    """
    Normalize one Scryfall card record.

    Args:
        card: Decoded Scryfall card JSON (any layout)

    Returns:
        NormalizedCard built only from the given record
    """
    type_parts = parse_type_line(_primary_type_line(card))
    data = _extract_layout_data(card)

    prices = card.get("prices")
    if not isinstance(prices, Mapping):
        prices = {}

    cmc = data.cmc if data.cmc is not None else parse_numeric(card.get("cmc"))
    colors = data.colors if data.colors is not None else _colors(card.get("colors"))

    return NormalizedCard(
        id=_optional_str(card.get("id")) or "",
        name=_optional_str(card.get("name")) or "",
        layout=_optional_str(card.get("layout")) or "",
        cmc=cmc if cmc is not None else 0.0,
        colors=colors or (),
        color_identity=_colors(card.get("color_identity")) or (),
        types=type_parts.types,
        supertypes=type_parts.supertypes,
        subtypes=type_parts.subtypes,
        rarity=_optional_str(card.get("rarity")) or "",
        set_code=_optional_str(card.get("set")) or "",
        set_name=_optional_str(card.get("set_name")) or "",
        collector_number=_optional_str(card.get("collector_number")) or "",
        released_at=_optional_str(card.get("released_at")) or "",
        oracle_text=data.oracle_text,
        power=data.power,
        toughness=data.toughness,
        defense=data.defense,
        price_usd=parse_numeric(prices.get("usd")),
        price_eur=parse_numeric(prices.get("eur")),
        image_url=data.image_url,
        back_face=data.back_face,
    )


def normalize_cards(cards: Iterable[Mapping[str, Any]]) -> list[NormalizedCard]:
    """Normalize a batch of cards, preserving order."""
    return [normalize_card(card) for card in cards]
