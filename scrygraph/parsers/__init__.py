from scrygraph.parsers.card_normalizer import (
    normalize_card,
    normalize_cards,
    parse_numeric,
    parse_type_line,
)

__all__ = [
    "normalize_card",
    "normalize_cards",
    "parse_numeric",
    "parse_type_line",
]
