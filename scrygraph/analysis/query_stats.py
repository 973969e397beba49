"""Summary statistics for a search result set."""

from collections.abc import Sequence
from dataclasses import dataclass

from scrygraph.models.card import NormalizedCard


@dataclass(frozen=True, slots=True)
class QueryStats:
    """
    Headline numbers for a search result.

    Price figures only consider cards with a positive USD price and are 0
    when no card is priced.
    """

    total_cards: int
    avg_cmc: float
    priced_cards: int
    median_price: float
    min_price: float
    max_price: float


def summarize_cards(cards: Sequence[NormalizedCard]) -> QueryStats:
    """
    Compute summary statistics over normalized cards.

    The median is the upper-middle price for an even number of priced cards.
    """
    avg_cmc = sum(c.cmc for c in cards) / len(cards) if cards else 0.0

    prices = sorted(c.price_usd for c in cards if c.price_usd is not None and c.price_usd > 0)

    return QueryStats(
        total_cards=len(cards),
        avg_cmc=round(avg_cmc, 2),
        priced_cards=len(prices),
        median_price=prices[len(prices) // 2] if prices else 0.0,
        min_price=prices[0] if prices else 0.0,
        max_price=prices[-1] if prices else 0.0,
    )
