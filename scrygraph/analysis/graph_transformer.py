"""
Graph data transformer.

Turns a list of NormalizedCards and a GraphConfig into ChartData:

1. Filter - keep cards matching every filter
2. Group  - bucket cards by the X axis field
3. Metric - compute the Y axis metric per bucket
4. Sort   - order buckets by a field-specific rule

Each step is driven by a lookup table keyed by the config's enum values, so
a new axis or metric is one more table entry. Unknown filter combinations
pass every card, unknown metrics compute 0 and unknown axis fields put every
card into a single "Unknown" bucket; a bad config yields an odd chart rather
than an error.

ABSENCE POLICY:
Filters treat a missing price/power as "does not match". Averages, minimums
and maximums skip missing values and fall back to 0 for a bucket with none;
totalPrice counts a missing price as 0. A USD price of 0.0 is a price, not an
absence: it passes hasPrice and buckets into "$0-1" rather than "No Price".
"""

import logging
import math
import re
from collections.abc import Callable, Iterable, Sequence
from enum import Enum
from typing import Any, TypeVar

from scrygraph.models.card import NormalizedCard
from scrygraph.models.graph import (
    ChartData,
    ChartDataPoint,
    FilterField,
    FilterOperator,
    GraphConfig,
    GraphFilter,
    XAxisField,
    YAxisMetric,
)

logger = logging.getLogger(__name__)

CMC_OVERFLOW_KEY = "10+"
CMC_OVERFLOW_THRESHOLD = 10
STAT_OVERFLOW_KEY = "5+"
STAT_OVERFLOW_THRESHOLD = 5
NO_STAT_KEY = "N/A"
NO_TYPE_KEY = "Other"
NO_PRICE_KEY = "No Price"
UNKNOWN_KEY = "Unknown"

COLOR_NAMES: dict[str, str] = {
    "W": "White",
    "U": "Blue",
    "B": "Black",
    "R": "Red",
    "G": "Green",
}

# Upper bounds are exclusive; anything above the last bound is "$25+"
PRICE_BUCKETS: tuple[tuple[float, str], ...] = (
    (1, "$0-1"),
    (5, "$1-5"),
    (10, "$5-10"),
    (25, "$10-25"),
)
PRICE_OVERFLOW_KEY = "$25+"

RARITY_ORDER = ("Common", "Uncommon", "Rare", "Mythic", "Special", "Bonus")
COLOR_ORDER = ("White", "Blue", "Black", "Red", "Green", "Multicolor", "Colorless")

_YEAR = re.compile(r"\d{4}")

E = TypeVar("E", bound=Enum)


def _coerce(enum_cls: type[E], value: Any) -> E | None:
    try:
        return enum_cls(value)
    except ValueError:
        return None


def _round2(value: float) -> float:
    """Round half-up to two decimals."""
    if not math.isfinite(value):
        return value
    return math.floor(value * 100 + 0.5) / 100


def _format_number(value: float) -> str:
    """Render 2.0 as "2" and 1.5 as "1.5"."""
    if value.is_integer():
        return str(int(value))
    return repr(value)


def _as_list(value: Any) -> list[Any]:
    if isinstance(value, list | tuple | set | frozenset):
        return list(value)
    return [value]


def _as_number(value: Any) -> float | None:
    if isinstance(value, bool) or not isinstance(value, int | float):
        return None
    return float(value)


# --- Filters ---

_Predicate = Callable[[NormalizedCard, Any], bool]


def _type_equals(card: NormalizedCard, value: Any) -> bool:
    return value in card.types


def _type_in(card: NormalizedCard, value: Any) -> bool:
    return any(t in card.types for t in _as_list(value))


def _color_equals(card: NormalizedCard, value: Any) -> bool:
    return value in card.colors


def _color_in(card: NormalizedCard, value: Any) -> bool:
    return any(c in card.colors for c in _as_list(value))


def _rarity_equals(card: NormalizedCard, value: Any) -> bool:
    return card.rarity == value


def _rarity_in(card: NormalizedCard, value: Any) -> bool:
    return card.rarity in _as_list(value)


def _cmc_equals(card: NormalizedCard, value: Any) -> bool:
    target = _as_number(value)
    return True if target is None else card.cmc == target


def _cmc_in(card: NormalizedCard, value: Any) -> bool:
    return card.cmc in [n for n in map(_as_number, _as_list(value)) if n is not None]


def _cmc_range(card: NormalizedCard, value: Any) -> bool:
    bounds = parse_range(value)
    if bounds is None:
        return True
    low, high = bounds
    return low <= card.cmc <= high


def _has_price(card: NormalizedCard, value: Any) -> bool:
    return card.price_usd is not None if value else True


def _has_power(card: NormalizedCard, value: Any) -> bool:
    return card.power is not None if value else True


FILTER_PREDICATES: dict[tuple[FilterField, FilterOperator], _Predicate] = {
    (FilterField.TYPE, FilterOperator.EQUALS): _type_equals,
    (FilterField.TYPE, FilterOperator.IN): _type_in,
    (FilterField.COLOR, FilterOperator.EQUALS): _color_equals,
    (FilterField.COLOR, FilterOperator.IN): _color_in,
    (FilterField.RARITY, FilterOperator.EQUALS): _rarity_equals,
    (FilterField.RARITY, FilterOperator.IN): _rarity_in,
    (FilterField.CMC, FilterOperator.EQUALS): _cmc_equals,
    (FilterField.CMC, FilterOperator.IN): _cmc_in,
    (FilterField.CMC, FilterOperator.RANGE): _cmc_range,
    (FilterField.HAS_PRICE, FilterOperator.EXISTS): _has_price,
    (FilterField.HAS_POWER, FilterOperator.EXISTS): _has_power,
}


def parse_range(value: Any) -> tuple[float, float] | None:
    """Return (low, high) for a two-number operand, None if malformed."""
    if not isinstance(value, list | tuple) or len(value) != 2:
        return None
    low, high = _as_number(value[0]), _as_number(value[1])
    if low is None or high is None:
        return None
    return low, high


def get_filter_predicate(graph_filter: GraphFilter) -> _Predicate | None:
    """Look up the predicate for a filter; None means it passes everything."""
    field = _coerce(FilterField, graph_filter.field)
    operator = _coerce(FilterOperator, graph_filter.operator)
    if field is None or operator is None:
        return None
    return FILTER_PREDICATES.get((field, operator))


def apply_filters(
    cards: Iterable[NormalizedCard], filters: Sequence[GraphFilter]
) -> list[NormalizedCard]:
    """Keep the cards that satisfy every filter."""
    checks: list[tuple[_Predicate, Any]] = []
    for graph_filter in filters:
        predicate = get_filter_predicate(graph_filter)
        if predicate is None:
            logger.debug(
                "Ignoring unsupported filter %s/%s",
                graph_filter.field,
                graph_filter.operator,
            )
            continue
        checks.append((predicate, graph_filter.value))

    return [card for card in cards if all(check(card, value) for check, value in checks)]


# --- Grouping ---


def _cmc_key(card: NormalizedCard) -> str:
    if not math.isfinite(card.cmc):
        return CMC_OVERFLOW_KEY if card.cmc > 0 else UNKNOWN_KEY
    floored = math.floor(card.cmc)
    return CMC_OVERFLOW_KEY if floored > CMC_OVERFLOW_THRESHOLD else str(floored)


def _color_key(card: NormalizedCard) -> str:
    if not card.colors:
        return "Colorless"
    if len(card.colors) > 1:
        return "Multicolor"
    return COLOR_NAMES.get(card.colors[0], card.colors[0])


def _type_key(card: NormalizedCard) -> str:
    return card.types[0] if card.types else NO_TYPE_KEY


def _rarity_key(card: NormalizedCard) -> str:
    return card.rarity[:1].upper() + card.rarity[1:]


def _set_key(card: NormalizedCard) -> str:
    return card.set_code.upper()


def _stat_key(value: float | None) -> str:
    if value is None:
        return NO_STAT_KEY
    if value > STAT_OVERFLOW_THRESHOLD:
        return STAT_OVERFLOW_KEY
    return _format_number(value)


def _power_key(card: NormalizedCard) -> str:
    return _stat_key(card.power)


def _toughness_key(card: NormalizedCard) -> str:
    return _stat_key(card.toughness)


def _year_key(card: NormalizedCard) -> str:
    match = _YEAR.match(card.released_at)
    return match.group(0) if match else UNKNOWN_KEY


def _price_range_key(card: NormalizedCard) -> str:
    if card.price_usd is None:
        return NO_PRICE_KEY
    for upper, label in PRICE_BUCKETS:
        if card.price_usd < upper:
            return label
    return PRICE_OVERFLOW_KEY


GROUP_KEYS: dict[XAxisField, Callable[[NormalizedCard], str]] = {
    XAxisField.CMC: _cmc_key,
    XAxisField.COLOR: _color_key,
    XAxisField.TYPE: _type_key,
    XAxisField.RARITY: _rarity_key,
    XAxisField.SET: _set_key,
    XAxisField.POWER: _power_key,
    XAxisField.TOUGHNESS: _toughness_key,
    XAxisField.YEAR: _year_key,
    XAxisField.PRICE_RANGE: _price_range_key,
}


def group_key(card: NormalizedCard, field: str) -> str:
    """Bucket key for a card on the given X axis field."""
    axis = _coerce(XAxisField, field)
    if axis is None:
        return UNKNOWN_KEY
    return GROUP_KEYS[axis](card)


def group_cards(
    cards: Iterable[NormalizedCard], field: str
) -> dict[str, list[NormalizedCard]]:
    """Group cards by key, buckets in first-seen order."""
    groups: dict[str, list[NormalizedCard]] = {}
    for card in cards:
        groups.setdefault(group_key(card, field), []).append(card)
    return groups


# --- Metrics ---


def _mean(values: Sequence[float]) -> float:
    return sum(values) / len(values) if values else 0.0


def _present(values: Iterable[float | None]) -> list[float]:
    return [v for v in values if v is not None]


def _count(cards: Sequence[NormalizedCard]) -> float:
    return float(len(cards))


def _avg_price(cards: Sequence[NormalizedCard]) -> float:
    return _mean(_present(c.price_usd for c in cards))


def _total_price(cards: Sequence[NormalizedCard]) -> float:
    return sum(c.price_usd or 0.0 for c in cards)


def _avg_cmc(cards: Sequence[NormalizedCard]) -> float:
    return _mean([c.cmc for c in cards])


def _avg_power(cards: Sequence[NormalizedCard]) -> float:
    return _mean(_present(c.power for c in cards))


def _avg_toughness(cards: Sequence[NormalizedCard]) -> float:
    return _mean(_present(c.toughness for c in cards))


def _min_price(cards: Sequence[NormalizedCard]) -> float:
    return min(_present(c.price_usd for c in cards), default=0.0)


def _max_price(cards: Sequence[NormalizedCard]) -> float:
    return max(_present(c.price_usd for c in cards), default=0.0)


METRICS: dict[YAxisMetric, Callable[[Sequence[NormalizedCard]], float]] = {
    YAxisMetric.COUNT: _count,
    YAxisMetric.AVG_PRICE: _avg_price,
    YAxisMetric.TOTAL_PRICE: _total_price,
    YAxisMetric.AVG_CMC: _avg_cmc,
    YAxisMetric.AVG_POWER: _avg_power,
    YAxisMetric.AVG_TOUGHNESS: _avg_toughness,
    YAxisMetric.MIN_PRICE: _min_price,
    YAxisMetric.MAX_PRICE: _max_price,
}


def calculate_metric(
    groups: dict[str, list[NormalizedCard]], metric: str
) -> list[ChartDataPoint]:
    """Build one data point per group, in group order."""
    metric_kind = _coerce(YAxisMetric, metric)
    compute = METRICS.get(metric_kind) if metric_kind is not None else None

    points: list[ChartDataPoint] = []
    for key, cards in groups.items():
        value = compute(cards) if compute is not None else 0.0
        points.append(
            ChartDataPoint(
                key=key,
                label=key,
                value=_round2(value),
                count=len(cards),
                card_ids=tuple(c.id for c in cards),
            )
        )
    return points


# --- Sorting ---

_OVERFLOW_KEYS = frozenset({CMC_OVERFLOW_KEY, STAT_OVERFLOW_KEY})


def _numeric_sort_key(point: ChartDataPoint) -> tuple[int, float]:
    # Numbers first, then the overflow bucket, then anything non-numeric
    if point.key in _OVERFLOW_KEYS:
        return (1, 0.0)
    try:
        return (0, float(point.key))
    except ValueError:
        return (2, 0.0)


def _sort_numeric(points: list[ChartDataPoint]) -> list[ChartDataPoint]:
    return sorted(points, key=_numeric_sort_key)


def _fixed_order(order: Sequence[str]) -> Callable[[list[ChartDataPoint]], list[ChartDataPoint]]:
    rank = {label: i for i, label in enumerate(order)}

    def sort(points: list[ChartDataPoint]) -> list[ChartDataPoint]:
        # Labels outside the order go last, keeping their relative order
        return sorted(points, key=lambda p: rank.get(p.label, len(order)))

    return sort


def _sort_by_value(points: list[ChartDataPoint]) -> list[ChartDataPoint]:
    return sorted(points, key=lambda p: p.value, reverse=True)


SORTERS: dict[XAxisField, Callable[[list[ChartDataPoint]], list[ChartDataPoint]]] = {
    XAxisField.CMC: _sort_numeric,
    XAxisField.POWER: _sort_numeric,
    XAxisField.TOUGHNESS: _sort_numeric,
    XAxisField.YEAR: _sort_numeric,
    XAxisField.RARITY: _fixed_order(RARITY_ORDER),
    XAxisField.COLOR: _fixed_order(COLOR_ORDER),
    XAxisField.SET: _sort_by_value,
    XAxisField.TYPE: _sort_by_value,
    XAxisField.PRICE_RANGE: _sort_by_value,
}


def sort_data_points(points: list[ChartDataPoint], field: str) -> list[ChartDataPoint]:
    """Order data points for display on the given X axis field."""
    axis = _coerce(XAxisField, field)
    sorter = SORTERS.get(axis, _sort_by_value) if axis is not None else _sort_by_value
    return sorter(points)


def transform(cards: Iterable[NormalizedCard], config: GraphConfig) -> ChartData:
    """
    Build chart data for a graph configuration.

    Args:
        cards: Normalized cards (the whole result set or a prefix of it)
        config: Graph configuration to render

    Returns:
        ChartData with one point per group, sorted for display
    """
    filtered = apply_filters(cards, config.filters)
    groups = group_cards(filtered, config.x_axis.field)
    points = calculate_metric(groups, config.y_axis.metric)

    return ChartData(
        data=sort_data_points(points, config.x_axis.field),
        x_label=config.x_axis.label,
        y_label=config.y_axis.label,
        chart_type=config.chart_type,
    )
