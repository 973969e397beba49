"""
Graph configuration and chart data models.

A GraphConfig is a small declarative description of one chart: which field
goes on the X axis, which metric is computed per group, which chart shape to
draw and which filters to apply first. The transformer interprets it at call
time and produces ChartData.

Filter field/operator and axis field/metric are stored as plain strings so
that configurations built by hand (or decoded from a request) survive
unknown values. The enums below list the values the transformer understands.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class XAxisField(str, Enum):
    """Fields a chart can group cards by."""

    CMC = "cmc"
    COLOR = "color"
    TYPE = "type"
    RARITY = "rarity"
    SET = "set"
    POWER = "power"
    TOUGHNESS = "toughness"
    YEAR = "year"
    PRICE_RANGE = "priceRange"


class YAxisMetric(str, Enum):
    """Metrics computed for each group."""

    COUNT = "count"
    AVG_PRICE = "avgPrice"
    TOTAL_PRICE = "totalPrice"
    AVG_CMC = "avgCmc"
    AVG_POWER = "avgPower"
    AVG_TOUGHNESS = "avgToughness"
    MIN_PRICE = "minPrice"
    MAX_PRICE = "maxPrice"


class ChartType(str, Enum):
    """Chart shapes. Only echoed back, never affects the data."""

    BAR = "bar"
    HORIZONTAL_BAR = "horizontalBar"
    PIE = "pie"
    LINE = "line"
    SCATTER = "scatter"
    AREA = "area"


class FilterField(str, Enum):
    TYPE = "type"
    COLOR = "color"
    RARITY = "rarity"
    CMC = "cmc"
    HAS_PRICE = "hasPrice"
    HAS_POWER = "hasPower"


class FilterOperator(str, Enum):
    EQUALS = "equals"
    IN = "in"
    RANGE = "range"
    EXISTS = "exists"


class PresetCategory(str, Enum):
    ESSENTIAL = "essential"
    ANALYSIS = "analysis"
    CUSTOM = "custom"


@dataclass(frozen=True, slots=True)
class GraphFilter:
    """
    A single predicate applied before grouping.

    Attributes:
        field: Card field to test (see FilterField)
        operator: How to compare (see FilterOperator)
        value: Operand; a scalar, a list for "in", a [lo, hi] pair for
            "range", a bool for "exists"
    """

    field: str
    operator: str
    value: Any


@dataclass(frozen=True, slots=True)
class GraphAxis:
    field: str
    label: str


@dataclass(frozen=True, slots=True)
class GraphMetric:
    metric: str
    label: str


@dataclass(frozen=True, slots=True)
class GraphConfig:
    """
    Declarative chart description.

    Filters are ANDed together. An empty filter tuple keeps every card.
    """

    id: str
    name: str
    x_axis: GraphAxis
    y_axis: GraphMetric
    chart_type: str = ChartType.BAR.value
    filters: tuple[GraphFilter, ...] = ()
    description: str | None = None


@dataclass(frozen=True, slots=True)
class GraphPreset(GraphConfig):
    """A named GraphConfig shipped with the application."""

    category: PresetCategory = PresetCategory.CUSTOM
    icon: str | None = None


@dataclass(frozen=True, slots=True)
class ChartDataPoint:
    """
    One bar/slice/point of a chart.

    Attributes:
        key: Group key (e.g., "3", "10+", "Multicolor")
        label: Display label
        value: Metric value, rounded to 2 decimals
        count: Number of cards in the group
        card_ids: IDs of the cards in the group, for drill-down
    """

    key: str
    label: str
    value: float
    count: int
    card_ids: tuple[str, ...] = ()


@dataclass(frozen=True, slots=True)
class ChartData:
    """Ordered chart series plus the axis labels and chart shape it was built for."""

    data: list[ChartDataPoint] = field(default_factory=list)
    x_label: str = ""
    y_label: str = ""
    chart_type: str = ChartType.BAR.value


@dataclass
class ValidationResult:
    """Outcome of checking a GraphConfig before rendering it."""

    valid: bool = True
    errors: list[str] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)
    suggestions: list[str] = field(default_factory=list)
