"""
Graph configuration checks.

Reports problems with a custom GraphConfig before it is rendered. Nothing
here blocks rendering: the transformer already degrades on bad input, this
only explains why a chart may look empty or odd.
"""

from scrygraph.analysis.graph_transformer import get_filter_predicate, parse_range
from scrygraph.models.graph import (
    ChartType,
    FilterField,
    FilterOperator,
    GraphConfig,
    ValidationResult,
    XAxisField,
    YAxisMetric,
)

_PRICE_METRICS = frozenset(
    {
        YAxisMetric.AVG_PRICE.value,
        YAxisMetric.TOTAL_PRICE.value,
        YAxisMetric.MIN_PRICE.value,
        YAxisMetric.MAX_PRICE.value,
    }
)
_CREATURE_STAT_FIELDS = frozenset({XAxisField.POWER.value, XAxisField.TOUGHNESS.value})


def _values(enum_cls: type[XAxisField] | type[YAxisMetric] | type[ChartType]) -> set[str]:
    return {member.value for member in enum_cls}


def _filters_on_creatures(config: GraphConfig) -> bool:
    for graph_filter in config.filters:
        if graph_filter.field != FilterField.TYPE.value:
            continue
        values = graph_filter.value
        if isinstance(values, list | tuple | set | frozenset):
            if "Creature" in values:
                return True
        elif values == "Creature":
            return True
    return False


def _has_price_filter(config: GraphConfig) -> bool:
    return any(
        f.field == FilterField.HAS_PRICE.value
        and f.operator == FilterOperator.EXISTS.value
        and bool(f.value)
        for f in config.filters
    )


def validate_graph_config(config: GraphConfig) -> ValidationResult:
    """
    Check a graph configuration.

    Errors:
        Unknown X axis field, metric or chart type.
    Warnings:
        Filters the transformer will ignore, malformed range operands,
        pie charts of a non-count metric.
    Suggestions:
        Add a price filter for price metrics, a creature filter for
        power/toughness axes.
    """
    result = ValidationResult()

    if config.x_axis.field not in _values(XAxisField):
        result.errors.append(f"Unknown X axis field: {config.x_axis.field!r}")
    if config.y_axis.metric not in _values(YAxisMetric):
        result.errors.append(f"Unknown metric: {config.y_axis.metric!r}")
    if config.chart_type not in _values(ChartType):
        result.errors.append(f"Unknown chart type: {config.chart_type!r}")

    for graph_filter in config.filters:
        if get_filter_predicate(graph_filter) is None:
            result.warnings.append(
                f"Filter {graph_filter.field!r} with operator {graph_filter.operator!r} "
                "is not supported and will be ignored"
            )
        elif graph_filter.operator == FilterOperator.RANGE.value and (
            parse_range(graph_filter.value) is None
        ):
            result.warnings.append(
                f"Range filter on {graph_filter.field!r} needs a [min, max] pair "
                "and will be ignored"
            )

    if config.chart_type == ChartType.PIE.value and config.y_axis.metric != YAxisMetric.COUNT.value:
        result.warnings.append("Pie charts read best with the count metric")

    if config.y_axis.metric in _PRICE_METRICS and not _has_price_filter(config):
        result.suggestions.append(
            'Enable the "Only cards with price" filter for better price results'
        )
    if config.x_axis.field in _CREATURE_STAT_FIELDS and not _filters_on_creatures(config):
        result.suggestions.append(
            'Enable the "Only creatures" filter for power/toughness analysis'
        )

    result.valid = not result.errors
    return result
