from scrygraph.models.card import BackFace, NormalizedCard
from scrygraph.models.graph import (
    ChartData,
    ChartDataPoint,
    ChartType,
    FilterField,
    FilterOperator,
    GraphAxis,
    GraphConfig,
    GraphFilter,
    GraphMetric,
    GraphPreset,
    PresetCategory,
    ValidationResult,
    XAxisField,
    YAxisMetric,
)
from scrygraph.models.scryfall import (
    CardFace,
    ImageUris,
    Layout,
    Prices,
    ScryfallCard,
    ScryfallSearchResponse,
)

__all__ = [
    "BackFace",
    "CardFace",
    "ChartData",
    "ChartDataPoint",
    "ChartType",
    "FilterField",
    "FilterOperator",
    "GraphAxis",
    "GraphConfig",
    "GraphFilter",
    "GraphMetric",
    "GraphPreset",
    "ImageUris",
    "Layout",
    "NormalizedCard",
    "PresetCategory",
    "Prices",
    "ScryfallCard",
    "ScryfallSearchResponse",
    "ValidationResult",
    "XAxisField",
    "YAxisMetric",
]
