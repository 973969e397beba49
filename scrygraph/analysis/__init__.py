from scrygraph.analysis.graph_transformer import transform
from scrygraph.analysis.presets import (
    GRAPH_PRESETS,
    get_analysis_presets,
    get_essential_presets,
    get_preset,
    get_presets_by_category,
)
from scrygraph.analysis.query_stats import QueryStats, summarize_cards
from scrygraph.analysis.validation import validate_graph_config

__all__ = [
    "GRAPH_PRESETS",
    "QueryStats",
    "get_analysis_presets",
    "get_essential_presets",
    "get_preset",
    "get_presets_by_category",
    "summarize_cards",
    "transform",
    "validate_graph_config",
]
