"""
Built-in graph presets.

Static, data-only chart configurations offered for one-click selection.
"""

from scrygraph.models.graph import (
    ChartType,
    FilterField,
    FilterOperator,
    GraphAxis,
    GraphFilter,
    GraphMetric,
    GraphPreset,
    PresetCategory,
    XAxisField,
    YAxisMetric,
)

_HAS_PRICE = GraphFilter(
    field=FilterField.HAS_PRICE.value,
    operator=FilterOperator.EXISTS.value,
    value=True,
)

GRAPH_PRESETS: tuple[GraphPreset, ...] = (
    GraphPreset(
        id="mana-curve",
        name="Mana Curve",
        description="Distribution of cards by mana value",
        category=PresetCategory.ESSENTIAL,
        x_axis=GraphAxis(field=XAxisField.CMC.value, label="Mana Value"),
        y_axis=GraphMetric(metric=YAxisMetric.COUNT.value, label="Number of Cards"),
        chart_type=ChartType.BAR.value,
        icon="📊",
    ),
    GraphPreset(
        id="color-distribution",
        name="Color Distribution",
        description="Breakdown by color identity",
        category=PresetCategory.ESSENTIAL,
        x_axis=GraphAxis(field=XAxisField.COLOR.value, label="Color"),
        y_axis=GraphMetric(metric=YAxisMetric.COUNT.value, label="Number of Cards"),
        chart_type=ChartType.PIE.value,
        icon="🎨",
    ),
    GraphPreset(
        id="type-breakdown",
        name="Type Breakdown",
        description="Cards by card type",
        category=PresetCategory.ESSENTIAL,
        x_axis=GraphAxis(field=XAxisField.TYPE.value, label="Card Type"),
        y_axis=GraphMetric(metric=YAxisMetric.COUNT.value, label="Number of Cards"),
        chart_type=ChartType.HORIZONTAL_BAR.value,
        icon="🃏",
    ),
    GraphPreset(
        id="rarity-distribution",
        name="Rarity Distribution",
        description="Cards by rarity",
        category=PresetCategory.ESSENTIAL,
        x_axis=GraphAxis(field=XAxisField.RARITY.value, label="Rarity"),
        y_axis=GraphMetric(metric=YAxisMetric.COUNT.value, label="Number of Cards"),
        chart_type=ChartType.PIE.value,
        icon="💎",
    ),
    GraphPreset(
        id="price-by-rarity",
        name="Price by Rarity",
        description="Average price for each rarity",
        category=PresetCategory.ANALYSIS,
        x_axis=GraphAxis(field=XAxisField.RARITY.value, label="Rarity"),
        y_axis=GraphMetric(metric=YAxisMetric.AVG_PRICE.value, label="Average Price (USD)"),
        chart_type=ChartType.BAR.value,
        filters=(_HAS_PRICE,),
        icon="💰",
    ),
    GraphPreset(
        id="power-distribution",
        name="Power Distribution",
        description="Creature power values",
        category=PresetCategory.ANALYSIS,
        x_axis=GraphAxis(field=XAxisField.POWER.value, label="Power"),
        y_axis=GraphMetric(metric=YAxisMetric.COUNT.value, label="Number of Creatures"),
        chart_type=ChartType.BAR.value,
        filters=(
            GraphFilter(
                field=FilterField.TYPE.value,
                operator=FilterOperator.IN.value,
                value=("Creature",),
            ),
            GraphFilter(
                field=FilterField.HAS_POWER.value,
                operator=FilterOperator.EXISTS.value,
                value=True,
            ),
        ),
        icon="💪",
    ),
    GraphPreset(
        id="set-comparison",
        name="Set Comparison",
        description="Card count by set",
        category=PresetCategory.ANALYSIS,
        x_axis=GraphAxis(field=XAxisField.SET.value, label="Set"),
        y_axis=GraphMetric(metric=YAxisMetric.COUNT.value, label="Number of Cards"),
        chart_type=ChartType.HORIZONTAL_BAR.value,
        icon="📚",
    ),
    GraphPreset(
        id="value-by-color",
        name="Value by Color",
        description="Total collection value by color",
        category=PresetCategory.ANALYSIS,
        x_axis=GraphAxis(field=XAxisField.COLOR.value, label="Color"),
        y_axis=GraphMetric(metric=YAxisMetric.TOTAL_PRICE.value, label="Total Value (USD)"),
        chart_type=ChartType.BAR.value,
        filters=(_HAS_PRICE,),
        icon="💵",
    ),
    GraphPreset(
        id="yearly-releases",
        name="Yearly Releases",
        description="Cards released by year",
        category=PresetCategory.ANALYSIS,
        x_axis=GraphAxis(field=XAxisField.YEAR.value, label="Year"),
        y_axis=GraphMetric(metric=YAxisMetric.COUNT.value, label="Number of Cards"),
        chart_type=ChartType.LINE.value,
        icon="📅",
    ),
    GraphPreset(
        id="price-ranges",
        name="Price Ranges",
        description="Card distribution by price range",
        category=PresetCategory.ANALYSIS,
        x_axis=GraphAxis(field=XAxisField.PRICE_RANGE.value, label="Price Range"),
        y_axis=GraphMetric(metric=YAxisMetric.COUNT.value, label="Number of Cards"),
        chart_type=ChartType.BAR.value,
        filters=(_HAS_PRICE,),
        icon="💸",
    ),
)

DEFAULT_PRESET_ID = "mana-curve"


def get_preset(preset_id: str) -> GraphPreset | None:
    """Get a preset by ID, None if there is no such preset."""
    return next((p for p in GRAPH_PRESETS if p.id == preset_id), None)


def get_presets_by_category(category: PresetCategory | str) -> list[GraphPreset]:
    return [p for p in GRAPH_PRESETS if p.category == category]


def get_essential_presets() -> list[GraphPreset]:
    """Presets shown first: the most commonly used charts."""
    return get_presets_by_category(PresetCategory.ESSENTIAL)


def get_analysis_presets() -> list[GraphPreset]:
    return get_presets_by_category(PresetCategory.ANALYSIS)
