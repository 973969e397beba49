"""
Request and response models shared by the API routers.

Response models read straight from the core dataclasses (from_attributes),
request models convert into them with to_config().
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, model_validator

from scrygraph.models.graph import GraphAxis, GraphConfig, GraphFilter, GraphMetric


class GraphFilterModel(BaseModel):
    """A filter applied before grouping."""

    model_config = ConfigDict(from_attributes=True)

    field: str = Field(..., examples=["type"])
    operator: str = Field(..., examples=["in"])
    value: Any = Field(default=None, examples=[["Creature"]])


class GraphAxisModel(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    field: str = Field(..., examples=["cmc"])
    label: str = ""


class GraphMetricModel(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    metric: str = Field(..., examples=["count"])
    label: str = ""


class GraphConfigModel(BaseModel):
    """A graph configuration as sent by (or to) the client."""

    model_config = ConfigDict(from_attributes=True)

    id: str = "custom"
    name: str = "Custom Graph"
    description: str | None = None
    x_axis: GraphAxisModel
    y_axis: GraphMetricModel
    chart_type: str = "bar"
    filters: list[GraphFilterModel] = Field(default_factory=list)

    def to_config(self) -> GraphConfig:
        return GraphConfig(
            id=self.id,
            name=self.name,
            description=self.description,
            x_axis=GraphAxis(field=self.x_axis.field, label=self.x_axis.label),
            y_axis=GraphMetric(metric=self.y_axis.metric, label=self.y_axis.label),
            chart_type=self.chart_type,
            filters=tuple(
                GraphFilter(field=f.field, operator=f.operator, value=f.value)
                for f in self.filters
            ),
        )


class PresetResponse(GraphConfigModel):
    category: str
    icon: str | None = None


class GraphSelection(BaseModel):
    """Either a preset ID or a custom configuration, not both."""

    preset_id: str | None = Field(default=None, examples=["mana-curve"])
    config: GraphConfigModel | None = None

    @model_validator(mode="after")
    def _one_source(self) -> "GraphSelection":
        if (self.preset_id is None) == (self.config is None):
            raise ValueError("Provide exactly one of preset_id or config")
        return self


class BackFaceResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    name: str
    type_line: str
    image_url: str | None = None
    oracle_text: str | None = None
    mana_cost: str | None = None
    colors: list[str] | None = None
    power: float | None = None
    toughness: float | None = None
    defense: float | None = None


class CardResponse(BaseModel):
    """A normalized card."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    name: str
    layout: str
    cmc: float
    colors: list[str]
    color_identity: list[str]
    types: list[str]
    supertypes: list[str]
    subtypes: list[str]
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
    back_face: BackFaceResponse | None = None


class StatsResponse(BaseModel):
    """Summary statistics for a result set."""

    model_config = ConfigDict(from_attributes=True)

    total_cards: int
    avg_cmc: float
    priced_cards: int
    median_price: float
    min_price: float
    max_price: float


class ChartDataPointResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    key: str
    label: str
    value: float
    count: int
    card_ids: list[str] = Field(default_factory=list)


class ChartResponse(BaseModel):
    """Chart series ready for rendering."""

    model_config = ConfigDict(from_attributes=True)

    data: list[ChartDataPointResponse] = Field(default_factory=list)
    x_label: str
    y_label: str
    chart_type: str
