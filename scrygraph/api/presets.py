"""
Preset API endpoints.

Lists the built-in chart configurations.
"""

from fastapi import APIRouter, HTTPException, status

from scrygraph.analysis.presets import GRAPH_PRESETS, get_preset, get_presets_by_category
from scrygraph.api.schemas import (
    GraphAxisModel,
    GraphFilterModel,
    GraphMetricModel,
    PresetResponse,
)
from scrygraph.models.graph import GraphPreset, PresetCategory

router = APIRouter(prefix="/presets", tags=["presets"])


def preset_to_response(preset: GraphPreset) -> PresetResponse:
    return PresetResponse(
        id=preset.id,
        name=preset.name,
        description=preset.description,
        category=preset.category.value,
        icon=preset.icon,
        x_axis=GraphAxisModel(field=preset.x_axis.field, label=preset.x_axis.label),
        y_axis=GraphMetricModel(metric=preset.y_axis.metric, label=preset.y_axis.label),
        chart_type=preset.chart_type,
        filters=[
            GraphFilterModel(field=f.field, operator=f.operator, value=f.value)
            for f in preset.filters
        ],
    )


@router.get("", response_model=list[PresetResponse])
async def list_presets(category: PresetCategory | None = None) -> list[PresetResponse]:
    """List presets, optionally only one category (essential, analysis)."""
    presets = GRAPH_PRESETS if category is None else get_presets_by_category(category)
    return [preset_to_response(p) for p in presets]


@router.get("/{preset_id}", response_model=PresetResponse)
async def read_preset(preset_id: str) -> PresetResponse:
    preset = get_preset(preset_id)
    if preset is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Preset '{preset_id}' not found",
        )
    return preset_to_response(preset)
