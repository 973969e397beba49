from scrygraph.api.cards import router as cards_router
from scrygraph.api.graphs import router as graphs_router
from scrygraph.api.health import router as health_router
from scrygraph.api.presets import router as presets_router

__all__ = [
    "cards_router",
    "graphs_router",
    "health_router",
    "presets_router",
]
