from importlib.metadata import version as pkg_version

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from scrygraph.api import (
    cards_router,
    graphs_router,
    health_router,
    presets_router,
)
from scrygraph.config import settings

app = FastAPI(
    title=settings.app_name,
    version=pkg_version("scrygraph"),
    debug=settings.debug,
)

app.include_router(cards_router)
app.include_router(graphs_router)
app.include_router(health_router)
app.include_router(presets_router)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],  # Tighten in production
    allow_credentials=False,
    allow_methods=["*"],
    allow_headers=["*"],
)
