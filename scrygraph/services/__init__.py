from scrygraph.services.scryfall_client import (
    ProgressCallback,
    ScryfallClient,
    ScryfallError,
    get_scryfall_client,
)

__all__ = [
    "ProgressCallback",
    "ScryfallClient",
    "ScryfallError",
    "get_scryfall_client",
]
