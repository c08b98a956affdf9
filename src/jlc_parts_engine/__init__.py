"""JLC Parts Engine - resolve source components to JLCPCB part numbers."""

__version__ = "0.1.0"

from .client import (
    CatalogError,
    CatalogResponseError,
    CatalogUnavailableError,
    JLCSearchClient,
)
from .engine import JLCPartsEngine
from .footprints import normalize_footprint

__all__ = [
    "__version__",
    "CatalogError",
    "CatalogResponseError",
    "CatalogUnavailableError",
    "JLCSearchClient",
    "JLCPartsEngine",
    "normalize_footprint",
]
