"""Catalogue price oracle factory.

Provides get_catalog() / set_catalog() to swap implementations:
- InMemoryCatalog for development and testing
- a CMS-backed adapter in production, installed at startup via set_catalog()
"""

from checkout.catalog.fake_adapter import InMemoryCatalog
from checkout.catalog.port import CatalogEntry, CatalogPriceOracle, CatalogPrices

__all__ = [
    "CatalogEntry",
    "CatalogPriceOracle",
    "CatalogPrices",
    "InMemoryCatalog",
    "get_catalog",
    "reset_catalog",
    "set_catalog",
]

_current_catalog: CatalogPriceOracle | None = None


def get_catalog() -> CatalogPriceOracle:
    """Return the current catalogue. Defaults to an empty InMemoryCatalog."""
    global _current_catalog
    if _current_catalog is None:
        _current_catalog = InMemoryCatalog()
    return _current_catalog


def set_catalog(catalog: CatalogPriceOracle) -> None:
    """Override the active catalogue (useful for tests)."""
    global _current_catalog
    _current_catalog = catalog


def reset_catalog() -> None:
    """Reset to default catalogue."""
    global _current_catalog
    _current_catalog = None
