"""In-memory catalogue for development and testing.

Holds product, bundle and subscription prices in dictionaries and records
every query, so tests can assert that a checkout hits the catalogue exactly
once regardless of cart size.
"""

import json
from collections.abc import Sequence
from pathlib import Path

from checkout.catalog.port import CatalogEntry, CatalogPriceOracle, CatalogPrices


class InMemoryCatalog(CatalogPriceOracle):
    """Configurable in-memory catalogue."""

    def __init__(
        self,
        products: dict[str, CatalogEntry] | None = None,
        bundles: dict[str, CatalogEntry] | None = None,
        subscription_price: float | None = None,
    ) -> None:
        self.products: dict[str, CatalogEntry] = dict(products or {})
        self.bundles: dict[str, CatalogEntry] = dict(bundles or {})
        self.subscription_price = subscription_price
        self.calls: list[dict] = []

    @classmethod
    def from_json(cls, path: str | Path) -> "InMemoryCatalog":
        """Load a catalogue file shaped like
        ``{"products": [{"id", "name", "price"}], "bundles": [...], "subscriptionPrice": 49.0}``.
        """
        data = json.loads(Path(path).read_text(encoding="utf-8"))
        catalog = cls(subscription_price=data.get("subscriptionPrice"))
        for entry in data.get("products", []):
            catalog.add_product(entry["id"], entry.get("name", ""), float(entry["price"]))
        for entry in data.get("bundles", []):
            catalog.add_bundle(entry["id"], entry.get("name", ""), float(entry["price"]))
        return catalog

    def add_product(self, product_id: str, name: str, price: float) -> None:
        self.products[product_id] = CatalogEntry(id=product_id, name=name, price=price)

    def add_bundle(self, slug: str, name: str, price: float) -> None:
        self.bundles[slug] = CatalogEntry(id=slug, name=name, price=price)

    def fetch_prices(
        self,
        product_ids: Sequence[str],
        bundle_ids: Sequence[str],
    ) -> CatalogPrices:
        self.calls.append(
            {
                "method": "fetch_prices",
                "product_ids": list(product_ids),
                "bundle_ids": list(bundle_ids),
            }
        )
        return CatalogPrices(
            products={pid: self.products[pid] for pid in product_ids if pid in self.products},
            bundles={slug: self.bundles[slug] for slug in bundle_ids if slug in self.bundles},
            subscription_price=self.subscription_price,
        )
