"""Catalogue price oracle port (abstract interface).

The catalogue (CMS) is the only source of truth for prices. The cart
validator asks it once per checkout for every product and bundle in the cart;
the answer also carries the current subscription price.
"""

from abc import ABC, abstractmethod
from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field


@dataclass(frozen=True)
class CatalogEntry:
    """Current price of a single catalogue item."""

    id: str
    name: str
    price: float


@dataclass(frozen=True)
class CatalogPrices:
    """Prices returned by one batched catalogue query."""

    products: Mapping[str, CatalogEntry] = field(default_factory=dict)
    bundles: Mapping[str, CatalogEntry] = field(default_factory=dict)
    subscription_price: float | None = None


class CatalogPriceOracle(ABC):
    """Abstract catalogue price lookup."""

    @abstractmethod
    def fetch_prices(
        self,
        product_ids: Sequence[str],
        bundle_ids: Sequence[str],
    ) -> CatalogPrices:
        """Return current prices for the given product ids and bundle slugs.

        Ids that are unknown to the catalogue are simply absent from the result.
        """
        ...
