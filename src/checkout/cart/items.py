"""Cart line types as submitted by the client and as priced by the server."""

from dataclasses import dataclass
from enum import Enum

from pydantic import BaseModel, Field


class CartItemType(Enum):
    PRODUCT = "product"
    BUNDLE = "bundle"
    SUBSCRIPTION = "subscription"


class CartItem(BaseModel):
    """A cart line as submitted by the storefront.

    ``name`` and ``price`` are display values from the browser and are never
    used for pricing.
    """

    id: str = Field(min_length=1, max_length=255)
    type: CartItemType
    name: str = Field(default="", max_length=255)
    price: float | None = None
    quantity: int = Field(gt=0)
    image: str | None = None

    @property
    def label(self) -> str:
        return self.name or self.id


@dataclass(frozen=True)
class ValidatedLineItem:
    """A cart line priced from the catalogue."""

    id: str
    type: CartItemType
    name: str
    server_price: float
    quantity: int

    @property
    def line_total(self) -> float:
        return self.server_price * self.quantity

    @property
    def carries_deposit(self) -> bool:
        return self.type == CartItemType.PRODUCT
