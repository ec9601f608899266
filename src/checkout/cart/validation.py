"""Server-side cart validation.

Re-prices an untrusted cart against the catalogue. Client prices are ignored;
every validated line takes its price from a single batched catalogue query
(all product ids and all bundle slugs at once, plus the subscription price).

Unknown items do not abort the scan: every problem is collected so the shopper
sees all of them at once. Physical products add the SGR deposit per unit;
bundles and subscriptions carry no deposit.
"""

from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field

from pydantic import ValidationError as PydanticValidationError

from checkout.cart.items import CartItem, CartItemType, ValidatedLineItem
from checkout.catalog.port import CatalogPriceOracle, CatalogPrices
from checkout.config import DEFAULT_DEPOSIT_UNIT
from checkout.domain import logger
from checkout.errors import InvalidRequest, ValidationFailed
from checkout.shared.money import round_amount

EMPTY_CART_MESSAGE = "Nu există produse valide în coș"


@dataclass(frozen=True)
class CartValidation:
    """Outcome of pricing a cart against the catalogue."""

    items: tuple[ValidatedLineItem, ...] = ()
    subtotal: float = 0.0
    deposit_total: float = 0.0
    errors: tuple[str, ...] = field(default_factory=tuple)

    @property
    def total(self) -> float:
        return round_amount(self.subtotal + self.deposit_total)

    @property
    def is_valid(self) -> bool:
        return not self.errors and bool(self.items) and self.total > 0


def coerce_cart(cart_items: Iterable[CartItem | Mapping]) -> list[CartItem]:
    """Turn raw cart lines into CartItem models, rejecting malformed input."""
    if cart_items is None or isinstance(cart_items, (str, bytes, Mapping)):
        raise InvalidRequest()

    items = []
    try:
        for raw in cart_items:
            items.append(raw if isinstance(raw, CartItem) else CartItem.model_validate(raw))
    except (PydanticValidationError, TypeError) as exc:
        logger.info("Rejected malformed cart", error=str(exc))
        raise InvalidRequest() from exc

    if not items:
        raise InvalidRequest()
    return items


class CartValidator:
    """Prices carts using an injected catalogue."""

    def __init__(self, catalog: CatalogPriceOracle, deposit_unit: float = DEFAULT_DEPOSIT_UNIT) -> None:
        self.catalog = catalog
        self.deposit_unit = deposit_unit

    def price(self, cart_items: Iterable[CartItem | Mapping]) -> CartValidation:
        """Price every line, collecting per-item errors instead of raising."""
        items = coerce_cart(cart_items)
        prices = self._fetch(items)

        validated: list[ValidatedLineItem] = []
        errors: list[str] = []
        subtotal = 0.0
        deposit_units = 0

        for item in items:
            line = self._price_line(item, prices)
            if isinstance(line, str):
                errors.append(line)
                continue

            validated.append(line)
            subtotal += line.line_total
            if line.carries_deposit:
                deposit_units += line.quantity

        return CartValidation(
            items=tuple(validated),
            subtotal=round_amount(subtotal),
            deposit_total=round_amount(deposit_units * self.deposit_unit),
            errors=tuple(errors),
        )

    def validate(self, cart_items: Iterable[CartItem | Mapping]) -> CartValidation:
        """Price the cart and raise ValidationFailed unless it is fully valid."""
        result = self.price(cart_items)

        if result.errors:
            logger.info("Cart validation failed", errors=list(result.errors))
            raise ValidationFailed(list(result.errors))

        if not result.items or result.total <= 0:
            logger.info("Cart has no payable items", total=result.total)
            raise ValidationFailed([EMPTY_CART_MESSAGE])

        return result

    def _fetch(self, items: list[CartItem]) -> CatalogPrices:
        product_ids = list(dict.fromkeys(i.id for i in items if i.type == CartItemType.PRODUCT))
        bundle_ids = list(dict.fromkeys(i.id for i in items if i.type == CartItemType.BUNDLE))
        return self.catalog.fetch_prices(product_ids, bundle_ids)

    @staticmethod
    def _price_line(item: CartItem, prices: CatalogPrices) -> ValidatedLineItem | str:
        """Return the priced line, or the error message for an unknown item."""
        match item.type:
            case CartItemType.PRODUCT:
                entry = prices.products.get(item.id)
                if entry is None:
                    return f'Produsul "{item.label}" nu a fost găsit'
                name, price = entry.name or item.label, entry.price
            case CartItemType.BUNDLE:
                entry = prices.bundles.get(item.id)
                if entry is None:
                    return f'Pachetul "{item.label}" nu a fost găsit'
                name, price = entry.name or item.label, entry.price
            case CartItemType.SUBSCRIPTION:
                if prices.subscription_price is None:
                    return "Abonamentul nu este disponibil"
                name, price = item.label, prices.subscription_price

        return ValidatedLineItem(
            id=item.id,
            type=item.type,
            name=name,
            server_price=float(price),
            quantity=item.quantity,
        )
