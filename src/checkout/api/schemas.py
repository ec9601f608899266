"""Pydantic response schemas for the Checkout API.

These are external contracts (anti-corruption layer). The storefront reads
camelCase keys, so every schema serializes by alias.
"""

from datetime import datetime

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class _CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


# ---------------------------------------------------------------------------
# Checkout
# ---------------------------------------------------------------------------
class CheckoutResponse(_CamelModel):
    success: bool = True
    order_number: str
    payment_url: str
    message: str | None = None

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        json_schema_extra={
            "examples": [
                {
                    "success": True,
                    "orderNumber": "NX-LZ3K9Q1A-7F2C",
                    "paymentUrl": "/payment/success?orderId=NX-LZ3K9Q1A-7F2C",
                }
            ]
        },
    )


class ErrorResponse(_CamelModel):
    success: bool = False
    error: str


# ---------------------------------------------------------------------------
# Orders
# ---------------------------------------------------------------------------
class OrderSummaryResponse(_CamelModel):
    order_number: str
    status: str
    payment_status: str
    subtotal: float
    deposit_total: float
    total: float
    paid_at: datetime | None = None
    summary: str


# ---------------------------------------------------------------------------
# Payment notifications
# ---------------------------------------------------------------------------
class IpnHealthResponse(BaseModel):
    status: str
