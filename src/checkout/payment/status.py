"""Netopia payment status codes and their meaning for an order."""

from dataclasses import dataclass
from enum import IntEnum

from checkout.order.order import OrderStatus, PaymentStatus


class NetopiaStatus(IntEnum):
    PENDING = 0
    PENDING_AUTH = 1
    PAID = 2
    PAID_PENDING = 3
    SCHEDULED = 4
    CREDIT = 5
    DECLINED = 6
    ERROR = 7
    CANCELED = 8


@dataclass(frozen=True)
class StatusMapping:
    order_status: OrderStatus
    payment_status: PaymentStatus


_PAID = StatusMapping(OrderStatus.CONFIRMED, PaymentStatus.PAID)
_FAILED = StatusMapping(OrderStatus.CANCELLED, PaymentStatus.FAILED)
_CANCELLED = StatusMapping(OrderStatus.CANCELLED, PaymentStatus.CANCELLED)
_PENDING = StatusMapping(OrderStatus.PENDING, PaymentStatus.PENDING)

STATUS_TABLE = {
    NetopiaStatus.PAID: _PAID,
    NetopiaStatus.PAID_PENDING: _PAID,
    NetopiaStatus.CREDIT: _PAID,
    NetopiaStatus.DECLINED: _FAILED,
    NetopiaStatus.ERROR: _FAILED,
    NetopiaStatus.CANCELED: _CANCELLED,
}


def map_provider_status(code: int | None) -> StatusMapping:
    """Map a Netopia status code; anything unlisted, or missing, is pending."""
    if code is None:
        return _PENDING
    return STATUS_TABLE.get(code, _PENDING)
