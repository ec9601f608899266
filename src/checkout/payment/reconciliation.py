"""Payment status reconciliation from Netopia IPN notifications.

Netopia delivers notifications at least once, possibly out of order, and
keeps retrying until it gets a structured answer. The reconciler therefore
always acknowledges a well-formed notification with ``errorType: 0``, even
when the order reference is missing or the store update fails; those cases
are logged for out-of-band follow-up. Only an undecodable payload gets the
error envelope.

Correctness rests on the store's conditional update: a status is applied only
if it is more final than the stored one, so duplicates and stale pending
notifications never regress an order.
"""

import json
from collections.abc import Callable, Mapping
from dataclasses import dataclass
from datetime import UTC, datetime

from pydantic import BaseModel, ConfigDict, Field
from pydantic import ValidationError as PydanticValidationError

from checkout.domain import logger
from checkout.errors import MissingOrderReference, NotificationParseError, ReconciliationPersistenceFailed
from checkout.order.order import PaymentStatus
from checkout.order.store import OrderStore, OrderStoreError, PaymentStatusUpdate
from checkout.payment.status import map_provider_status
from checkout.shared.money import CURRENCY


# ---------------------------------------------------------------------------
# Notification payload
# ---------------------------------------------------------------------------
class PaymentSection(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    status: int | None = None
    ntp_id: str | None = Field(default=None, alias="ntpID")
    amount: float | None = None
    currency: str | None = None


class OrderSection(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    order_id: str | None = Field(default=None, alias="orderID")
    ntp_id: str | None = Field(default=None, alias="ntpID")
    amount: float | None = None
    currency: str | None = None


class ProviderError(BaseModel):
    code: str | None = None
    message: str | None = None


class NetopiaNotification(BaseModel):
    payment: PaymentSection | None = None
    order: OrderSection | None = None
    error: ProviderError | None = None

    @property
    def order_number(self) -> str | None:
        return self.order.order_id if self.order else None

    @property
    def provider_status(self) -> int | None:
        return self.payment.status if self.payment else None

    @property
    def transaction_id(self) -> str | None:
        return self.payment.ntp_id if self.payment else None


def parse_notification(raw: NetopiaNotification | Mapping | str | bytes | None) -> NetopiaNotification:
    """Decode a notification from a parsed body or its JSON text.

    An empty body decodes to an empty notification, which is then handled as
    a missing order reference.
    """
    if isinstance(raw, NetopiaNotification):
        return raw
    if raw is None or raw in ("", b""):
        raw = {}
    if isinstance(raw, (str, bytes)):
        try:
            raw = json.loads(raw)
        except ValueError as exc:
            raise NotificationParseError() from exc
    if not isinstance(raw, Mapping):
        raise NotificationParseError()

    try:
        return NetopiaNotification.model_validate(raw)
    except PydanticValidationError as exc:
        raise NotificationParseError() from exc


# ---------------------------------------------------------------------------
# Acknowledgment
# ---------------------------------------------------------------------------
@dataclass(frozen=True)
class Acknowledgment:
    """Answer returned to Netopia. ``outcome`` is for logs and tests only."""

    error_type: int = 0
    error_code: str = ""
    error_message: str = "OK"
    outcome: str = "applied"
    http_status: int = 200

    def to_dict(self) -> dict:
        return {
            "errorType": self.error_type,
            "errorCode": self.error_code,
            "errorMessage": self.error_message,
        }


SERVER_ERROR_ACK = Acknowledgment(
    error_type=1,
    error_code="SERVER_ERROR",
    error_message="Internal server error",
    outcome="server_error",
    http_status=500,
)


def _utcnow() -> datetime:
    return datetime.now(UTC)


# ---------------------------------------------------------------------------
# Reconciler
# ---------------------------------------------------------------------------
class PaymentStatusReconciler:
    """Applies provider notifications to orders through an injected store."""

    def __init__(self, store: OrderStore, clock: Callable[[], datetime] = _utcnow) -> None:
        self.store = store
        self.clock = clock

    def reconcile(self, notification: NetopiaNotification | Mapping | str | bytes | None) -> Acknowledgment:
        try:
            notification = parse_notification(notification)
        except NotificationParseError:
            logger.exception("Could not decode IPN payload")
            return SERVER_ERROR_ACK

        order_number = notification.order_number
        if not order_number:
            missing = MissingOrderReference()
            logger.error("IPN missing orderId", transaction_id=notification.transaction_id)
            return Acknowledgment(error_message=missing.message, outcome="missing_order_reference")

        currency = notification.payment.currency if notification.payment else None
        if currency and currency != CURRENCY:
            logger.warning("IPN currency mismatch", order_number=order_number, currency=currency)

        mapping = map_provider_status(notification.provider_status)
        is_paid = mapping.payment_status == PaymentStatus.PAID
        update = PaymentStatusUpdate(
            status=mapping.order_status.value,
            payment_status=mapping.payment_status.value,
            payment_reference=notification.transaction_id,
            paid_at=self.clock() if is_paid else None,
        )

        try:
            applied = self.store.update_payment_status(order_number, update)
        except OrderStoreError as exc:
            failure = ReconciliationPersistenceFailed(order_number, str(exc))
            logger.error(
                "Failed to update order from IPN",
                order_number=order_number,
                provider_status=notification.provider_status,
                error=failure.message,
            )
            return Acknowledgment(outcome="persistence_failed")

        if applied:
            logger.info(
                "Order payment status updated",
                order_number=order_number,
                provider_status=notification.provider_status,
                status=update.status,
                payment_status=update.payment_status,
            )
            return Acknowledgment(outcome="applied")

        logger.info(
            "Ignored duplicate or stale IPN",
            order_number=order_number,
            provider_status=notification.provider_status,
            payment_status=update.payment_status,
        )
        return Acknowledgment(outcome="skipped")
