"""FastAPI routes for the Checkout domain: order intake, Netopia IPN and order lookup."""

from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse

from checkout.api.deps import get_intake_handler, get_order_store, get_reconciler
from checkout.api.schemas import (
    CheckoutResponse,
    ErrorResponse,
    IpnHealthResponse,
    OrderSummaryResponse,
)
from checkout.domain import logger
from checkout.errors import CheckoutError, InvalidRequest
from checkout.order.intake import OrderIntakeHandler
from checkout.order.store import OrderNotFound, OrderStore
from checkout.payment.reconciliation import SERVER_ERROR_ACK, PaymentStatusReconciler


def _error(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content=ErrorResponse(error=message).model_dump(by_alias=True),
    )


# ---------------------------------------------------------------------------
# Payment Router
# ---------------------------------------------------------------------------
payment_router = APIRouter(prefix="/api/payment", tags=["payment"])


@payment_router.post(
    "/initiate",
    response_model=CheckoutResponse,
    responses={400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
)
async def initiate_payment(
    request: Request,
    handler: OrderIntakeHandler = Depends(get_intake_handler),
):
    """Validate the cart, persist the order and return where to pay for it."""
    try:
        try:
            payload = await request.json()
        except ValueError as exc:
            raise InvalidRequest() from exc

        result = handler.handle_checkout(payload)
    except CheckoutError as exc:
        if exc.status_code >= 500:
            logger.error("Checkout failed", error=type(exc).__name__)
        return _error(exc.status_code, exc.message)
    except Exception:
        logger.exception("Payment initiation error")
        return _error(500, CheckoutError.default_message)

    response = CheckoutResponse(
        order_number=result.order_number,
        payment_url=result.payment_url,
        message=result.message,
    )
    return JSONResponse(status_code=200, content=response.model_dump(by_alias=True, exclude_none=True))


@payment_router.post("/ipn")
async def payment_ipn(
    request: Request,
    reconciler: PaymentStatusReconciler = Depends(get_reconciler),
):
    """Netopia IPN callback. Always answers with the provider's envelope."""
    try:
        if "application/json" in request.headers.get("content-type", ""):
            raw = await request.body()
        else:
            form = await request.form()
            raw = form.get("data") or ""

        ack = reconciler.reconcile(raw)
    except Exception:
        logger.exception("IPN processing error")
        ack = SERVER_ERROR_ACK

    return JSONResponse(status_code=ack.http_status, content=ack.to_dict())


@payment_router.get("/ipn", response_model=IpnHealthResponse)
async def payment_ipn_probe() -> IpnHealthResponse:
    """Liveness probe for the IPN endpoint."""
    return IpnHealthResponse(status="IPN endpoint active")


# ---------------------------------------------------------------------------
# Order Router
# ---------------------------------------------------------------------------
order_router = APIRouter(prefix="/api/orders", tags=["orders"])


@order_router.get(
    "/{order_number}",
    response_model=OrderSummaryResponse,
    responses={404: {"model": ErrorResponse}},
)
async def get_order(order_number: str, store: OrderStore = Depends(get_order_store)):
    """Order status for the payment return page."""
    try:
        order = store.get_order(order_number)
    except OrderNotFound:
        return _error(404, "Comanda nu a fost găsită")

    response = OrderSummaryResponse(
        order_number=order.order_number,
        status=order.status,
        payment_status=order.payment_status,
        subtotal=order.subtotal,
        deposit_total=order.deposit_total,
        total=order.total,
        paid_at=order.paid_at,
        summary=order.summary(),
    )
    return JSONResponse(status_code=200, content=response.model_dump(by_alias=True, mode="json"))
