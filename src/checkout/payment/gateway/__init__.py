"""Payment gateway factory.

Provides get_gateway() / set_gateway() to swap implementations:
- FakeGateway (mock payment flow) when Netopia credentials are missing
- NetopiaGateway when NETOPIA_API_KEY and NETOPIA_POS_SIGNATURE are set
"""

from checkout.config import CheckoutSettings, get_settings
from checkout.domain import logger
from checkout.payment.gateway.fake_adapter import FakeGateway
from checkout.payment.gateway.netopia_adapter import NetopiaGateway
from checkout.payment.gateway.port import PaymentGateway

_current_gateway: PaymentGateway | None = None


def build_gateway(settings: CheckoutSettings) -> PaymentGateway:
    """Pick the gateway matching the configured credentials."""
    if not settings.netopia_configured:
        logger.info("Netopia not configured, using mock payment flow")
        return FakeGateway(return_path=settings.payment_return_path)
    return NetopiaGateway(
        api_key=settings.netopia_api_key,
        pos_signature=settings.netopia_pos_signature,
        return_path=settings.payment_return_path,
    )


def get_gateway() -> PaymentGateway:
    """Return the current payment gateway, built from settings on first use."""
    global _current_gateway
    if _current_gateway is None:
        _current_gateway = build_gateway(get_settings())
    return _current_gateway


def set_gateway(gateway: PaymentGateway) -> None:
    """Override the active payment gateway (useful for tests)."""
    global _current_gateway
    _current_gateway = gateway


def reset_gateway() -> None:
    """Reset to default gateway."""
    global _current_gateway
    _current_gateway = None
