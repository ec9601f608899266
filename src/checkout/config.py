"""Runtime settings for the checkout context.

Values come from environment variables so the same build runs locally (mock
payment flow, in-memory stores) and in production (Netopia credentials set).
"""

import os

from pydantic import BaseModel, Field

# Refundable deposit charged per bottle (SGR scheme), in lei.
DEFAULT_DEPOSIT_UNIT = 0.50


class CheckoutSettings(BaseModel):
    deposit_unit: float = Field(default=DEFAULT_DEPOSIT_UNIT, ge=0)
    netopia_api_key: str | None = None
    netopia_pos_signature: str | None = None
    payment_return_path: str = "/payment/success"
    catalog_file: str | None = None
    environment: str = "development"

    model_config = {"frozen": True}

    @property
    def netopia_configured(self) -> bool:
        return bool(self.netopia_api_key and self.netopia_pos_signature)

    @classmethod
    def from_env(cls) -> "CheckoutSettings":
        values = {
            "netopia_api_key": os.environ.get("NETOPIA_API_KEY") or None,
            "netopia_pos_signature": os.environ.get("NETOPIA_POS_SIGNATURE") or None,
            "environment": os.environ.get("PROTEAN_ENV", "development"),
            "catalog_file": os.environ.get("CHECKOUT_CATALOG_FILE") or None,
        }
        if os.environ.get("SGR_DEPOSIT"):
            values["deposit_unit"] = os.environ["SGR_DEPOSIT"]
        if os.environ.get("PAYMENT_RETURN_PATH"):
            values["payment_return_path"] = os.environ["PAYMENT_RETURN_PATH"]
        return cls(**values)


def get_settings() -> CheckoutSettings:
    """Read settings from the current environment."""
    return CheckoutSettings.from_env()
