"""Amount helpers for lei-denominated prices."""

CURRENCY = "RON"


def round_amount(value: float) -> float:
    """Round a monetary amount to bani (2 decimals)."""
    return round(float(value), 2)


def format_price(value: float) -> str:
    """Render an amount the way the shop displays it, e.g. ``12,50 lei``."""
    return f"{round_amount(value):.2f}".replace(".", ",") + " lei"
