from config.settings import DISPLAY_CURRENCY_SYMBOL, USD_TO_EUR_RATE


def to_display(amount_usd: float) -> float:
    """Convert a USD amount to the display currency (no rounding)"""
    return amount_usd * USD_TO_EUR_RATE


def format_price(amount_usd: float) -> str:
    """Render a USD amount in the display currency, e.g. '€12.75'"""
    return f"{DISPLAY_CURRENCY_SYMBOL}{to_display(amount_usd):.2f}"
