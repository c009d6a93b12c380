"""Money helpers for the wallet.

Balances and stakes are stored as floating point and summed at full
precision. Rounding to two decimals happens only when a figure is shown
(statistics, display strings), half-up like a cashier would.
"""

from decimal import ROUND_HALF_UP, Decimal

_CENT = Decimal("0.01")


def round_money(value: float) -> float:
    """Round to 2 decimals, half-up: 2.675 -> 2.68, -20 -> -20.0."""
    return float(Decimal(repr(value)).quantize(_CENT, rounding=ROUND_HALF_UP))


def money_to_display(value: float) -> str:
    """Format for display: 1500 -> '$1,500.00', -12 -> '-$12.00'."""
    rounded = Decimal(repr(value)).quantize(_CENT, rounding=ROUND_HALF_UP)
    if rounded < 0:
        return f"-${-rounded:,.2f}"
    return f"${rounded:,.2f}"


def format_amount(value: float) -> str:
    """Compact amount for messages: 20.0 -> '20', 12.5 -> '12.5'."""
    return str(int(value)) if float(value).is_integer() else repr(float(value))
