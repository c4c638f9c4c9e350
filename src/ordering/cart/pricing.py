"""Pricing Calculator — pure money arithmetic for carts and orders.

Totals are kept at full float precision. Rounding to cents (half-up)
happens only when an amount is presented.
"""

from collections.abc import Iterable
from decimal import ROUND_HALF_UP, Decimal

CURRENCY_SYMBOLS = {"USD": "$", "EUR": "€", "GBP": "£", "INR": "₹"}

_CENT = Decimal("0.01")


def effective_unit_price(price: float, discount_percent: float | None = 0.0) -> float:
    """Price after a percentage discount (0-100)."""
    if price < 0:
        raise ValueError(f"Price cannot be negative: {price}")
    discount = discount_percent or 0.0
    if not 0 <= discount <= 100:
        raise ValueError(f"Discount must be between 0 and 100 percent: {discount}")
    return price * (1 - discount / 100)


def line_total(unit_price: float, quantity: int) -> float:
    return unit_price * quantity


def cart_total(lines: Iterable) -> float:
    """Sum of unit_price x quantity over ``lines``.

    Lines may be objects with ``unit_price``/``quantity`` attributes or
    mappings with those keys.
    """
    total = 0.0
    for line in lines:
        if isinstance(line, dict):
            total += line_total(line["unit_price"], line["quantity"])
        else:
            total += line_total(line.unit_price, line.quantity)
    return total


def round_money(amount: float) -> float:
    return float(Decimal(str(amount)).quantize(_CENT, rounding=ROUND_HALF_UP))


def format_money(amount: float, currency: str = "USD") -> str:
    rounded = Decimal(str(round_money(amount))).quantize(_CENT)
    symbol = CURRENCY_SYMBOLS.get(currency)
    if symbol:
        return f"{symbol}{rounded:,}"
    return f"{rounded:,} {currency}"
