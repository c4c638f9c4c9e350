"""Helpers shared by the plain-text templates."""

from datetime import datetime, timedelta


def item_lines(items: list[dict]) -> str:
    """One line per item: ``name x quantity @ price = line total``."""
    return "\n".join(
        f"  {item['name']} x {item['quantity']} @ {item['unit_price']} = {item['line_total']}" for item in items
    )


def estimated_ship_date(placed_at: datetime, lead_days: int) -> str:
    ship_date = placed_at + timedelta(days=lead_days)
    return f"{ship_date:%A}, {ship_date:%B} {ship_date.day}, {ship_date.year}"
