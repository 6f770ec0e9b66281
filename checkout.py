"""Order total computation and order identifiers."""
from typing import Iterable

FREE_SHIPPING_THRESHOLD = 500
SHIPPING_CHARGE = 50
TAX_RATE = 0.18  # GST
DELIVERY_DAYS = 7


def compute_totals(line_totals: Iterable[float]) -> dict:
    subtotal = round(sum(line_totals), 2)
    shipping_cost = 0 if subtotal >= FREE_SHIPPING_THRESHOLD else SHIPPING_CHARGE
    tax = round(subtotal * TAX_RATE, 2)
    return {
        "subtotal": subtotal,
        "shippingCost": shipping_cost,
        "tax": tax,
        "totalAmount": round(subtotal + shipping_cost + tax, 2),
    }


def format_order_id(year: int, seq: int) -> str:
    return f"ORD-{year}-{seq:04d}"
