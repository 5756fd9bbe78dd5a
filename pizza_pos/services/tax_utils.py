"""
Tax and order total utilities.

Single-rate sales tax (GST) on the item subtotal, plus an optional
delivery fee.
"""

from dataclasses import dataclass

from ..config import DELIVERY_FEE, TAX_RATE
from ..engine.pricing import round_money


@dataclass
class OrderTotals:
    """Order totals, each rounded to cents."""

    subtotal: float
    tax: float
    delivery_fee: float

    @property
    def total(self) -> float:
        return round_money(self.subtotal + self.tax + self.delivery_fee)

    def as_dict(self) -> dict[str, float]:
        return {
            "subtotal": self.subtotal,
            "tax": self.tax,
            "delivery_fee": self.delivery_fee,
            "total": self.total,
        }


def calculate_tax(subtotal: float, tax_rate: float = TAX_RATE) -> float:
    """Tax on a subtotal, rounded to cents."""
    return round_money(subtotal * (tax_rate or 0.0))


def calculate_order_total(
    subtotal: float,
    tax_rate: float = TAX_RATE,
    delivery_fee: float = DELIVERY_FEE,
    is_delivery: bool = False,
) -> dict[str, float]:
    """
    Calculate full order total with tax and delivery fee.

    Args:
        subtotal: Order subtotal before tax
        tax_rate: Sales tax rate (0.05 = 5%)
        delivery_fee: Fee charged on delivery orders
        is_delivery: Whether this is a delivery order

    Returns:
        Dictionary with subtotal, tax, delivery_fee, and total
    """
    totals = OrderTotals(
        subtotal=round_money(subtotal),
        tax=calculate_tax(subtotal, tax_rate),
        delivery_fee=round_money(delivery_fee or 0.0) if is_delivery else 0.0,
    )
    return totals.as_dict()
