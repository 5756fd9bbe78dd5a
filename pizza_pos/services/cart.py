"""
Cart of order lines.

Customized pizzas and wings are added as their own lines (``add_line``) and
never merge. Plain menu items (drinks, dips, ...) merge with an existing line
for the same item and size (``add_item``).
"""

import logging
from typing import Optional

from ..config import DELIVERY_FEE, TAX_RATE
from ..engine.catalog import MenuItem
from ..engine.models import CartLineItem
from ..engine.pricing import round_money
from .tax_utils import calculate_order_total

logger = logging.getLogger(__name__)


class Cart:
    """In-memory list of ``CartLineItem`` owned by one ordering session."""

    def __init__(self, lines: Optional[list[CartLineItem]] = None):
        self.lines: list[CartLineItem] = list(lines or [])

    def __len__(self) -> int:
        return len(self.lines)

    def __iter__(self):
        return iter(self.lines)

    def get_line(self, line_id: str) -> CartLineItem | None:
        for line in self.lines:
            if line.id == line_id:
                return line
        return None

    def add_line(self, line: CartLineItem) -> CartLineItem:
        """Append a customized line as-is."""
        self.lines.append(line)
        logger.debug("Cart line added: %s (%s) $%.2f", line.id, line.name, line.total_price)
        return line

    def add_item(self, item: MenuItem, size_name: str | None = None) -> CartLineItem:
        """
        Add one of a plain menu item, merging with an existing line for the
        same item and size.
        """
        unit_price = item.base_price
        if size_name:
            size = item.find_size_by_name(size_name)
            if size is not None:
                unit_price = size.price

        line_id = f"{item.id}:{size_name}" if size_name else item.id
        existing = self.get_line(line_id)
        if existing is not None:
            return self.update_quantity(line_id, existing.quantity + 1)

        return self.add_line(CartLineItem(
            id=line_id,
            name=item.name,
            category=item.category,
            unit_price=unit_price,
            quantity=1,
            total_price=unit_price,
            selected_size=size_name,
        ))

    def update_quantity(self, line_id: str, quantity: int) -> CartLineItem | None:
        """Set a line's quantity; zero or less removes the line."""
        if quantity <= 0:
            self.remove_line(line_id)
            return None

        line = self.get_line(line_id)
        if line is None:
            return None
        line.quantity = quantity
        line.total_price = round_money(quantity * line.unit_price)
        return line

    def replace_line(self, line: CartLineItem) -> bool:
        """Swap in an edited line with the same id, keeping its position."""
        for i, existing in enumerate(self.lines):
            if existing.id == line.id:
                self.lines[i] = line
                return True
        logger.warning("Cannot replace missing cart line %s", line.id)
        return False

    def remove_line(self, line_id: str) -> bool:
        before = len(self.lines)
        self.lines = [line for line in self.lines if line.id != line_id]
        return len(self.lines) < before

    def clear(self) -> None:
        self.lines = []

    @property
    def subtotal(self) -> float:
        return round_money(sum(line.total_price for line in self.lines))

    @property
    def item_count(self) -> int:
        return sum(line.quantity for line in self.lines)

    def totals(
        self,
        is_delivery: bool = False,
        tax_rate: float = TAX_RATE,
        delivery_fee: float = DELIVERY_FEE,
    ) -> dict[str, float]:
        return calculate_order_total(self.subtotal, tax_rate, delivery_fee, is_delivery)
