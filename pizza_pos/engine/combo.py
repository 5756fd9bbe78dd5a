"""
Combo builder.

A combo is a fixed-price bundle walked through as steps (``ComboItem``s in
sort order): pick N pizzas at a size, a wings order, a drink, a dip. The
combo line costs the combo price plus each selection's extra charge:

    pizza                -> its customized price minus its size price (never negative)
    wings                -> $0 (flavor only)
    drinks/dipping sauce -> the item's matching size price, or its base price,
                            when the step is chargeable; $0 otherwise

Pizzas are priced by a ``PizzaCustomizationEngine``, so a combo pizza costs
exactly what the same pizza costs on the surface that built it.

Usage:
    builder = ComboBuilder(combo, catalog)
    engine = PizzaCustomizationEngine(item, catalog, EngineConfig.customer())
    engine.toggle_extra_topping(pepperoni.id)
    builder.add_pizza(pizza_step.id, engine)
    builder.add_wings(wings_step.id, wings.id, "BBQ")
    builder.add_item(drink_step.id, cola.id)
    line = builder.to_cart_line()
"""

import logging
import math
import re
import uuid

from ..errors import SelectionIncompleteError, UnknownOptionError
from .catalog import Catalog, Combo, ComboItem, MenuItem, Size
from .customization import PizzaCustomizationEngine
from .models import CartLineItem, ComboCustomization, ComboSelectionItem
from .pricing import round_money
from .wings import default_flavor, find_flavor

logger = logging.getLogger(__name__)

# Combo item type -> catalog category (pizza, wings) or stored menu category
_ITEM_FILTERS = {
    "pizza": lambda item: item.category == "pizza",
    "wings": lambda item: item.category == "wings",
    "drinks": lambda item: item.menu_category == "drinks",
    "dipping_sauce": lambda item: item.menu_category == "dipping_sauce",
}

WINGS_PER_ORDER = 12

_PIECES_PATTERN = re.compile(r"(\d+)\s*pieces?", re.IGNORECASE)


def matches_restriction(name: str, restriction: str | None) -> bool:
    """
    Whether a size or item name satisfies a step's size restriction.

    Only the restriction's first word is compared, so "Medium" matches
    'Medium 12"' and "2 Litre" matches "Cola 2L".
    """
    if not restriction:
        return True
    words = restriction.lower().split()
    return bool(words) and words[0] in name.lower()


def _matching_size(item: MenuItem, restriction: str | None) -> Size | None:
    for size in item.sizes:
        if matches_restriction(size.name, restriction):
            return size
    return None


class ComboBuilder:
    """Selections for one combo being built, and its price."""

    def __init__(self, combo: Combo, catalog: Catalog):
        self.combo = combo
        self.catalog = catalog
        self.selections: list[ComboSelectionItem] = []

    @property
    def steps(self) -> list[ComboItem]:
        return sorted(self.combo.items, key=lambda step: step.sort_order)

    def get_step(self, step_id: str) -> ComboItem:
        for step in self.combo.items:
            if step.id == step_id:
                return step
        raise UnknownOptionError("combo step", step_id)

    # =========================================================================
    # Step rules
    # =========================================================================

    @staticmethod
    def required_count(step: ComboItem) -> int:
        """
        Selections needed to complete a step.

        A wings step restricted to "N pieces" needs one order per 12 pieces.
        """
        if step.item_type == "wings" and step.size_restriction:
            match = _PIECES_PATTERN.search(step.size_restriction)
            if match:
                return math.ceil(int(match.group(1)) / WINGS_PER_ORDER)
        return step.quantity or 1

    def eligible_items(self, step_id: str) -> list[MenuItem]:
        """Menu items that can fill a step."""
        step = self.get_step(step_id)
        items = [item for item in self.catalog.menu_items if _ITEM_FILTERS[step.item_type](item)]
        if step.item_type in ("pizza", "drinks") and step.size_restriction:
            items = [
                item for item in items
                if _matching_size(item, step.size_restriction) is not None
                or (step.item_type == "drinks" and matches_restriction(item.name, step.size_restriction))
            ]
        return items

    def selections_for(self, step_id: str) -> list[ComboSelectionItem]:
        return [s for s in self.selections if s.combo_item_id == step_id]

    def is_step_complete(self, step_id: str) -> bool:
        step = self.get_step(step_id)
        return len(self.selections_for(step_id)) >= self.required_count(step)

    @property
    def is_complete(self) -> bool:
        """Every required step has all of its selections; optional steps may be skipped."""
        return all(self.is_step_complete(step.id) for step in self.steps if step.is_required)

    def _can_select(self, step: ComboItem, item: MenuItem) -> bool:
        if self.is_step_complete(step.id):
            logger.debug("Combo step %s already has %d selection(s)", step.id, self.required_count(step))
            return False
        if item.id not in {i.id for i in self.eligible_items(step.id)}:
            logger.debug("%s cannot fill a %s step of %s", item.name, step.item_type, self.combo.name)
            return False
        return True

    # =========================================================================
    # Selections
    # =========================================================================

    def add_pizza(self, step_id: str, engine: PizzaCustomizationEngine) -> bool:
        """Add a customized pizza; its extra charge is whatever it costs above its size price."""
        step = self.get_step(step_id)
        if step.item_type != "pizza" or not self._can_select(step, engine.item):
            return False
        if not engine.can_add_to_order():
            logger.debug("Combo pizza %s has no size or crust yet", engine.item.name)
            return False
        if not matches_restriction(engine.selected_size.name, step.size_restriction):
            logger.debug("Combo step %s needs a %s pizza, got %s",
                         step.id, step.size_restriction, engine.selected_size.name)
            return False

        extra_charge = max(0.0, round_money(engine.price() - engine.selected_size.price))
        self.selections.append(ComboSelectionItem(
            combo_item_id=step.id,
            item_type=step.item_type,
            item_name=engine.item.name,
            item_id=engine.item.id,
            selected_size=engine.selected_size.name,
            pizza_customization=engine.to_customization(),
            extra_charge=extra_charge,
        ))
        return True

    def add_wings(self, step_id: str, item_id: str, flavor: str | None = None) -> bool:
        """Add a wings order; flavor only, never an extra charge."""
        step = self.get_step(step_id)
        item = self.catalog.get_menu_item(item_id)
        if step.item_type != "wings" or not self._can_select(step, item):
            return False
        option = default_flavor() if flavor is None else find_flavor(flavor)
        if option is None:
            raise UnknownOptionError("wings flavor", flavor)

        self.selections.append(ComboSelectionItem(
            combo_item_id=step.id,
            item_type=step.item_type,
            item_name=item.name,
            item_id=item.id,
            flavor=option.name,
        ))
        return True

    def add_item(self, step_id: str, item_id: str) -> bool:
        """Add a drink or dipping sauce, charged only when the step is chargeable."""
        step = self.get_step(step_id)
        item = self.catalog.get_menu_item(item_id)
        if step.item_type not in ("drinks", "dipping_sauce") or not self._can_select(step, item):
            return False

        size = _matching_size(item, step.size_restriction) or (item.sizes[0] if item.sizes else None)
        extra_charge = 0.0
        if step.is_chargeable:
            extra_charge = size.price if size is not None and size.price else item.base_price

        self.selections.append(ComboSelectionItem(
            combo_item_id=step.id,
            item_type=step.item_type,
            item_name=item.name,
            item_id=item.id,
            selected_size=size.name if size is not None else None,
            extra_charge=extra_charge,
        ))
        return True

    def remove_selection(self, index: int) -> bool:
        if not 0 <= index < len(self.selections):
            return False
        del self.selections[index]
        return True

    # =========================================================================
    # Price & output
    # =========================================================================

    @property
    def total_extra_charge(self) -> float:
        return round_money(sum(s.extra_charge for s in self.selections))

    def price(self) -> float:
        return round_money(self.combo.price + self.total_extra_charge)

    def to_customization(self) -> ComboCustomization:
        return ComboCustomization(
            combo_id=self.combo.id,
            combo_name=self.combo.name,
            combo_base_price=self.combo.price,
            selections=[s.model_copy() for s in self.selections],
            total_extra_charge=self.total_extra_charge,
        )

    def to_cart_line(self, line_id: str | None = None) -> CartLineItem:
        """Build the cart/order line for this combo (quantity 1)."""
        if not self.is_complete:
            missing = [s.item_type for s in self.steps if s.is_required and not self.is_step_complete(s.id)]
            raise SelectionIncompleteError(f"Finish {self.combo.name}: {', '.join(missing)} still to choose")

        price = self.price()
        line = CartLineItem(
            id=line_id or f"combo-{self.combo.id}-{uuid.uuid4().hex[:8]}",
            name=self.combo.name,
            category="combo",
            unit_price=price,
            quantity=1,
            total_price=price,
            combo_customization=self.to_customization(),
        )
        logger.info("Built combo line %s (%s) at $%.2f", line.id, self.combo.name, price)
        return line
