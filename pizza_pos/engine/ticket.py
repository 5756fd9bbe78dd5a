"""
Kitchen ticket / receipt lines.

Renders a stored ``PizzaCustomization`` as short lines the kitchen reads
top to bottom. Only differences from the menu item's factory pizza are
printed, except size/crust and sauce which are always shown:

    Large 14", Regular
    Cheese: extra Mozzarella
    Sauce: Pizza Sauce
    Spicy: L:Medium Hot R:None
    Add: Oregano, Garlic (left)
    NO: Onion
    extra Mushroom (left)
    +Pepperoni, +Olives (right)
    Note: well done
"""

from ..config import DEFAULT_CHEESE_NAME
from .models import (
    DAIRY_FREE_CHEESE,
    NO_CHEESE,
    NO_SAUCE,
    CartLineItem,
    CheeseQuantity,
    PizzaCustomization,
    PizzaSide,
    SauceQuantity,
    SelectedTopping,
    SpicyLevel,
    ToppingQuantity,
)

SPICY_LABELS = {
    SpicyLevel.NONE: "None",
    SpicyLevel.MEDIUM: "Medium Hot",
    SpicyLevel.HOT: "Hot",
}


def _side_suffix(side: PizzaSide) -> str:
    return "" if side == PizzaSide.WHOLE else f" ({side.value})"


def _cheese_lines(record: PizzaCustomization, default_cheese: str) -> list[str]:
    cheese = record.cheese_type.lower()
    if cheese in (NO_CHEESE.lower(), "none"):
        return ["Cheese: None"]
    if cheese.replace("-", " ") == DAIRY_FREE_CHEESE.lower():
        return ["Cheese: Dairy Free"]

    lines = [
        f"Cheese: {cs.quantity.value} {record.cheese_type}{_side_suffix(cs.side)}"
        for cs in record.cheese_sides
        if cs.quantity != CheeseQuantity.REGULAR
    ]
    if not lines and cheese != default_cheese.lower():
        lines.append(f"Cheese: {record.cheese_type}")
    return lines


def _sauce_line(record: PizzaCustomization) -> str | None:
    if record.sauce_name.lower() == NO_SAUCE.lower():
        return "No Sauce"
    if not record.sauce_name:
        return None
    prefix = "extra " if record.sauce_quantity == SauceQuantity.EXTRA else ""
    return f"Sauce: {prefix}{record.sauce_name}"


def _spicy_line(record: PizzaCustomization) -> str | None:
    left, right = record.spicy_level.left, record.spicy_level.right
    if left == SpicyLevel.NONE and right == SpicyLevel.NONE:
        return None
    if left == right:
        return f"Spicy: {SPICY_LABELS[left]}"
    return f"Spicy: L:{SPICY_LABELS[left]} R:{SPICY_LABELS[right]}"


def _removed(toppings: list[SelectedTopping]) -> list[SelectedTopping]:
    return [t for t in toppings if t.quantity == ToppingQuantity.NONE]


def _modified(toppings: list[SelectedTopping]) -> list[SelectedTopping]:
    return [
        t for t in toppings
        if t.quantity in (ToppingQuantity.LESS, ToppingQuantity.EXTRA) or t.side != PizzaSide.WHOLE
    ]


def format_pizza_details(record: PizzaCustomization, default_cheese: str = DEFAULT_CHEESE_NAME) -> list[str]:
    """Kitchen lines for one pizza, in print order."""
    details = [f"{record.size.name or 'Standard'}, {record.crust.name or 'Regular'}"]

    details.extend(_cheese_lines(record, default_cheese))

    sauce = _sauce_line(record)
    if sauce:
        details.append(sauce)

    spicy = _spicy_line(record)
    if spicy:
        details.append(spicy)

    if record.free_toppings:
        details.append(f"Add: {', '.join(record.free_toppings)}")

    removed = _removed(record.default_toppings)
    if removed:
        details.append(f"NO: {', '.join(t.name for t in removed)}")

    for topping in _modified(record.default_toppings):
        if topping.quantity == ToppingQuantity.REGULAR:
            details.append(f"{topping.name}{_side_suffix(topping.side)}")
        else:
            details.append(f"{topping.quantity.value} {topping.name}{_side_suffix(topping.side)}")

    if record.extra_toppings:
        extras = []
        for topping in record.extra_toppings:
            prefix = "+" if topping.quantity != ToppingQuantity.EXTRA else "+extra "
            extras.append(f"{prefix}{topping.name}{_side_suffix(topping.side)}")
        details.append(", ".join(extras))

    if record.note:
        details.append(f"Note: {record.note}")

    return details


def format_line_item(line: CartLineItem, default_cheese: str = DEFAULT_CHEESE_NAME) -> list[str]:
    """Kitchen lines for one order line: a quantity header, then its details."""
    lines = [f"{line.quantity}x {line.name.upper()}"]
    if line.pizza_customization is not None:
        lines.extend(f"  {detail}" for detail in format_pizza_details(line.pizza_customization, default_cheese))
    elif line.wings_customization is not None:
        lines.append(f"  {line.wings_customization.flavor}")
    elif line.combo_customization is not None:
        for selection in line.combo_customization.selections:
            if selection.flavor:
                lines.append(f"  {selection.item_name}: {selection.flavor}")
            else:
                lines.append(f"  {selection.item_name}")
            if selection.pizza_customization is not None:
                lines.extend(
                    f"    {detail}"
                    for detail in format_pizza_details(selection.pizza_customization, default_cheese)
                )
    elif line.selected_size:
        lines.append(f"  {line.selected_size}")
    return lines


def changed_fields(
    record: PizzaCustomization,
    default_cheese: str = DEFAULT_CHEESE_NAME,
) -> list[str]:
    """
    Names of the record fields that differ from the item's factory pizza.

    Size is a choice, not a modification, and is never reported. A crust is
    a change only when it isn't the regular crust.
    """
    changed = []
    if "regular" not in record.crust.name.lower():
        changed.append("crust")
    if record.cheese_type.lower() != default_cheese.lower():
        changed.append("cheese_type")
    if any(cs.quantity != CheeseQuantity.REGULAR or cs.side != PizzaSide.WHOLE for cs in record.cheese_sides):
        changed.append("cheese_sides")
    if not record.is_default_sauce:
        changed.append("sauce")
    if record.sauce_quantity != SauceQuantity.REGULAR:
        changed.append("sauce_quantity")
    if record.free_toppings:
        changed.append("free_toppings")
    if record.spicy_level.left != SpicyLevel.NONE or record.spicy_level.right != SpicyLevel.NONE:
        changed.append("spicy_level")
    if any(t.quantity != ToppingQuantity.REGULAR or t.side != PizzaSide.WHOLE for t in record.default_toppings):
        changed.append("default_toppings")
    if record.extra_toppings:
        changed.append("extra_toppings")
    if record.note:
        changed.append("note")
    if record.extra_amount:
        changed.append("extra_amount")
    return changed


def is_default_customization(record: PizzaCustomization, default_cheese: str = DEFAULT_CHEESE_NAME) -> bool:
    return not changed_fields(record, default_cheese)
