"""
Seed the option tables with a small demo menu.

Run directly to populate an empty database:

    python -m pizza_pos.seed_menu
"""

import logging

from sqlalchemy.orm import Session

from .config import DEFAULT_LOCATION_ID
from .models import (
    CheeseOption,
    Combo,
    ComboItem,
    CrustOption,
    FreeTopping,
    ItemDefaultSauce,
    ItemDefaultTopping,
    ItemSize,
    MenuItem,
    NoteShortcut,
    SauceOption,
    SizeCrustAvailability,
    Topping,
)

logger = logging.getLogger(__name__)

SMALL = 'Small 10"'
MEDIUM = 'Medium 12"'
LARGE = 'Large 14"'

CRUSTS = [
    # (name, price, sort_order, sizes offered)
    ("Regular", 0.0, 0, [SMALL, MEDIUM, LARGE]),
    ("Thin", 0.0, 1, [SMALL, MEDIUM, LARGE]),
    ("Gluten Free", 0.0, 2, [MEDIUM, LARGE]),
]

TOPPINGS = [
    # (name, is_veg, price, price_small, price_medium, price_large, is_available)
    ("Pepperoni", False, None, None, None, None, True),
    ("Chicken", False, None, 3.0, 3.5, 4.0, True),
    ("Bacon", False, None, None, None, None, True),
    ("Anchovies", False, None, None, None, None, False),
    ("Onion", True, None, None, None, None, True),
    ("Mushroom", True, None, None, None, None, True),
    ("Green Peppers", True, None, None, None, None, True),
    ("Olives", True, None, None, None, None, True),
    ("Cheese", True, None, None, None, None, True),
]

SAUCES = [
    # (name, price)
    ("Pizza Sauce", 1.00),
    ("Garlic", 1.50),
    ("BBQ", 1.50),
]

CHEESES = [
    # (name, is_default)
    ("Mozzarella", True),
    ("Dairy Free", False),
]

FREE_TOPPINGS = ["Oregano", "Chili Flakes", "Basil"]

PIZZAS = [
    # (name, description, [(size, price)], [(default topping, removable)], [default sauces])
    (
        "Garden Veggie",
        "Onion, mushroom and green peppers on pizza sauce",
        [(SMALL, 10.00), (MEDIUM, 12.00), (LARGE, 16.00)],
        [("Onion", True), ("Mushroom", True), ("Green Peppers", True)],
        ["Pizza Sauce"],
    ),
    (
        "Pepperoni Feast",
        "Double pepperoni",
        [(SMALL, 11.00), (MEDIUM, 13.00), (LARGE, 17.00)],
        [("Pepperoni", False)],
        ["Pizza Sauce"],
    ),
]

OTHER_ITEMS = [
    # (name, category, base_price)
    ("Chicken Wings", "chicken_wings", 13.99),
    ("Garlic Dip", "dipping_sauce", 1.25),
    ("Cola", "drinks", 2.50),
]

COMBOS = [
    # (name, price, [(item_type, quantity, size_restriction, is_required, is_chargeable)])
    (
        "Pizza & Wings",
        24.99,
        [
            ("pizza", 1, "Medium", True, False),
            ("wings", 1, "12 pieces", True, False),
            ("drinks", 1, None, True, False),
            ("dipping_sauce", 1, None, False, True),
        ],
    ),
]

NOTE_SHORTCUTS = {
    "WD": "Well done",
    "LB": "Light bake",
    "CS": "Cut in squares",
}


def seed_menu(db: Session, location_id: str = DEFAULT_LOCATION_ID) -> bool:
    """
    Insert the demo menu if the menu is empty.

    Returns:
        True if rows were inserted, False if the menu already had items
    """
    existing = db.query(MenuItem).count()
    if existing > 0:
        logger.info("Menu already has %d items. Not seeding again.", existing)
        return False

    crusts = {}
    for name, price, sort_order, sizes in CRUSTS:
        crust = CrustOption(name=name, price=price, sort_order=sort_order)
        db.add(crust)
        crusts[name] = (crust, sizes)
    db.flush()
    for crust, sizes in crusts.values():
        for size_name in sizes:
            db.add(SizeCrustAvailability(size_name=size_name, crust_id=crust.id))

    toppings = {}
    for i, (name, is_veg, price, small, medium, large, available) in enumerate(TOPPINGS):
        topping = Topping(
            name=name,
            is_veg=is_veg,
            price=price,
            price_small=small,
            price_medium=medium,
            price_large=large,
            is_available=available,
            sort_order=i,
        )
        db.add(topping)
        toppings[name] = topping

    sauces = {}
    for i, (name, price) in enumerate(SAUCES):
        sauce = SauceOption(name=name, price=price, sort_order=i)
        db.add(sauce)
        sauces[name] = sauce

    for i, (name, is_default) in enumerate(CHEESES):
        db.add(CheeseOption(name=name, is_default=is_default, sort_order=i))

    for i, name in enumerate(FREE_TOPPINGS):
        db.add(FreeTopping(name=name, sort_order=i))
    db.flush()

    sort_order = 0
    for name, description, sizes, default_toppings, default_sauces in PIZZAS:
        item = MenuItem(
            name=name,
            category="pizza",
            description=description,
            base_price=sizes[0][1],
            sort_order=sort_order,
        )
        item.sizes = [ItemSize(name=size, price=price, sort_order=i) for i, (size, price) in enumerate(sizes)]
        item.default_toppings = [
            ItemDefaultTopping(topping_id=toppings[topping].id, is_removable=removable)
            for topping, removable in default_toppings
        ]
        item.default_sauces = [ItemDefaultSauce(sauce_option_id=sauces[s].id) for s in default_sauces]
        db.add(item)
        sort_order += 1

    for name, category, base_price in OTHER_ITEMS:
        db.add(MenuItem(name=name, category=category, base_price=base_price, sort_order=sort_order))
        sort_order += 1

    for i, (name, price, steps) in enumerate(COMBOS):
        combo = Combo(name=name, price=price, sort_order=i, schedule_type="always")
        combo.items = [
            ComboItem(
                item_type=item_type,
                quantity=quantity,
                size_restriction=restriction,
                is_required=required,
                is_chargeable=chargeable,
                sort_order=j,
            )
            for j, (item_type, quantity, restriction, required, chargeable) in enumerate(steps)
        ]
        db.add(combo)

    for key, text in NOTE_SHORTCUTS.items():
        db.add(NoteShortcut(location_id=location_id, shortcut_key=key, replacement_text=text))

    db.commit()
    logger.info("Seeded %d pizzas, %d other items and %d combos", len(PIZZAS), len(OTHER_ITEMS), len(COMBOS))
    return True


def main() -> None:
    from dotenv import load_dotenv
    load_dotenv()

    from .db import SessionLocal, init_db
    from .logging_config import setup_logging

    setup_logging()
    init_db()
    db = SessionLocal()
    try:
        seed_menu(db)
    finally:
        db.close()


if __name__ == "__main__":
    main()
