"""
Menu Routes for Pizza POS
=========================

Read-only endpoints that tell a surface what it may offer.

Endpoints:
----------
- GET /menu/items: List menu items (optional ?category=pizza|wings|other)
- GET /menu/items/{item_id}/options: Options for one item at one size
  (?surface=pos prices extra toppings from the catalog, as the POS does)

The options endpoint runs the same customization engine the surfaces use,
so crust/topping filtering here can never drift from what the engine
accepts. Without ?size_id the item's default size is used.

Usage:
------
    GET /menu/items/1/options?size_id=3
    {
        "item": {"id": "1", "name": "Garden Veggie", ...},
        "selected_size": {"id": "3", "name": "Large 14\"", "tier": "large", ...},
        "is_gluten_free_allowed": false,
        "crusts": [{"id": "1", "name": "Regular", ...}, ...],
        ...
    }
"""

import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query

from ..catalog_provider import get_catalog
from ..engine.catalog import Catalog
from ..engine.customization import EngineConfig, PizzaCustomizationEngine, Surface
from ..errors import UnknownOptionError
from ..schemas.menu import (
    CrustOut,
    FreeToppingOut,
    MenuItemOptionsOut,
    MenuItemOut,
    SauceOut,
    SizeOut,
    ToppingOut,
)

logger = logging.getLogger(__name__)

menu_router = APIRouter(prefix="/menu", tags=["Menu"])


@menu_router.get("/items", response_model=List[MenuItemOut])
def list_menu_items(
    category: Optional[str] = Query(None, description="pizza, wings or other"),
    catalog: Catalog = Depends(get_catalog),
) -> List[MenuItemOut]:
    """List available menu items, optionally filtered by category."""
    items = catalog.menu_items
    if category:
        items = [i for i in items if i.category == category]
    return [MenuItemOut.model_validate(i) for i in items]


@menu_router.get("/items/{item_id}/options", response_model=MenuItemOptionsOut)
def get_menu_item_options(
    item_id: str,
    size_id: Optional[str] = Query(None),
    surface: Surface = Query(Surface.CUSTOMER),
    catalog: Catalog = Depends(get_catalog),
) -> MenuItemOptionsOut:
    """Options offered for a pizza at the given (or default) size."""
    try:
        item = catalog.get_menu_item(item_id)
    except UnknownOptionError:
        raise HTTPException(status_code=404, detail="Menu item not found")

    if surface == Surface.POS:
        config = EngineConfig.pos(note_shortcuts=catalog.note_shortcuts)
    else:
        config = EngineConfig.customer(apply_modal_defaults=False)
    engine = PizzaCustomizationEngine(item, catalog, config)
    try:
        chosen = size_id or (item.default_size.id if item.default_size else None)
        if chosen:
            engine.select_size(chosen)
    except UnknownOptionError:
        raise HTTPException(status_code=404, detail="Size not found")

    return MenuItemOptionsOut(
        item=MenuItemOut.model_validate(item),
        selected_size=SizeOut.model_validate(engine.selected_size) if engine.selected_size else None,
        is_gluten_free_allowed=engine.is_gluten_free_allowed,
        crusts=[CrustOut.model_validate(c) for c in engine.available_crusts()],
        sauces=[
            SauceOut(id=s.id, name=s.name, price=s.price, is_default=s.id in item.default_sauce_ids)
            for s in engine.available_sauces()
        ],
        cheeses=engine.available_cheeses(),
        extra_toppings=[
            ToppingOut(id=t.id, name=t.name, is_veg=t.is_veg, price=engine.topping_price(t))
            for t in engine.available_extra_toppings()
        ],
        free_toppings=[FreeToppingOut.model_validate(f) for f in engine.available_free_toppings()],
    )
