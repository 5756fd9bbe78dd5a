"""
Pizza Routes for Pizza POS
==========================

Endpoints that price pizzas and render them for the kitchen. Every request
builds its own customization engine; nothing is kept between requests.

Endpoints:
----------
- GET /pizza/{item_id}/default: The pizza as a surface opens it, priced
- POST /pizza/price: Re-price a stored customization (edit flow)
- POST /pizza/ticket: Kitchen ticket lines for a stored customization

Surfaces:
---------
?surface=customer (default) opens with size, crust and default sauce
preselected. ?surface=pos opens blank, so its quote has no customization
until a size is chosen.

Error Handling:
---------------
- 404: Unknown menu item, or the item is not a pizza
- 422: Customization that cannot be loaded for its item
"""

import logging

from fastapi import APIRouter, Depends, HTTPException, Query

from ..catalog_provider import get_catalog
from ..config import DEFAULT_CHEESE_NAME
from ..engine.catalog import Catalog, MenuItem
from ..engine.customization import EngineConfig, PizzaCustomizationEngine, Surface
from ..engine.models import PizzaCustomization
from ..engine.ticket import changed_fields, format_pizza_details
from ..errors import InvalidCustomizationError, UnknownOptionError
from ..schemas.pizza import PizzaQuoteOut, PriceBreakdownOut, TicketOut

logger = logging.getLogger(__name__)

pizza_router = APIRouter(prefix="/pizza", tags=["Pizza"])


# =============================================================================
# Helper Functions
# =============================================================================

def engine_config_for(surface: Surface, catalog: Catalog) -> EngineConfig:
    if surface == Surface.POS:
        return EngineConfig.pos(note_shortcuts=catalog.note_shortcuts)
    return EngineConfig.customer()


def get_pizza_item(catalog: Catalog, item_id: str) -> MenuItem:
    try:
        item = catalog.get_menu_item(item_id)
    except UnknownOptionError:
        raise HTTPException(status_code=404, detail="Menu item not found")
    if item.category != "pizza":
        raise HTTPException(status_code=404, detail="Menu item is not a pizza")
    return item


def quote(engine: PizzaCustomizationEngine) -> PizzaQuoteOut:
    breakdown = engine.price_breakdown()
    can_add = engine.can_add_to_order()
    return PizzaQuoteOut(
        item_id=engine.item.id,
        price=breakdown.total,
        breakdown=PriceBreakdownOut(
            size=breakdown.size,
            crust=breakdown.crust,
            cheese=breakdown.cheese,
            sauce=breakdown.sauce,
            default_toppings=breakdown.default_toppings,
            extra_toppings=breakdown.extra_toppings,
            extra_amount=breakdown.extra_amount,
            total=breakdown.total,
        ),
        can_add_to_order=can_add,
        spicy_options=engine.spicy_options(),
        customization=engine.to_customization() if can_add else None,
    )


# =============================================================================
# Pizza Endpoints
# =============================================================================

@pizza_router.get("/{item_id}/default", response_model=PizzaQuoteOut)
def get_default_pizza(
    item_id: str,
    surface: Surface = Query(Surface.CUSTOMER),
    catalog: Catalog = Depends(get_catalog),
) -> PizzaQuoteOut:
    """The pizza as the given surface opens it, with its price."""
    item = get_pizza_item(catalog, item_id)
    engine = PizzaCustomizationEngine(item, catalog, engine_config_for(surface, catalog))
    return quote(engine)


@pizza_router.post("/price", response_model=PizzaQuoteOut)
def price_pizza(
    customization: PizzaCustomization,
    surface: Surface = Query(Surface.CUSTOMER),
    catalog: Catalog = Depends(get_catalog),
) -> PizzaQuoteOut:
    """
    Re-price a stored customization against the current catalog.

    Sizes and extra-topping prices stored in the record are kept as they
    were when the line was built.
    """
    item = get_pizza_item(catalog, customization.original_item_id)
    try:
        engine = PizzaCustomizationEngine.from_customization(
            item, catalog, customization, engine_config_for(surface, catalog)
        )
    except InvalidCustomizationError as e:
        logger.warning("Rejected customization for item %s: %s", item.id, e)
        raise HTTPException(status_code=422, detail=str(e))
    return quote(engine)


@pizza_router.post("/ticket", response_model=TicketOut)
def pizza_ticket(
    customization: PizzaCustomization,
    catalog: Catalog = Depends(get_catalog),
) -> TicketOut:
    """Kitchen ticket lines for a stored customization."""
    default_cheese = catalog.default_cheese_name(DEFAULT_CHEESE_NAME)
    changed = changed_fields(customization, default_cheese)
    return TicketOut(
        lines=format_pizza_details(customization, default_cheese),
        is_default=not changed,
        changed_fields=changed,
    )
