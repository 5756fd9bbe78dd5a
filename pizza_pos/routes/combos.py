"""
Combo Routes for Pizza POS
==========================

Endpoints:
----------
- GET /combos: Combos offered today (or on ?day=YYYY-MM-DD)
- POST /combos/{combo_id}: Build a priced combo cart line from its selections

Combo pizzas are re-priced by the customization engine for the requesting
surface (?surface=customer|pos), then charged whatever they cost above
their size price.

Error Handling:
---------------
- 404: Unknown combo, combo step or menu item
- 422: A selection the step does not accept, an unknown wings flavor, a
  pizza customization that cannot be loaded, or required steps left empty
"""

import logging
from datetime import date
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query

from ..catalog_provider import get_catalog
from ..engine.catalog import Catalog, Combo
from ..engine.combo import ComboBuilder
from ..engine.customization import PizzaCustomizationEngine, Surface
from ..engine.models import CartLineItem
from ..errors import InvalidCustomizationError, SelectionIncompleteError, UnknownOptionError
from ..schemas.combo import ComboOrderRequest, ComboSelectionRequest
from .pizza import engine_config_for

logger = logging.getLogger(__name__)

combos_router = APIRouter(prefix="/combos", tags=["Combos"])


def _add_selection(
    builder: ComboBuilder,
    selection: ComboSelectionRequest,
    surface: Surface,
    catalog: Catalog,
) -> bool:
    step = builder.get_step(selection.step_id)
    if step.item_type == "pizza":
        if selection.pizza_customization is None:
            raise HTTPException(status_code=422, detail="Pizza selections need a customization")
        item = catalog.get_menu_item(selection.item_id)
        engine = PizzaCustomizationEngine.from_customization(
            item, catalog, selection.pizza_customization, engine_config_for(surface, catalog)
        )
        return builder.add_pizza(step.id, engine)
    if step.item_type == "wings":
        return builder.add_wings(step.id, selection.item_id, selection.flavor)
    return builder.add_item(step.id, selection.item_id)


@combos_router.get("", response_model=List[Combo])
def list_combos(
    day: Optional[date] = Query(None, description="Defaults to today"),
    catalog: Catalog = Depends(get_catalog),
) -> List[Combo]:
    """Active combos whose schedule includes the day."""
    return catalog.active_combos(day or date.today())


@combos_router.post("/{combo_id}", response_model=CartLineItem)
def build_combo(
    combo_id: str,
    request: ComboOrderRequest,
    surface: Surface = Query(Surface.CUSTOMER),
    catalog: Catalog = Depends(get_catalog),
) -> CartLineItem:
    """Build a combo cart line priced at the combo price plus every selection's extra charge."""
    try:
        builder = ComboBuilder(catalog.get_combo(combo_id), catalog)
    except UnknownOptionError:
        raise HTTPException(status_code=404, detail="Combo not found")

    for index, selection in enumerate(request.selections):
        try:
            accepted = _add_selection(builder, selection, surface, catalog)
        except UnknownOptionError as e:
            status = 422 if e.kind == "wings flavor" else 404
            raise HTTPException(status_code=status, detail=str(e))
        except InvalidCustomizationError as e:
            logger.warning("Rejected combo pizza for combo %s: %s", combo_id, e)
            raise HTTPException(status_code=422, detail=str(e))
        if not accepted:
            raise HTTPException(
                status_code=422,
                detail=f"Selection {index} ({selection.item_id}) is not accepted by step {selection.step_id}",
            )

    try:
        return builder.to_cart_line()
    except SelectionIncompleteError as e:
        raise HTTPException(status_code=422, detail=str(e))
