"""
Wings Routes for Pizza POS
==========================

Endpoints:
----------
- GET /wings/flavors: Flavor options
- POST /wings/{item_id}: Build a wings cart line for a flavor

    POST /wings/5
    {"flavor": "Honey Garlic"}

    {"id": "5-3f9a01bc", "name": "Chicken Wings", "category": "wings",
     "unitPrice": 13.99, "quantity": 1, "totalPrice": 13.99,
     "wingsCustomization": {"flavor": "Honey Garlic", "originalItemId": "5"}}
"""

import logging
from typing import List

from fastapi import APIRouter, Depends, HTTPException

from ..catalog_provider import get_catalog
from ..engine.catalog import Catalog
from ..engine.models import CartLineItem
from ..engine.wings import FLAVOR_OPTIONS, WingsFlavor, build_wings_line
from ..errors import UnknownOptionError
from ..schemas.pizza import WingsOrderRequest

logger = logging.getLogger(__name__)

wings_router = APIRouter(prefix="/wings", tags=["Wings"])


@wings_router.get("/flavors", response_model=List[WingsFlavor])
def list_wings_flavors() -> List[WingsFlavor]:
    return list(FLAVOR_OPTIONS)


@wings_router.post("/{item_id}", response_model=CartLineItem)
def build_wings(
    item_id: str,
    request: WingsOrderRequest,
    catalog: Catalog = Depends(get_catalog),
) -> CartLineItem:
    """Build a wings cart line; an omitted flavor selects Plain."""
    try:
        item = catalog.get_menu_item(item_id)
    except UnknownOptionError:
        raise HTTPException(status_code=404, detail="Menu item not found")
    if item.category != "wings":
        raise HTTPException(status_code=404, detail="Menu item is not wings")

    try:
        return build_wings_line(item, request.flavor)
    except UnknownOptionError as e:
        raise HTTPException(status_code=422, detail=str(e))
