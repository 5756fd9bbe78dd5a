"""
Routes Package for Pizza POS
============================

API route definitions organized by domain. Each module defines a FastAPI
APIRouter with related endpoints grouped together.

- menu.py: Menu items and the options offered for an item/size
- pizza.py: Pizza quotes, re-pricing and kitchen tickets
- wings.py: Wings flavors and cart lines
- combos.py: Combos offered today and priced combo cart lines

Router Registration:
--------------------
All routers are registered in app_factory.py under two prefixes:
1. /api/v1/* - Versioned API (recommended)
2. /* - Root paths

Route Dependencies:
-------------------
- get_db: Database session
- get_catalog: Catalog snapshot built from the database

Error Handling:
---------------
Routes raise HTTPException for error conditions:
- 404: Not found (unknown menu item or size)
- 422: Invalid customization or flavor
"""

from .menu import menu_router
from .pizza import pizza_router
from .wings import wings_router
from .combos import combos_router

__all__ = [
    "menu_router",
    "pizza_router",
    "wings_router",
    "combos_router",
]
