"""
Schemas Package for Pizza POS
=============================

Pydantic models used for API request validation and response serialization.

Schema Organization:
--------------------
- **menu.py**: Menu items and the options offered for one item/size
- **pizza.py**: Pizza quotes, kitchen tickets and wings requests
- **combo.py**: Combo order requests

The persisted ``PizzaCustomization`` and ``CartLineItem`` records live in
``pizza_pos.engine.models`` and are used directly as request/response
bodies; their wire names are camelCase.

Naming Conventions:
-------------------
- *Out: Response models (e.g., MenuItemOut) - what API returns
- *Request: Request bodies (e.g., WingsOrderRequest)
"""

from .menu import (
    SizeOut,
    DefaultToppingOut,
    MenuItemOut,
    CrustOut,
    SauceOut,
    ToppingOut,
    FreeToppingOut,
    MenuItemOptionsOut,
)

from .pizza import (
    PriceBreakdownOut,
    PizzaQuoteOut,
    TicketOut,
    WingsOrderRequest,
)

from .combo import (
    ComboSelectionRequest,
    ComboOrderRequest,
)

__all__ = [
    "SizeOut",
    "DefaultToppingOut",
    "MenuItemOut",
    "CrustOut",
    "SauceOut",
    "ToppingOut",
    "FreeToppingOut",
    "MenuItemOptionsOut",
    "PriceBreakdownOut",
    "PizzaQuoteOut",
    "TicketOut",
    "WingsOrderRequest",
    "ComboSelectionRequest",
    "ComboOrderRequest",
]
