"""
Pizza Pricing Schemas for Pizza POS
===================================

Request/response models for the pizza and wings endpoints. Request bodies
carrying a customization use the stored ``PizzaCustomization`` shape
verbatim (camelCase keys), so saved order lines can be posted back as-is.
"""

from typing import Dict, List, Optional

from pydantic import BaseModel

from ..engine.models import PizzaCustomization


class PriceBreakdownOut(BaseModel):
    size: float
    crust: float
    cheese: float
    sauce: float
    default_toppings: float
    extra_toppings: float
    extra_amount: float
    total: float


class PizzaQuoteOut(BaseModel):
    """
    A priced pizza.

    ``customization`` is None while the guard condition isn't met (no size or
    crust chosen yet), which is how the POS opens.
    """
    item_id: str
    price: float
    breakdown: PriceBreakdownOut
    can_add_to_order: bool
    spicy_options: Dict[str, Dict[str, bool]]
    customization: Optional[PizzaCustomization] = None


class TicketOut(BaseModel):
    lines: List[str]
    is_default: bool
    changed_fields: List[str]


class WingsOrderRequest(BaseModel):
    flavor: Optional[str] = None
