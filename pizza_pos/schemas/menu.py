"""
Menu Option Schemas for Pizza POS
=================================

Response models for the menu endpoints. They describe what a surface may
offer for one menu item at one size; every list is already filtered by the
engine's legal-move rules (unavailable options removed, gluten-free crust
only on Medium, extra toppings excluding the item's defaults).

Endpoint Coverage:
------------------
- GET /menu/items: List menu items
- GET /menu/items/{id}/options: Options for one item at one size

Usage:
------
    options = MenuItemOptionsOut(
        item=MenuItemOut.model_validate(item),
        selected_size=SizeOut.model_validate(size),
        is_gluten_free_allowed=True,
        crusts=[CrustOut.model_validate(c) for c in crusts],
        ...
    )
"""

from typing import List, Optional

from pydantic import BaseModel, ConfigDict

from ..engine.sizes import SizeTier


class SizeOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    name: str
    price: float
    tier: SizeTier


class DefaultToppingOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    topping_id: str
    name: str
    is_veg: bool
    is_removable: bool


class MenuItemOut(BaseModel):
    """
    Response model for a menu item.

    Attributes:
        id: Catalog id
        name: Display name (e.g., "Garden Veggie")
        category: "pizza", "wings" or "other"
        base_price: Price of the item without a size (wings, drinks, ...)
        sizes: Sizes in display order, each with its resolved tier
    """
    model_config = ConfigDict(from_attributes=True)

    id: str
    name: str
    category: str
    base_price: float
    description: str = ""
    sizes: List[SizeOut] = []
    default_toppings: List[DefaultToppingOut] = []


class CrustOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    name: str
    price: float
    is_gluten_free: bool


class SauceOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    name: str
    price: float
    is_default: bool = False


class ToppingOut(BaseModel):
    """An extra topping with its regular-quantity price at the selected size."""
    id: str
    name: str
    is_veg: bool
    price: float


class FreeToppingOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    name: str


class MenuItemOptionsOut(BaseModel):
    item: MenuItemOut
    selected_size: Optional[SizeOut] = None
    is_gluten_free_allowed: bool
    crusts: List[CrustOut]
    sauces: List[SauceOut]
    cheeses: List[str]
    extra_toppings: List[ToppingOut]
    free_toppings: List[FreeToppingOut]
