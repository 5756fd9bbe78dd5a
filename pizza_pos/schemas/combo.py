"""
Combo Schemas for Pizza POS
===========================

Request body for building a combo line. Pizza selections carry the stored
``PizzaCustomization`` record (camelCase keys) exactly as the pizza
endpoints return it; everything else is snake_case like the other request
bodies.

    POST /combos/1
    {
        "selections": [
            {"step_id": "1", "item_id": "1", "pizza_customization": {...}},
            {"step_id": "2", "item_id": "3", "flavor": "BBQ"},
            {"step_id": "3", "item_id": "5"}
        ]
    }
"""

from typing import List, Optional

from pydantic import BaseModel, Field

from ..engine.models import PizzaCustomization


class ComboSelectionRequest(BaseModel):
    step_id: str
    item_id: str
    flavor: Optional[str] = None
    pizza_customization: Optional[PizzaCustomization] = None


class ComboOrderRequest(BaseModel):
    selections: List[ComboSelectionRequest] = Field(default_factory=list)
