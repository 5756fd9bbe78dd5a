"""
Pydantic models for pizza customization.

These models are the engine's input/output shapes. ``PizzaCustomization`` is
the record stored per order line (JSON blob) and exchanged verbatim with the
cart, the POS order panel and the receipt/kitchen renderers, so its wire
names are camelCase and its enum values must not change:

    {
        "size": {"id": "...", "name": "Medium 12\"", "price": 12.0},
        "crust": {"id": "...", "name": "Regular", "price": 0},
        "cheeseType": "Mozzarella",
        "cheeseSides": [{"side": "whole", "quantity": "regular"}],
        "sauceId": "...", "sauceName": "Pizza Sauce",
        "sauceQuantity": "regular", "isDefaultSauce": true,
        "freeToppings": ["Oregano", "Garlic (left)"],
        "spicyLevel": {"left": "none", "right": "hot"},
        "defaultToppings": [...], "extraToppings": [...],
        "note": "", "extraAmount": null, "originalItemId": "..."
    }
"""

from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator
from pydantic.alias_generators import to_camel

from .sizes import SizeTier, resolve_size_tier


NO_SAUCE = "No Sauce"
NO_CHEESE = "No Cheese"
DAIRY_FREE_CHEESE = "Dairy Free"


class PizzaSide(str, Enum):
    """Which part of the pizza a modifier applies to."""
    LEFT = "left"
    RIGHT = "right"
    WHOLE = "whole"


class ToppingQuantity(str, Enum):
    NONE = "none"  # removed (default toppings only)
    LESS = "less"
    REGULAR = "regular"
    EXTRA = "extra"


class CheeseQuantity(str, Enum):
    LESS = "less"  # POS only
    REGULAR = "regular"
    EXTRA = "extra"


class SauceQuantity(str, Enum):
    REGULAR = "regular"
    EXTRA = "extra"


class SpicyLevel(str, Enum):
    NONE = "none"
    MEDIUM = "medium"
    HOT = "hot"


def _normal_to_regular(value):
    # POS orders were written with "normal" for the regular amount
    if isinstance(value, str) and value.lower() == "normal":
        return "regular"
    return value


class CamelModel(BaseModel):
    """Base model that reads and writes camelCase field names."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class SizeChoice(CamelModel):
    id: str
    name: str
    price: float


class CrustChoice(CamelModel):
    id: str
    name: str
    price: float = 0.0


class CheeseSide(CamelModel):
    side: PizzaSide = PizzaSide.WHOLE
    quantity: CheeseQuantity = CheeseQuantity.REGULAR

    @field_validator("quantity", mode="before")
    @classmethod
    def _accept_normal(cls, value):
        return _normal_to_regular(value)


class SideSpicyLevel(CamelModel):
    """Effective spicy level on each half of the pizza."""
    left: SpicyLevel = SpicyLevel.NONE
    right: SpicyLevel = SpicyLevel.NONE

    def is_split(self) -> bool:
        return self.left != self.right


class SelectedTopping(CamelModel):
    """A default or extra topping on one pizza line."""
    id: str
    name: str
    quantity: ToppingQuantity = ToppingQuantity.REGULAR
    price: float = 0.0
    is_default: bool = False
    is_veg: bool = False
    side: PizzaSide = PizzaSide.WHOLE


class FreeToppingSelection(CamelModel):
    """A no-charge add-on (oregano, garlic, ...). Only routes to the kitchen."""
    name: str
    side: PizzaSide = PizzaSide.WHOLE

    @property
    def label(self) -> str:
        if self.side == PizzaSide.WHOLE:
            return self.name
        return f"{self.name} ({self.side.value})"

    @classmethod
    def from_label(cls, label: str) -> "FreeToppingSelection":
        """Parse a stored label such as ``"Garlic (left)"``."""
        for side in (PizzaSide.LEFT, PizzaSide.RIGHT):
            suffix = f" ({side.value})"
            if label.endswith(suffix):
                return cls(name=label[: -len(suffix)], side=side)
        return cls(name=label)


class PizzaCustomization(CamelModel):
    """Normalized record of every modifier applied to one pizza line."""
    size: SizeChoice
    crust: CrustChoice
    cheese_type: str
    cheese_sides: list[CheeseSide] = Field(default_factory=lambda: [CheeseSide()])
    sauce_id: Optional[str] = None
    sauce_name: str = NO_SAUCE
    sauce_quantity: SauceQuantity = SauceQuantity.REGULAR
    is_default_sauce: bool = False
    free_toppings: list[str] = Field(default_factory=list)
    spicy_level: SideSpicyLevel = Field(default_factory=SideSpicyLevel)
    default_toppings: list[SelectedTopping] = Field(default_factory=list)
    extra_toppings: list[SelectedTopping] = Field(default_factory=list)
    note: str = ""
    extra_amount: Optional[float] = None
    original_item_id: str

    @field_validator("sauce_quantity", mode="before")
    @classmethod
    def _accept_normal(cls, value):
        return _normal_to_regular(value)

    @field_validator("extra_amount")
    @classmethod
    def _positive_or_none(cls, value):
        if value is None or value <= 0:
            return None
        return value

    @model_validator(mode="after")
    def _sides_require_large(self):
        if self.size_tier == SizeTier.LARGE:
            return self
        if self.spicy_level.is_split():
            raise ValueError(f"Split spicy level is only allowed on Large pizzas (size: {self.size.name})")
        toppings = self.default_toppings + self.extra_toppings
        if any(t.side != PizzaSide.WHOLE for t in toppings):
            raise ValueError(f"Half-pizza toppings are only allowed on Large pizzas (size: {self.size.name})")
        if any(FreeToppingSelection.from_label(f).side != PizzaSide.WHOLE for f in self.free_toppings):
            raise ValueError(f"Half-pizza free toppings are only allowed on Large pizzas (size: {self.size.name})")
        if any(cs.side != PizzaSide.WHOLE for cs in self.cheese_sides):
            raise ValueError(f"Half-pizza cheese is only allowed on Large pizzas (size: {self.size.name})")
        return self

    @property
    def size_tier(self) -> SizeTier:
        return resolve_size_tier(self.size.name)

    @property
    def cheese_quantity(self) -> CheeseQuantity:
        """Whole-pizza cheese quantity (first entry when cheese is split by side)."""
        for cs in self.cheese_sides:
            if cs.side == PizzaSide.WHOLE:
                return cs.quantity
        return self.cheese_sides[0].quantity if self.cheese_sides else CheeseQuantity.REGULAR


class WingsCustomization(CamelModel):
    flavor: str
    original_item_id: str


class ComboSelectionItem(CamelModel):
    """One item chosen for a combo step, with what it adds on top of the combo price."""
    combo_item_id: str
    item_type: str
    item_name: str
    item_id: Optional[str] = None
    selected_size: Optional[str] = None
    flavor: Optional[str] = None
    pizza_customization: Optional[PizzaCustomization] = None
    extra_charge: float = 0.0


class ComboCustomization(CamelModel):
    combo_id: str
    combo_name: str
    combo_base_price: float
    selections: list[ComboSelectionItem] = Field(default_factory=list)
    total_extra_charge: float = 0.0


class CartLineItem(CamelModel):
    """One line in a cart or POS order."""
    id: str
    name: str
    category: str = "pizza"
    unit_price: float
    quantity: int = 1
    total_price: float
    selected_size: Optional[str] = None
    pizza_customization: Optional[PizzaCustomization] = None
    wings_customization: Optional[WingsCustomization] = None
    combo_customization: Optional[ComboCustomization] = None
