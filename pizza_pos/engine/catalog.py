"""
Catalog data consumed by the customization engine.

The catalog is read-only from the engine's point of view. It is built by
``pizza_pos.catalog_provider.CatalogProvider`` from the database, or directly
from dicts (``Catalog.model_validate``) in tests and fixtures. Every size has
its ``SizeTier`` resolved once here, when the catalog is constructed.
"""

from datetime import date
from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationInfo, field_validator

from ..errors import UnknownOptionError
from .sizes import SizeTier, resolve_size_tier


class CatalogModel(BaseModel):
    model_config = ConfigDict(frozen=True, from_attributes=True)


class Size(CatalogModel):
    id: str
    name: str
    price: float
    tier: Optional[SizeTier] = Field(default=None, validate_default=True)

    @field_validator("tier")
    @classmethod
    def _resolve_tier(cls, value, info: ValidationInfo):
        if value is None:
            return resolve_size_tier(info.data.get("name"))
        return value

    @property
    def is_large(self) -> bool:
        return self.tier == SizeTier.LARGE


class Crust(CatalogModel):
    id: str
    name: str
    price: float = 0.0
    is_available: bool = True
    sort_order: int = 0

    @property
    def is_gluten_free(self) -> bool:
        return "gluten" in self.name.lower()

    @property
    def is_regular(self) -> bool:
        return "regular" in self.name.lower()


class SizeCrustAvailability(CatalogModel):
    size_name: str
    crust_id: str


class Topping(CatalogModel):
    id: str
    name: str
    is_veg: bool = False
    price: Optional[float] = None
    price_small: Optional[float] = None
    price_medium: Optional[float] = None
    price_large: Optional[float] = None
    is_available: bool = True
    sort_order: int = 0


class DefaultTopping(CatalogModel):
    topping_id: str
    name: str
    is_veg: bool = False
    is_removable: bool = True


class Sauce(CatalogModel):
    id: str
    name: str
    price: float = 0.0
    is_available: bool = True
    sort_order: int = 0


class Cheese(CatalogModel):
    id: str
    name: str
    is_default: bool = False
    is_available: bool = True
    sort_order: int = 0


class FreeTopping(CatalogModel):
    id: str
    name: str
    is_available: bool = True
    sort_order: int = 0


class MenuItem(CatalogModel):
    id: str
    name: str
    category: Literal["pizza", "wings", "other"] = "other"
    menu_category: str = ""  # category as stored on the menu ("drinks", "dipping_sauce", ...)
    base_price: float = 0.0
    description: str = ""
    sizes: tuple[Size, ...] = ()
    default_toppings: tuple[DefaultTopping, ...] = ()
    default_sauce_ids: tuple[str, ...] = ()

    def get_size(self, size_id: str) -> Size:
        for size in self.sizes:
            if size.id == size_id:
                return size
        raise UnknownOptionError("size", size_id)

    def find_size_by_name(self, name: str) -> Size | None:
        for size in self.sizes:
            if size.name == name:
                return size
        return None

    @property
    def default_size(self) -> Size | None:
        """The size the customer modal opens on (second size when there is one)."""
        if len(self.sizes) > 1:
            return self.sizes[1]
        return self.sizes[0] if self.sizes else None


class ComboItem(CatalogModel):
    """One step of a combo: what kind of item, how many, and at which size."""
    id: str
    item_type: Literal["pizza", "wings", "drinks", "dipping_sauce"]
    quantity: int = 1
    size_restriction: Optional[str] = None  # 'Medium', '2 Litre', '24 pieces', ...
    is_required: bool = True
    is_chargeable: bool = False
    sort_order: int = 0


class Combo(CatalogModel):
    id: str
    name: str
    description: str = ""
    price: float
    is_active: bool = True
    sort_order: int = 0
    schedule_type: Optional[Literal["always", "days_of_week", "dates_of_month"]] = None
    schedule_days: Optional[tuple[int, ...]] = None  # 0 = Sunday
    schedule_dates: Optional[tuple[int, ...]] = None
    items: tuple[ComboItem, ...] = ()

    def is_offered_on(self, day: date) -> bool:
        """Whether the combo's schedule includes ``day`` (ignores ``is_active``)."""
        if self.schedule_type in (None, "always"):
            return True
        if self.schedule_type == "days_of_week":
            if self.schedule_days is None:
                return True
            return (day.weekday() + 1) % 7 in self.schedule_days
        if self.schedule_dates is None:
            return True
        return day.day in self.schedule_dates


class Catalog(CatalogModel):
    """Everything the engine can offer for a pizza or a combo."""
    menu_items: tuple[MenuItem, ...] = ()
    crusts: tuple[Crust, ...] = ()
    size_crust_availability: tuple[SizeCrustAvailability, ...] = ()
    toppings: tuple[Topping, ...] = ()
    sauces: tuple[Sauce, ...] = ()
    cheeses: tuple[Cheese, ...] = ()
    free_toppings: tuple[FreeTopping, ...] = ()
    combos: tuple[Combo, ...] = ()
    note_shortcuts: dict[str, str] = Field(default_factory=dict)

    def get_combo(self, combo_id: str) -> Combo:
        for combo in self.combos:
            if combo.id == combo_id:
                return combo
        raise UnknownOptionError("combo", combo_id)

    def active_combos(self, day: date) -> list[Combo]:
        """Active combos whose schedule includes ``day``, in display order."""
        combos = [c for c in self.combos if c.is_active and c.is_offered_on(day)]
        return sorted(combos, key=lambda c: c.sort_order)

    def get_menu_item(self, item_id: str) -> MenuItem:
        for item in self.menu_items:
            if item.id == item_id:
                return item
        raise UnknownOptionError("menu item", item_id)

    def get_crust(self, crust_id: str) -> Crust:
        for crust in self.crusts:
            if crust.id == crust_id:
                return crust
        raise UnknownOptionError("crust", crust_id)

    def get_topping(self, topping_id: str) -> Topping:
        for topping in self.toppings:
            if topping.id == topping_id:
                return topping
        raise UnknownOptionError("topping", topping_id)

    def get_sauce(self, sauce_id: str) -> Sauce:
        for sauce in self.sauces:
            if sauce.id == sauce_id:
                return sauce
        raise UnknownOptionError("sauce", sauce_id)

    def find_sauce(self, sauce_id: str | None) -> Sauce | None:
        if sauce_id is None:
            return None
        for sauce in self.sauces:
            if sauce.id == sauce_id:
                return sauce
        return None

    def crusts_for_size(self, size_name: str) -> list[Crust]:
        """Crusts offered for a size, in display order."""
        crust_ids = {
            sca.crust_id for sca in self.size_crust_availability
            if sca.size_name == size_name
        }
        crusts = [c for c in self.crusts if c.id in crust_ids and c.is_available]
        return sorted(crusts, key=lambda c: c.sort_order)

    @property
    def default_cheese(self) -> Cheese | None:
        for cheese in self.cheeses:
            if cheese.is_default:
                return cheese
        return None

    def default_cheese_name(self, fallback: str) -> str:
        """Name of the cheese that is free at regular quantity."""
        cheese = self.default_cheese
        return cheese.name if cheese is not None else fallback
