"""
Pizza Customization Engine.

One ``PizzaCustomizationEngine`` holds the selection state of one pizza being
built or edited, on one surface (customer modal or POS). The UI binds its
buttons to the named transitions below and reads prices, legal options and
the normalized ``PizzaCustomization`` record back out.

Transitions never raise for moves the UI should have disabled (half-pizza
sides on a non-Large pizza, an unavailable crust, an illegal spicy press, ...).
They return False and leave the state untouched. Ids that don't exist in the
catalog raise ``UnknownOptionError``.

Usage:
    engine = PizzaCustomizationEngine(item, catalog, EngineConfig.pos())
    engine.select_size(large.id)
    engine.toggle_extra_topping(pepperoni.id)
    engine.set_spicy_selection("hot", "left")
    line = engine.to_cart_line()

    # Editing an existing line
    engine = PizzaCustomizationEngine.from_customization(item, catalog, line.pizza_customization)
"""

import logging
import re
import uuid
from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from ..config import DEFAULT_CHEESE_NAME
from ..errors import InvalidCustomizationError, SelectionIncompleteError, UnknownOptionError
from .catalog import Catalog, Crust, FreeTopping, MenuItem, Sauce, Size, Topping
from .models import (
    DAIRY_FREE_CHEESE,
    NO_CHEESE,
    NO_SAUCE,
    CartLineItem,
    CheeseQuantity,
    CheeseSide,
    CrustChoice,
    FreeToppingSelection,
    PizzaCustomization,
    PizzaSide,
    SauceQuantity,
    SelectedTopping,
    SideSpicyLevel,
    SizeChoice,
    ToppingQuantity,
)
from .pricing import PriceBreakdown, PricingEngine, PricingPolicy
from .sizes import SizeTier
from .spicy import SpicySelection, SpicySelector, SpicyState, spicy_options, transition

logger = logging.getLogger(__name__)


class Surface(str, Enum):
    CUSTOMER = "customer"
    POS = "pos"


class EngineConfig(BaseModel):
    """
    Per-surface engine configuration.

    Everything that differs between the customer modal and the POS modal is
    expressed here instead of in a forked copy of the engine.
    """
    model_config = ConfigDict(frozen=True)

    surface: Surface = Surface.CUSTOMER
    apply_modal_defaults: bool = True  # preselect size, crust and default sauce
    allow_less_cheese: bool = False
    allow_extra_amount: bool = False
    # Extra toppings priced from the catalog's per-topping prices instead of the size-tier rate
    use_catalog_topping_prices: bool = False
    # Used only when the catalog marks no cheese as its default
    default_cheese_name: str = DEFAULT_CHEESE_NAME
    note_shortcuts: dict[str, str] = Field(default_factory=dict)
    pricing_policy: PricingPolicy = Field(default_factory=PricingPolicy)

    @classmethod
    def customer(cls, **overrides) -> "EngineConfig":
        return cls(surface=Surface.CUSTOMER, **overrides)

    @classmethod
    def pos(cls, note_shortcuts: Optional[dict[str, str]] = None, **overrides) -> "EngineConfig":
        settings = {
            "surface": Surface.POS,
            "apply_modal_defaults": False,
            "allow_less_cheese": True,
            "allow_extra_amount": True,
            "use_catalog_topping_prices": True,
            "note_shortcuts": note_shortcuts or {},
        }
        settings.update(overrides)
        return cls(**settings)


_AMOUNT_PATTERN = re.compile(r"\d*(?:\.\d*)?")


def parse_amount(value: str) -> float:
    """Parse a typed dollar amount, ignoring anything that isn't a digit or a dot."""
    cleaned = re.sub(r"[^0-9.]", "", value or "")
    match = _AMOUNT_PATTERN.match(cleaned)
    number = match.group(0) if match else ""
    if number in ("", "."):
        return 0.0
    return float(number)


class PizzaCustomizationEngine:
    """Selection state, pricing and legal moves for one pizza."""

    def __init__(
        self,
        item: MenuItem,
        catalog: Catalog,
        config: EngineConfig | None = None,
        customization: PizzaCustomization | None = None,
    ):
        self.item = item
        self.catalog = catalog
        self.config = config or EngineConfig()
        self.default_cheese_name = catalog.default_cheese_name(self.config.default_cheese_name)
        self.pricing = PricingEngine(self.config.pricing_policy, self.default_cheese_name)

        self.selected_size: Size | None = None
        self.selected_crust: Crust | None = None
        self.selected_cheese: str = self.default_cheese_name
        self.cheese_sides: list[CheeseSide] = [CheeseSide()]
        self.selected_sauce_id: str | None = None
        self.sauce_name: str = NO_SAUCE
        self.is_default_sauce: bool = False
        self.sauce_quantity: SauceQuantity = SauceQuantity.REGULAR
        self.spicy_state: SpicyState = SpicyState.NONE
        self.default_toppings: list[SelectedTopping] = []
        self.extra_toppings: list[SelectedTopping] = []
        self.free_toppings: list[FreeToppingSelection] = []
        self.note: str = ""
        self.extra_amount: float = 0.0

        if customization is not None:
            self._load(customization)
        else:
            self._reset()

    @classmethod
    def from_customization(
        cls,
        item: MenuItem,
        catalog: Catalog,
        customization: PizzaCustomization,
        config: EngineConfig | None = None,
    ) -> "PizzaCustomizationEngine":
        """Seed an engine from a previously saved line (edit flow)."""
        return cls(item, catalog, config, customization=customization)

    # =========================================================================
    # Initial state
    # =========================================================================

    def _reset(self) -> None:
        self.default_toppings = [
            SelectedTopping(
                id=dt.topping_id,
                name=dt.name,
                quantity=ToppingQuantity.REGULAR,
                price=0.0,
                is_default=True,
                is_veg=dt.is_veg,
                side=PizzaSide.WHOLE,
            )
            for dt in self.item.default_toppings
        ]

        if not self.config.apply_modal_defaults:
            return

        default_size = self.item.default_size
        if default_size is not None:
            self.select_size(default_size.id)

        for sauce_id in self.item.default_sauce_ids:
            sauce = self.catalog.find_sauce(sauce_id)
            if sauce is not None and sauce.is_available:
                self.select_sauce(sauce.id)
                break

    def _load(self, record: PizzaCustomization) -> None:
        if record.original_item_id != self.item.id:
            raise InvalidCustomizationError(
                f"Customization belongs to item {record.original_item_id!r}, not {self.item.id!r}"
            )

        self.selected_size = Size(id=record.size.id, name=record.size.name, price=record.size.price)
        self.selected_crust = Crust(id=record.crust.id, name=record.crust.name, price=record.crust.price)
        self.selected_cheese = record.cheese_type
        self.cheese_sides = [cs.model_copy() for cs in record.cheese_sides]
        self.selected_sauce_id = record.sauce_id
        self.sauce_name = record.sauce_name
        self.is_default_sauce = record.is_default_sauce
        self.sauce_quantity = record.sauce_quantity

        spicy_state = SpicyState.from_levels(record.spicy_level)
        if spicy_state.is_split() and not self.is_large:
            raise InvalidCustomizationError(
                f"Split spicy level on a non-Large pizza ({record.size.name})"
            )
        self.spicy_state = spicy_state

        self.default_toppings = [t.model_copy() for t in record.default_toppings]
        self.extra_toppings = [t.model_copy() for t in record.extra_toppings]
        self.free_toppings = [FreeToppingSelection.from_label(label) for label in record.free_toppings]
        self.note = record.note
        self.extra_amount = record.extra_amount or 0.0

    # =========================================================================
    # Derived state
    # =========================================================================

    @property
    def tier(self) -> SizeTier:
        if self.selected_size is None:
            return SizeTier.LARGE
        return self.selected_size.tier

    @property
    def is_large(self) -> bool:
        return self.selected_size is not None and self.selected_size.is_large

    @property
    def is_gluten_free_allowed(self) -> bool:
        """Gluten-free crust is only offered on Medium pizzas."""
        return self.selected_size is not None and self.tier in (SizeTier.MEDIUM, SizeTier.GLUTEN_FREE)

    @property
    def cheese_quantity(self) -> CheeseQuantity:
        for cs in self.cheese_sides:
            if cs.side == PizzaSide.WHOLE:
                return cs.quantity
        return self.cheese_sides[0].quantity if self.cheese_sides else CheeseQuantity.REGULAR

    @property
    def spicy_level(self) -> SideSpicyLevel:
        return self.spicy_state.levels()

    @property
    def medium_selection(self) -> SpicySelection:
        return self.spicy_state.medium_selection

    @property
    def hot_selection(self) -> SpicySelection:
        return self.spicy_state.hot_selection

    def _side_allowed(self, side: PizzaSide) -> bool:
        if side == PizzaSide.WHOLE or self.is_large:
            return True
        logger.debug("Refusing %s side on non-Large pizza %s", side.value, self.item.name)
        return False

    def _is_removable(self, topping_id: str) -> bool:
        for dt in self.item.default_toppings:
            if dt.topping_id == topping_id:
                return dt.is_removable
        return True

    def _extra_base_price(self, entry: SelectedTopping) -> float:
        """Regular-quantity price of an extra topping at the current size."""
        try:
            topping = self.catalog.get_topping(entry.id)
        except UnknownOptionError:
            # Topping no longer in the catalog; recover the base from the stored price
            if entry.quantity == ToppingQuantity.EXTRA:
                return entry.price / self.config.pricing_policy.extra_quantity_multiplier
            return entry.price
        return self.topping_price(topping)

    def topping_price(self, topping: Topping) -> float:
        """
        Regular-quantity price of adding ``topping`` at the current size.

        The customer modal charges the size-tier extra topping rate. The POS
        reads the topping's own catalog price when it has one.
        """
        policy = self.config.pricing_policy
        if self.config.use_catalog_topping_prices:
            return policy.topping_base_price(topping, self.tier)
        return policy.extra_topping_rate(self.tier)

    # =========================================================================
    # Legal options
    # =========================================================================

    def available_crusts(self) -> list[Crust]:
        if self.selected_size is None:
            return []
        crusts = self.catalog.crusts_for_size(self.selected_size.name)
        if not self.is_gluten_free_allowed:
            crusts = [c for c in crusts if not c.is_gluten_free]
        return crusts

    def available_cheeses(self) -> list[str]:
        names = [c.name for c in sorted(self.catalog.cheeses, key=lambda c: c.sort_order) if c.is_available]
        if not names:
            names = [self.default_cheese_name, DAIRY_FREE_CHEESE]
        return [NO_CHEESE] + [n for n in names if n != NO_CHEESE]

    def available_sauces(self) -> list[Sauce]:
        sauces = [s for s in self.catalog.sauces if s.is_available]
        return sorted(sauces, key=lambda s: s.sort_order)

    def available_extra_toppings(self) -> list[Topping]:
        """Toppings that can be added: veg first, then by sort order."""
        default_ids = {dt.topping_id for dt in self.item.default_toppings}
        toppings = [
            t for t in self.catalog.toppings
            if t.is_available and t.name.lower() != "cheese" and t.id not in default_ids
        ]
        return sorted(toppings, key=lambda t: (not t.is_veg, t.sort_order))

    def available_free_toppings(self) -> list[FreeTopping]:
        free = [f for f in self.catalog.free_toppings if f.is_available]
        return sorted(free, key=lambda f: f.sort_order)

    def spicy_options(self) -> dict[str, dict[str, bool]]:
        return spicy_options(self.spicy_state, self.is_large)

    def can_add_to_order(self) -> bool:
        return self.selected_size is not None and self.selected_crust is not None

    # =========================================================================
    # Size & crust
    # =========================================================================

    def select_size(self, size_id: str) -> bool:
        """Select a size and bring every dependent selection back into line."""
        self.selected_size = self.item.get_size(size_id)

        if not self.is_large:
            for topping in self.default_toppings + self.extra_toppings:
                topping.side = PizzaSide.WHOLE
            for free in self.free_toppings:
                free.side = PizzaSide.WHOLE
            if any(cs.side != PizzaSide.WHOLE for cs in self.cheese_sides):
                self.cheese_sides = [CheeseSide(side=PizzaSide.WHOLE, quantity=self.cheese_quantity)]
            self.spicy_state = self.spicy_state.clamp_to_whole()

        policy = self.config.pricing_policy
        for topping in self.default_toppings:
            topping.price = policy.default_topping_price(self.tier, topping.quantity)
        for topping in self.extra_toppings:
            topping.price = policy.extra_topping_price(self._extra_base_price(topping), topping.quantity)

        crusts = self.available_crusts()
        if self.selected_crust is None or self.selected_crust.id not in {c.id for c in crusts}:
            regular = next((c for c in crusts if c.is_regular), None)
            fallback = regular or (crusts[0] if crusts else None)
            self.selected_crust = self._priced_crust(fallback) if fallback else None

        logger.debug("Selected size %s for %s", self.selected_size.name, self.item.name)
        return True

    def _priced_crust(self, crust: Crust) -> Crust:
        return crust.model_copy(update={"price": self.pricing.crust_charge(crust)})

    def select_crust(self, crust_id: str) -> bool:
        crust = self.catalog.get_crust(crust_id)
        if crust.id not in {c.id for c in self.available_crusts()}:
            logger.debug("Crust %s not available for size %s", crust.name,
                         self.selected_size.name if self.selected_size else None)
            return False
        self.selected_crust = self._priced_crust(crust)
        return True

    # =========================================================================
    # Cheese
    # =========================================================================

    def select_cheese(self, cheese_name: str) -> bool:
        if cheese_name not in self.available_cheeses():
            logger.debug("Cheese %r is not offered", cheese_name)
            return False
        self.selected_cheese = cheese_name
        return True

    def set_cheese_quantity(self, quantity: CheeseQuantity | str, side: PizzaSide | str = PizzaSide.WHOLE) -> bool:
        quantity = CheeseSide(quantity=quantity).quantity
        side = PizzaSide(side)
        if quantity == CheeseQuantity.LESS and not self.config.allow_less_cheese:
            logger.debug("Less cheese is not offered on the %s surface", self.config.surface.value)
            return False
        if not self._side_allowed(side):
            return False

        if side == PizzaSide.WHOLE:
            self.cheese_sides = [CheeseSide(side=PizzaSide.WHOLE, quantity=quantity)]
            return True

        per_side = {}
        for cs in self.cheese_sides:
            if cs.side == PizzaSide.WHOLE:
                per_side[PizzaSide.LEFT] = cs.quantity
                per_side[PizzaSide.RIGHT] = cs.quantity
            else:
                per_side[cs.side] = cs.quantity
        per_side[side] = quantity
        self.cheese_sides = [
            CheeseSide(side=s, quantity=per_side.get(s, CheeseQuantity.REGULAR))
            for s in (PizzaSide.LEFT, PizzaSide.RIGHT)
        ]
        return True

    # =========================================================================
    # Sauce
    # =========================================================================

    def select_sauce(self, sauce_id: str | None) -> bool:
        """Select a sauce by id; None selects "No Sauce"."""
        if sauce_id is None:
            self.selected_sauce_id = None
            self.sauce_name = NO_SAUCE
            self.is_default_sauce = False
            self.sauce_quantity = SauceQuantity.REGULAR
            return True

        sauce = self.catalog.get_sauce(sauce_id)
        if not sauce.is_available:
            logger.debug("Sauce %s is unavailable", sauce.name)
            return False
        self.selected_sauce_id = sauce.id
        self.sauce_name = sauce.name
        self.is_default_sauce = sauce.id in self.item.default_sauce_ids
        return True

    def set_sauce_quantity(self, quantity: SauceQuantity | str) -> bool:
        quantity = SauceQuantity("regular" if str(quantity).lower() == "normal" else quantity)
        if self.selected_sauce_id is None and quantity == SauceQuantity.EXTRA:
            return False
        self.sauce_quantity = quantity
        return True

    # =========================================================================
    # Toppings
    # =========================================================================

    def _find(self, toppings: list[SelectedTopping], topping_id: str) -> SelectedTopping | None:
        for topping in toppings:
            if topping.id == topping_id:
                return topping
        return None

    def toggle_default_topping(self, topping_id: str) -> bool:
        """Remove a default topping, or put a removed one back at regular."""
        topping = self._find(self.default_toppings, topping_id)
        if topping is None:
            return False
        if topping.quantity == ToppingQuantity.NONE:
            new_quantity = ToppingQuantity.REGULAR
        else:
            new_quantity = ToppingQuantity.NONE
        return self.set_default_topping(topping_id, new_quantity)

    def set_default_topping(
        self,
        topping_id: str,
        quantity: ToppingQuantity | str,
        side: PizzaSide | str | None = None,
    ) -> bool:
        topping = self._find(self.default_toppings, topping_id)
        if topping is None:
            return False
        quantity = ToppingQuantity(quantity)
        if quantity == ToppingQuantity.NONE and not self._is_removable(topping_id):
            logger.debug("Default topping %s cannot be removed", topping.name)
            return False
        if side is not None and not self._side_allowed(PizzaSide(side)):
            return False

        topping.quantity = quantity
        if side is not None:
            topping.side = PizzaSide(side)
        topping.price = self.config.pricing_policy.default_topping_price(self.tier, quantity)
        return True

    def toggle_extra_topping(self, topping_id: str) -> bool:
        """Add a topping at regular quantity, or remove it if already added."""
        existing = self._find(self.extra_toppings, topping_id)
        if existing is not None:
            self.extra_toppings.remove(existing)
            return True

        topping = self.catalog.get_topping(topping_id)
        if topping.id not in {t.id for t in self.available_extra_toppings()}:
            logger.debug("Topping %s cannot be added as an extra", topping.name)
            return False

        self.extra_toppings.append(SelectedTopping(
            id=topping.id,
            name=topping.name,
            quantity=ToppingQuantity.REGULAR,
            price=self.topping_price(topping),
            is_default=False,
            is_veg=topping.is_veg,
            side=PizzaSide.WHOLE,
        ))
        return True

    def set_extra_topping(
        self,
        topping_id: str,
        quantity: ToppingQuantity | str,
        side: PizzaSide | str | None = None,
    ) -> bool:
        topping = self._find(self.extra_toppings, topping_id)
        if topping is None:
            return False
        quantity = ToppingQuantity(quantity)
        if quantity == ToppingQuantity.NONE:
            self.extra_toppings.remove(topping)
            return True
        if side is not None and not self._side_allowed(PizzaSide(side)):
            return False

        base_price = self._extra_base_price(topping)
        topping.quantity = quantity
        if side is not None:
            topping.side = PizzaSide(side)
        topping.price = self.config.pricing_policy.extra_topping_price(base_price, quantity)
        return True

    def toggle_free_topping(self, name: str) -> bool:
        for free in self.free_toppings:
            if free.name == name:
                self.free_toppings.remove(free)
                return True
        if name not in {f.name for f in self.available_free_toppings()}:
            return False
        self.free_toppings.append(FreeToppingSelection(name=name))
        return True

    def set_free_topping_side(self, name: str, side: PizzaSide | str) -> bool:
        side = PizzaSide(side)
        if not self._side_allowed(side):
            return False
        for free in self.free_toppings:
            if free.name == name:
                free.side = side
                return True
        return False

    # =========================================================================
    # Spicy level
    # =========================================================================

    def set_spicy_selection(self, selector: SpicySelector | str, target: SpicySelection | str) -> bool:
        """Press one spicy button (medium/hot x left/whole/right)."""
        new_state = transition(self.spicy_state, SpicySelector(selector), SpicySelection(target), self.is_large)
        if new_state is None:
            return False
        self.spicy_state = new_state
        return True

    def clear_spicy(self) -> bool:
        """The "No Spicy" button: clears both selectors on every side."""
        self.spicy_state = SpicyState.NONE
        return True

    # =========================================================================
    # Note & manual amount
    # =========================================================================

    def set_note(self, text: str) -> None:
        """Set the kitchen note, expanding a configured shortcut typed on its own."""
        self.note = self.config.note_shortcuts.get(text, text)

    def set_extra_amount(self, value: float | str) -> bool:
        if not self.config.allow_extra_amount:
            return False
        amount = parse_amount(value) if isinstance(value, str) else float(value)
        self.extra_amount = max(0.0, amount)
        return True

    # =========================================================================
    # Price & output
    # =========================================================================

    def _selected_sauce(self) -> Sauce | None:
        sauce = self.catalog.find_sauce(self.selected_sauce_id)
        if sauce is None and self.selected_sauce_id is not None:
            logger.warning("Sauce %s is not in the catalog; pricing it at $0.00", self.selected_sauce_id)
        return sauce

    def price_breakdown(self) -> PriceBreakdown:
        sauce = self._selected_sauce()
        return self.pricing.price_breakdown(
            self.selected_size,
            crust=self.selected_crust,
            cheese_name=self.selected_cheese,
            cheese_sides=self.cheese_sides,
            sauce=sauce,
            sauce_quantity=self.sauce_quantity,
            default_sauce_ids=[sauce.id] if sauce is not None and self.is_default_sauce else [],
            default_toppings=self.default_toppings,
            extra_toppings=self.extra_toppings,
            extra_amount=self.extra_amount,
        )

    def price(self) -> float:
        return self.price_breakdown().total

    @property
    def total_price(self) -> float:
        return self.price()

    def to_customization(self) -> PizzaCustomization:
        if not self.can_add_to_order():
            raise SelectionIncompleteError(f"Choose a size and crust for {self.item.name}")

        return PizzaCustomization(
            size=SizeChoice(
                id=self.selected_size.id,
                name=self.selected_size.name,
                price=self.selected_size.price,
            ),
            crust=CrustChoice(
                id=self.selected_crust.id,
                name=self.selected_crust.name,
                price=self.selected_crust.price,
            ),
            cheese_type=self.selected_cheese,
            cheese_sides=[cs.model_copy() for cs in self.cheese_sides],
            sauce_id=self.selected_sauce_id,
            sauce_name=self.sauce_name,
            sauce_quantity=self.sauce_quantity,
            is_default_sauce=self.is_default_sauce,
            free_toppings=[f.label for f in self.free_toppings],
            spicy_level=self.spicy_level,
            default_toppings=[t.model_copy() for t in self.default_toppings],
            extra_toppings=[t.model_copy() for t in self.extra_toppings],
            note=self.note,
            extra_amount=self.extra_amount if self.extra_amount > 0 else None,
            original_item_id=self.item.id,
        )

    def to_cart_line(self, line_id: str | None = None) -> CartLineItem:
        """Build the cart/order line for this pizza (quantity 1)."""
        customization = self.to_customization()
        price = self.price()
        line = CartLineItem(
            id=line_id or f"{self.item.id}-{uuid.uuid4().hex[:8]}",
            name=self.item.name,
            category="pizza",
            unit_price=price,
            quantity=1,
            total_price=price,
            selected_size=self.selected_size.name,
            pizza_customization=customization,
        )
        logger.info("Built pizza line %s (%s) at $%.2f", line.id, self.item.name, price)
        return line
