"""
Pricing Engine for Pizzas.

This module computes the all-inclusive price of one pizza from its current
selections. It is shared by every surface (customer modal, POS modal, cart
summary, receipts); surface differences are configuration, not code.

Price of one pizza:
    1. size price
    2. + gluten-free surcharge when the crust name contains "gluten"
    3. cheese:
         Dairy Free                  -> + dairy-free rate for the size tier
         default cheese at "extra"   -> + extra cheese rate for the size tier
         anything else               -> $0 (No Cheese never costs anything)
    4. sauce: + sauce price when it isn't one of the item's default sauces,
       and + sauce price again when the quantity is "extra"
    5. + extra topping rate for each default topping at "extra"
       (removing or reducing a default topping never changes the price)
    6. + the stored price of each extra topping
    7. + manual extra amount (POS)

Pizzas are not multiplied by quantity; each customization is its own line.
"""

import logging
from dataclasses import dataclass
from typing import Iterable

from pydantic import BaseModel, ConfigDict, Field

from ..config import GLUTEN_FREE_SURCHARGE
from .catalog import Crust, Sauce, Size, Topping
from .models import (
    DAIRY_FREE_CHEESE,
    CheeseQuantity,
    CheeseSide,
    SauceQuantity,
    SelectedTopping,
    ToppingQuantity,
)
from .sizes import SizeTier

logger = logging.getLogger(__name__)


def round_money(amount: float) -> float:
    """Round to 2 decimal places for currency."""
    return round(amount, 2)


class PricingPolicy(BaseModel):
    """
    Business constants for pizza pricing.

    The defaults are the store's current rates. Swap in a different policy
    to re-price without touching the algorithm.
    """
    model_config = ConfigDict(frozen=True)

    gluten_free_surcharge: float = GLUTEN_FREE_SURCHARGE
    extra_topping_rates: dict[SizeTier, float] = Field(default_factory=lambda: {
        SizeTier.SMALL: 2.0,
        SizeTier.MEDIUM: 2.5,
        SizeTier.GLUTEN_FREE: 2.5,
        SizeTier.LARGE: 3.0,
    })
    extra_cheese_rates: dict[SizeTier, float] = Field(default_factory=lambda: {
        SizeTier.SMALL: 2.0,
        SizeTier.MEDIUM: 2.5,
        SizeTier.GLUTEN_FREE: 2.5,
        SizeTier.LARGE: 3.0,
    })
    dairy_free_rates: dict[SizeTier, float] = Field(default_factory=lambda: {
        SizeTier.SMALL: 2.0,
        SizeTier.MEDIUM: 3.0,
        SizeTier.GLUTEN_FREE: 3.0,
        SizeTier.LARGE: 3.0,
    })
    extra_quantity_multiplier: float = 1.5

    def extra_topping_rate(self, tier: SizeTier) -> float:
        return self.extra_topping_rates[tier]

    def extra_cheese_rate(self, tier: SizeTier) -> float:
        return self.extra_cheese_rates[tier]

    def dairy_free_rate(self, tier: SizeTier) -> float:
        return self.dairy_free_rates[tier]

    def topping_base_price(self, topping: Topping, tier: SizeTier) -> float:
        """
        Price of one extra topping at regular quantity.

        Uses the topping's own per-size price when the catalog has one, then
        its generic price, then the size-tier extra topping rate.
        Gluten-free pizzas are priced as Medium.
        """
        if tier == SizeTier.SMALL:
            specific = topping.price_small
        elif tier in (SizeTier.MEDIUM, SizeTier.GLUTEN_FREE):
            specific = topping.price_medium
        else:
            specific = topping.price_large

        if specific is not None:
            return specific
        if topping.price is not None:
            return topping.price
        return self.extra_topping_rate(tier)

    def extra_topping_price(self, base_price: float, quantity: ToppingQuantity) -> float:
        """Charge for an extra (non-default) topping at a given quantity."""
        if quantity == ToppingQuantity.EXTRA:
            return base_price * self.extra_quantity_multiplier
        return base_price

    def default_topping_price(self, tier: SizeTier, quantity: ToppingQuantity) -> float:
        """Charge for a default topping: free unless upgraded to extra."""
        if quantity == ToppingQuantity.EXTRA:
            return self.extra_topping_rate(tier)
        return 0.0


@dataclass
class PriceBreakdown:
    """Per-component price of one pizza."""

    size: float = 0.0
    crust: float = 0.0
    cheese: float = 0.0
    sauce: float = 0.0
    default_toppings: float = 0.0
    extra_toppings: float = 0.0
    extra_amount: float = 0.0

    @property
    def total(self) -> float:
        return round_money(
            self.size
            + self.crust
            + self.cheese
            + self.sauce
            + self.default_toppings
            + self.extra_toppings
            + self.extra_amount
        )


class PricingEngine:
    """
    Computes pizza prices under a pricing policy.

    Stateless apart from the policy; safe to share between engines.
    """

    def __init__(self, policy: PricingPolicy | None = None, default_cheese_name: str = "Mozzarella"):
        self.policy = policy or PricingPolicy()
        self.default_cheese_name = default_cheese_name

    def is_default_cheese(self, cheese_name: str | None) -> bool:
        return bool(cheese_name) and cheese_name.lower() == self.default_cheese_name.lower()

    @staticmethod
    def is_dairy_free(cheese_name: str | None) -> bool:
        return bool(cheese_name) and cheese_name.lower().replace("-", " ") == DAIRY_FREE_CHEESE.lower()

    def crust_charge(self, crust: Crust | None) -> float:
        if crust is not None and crust.is_gluten_free:
            return self.policy.gluten_free_surcharge
        return 0.0

    def cheese_charge(self, tier: SizeTier, cheese_name: str | None, cheese_sides: Iterable[CheeseSide]) -> float:
        if self.is_dairy_free(cheese_name):
            return self.policy.dairy_free_rate(tier)
        if self.is_default_cheese(cheese_name):
            extra_sides = sum(1 for cs in cheese_sides if cs.quantity == CheeseQuantity.EXTRA)
            return extra_sides * self.policy.extra_cheese_rate(tier)
        return 0.0

    @staticmethod
    def sauce_charge(sauce: Sauce | None, quantity: SauceQuantity, default_sauce_ids: Iterable[str]) -> float:
        if sauce is None:
            return 0.0
        charge = 0.0
        if sauce.id not in set(default_sauce_ids):
            charge += sauce.price
        if quantity == SauceQuantity.EXTRA:
            charge += sauce.price
        return charge

    def default_toppings_charge(self, tier: SizeTier, toppings: Iterable[SelectedTopping]) -> float:
        return sum(self.policy.default_topping_price(tier, t.quantity) for t in toppings)

    @staticmethod
    def extra_toppings_charge(toppings: Iterable[SelectedTopping]) -> float:
        return sum(t.price for t in toppings)

    def price_breakdown(
        self,
        size: Size | None,
        crust: Crust | None = None,
        cheese_name: str | None = None,
        cheese_sides: Iterable[CheeseSide] = (),
        sauce: Sauce | None = None,
        sauce_quantity: SauceQuantity = SauceQuantity.REGULAR,
        default_sauce_ids: Iterable[str] = (),
        default_toppings: Iterable[SelectedTopping] = (),
        extra_toppings: Iterable[SelectedTopping] = (),
        extra_amount: float = 0.0,
    ) -> PriceBreakdown:
        """
        Price one pizza, component by component.

        Args:
            size: Selected size (None prices as $0 base at Large rates)
            crust: Selected crust
            cheese_name: Selected cheese name, or "No Cheese"
            cheese_sides: Cheese quantity per side
            sauce: Selected sauce, None for "No Sauce"
            sauce_quantity: Regular or extra
            default_sauce_ids: The menu item's default sauces
            default_toppings: The item's default toppings with their current quantities
            extra_toppings: Toppings added beyond the defaults, with stored prices
            extra_amount: Manual up-charge entered on the POS

        Returns:
            PriceBreakdown whose ``total`` is the pizza's price
        """
        tier = size.tier if size is not None else SizeTier.LARGE
        breakdown = PriceBreakdown(
            size=size.price if size is not None else 0.0,
            crust=self.crust_charge(crust),
            cheese=self.cheese_charge(tier, cheese_name, cheese_sides),
            sauce=self.sauce_charge(sauce, sauce_quantity, default_sauce_ids),
            default_toppings=self.default_toppings_charge(tier, default_toppings),
            extra_toppings=self.extra_toppings_charge(extra_toppings),
            extra_amount=extra_amount if extra_amount and extra_amount > 0 else 0.0,
        )
        logger.debug("Pizza price breakdown: %s (total $%.2f)", breakdown, breakdown.total)
        return breakdown

    def price_pizza(self, size: Size | None, **selections) -> float:
        """Total price of one pizza. Keyword arguments as for ``price_breakdown``."""
        return self.price_breakdown(size, **selections).total
