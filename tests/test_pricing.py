"""
Tests for pizza pricing: the pricing policy, the pricing engine, and prices
read through the customization engine.

Run with: pytest tests/test_pricing.py -v
"""

import pytest

from pizza_pos.engine.catalog import Crust, Sauce, Size, Topping
from pizza_pos.engine.models import CheeseQuantity, CheeseSide, SauceQuantity, ToppingQuantity
from pizza_pos.engine.pricing import PricingEngine, PricingPolicy
from pizza_pos.engine.sizes import SizeTier, resolve_size_tier


# =============================================================================
# Size Tier Tests
# =============================================================================

class TestSizeTier:
    """Size display names resolve to pricing tiers."""

    @pytest.mark.parametrize("name,tier", [
        ('Small 10"', SizeTier.SMALL),
        ('10"', SizeTier.SMALL),
        ('Medium 12"', SizeTier.MEDIUM),
        ('12"', SizeTier.MEDIUM),
        ('Large 14"', SizeTier.LARGE),
        ('Gluten Free 12"', SizeTier.GLUTEN_FREE),
        ("Party Size", SizeTier.LARGE),
        (None, SizeTier.LARGE),
    ])
    def test_resolve(self, name, tier):
        assert resolve_size_tier(name) == tier

    def test_catalog_size_resolves_once(self):
        assert Size(id="s", name='Medium 12"', price=12.0).tier == SizeTier.MEDIUM
        assert Size(id="s", name="Party Size", price=20.0, tier=SizeTier.SMALL).tier == SizeTier.SMALL


# =============================================================================
# PricingPolicy Tests
# =============================================================================

class TestPricingPolicy:
    """Tests for the rate tables."""

    def test_extra_topping_rates(self):
        policy = PricingPolicy()
        assert policy.extra_topping_rate(SizeTier.SMALL) == 2.0
        assert policy.extra_topping_rate(SizeTier.MEDIUM) == 2.5
        assert policy.extra_topping_rate(SizeTier.GLUTEN_FREE) == 2.5
        assert policy.extra_topping_rate(SizeTier.LARGE) == 3.0

    def test_extra_topping_rate_monotonicity(self):
        policy = PricingPolicy()
        small = policy.extra_topping_rate(SizeTier.SMALL)
        medium = policy.extra_topping_rate(SizeTier.MEDIUM)
        large = policy.extra_topping_rate(SizeTier.LARGE)
        assert small < medium <= large

    def test_dairy_free_rates(self):
        policy = PricingPolicy()
        assert policy.dairy_free_rate(SizeTier.SMALL) == 2.0
        assert policy.dairy_free_rate(SizeTier.MEDIUM) == 3.0
        assert policy.dairy_free_rate(SizeTier.LARGE) == 3.0

    @pytest.mark.parametrize("base_price", [2.0, 2.5, 3.0, 3.5, 4.0, 1.25])
    def test_extra_quantity_is_one_and_a_half_times_regular(self, base_price):
        policy = PricingPolicy()
        regular = policy.extra_topping_price(base_price, ToppingQuantity.REGULAR)
        extra = policy.extra_topping_price(base_price, ToppingQuantity.EXTRA)
        assert extra == 1.5 * regular

    def test_less_quantity_costs_the_regular_price(self):
        policy = PricingPolicy()
        assert policy.extra_topping_price(2.5, ToppingQuantity.LESS) == 2.5

    def test_topping_base_price_prefers_per_size_price(self):
        policy = PricingPolicy()
        chicken = Topping(id="c", name="Chicken", price=5.0, price_small=3.0, price_medium=3.5, price_large=4.0)
        assert policy.topping_base_price(chicken, SizeTier.SMALL) == 3.0
        assert policy.topping_base_price(chicken, SizeTier.MEDIUM) == 3.5
        assert policy.topping_base_price(chicken, SizeTier.GLUTEN_FREE) == 3.5
        assert policy.topping_base_price(chicken, SizeTier.LARGE) == 4.0

    def test_topping_base_price_falls_back_to_generic_then_rate(self):
        policy = PricingPolicy()
        generic = Topping(id="g", name="Feta", price=1.75)
        plain = Topping(id="p", name="Pepperoni")
        assert policy.topping_base_price(generic, SizeTier.LARGE) == 1.75
        assert policy.topping_base_price(plain, SizeTier.LARGE) == 3.0
        assert policy.topping_base_price(plain, SizeTier.SMALL) == 2.0

    def test_default_topping_free_unless_extra(self):
        policy = PricingPolicy()
        for quantity in (ToppingQuantity.NONE, ToppingQuantity.LESS, ToppingQuantity.REGULAR):
            assert policy.default_topping_price(SizeTier.LARGE, quantity) == 0.0
        assert policy.default_topping_price(SizeTier.LARGE, ToppingQuantity.EXTRA) == 3.0

    def test_custom_policy(self):
        policy = PricingPolicy(gluten_free_surcharge=3.0, extra_quantity_multiplier=2.0)
        engine = PricingEngine(policy)
        assert engine.crust_charge(Crust(id="gf", name="Gluten Free")) == 3.0
        assert policy.extra_topping_price(2.0, ToppingQuantity.EXTRA) == 4.0


# =============================================================================
# PricingEngine Tests
# =============================================================================

MEDIUM = Size(id="m", name='Medium 12"', price=12.0)
SMALL = Size(id="s", name='Small 10"', price=10.0)
LARGE = Size(id="l", name='Large 14"', price=16.0)


class TestPricingEngine:
    """Tests for the component charges."""

    def test_size_only(self):
        assert PricingEngine().price_pizza(MEDIUM) == 12.0

    def test_no_size_prices_zero(self):
        assert PricingEngine().price_pizza(None) == 0.0

    def test_gluten_free_surcharge(self):
        engine = PricingEngine()
        assert engine.crust_charge(Crust(id="gf", name="Gluten-Free Crust")) == 2.5
        assert engine.crust_charge(Crust(id="r", name="Regular", price=1.0)) == 0.0
        assert engine.crust_charge(None) == 0.0

    @pytest.mark.parametrize("size", [SMALL, MEDIUM, LARGE])
    def test_default_cheese_is_free(self, size):
        engine = PricingEngine()
        price = engine.price_pizza(size, cheese_name="Mozzarella", cheese_sides=[CheeseSide()])
        assert price == size.price

    @pytest.mark.parametrize("size,rate", [(SMALL, 2.0), (MEDIUM, 2.5), (LARGE, 3.0)])
    def test_extra_default_cheese(self, size, rate):
        engine = PricingEngine()
        sides = [CheeseSide(quantity=CheeseQuantity.EXTRA)]
        assert engine.cheese_charge(size.tier, "Mozzarella", sides) == rate

    def test_extra_cheese_charged_per_side(self):
        engine = PricingEngine()
        sides = [
            CheeseSide(side="left", quantity=CheeseQuantity.EXTRA),
            CheeseSide(side="right", quantity=CheeseQuantity.REGULAR),
        ]
        assert engine.cheese_charge(SizeTier.LARGE, "Mozzarella", sides) == 3.0

    def test_less_cheese_is_free(self):
        engine = PricingEngine()
        sides = [CheeseSide(quantity=CheeseQuantity.LESS)]
        assert engine.cheese_charge(SizeTier.LARGE, "Mozzarella", sides) == 0.0

    def test_dairy_free_cheese(self):
        engine = PricingEngine()
        assert engine.cheese_charge(SizeTier.SMALL, "Dairy Free", [CheeseSide()]) == 2.0
        assert engine.cheese_charge(SizeTier.MEDIUM, "Dairy-Free", [CheeseSide()]) == 3.0

    def test_no_cheese_never_costs(self):
        engine = PricingEngine()
        sides = [CheeseSide(quantity=CheeseQuantity.EXTRA)]
        assert engine.cheese_charge(SizeTier.LARGE, "No Cheese", sides) == 0.0

    def test_default_sauce_at_regular_is_free(self):
        sauce = Sauce(id="bbq", name="BBQ", price=1.5)
        assert PricingEngine.sauce_charge(sauce, SauceQuantity.REGULAR, ["bbq"]) == 0.0

    def test_default_sauce_at_extra_costs_once(self):
        sauce = Sauce(id="bbq", name="BBQ", price=1.5)
        assert PricingEngine.sauce_charge(sauce, SauceQuantity.EXTRA, ["bbq"]) == 1.5

    def test_non_default_sauce_at_extra_costs_double(self):
        garlic = Sauce(id="garlic", name="Garlic", price=1.5)
        assert PricingEngine.sauce_charge(garlic, SauceQuantity.EXTRA, ["pizza-sauce"]) == 3.0

    def test_extra_amount_added(self):
        assert PricingEngine().price_pizza(MEDIUM, extra_amount=2.25) == 14.25

    def test_negative_extra_amount_ignored(self):
        assert PricingEngine().price_pizza(MEDIUM, extra_amount=-5.0) == 12.0

    def test_breakdown_total_rounds_to_cents(self):
        breakdown = PricingEngine().price_breakdown(MEDIUM, extra_amount=0.1 + 0.2)
        assert breakdown.total == 12.3


# =============================================================================
# Prices through the customization engine
# =============================================================================

class TestEnginePricing:
    """Prices read from a PizzaCustomizationEngine."""

    def test_customer_default_pizza_price(self, customer_engine):
        assert customer_engine.price() == 12.0
        assert customer_engine.total_price == 12.0

    def test_medium_example_scenario(self, customer_engine):
        """Extra cheese, onion removed, pepperoni added, whole hot: 17.00."""
        assert customer_engine.set_cheese_quantity("extra")
        assert customer_engine.toggle_default_topping("onion")
        assert customer_engine.toggle_extra_topping("pepperoni")
        assert customer_engine.set_spicy_selection("hot", "whole")

        breakdown = customer_engine.price_breakdown()
        assert breakdown.size == 12.0
        assert breakdown.crust == 0.0
        assert breakdown.cheese == 2.5
        assert breakdown.sauce == 0.0
        assert breakdown.default_toppings == 0.0
        assert breakdown.extra_toppings == 2.5
        assert customer_engine.price() == 17.0

    def test_gluten_free_filtered_out_for_large(self, customer_engine):
        customer_engine.select_size("veggie-lg")
        names = [c.name for c in customer_engine.available_crusts()]
        assert "Gluten Free" not in names
        assert customer_engine.select_crust("gf") is False
        assert customer_engine.selected_crust.name == "Regular"
        assert customer_engine.price() == 16.0

    def test_gluten_free_on_medium_adds_surcharge(self, customer_engine):
        assert customer_engine.is_gluten_free_allowed
        assert customer_engine.select_crust("gf")
        assert customer_engine.selected_crust.price == 2.5
        assert customer_engine.price() == 14.5

    def test_leaving_medium_drops_gluten_free_crust(self, customer_engine):
        customer_engine.select_crust("gf")
        customer_engine.select_size("veggie-sm")
        assert customer_engine.selected_crust.name == "Regular"
        assert customer_engine.price() == 10.0

    def test_garlic_sauce_at_extra(self, customer_engine):
        assert customer_engine.select_sauce("garlic")
        assert customer_engine.set_sauce_quantity("extra")
        assert customer_engine.price_breakdown().sauce == 3.0
        assert customer_engine.price() == 15.0

    def test_default_sauce_contributes_nothing(self, catalog):
        from pizza_pos.engine.customization import EngineConfig, PizzaCustomizationEngine

        for item in catalog.menu_items:
            if item.category != "pizza":
                continue
            engine = PizzaCustomizationEngine(item, catalog, EngineConfig.customer())
            assert engine.is_default_sauce
            assert engine.price_breakdown().sauce == 0.0

    def test_extra_topping_at_extra_quantity(self, customer_engine):
        customer_engine.toggle_extra_topping("pepperoni")
        regular_price = customer_engine.price()
        assert customer_engine.set_extra_topping("pepperoni", "extra")
        assert customer_engine.extra_toppings[0].price == 3.75
        assert customer_engine.price() == regular_price + 1.25

    def test_extra_toppings_repriced_on_size_change(self, customer_engine):
        customer_engine.toggle_extra_topping("chicken")
        customer_engine.toggle_extra_topping("bacon")
        customer_engine.set_extra_topping("bacon", "extra")
        assert [t.price for t in customer_engine.extra_toppings] == [2.5, 3.75]

        customer_engine.select_size("veggie-lg")
        assert [t.price for t in customer_engine.extra_toppings] == [3.0, 4.5]

    def test_customer_charges_tier_rate_over_catalog_price(self, customer_engine):
        """Chicken has its own catalog prices; the customer modal ignores them."""
        assert customer_engine.toggle_extra_topping("chicken")
        assert customer_engine.extra_toppings[0].price == 2.5
        assert customer_engine.price() == 12.0 + 2.5

        assert customer_engine.set_extra_topping("chicken", "extra")
        assert customer_engine.price() == 12.0 + 3.75

    def test_pos_charges_catalog_topping_price(self, pos_engine):
        pos_engine.select_size("veggie-md")
        pos_engine.toggle_extra_topping("chicken")
        pos_engine.toggle_extra_topping("bacon")
        assert [t.price for t in pos_engine.extra_toppings] == [3.5, 2.5]

        pos_engine.select_size("veggie-lg")
        assert [t.price for t in pos_engine.extra_toppings] == [4.0, 3.0]

    def test_extra_default_topping_charged_at_rate(self, customer_engine):
        assert customer_engine.set_default_topping("mushroom", "extra")
        assert customer_engine.price_breakdown().default_toppings == 2.5
        customer_engine.select_size("veggie-sm")
        assert customer_engine.price_breakdown().default_toppings == 2.0

    def test_reducing_default_topping_never_changes_price(self, customer_engine):
        before = customer_engine.price()
        customer_engine.set_default_topping("mushroom", "less")
        customer_engine.toggle_default_topping("onion")
        assert customer_engine.price() == before

    def test_dairy_free_cheese(self, customer_engine):
        assert customer_engine.select_cheese("Dairy Free")
        assert customer_engine.price() == 15.0

    def test_manual_extra_amount(self, pos_engine):
        pos_engine.select_size("veggie-md")
        pos_engine.set_extra_amount("$2.00")
        assert pos_engine.price() == 14.0


class TestMonotonicPricing:
    """Adding things never makes a pizza cheaper."""

    @pytest.mark.parametrize("size_id", ["veggie-sm", "veggie-md", "veggie-lg"])
    def test_adding_any_extra_topping(self, customer_engine, size_id):
        customer_engine.select_size(size_id)
        for topping in customer_engine.available_extra_toppings():
            before = customer_engine.price()
            customer_engine.toggle_extra_topping(topping.id)
            assert customer_engine.price() > before

    @pytest.mark.parametrize("size_id", ["veggie-sm", "veggie-md", "veggie-lg"])
    def test_upgrading_cheese_and_sauce(self, customer_engine, size_id):
        customer_engine.select_size(size_id)
        before = customer_engine.price()
        customer_engine.set_cheese_quantity("extra")
        after_cheese = customer_engine.price()
        assert after_cheese >= before
        customer_engine.set_sauce_quantity("extra")
        assert customer_engine.price() >= after_cheese

    def test_upgrading_extra_topping_quantity(self, customer_engine):
        customer_engine.toggle_extra_topping("olives")
        before = customer_engine.price()
        customer_engine.set_extra_topping("olives", "extra")
        assert customer_engine.price() >= before
