"""
Pizza Customization Engine.

Pure, synchronous logic shared by the customer modal and the POS:
- Selection state with named transitions (size, crust, cheese, sauce,
  toppings, free toppings, spicy level, note, manual amount)
- Price computation over a pluggable pricing policy
- Legal-move constraints (half-pizza options only on Large, gluten-free
  crust only on Medium, spicy button rules)
- The normalized PizzaCustomization record stored per order line
- Combo building: fixed combo price plus each selection's extra charge
"""

from .sizes import SizeTier, resolve_size_tier

from .models import (
    PizzaSide,
    ToppingQuantity,
    CheeseQuantity,
    SauceQuantity,
    SpicyLevel,
    SizeChoice,
    CrustChoice,
    CheeseSide,
    SideSpicyLevel,
    SelectedTopping,
    FreeToppingSelection,
    PizzaCustomization,
    WingsCustomization,
    ComboSelectionItem,
    ComboCustomization,
    CartLineItem,
)

from .catalog import (
    Catalog,
    MenuItem,
    Size,
    Crust,
    Topping,
    DefaultTopping,
    Sauce,
    Cheese,
    FreeTopping,
    SizeCrustAvailability,
    ComboItem,
    Combo,
)

from .pricing import (
    PricingPolicy,
    PricingEngine,
    PriceBreakdown,
    round_money,
)

from .spicy import (
    SpicySelector,
    SpicySelection,
    SpicyState,
    TRANSITIONS,
    transition,
    spicy_options,
)

from .customization import (
    Surface,
    EngineConfig,
    PizzaCustomizationEngine,
)

from .ticket import (
    format_pizza_details,
    format_line_item,
    changed_fields,
    is_default_customization,
)

from .wings import (
    FLAVOR_OPTIONS,
    WingsFlavor,
    build_wings_line,
)

from .combo import (
    ComboBuilder,
)

__all__ = [
    # Sizes
    "SizeTier",
    "resolve_size_tier",
    # Models
    "PizzaSide",
    "ToppingQuantity",
    "CheeseQuantity",
    "SauceQuantity",
    "SpicyLevel",
    "SizeChoice",
    "CrustChoice",
    "CheeseSide",
    "SideSpicyLevel",
    "SelectedTopping",
    "FreeToppingSelection",
    "PizzaCustomization",
    "WingsCustomization",
    "ComboSelectionItem",
    "ComboCustomization",
    "CartLineItem",
    # Catalog
    "Catalog",
    "MenuItem",
    "Size",
    "Crust",
    "Topping",
    "DefaultTopping",
    "Sauce",
    "Cheese",
    "FreeTopping",
    "SizeCrustAvailability",
    "ComboItem",
    "Combo",
    # Pricing
    "PricingPolicy",
    "PricingEngine",
    "PriceBreakdown",
    "round_money",
    # Spicy
    "SpicySelector",
    "SpicySelection",
    "SpicyState",
    "TRANSITIONS",
    "transition",
    "spicy_options",
    # Engine
    "Surface",
    "EngineConfig",
    "PizzaCustomizationEngine",
    # Ticket
    "format_pizza_details",
    "format_line_item",
    "changed_fields",
    "is_default_customization",
    # Wings
    "FLAVOR_OPTIONS",
    "WingsFlavor",
    "build_wings_line",
    # Combos
    "ComboBuilder",
]
