"""
Configuration Module for Pizza POS
==================================

This module centralizes the configuration settings, environment variables, and
constants used throughout the Pizza POS application. Values are parsed and
typed at module load time so that configuration errors surface early.

Configuration Categories:
-------------------------
- **Database**: Connection URL for the catalog database (menu items, sizes,
  crusts, toppings, sauces, cheeses, free toppings, note shortcuts).

- **Store Configuration**: The default POS location. Note shortcuts are stored
  per location, so the POS needs to know which location it is running in.

- **Pricing Defaults**: The default cheese name and gluten-free surcharge fed
  into the pricing policy. Rate tables themselves live in
  ``pizza_pos.engine.pricing.PricingPolicy``.

- **Order Totals**: Tax rate and delivery fee used by the cart service.

- **CORS Settings**: Cross-Origin Resource Sharing configuration for the
  customer site and the POS tablets.

Environment Variables:
----------------------
- DATABASE_URL: SQLAlchemy database URL (default: "sqlite:///./pizza_pos.db")
- DEFAULT_LOCATION_ID: POS location for note shortcuts (default: "calgary")
- DEFAULT_CHEESE_NAME: Cheese that is free at regular quantity (default: "Mozzarella")
- GLUTEN_FREE_SURCHARGE: Added for gluten-free crusts (default: 2.50)
- TAX_RATE: Sales tax rate applied to the subtotal (default: 0.05)
- DELIVERY_FEE: Flat delivery fee (default: 4.99)
- CORS_ORIGINS: Comma-separated allowed origins (default: "*")

Usage:
------
    from pizza_pos.config import (
        DATABASE_URL,
        DEFAULT_CHEESE_NAME,
        TAX_RATE,
    )
"""

import os
from typing import List


# =============================================================================
# Database Configuration
# =============================================================================

DATABASE_URL: str = os.getenv("DATABASE_URL", "sqlite:///./pizza_pos.db")


# =============================================================================
# Store Configuration
# =============================================================================
# Each POS tablet is bound to one location. Note shortcuts ("xc" -> "extra
# crispy") are configured per location.

DEFAULT_LOCATION_ID: str = os.getenv("DEFAULT_LOCATION_ID", "calgary")


# =============================================================================
# Pricing Defaults
# =============================================================================

# The cheese that comes on every pizza at no charge
DEFAULT_CHEESE_NAME: str = os.getenv("DEFAULT_CHEESE_NAME", "Mozzarella")

# Flat surcharge for any crust whose name contains "gluten"
GLUTEN_FREE_SURCHARGE: float = float(os.getenv("GLUTEN_FREE_SURCHARGE", "2.50"))


# =============================================================================
# Order Totals
# =============================================================================

TAX_RATE: float = float(os.getenv("TAX_RATE", "0.05"))
DELIVERY_FEE: float = float(os.getenv("DELIVERY_FEE", "4.99"))


# =============================================================================
# CORS Configuration
# =============================================================================
# Format: comma-separated list of origins, e.g., "https://pizza.example,https://pos.pizza.example"
# Default "*" allows all origins (suitable for development only)

_cors_origins_env = os.getenv("CORS_ORIGINS", "")
CORS_ORIGINS: List[str] = [
    origin.strip()
    for origin in _cors_origins_env.split(",")
    if origin.strip()
] or ["*"]
