"""
Services Package for Pizza POS
==============================

Business logic that sits outside the customization engine but doesn't
belong in a route handler.

Available Services:
-------------------
- **cart**: Cart of order lines (merging plain items, editing pizza lines)
- **tax_utils**: Sales tax and order total calculation
"""
