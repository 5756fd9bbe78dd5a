"""
Exceptions raised by the pizza POS package.

The customization engine itself refuses illegal moves instead of raising
(transitions return False). These exceptions cover the boundaries: looking up
ids that are not in the catalog, asking for a cart line before the guard
condition is met, and loading a persisted record that cannot be rebuilt.
"""


class PizzaPosError(Exception):
    """Base class for pizza POS errors."""


class UnknownOptionError(PizzaPosError, KeyError):
    """A menu item, size, crust, sauce, cheese or topping id is not in the catalog."""

    def __init__(self, kind: str, option_id: str):
        self.kind = kind
        self.option_id = option_id
        super().__init__(f"Unknown {kind}: {option_id!r}")

    def __str__(self) -> str:
        return f"Unknown {self.kind}: {self.option_id!r}"


class SelectionIncompleteError(PizzaPosError):
    """A cart line was requested before size and crust were both selected."""


class InvalidCustomizationError(PizzaPosError, ValueError):
    """A persisted customization cannot be loaded into an engine for its menu item."""
