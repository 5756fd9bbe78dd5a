"""
Wings customization.

Wings only carry a flavor. The line is priced at the item's base price and
stores the chosen flavor's display name.
"""

import logging
import uuid

from pydantic import BaseModel, ConfigDict

from ..errors import UnknownOptionError
from .catalog import MenuItem
from .models import CartLineItem, WingsCustomization

logger = logging.getLogger(__name__)


class WingsFlavor(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str
    name: str


FLAVOR_OPTIONS = (
    WingsFlavor(id="hot", name="Hot"),
    WingsFlavor(id="honey-garlic", name="Honey Garlic"),
    WingsFlavor(id="bbq", name="BBQ"),
    WingsFlavor(id="salt-pepper", name="Salt & Pepper"),
    WingsFlavor(id="plain", name="Plain"),
)

DEFAULT_FLAVOR_ID = "plain"


def find_flavor(flavor: str) -> WingsFlavor | None:
    """Look a flavor up by id or display name (case-insensitive)."""
    key = flavor.strip().lower()
    for option in FLAVOR_OPTIONS:
        if key in (option.id, option.name.lower()):
            return option
    return None


def default_flavor() -> WingsFlavor:
    return find_flavor(DEFAULT_FLAVOR_ID)


def flavor_for_edit(line: CartLineItem) -> WingsFlavor:
    """Flavor to preselect when an existing wings line is reopened."""
    if line.wings_customization is not None:
        existing = find_flavor(line.wings_customization.flavor)
        if existing is not None:
            return existing
    return default_flavor()


def build_wings_line(item: MenuItem, flavor: str | None = None, line_id: str | None = None) -> CartLineItem:
    """
    Build a cart line for a wings item.

    Args:
        item: The wings menu item
        flavor: Flavor id or name; None selects the default flavor
        line_id: Id to reuse (edit flow); a new one is generated otherwise

    Raises:
        UnknownOptionError: If the flavor is not offered
    """
    option = default_flavor() if flavor is None else find_flavor(flavor)
    if option is None:
        raise UnknownOptionError("wings flavor", flavor)

    line = CartLineItem(
        id=line_id or f"{item.id}-{uuid.uuid4().hex[:8]}",
        name=item.name,
        category=item.category,
        unit_price=item.base_price,
        quantity=1,
        total_price=item.base_price,
        wings_customization=WingsCustomization(flavor=option.name, original_item_id=item.id),
    )
    logger.info("Built wings line %s (%s, %s)", line.id, item.name, option.name)
    return line
