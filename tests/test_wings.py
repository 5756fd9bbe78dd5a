"""
Tests for wings flavor selection.
"""

import pytest

from pizza_pos.engine.models import CartLineItem, WingsCustomization
from pizza_pos.engine.wings import (
    FLAVOR_OPTIONS,
    build_wings_line,
    default_flavor,
    find_flavor,
    flavor_for_edit,
)
from pizza_pos.errors import UnknownOptionError


@pytest.fixture
def wings(catalog):
    return catalog.get_menu_item("wings")


class TestFlavors:

    def test_five_flavors(self):
        assert [f.name for f in FLAVOR_OPTIONS] == ["Hot", "Honey Garlic", "BBQ", "Salt & Pepper", "Plain"]

    def test_default_is_plain(self):
        assert default_flavor().name == "Plain"

    @pytest.mark.parametrize("text", ["honey-garlic", "Honey Garlic", "  honey garlic "])
    def test_find_by_id_or_name(self, text):
        assert find_flavor(text).id == "honey-garlic"

    def test_find_unknown(self):
        assert find_flavor("lemon pepper") is None


class TestBuildWingsLine:

    def test_default_flavor_line(self, wings):
        line = build_wings_line(wings)
        assert line.name == "Chicken Wings"
        assert line.category == "wings"
        assert line.unit_price == line.total_price == 13.99
        assert line.quantity == 1
        assert line.wings_customization.flavor == "Plain"
        assert line.wings_customization.original_item_id == "wings"
        assert line.pizza_customization is None

    def test_flavor_stored_by_name(self, wings):
        assert build_wings_line(wings, "salt-pepper").wings_customization.flavor == "Salt & Pepper"

    def test_unknown_flavor_raises(self, wings):
        with pytest.raises(UnknownOptionError):
            build_wings_line(wings, "lemon pepper")

    def test_reuses_line_id(self, wings):
        assert build_wings_line(wings, "hot", line_id="wings-1").id == "wings-1"


class TestFlavorForEdit:

    def test_preselects_saved_flavor(self, wings):
        line = build_wings_line(wings, "BBQ")
        assert flavor_for_edit(line).id == "bbq"

    def test_falls_back_to_default(self):
        line = CartLineItem(
            id="w", name="Chicken Wings", category="wings", unit_price=13.99, total_price=13.99,
            wings_customization=WingsCustomization(flavor="Retired Flavor", original_item_id="wings"),
        )
        assert flavor_for_edit(line).name == "Plain"

    def test_line_without_customization(self):
        line = CartLineItem(id="w", name="Chicken Wings", category="wings", unit_price=13.99, total_price=13.99)
        assert flavor_for_edit(line).name == "Plain"
