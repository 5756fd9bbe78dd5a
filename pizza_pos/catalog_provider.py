"""
Catalog Provider - loads the pizza option catalog from the database.

The engine never queries the database itself. This module reads every
option table once and hands the engine an immutable ``Catalog`` with each
size's tier already resolved.

Usage:
    from pizza_pos.catalog_provider import CatalogProvider

    catalog = CatalogProvider().load_from_db(db, location_id="calgary")
    item = catalog.get_menu_item("1")
"""

import logging

from fastapi import Depends
from sqlalchemy.orm import Session, selectinload

from . import models
from .config import DEFAULT_LOCATION_ID
from .db import get_db
from .engine.catalog import (
    Catalog,
    Cheese,
    Combo,
    ComboItem,
    Crust,
    DefaultTopping,
    FreeTopping,
    MenuItem,
    Sauce,
    Size,
    SizeCrustAvailability,
    Topping,
)

logger = logging.getLogger(__name__)

# Database categories -> engine categories
_CATEGORY_MAP = {
    "pizza": "pizza",
    "chicken_wings": "wings",
    "wings": "wings",
}


class CatalogProvider:
    """Builds ``Catalog`` snapshots from the option tables."""

    def __init__(self, location_id: str | None = None):
        self.location_id = location_id or DEFAULT_LOCATION_ID

    def load_from_db(self, db: Session, location_id: str | None = None) -> Catalog:
        """
        Load the full catalog.

        Args:
            db: SQLAlchemy database session
            location_id: Store whose note shortcuts to load (defaults to the provider's)

        Returns:
            An immutable Catalog
        """
        location_id = location_id or self.location_id

        toppings = [self._topping(t) for t in db.query(models.Topping).order_by(models.Topping.sort_order).all()]
        toppings_by_id = {t.id: t for t in toppings}

        catalog = Catalog(
            menu_items=tuple(self._menu_item(i, toppings_by_id) for i in self._menu_items(db)),
            crusts=tuple(
                Crust(
                    id=str(c.id),
                    name=c.name,
                    price=c.price or 0.0,
                    is_available=c.is_available,
                    sort_order=c.sort_order,
                )
                for c in db.query(models.CrustOption).order_by(models.CrustOption.sort_order).all()
            ),
            size_crust_availability=tuple(
                SizeCrustAvailability(size_name=sca.size_name, crust_id=str(sca.crust_id))
                for sca in db.query(models.SizeCrustAvailability).all()
            ),
            toppings=tuple(toppings),
            sauces=tuple(
                Sauce(
                    id=str(s.id),
                    name=s.name,
                    price=s.price or 0.0,
                    is_available=s.is_available,
                    sort_order=s.sort_order,
                )
                for s in db.query(models.SauceOption).order_by(models.SauceOption.sort_order).all()
            ),
            cheeses=tuple(
                Cheese(
                    id=str(c.id),
                    name=c.name,
                    is_default=c.is_default,
                    is_available=c.is_available,
                    sort_order=c.sort_order,
                )
                for c in db.query(models.CheeseOption).order_by(models.CheeseOption.sort_order).all()
            ),
            free_toppings=tuple(
                FreeTopping(id=str(f.id), name=f.name, is_available=f.is_available, sort_order=f.sort_order)
                for f in db.query(models.FreeTopping).order_by(models.FreeTopping.sort_order).all()
            ),
            combos=tuple(self._combo(c) for c in self._combos(db)),
            note_shortcuts=self.load_note_shortcuts(db, location_id),
        )

        logger.info(
            "Catalog loaded: %d menu_items, %d crusts, %d toppings, %d sauces, "
            "%d cheeses, %d free_toppings, %d combos, %d note_shortcuts",
            len(catalog.menu_items),
            len(catalog.crusts),
            len(catalog.toppings),
            len(catalog.sauces),
            len(catalog.cheeses),
            len(catalog.free_toppings),
            len(catalog.combos),
            len(catalog.note_shortcuts),
        )
        return catalog

    def load_note_shortcuts(self, db: Session, location_id: str | None = None) -> dict[str, str]:
        location_id = location_id or self.location_id
        rows = (
            db.query(models.NoteShortcut)
            .filter(models.NoteShortcut.location_id == location_id)
            .all()
        )
        return {row.shortcut_key: row.replacement_text for row in rows}

    @staticmethod
    def _menu_items(db: Session) -> list[models.MenuItem]:
        return (
            db.query(models.MenuItem)
            .options(
                selectinload(models.MenuItem.sizes),
                selectinload(models.MenuItem.default_toppings),
                selectinload(models.MenuItem.default_sauces),
            )
            .filter(models.MenuItem.is_available.is_(True))
            .order_by(models.MenuItem.sort_order, models.MenuItem.id)
            .all()
        )

    @staticmethod
    def _combos(db: Session) -> list[models.Combo]:
        return (
            db.query(models.Combo)
            .options(selectinload(models.Combo.items))
            .order_by(models.Combo.sort_order, models.Combo.id)
            .all()
        )

    @staticmethod
    def _combo(row: models.Combo) -> Combo:
        return Combo(
            id=str(row.id),
            name=row.name,
            description=row.description or "",
            price=row.price,
            is_active=row.is_active,
            sort_order=row.sort_order,
            schedule_type=row.schedule_type,
            schedule_days=tuple(row.schedule_days) if row.schedule_days is not None else None,
            schedule_dates=tuple(row.schedule_dates) if row.schedule_dates is not None else None,
            items=tuple(
                ComboItem(
                    id=str(item.id),
                    item_type=item.item_type,
                    quantity=item.quantity,
                    size_restriction=item.size_restriction,
                    is_required=item.is_required,
                    is_chargeable=item.is_chargeable,
                    sort_order=item.sort_order,
                )
                for item in row.items
            ),
        )

    @staticmethod
    def _topping(row: models.Topping) -> Topping:
        return Topping(
            id=str(row.id),
            name=row.name,
            is_veg=row.is_veg,
            price=row.price,
            price_small=row.price_small,
            price_medium=row.price_medium,
            price_large=row.price_large,
            is_available=row.is_available,
            sort_order=row.sort_order,
        )

    @staticmethod
    def _menu_item(row: models.MenuItem, toppings: dict[str, Topping]) -> MenuItem:
        default_toppings = []
        for dt in row.default_toppings:
            topping = toppings.get(str(dt.topping_id))
            if topping is None:
                logger.warning("Menu item %s has unknown default topping %s", row.id, dt.topping_id)
                continue
            default_toppings.append(DefaultTopping(
                topping_id=topping.id,
                name=topping.name,
                is_veg=topping.is_veg,
                is_removable=dt.is_removable,
            ))

        return MenuItem(
            id=str(row.id),
            name=row.name,
            category=_CATEGORY_MAP.get(row.category, "other"),
            menu_category=row.category,
            base_price=row.base_price,
            description=row.description or "",
            sizes=tuple(Size(id=str(s.id), name=s.name, price=s.price) for s in row.sizes),
            default_toppings=tuple(default_toppings),
            default_sauce_ids=tuple(str(ds.sauce_option_id) for ds in row.default_sauces),
        )


def get_catalog(db: Session = Depends(get_db)) -> Catalog:
    """FastAPI dependency that loads the catalog for the default location."""
    return CatalogProvider().load_from_db(db)
