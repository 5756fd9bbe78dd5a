from sqlalchemy import (
    Column,
    Integer,
    String,
    Float,
    Boolean,
    DateTime,
    ForeignKey,
    Text,
    Index,
    JSON,
    UniqueConstraint,
    func,
)
from sqlalchemy.orm import declarative_base, relationship

Base = declarative_base()


class MenuItem(Base):
    __tablename__ = "menu_items"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String, nullable=False)
    category = Column(String, nullable=False, index=True)  # 'pizza', 'chicken_wings', 'sides', 'drinks', ...
    description = Column(Text, nullable=True)
    base_price = Column(Float, nullable=False, default=0.0)
    is_available = Column(Boolean, nullable=False, default=True)
    sort_order = Column(Integer, nullable=False, default=0)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)

    sizes = relationship(
        "ItemSize",
        back_populates="menu_item",
        cascade="all, delete-orphan",
        order_by="ItemSize.sort_order",
    )
    default_toppings = relationship(
        "ItemDefaultTopping",
        back_populates="menu_item",
        cascade="all, delete-orphan",
        order_by="ItemDefaultTopping.id",
    )
    default_sauces = relationship(
        "ItemDefaultSauce",
        back_populates="menu_item",
        cascade="all, delete-orphan",
        order_by="ItemDefaultSauce.id",
    )


class ItemSize(Base):
    __tablename__ = "item_sizes"

    id = Column(Integer, primary_key=True, index=True)
    menu_item_id = Column(Integer, ForeignKey("menu_items.id", ondelete="CASCADE"), nullable=False, index=True)
    name = Column(String, nullable=False)  # e.g. 'Small 10"', 'Medium 12"', 'Large 14"'
    price = Column(Float, nullable=False)
    sort_order = Column(Integer, nullable=False, default=0)

    menu_item = relationship("MenuItem", back_populates="sizes")


class CrustOption(Base):
    __tablename__ = "crust_options"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String, unique=True, nullable=False)
    price = Column(Float, nullable=False, default=0.0)
    is_available = Column(Boolean, nullable=False, default=True)
    sort_order = Column(Integer, nullable=False, default=0)


class SizeCrustAvailability(Base):
    """Which crusts are offered for a size name (shared across menu items)."""
    __tablename__ = "size_crust_availability"

    id = Column(Integer, primary_key=True, index=True)
    size_name = Column(String, nullable=False, index=True)
    crust_id = Column(Integer, ForeignKey("crust_options.id", ondelete="CASCADE"), nullable=False)

    crust = relationship("CrustOption")

    __table_args__ = (
        UniqueConstraint("size_name", "crust_id", name="uq_size_crust"),
    )


class Topping(Base):
    __tablename__ = "toppings"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String, unique=True, nullable=False)
    is_veg = Column(Boolean, nullable=False, default=False)
    price = Column(Float, nullable=True)
    # Per-size prices override the generic price when set
    price_small = Column(Float, nullable=True)
    price_medium = Column(Float, nullable=True)
    price_large = Column(Float, nullable=True)
    is_available = Column(Boolean, nullable=False, default=True)  # False = 86'd
    sort_order = Column(Integer, nullable=False, default=0)


class ItemDefaultTopping(Base):
    __tablename__ = "item_default_toppings"

    id = Column(Integer, primary_key=True, index=True)
    menu_item_id = Column(Integer, ForeignKey("menu_items.id", ondelete="CASCADE"), nullable=False, index=True)
    topping_id = Column(Integer, ForeignKey("toppings.id", ondelete="CASCADE"), nullable=False)
    is_removable = Column(Boolean, nullable=False, default=True)

    menu_item = relationship("MenuItem", back_populates="default_toppings")
    topping = relationship("Topping")

    __table_args__ = (
        UniqueConstraint("menu_item_id", "topping_id", name="uq_item_default_topping"),
    )


class SauceOption(Base):
    __tablename__ = "sauce_options"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String, unique=True, nullable=False)
    price = Column(Float, nullable=False, default=0.0)
    is_available = Column(Boolean, nullable=False, default=True)
    sort_order = Column(Integer, nullable=False, default=0)


class ItemDefaultSauce(Base):
    __tablename__ = "item_default_sauces"

    id = Column(Integer, primary_key=True, index=True)
    menu_item_id = Column(Integer, ForeignKey("menu_items.id", ondelete="CASCADE"), nullable=False, index=True)
    sauce_option_id = Column(Integer, ForeignKey("sauce_options.id", ondelete="CASCADE"), nullable=False)

    menu_item = relationship("MenuItem", back_populates="default_sauces")


class CheeseOption(Base):
    __tablename__ = "cheese_options"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String, unique=True, nullable=False)
    is_default = Column(Boolean, nullable=False, default=False)
    is_available = Column(Boolean, nullable=False, default=True)
    sort_order = Column(Integer, nullable=False, default=0)


class FreeTopping(Base):
    __tablename__ = "free_toppings"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String, unique=True, nullable=False)
    is_available = Column(Boolean, nullable=False, default=True)
    sort_order = Column(Integer, nullable=False, default=0)


class NoteShortcut(Base):
    """POS note shortcut: typing the key alone in the note expands to the text."""
    __tablename__ = "note_shortcuts"

    id = Column(Integer, primary_key=True, index=True)
    location_id = Column(String, nullable=False, index=True)
    shortcut_key = Column(String, nullable=False)
    replacement_text = Column(Text, nullable=False)

    __table_args__ = (
        UniqueConstraint("location_id", "shortcut_key", name="uq_location_shortcut"),
        Index("ix_note_shortcuts_location_key", "location_id", "shortcut_key"),
    )


class Combo(Base):
    __tablename__ = "combos"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String, nullable=False)
    description = Column(Text, nullable=True)
    price = Column(Float, nullable=False)
    is_active = Column(Boolean, nullable=False, default=True)
    sort_order = Column(Integer, nullable=False, default=0)
    schedule_type = Column(String, nullable=True)  # 'always', 'days_of_week', 'dates_of_month'
    schedule_days = Column(JSON, nullable=True)  # [0-6], 0 = Sunday
    schedule_dates = Column(JSON, nullable=True)  # [1-31]

    items = relationship(
        "ComboItem",
        back_populates="combo",
        cascade="all, delete-orphan",
        order_by="ComboItem.sort_order",
    )


class ComboItem(Base):
    __tablename__ = "combo_items"

    id = Column(Integer, primary_key=True, index=True)
    combo_id = Column(Integer, ForeignKey("combos.id", ondelete="CASCADE"), nullable=False, index=True)
    item_type = Column(String, nullable=False)  # 'pizza', 'wings', 'drinks', 'dipping_sauce'
    quantity = Column(Integer, nullable=False, default=1)
    size_restriction = Column(String, nullable=True)
    is_required = Column(Boolean, nullable=False, default=True)
    is_chargeable = Column(Boolean, nullable=False, default=False)
    sort_order = Column(Integer, nullable=False, default=0)

    combo = relationship("Combo", back_populates="items")
