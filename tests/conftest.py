import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

import pizza_pos.db as db
from pizza_pos.app_factory import create_app
from pizza_pos.engine.catalog import Catalog
from pizza_pos.engine.customization import EngineConfig, PizzaCustomizationEngine
from pizza_pos.models import Base
from pizza_pos.seed_menu import seed_menu

SMALL = 'Small 10"'
MEDIUM = 'Medium 12"'
LARGE = 'Large 14"'

CATALOG_DATA = {
    "menu_items": [
        {
            "id": "veggie",
            "name": "Garden Veggie",
            "category": "pizza",
            "base_price": 10.0,
            "sizes": [
                {"id": "veggie-sm", "name": SMALL, "price": 10.0},
                {"id": "veggie-md", "name": MEDIUM, "price": 12.0},
                {"id": "veggie-lg", "name": LARGE, "price": 16.0},
            ],
            "default_toppings": [
                {"topping_id": "onion", "name": "Onion", "is_veg": True},
                {"topping_id": "mushroom", "name": "Mushroom", "is_veg": True},
                {"topping_id": "peppers", "name": "Green Peppers", "is_veg": True},
            ],
            "default_sauce_ids": ["pizza-sauce"],
        },
        {
            "id": "pepperoni-feast",
            "name": "Pepperoni Feast",
            "category": "pizza",
            "base_price": 11.0,
            "sizes": [
                {"id": "pf-sm", "name": SMALL, "price": 11.0},
                {"id": "pf-md", "name": MEDIUM, "price": 13.0},
                {"id": "pf-lg", "name": LARGE, "price": 17.0},
            ],
            "default_toppings": [
                {"topping_id": "pepperoni", "name": "Pepperoni", "is_removable": False},
            ],
            "default_sauce_ids": ["pizza-sauce"],
        },
        {"id": "wings", "name": "Chicken Wings", "category": "wings", "base_price": 13.99},
        {"id": "cola", "name": "Cola", "category": "other", "menu_category": "drinks", "base_price": 2.5},
        {"id": "pop-2l", "name": "Pop 2L", "category": "other", "menu_category": "drinks", "base_price": 3.99},
        {"id": "garlic-dip", "name": "Garlic Dip", "category": "other", "menu_category": "dipping_sauce",
         "base_price": 1.25},
    ],
    "crusts": [
        {"id": "regular", "name": "Regular", "sort_order": 0},
        {"id": "thin", "name": "Thin", "sort_order": 1},
        {"id": "gf", "name": "Gluten Free", "sort_order": 2},
    ],
    "size_crust_availability": [
        {"size_name": SMALL, "crust_id": "regular"},
        {"size_name": SMALL, "crust_id": "thin"},
        {"size_name": MEDIUM, "crust_id": "regular"},
        {"size_name": MEDIUM, "crust_id": "thin"},
        {"size_name": MEDIUM, "crust_id": "gf"},
        {"size_name": LARGE, "crust_id": "regular"},
        {"size_name": LARGE, "crust_id": "thin"},
        {"size_name": LARGE, "crust_id": "gf"},
    ],
    "toppings": [
        {"id": "pepperoni", "name": "Pepperoni", "sort_order": 0},
        {"id": "chicken", "name": "Chicken", "price_small": 3.0, "price_medium": 3.5,
         "price_large": 4.0, "sort_order": 1},
        {"id": "bacon", "name": "Bacon", "sort_order": 2},
        {"id": "anchovies", "name": "Anchovies", "is_available": False, "sort_order": 3},
        {"id": "onion", "name": "Onion", "is_veg": True, "sort_order": 4},
        {"id": "mushroom", "name": "Mushroom", "is_veg": True, "sort_order": 5},
        {"id": "peppers", "name": "Green Peppers", "is_veg": True, "sort_order": 6},
        {"id": "olives", "name": "Olives", "is_veg": True, "sort_order": 7},
        {"id": "cheese", "name": "Cheese", "is_veg": True, "sort_order": 8},
    ],
    "sauces": [
        {"id": "pizza-sauce", "name": "Pizza Sauce", "price": 1.0, "sort_order": 0},
        {"id": "garlic", "name": "Garlic", "price": 1.5, "sort_order": 1},
        {"id": "bbq", "name": "BBQ", "price": 1.5, "sort_order": 2},
    ],
    "cheeses": [
        {"id": "mozzarella", "name": "Mozzarella", "is_default": True, "sort_order": 0},
        {"id": "dairy-free", "name": "Dairy Free", "sort_order": 1},
    ],
    "free_toppings": [
        {"id": "oregano", "name": "Oregano", "sort_order": 0},
        {"id": "chili", "name": "Chili Flakes", "sort_order": 1},
        {"id": "basil", "name": "Basil", "sort_order": 2},
    ],
    "combos": [
        {
            "id": "family",
            "name": "Family Deal",
            "price": 29.99,
            "sort_order": 0,
            "items": [
                {"id": "family-pizza", "item_type": "pizza", "quantity": 2,
                 "size_restriction": "Medium", "sort_order": 0},
                {"id": "family-wings", "item_type": "wings", "size_restriction": "24 pieces", "sort_order": 1},
                {"id": "family-drink", "item_type": "drinks", "size_restriction": "2 Litre", "sort_order": 2},
                {"id": "family-dip", "item_type": "dipping_sauce", "is_required": False,
                 "is_chargeable": True, "sort_order": 3},
            ],
        },
        {
            "id": "tuesday",
            "name": "Two for Tuesday",
            "price": 19.99,
            "sort_order": 1,
            "schedule_type": "days_of_week",
            "schedule_days": [2],
            "items": [
                {"id": "tuesday-pizza", "item_type": "pizza", "quantity": 2, "size_restriction": "Large"},
            ],
        },
        {"id": "retired", "name": "Retired Deal", "price": 9.99, "is_active": False},
    ],
    "note_shortcuts": {"WD": "Well done", "CS": "Cut in squares"},
}


@pytest.fixture
def catalog() -> Catalog:
    """Catalog built without a database."""
    return Catalog.model_validate(CATALOG_DATA)


@pytest.fixture
def cheddar_catalog() -> Catalog:
    """Same catalog, but the store's default cheese is Cheddar."""
    data = dict(CATALOG_DATA)
    data["cheeses"] = [
        {"id": "cheddar", "name": "Cheddar", "is_default": True, "sort_order": 0},
        {"id": "dairy-free", "name": "Dairy Free", "sort_order": 1},
    ]
    return Catalog.model_validate(data)


@pytest.fixture
def veggie(catalog):
    return catalog.get_menu_item("veggie")


@pytest.fixture
def customer_engine(catalog, veggie):
    """Garden Veggie as the customer modal opens it (Medium, Regular, Pizza Sauce)."""
    return PizzaCustomizationEngine(veggie, catalog, EngineConfig.customer())


@pytest.fixture
def pos_engine(catalog, veggie):
    """Garden Veggie as the POS opens it (nothing preselected)."""
    return PizzaCustomizationEngine(veggie, catalog, EngineConfig.pos(note_shortcuts=catalog.note_shortcuts))


@pytest.fixture
def large_engine(catalog, veggie):
    engine = PizzaCustomizationEngine(veggie, catalog, EngineConfig.pos(note_shortcuts=catalog.note_shortcuts))
    engine.select_size("veggie-lg")
    return engine


@pytest.fixture
def session_factory():
    """Session factory bound to a seeded in-memory SQLite DB.

    Uses StaticPool so all connections share the same in-memory database.
    """
    engine = create_engine(
        "sqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)
    Base.metadata.create_all(bind=engine)

    session = TestingSessionLocal()
    seed_menu(session)
    session.close()

    yield TestingSessionLocal

    Base.metadata.drop_all(bind=engine)


@pytest.fixture
def db_session(session_factory):
    session = session_factory()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def client(session_factory):
    """Shared FastAPI TestClient using the seeded in-memory SQLite DB."""
    app = create_app(init_database=False)

    # Override FastAPI DB dependency
    def override_get_db():
        db_sess = session_factory()
        try:
            yield db_sess
        finally:
            db_sess.close()

    app.dependency_overrides[db.get_db] = override_get_db

    with TestClient(app) as test_client:
        yield test_client

    app.dependency_overrides.clear()
