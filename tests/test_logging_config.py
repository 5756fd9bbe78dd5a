"""
Tests for logging configuration.
"""
import logging

import pytest

from pizza_pos.engine.customization import PizzaCustomizationEngine
from pizza_pos.logging_config import ENGINE_LOGGER, setup_logging


@pytest.fixture(autouse=True)
def restore_logger_levels():
    """setup_logging sets levels on shared loggers; put them back after each test."""
    names = ("pizza_pos", ENGINE_LOGGER, "sqlalchemy.engine", "uvicorn.access")
    saved = {name: logging.getLogger(name).level for name in names}
    yield
    for name, level in saved.items():
        logging.getLogger(name).setLevel(level)


class TestLoggingConfiguration:
    """Test logging setup and configuration."""

    def test_setup_logging_default_level(self, monkeypatch):
        """Test that setup_logging defaults to INFO level."""
        monkeypatch.delenv("LOG_LEVEL", raising=False)
        setup_logging()

        logger = logging.getLogger("pizza_pos")
        assert logger.level == logging.INFO

    def test_setup_logging_respects_env_var(self, monkeypatch):
        """Test that LOG_LEVEL env var is respected."""
        monkeypatch.setenv("LOG_LEVEL", "warning")
        setup_logging()

        logger = logging.getLogger("pizza_pos")
        assert logger.level == logging.WARNING

    def test_setup_logging_explicit_level(self):
        """Test that explicit level parameter works."""
        setup_logging(level="ERROR")

        logger = logging.getLogger("pizza_pos")
        assert logger.level == logging.ERROR

    def test_setup_logging_invalid_level_defaults_to_info(self):
        """Test that invalid level falls back to INFO."""
        setup_logging(level="INVALID_LEVEL")

        logger = logging.getLogger("pizza_pos")
        assert logger.level == logging.INFO

    def test_engine_follows_app_level_by_default(self, monkeypatch):
        monkeypatch.delenv("ENGINE_LOG_LEVEL", raising=False)
        setup_logging(level="WARNING")
        assert logging.getLogger(ENGINE_LOGGER).level == logging.WARNING

    def test_engine_level_from_env(self, monkeypatch):
        monkeypatch.setenv("ENGINE_LOG_LEVEL", "debug")
        setup_logging(level="INFO")
        assert logging.getLogger("pizza_pos").level == logging.INFO
        assert logging.getLogger(ENGINE_LOGGER).level == logging.DEBUG

    def test_invalid_engine_level_falls_back_to_app_level(self):
        setup_logging(level="ERROR", engine_level="LOUD")
        assert logging.getLogger(ENGINE_LOGGER).level == logging.ERROR

    def test_third_party_noise_reduced(self):
        setup_logging(level="INFO")
        assert logging.getLogger("sqlalchemy.engine").level == logging.WARNING
        assert logging.getLogger("uvicorn.access").level == logging.WARNING


class TestEngineLogging:
    """What the engine logs, and at which level."""

    def test_refused_moves_logged_at_debug_only(self, customer_engine, caplog):
        setup_logging(level="INFO")

        with caplog.at_level(logging.INFO, logger="pizza_pos"):
            assert customer_engine.set_spicy_selection("hot", "left") is False
            assert customer_engine.set_cheese_quantity("less") is False

        assert caplog.records == []

    def test_engine_debug_without_app_debug(self, customer_engine, caplog):
        setup_logging(level="INFO", engine_level="DEBUG")

        with caplog.at_level(logging.DEBUG):
            customer_engine.set_cheese_quantity("less")

        assert any(
            r.name.startswith(ENGINE_LOGGER) and "Less cheese" in r.message for r in caplog.records
        )

    def test_refused_moves_visible_at_debug(self, customer_engine, caplog):
        with caplog.at_level(logging.DEBUG, logger="pizza_pos"):
            customer_engine.set_cheese_quantity("less")

        assert any("Less cheese" in r.message for r in caplog.records)

    def test_cart_line_logged_at_info(self, customer_engine, caplog):
        with caplog.at_level(logging.INFO, logger="pizza_pos"):
            line = customer_engine.to_cart_line()

        messages = [r.message for r in caplog.records if r.levelno == logging.INFO]
        assert any(line.id in m and "$12.00" in m for m in messages)

    def test_missing_sauce_warns(self, catalog, veggie, customer_engine, caplog):
        record = customer_engine.to_customization().model_copy(update={"sauce_id": "retired"})
        engine = PizzaCustomizationEngine.from_customization(veggie, catalog, record)
        with caplog.at_level(logging.WARNING, logger="pizza_pos"):
            assert engine.price() == 12.0

        assert any("retired" in r.message for r in caplog.records)
