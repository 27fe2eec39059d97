"""Tests for settings and logging configuration."""

import logging

import pytest
from textual.logging import TextualHandler

from procexplorer.config import Settings
from procexplorer.logging_config import setup_logging


class TestSettings:
    """Tests for Settings.from_env."""

    def test_defaults(self):
        """Test an empty environment gives the defaults."""
        settings = Settings.from_env({})

        assert settings.proc_root == "/proc"
        assert settings.profiling is False
        assert settings.log_level == "WARNING"
        assert settings.page_size == 200

    @pytest.mark.parametrize("value", ["1", "yes", ""])
    def test_profiling_enabled_by_presence(self, value):
        """Test PROFILING enables the overlay whatever its value."""
        assert Settings.from_env({"PROFILING": value}).profiling is True

    def test_overrides(self):
        """Test the proc root and log level can be overridden."""
        settings = Settings.from_env(
            {"PROCEXPLORER_PROC_ROOT": "/tmp/fakeproc", "PROCEXPLORER_LOG_LEVEL": "debug"}
        )

        assert settings.proc_root == "/tmp/fakeproc"
        assert settings.log_level == "debug"

    def test_empty_values_fall_back(self):
        """Test empty strings do not clear the defaults."""
        settings = Settings.from_env({"PROCEXPLORER_PROC_ROOT": "", "PROCEXPLORER_LOG_LEVEL": ""})

        assert settings.proc_root == "/proc"
        assert settings.log_level == "WARNING"

    def test_is_frozen(self):
        """Test settings cannot change after startup."""
        settings = Settings()
        with pytest.raises(AttributeError):
            settings.profiling = True  # type: ignore[misc]


class TestSetupLogging:
    """Tests for setup_logging."""

    @pytest.fixture(autouse=True)
    def restore_root_logger(self):
        root = logging.getLogger()
        handlers, level = root.handlers[:], root.level
        yield
        root.handlers[:] = handlers
        root.setLevel(level)

    def test_routes_through_textual(self):
        """Test the root logger gets a TextualHandler at the given level."""
        setup_logging("DEBUG")

        root = logging.getLogger()
        assert root.level == logging.DEBUG
        assert any(isinstance(handler, TextualHandler) for handler in root.handlers)

    def test_level_is_case_insensitive(self):
        """Test lower case level names are accepted."""
        setup_logging("info")

        assert logging.getLogger().level == logging.INFO

    @pytest.mark.parametrize("level", ["LOUD", "", "basic_format"])
    def test_unknown_level_falls_back(self, level):
        """Test unknown level names fall back to WARNING."""
        setup_logging(level)

        assert logging.getLogger().level == logging.WARNING
