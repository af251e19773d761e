"""
Unit tests for configuration and logging setup.
"""

import json
import logging

import pytest
from abox_logic.core.config import Config, LoggingConfig, get_config, set_config
from abox_logic.core.exceptions import InvalidConfigError
from abox_logic.core.types import MatchMode
from abox_logic.utils.logging_setup import JsonFormatter, configure_logging


class TestConfig:
    """Tests for Config class."""

    def test_defaults(self):
        config = Config()
        assert config.engine.max_rounds is None
        assert config.engine.match_mode == MatchMode.HOMOMORPHIC
        assert config.logging.level == "INFO"

    def test_from_dict(self):
        config = Config.from_dict({"engine": {"max_rounds": 5, "match_mode": "exact"}})
        assert config.engine.max_rounds == 5
        assert config.engine.match_mode == MatchMode.EXACT

    def test_unbounded_rounds(self):
        config = Config.from_dict({"engine": {"max_rounds": None}})
        assert config.engine.max_rounds is None

    def test_invalid_rounds(self):
        with pytest.raises(InvalidConfigError) as exc_info:
            Config.from_dict({"engine": {"max_rounds": 0}})
        assert "max_rounds" in exc_info.value.details["config_key"]

    def test_invalid_match_mode(self):
        with pytest.raises(InvalidConfigError):
            Config.from_dict({"engine": {"match_mode": "fuzzy"}})

    def test_env_override(self, monkeypatch):
        monkeypatch.setenv("ABOX_ENGINE_MAX_ROUNDS", "7")
        assert Config.from_env().engine.max_rounds == 7

    def test_global_config(self):
        config = Config.from_dict({"engine": {"max_rounds": 3}})
        set_config(config)
        assert get_config() is config
        set_config(None)
        assert get_config() is not config


class TestLoggingSetup:
    """Tests for configure_logging."""

    @pytest.fixture(autouse=True)
    def restore_logger(self):
        logger = logging.getLogger("abox_logic")
        handlers, level = list(logger.handlers), logger.level
        yield
        for handler in list(logger.handlers):
            if handler not in handlers:
                logger.removeHandler(handler)
                handler.close()
        logger.setLevel(level)

    def test_sets_level(self):
        logger = configure_logging(LoggingConfig(level="DEBUG"))
        assert logger.name == "abox_logic"
        assert logger.level == logging.DEBUG

    def test_idempotent(self):
        configure_logging(LoggingConfig())
        configure_logging(LoggingConfig())
        installed = [h for h in logging.getLogger("abox_logic").handlers if getattr(h, "_abox_logic", False)]
        assert len(installed) == 1

    def test_file_handler(self, tmp_path):
        path = tmp_path / "abox.log"
        logger = configure_logging(LoggingConfig(format="json", file_path=str(path)))
        logger.warning("saturated %d facts", 3)
        for handler in logger.handlers:
            handler.flush()

        record = json.loads(path.read_text().strip().splitlines()[-1])
        assert record["message"] == "saturated 3 facts"
        assert record["level"] == "WARNING"

    def test_json_formatter(self):
        record = logging.LogRecord("abox_logic.x", logging.INFO, __file__, 1, "hello %s", ("world",), None)
        payload = json.loads(JsonFormatter().format(record))
        assert payload["message"] == "hello world"
        assert payload["logger"] == "abox_logic.x"
