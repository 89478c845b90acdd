"""Tests for settings loading and logging setup."""

import json
import logging
from pathlib import Path

from terminal_portfolio.config import LOG_FILE, Settings, load_settings, setup_logging


class TestLoadSettings:
    """Test settings precedence and coercion."""

    def test_defaults(self, tmp_path):
        settings = load_settings(tmp_path / "missing.json", env={})
        assert settings == Settings()
        assert settings.max_sessions == 50
        assert settings.session_timeout == 1800.0
        assert settings.log_file == LOG_FILE

    def test_file_overrides(self, tmp_path):
        path = tmp_path / "config.json"
        path.write_text(json.dumps({"max_sessions": 5, "log_level": "debug", "enable_logging": False}))

        settings = load_settings(path, env={})

        assert settings.max_sessions == 5
        assert settings.log_level == "DEBUG"
        assert settings.enable_logging is False

    def test_env_beats_file(self, tmp_path):
        path = tmp_path / "config.json"
        path.write_text(json.dumps({"session_timeout": 10}))
        env = {
            "TERMINAL_PORTFOLIO_SESSION_TIMEOUT": "90.5",
            "TERMINAL_PORTFOLIO_ENABLE_LOGGING": "no",
            "TERMINAL_PORTFOLIO_LOG_FILE": str(tmp_path / "app.log"),
        }

        settings = load_settings(path, env=env)

        assert settings.session_timeout == 90.5
        assert settings.enable_logging is False
        assert settings.log_file == tmp_path / "app.log"

    def test_invalid_values_ignored(self, tmp_path):
        env = {"TERMINAL_PORTFOLIO_MAX_SESSIONS": "lots"}
        assert load_settings(tmp_path / "missing.json", env=env).max_sessions == 50

    def test_broken_file_ignored(self, tmp_path):
        path = tmp_path / "config.json"
        path.write_text("{not json")
        assert load_settings(path, env={}) == Settings()

    def test_non_object_file_ignored(self, tmp_path):
        path = tmp_path / "config.json"
        path.write_text("[1, 2]")
        assert load_settings(path, env={}) == Settings()


class TestSetupLogging:
    """Test the file logging setup."""

    def test_writes_to_log_file(self, tmp_path, restore_logger):
        log_file = tmp_path / "logs" / "portfolio.log"
        logger = setup_logging(Settings(log_file=log_file, log_level="DEBUG"))

        logging.getLogger("terminal_portfolio.session").info("hello from the tracker")
        for handler in logger.handlers:
            handler.flush()

        text = log_file.read_text()
        assert "terminal_portfolio.session - INFO - hello from the tracker" in text

    def test_disabled(self, tmp_path, restore_logger):
        log_file = tmp_path / "portfolio.log"
        logger = setup_logging(Settings(log_file=log_file, enable_logging=False))

        logger.info("nothing")

        assert not log_file.exists()
        assert [type(h) for h in logger.handlers] == [logging.NullHandler]

    def test_repeat_setup_replaces_handlers(self, tmp_path, restore_logger):
        settings = Settings(log_file=tmp_path / "portfolio.log")
        setup_logging(settings)
        logger = setup_logging(settings)
        assert len(logger.handlers) == 1

    def test_unknown_level_falls_back_to_info(self, tmp_path, restore_logger):
        logger = setup_logging(Settings(log_file=Path(tmp_path / "p.log"), log_level="CHATTY"))
        assert logger.level == logging.INFO
