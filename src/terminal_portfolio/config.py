"""Runtime settings and logging setup.

Settings come from defaults, then ~/.config/terminal-portfolio/config.json,
then TERMINAL_PORTFOLIO_* environment variables.
"""

import json
import logging
import os
from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import Mapping, Optional

CONFIG_DIR = Path.home() / ".config" / "terminal-portfolio"
CONFIG_FILE = CONFIG_DIR / "config.json"

CACHE_DIR = Path.home() / ".cache" / "terminal-portfolio"
LOG_FILE = CACHE_DIR / "terminal-portfolio.log"

ENV_PREFIX = "TERMINAL_PORTFOLIO_"

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


@dataclass
class Settings:
    max_sessions: int = 50
    session_timeout: float = 30 * 60.0  # seconds
    log_level: str = "INFO"
    log_file: Path = field(default=LOG_FILE)
    enable_logging: bool = True


def _load_file(path: Path) -> dict:
    """Load overrides from the JSON config file, ignoring a missing or broken one."""
    if path.exists():
        try:
            with open(path) as f:
                data = json.load(f)
                if isinstance(data, dict):
                    return data
        except (json.JSONDecodeError, IOError):
            pass
    return {}


def _coerce(name: str, value, default):
    if name == "log_file":
        return Path(os.path.expanduser(str(value)))
    if isinstance(default, bool):
        if isinstance(value, str):
            return value.strip().lower() in ("1", "true", "yes", "on")
        return bool(value)
    if isinstance(default, int):
        return int(value)
    if isinstance(default, float):
        return float(value)
    return str(value)


def load_settings(
    config_file: Optional[Path] = None,
    env: Optional[Mapping[str, str]] = None,
) -> Settings:
    """Build settings from defaults, the config file and the environment."""
    if env is None:
        env = os.environ
    settings = Settings()

    overrides = _load_file(config_file or CONFIG_FILE)
    for f in fields(Settings):
        env_value = env.get(ENV_PREFIX + f.name.upper())
        if env_value is not None:
            overrides[f.name] = env_value

    for f in fields(Settings):
        if f.name not in overrides:
            continue
        default = getattr(settings, f.name)
        try:
            setattr(settings, f.name, _coerce(f.name, overrides[f.name], default))
        except (TypeError, ValueError):
            continue

    settings.log_level = settings.log_level.upper()
    return settings


def setup_logging(settings: Settings) -> logging.Logger:
    """Send package logs to the log file; curses owns the terminal."""
    logger = logging.getLogger("terminal_portfolio")
    logger.setLevel(getattr(logging, settings.log_level, logging.INFO))
    logger.propagate = False

    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    if not settings.enable_logging:
        logger.addHandler(logging.NullHandler())
        return logger

    settings.log_file.parent.mkdir(parents=True, exist_ok=True)
    handler = logging.FileHandler(settings.log_file)
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    logger.addHandler(handler)
    return logger
