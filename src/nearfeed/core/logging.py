"""
Logging configuration.

The packaged YAML (`src/nearfeed/config/logging.yaml`) defines handlers and the
levels of noisy third-party loggers. The settings log level (`NEARFEED_LOG_LEVEL`)
is applied to the `nearfeed` logger tree and the root logger only, so turning on
DEBUG for feed computations does not also turn on httpx/uvicorn chatter.
"""

from __future__ import annotations

import copy
import logging.config

from nearfeed.config.settings import get_logging_config, get_settings

APP_LOGGER = "nearfeed"


def configure_logging(level: str | None = None) -> None:
    """Configure the Python logging system from packaged YAML + settings (or `level`)."""
    config = copy.deepcopy(get_logging_config())
    level = (level or get_settings().app.log_level).upper()

    config.setdefault("root", {})["level"] = level
    config.setdefault("loggers", {}).setdefault(APP_LOGGER, {})["level"] = level
    for handler in config.get("handlers", {}).values():
        # Handlers must pass app records through at the chosen level.
        if isinstance(handler, dict):
            handler["level"] = "DEBUG" if level == "DEBUG" else handler.get("level", level)

    logging.config.dictConfig(config)
