"""
Logging configuration.

We use a YAML logging config (`src/droppoint/config/logging.yaml`) and then apply
runtime overrides from settings (e.g., `DROPPOINT_LOG_LEVEL`).
"""

from __future__ import annotations

import logging.config

from droppoint.config.settings import get_logging_config, get_settings


def configure_logging() -> None:
    """Configure the Python logging system based on packaged YAML config + settings."""
    settings = get_settings()
    # Copy: the loaded config is cached and dictConfig mutates what it is given.
    config = {k: (dict(v) if isinstance(v, dict) else v) for k, v in get_logging_config().items()}

    level = settings.app.log_level.upper()
    config["root"] = {**config.get("root", {}), "level": level}
    for section in ("handlers", "loggers"):
        entries = config.get(section, {})
        config[section] = {
            name: ({**entry, "level": level} if isinstance(entry, dict) and "level" in entry else entry)
            for name, entry in entries.items()
        }

    logging.config.dictConfig(config)
