# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Matthias Bilger <matthias@bilger.info>
import logging
from logging.handlers import RotatingFileHandler
from pathlib import Path

from backlight_bridge.models.config import LoggingConfig

LOG_FORMAT = "%(asctime)s - %(name)-25s [%(levelname)-8s]: %(message)s"
DEFAULT_LOG_FILE = "backlight-bridge.log"

_logger = logging.getLogger(__name__)


def _parse_submodule(entry: str) -> tuple[str, int] | None:
    name, sep, level = entry.partition("=")
    if not sep or not name.strip():
        return None
    try:
        return name.strip(), LoggingConfig.LogLevel(
            level.strip().lower(),
        ).to_logging_level()
    except ValueError:
        return None


def setup_logging(config: LoggingConfig, root: logging.Logger | None = None) -> None:
    """Configures the root logger from the logging section of the config."""
    if root is None:
        root = logging.getLogger()
    for handler in list(root.handlers):
        root.removeHandler(handler)
        handler.close()
    root.setLevel(config.level.to_logging_level())
    formatter = logging.Formatter(LOG_FORMAT)

    if config.console_enabled:
        console = logging.StreamHandler()
        console.setLevel(config.console_level.to_logging_level())
        console.setFormatter(formatter)
        root.addHandler(console)

    if config.file_enabled:
        file_path = Path(config.file_path or Path.cwd() / DEFAULT_LOG_FILE)
        file_handler = RotatingFileHandler(
            file_path,
            maxBytes=config.file_max_size,
            backupCount=config.file_backup_count,
        )
        file_handler.setLevel(config.file_level.to_logging_level())
        file_handler.setFormatter(formatter)
        root.addHandler(file_handler)

    if not root.handlers:
        root.addHandler(logging.NullHandler())

    for entry in config.submodules:
        parsed = _parse_submodule(entry)
        if parsed is None:
            _logger.warning("Ignoring invalid logging submodule entry: %s", entry)
            continue
        name, level = parsed
        logging.getLogger(name).setLevel(level)
