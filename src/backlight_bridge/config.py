# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Matthias Bilger <matthias@bilger.info>
import logging
import os
from collections.abc import Mapping
from pathlib import Path

import pydantic
import yaml
from backlight_bridge.models.config import Config
from backlight_bridge.models.config import HttpConfig

_logger = logging.getLogger(__name__)

CONFIG_FILENAME = "backlight-bridge.yaml"
PORT_ENV = "PORT"


def find_config_file() -> Path:
    file_path = Path(CONFIG_FILENAME)
    home_config_path = (
        Path.home() / os.environ.get("XDG_CONFIG_HOME", ".config") / CONFIG_FILENAME
    )

    if not file_path.exists() and home_config_path.exists():
        file_path = home_config_path

    return file_path


def load_config(file_path: Path | None = None) -> Config:
    if file_path is None:
        file_path = find_config_file()

    try:
        _logger.info("Loading config from file: %s", file_path)
        with open(file_path, "r") as file:
            config_data = yaml.safe_load(file)
        if config_data is None:
            raise yaml.YAMLError("No data in file")
    except FileNotFoundError:
        _logger.info("No config file found, using defaults")
        return Config()

    except (yaml.YAMLError, IOError) as e:
        _logger.error("Error in configuration file: %s", e)
        _logger.info("Using default config")
        return Config()

    try:
        config = Config(**config_data)
    except (pydantic.ValidationError, TypeError) as e:
        _logger.warning("Configuration errors:")
        if isinstance(e, pydantic.ValidationError):
            for error in e.errors():
                _logger.warning("%s: %s", error["loc"], error["msg"])
        else:
            _logger.warning("Expected a mapping, got %s", type(config_data).__name__)
        _logger.info("Using default config")
        return Config()

    _logger.info("Loaded config from file: %s", file_path)
    return config


def apply_environment(config: Config, environ: Mapping[str, str] | None = None) -> Config:
    """Applies overrides from the environment, currently only the listen port."""
    if environ is None:
        environ = os.environ
    port = environ.get(PORT_ENV)
    if not port:
        return config
    try:
        config.http = HttpConfig.model_validate(
            config.http.model_dump() | {"bind_port": port},
        )
    except pydantic.ValidationError:
        _logger.error("Ignoring invalid %s: %s", PORT_ENV, port)
    return config
