from __future__ import annotations

import argparse
import asyncio
import logging
import pathlib
import signal
import sys

from backlight_bridge.bridge import Bridge
from backlight_bridge.config import apply_environment
from backlight_bridge.config import load_config
from backlight_bridge.errors import MqttConnectionError
from backlight_bridge.logging_setup import setup_logging
from backlight_bridge.models.config import Config
from backlight_bridge.models.config import HttpConfig
from backlight_bridge.version import __version__

_logger = logging.getLogger(__name__)


def parse_arguments(argv=None):
    parser = argparse.ArgumentParser(description="HTTP to MQTT backlight bridge")
    parser.add_argument("--config", type=pathlib.Path, help="Path to the config file")
    parser.add_argument("--host", type=str, help="Address to bind the HTTP server to")
    parser.add_argument("--port", type=int, help="Port to bind the HTTP server to")
    parser.add_argument("--version", action="version", version=__version__)
    return parser.parse_args(argv)


def build_config(args: argparse.Namespace) -> Config:
    config = apply_environment(load_config(args.config))
    overrides = {}
    if args.host:
        overrides["bind_address"] = args.host
    if args.port:
        overrides["bind_port"] = args.port
    if overrides:
        config.http = HttpConfig.model_validate(config.http.model_dump() | overrides)
    return config


async def main(config: Config) -> int:
    bridge = Bridge(config)
    loop = asyncio.get_running_loop()

    def signal_handler(signum, frame):
        _logger.info("Signal %s received, shutting down...", signum)
        loop.call_soon_threadsafe(bridge.trigger_stop)

    signal.signal(signal.SIGINT, signal_handler)
    signal.signal(signal.SIGTERM, signal_handler)

    try:
        await bridge.process()
    except MqttConnectionError as e:
        _logger.critical("Cannot start bridge: %s", e)
        return 1
    return 0


def run(argv=None):
    logging.basicConfig(level=logging.INFO)
    args = parse_arguments(argv)
    config = build_config(args)
    setup_logging(config.logging)
    sys.exit(asyncio.run(main(config)))


if __name__ == "__main__":
    run()
