# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Matthias Bilger <matthias@bilger.info>
import asyncio
import logging

from backlight_bridge.models.config import Config
from backlight_bridge.models.state import BrokerState
from backlight_bridge.mqtt_client import MqttPublisher
from backlight_bridge.translator import ColorTranslator
from backlight_bridge.webserver import WebServer

_logger = logging.getLogger(__name__)


class Bridge:
    """Wires the broker connection, the color translator and the HTTP server."""

    def __init__(self, config: Config):
        self._config = config
        self._broker_state = BrokerState()
        self._stop_event = asyncio.Event()
        self._setup()

    def _setup(self):
        self._publisher = MqttPublisher(self._config.mqtt, self._broker_state)
        self._translator = ColorTranslator(
            self._publisher,
            self._config.mqtt.topic,
            self._config.colors,
            self._config.command_template,
        )
        self._webserver = WebServer(
            self._translator,
            self._broker_state,
            self._config.http,
        )

    async def process(self):
        """Connects to the broker and serves HTTP until :meth:`trigger_stop` is called."""
        await asyncio.to_thread(self._publisher.connect)
        try:
            await self._webserver.process()
            await self._stop_event.wait()
        finally:
            await self.stop()

    async def stop(self):
        await self._webserver.stop()
        _logger.info("Webserver stopped")
        await asyncio.to_thread(self._publisher.disconnect)
        _logger.info("MQTT client stopped")

    def trigger_stop(self):
        self._stop_event.set()

    @property
    def translator(self) -> ColorTranslator:
        return self._translator

    @property
    def webserver(self) -> WebServer:
        return self._webserver

    @property
    def state(self) -> BrokerState:
        return self._broker_state
