# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Matthias Bilger <matthias@bilger.info>
import asyncio
import logging
import threading
import time
from typing import Any

import paho.mqtt.client as mqtt
from backlight_bridge.errors import MqttConnectionError
from backlight_bridge.errors import PublishError
from backlight_bridge.models.config import MqttConfig
from backlight_bridge.models.state import BrokerState
from backlight_bridge.models.state import ConnectionState
from paho.mqtt.enums import CallbackAPIVersion
from paho.mqtt.properties import Properties
from paho.mqtt.reasoncodes import ReasonCode

_logger = logging.getLogger(__name__)


class MqttPublisher:
    """Owns the single broker connection shared by all requests.

    The paho network loop runs in its own thread; publishing blocks the calling
    thread until the broker has the message, so async callers go through
    :meth:`publish_async`."""

    def __init__(self, config: MqttConfig, state: BrokerState | None = None):
        self._config = config
        self._state = state or BrokerState()
        self._connected = threading.Event()
        self._counter_lock = threading.Lock()
        self._connect_reason: ReasonCode | None = None
        client = mqtt.Client(
            callback_api_version=CallbackAPIVersion.VERSION2,
            client_id=config.client_id or "",
        )
        if config.username:
            client.username_pw_set(
                config.username,
                config.password.get_secret_value() if config.password else None,
            )
        client.on_connect = self._on_connect
        client.on_disconnect = self._on_disconnect
        client.on_message = self._on_message
        self._client = client

    def _on_connect(
        self,
        client: mqtt.Client,
        userdata: Any,
        connect_flags: mqtt.ConnectFlags,
        reason_code: ReasonCode,
        properties: Properties | None,
    ):
        self._connect_reason = reason_code
        if reason_code == 0:
            _logger.info(
                "Connected to MQTT broker at %s:%s",
                self._config.host,
                self._config.port,
            )
            self._state.connection_status = ConnectionState.CONNECTED
            self._state.last_connected = time.time()
        else:
            _logger.error("Failed to connect, return code %s", reason_code)
            self._state.connection_status = ConnectionState.DISCONNECTED
        self._connected.set()

    def _on_disconnect(
        self,
        client: mqtt.Client,
        userdata: Any,
        disconnect_flags: mqtt.DisconnectFlags,
        reason_code: ReasonCode,
        properties: Properties | None,
    ):
        self._state.connection_status = ConnectionState.DISCONNECTED
        self._state.last_disconnect_reason = str(reason_code)
        if reason_code == 0:
            _logger.debug("Disconnected cleanly")
            return
        _logger.warning("Connection lost: %s", reason_code)

    def _on_message(self, client: mqtt.Client, userdata: Any, msg: mqtt.MQTTMessage):
        _logger.info(
            "Received message: %s from topic: %s",
            msg.payload.decode(errors="replace"),
            msg.topic,
        )

    def connect(self) -> None:
        """Connects to the broker and waits for the connection to be acknowledged."""
        _logger.debug(
            "Connecting to MQTT broker at %s:%s",
            self._config.host,
            self._config.port,
        )
        self._connected.clear()
        try:
            self._client.connect(
                self._config.host,
                self._config.port,
                keepalive=self._config.keepalive,
            )
        except OSError as e:
            raise MqttConnectionError(
                f"Cannot reach broker {self._config.host}:{self._config.port}: {e}",
            ) from e
        self._client.loop_start()
        if not self._connected.wait(self._config.connect_timeout):
            self._client.loop_stop()
            raise MqttConnectionError(
                f"Broker {self._config.host}:{self._config.port} did not acknowledge "
                f"the connection within {self._config.connect_timeout}s",
            )
        if self._connect_reason != 0:
            self._client.loop_stop()
            raise MqttConnectionError(
                f"Broker refused the connection: {self._connect_reason}",
            )

    def disconnect(self) -> None:
        self._client.disconnect()
        self._client.loop_stop()
        self._state.connection_status = ConnectionState.DISCONNECTED
        _logger.info("Disconnected from MQTT broker")

    def publish(self, topic: str, payload: str) -> None:
        """Publishes ``payload`` and blocks until it has been sent."""
        _logger.debug("Publishing %s to %s", payload, topic)
        info = self._client.publish(
            topic,
            payload,
            qos=self._config.qos,
            retain=self._config.retain,
        )
        if info.rc != mqtt.MQTT_ERR_SUCCESS:
            raise PublishError(
                f"Publishing to {topic} failed: {mqtt.error_string(info.rc)}",
            )
        try:
            info.wait_for_publish(timeout=self._config.publish_timeout)
        except (RuntimeError, ValueError) as e:
            raise PublishError(f"Publishing to {topic} failed: {e}") from e
        if not info.is_published():
            raise PublishError(
                f"Publishing to {topic} timed out after {self._config.publish_timeout}s",
            )
        with self._counter_lock:
            self._state.published_messages += 1

    async def publish_async(self, topic: str, payload: str) -> None:
        await asyncio.to_thread(self.publish, topic, payload)

    @property
    def state(self) -> BrokerState:
        return self._state

    @property
    def connected(self) -> bool:
        return bool(self._state.connection_status)
