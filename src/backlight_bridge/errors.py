# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Matthias Bilger <matthias@bilger.info>


class BridgeError(Exception):
    """Base class for all errors raised by the bridge."""


class MalformedColorRequest(BridgeError, ValueError):
    """A custom color request did not carry a red, green and blue value."""


class MqttConnectionError(BridgeError):
    """The broker could not be reached or refused the connection."""


class PublishError(BridgeError):
    """A command could not be handed to the broker."""
