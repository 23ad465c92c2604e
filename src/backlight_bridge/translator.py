# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Matthias Bilger <matthias@bilger.info>
import logging
from typing import Protocol

from backlight_bridge.errors import MalformedColorRequest
from backlight_bridge.models.color_request import ColorRequest
from backlight_bridge.models.config import RgbValue

_logger = logging.getLogger(__name__)


class Publisher(Protocol):
    async def publish_async(self, topic: str, payload: str) -> None: ...


class ColorTranslator:
    """Maps a requested color to a backlight command and publishes it."""

    def __init__(
        self,
        publisher: Publisher,
        topic: str,
        colors: dict[str, RgbValue],
        command_template: str = "set/{red}/{green}/{blue}",
    ):
        self._publisher = publisher
        self._topic = topic
        self._template = command_template
        self._commands = {
            name: command_template.format(
                red=value.red,
                green=value.green,
                blue=value.blue,
            )
            for name, value in colors.items()
        }

    def command_for(self, request: ColorRequest) -> str | None:
        """Returns the command for ``request``, or None for an unknown color.

        Custom triplets are used verbatim, without any numeric check.
        """
        if request.is_custom:
            rgb = request.rgb or []
            if len(rgb) < 3:
                raise MalformedColorRequest(
                    f"Custom color needs red, green and blue, got {len(rgb)} value(s)",
                )
            red, green, blue = rgb[:3]
            return self._template.format(red=red, green=green, blue=blue)
        return self._commands.get(request.color)

    async def apply(self, request: ColorRequest) -> str | None:
        command = self.command_for(request)
        if command is None:
            _logger.warning("Ignoring unknown color: %s", request.color)
            return None
        _logger.info("Setting color %s: %s", request.color, command)
        await self._publisher.publish_async(self._topic, command)
        return command

    @property
    def topic(self) -> str:
        return self._topic

    @property
    def colors(self) -> list[str]:
        return list(self._commands)
