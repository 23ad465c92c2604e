# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Matthias Bilger matthias@bilger.info
import logging

import pydantic
from pydantic import BaseModel
from pydantic import Field

_logger = logging.getLogger(__name__)


class WebhookRequest(BaseModel):
    key: str = Field(default="", description="Caller supplied key, not checked")
    color: str = Field(default="", description="The color to set the backlight to")
    action: str = Field(
        default="",
        description="Comma separated red, green and blue values for the custom color",
    )

    @pydantic.field_validator("key", "color", "action", mode="wrap")
    @classmethod
    def empty_on_error(cls, value, handler, info):
        """A field of the wrong type is dropped, the remaining fields are kept."""
        try:
            return handler(value)
        except pydantic.ValidationError as e:
            _logger.error("Webhook field %s ignored: %s", info.field_name, e)
            return ""


class HealthResponse(BaseModel):
    status: str
    mqtt_connected: bool
    topic: str
