# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Matthias Bilger <matthias@bilger.info>
from backlight_bridge.models.config import CUSTOM_COLOR
from pydantic import BaseModel
from pydantic import Field


class ColorRequest(BaseModel):
    color: str = Field(..., description="The color name, or 'custom' for a raw triplet")
    rgb: list[str] | None = Field(
        default=None,
        description="Red, green and blue values, only used for the custom color",
    )

    @classmethod
    def from_rgb_string(cls, color: str, rgb: str | None):
        """Build a request, splitting a comma separated rgb string for custom colors."""
        if color != CUSTOM_COLOR:
            return cls(color=color)
        return cls(color=color, rgb=(rgb or "").split(","))

    @property
    def is_custom(self) -> bool:
        return self.color == CUSTOM_COLOR
