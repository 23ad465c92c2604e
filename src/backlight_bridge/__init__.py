# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Matthias Bilger <matthias@bilger.info>
from backlight_bridge.version import __version__

__all__ = ["__version__"]
