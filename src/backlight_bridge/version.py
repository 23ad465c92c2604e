# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Matthias Bilger <matthias@bilger.info>
MAJOR = 1
MINOR = 2
PATCH = 0

__version__ = f"{MAJOR}.{MINOR}.{PATCH}"
