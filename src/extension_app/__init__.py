# SPDX-License-Identifier: MIT
# Copyright (c) 2026 pi-gateway-extensions contributors

"""
Host-facing layer: pi extensions for the Kilo Code catalog and provider quotas.
"""

from .extensions import EXTENSION_NAMES, activate_extensions

__all__ = ["EXTENSION_NAMES", "activate_extensions"]
