# SPDX-License-Identifier: LGPL-3.0-only
# Copyright (c) 2026 pi-gateway-extensions contributors

"""
Model catalog and provider quota library for the pi coding agent extensions.
"""

from .catalog.fallback import FALLBACK_MODELS
from .catalog.registry import CatalogRegistryBridge
from .core.config import ExtensionSettings, load_settings
from .core.errors import AuthError, EmptyCatalogError, FetchError, GatewayError
from .core.types import ModelConfig, ProviderRegistration, QuotaRow, Severity
from .credential_store import CredentialStore
from .providers.antigravity_provider import AntigravityProvider
from .providers.copilot_provider import CopilotProvider
from .providers.kilo_code_provider import KiloCodeProvider

__all__ = [
    "FALLBACK_MODELS",
    "CatalogRegistryBridge",
    "ExtensionSettings",
    "load_settings",
    "AuthError",
    "EmptyCatalogError",
    "FetchError",
    "GatewayError",
    "ModelConfig",
    "ProviderRegistration",
    "QuotaRow",
    "Severity",
    "CredentialStore",
    "AntigravityProvider",
    "CopilotProvider",
    "KiloCodeProvider",
]
