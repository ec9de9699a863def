# SPDX-License-Identifier: LGPL-3.0-only
# Copyright (c) 2026 pi-gateway-extensions contributors

"""
Kilo Code Provider

OpenAI-compatible provider backed by the Kilo gateway. Uses the
KiloCatalogFetcher mixin to discover models from the gateway's /models
endpoint; completions themselves are executed by the host.

Environment variables:
    KILO_API_BASE: Gateway base URL (default: https://api.kilo.ai/api/gateway)
    KILO_API_KEY_ENV: Name of the env var holding the gateway key (default: KILO_API_KEY)
"""

from typing import Optional, Sequence

from ..catalog.fetcher import KiloCatalogFetcher
from ..core.config import ExtensionSettings, load_settings
from ..core.constants import KILO_API_DIALECT, KILO_MODELS_ENDPOINT, KILO_PROVIDER_NAME
from ..core.types import ModelConfig, ProviderRegistration


class KiloCodeProvider(KiloCatalogFetcher):
    """
    Provider description and catalog discovery for Kilo Code.
    """

    provider_name = KILO_PROVIDER_NAME
    api_dialect = KILO_API_DIALECT

    def __init__(self, settings: Optional[ExtensionSettings] = None):
        settings = settings or load_settings()
        self.api_base = settings.kilo_api_base.rstrip("/")
        self.models_url = f"{self.api_base}{KILO_MODELS_ENDPOINT}"
        self.api_key_env = settings.kilo_api_key_env
        self.http_timeout = settings.http_timeout

    def build_registration(self, models: Sequence[ModelConfig]) -> ProviderRegistration:
        """Build the host registration payload for a catalog snapshot."""
        return ProviderRegistration(
            name=self.provider_name,
            base_url=self.api_base,
            api_key_env=self.api_key_env,
            api=self.api_dialect,
            models=tuple(models),
        )
